# ==============================================================================
# FILE: techboard/modules/orchestrator.py
# ==============================================================================
# --- Description:
# Runs the request -> normalize -> sanitize pipeline for one symbol and
# substitutes the fallback record when live data cannot be used. The panel
# class keeps the idle/loading/success/error state a dashboard widget shows.

import itertools
import logging
import threading
from dataclasses import dataclass, field
from typing import Callable, List, Optional

from techboard.config import Settings, get_api_key
from techboard.models import PanelResponse, PanelStatus, TechnicalRecord
from techboard.modules.data_fetcher import CredentialMissingError, TransportError, post_completion
from techboard.modules.fallback import generate_fallback_record
from techboard.modules.normalizer import normalize_content
from techboard.modules.prompt_builder import build_completion_request
from techboard.modules.sanitizer import sanitize_content

logger = logging.getLogger(__name__)

API_KEY_MISSING_MESSAGE = "API key missing"


@dataclass
class FetchOutcome:
    symbol: str
    status: PanelStatus
    record: Optional[TechnicalRecord] = None
    error: Optional[str] = None
    defaulted_fields: List[str] = field(default_factory=list)
    fallback: bool = False

    @property
    def credential_missing(self) -> bool:
        return self.status == PanelStatus.ERROR and self.record is None


def _credential_missing(symbol: str) -> FetchOutcome:
    logger.warning(f"Could not find API key, skipping technical data fetch for {symbol}")
    return FetchOutcome(symbol=symbol, status=PanelStatus.ERROR, error=API_KEY_MISSING_MESSAGE)


def _fallback_outcome(symbol: str, error: str) -> FetchOutcome:
    return FetchOutcome(
        symbol=symbol,
        status=PanelStatus.ERROR,
        record=generate_fallback_record(symbol),
        error=error,
        fallback=True,
    )


def fetch_technical_data(
    symbol: str,
    key_provider: Optional[Callable[[], Optional[str]]] = None,
    transport: Optional[Callable[[dict, str], str]] = None,
    settings: Optional[Settings] = None,
) -> FetchOutcome:
    """
    Fetches and sanitizes the technical record for `symbol`.

    Transport and parse failures come back as an ERROR outcome carrying the
    fallback record. A missing API key is the exception: the transport is not
    called and no fallback record is attached.
    """
    key_provider = key_provider or get_api_key
    transport = transport or post_completion

    api_key = key_provider()
    if not api_key:
        return _credential_missing(symbol)

    payload = build_completion_request(symbol, settings)

    try:
        content = transport(payload, api_key)
    except CredentialMissingError:
        return _credential_missing(symbol)
    except TransportError as e:
        logger.error(f"Error fetching technical data for {symbol}: {e}")
        return _fallback_outcome(symbol, f"Failed to fetch data: {e}")
    except Exception as e:
        logger.exception(f"Unexpected transport error for {symbol}")
        return _fallback_outcome(symbol, f"Failed to fetch data: {str(e) or 'Unknown error'}")

    result = sanitize_content(normalize_content(content))
    if not result.ok:
        logger.error(f"Using fallback data for {symbol}: {result.detail}")
        return _fallback_outcome(symbol, result.error)

    logger.info(f"Technical data for {symbol} parsed ({len(result.defaulted_fields)} field(s) defaulted)")
    return FetchOutcome(
        symbol=symbol,
        status=PanelStatus.SUCCESS,
        record=result.record,
        defaulted_fields=result.defaulted_fields,
    )


class TechnicalAnalysisPanel:
    """
    State holder for one symbol's analysis widget.

    Every refresh takes a sequence number; only the outcome of the most
    recently started refresh is committed, so a slow earlier request can't
    overwrite a newer one.
    """

    def __init__(self, symbol: str, fetcher: Optional[Callable[[str], FetchOutcome]] = None):
        self.symbol = symbol
        self.status = PanelStatus.IDLE
        self.record: Optional[TechnicalRecord] = None
        self.error: Optional[str] = None
        self.defaulted_fields: List[str] = []
        self.fallback = False
        self._fetcher = fetcher or fetch_technical_data
        self._sequence = itertools.count(1)
        self._latest = 0
        self._lock = threading.Lock()
        self._mount_lock = threading.Lock()

    def begin_request(self) -> int:
        with self._lock:
            seq = next(self._sequence)
            self._latest = seq
            self.status = PanelStatus.LOADING
            self.error = None
            return seq

    def commit(self, seq: int, outcome: FetchOutcome) -> bool:
        with self._lock:
            if seq != self._latest:
                logger.info(f"Discarding stale response #{seq} for {self.symbol} (latest #{self._latest})")
                return False
            self.status = outcome.status
            self.error = outcome.error
            self.record = outcome.record
            self.defaulted_fields = list(outcome.defaulted_fields)
            self.fallback = outcome.fallback
            return True

    def refresh(self) -> FetchOutcome:
        seq = self.begin_request()
        try:
            outcome = self._fetcher(self.symbol)
        except Exception as e:
            logger.exception(f"Technical data fetch failed for {self.symbol}")
            outcome = _fallback_outcome(self.symbol, f"Failed to fetch data: {str(e) or 'Unknown error'}")
        self.commit(seq, outcome)
        return outcome

    def ensure_loaded(self) -> None:
        """
        Runs the initial fetch if the panel has never been loaded.

        Concurrent callers wait for that first fetch instead of starting
        their own or returning the in-flight LOADING state.
        """
        with self._mount_lock:
            if self.status == PanelStatus.IDLE:
                logger.info(f"Initial technical fetch for {self.symbol}")
                self.refresh()

    def snapshot(self) -> PanelResponse:
        with self._lock:
            return PanelResponse(
                symbol=self.symbol,
                status=self.status,
                error=self.error,
                data=self.record,
                defaulted_fields=list(self.defaulted_fields),
                fallback=self.fallback,
            )
