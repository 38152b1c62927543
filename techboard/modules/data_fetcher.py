# ==============================================================================
# FILE: techboard/modules/data_fetcher.py
# ==============================================================================
# --- Description:
# Sends the built completion request to the Perplexity chat-completions
# endpoint and returns the raw text content of the first choice.
# ==============================================================================

import logging
from typing import Optional

import requests

from techboard.config import settings

logger = logging.getLogger(__name__)


# --- Custom exceptions for the transport layer ---
class CredentialMissingError(Exception):
    pass


class TransportError(Exception):
    pass


def _extract_content(data) -> str:
    try:
        content = data['choices'][0]['message']['content']
    except (KeyError, IndexError, TypeError) as e:
        raise TransportError(f"Unexpected response shape: {e!r}") from e

    if not isinstance(content, str):
        raise TransportError("Unexpected response shape: content is not text")
    return content


def post_completion(payload: dict, api_key: Optional[str], timeout: Optional[float] = None) -> str:
    """
    POSTs `payload` with bearer auth and returns the model's text content.

    Raises CredentialMissingError when no key is given, and TransportError on
    network errors, non-2xx statuses or a malformed response body.
    """
    if not api_key:
        raise CredentialMissingError("API key missing")

    try:
        response = requests.post(
            url=settings.perplexity_api_url,
            headers={
                "Authorization": f"Bearer {api_key}",
                "Content-Type": "application/json",
            },
            json=payload,
            timeout=timeout if timeout is not None else settings.request_timeout,
        )
    except requests.RequestException as e:
        raise TransportError(str(e)) from e

    if not response.ok:
        raise TransportError(f"API error: {response.status_code}")

    try:
        data = response.json()
    except ValueError as e:
        raise TransportError(f"Response body is not JSON: {e}") from e

    content = _extract_content(data)
    logger.debug(f"Received {len(content)} characters from completion endpoint")
    return content
