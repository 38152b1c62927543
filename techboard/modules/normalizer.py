# ==============================================================================
# FILE: techboard/modules/normalizer.py
# ==============================================================================
# --- Description:
# Strips the non-JSON artifacts language models tend to wrap around their
# answer (code fences, comments, escaped characters). This is a cleanup pass,
# not a JSON repair engine: unbalanced braces or trailing commas are left
# for the parser to reject.

import re

_CODE_FENCE = re.compile(r"```json|```")
_BLOCK_COMMENT = re.compile(r"/\*[\s\S]*?\*/")
_LINE_COMMENT = re.compile(r"//.*$", re.MULTILINE)
_ESCAPED_NEWLINE = re.compile(r"\\n")
_ESCAPED_QUOTE = re.compile(r'\\"')

# Applied in order; later rules assume the earlier ones already ran
CLEANUP_RULES = (
    (_CODE_FENCE, ""),
    (_BLOCK_COMMENT, ""),
    (_LINE_COMMENT, ""),
    (_ESCAPED_NEWLINE, ""),
    (_ESCAPED_QUOTE, '"'),
)


def normalize_content(raw: str) -> str:
    """
    Returns `raw` with fences, comments and escape sequences removed.

    Note that the line-comment rule also eats `//` inside string values
    (e.g. URLs); the payload schema contains none.

    Removing one artifact can expose another (a comment between two halves
    of a fence, an escaped backslash before a quote), so passes repeat until
    the text stops changing. Every rule only deletes characters, which bounds
    the loop; ordinary model output settles after the first pass.
    """
    if not raw:
        return ""

    cleaned = raw
    while True:
        previous = cleaned
        for pattern, replacement in CLEANUP_RULES:
            cleaned = pattern.sub(replacement, cleaned)
        cleaned = cleaned.strip()
        if cleaned == previous:
            return cleaned
