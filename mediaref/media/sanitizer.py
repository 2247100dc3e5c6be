"""
Sanitizer: strips structural corruption from raw reference strings.

Upstream writers have stored the same cover image as `["url"]`,
`"url"`, `%5B%22url%22%5D`, `[\\"url\\"]` and worse. Every pass only
removes characters, so the loop converges quickly; MAX_PASSES bounds
adversarial input (e.g. `%%%225B22...` where each removal exposes a
new encoded marker).
"""

import re

MAX_PASSES = 10

# Percent-encoded [ ] " '
ENCODED_MARKERS = re.compile(r"%5B|%5D|%22|%27", re.IGNORECASE)
BRACKETS_AND_QUOTES = re.compile(r"[\[\]{}\"']")
BACKSLASHES = re.compile(r"\\+")
EDGE_JUNK_LEFT = re.compile(r"^[,\s]+")
EDGE_JUNK_RIGHT = re.compile(r"[,\s]+$")
WHITESPACE_RUN = re.compile(r"\s+")


def has_corruption(text: str) -> bool:
    """True if any marker the sanitizer removes is still present."""
    return bool(
        ENCODED_MARKERS.search(text)
        or BRACKETS_AND_QUOTES.search(text)
        or "\\" in text
        or EDGE_JUNK_LEFT.search(text)
        or EDGE_JUNK_RIGHT.search(text)
        or re.search(r"\s{2,}|[^\S ]", text)
    )


def _clean_once(text: str) -> str:
    text = ENCODED_MARKERS.sub("", text)
    text = BACKSLASHES.sub("", text)
    text = BRACKETS_AND_QUOTES.sub("", text)
    text = EDGE_JUNK_LEFT.sub("", text)
    text = EDGE_JUNK_RIGHT.sub("", text)
    return WHITESPACE_RUN.sub(" ", text)


def sanitize(text: str) -> str:
    """
    Remove square and curly brackets, quotes, backslashes and encoded
    brackets/quotes, trim comma/whitespace edges and collapse inner
    whitespace.

    Runs until a pass changes nothing or MAX_PASSES is reached.
    The result never contains a literal bracket or quote.
    """
    if not text:
        return ""

    for _ in range(MAX_PASSES):
        if not has_corruption(text):
            break
        cleaned = _clean_once(text)
        if cleaned == text:
            break
        text = cleaned

    return text
