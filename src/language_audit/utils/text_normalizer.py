"""Normalization of text preview pages."""

import re

MULTI_SPACE_PATTERN = re.compile(r" +")
EDGE_SPACE_PATTERN = re.compile(r"^ +| +$")
LINE_BREAK_PATTERN = re.compile(r"[\r\n\t]+")
# From "http"/"https" up to the next whitespace or end of string
URL_PATTERN = re.compile(r"https?\S*")


def strip_urls(text: str) -> str:
    """Remove URL-like substrings from text."""
    return URL_PATTERN.sub("", text)


def normalize_page(text: str) -> str:
    """
    Normalize one page of preview text.

    Steps, in order:
      1. collapse runs of spaces to a single space
      2. strip leading/trailing spaces
      3. drop carriage returns, newlines and tabs (adjacent lines are joined)
      4. strip URLs

    Dropping line breaks and URLs can leave new runs of spaces, so steps 1-2
    run once more at the end. The result is a fixed point of this function.
    """
    text = MULTI_SPACE_PATTERN.sub(" ", text)
    text = EDGE_SPACE_PATTERN.sub("", text)
    text = LINE_BREAK_PATTERN.sub("", text)
    text = strip_urls(text)
    text = MULTI_SPACE_PATTERN.sub(" ", text)
    return EDGE_SPACE_PATTERN.sub("", text)


def join_pages(preview: str, page: str) -> str:
    """Append a normalized page to the preview, separated by one space."""
    if not preview:
        return page
    if not page:
        return preview
    return f"{preview} {page}"
