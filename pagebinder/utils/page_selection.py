"""Parsing and validation of page selection strings like "1, 3-5, 10"."""

import re
from typing import List, Optional

from ..config import get_config
from ..errors import PageSelectionError

EMPTY_INPUT_MESSAGE = "Please enter the pages you want to extract."
INVALID_CHARACTERS_MESSAGE = (
    "Invalid format. Use only numbers, commas, and hyphens (e.g., 1, 3-5, 10)."
)
EXTRA_PUNCTUATION_MESSAGE = "Invalid format. Check your input for extra commas or hyphens."
INVALID_FORMAT_MESSAGE = "Invalid format. Use formats like: 1, 3-5, 10"
NO_PAGES_MESSAGE = "Please enter at least one page number."

_ALLOWED_CHARACTERS = re.compile(r"^[0-9,\-\s]+$")
# Whitespace between separators does not make them distinct: "1, ,5" is ",,"
_REPEATED_SEPARATOR = re.compile(r"-\s*-|,\s*,")
_NUMBER = re.compile(r"[0-9]+")


def parse_page_input(text: str) -> Optional[List[int]]:
    """
    Parse a page selection string into sorted, unique page numbers.

    Args:
        text: Selection string (e.g., "1, 3-5, 10"). Pages are 1-indexed.

    Returns:
        Ascending list of unique page numbers, an empty list for blank
        input, or None if any token is not a number or an ascending range.
    """
    if not text or not text.strip():
        return []

    pages = set()

    for part in text.split(","):
        part = part.strip()
        if not part:
            continue

        if "-" in part:
            bounds = [bound.strip() for bound in part.split("-")]
            if len(bounds) != 2:
                return None
            try:
                start = int(bounds[0])
                end = int(bounds[1])
            except ValueError:
                return None
            if start > end:
                return None
            pages.update(range(start, end + 1))
        else:
            try:
                pages.add(int(part))
            except ValueError:
                return None

    return sorted(pages)


def validate_page_input(
    text: str,
    total_pages: int,
    max_page_number: Optional[int] = None,
) -> Optional[str]:
    """
    Check a page selection against a document's page count.

    Numbers above both the page count and ``max_page_number`` (default
    from config) are rejected before any range is expanded.

    Returns None when the selection is usable, otherwise the message to
    show the user.
    """
    if not text or not text.strip():
        return EMPTY_INPUT_MESSAGE

    if not _ALLOWED_CHARACTERS.match(text):
        return INVALID_CHARACTERS_MESSAGE

    trimmed = text.strip()
    if (
        _REPEATED_SEPARATOR.search(trimmed)
        or trimmed[0] in ",-"
        or trimmed[-1] in ",-"
    ):
        return EXTRA_PUNCTUATION_MESSAGE

    if max_page_number is None:
        max_page_number = get_config().assembly.max_page_number
    limit = max(total_pages, max_page_number)
    if _exceeds(text, limit):
        return f"Page numbers above {limit} are not supported."

    pages = parse_page_input(text)
    if pages is None:
        return INVALID_FORMAT_MESSAGE

    if not pages:
        return NO_PAGES_MESSAGE

    out_of_range = [p for p in pages if p < 1 or p > total_pages]
    if out_of_range:
        noun = "page" if total_pages == 1 else "pages"
        if len(out_of_range) == 1:
            return (
                f"Page {out_of_range[0]} is out of range. "
                f"This PDF has {total_pages} {noun}."
            )
        listed = ", ".join(str(p) for p in out_of_range)
        return f"Pages {listed} are out of range. This PDF has {total_pages} {noun}."

    return None


def select_pages(text: str, total_pages: int) -> List[int]:
    """Validate and parse a selection, raising PageSelectionError if rejected."""
    error = validate_page_input(text, total_pages)
    if error:
        raise PageSelectionError(error)
    return parse_page_input(text)


def format_page_input(pages: List[int]) -> str:
    """Render page numbers back into selection syntax, collapsing runs into ranges."""
    parts = []
    run_start = None
    previous = None

    for page in sorted(set(pages)):
        if run_start is None:
            run_start = previous = page
        elif page == previous + 1:
            previous = page
        else:
            parts.append(_format_run(run_start, previous))
            run_start = previous = page

    if run_start is not None:
        parts.append(_format_run(run_start, previous))

    return ", ".join(parts)


def _exceeds(text: str, limit: int) -> bool:
    for digits in _NUMBER.findall(text):
        digits = digits.lstrip("0") or "0"
        # Compare lengths first so huge literals are never converted
        if len(digits) > len(str(limit)) or int(digits) > limit:
            return True
    return False


def _format_run(start: int, end: int) -> str:
    return str(start) if start == end else f"{start}-{end}"
