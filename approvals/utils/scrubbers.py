"""
Scrubbers for approval content.

Replace variable elements that would cause false failures:
- Timestamps -> <TS>
- Dates -> <DATE>
- UUIDs -> <UUID_0>, <UUID_1>, ... (same UUID, same number)

A scrubber is any callable str -> str.
"""

import re
from collections.abc import Callable

Scrubber = Callable[[str], str]

# ISO 8601 timestamp pattern
TIMESTAMP_PATTERN = re.compile(
    r'\d{4}-\d{2}-\d{2}[T ]\d{2}:\d{2}:\d{2}(?:\.\d+)?(?:Z|[+-]\d{2}:?\d{2})?'
)

# UUID pattern
UUID_PATTERN = re.compile(
    r'[0-9a-fA-F]{8}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{12}'
)

# Date patterns (YYYY-MM-DD, YYYY/MM/DD)
DATE_PATTERN = re.compile(
    r'\d{4}[-/]\d{2}[-/]\d{2}'
)


def create_regex_scrubber(
    pattern: str | re.Pattern[str],
    replacement: str | Callable[[int], str],
) -> Scrubber:
    """
    Build a scrubber replacing every match of `pattern`.

    Args:
        pattern: Regex (string or compiled)
        replacement: Fixed text, or a function of the match's index where
            identical matches share an index

    Returns:
        Scrubber
    """
    regex = re.compile(pattern) if isinstance(pattern, str) else pattern

    if isinstance(replacement, str):
        fixed = replacement
        return lambda text: regex.sub(fixed, text)

    numbering = replacement

    def scrub(text: str) -> str:
        seen: dict[str, int] = {}

        def substitute(match: re.Match[str]) -> str:
            index = seen.setdefault(match.group(0), len(seen))
            return numbering(index)

        return regex.sub(substitute, text)

    return scrub


def combine_scrubbers(*scrubbers: Scrubber) -> Scrubber:
    """Apply scrubbers left to right."""

    def scrub(text: str) -> str:
        for scrubber in scrubbers:
            text = scrubber(text)
        return text

    return scrub


scrub_timestamps = create_regex_scrubber(TIMESTAMP_PATTERN, "<TS>")
scrub_dates = create_regex_scrubber(DATE_PATTERN, "<DATE>")
scrub_uuids = create_regex_scrubber(UUID_PATTERN, lambda n: f"<UUID_{n}>")

# Timestamps first so their date part is not scrubbed separately
scrub_all = combine_scrubbers(scrub_timestamps, scrub_dates, scrub_uuids)
