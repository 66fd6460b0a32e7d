"""Helpers: scrubbers and diff summaries."""

from .diff import diff_summary, format_diff_report
from .scrubbers import (
    combine_scrubbers,
    create_regex_scrubber,
    scrub_all,
    scrub_dates,
    scrub_timestamps,
    scrub_uuids,
)

__all__ = [
    "diff_summary",
    "format_diff_report",
    "combine_scrubbers",
    "create_regex_scrubber",
    "scrub_all",
    "scrub_dates",
    "scrub_timestamps",
    "scrub_uuids",
]
