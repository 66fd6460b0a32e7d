"""
test_scrubbers.py - Content scrubber tests
"""

import re

from approvals.utils.scrubbers import (
    combine_scrubbers,
    create_regex_scrubber,
    scrub_all,
    scrub_dates,
    scrub_timestamps,
    scrub_uuids,
)

UUID_A = "123e4567-e89b-12d3-a456-426614174000"
UUID_B = "6fa459ea-ee8a-3ca4-894e-db77e160355e"


class TestBuiltinScrubbers:

    def test_timestamps(self):
        text = "created 2024-01-15T09:30:00Z updated 2024-01-15 10:00:00.123+09:00"
        assert scrub_timestamps(text) == "created <TS> updated <TS>"

    def test_dates(self):
        assert scrub_dates("due 2024-01-15 or 2024/02/01") == "due <DATE> or <DATE>"

    def test_uuids_numbered_by_identity(self):
        text = f"{UUID_A} {UUID_B} {UUID_A}"
        assert scrub_uuids(text) == "<UUID_0> <UUID_1> <UUID_0>"

    def test_numbering_restarts_per_call(self):
        assert scrub_uuids(UUID_B) == "<UUID_0>"
        assert scrub_uuids(UUID_A) == "<UUID_0>"

    def test_scrub_all_timestamp_before_date(self):
        text = f"at 2024-01-15T09:30:00 on 2024-01-16 job {UUID_A}"
        assert scrub_all(text) == "at <TS> on <DATE> job <UUID_0>"


class TestCustomScrubbers:

    def test_fixed_replacement(self):
        scrub = create_regex_scrubber(r"\d+ms", "<DURATION>")
        assert scrub("took 15ms, then 3ms") == "took <DURATION>, then <DURATION>"

    def test_compiled_pattern_with_numbering(self):
        scrub = create_regex_scrubber(re.compile(r"user-\w+"), lambda n: f"<USER_{n}>")
        assert scrub("user-kim user-lee user-kim") == "<USER_0> <USER_1> <USER_0>"

    def test_combine_left_to_right(self):
        first = create_regex_scrubber("a", "b")
        second = create_regex_scrubber("b", "c")
        assert combine_scrubbers(first, second)("a") == "c"
        assert combine_scrubbers(second, first)("a") == "b"
