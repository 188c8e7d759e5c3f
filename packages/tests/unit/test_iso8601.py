"""Unit tests for utcstamp._iso8601 — the ISO-8601 codec.

Test Techniques Used:
    - Specification-based Testing: fixed output profile, exact messages
    - Error Condition Testing: every rejection reason of the parser
    - Boundary Value Analysis: leap days, fraction length, int64 limit
    - Round-trip Testing: parse(format(t)) == t on selected values and a
      seeded random sweep over the whole int64 range
    - Performance Bound: oversized digit runs are rejected without
      reading the whole run
"""

from __future__ import annotations

import random
import time

import pytest

from utcstamp._errors import InvariantError, ParseError
from utcstamp._iso8601 import ParseResult, format_iso8601, parse_iso8601
from utcstamp._utc import UtcTime


def _reason(text: str | bytes) -> str | None:
    return parse_iso8601(text).reason


class TestFormat:
    """Output profile ``YYYY-MM-DDThh:mm:ss.ffffffZ``.

    Technique: Specification-based Testing.
    """

    def test_epoch(self) -> None:
        assert format_iso8601(UtcTime.from_usec(0)) == "1970-01-01T00:00:00.000000Z"

    def test_all_fields_padded(self) -> None:
        t = UtcTime(2_147_483_647 * 1_000_000 + 42)
        assert format_iso8601(t) == "2038-01-19T03:14:07.000042Z"

    def test_five_digit_year_is_not_truncated(self) -> None:
        t = UtcTime.from_iso8601("10000-01-01T00:00:00Z")
        assert format_iso8601(t) == "10000-01-01T00:00:00.000000Z"

    def test_method_and_function_agree(self) -> None:
        t = UtcTime(987_654_321_012_345)
        assert t.to_iso8601() == format_iso8601(t)


class TestParseAccepts:
    """Well-formed input.

    Technique: Specification-based Testing plus Boundary Value
    Analysis on the fractional part.
    """

    def test_epoch(self) -> None:
        result = parse_iso8601("1970-01-01T00:00:00.000000Z")
        assert result.ok
        assert result.value == UtcTime.from_usec(0)
        assert result.error is None

    def test_bytes_input(self) -> None:
        assert parse_iso8601(b"1970-01-01T00:00:01.000000Z").value == UtcTime(1_000_000)

    def test_bytearray_and_memoryview_input(self) -> None:
        raw = b"1970-01-01T00:00:01Z"
        assert parse_iso8601(bytearray(raw)).value == UtcTime(1_000_000)
        assert parse_iso8601(memoryview(raw)).value == UtcTime(1_000_000)

    def test_leap_day_2096(self) -> None:
        result = parse_iso8601("2096-02-29T00:00:00.000000Z")
        assert result.ok
        assert result.unwrap().to_iso8601() == "2096-02-29T00:00:00.000000Z"

    def test_fraction_is_optional(self) -> None:
        assert parse_iso8601("1970-01-01T00:00:01Z").value == UtcTime(1_000_000)

    def test_short_fraction_is_right_padded(self) -> None:
        assert parse_iso8601("1970-01-01T00:00:00.5Z").value == UtcTime(500_000)
        assert parse_iso8601("1970-01-01T00:00:00.00012Z").value == UtcTime(120)

    def test_empty_fraction_is_zero(self) -> None:
        assert parse_iso8601("1970-01-01T00:00:00.Z").value == UtcTime(0)

    def test_single_digit_fields(self) -> None:
        assert parse_iso8601("1970-1-2T3:4:5Z").value == UtcTime(
            ((24 + 3) * 60 + 4) * 60 * 1_000_000 + 5_000_000
        )

    def test_window_into_larger_buffer(self) -> None:
        buf = b"xx1970-01-01T00:00:00Zyy"
        result = parse_iso8601(buf, start=2, length=20)
        assert result.value == UtcTime(0)

    def test_window_to_end(self) -> None:
        buf = b"..1970-01-01T00:00:00Z"
        assert parse_iso8601(buf, start=2).value == UtcTime(0)

    @pytest.mark.parametrize(
        "usec",
        [0, 1, 999_999, 951_782_400_000_000, 12_622_780_800_000_000, 2**63 - 1],
    )
    def test_round_trip(self, usec: int) -> None:
        t = UtcTime(usec)
        assert parse_iso8601(format_iso8601(t)).value == t

    def test_round_trip_random_sweep(self) -> None:
        rng = random.Random(20260101)
        for _ in range(2_000):
            t = UtcTime(rng.randrange(2**63))
            assert parse_iso8601(format_iso8601(t)).value == t


class TestParseRejects:
    """Malformed or semantically invalid input.

    Technique: Error Condition Testing — one case per reason.
    """

    def test_message_embeds_quoted_input(self) -> None:
        result = parse_iso8601("1970-13-01T00:00:00.000000Z")
        assert not result.ok
        assert result.value is None
        assert result.error == '"1970-13-01T00:00:00.000000Z" invalid month'

    def test_leap_day_2100(self) -> None:
        assert _reason("2100-02-29T00:00:00.000000Z") == "invalid day"

    def test_literal_mismatch(self) -> None:
        assert _reason("1970-01-01X00:00:00.000000Z") == "expect 'T' got 'X'"

    def test_missing_zone(self) -> None:
        assert _reason("1970-01-01T00:00:00.000000") == "premature ending"

    def test_other_offset(self) -> None:
        assert _reason("1970-01-01T00:00:00+00:00") == "expect 'Z' got '+'"

    def test_trailing_bytes(self) -> None:
        assert _reason("1970-01-01T00:00:00.000000Zx") == "more chars than expected"

    def test_empty_input(self) -> None:
        assert _reason("") == "premature ending"

    def test_missing_digits(self) -> None:
        assert _reason("abc") == "expect digit got 'a'"
        assert _reason("1970--01T00:00:00Z") == "expect digit got '-'"

    def test_leading_whitespace(self) -> None:
        assert _reason(" 1970-01-01T00:00:00Z") == "expect digit got ' '"

    def test_non_ascii_byte(self) -> None:
        assert _reason(b"1970-01-01T00:00:00\xffZ") == r"expect 'Z' got '\xff'"

    def test_too_precise(self) -> None:
        assert _reason("1970-01-01T00:00:00.1234567Z") == "too precise"
        assert _reason("1970-01-01T00:00:00.0000000Z") == "too precise"

    @pytest.mark.parametrize(
        ("text", "reason"),
        [
            ("1969-12-31T23:59:59Z", "invalid year"),
            ("1970-00-01T00:00:00Z", "invalid month"),
            ("1970-04-31T00:00:00Z", "invalid day"),
            ("1970-01-01T24:00:00Z", "invalid hour"),
            ("1970-01-01T00:60:00Z", "invalid minute"),
            ("1970-01-01T00:00:60Z", "invalid second"),
        ],
    )
    def test_invalid_fields(self, text: str, reason: str) -> None:
        assert _reason(text) == reason

    def test_beyond_int64(self) -> None:
        assert _reason("300000-01-01T00:00:00Z") == "out of range"

    def test_absurdly_long_number(self) -> None:
        assert _reason("1" * 40 + "-01-01T00:00:00Z") == "out of range"

    def test_twenty_digit_field_is_out_of_range(self) -> None:
        assert _reason("1" * 20 + "-01-01T00:00:00Z") == "out of range"

    @pytest.mark.parametrize(
        ("text", "reason"),
        [
            (b"1" * 1_000_000 + b"-01-01T00:00:00Z", "out of range"),
            (b"1970-01-01T00:00:00." + b"1" * 1_000_000 + b"Z", "too precise"),
        ],
        ids=["year", "fraction"],
    )
    def test_megabyte_digit_run_rejected_quickly(self, text: bytes, reason: str) -> None:
        started = time.perf_counter()
        result = parse_iso8601(text)
        elapsed = time.perf_counter() - started
        assert result.reason == reason
        assert elapsed < 1.0

    def test_window_outside_input_is_fatal(self) -> None:
        with pytest.raises(InvariantError):
            parse_iso8601(b"1970", start=2, length=10)


class TestParseResult:
    """Result object behaviour.

    Technique: Specification-based Testing.
    """

    def test_unwrap_raises_parse_error(self) -> None:
        result = parse_iso8601("1970-13-01T00:00:00Z")
        with pytest.raises(ParseError) as exc_info:
            result.unwrap()
        assert exc_info.value.reason == "invalid month"
        assert exc_info.value.text == '"1970-13-01T00:00:00Z"'
        assert str(exc_info.value) == result.error

    def test_parse_error_is_value_error(self) -> None:
        with pytest.raises(ValueError):
            UtcTime.from_iso8601("garbage")

    def test_success_unwraps(self) -> None:
        assert ParseResult.success(UtcTime(7)).unwrap() == UtcTime(7)

    def test_failure_constructor(self) -> None:
        result = ParseResult.failure('"x"', "premature ending")
        assert not result.ok
        assert result.value is None
        assert result.error == '"x" premature ending'

    @pytest.mark.parametrize(
        "kwargs",
        [
            {},
            {"text": '"x"'},
            {"reason": "invalid day"},
            {"value": UtcTime(0), "reason": "invalid day"},
        ],
        ids=["empty", "text-only", "reason-only", "value-and-reason"],
    )
    def test_inconsistent_fields_are_fatal(self, kwargs: dict[str, object]) -> None:
        with pytest.raises(InvariantError):
            ParseResult(**kwargs)  # type: ignore[arg-type]
