"""Tests for byte, uptime, timestamp and percentage formatting."""

import re
from datetime import datetime

import pytest

from hostpulse_agent.formatting import (
    format_bytes,
    format_timestamp,
    format_uptime,
    round2,
    round_percent,
)


# ---------------------------------------------------------------------------
# format_bytes
# ---------------------------------------------------------------------------

class TestFormatBytes:
    def test_zero(self):
        assert format_bytes(0) == "0B"

    def test_below_one_kib(self):
        assert format_bytes(1023) == "1023B"

    def test_one_kib(self):
        assert format_bytes(1024) == "1.00K"

    def test_fractional_kib(self):
        assert format_bytes(1536) == "1.50K"

    def test_mib(self):
        assert format_bytes(512 * 1024**2) == "512.00M"

    def test_gib(self):
        assert format_bytes(2 * 1024**3) == "2.00G"

    def test_tib_pib_eib(self):
        assert format_bytes(1024**4) == "1.00T"
        assert format_bytes(1024**5) == "1.00P"
        assert format_bytes(1024**6) == "1.00E"

    def test_beyond_exabytes_stays_in_top_unit(self):
        assert format_bytes(2048 * 1024**6) == "2048.00E"

    def test_float_input_truncated(self):
        assert format_bytes(999.9) == "999B"
        assert format_bytes(1024.7) == "1.00K"

    def test_negative_rejected(self):
        with pytest.raises(ValueError):
            format_bytes(-1)

    @pytest.mark.parametrize("exp", range(1, 6))
    def test_scaled_value_in_unit_range(self, exp):
        for n in (1024**exp, 3 * 1024**exp + 17, 1024 ** (exp + 1) - 1024 ** (exp - 1)):
            text = format_bytes(n)
            value = float(text[:-1])
            assert text[-1] == "KMGTPE"[exp - 1]
            assert 1 <= value <= 1024

    def test_two_decimals(self):
        assert re.fullmatch(r"\d+\.\d{2}[KMGTPE]", format_bytes(123456789))


# ---------------------------------------------------------------------------
# format_uptime
# ---------------------------------------------------------------------------

class TestFormatUptime:
    def test_zero(self):
        assert format_uptime(0) == "00:00:00"

    def test_hms(self):
        assert format_uptime(3661) == "01:01:01"

    def test_last_second_of_day(self):
        assert format_uptime(86399) == "23:59:59"

    def test_exactly_one_day(self):
        assert format_uptime(86400) == "1 day"

    def test_several_days(self):
        assert format_uptime(3 * 86400 + 5000) == "3 days"

    @pytest.mark.parametrize("seconds", [1, 59, 60, 3599, 3600, 43210, 86399])
    def test_below_one_day_is_padded(self, seconds):
        assert re.fullmatch(r"\d{2}:\d{2}:\d{2}", format_uptime(seconds))


# ---------------------------------------------------------------------------
# format_timestamp
# ---------------------------------------------------------------------------

class TestFormatTimestamp:
    def test_unset(self):
        assert format_timestamp(0) == "unknown"
        assert format_timestamp(None) == "unknown"

    def test_local_time(self):
        epoch = 1700000000
        expected = datetime.fromtimestamp(epoch).strftime("%Y-%m-%d %H:%M:%S")
        assert format_timestamp(epoch) == expected


# ---------------------------------------------------------------------------
# round_percent / round2
# ---------------------------------------------------------------------------

class TestRoundPercent:
    def test_quarter(self):
        assert round_percent(512, 2048) == 25.0

    def test_two_decimals(self):
        assert round_percent(1, 3) == 33.33
        assert round_percent(2, 3) == 66.67

    def test_half_rounds_up(self):
        assert round_percent(1, 20000) == 0.01
        assert round_percent(5, 4000) == 0.13

    def test_zero_total(self):
        assert round_percent(0, 0) == 0.0
        assert round_percent(10, 0) == 0.0

    def test_clamped(self):
        assert round_percent(300, 200) == 100.0


class TestRound2:
    def test_rounds(self):
        assert round2(7.0) == 7.0
        assert round2(0.125) == 0.13
