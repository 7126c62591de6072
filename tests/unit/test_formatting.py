"""Unit tests for byte size formatting."""

import pytest

from s3du.formatting import SizeUnit, format_size


@pytest.mark.unit
class TestFormatSize:
    @pytest.mark.parametrize(
        "num_bytes,expected",
        [
            (0, "0 B"),
            (512, "512 B"),
            (1023, "1023 B"),
            (1024, "1.00 KiB"),
            (33792, "33.00 KiB"),
            (1024 ** 2, "1.00 MiB"),
            (5 * 1024 ** 3, "5.00 GiB"),
            (1024 ** 7, "1024.00 EiB"),
        ],
    )
    def test_binary(self, num_bytes, expected):
        assert format_size(num_bytes) == expected

    @pytest.mark.parametrize(
        "num_bytes,expected",
        [
            (999, "999 B"),
            (1000, "1.00 kB"),
            (1500, "1.50 kB"),
            (33792, "33.79 kB"),
            (2 * 1000 ** 4, "2.00 TB"),
        ],
    )
    def test_decimal(self, num_bytes, expected):
        assert format_size(num_bytes, SizeUnit.DECIMAL) == expected

    def test_bytes(self):
        assert format_size(33792, SizeUnit.BYTES) == "33792"

    def test_decimal_places(self):
        assert format_size(1536, decimal_places=1) == "1.5 KiB"
