"""
Human readable byte sizes for the CLI and reports.
"""

from enum import Enum


class SizeUnit(str, Enum):
    BINARY = "binary"    # 1 KiB = 1024 B
    DECIMAL = "decimal"  # 1 kB = 1000 B
    BYTES = "bytes"


_UNITS = {
    SizeUnit.BINARY: (1024, ["B", "KiB", "MiB", "GiB", "TiB", "PiB", "EiB"]),
    SizeUnit.DECIMAL: (1000, ["B", "kB", "MB", "GB", "TB", "PB", "EB"]),
}


def format_size(num_bytes: int, unit: SizeUnit = SizeUnit.BINARY, decimal_places: int = 2) -> str:
    """
    Format a byte count.

    Examples:
        >>> format_size(1024)
        '1.00 KiB'
        >>> format_size(1500, SizeUnit.DECIMAL)
        '1.50 kB'
        >>> format_size(33792, SizeUnit.BYTES)
        '33792'
        >>> format_size(512)
        '512 B'
    """
    if unit == SizeUnit.BYTES:
        return str(num_bytes)

    base, labels = _UNITS[unit]
    if num_bytes < base:
        return f"{num_bytes} B"

    size = num_bytes / base
    for label in labels[1:-1]:
        if size < base:
            return f"{size:.{decimal_places}f} {label}"
        size /= base

    return f"{size:.{decimal_places}f} {labels[-1]}"
