"""Size formatter: byte counts as human readable sizes.

Binary (1024-based) units with the largest unit whose magnitude is >= 1,
two decimals for every unit above bytes:

    0           -> "0 B"
    512         -> "512 B"
    1024        -> "1.00 KB"
    2684354560  -> "2.50 GB"

The unit is chosen before rounding, so 1048575 renders as "1024.00 KB".
Absent values render as "0 B". Negative, boolean and non-numeric values
render as "".
"""

from streamfmt.templates.context import ResolvedValue, ValueKind
from streamfmt.templates.formatters.registry import Category, register_formatter

SIZE_UNITS = ("B", "KB", "MB", "GB", "TB", "PB")
SIZE_STEP = 1024


def format_bytes(num_bytes: float | int) -> str:
    """Format a non-negative byte count."""
    if num_bytes < SIZE_STEP:
        return f"{num_bytes:.0f} B"

    size = float(num_bytes)
    unit = 0
    while size >= SIZE_STEP and unit < len(SIZE_UNITS) - 1:
        size /= SIZE_STEP
        unit += 1
    return f"{size:.2f} {SIZE_UNITS[unit]}"


@register_formatter(
    name="size",
    category=Category.NUMERIC,
    description="Byte count as a readable size (e.g., '2.50 GB')",
)
def format_size(value: ResolvedValue) -> str:
    if value.kind is ValueKind.ABSENT:
        return "0 B"
    if value.kind is ValueKind.BOOLEAN:
        return ""
    num_bytes = value.as_number()
    if num_bytes is None or num_bytes < 0:
        return ""
    return format_bytes(num_bytes)
