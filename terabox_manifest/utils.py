"""Size formatting and folder-path helpers."""

_SIZE_UNITS = ("Bytes", "KB", "MB", "GB", "TB", "PB")


def readable_size(num_bytes: int | None) -> str:
    """
    Render a byte count as a human-readable string.

    The value is rounded to two decimals and trailing zeros are dropped,
    so 1536 becomes '1.5 KB' and 1024 becomes '1 KB'.
    """
    if not num_bytes or num_bytes <= 0:
        return "0 Bytes"

    value = float(num_bytes)
    i = 0
    while value >= 1024 and i < len(_SIZE_UNITS) - 1:
        value /= 1024.0
        i += 1

    value = round(value, 2)
    text = str(int(value)) if value.is_integer() else str(value)
    return f"{text} {_SIZE_UNITS[i]}"


def join_folder(parent: str, name: str) -> str:
    """Append a directory name to a relative folder path."""
    if not parent:
        return name
    return f"{parent.rstrip('/')}/{name}"
