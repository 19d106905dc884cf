"""Display helpers."""


def format_file_size(size: int) -> str:
    """Render a byte count the way it is shown to users (``10MB``, ``1.5KB``)."""
    if size < 1024:
        return f"{size} bytes"
    if size < 1024 * 1024:
        value, unit = size / 1024, "KB"
    else:
        value, unit = size / (1024 * 1024), "MB"
    if value == int(value):
        return f"{int(value)}{unit}"
    return f"{value:.1f}{unit}"


__all__ = ["format_file_size"]
