"""Error formatting for CLI output."""

from __future__ import annotations

from rich.markup import escape as _escape_markup


def format_os_error(e: OSError) -> str:
    """Format a filesystem error as "<reason>: <path>".

    Examples:
        >>> format_os_error(PermissionError(13, "Permission denied", "/srv/app"))
        'Permission denied: /srv/app'

        >>> format_os_error(OSError("disk on fire"))
        'disk on fire'
    """
    reason = e.strerror or str(e) or type(e).__name__
    if e.filename is not None:
        return f"{reason}: {e.filename}"
    return reason


def escape_markup(value: object) -> str:
    """Escape a value for safe interpolation into Rich markup strings.

    Prevents Rich from interpreting brackets in file paths or error
    messages as markup tags.
    """
    return _escape_markup(str(value))
