"""
Path resolution for covjobs.

Turns possibly-relative paths from the command line or the configuration
file into absolute paths anchored at an explicit base directory.
"""
import os


def to_absolute_path(candidate: str, base: str) -> str:
    """Resolve candidate against base unless it is already absolute.

    Relative candidates are joined onto base and normalized, so ``.`` and
    ``..`` segments are collapsed. Absolute candidates are returned as given.
    """
    if not isinstance(candidate, str) or not candidate:
        raise ValueError(f"Path must be a non-empty string, got {candidate!r}")

    if os.path.isabs(candidate):
        return candidate

    if not isinstance(base, str) or not os.path.isabs(base):
        raise ValueError(f"Base directory must be an absolute path, got {base!r}")

    return os.path.normpath(os.path.join(base, candidate))
