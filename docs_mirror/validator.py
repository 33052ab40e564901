"""Allow-pattern check for discovered document paths."""

import re

DEFAULT_DOCS_PREFIX = "/en/docs/claude-code/"

_ALLOWED_TAIL = r"[a-zA-Z0-9._/-]+"


def validate_path(path: str, prefix: str = DEFAULT_DOCS_PREFIX) -> bool:
    """Return True if ``path`` sits under ``prefix`` and uses only safe characters."""
    if not isinstance(path, str):
        return False
    return re.fullmatch(re.escape(prefix) + _ALLOWED_TAIL, path) is not None
