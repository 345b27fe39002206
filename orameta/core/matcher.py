"""Wildcard and regular-expression matching of table names."""
import logging
import re
from functools import lru_cache
from typing import Pattern

logger = logging.getLogger(__name__)


class FilterConfigError(ValueError):
    """Raised when a filter pattern or filter configuration is invalid."""

    def __init__(self, message: str, pattern: str = None):
        super().__init__(message)
        self.pattern = pattern


def wildcard_to_regex(pattern: str) -> str:
    """Translate a ``*``/``?`` wildcard pattern into a regular expression.

    Everything other than the two wildcard tokens is matched literally.
    """
    parts = []
    for char in pattern:
        if char == '*':
            parts.append('.*')
        elif char == '?':
            parts.append('.')
        else:
            parts.append(re.escape(char))
    return ''.join(parts)


@lru_cache(maxsize=1024)
def compile_pattern(pattern: str, case_sensitive: bool, use_regex: bool) -> Pattern:
    """Compile a filter pattern into a regex meant for ``fullmatch``.

    Wildcard patterns are case-folded here when matching is case-insensitive;
    candidates are folded in ``matches``. Regex patterns keep their text and
    use ``re.IGNORECASE`` instead.

    Raises:
        FilterConfigError: If a regex pattern does not compile.
    """
    if use_regex:
        flags = 0 if case_sensitive else re.IGNORECASE
        try:
            return re.compile(pattern, flags)
        except re.error as e:
            raise FilterConfigError(
                f"Invalid regex pattern: '{pattern}' ({e})", pattern=pattern
            ) from e

    text = pattern if case_sensitive else pattern.casefold()
    return re.compile(wildcard_to_regex(text), re.DOTALL)


def matches(candidate: str, pattern: str, case_sensitive: bool = False,
            use_regex: bool = False) -> bool:
    """Return True when ``candidate`` fully matches ``pattern``."""
    if candidate is None or pattern is None:
        return False

    try:
        compiled = compile_pattern(pattern, case_sensitive, use_regex)
    except FilterConfigError as e:
        # Patterns are validated up front; an unvalidated bad one never matches.
        logger.warning("%s", e)
        return False

    text = candidate
    if not use_regex and not case_sensitive:
        text = candidate.casefold()
    return compiled.fullmatch(text) is not None
