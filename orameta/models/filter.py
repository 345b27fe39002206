"""Table-name filter configuration."""
from typing import Tuple

from pydantic import BaseModel, ConfigDict

from orameta.core.matcher import FilterConfigError, compile_pattern, wildcard_to_regex

# Name prefixes reserved by Oracle and bundled Oracle components
SYSTEM_TABLE_PATTERNS = (
    "SYS_*",
    "SYSTEM_*",
    "APEX_*",
    "FLOWS_*",
    "MDSYS_*",
    "CTXSYS_*",
    "XDB_*",
    "WMSYS_*",
)
SYSTEM_TABLE_REGEXES = tuple(wildcard_to_regex(p) for p in SYSTEM_TABLE_PATTERNS)

class FilterSpec(BaseModel):
    """Include/exclude patterns applied to table names before extraction."""

    model_config = ConfigDict(frozen=True)

    include_patterns: Tuple[str, ...] = ()
    exclude_patterns: Tuple[str, ...] = ()
    case_sensitive: bool = False
    use_regex: bool = False

    def validate_patterns(self) -> None:
        """Check every pattern before any matching happens.

        Raises:
            FilterConfigError: If a pattern is blank or, in regex mode,
                does not compile. The message names the pattern.
        """
        for kind, patterns in (("include", self.include_patterns),
                               ("exclude", self.exclude_patterns)):
            for pattern in patterns:
                if pattern is None or not pattern.strip():
                    raise FilterConfigError(
                        f"{kind} pattern cannot be null or empty", pattern=pattern
                    )
                try:
                    compile_pattern(pattern, self.case_sensitive, self.use_regex)
                except FilterConfigError as e:
                    raise FilterConfigError(
                        f"Invalid regex {kind} pattern: '{pattern}'", pattern=pattern
                    ) from e

    def has_filters(self) -> bool:
        return bool(self.include_patterns) or bool(self.exclude_patterns)

    def pattern_count(self) -> int:
        return len(self.include_patterns) + len(self.exclude_patterns)

    def is_system_pattern(self, pattern: str) -> bool:
        """True if ``pattern`` is one of the Oracle-reserved prefixes."""
        if self.use_regex:
            return pattern in SYSTEM_TABLE_REGEXES
        return pattern in SYSTEM_TABLE_PATTERNS

    def pattern_case_sensitive(self, pattern: str) -> bool:
        """Case sensitivity to use for ``pattern``; system prefixes ignore case."""
        return self.case_sensitive and not self.is_system_pattern(pattern)

    def with_system_exclusions(self) -> "FilterSpec":
        """Return a copy whose exclude list also carries the system prefixes.

        User patterns are kept in front. In regex mode the wildcard prefixes
        are translated so they keep their meaning. The system prefixes always
        match regardless of case (see ``is_system_pattern``).
        """
        merged = list(self.exclude_patterns)
        for pattern in SYSTEM_TABLE_PATTERNS:
            if self.use_regex:
                pattern = wildcard_to_regex(pattern)
            if pattern not in merged:
                merged.append(pattern)
        return self.model_copy(update={"exclude_patterns": tuple(merged)})

    @classmethod
    def include_all(cls) -> "FilterSpec":
        return cls()

    @classmethod
    def include_pattern(cls, pattern: str, case_sensitive: bool = False) -> "FilterSpec":
        return cls(include_patterns=[pattern], case_sensitive=case_sensitive)

    @classmethod
    def exclude_pattern(cls, pattern: str, case_sensitive: bool = False) -> "FilterSpec":
        return cls(exclude_patterns=[pattern], case_sensitive=case_sensitive)

    @classmethod
    def exclude_system_tables(cls) -> "FilterSpec":
        """Spec that only drops Oracle-reserved table prefixes."""
        return cls(exclude_patterns=SYSTEM_TABLE_PATTERNS, case_sensitive=False)
