"""Table-name filtering with exclude-before-include precedence."""
import logging
from typing import Iterable, List, Optional

from orameta.core.matcher import matches
from orameta.models.filter import FilterSpec

logger = logging.getLogger(__name__)


def should_include(table_name: Optional[str], spec: FilterSpec) -> bool:
    """Decide whether a table survives filtering.

    Exclude patterns always win. With no include patterns every
    non-excluded name is kept.
    """
    if table_name is None or not table_name.strip():
        return False

    for pattern in spec.exclude_patterns:
        if matches(table_name, pattern, spec.pattern_case_sensitive(pattern), spec.use_regex):
            logger.debug("Table %s excluded by pattern %s", table_name, pattern)
            return False

    if spec.include_patterns:
        return any(
            matches(table_name, pattern, spec.case_sensitive, spec.use_regex)
            for pattern in spec.include_patterns
        )

    return True


def filter_table_names(names: Iterable[str], spec: Optional[FilterSpec]) -> List[str]:
    """Keep the names accepted by ``spec``, preserving their order.

    Raises:
        FilterConfigError: If the spec holds an invalid pattern.
    """
    names = list(names)
    if spec is None or not spec.has_filters():
        return [n for n in names if n and n.strip()]

    spec.validate_patterns()
    kept = [n for n in names if should_include(n, spec)]
    logger.info("%d of %d tables match filter criteria", len(kept), len(names))
    return kept
