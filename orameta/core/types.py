"""Oracle data type formatting and classification."""
from typing import Callable, Dict, Optional

from orameta.models.schema import TypeCategory

UNKNOWN_TYPE = "UNKNOWN"

# rule(name, length, precision, scale, char_used) -> formatted type
TypeRule = Callable[[str, Optional[int], Optional[int], Optional[int], Optional[str]], str]


def _positive(value: Optional[int]) -> bool:
    return value is not None and value > 0


def _bare(name, length, precision, scale, char_used):  # pylint: disable=unused-argument
    return name


def _character(name, length, precision, scale, char_used):  # pylint: disable=unused-argument
    if not _positive(length):
        return name
    semantics = "CHAR" if char_used == "C" else "BYTE"
    return f"{name}({length} {semantics})"


def _sized(name, length, precision, scale, char_used):  # pylint: disable=unused-argument
    if not _positive(length):
        return name
    return f"{name}({length})"


def _number(name, length, precision, scale, char_used):  # pylint: disable=unused-argument
    if not _positive(precision):
        return name
    if scale is not None and scale > 0:
        return f"{name}({precision},{scale})"
    return f"{name}({precision})"


def _float(name, length, precision, scale, char_used):  # pylint: disable=unused-argument
    if not _positive(precision):
        return name
    return f"{name}({precision})"


def _timestamp(name, length, precision, scale, char_used):  # pylint: disable=unused-argument
    suffix = name[len("TIMESTAMP"):]
    if _positive(scale):
        return f"TIMESTAMP({scale}){suffix}"
    return name


def _interval_year(name, length, precision, scale, char_used):  # pylint: disable=unused-argument
    if _positive(precision):
        return f"INTERVAL YEAR({precision}) TO MONTH"
    return name


def _interval_day(name, length, precision, scale, char_used):  # pylint: disable=unused-argument
    if precision is not None and scale is not None:
        return f"INTERVAL DAY({precision}) TO SECOND({scale})"
    if precision is not None:
        return f"INTERVAL DAY({precision}) TO SECOND"
    return name


TYPE_RULES: Dict[str, TypeRule] = {
    "VARCHAR2": _character,
    "CHAR": _character,
    "NVARCHAR2": _sized,
    "NCHAR": _sized,
    "NUMBER": _number,
    "FLOAT": _float,
    "BINARY_FLOAT": _bare,
    "BINARY_DOUBLE": _bare,
    "DATE": _bare,
    "TIMESTAMP": _timestamp,
    "TIMESTAMP WITH TIME ZONE": _timestamp,
    "TIMESTAMP WITH LOCAL TIME ZONE": _timestamp,
    "INTERVAL YEAR TO MONTH": _interval_year,
    "INTERVAL DAY TO SECOND": _interval_day,
    "RAW": _sized,
    "UROWID": _sized,
    "LONG RAW": _bare,
    "LONG": _bare,
    "CLOB": _bare,
    "NCLOB": _bare,
    "BLOB": _bare,
    "BFILE": _bare,
    "ROWID": _bare,
    "XMLTYPE": _bare,
}

CHARACTER_TYPES = frozenset({"VARCHAR2", "VARCHAR", "CHAR", "NVARCHAR2", "NCHAR"})


def map_type(raw_type: Optional[str], length: Optional[int] = None,
             precision: Optional[int] = None, scale: Optional[int] = None,
             char_used: Optional[str] = None) -> str:
    """Render the canonical Oracle type string for a catalog column.

    Lookup ignores case and the result is upper-case. Types without a rule
    are returned exactly as given; ``None`` maps to ``UNKNOWN``.
    """
    if raw_type is None:
        return UNKNOWN_TYPE

    canonical = raw_type.strip().upper()
    rule = TYPE_RULES.get(canonical)
    if rule is None:
        return raw_type
    return rule(canonical, length, precision, scale, char_used)


def categorize_type(raw_type: Optional[str]) -> TypeCategory:
    """Classify a raw or formatted Oracle type into a broad category."""
    if not raw_type:
        return TypeCategory.OTHER

    name = raw_type.strip().upper()
    if name.startswith(("VARCHAR", "NVARCHAR", "CHAR", "NCHAR")) or name in ("CLOB", "NCLOB"):
        return TypeCategory.CHARACTER
    if name.startswith(("NUMBER", "FLOAT")) or name in ("INTEGER", "BINARY_FLOAT", "BINARY_DOUBLE"):
        return TypeCategory.NUMERIC
    if name == "DATE" or name.startswith(("TIMESTAMP", "INTERVAL")):
        return TypeCategory.TEMPORAL
    if name in ("BLOB", "BFILE"):
        return TypeCategory.LOB
    return TypeCategory.OTHER


def is_character_type(raw_type: Optional[str]) -> bool:
    """True for the length-bearing character types that honour CHAR_USED."""
    return bool(raw_type) and raw_type.strip().upper() in CHARACTER_TYPES


def effective_length(raw_type: Optional[str], data_length: Optional[int],
                     char_length: Optional[int], char_used: Optional[str]) -> Optional[int]:
    """Pick the length the type string should show.

    Character-semantic columns report their declared size in CHAR_LENGTH;
    everything else uses DATA_LENGTH.
    """
    if is_character_type(raw_type) and char_used == "C" and char_length is not None:
        return char_length
    return data_length
