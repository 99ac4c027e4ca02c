import math
import re
from typing import Any, Iterable, Optional, Tuple

from .base import Normalizer
from .types import FieldSpec, RawRecord, Record

class FieldNormalizer(Normalizer):
    """
    Maps either producer's key spelling onto the canonical field names.
    For every field the lower-camel key wins if it holds a truthy value,
    then the upper-snake key, then the field's default.
    """
    def __init__(self, fields: Optional[Tuple[FieldSpec, ...]] = None):
        self.fields = fields or CANONICAL_FIELDS

    def normalize_record(self, raw: RawRecord, rec: Record) -> Record:
        out = dict(rec)
        for field in self.fields:
            value = pick(raw, field.keys)
            out[field.name] = field.default if value is None else field.coerce(value)
        return out


# --- Individual field helpers ---

_FLOAT_PREFIX = re.compile(r"\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")
_INT_PREFIX = re.compile(r"\s*([+-]?\d+)")

def pick(raw: RawRecord, keys: Iterable[str]) -> Optional[Any]:
    """First truthy value among `keys`, or None when every candidate is missing/falsy."""
    for k in keys:
        v = raw.get(k)
        if v:
            return v
    return None

def parse_float(v: Any) -> float:
    """Decimal parse that tolerates trailing junk ("990.9 hPa"). Unparseable -> 0.0."""
    if v is None or isinstance(v, bool):
        return 0.0
    if isinstance(v, (int, float)):
        return float(v) if math.isfinite(v) else 0.0
    m = _FLOAT_PREFIX.match(str(v))
    if not m:
        return 0.0
    x = float(m.group(1))
    return x if math.isfinite(x) else 0.0

def parse_int(v: Any) -> int:
    """Integer parse of a leading digit run ("187205", 187205.0). Unparseable -> 0."""
    if v is None or isinstance(v, bool):
        return 0
    if isinstance(v, int):
        return v
    if isinstance(v, float):
        return int(v) if math.isfinite(v) else 0
    m = _INT_PREFIX.match(str(v))
    if not m:
        return 0
    try:
        return int(m.group(1))
    except ValueError:  # past the interpreter's int digit limit
        return 0

def clean_region(v: Any) -> str:
    return str(v)


CANONICAL_FIELDS: Tuple[FieldSpec, ...] = (
    FieldSpec("region",       ("nuts1", "NUTS"),                  clean_region, ""),
    FieldSpec("districtCode", ("districtCode", "DISTRICT_CODE"),   parse_int,    0),
    FieldSpec("refYear",      ("refYear", "REF_YEAR"),            parse_int,    0),
    FieldSpec("refDate",      ("refDate", "REF_DATE"),            parse_int,    0),
    FieldSpec("pressureAvg",  ("p", "P"),                         parse_float,  0.0),
)
