from typing import Any, Iterable, Optional

from .base import Normalizer
from .fields import parse_float, pick
from .types import RawRecord, Record

MAX_KEYS = ("p_max", "P_MAX")
MIN_KEYS = ("p_min", "P_MIN")

MAX_FACTOR = 1.08   # 8% above the reading
MIN_FACTOR = 0.93   # 7% below the reading

class ExtremaSynthesizer(Normalizer):
    """
    Fills pressureMax/pressureMin for producers that only report a single
    reading, so the trend chart still gets a plausible range.

    With zero_is_missing=True (the default) a provided 0 counts as absent and
    gets synthesized, same as the long-standing dashboard behavior. Pass False
    for producers that can legitimately report a zero extremum.
    """
    def __init__(self, zero_is_missing: bool = True):
        self.zero_is_missing = zero_is_missing

    def normalize_record(self, raw: RawRecord, rec: Record) -> Record:
        out = dict(rec)
        base_p = out.get("pressureAvg", 0.0)
        out["pressureMax"] = self._extremum(raw, MAX_KEYS, base_p, MAX_FACTOR)
        out["pressureMin"] = self._extremum(raw, MIN_KEYS, base_p, MIN_FACTOR)
        return out

    def _extremum(self, raw: RawRecord, keys: Iterable[str], base_p: float, factor: float) -> float:
        value = pick(raw, keys) if self.zero_is_missing else pick_present(raw, keys)
        if value is None:
            return synthesize(base_p, factor)
        return parse_float(value)


def pick_present(raw: RawRecord, keys: Iterable[str]) -> Optional[Any]:
    """Like pick(), but a numeric zero counts as a real value."""
    for k in keys:
        v = raw.get(k)
        if v is not None and v != "":
            return v
    return None

def synthesize(base_p: float, factor: float) -> float:
    return round(base_p * factor, 1)
