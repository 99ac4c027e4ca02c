from .base import Normalizer
from .types import RawRecord, Record

UNKNOWN_LABEL = "Unknown"

class DisplayLabelFormatter(Normalizer):
    """Attaches "<year>-<month>" taken from the YYYYMM date code."""
    def normalize_record(self, raw: RawRecord, rec: Record) -> Record:
        out = dict(rec)
        out["displayLabel"] = display_label(out.get("refYear", 0), out.get("refDate", 0))
        return out


def display_label(ref_year, ref_date) -> str:
    """Plain string slicing: everything after the 4-digit year is the month part."""
    date_s = str(ref_date)
    if len(date_s) <= 4:
        return UNKNOWN_LABEL
    return f"{ref_year}-{date_s[4:]}"
