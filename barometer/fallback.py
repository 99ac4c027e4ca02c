# barometer/fallback.py
from typing import List

from barometer.normalizers import RawRecord

# Shown whenever the live backend can't be used. Upper-snake on purpose:
# it is a verbatim record from the station export.
SAMPLE_DATA: List[RawRecord] = [
    {
        "NUTS": "AT13",
        "DISTRICT_CODE": 91900,
        "REF_YEAR": 1872,
        "REF_DATE": 187205,
        "P": "990.9",
        "P_MAX": "1003.2",
        "P_MIN": "981.2",
    },
]

def sample_records() -> List[RawRecord]:
    """Fresh copies, so nothing downstream can touch the module constant."""
    return [dict(r) for r in SAMPLE_DATA]
