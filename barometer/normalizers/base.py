# barometer/normalizers/base.py
from typing import Protocol
from .types import RawRecord, Record

class Normalizer(Protocol):
    def normalize_record(self, raw: RawRecord, rec: Record) -> Record:
        """Return a NEW working record built from `rec` (and `raw` if needed). Do not mutate either."""
        ...
