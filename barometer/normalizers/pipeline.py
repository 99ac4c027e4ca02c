import logging
from collections.abc import Mapping
from typing import Any, Iterable, List, Optional

from .base import Normalizer
from .extrema import ExtremaSynthesizer
from .fields import FieldNormalizer
from .labels import DisplayLabelFormatter
from .types import NormalizedRecord, Record

log = logging.getLogger(__name__)

class NormalizerPipeline:
    """
    A chain of normalizers.
    Every stage sees the untouched raw record plus the working record
    produced so far; the last working record becomes a NormalizedRecord.
    """
    def __init__(self, stages: List[Normalizer]):
        self.stages = stages

    def normalize_record(self, raw: Any) -> Optional[NormalizedRecord]:
        """Returns None when `raw` is not a keyed record; callers skip it."""
        if not isinstance(raw, Mapping):
            return None
        out: Record = {}
        for stage in self.stages:
            out = stage.normalize_record(raw, out)
        return NormalizedRecord(**out)

    def normalize_all(self, raws: Iterable[Any]) -> List[NormalizedRecord]:
        records: List[NormalizedRecord] = []
        for i, raw in enumerate(raws):
            rec = self.normalize_record(raw)
            if rec is None:
                log.warning("skipping record %d: expected an object, got %s", i, type(raw).__name__)
                continue
            records.append(rec)
        return records

def get_default_normalizer(zero_is_missing: bool = True) -> NormalizerPipeline:
    """
    Factory for the default pipeline:
    field mapping -> extrema synthesis -> display label.
    """
    return NormalizerPipeline([
        FieldNormalizer(),
        ExtremaSynthesizer(zero_is_missing=zero_is_missing),
        DisplayLabelFormatter(),
    ])
