from .pipeline import get_default_normalizer, NormalizerPipeline
from .fields import FieldNormalizer, CANONICAL_FIELDS, parse_float, parse_int, pick
from .extrema import ExtremaSynthesizer
from .labels import DisplayLabelFormatter, display_label
from .types import FieldSpec, NormalizedRecord, RawRecord, Record
from .base import Normalizer

__all__ = [
    "get_default_normalizer",
    "NormalizerPipeline",
    "FieldNormalizer",
    "CANONICAL_FIELDS",
    "ExtremaSynthesizer",
    "DisplayLabelFormatter",
    "display_label",
    "parse_float",
    "parse_int",
    "pick",
    "FieldSpec",
    "NormalizedRecord",
    "RawRecord",
    "Record",
    "Normalizer",
]
