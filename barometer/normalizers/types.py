# barometer/normalizers/types.py
from dataclasses import dataclass
from typing import Any, Callable, Dict, Tuple

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

RawRecord = Dict[str, Any]   # whatever the upstream producer sent
Record = Dict[str, Any]      # working record passed between stages (canonical keys)


@dataclass(frozen=True)
class FieldSpec:
    """One canonical field: candidate keys in precedence order, a coercion and a default."""
    name: str
    keys: Tuple[str, ...]
    coerce: Callable[[Any], Any]
    default: Any


class NormalizedRecord(BaseModel):
    """A pressure observation in canonical form. Serializes with camelCase names."""
    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    region: str = ""
    district_code: int = 0
    ref_year: int = 0
    ref_date: int = 0
    pressure_avg: float = 0.0
    pressure_max: float = 0.0
    pressure_min: float = 0.0
    display_label: str = "Unknown"

    def to_dict(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True)
