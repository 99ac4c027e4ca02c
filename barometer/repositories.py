import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

log = logging.getLogger(__name__)

# -----------------------------
# Seed record as found in the station export (upper-snake keys)
# -----------------------------
class Observation(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True, frozen=True)

    id: int = 0
    nuts1: Optional[str] = Field(default=None, alias="NUTS")
    district_code: int = Field(default=0, alias="DISTRICT_CODE")
    ref_year: int = Field(default=0, alias="REF_YEAR")
    ref_date: int = Field(default=0, alias="REF_DATE")
    p: Optional[str] = Field(default=None, alias="P")
    p_max: Optional[str] = Field(default=None, alias="P_MAX")
    p_min: Optional[str] = Field(default=None, alias="P_MIN")

    @field_validator("p", "p_max", "p_min", mode="before")
    @classmethod
    def _numbers_as_text(cls, v):
        # the export mixes "990.9" and 990.9; keep the wire format textual
        if isinstance(v, (int, float)) and not isinstance(v, bool):
            return str(v)
        return v

    def to_dict(self) -> Dict[str, Any]:
        """Lower-camel shape served to dashboard clients."""
        return {
            "id": self.id,
            "nuts1": self.nuts1,
            "districtCode": self.district_code,
            "refYear": self.ref_year,
            "refDate": self.ref_date,
            "p": self.p,
            "p_max": self.p_max,
            "p_min": self.p_min,
        }


class ObservationRepository:
    """Read-only, in-memory set of observations. Ids follow file order, starting at 1."""
    def __init__(self, observations: List[Observation]):
        self._items = list(observations)

    @classmethod
    def from_records(cls, records: List[Dict[str, Any]]) -> "ObservationRepository":
        items: List[Observation] = []
        for i, rec in enumerate(records):
            try:
                obs = Observation.model_validate(rec)
            except ValidationError as e:
                log.warning("seed record %d rejected: %s", i, e.errors()[:1])
                continue
            items.append(obs.model_copy(update={"id": len(items) + 1}))
        return cls(items)

    @classmethod
    def from_file(cls, path: Path) -> "ObservationRepository":
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
        if not isinstance(data, list):
            raise ValueError(f"{path}: expected a JSON array of observations")
        repo = cls.from_records(data)
        log.info("loaded %d observations from %s", repo.count(), path)
        return repo

    def all(self) -> List[Observation]:
        return list(self._items)

    def count(self) -> int:
        return len(self._items)
