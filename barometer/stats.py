# barometer/stats.py
from typing import Any, Dict, Sequence

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from barometer.normalizers import NormalizedRecord


class StatsSummary(BaseModel):
    """Dataset summary; pressures are pre-formatted to one decimal ("990.9")."""
    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    avg_pressure: str
    max_pressure: str
    min_pressure: str
    total_records: int

    @classmethod
    def empty(cls) -> "StatsSummary":
        """Placeholder shown before the first fetch completes."""
        return cls(avg_pressure=_fmt(0.0), max_pressure=_fmt(0.0), min_pressure=_fmt(0.0), total_records=0)

    def to_dict(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True)


def summarize(records: Sequence[NormalizedRecord]) -> StatsSummary:
    """
    Reduce a normalized collection to its summary:
      - avgPressure: mean of pressureAvg
      - maxPressure: largest pressureMax
      - minPressure: smallest pressureMin
      - totalRecords: number of records
    Raises ValueError on an empty collection; use StatsSummary.empty() instead.
    """
    if not records:
        raise ValueError("cannot summarize an empty collection")
    avg = sum(r.pressure_avg for r in records) / len(records)
    return StatsSummary(
        avg_pressure=_fmt(avg),
        max_pressure=_fmt(max(r.pressure_max for r in records)),
        min_pressure=_fmt(min(r.pressure_min for r in records)),
        total_records=len(records),
    )

def _fmt(x: float) -> str:
    return f"{x:.1f}"
