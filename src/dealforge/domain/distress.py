from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class LienAggregate(BaseModel):
    """
    Lien / tax statistics for one property, aggregated upstream from
    county lien records. Only active (unreleased) liens are counted.
    """
    model_config = ConfigDict(frozen=True, extra="ignore")

    park_id: Optional[str] = None
    county: Optional[str] = None

    active_lien_count: int = Field(default=0, ge=0)
    total_tax_owed: float = Field(default=0.0, ge=0)
    most_recent_lien_date: Optional[date] = None
    lot_count: Optional[int] = Field(default=None, ge=0)
    distinct_tax_years_with_liens: int = Field(default=0, ge=0)


@dataclass(frozen=True)
class DistressBreakdown:
    """Weighted score plus the four 0-100 sub-scores that produced it."""
    score: float
    lien_density: float
    tax_burden: float
    recency: float
    chronicity: float
    months_since_last_lien: Optional[int]
    active_lien_count: int
    total_tax_owed: float
    lot_count: Optional[int]
    distinct_tax_years_with_liens: int
    park_id: Optional[str] = None
    county: Optional[str] = None
