"""Patient record model."""

from datetime import UTC, datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class PatientRecord(BaseModel):
    """A clinical data record owned by the request that fetched it.

    Unknown document fields are preserved. ``visits`` and ``high_risk`` are
    annotation slots filled in by the enrichment service.
    """

    model_config = ConfigDict(extra="allow")

    patient_id: str | None = None
    form: str | None = None
    reported_date: datetime | None = None
    lmp_date: datetime | None = None
    expected_date: datetime | None = None
    district: str | None = None
    errors: list[Any] = Field(default_factory=list)

    visits: int | None = None
    high_risk: bool | None = None

    @field_validator("reported_date", "lmp_date", "expected_date", mode="after")
    @classmethod
    def assume_utc(cls, v: datetime | None) -> datetime | None:
        """Treat naive timestamps as UTC."""
        if v is not None and v.tzinfo is None:
            return v.replace(tzinfo=UTC)
        return v
