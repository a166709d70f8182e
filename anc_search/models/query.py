"""Query request models."""

from datetime import date, datetime
from typing import Any

from pydantic import BaseModel, Field, field_validator


class QueryOptions(BaseModel):
    """High-level record query descriptor.

    A ``patient_ids`` list that is present but empty means "match nothing":
    no search is issued and an empty result is returned.
    """

    q: str = Field(default="", description="Free-text lucene query")
    sort: str | None = Field(default=None, description="Sort expression, e.g. '\\reported_date'")
    include_docs: bool = Field(default=False, description="Fetch full documents with each row")
    limit: int | None = Field(default=None, ge=1, description="Maximum rows to return")
    start_date: datetime | date | None = Field(default=None, description="Inclusive range start")
    end_date: datetime | date | None = Field(default=None, description="Inclusive range end")
    district: str | None = Field(default=None, description="District filter")
    patient_ids: list[str] | None = Field(default=None, description="Patient id filter")
    min_weeks_pregnant: int | None = Field(default=None, ge=0)
    max_weeks_pregnant: int | None = Field(default=None, ge=0)

    @field_validator("start_date", "end_date", mode="before")
    @classmethod
    def parse_timestamps(cls, v: Any) -> Any:
        """Keep the time and offset of timestamp strings.

        Only bare ``YYYY-MM-DD`` strings become plain dates; anything longer
        is parsed as a datetime so it can be shifted to its UTC day.
        """
        if isinstance(v, str):
            v = v.strip()
            if len(v) > 10:
                return datetime.fromisoformat(v)
            return date.fromisoformat(v)
        return v
