"""Search result models returned by the full-text engine."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from anc_search.models.record import PatientRecord


class SearchRow(BaseModel):
    """A single matching document reference.

    Attributes:
        id: Document reference
        score: Engine relevance score, when reported
        doc: The full document, when requested with include_docs
    """

    model_config = ConfigDict(extra="allow")

    id: str
    score: float | None = None
    doc: PatientRecord | None = None


class SearchResult(BaseModel):
    """A (possibly merged) page of search results.

    ``total_rows`` is the engine's total match count and does not depend on
    pagination, so ``len(rows)`` may be smaller.
    """

    total_rows: int = Field(default=0, ge=0)
    rows: list[SearchRow] = Field(default_factory=list)

    @classmethod
    def empty(cls) -> "SearchResult":
        return cls(total_rows=0, rows=[])

    @classmethod
    def from_response(cls, payload: dict[str, Any] | None) -> "SearchResult":
        """Build a result from a raw engine response.

        An absent response becomes the empty result and a response
        without rows gets an empty row list.
        """
        if not payload:
            return cls.empty()
        return cls(
            total_rows=payload.get("total_rows") or 0,
            rows=payload.get("rows") or [],
        )

    def merge(self, other: "SearchResult") -> "SearchResult":
        """Concatenate rows (self first) and sum the totals."""
        return SearchResult(
            total_rows=self.total_rows + other.total_rows,
            rows=[*self.rows, *other.rows],
        )

    def patient_ids(self) -> list[str]:
        """Patient ids of the rows that carry a document, in row order."""
        return [
            row.doc.patient_id
            for row in self.rows
            if row.doc is not None and row.doc.patient_id is not None
        ]
