"""Derived pregnancy metric values."""

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class WeeksPregnant:
    """Gestational age in whole weeks.

    Attributes:
        number: Whole weeks pregnant
        approximate: True when estimated from the reported date instead of LMP
    """

    number: int
    approximate: bool = False


@dataclass(frozen=True)
class EstimatedDueDate:
    """Estimated due date (EDD)."""

    date: datetime
    approximate: bool = False
