from __future__ import annotations

import datetime as dt
from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum


class Category(str, Enum):
    FOOD = "Food"
    STAY = "Stay"
    ENTERTAINMENT = "Entertainment"
    SHOPPING = "Shopping"
    SETTLEMENT = "Settlement"
    TRAVEL = "Travel"
    GENERAL = "General"


@dataclass(frozen=True, slots=True)
class Participant:
    id: int
    name: str


@dataclass(frozen=True, slots=True)
class Payment:
    id: int
    payer_id: int
    payer_name: str
    amount: Decimal
    involved_ids: tuple[int, ...]
    involved_names: tuple[str, ...]
    purpose: str
    category: str
    date: dt.date


@dataclass(slots=True)
class LedgerSnapshot:
    participants: list[Participant] = field(default_factory=list)
    payments: list[Payment] = field(default_factory=list)
    next_participant_id: int = 1
    next_payment_id: int = 1
