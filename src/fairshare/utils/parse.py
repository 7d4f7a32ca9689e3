from __future__ import annotations

import re
from dataclasses import dataclass
from decimal import Decimal
from typing import Optional, Sequence

from fairshare.errors import ValidationError
from fairshare.money import to_decimal

ALL_KEYWORDS = {"all", "*", "everyone"}

PAY_USAGE = "/pay <payer_id> | <amount> | <ids or all> | <purpose> | [category]"


@dataclass(slots=True)
class PaymentCommand:
    payer_id: int
    amount: Decimal
    involved_ids: Optional[list[int]]
    purpose: str
    category: Optional[str] = None

    def resolve_involved(self, all_ids: Sequence[int]) -> list[int]:
        if self.involved_ids is None:
            return list(all_ids)
        return self.involved_ids


def command_args(text: str | None) -> str:
    """Everything after the command word, e.g. "/pay@bot 1 | 2" -> "1 | 2"."""
    if not text:
        return ""
    parts = text.split(maxsplit=1)
    return parts[1].strip() if len(parts) > 1 else ""


def parse_id(value: str) -> int:
    text = value.strip().lstrip("#")
    if not text.isdecimal():
        raise ValidationError(f"Invalid id: {value!r}")
    return int(text)


def parse_id_list(value: str) -> Optional[list[int]]:
    """Comma or space separated ids; "all" means every current participant (None)."""
    text = value.strip()
    if text.lower() in ALL_KEYWORDS:
        return None
    tokens = [token for token in re.split(r"[,\s]+", text) if token]
    if not tokens:
        raise ValidationError("Specify at least one participant to split with")
    return [parse_id(token) for token in tokens]


def parse_payment_command(args: str) -> PaymentCommand:
    parts = [part.strip() for part in args.split("|")]
    if len(parts) < 3:
        raise ValidationError(f"Usage: {PAY_USAGE}")

    payer_id = parse_id(parts[0])
    amount = to_decimal(parts[1])
    involved_ids = parse_id_list(parts[2])
    purpose = parts[3] if len(parts) > 3 else ""
    category = parts[4] if len(parts) > 4 and parts[4] else None

    return PaymentCommand(
        payer_id=payer_id,
        amount=amount,
        involved_ids=involved_ids,
        purpose=purpose,
        category=category,
    )
