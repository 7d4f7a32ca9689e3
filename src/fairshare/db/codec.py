from __future__ import annotations

from pydantic import TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from fairshare.db.models import LedgerSnapshot
from fairshare.errors import ValidationError

_snapshot_adapter: TypeAdapter[LedgerSnapshot] = TypeAdapter(LedgerSnapshot)


def dump_snapshot(snapshot: LedgerSnapshot) -> str:
    return _snapshot_adapter.dump_json(snapshot).decode("utf-8")


def load_snapshot(payload: str | bytes) -> LedgerSnapshot:
    try:
        return _snapshot_adapter.validate_json(payload)
    except PydanticValidationError as exc:
        raise ValidationError(f"Corrupted ledger snapshot: {exc.error_count()} error(s)") from exc
