"""FairShare: shared expense ledger and settlement planner."""

__version__ = "0.1.0"
