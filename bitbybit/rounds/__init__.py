from .ledger import (
    HoleState,
    LedgerError,
    LedgerPreconditionError,
    ShotLedger,
    ShotValidationError,
)
from .models import Round, RoundSummary, compute_round_summary
from .service import RoundNotFound, RoundService, get_round_service

__all__ = [
    "HoleState",
    "LedgerError",
    "LedgerPreconditionError",
    "Round",
    "RoundNotFound",
    "RoundService",
    "RoundSummary",
    "ShotLedger",
    "ShotValidationError",
    "compute_round_summary",
    "get_round_service",
]
