from acb_tracker.acb.models import CapitalGainRecord, SecuritySummary, ACBResult
from acb_tracker.acb.engine import ACBEngine, compute_acb
from acb_tracker.acb.position import Position

__all__ = [
    "ACBEngine",
    "compute_acb",
    "Position",
    "CapitalGainRecord",
    "SecuritySummary",
    "ACBResult"
]
