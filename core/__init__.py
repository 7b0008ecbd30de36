"""
Core concurrency primitives shared by every package.

Public API:
    - Observable: Lock-guarded value with copy-out reads and status channels
    - PendingResult: One-slot non-blocking mailbox

SharedState lives in core.shared_state and is imported from there directly.

Usage:
    from core import Observable

    status = Observable(0, name="counter")
    status.set(1)
"""

from core.observable import Observable
from core.pending_result import PendingResult

__all__ = [
    "Observable",
    "PendingResult",
]
