"""
monte_carlo_tracker.py

Track progress and cancellation for one equity simulation run
"""
import threading


class SimulationTracker:
    """
    Cancellation token plus progress bookkeeping for a single simulation run.

    The caller that starts a run owns its tracker and may cancel it at any time;
    the simulator only looks at the flag between batches and before each progress report.
    """

    def __init__(self, total: int = 0):
        self.total = total
        self.completed = 0
        self._cancelled = threading.Event()

    def cancel(self):
        """Request that the run stop at its next check"""
        self._cancelled.set()

    @property
    def cancelled(self) -> bool:
        return self._cancelled.is_set()

    def reset_for_new_run(self, total: int):
        """Reuse the tracker for a fresh run"""
        self.total = total
        self.completed = 0
        self._cancelled.clear()

    def record_progress(self, completed: int) -> bool:
        """
        Record `completed` samples. Returns True when the progress should be reported,
        False once the run has been cancelled.
        """
        if completed <= self.completed:
            raise ValueError(f"Progress must increase: {completed} after {self.completed}")
        if self.cancelled:
            return False
        self.completed = completed
        return True

    def get_progress_status(self) -> str:
        """Get progress status string"""
        status = f"Equity simulation: {self.completed}/{self.total} samples"
        if self.cancelled:
            status += " (cancelled)"
        return status
