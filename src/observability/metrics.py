import threading
import time
from collections import Counter


class VerificationMetrics:
    """Collects webhook verification outcomes over a rolling window."""

    def __init__(self, window_seconds: float = 300):
        self._window_seconds = window_seconds
        self._accepted: list[float] = []  # timestamps
        self._rejected: list[tuple[float, str]] = []  # (timestamp, reason)
        self._lock = threading.Lock()

    def record_accepted(self) -> None:
        with self._lock:
            self._accepted.append(time.monotonic())

    def record_rejected(self, reason: str) -> None:
        with self._lock:
            self._rejected.append((time.monotonic(), reason))

    def _cutoff(self) -> float:
        return time.monotonic() - self._window_seconds

    def _accepted_in_window(self, cutoff: float) -> list[float]:
        return [t for t in self._accepted if t >= cutoff]

    def _rejected_in_window(self, cutoff: float) -> list[str]:
        return [reason for t, reason in self._rejected if t >= cutoff]

    def rejection_rate(self) -> float:
        """Rejection rate in the current rolling window (0.0 to 1.0)."""
        with self._lock:
            cutoff = self._cutoff()
            accepted = self._accepted_in_window(cutoff)
            rejected = self._rejected_in_window(cutoff)
            total = len(accepted) + len(rejected)
            if total == 0:
                return 0.0
            return len(rejected) / total

    def total_in_window(self) -> int:
        with self._lock:
            cutoff = self._cutoff()
            return len(self._accepted_in_window(cutoff)) + len(self._rejected_in_window(cutoff))

    def accepted_count_in_window(self) -> int:
        with self._lock:
            return len(self._accepted_in_window(self._cutoff()))

    def rejected_count_in_window(self, reason: str | None = None) -> int:
        with self._lock:
            reasons = self._rejected_in_window(self._cutoff())
            if reason is None:
                return len(reasons)
            return sum(1 for r in reasons if r == reason)

    def window_snapshot(self) -> tuple[int, Counter]:
        """Total verifications and rejections per reason, read under one lock."""
        with self._lock:
            cutoff = self._cutoff()
            reasons = Counter(self._rejected_in_window(cutoff))
            total = len(self._accepted_in_window(cutoff)) + sum(reasons.values())
            return total, reasons

    def reset(self) -> None:
        with self._lock:
            self._accepted.clear()
            self._rejected.clear()
