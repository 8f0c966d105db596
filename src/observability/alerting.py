import logging

from src.observability.metrics import VerificationMetrics

logger = logging.getLogger(__name__)


# Share of all verifications in the window that a single rejection reason may
# reach before it alerts. Stale/future timestamps point at a sender's clock and
# tolerate a little jitter; signature mismatches should be near zero.
DEFAULT_REASON_THRESHOLDS = {
    "Missing required headers": 0.05,
    "Invalid Signature Headers": 0.01,
    "Message timestamp too old": 0.10,
    "Message timestamp too new": 0.10,
    "No matching signature found": 0.02,
}

REASON_HINTS = {
    "Missing required headers": "requests arrive without a complete svix-*/webhook-* header set; "
                                "check that a proxy is not stripping headers",
    "Invalid Signature Headers": "the timestamp header is not an integer; the sender is misconfigured",
    "Message timestamp too old": "the sender's clock is behind, deliveries are queued too long, "
                                 "or old messages are being replayed",
    "Message timestamp too new": "the sender's clock is ahead of this host",
    "No matching signature found": "the signing secret differs (missed key rotation?) "
                                   "or the traffic is forged",
}


class RejectionAlertManager:
    """Raises one alert per rejection reason when that reason dominates recent traffic.

    Each reason is tracked on its own: a burst of stale timestamps does not
    mask a later rise in signature mismatches. An alert for a reason fires
    once and re-arms when the reason's share drops back under its threshold.
    """

    def __init__(
        self,
        metrics: VerificationMetrics,
        thresholds: dict[str, float] | None = None,
        default_threshold: float = 0.10,
        min_verifications: int = 1,
        callback=None,
    ):
        self.metrics = metrics
        self.thresholds = {**DEFAULT_REASON_THRESHOLDS, **(thresholds or {})}
        self.default_threshold = default_threshold
        self.min_verifications = min_verifications
        self.callback = callback
        self._firing: set[str] = set()
        self._alerts: list[dict] = []

    def threshold_for(self, reason: str) -> float:
        return self.thresholds.get(reason, self.default_threshold)

    def check(self) -> list[dict]:
        """Evaluate every rejection reason seen in the window. Returns newly fired alerts."""
        total, reasons = self.metrics.window_snapshot()
        if total < self.min_verifications:
            self._firing.clear()
            return []

        fired = []
        for reason in sorted(set(reasons) | self._firing):
            count = reasons.get(reason, 0)
            share = count / total
            threshold = self.threshold_for(reason)

            if share <= threshold:
                self._firing.discard(reason)
                continue
            if reason in self._firing:
                continue

            alert = {
                "type": "webhook_rejection",
                "reason": reason,
                "share": share,
                "threshold": threshold,
                "rejected_verifications": count,
                "total_verifications": total,
                "hint": REASON_HINTS.get(reason, ""),
                "message": (
                    f"'{reason}' rejected {count}/{total} webhooks ({share:.1%}), "
                    f"above {threshold:.1%}"
                ),
            }
            self._firing.add(reason)
            self._alerts.append(alert)
            fired.append(alert)
            logger.warning("%s: %s", alert["message"], alert["hint"] or "no hint")

            if self.callback:
                self.callback(alert)

        return fired

    def firing(self) -> set[str]:
        """Reasons currently above their threshold."""
        return set(self._firing)

    def get_alerts(self) -> list[dict]:
        return list(self._alerts)

    def reset(self) -> None:
        self._firing.clear()
        self._alerts.clear()
