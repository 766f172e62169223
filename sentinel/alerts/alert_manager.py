"""
Sentinel Grid - Border Sector Risk Intelligence
Alert Manager Module

This module turns alerting agent decisions into alerts, deduplicates
them and keeps a bounded history.

Features:
- Alert generation from agent decisions
- Per-sector, per-type deduplication window
- Bounded newest-first history with acknowledgment
- Offline queue for CRITICAL alerts, drained on sync
"""

import logging
import threading
from collections import deque
from datetime import datetime, timedelta
from typing import Callable, Deque, Dict, List, Optional, Tuple

from sentinel.agent.agent_types import AgentDecision
from sentinel.alerts.alert_types import Alert, AlertSummary, AlertType, generate_event_id
from sentinel.config import AlertConfig
from sentinel.risk.risk_types import ThreatLevel

# Configure module logger
logger = logging.getLogger(__name__)

BORDER_MOVEMENT_FACTOR = "Border Patch Movement"


class AlertManager:
    """
    Manages alert generation, deduplication and history.

    Example:
        >>> manager = AlertManager()
        >>> alert = manager.process_decision(decision)
        >>> if alert:
        ...     print(alert.message)
    """

    def __init__(
        self,
        config: Optional[AlertConfig] = None,
        clock: Callable[[], datetime] = datetime.now
    ):
        """
        Initialize the alert manager.

        Args:
            config: Alert configuration
            clock: Time source
        """
        self._config = config or AlertConfig()
        self._clock = clock

        # (sector_id, alert_type) -> last alert time
        self._last_seen: Dict[Tuple[str, AlertType], datetime] = {}

        # Newest alerts at the left
        self._alerts: Deque[Alert] = deque(maxlen=self._config.history_size)

        self._offline_queue: List[Alert] = []
        self._online = True

        self._stats = AlertSummary(start_time=self._clock())
        self._lock = threading.Lock()

        logger.info(
            f"AlertManager initialized with "
            f"dedup={self._config.dedup_seconds}s, "
            f"history={self._config.history_size}"
        )

    @property
    def config(self) -> AlertConfig:
        return self._config

    @property
    def alert_count(self) -> int:
        """Get total alerts generated."""
        return self._stats.total_alerts

    @property
    def online(self) -> bool:
        return self._online

    def set_online(self, online: bool) -> None:
        """Switch connectivity state. Going offline starts queueing CRITICAL alerts."""
        self._online = online
        logger.info(f"AlertManager {'online' if online else 'offline'}")

    def process_decision(self, decision: AgentDecision) -> Optional[Alert]:
        """
        Generate an alert for a decision that warrants one.

        Args:
            decision: Agent decision

        Returns:
            Alert if generated, None if not alerting or deduplicated
        """
        if not decision.alert:
            return None

        if BORDER_MOVEMENT_FACTOR in decision.factors:
            message = (
                f"SUSPICIOUS MOVEMENT DETECTED AT ZONE {decision.sector_id}. "
                f"RISK SCORE: {decision.risk_score}."
            )
        else:
            message = f"HIGH RISK THRESHOLD BREACHED (RISK: {decision.risk_score})"

        alert_type = (
            AlertType.MOBILITY_ANOMALY if decision.is_anomalous
            else AlertType.INFILTRATION_PREDICTION
        )

        return self.raise_alert(
            sector_id=decision.sector_id,
            level=decision.threat_level,
            alert_type=alert_type,
            message=message,
            risk_score=decision.risk_score,
            factors=list(decision.factors)
        )

    def raise_alert(
        self,
        sector_id: str,
        level: ThreatLevel,
        alert_type: AlertType,
        message: str,
        risk_score: int = 0,
        factors: Optional[List[str]] = None
    ) -> Optional[Alert]:
        """
        Record an alert unless the same sector/type fired within the window.

        Returns:
            Alert if recorded, None if deduplicated or alerting is disabled
        """
        if not self._config.enabled:
            return None

        now = self._clock()
        key = (sector_id, alert_type)

        with self._lock:
            last = self._last_seen.get(key)
            if last is not None and now - last < timedelta(seconds=self._config.dedup_seconds):
                logger.debug(f"Alert for {sector_id} ({alert_type.value}) deduplicated")
                return None

            alert = Alert(
                event_id=generate_event_id(),
                sector_id=sector_id,
                level=level,
                alert_type=alert_type,
                message=message,
                risk_score=risk_score,
                factors=factors or [],
                timestamp=now
            )

            self._last_seen[key] = now
            self._alerts.appendleft(alert)
            self._update_stats(alert)

            if level == ThreatLevel.CRITICAL and not self._online:
                self._offline_queue.append(alert)

        if level.is_concerning:
            logger.warning(alert.to_log_string())
        else:
            logger.info(alert.to_log_string())
        return alert

    def _update_stats(self, alert: Alert) -> None:
        self._stats.total_alerts += 1
        self._stats.by_level[alert.level.value] += 1
        self._stats.by_type[alert.alert_type.value] += 1
        self._stats.end_time = alert.timestamp

    def get_recent_alerts(self, count: int = 10) -> List[Alert]:
        """
        Get most recent alerts, newest first.

        Args:
            count: Number of alerts to return
        """
        with self._lock:
            return list(self._alerts)[:count]

    def get_alert(self, event_id: str) -> Optional[Alert]:
        with self._lock:
            for alert in self._alerts:
                if alert.event_id == event_id:
                    return alert
        return None

    def acknowledge(self, event_id: str) -> bool:
        """
        Mark an alert as acknowledged.

        Returns:
            True if the alert exists
        """
        alert = self.get_alert(event_id)
        if alert is None:
            return False
        alert.acknowledged = True
        logger.info(f"Alert {event_id} acknowledged")
        return True

    @property
    def pending_sync(self) -> List[Alert]:
        """CRITICAL alerts raised while offline."""
        with self._lock:
            return list(self._offline_queue)

    def sync(self) -> List[Alert]:
        """
        Drain the offline queue.

        Returns:
            Alerts that were waiting for connectivity
        """
        with self._lock:
            drained, self._offline_queue = self._offline_queue, []
        if drained:
            logger.info(f"Synced {len(drained)} queued alerts")
        return drained

    def get_summary(self) -> AlertSummary:
        """Get alert summary statistics."""
        with self._lock:
            return self._stats

    def reset(self) -> None:
        """Reset manager state."""
        with self._lock:
            self._last_seen.clear()
            self._alerts.clear()
            self._offline_queue.clear()
            self._stats = AlertSummary(start_time=self._clock())
        logger.info("AlertManager reset")

    def __repr__(self) -> str:
        return (
            f"AlertManager(alerts={self.alert_count}, "
            f"dedup={self._config.dedup_seconds}s)"
        )
