"""
Sentinel Grid - Border Sector Risk Intelligence
Sector State Module

This module holds the state that persists across refresh ticks:
previous-tick mobility (for activity deltas) and the decaying impact of
verified field reports.

Features:
- Per-sector state tracking owned by the caller, not the scoring engine
- Report impact accumulation and per-tick linear decay
- Mobility delta against the previous tick
"""

import logging
import threading
from dataclasses import dataclass
from typing import Dict, Optional

from sentinel.config import FieldReportConfig

# Configure module logger
logger = logging.getLogger(__name__)


@dataclass
class SectorState:
    """
    Cross-tick state for one sector.

    Attributes:
        sector_id: Sector identifier
        previous_mobility: Mobility density seen on the last tick
        report_impact: Current verified report bonus
        last_tick: Tick of the last mobility update
    """
    sector_id: str
    previous_mobility: Optional[float] = None
    report_impact: float = 0.0
    last_tick: int = -1


class SectorStateStore:
    """
    Caller-owned store of per-sector cross-tick state.

    The pipeline passes values out of this store into the pure scoring
    and decision components, then writes the new tick's values back.

    Example:
        >>> store = SectorStateStore()
        >>> store.add_report("0-2")
        >>> store.decay_reports()
        >>> store.report_impact("0-2")
        39.0
    """

    def __init__(self, config: Optional[FieldReportConfig] = None):
        """
        Initialize the store.

        Args:
            config: Field report configuration (impact and decay step)
        """
        self._config = config or FieldReportConfig()
        self._states: Dict[str, SectorState] = {}
        self._lock = threading.Lock()

        logger.info(
            f"SectorStateStore initialized with "
            f"report_impact={self._config.impact}, "
            f"decay_step={self._config.decay_step}"
        )

    @property
    def config(self) -> FieldReportConfig:
        return self._config

    @property
    def tracked_sectors(self) -> int:
        """Get number of sectors with state."""
        return len(self._states)

    def _get(self, sector_id: str) -> SectorState:
        if sector_id not in self._states:
            self._states[sector_id] = SectorState(sector_id=sector_id)
        return self._states[sector_id]

    def get_state(self, sector_id: str) -> SectorState:
        """Get state for a sector (creates new if not exists)."""
        with self._lock:
            return self._get(sector_id)

    def add_report(self, sector_id: str, impact: Optional[float] = None) -> float:
        """
        Apply a verified field report to a sector.

        Args:
            sector_id: Sector the report applies to
            impact: Bonus to add (configured default if omitted)

        Returns:
            New report impact for the sector
        """
        bonus = self._config.impact if impact is None else impact
        with self._lock:
            state = self._get(sector_id)
            state.report_impact += bonus
            logger.debug(
                f"Sector {sector_id} report impact -> {state.report_impact:.1f}"
            )
            return state.report_impact

    def decay_reports(self, step: Optional[float] = None) -> int:
        """
        Decrement every positive report impact by one step.

        Impacts stop at zero.

        Args:
            step: Decrement (configured default if omitted)

        Returns:
            Number of sectors whose impact changed
        """
        step = self._config.decay_step if step is None else step
        changed = 0
        with self._lock:
            for state in self._states.values():
                if state.report_impact > 0:
                    state.report_impact = max(0.0, state.report_impact - step)
                    changed += 1
                    if state.report_impact == 0.0:
                        logger.debug(f"Sector {state.sector_id} report impact fully decayed")
        return changed

    def report_impact(self, sector_id: str) -> float:
        """Current report impact for a sector (0 if none)."""
        with self._lock:
            state = self._states.get(sector_id)
            return state.report_impact if state else 0.0

    def mobility_delta(self, sector_id: str, current: float) -> float:
        """
        Absolute change in mobility since the previous tick.

        Returns 0 for a sector with no previous observation.
        """
        with self._lock:
            state = self._states.get(sector_id)
            if state is None or state.previous_mobility is None:
                return 0.0
            return abs(current - state.previous_mobility)

    def record_mobility(self, sector_id: str, mobility: float, tick: int) -> None:
        """Store this tick's mobility for the next delta computation."""
        with self._lock:
            state = self._get(sector_id)
            state.previous_mobility = mobility
            state.last_tick = tick

    def reset(self) -> None:
        """Reset all sector states."""
        with self._lock:
            self._states.clear()
        logger.info("SectorStateStore reset")

    def get_statistics(self) -> dict:
        """Get statistics about tracked state."""
        with self._lock:
            impacts = [s.report_impact for s in self._states.values()]
        active = [i for i in impacts if i > 0]
        return {
            "tracked_sectors": len(impacts),
            "sectors_with_reports": len(active),
            "max_report_impact": max(active) if active else 0.0
        }

    def __repr__(self) -> str:
        return f"SectorStateStore(sectors={len(self._states)})"
