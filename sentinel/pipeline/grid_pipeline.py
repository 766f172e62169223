"""
Sentinel Grid - Border Sector Risk Intelligence
Grid Refresh Pipeline

Drives the refresh tick: pulls telemetry, regenerates every sector
record, runs the decision agent, raises alerts and publishes the new
grid snapshot. Owns all state that persists across ticks so the scoring,
decision and planning components stay pure.

Features:
- Full-grid regeneration per tick (optionally parallel across sectors)
- Report impact decay and mobility deltas through SectorStateStore
- Bounded history of alerting decisions
- Field report submission with offline queueing and sync
- On-demand threat-aware routing over the latest snapshot
"""

import logging
import threading
import time
from collections import deque
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import Callable, Deque, Dict, List, Optional, Tuple

from sentinel.agent.agent_types import AgentDecision, AgentInput
from sentinel.agent.decision_agent import AutonomousAgent
from sentinel.alerts.alert_manager import AlertManager
from sentinel.alerts.alert_types import (
    Alert,
    AlertType,
    FieldReport,
    FieldReportType,
    generate_event_id
)
from sentinel.config import SentinelConfig
from sentinel.grid.grid_cell import GridCell
from sentinel.grid.grid_types import Coordinates, WeatherSample
from sentinel.grid.layout import GridLayout
from sentinel.grid.sector_context import SectorClassifier
from sentinel.risk.anomaly import AnomalyDetector
from sentinel.risk.risk_engine import CompositeRiskScorer
from sentinel.risk.risk_types import ThreatLevel
from sentinel.risk.sector_state import SectorStateStore
from sentinel.routing.path_planner import RoutePlan, ThreatAwarePlanner
from sentinel.telemetry.mobility_feed import SimulatedMobilityFeed
from sentinel.telemetry.static_datasets import StaticHistoryDataset, StaticTerrainDataset
from sentinel.telemetry.weather_provider import StaticWeatherProvider, WeatherProvider

logger = logging.getLogger(__name__)

VERIFIED_REPORT_FACTOR = "VERIFIED FIELD REPORT"


@dataclass
class TickResult:
    """
    Outcome of one refresh tick.

    Attributes:
        tick: Tick number that was processed
        weather: Weather sample used for the tick
        cells: Regenerated grid, row-major
        decisions: One decision per sector
        alerts: Alerts raised during the tick
    """
    tick: int
    weather: WeatherSample
    cells: List[GridCell] = field(default_factory=list)
    decisions: List[AgentDecision] = field(default_factory=list)
    alerts: List[Alert] = field(default_factory=list)

    @property
    def alerting_decisions(self) -> List[AgentDecision]:
        return [d for d in self.decisions if d.alert]


class GridRefreshPipeline:
    """
    Tick-driven regeneration of the sector grid.

    Example:
        >>> pipeline = GridRefreshPipeline()
        >>> result = pipeline.tick()
        >>> route = pipeline.plan_route("4-3")
        >>> pipeline.start()   # background refresh every refresh_rate_ms
        >>> pipeline.stop()
    """

    def __init__(
        self,
        config: Optional[SentinelConfig] = None,
        weather_provider: Optional[WeatherProvider] = None,
        mobility_feed: Optional[SimulatedMobilityFeed] = None,
        terrain: Optional[StaticTerrainDataset] = None,
        history: Optional[StaticHistoryDataset] = None,
        agent: Optional[AutonomousAgent] = None,
        alert_manager: Optional[AlertManager] = None,
        state_store: Optional[SectorStateStore] = None,
        clock: Callable[[], float] = time.time
    ):
        """
        Initialize the pipeline.

        Args:
            config: Master configuration
            weather_provider: Weather source (static default sample if omitted)
            mobility_feed: Mobility source
            terrain: Terrain dataset
            history: Historical incident dataset
            agent: Decision agent (built from config if omitted)
            alert_manager: Alert manager (built from config if omitted)
            state_store: Cross-tick state (built from config if omitted)
            clock: Time source returning epoch seconds
        """
        self._config = config or SentinelConfig()
        self._clock = clock

        self._layout = GridLayout(self._config.grid)
        self._classifier = SectorClassifier(self._config.grid, self._layout)
        self._scorer = CompositeRiskScorer(self._config.risk)
        self._detector = AnomalyDetector(self._config.anomaly)
        self._agent = agent or AutonomousAgent(
            config=self._config.agent,
            scorer=self._scorer,
            detector=self._detector,
            classifier=self._classifier,
            clock=clock
        )
        self._planner = ThreatAwarePlanner(self._config.planner, self._layout)

        self._weather_provider = weather_provider or StaticWeatherProvider()
        self._mobility_feed = mobility_feed or SimulatedMobilityFeed(cols=self._config.grid.cols)
        self._terrain = terrain or StaticTerrainDataset()
        self._history = history or StaticHistoryDataset()

        self._alert_manager = alert_manager or AlertManager(self._config.alerts)
        self._state_store = state_store or SectorStateStore(self._config.reports)

        # Published state
        self._lock = threading.RLock()
        # Held for a whole tick; cross-tick state advances once per tick
        self._tick_lock = threading.Lock()
        self._tick = 0
        self._grid: List[GridCell] = []
        self._weather: Optional[WeatherSample] = None
        self._decisions: Deque[AgentDecision] = deque(
            maxlen=self._config.pipeline.decision_history_size
        )

        self._online = True
        self._queued_reports: List[FieldReport] = []

        # Background refresh
        self._stop_event = threading.Event()
        self._thread: Optional[threading.Thread] = None

        logger.info(
            f"GridRefreshPipeline initialized "
            f"({self._layout.rows}x{self._layout.cols}, "
            f"refresh={self._config.pipeline.refresh_rate_ms}ms)"
        )

    # ═══════════════════════════════════════════════════════════════
    # ACCESSORS
    # ═══════════════════════════════════════════════════════════════

    @property
    def config(self) -> SentinelConfig:
        return self._config

    @property
    def layout(self) -> GridLayout:
        return self._layout

    @property
    def alert_manager(self) -> AlertManager:
        return self._alert_manager

    @property
    def state_store(self) -> SectorStateStore:
        return self._state_store

    @property
    def current_tick(self) -> int:
        with self._lock:
            return self._tick

    @property
    def weather(self) -> Optional[WeatherSample]:
        with self._lock:
            return self._weather

    @property
    def online(self) -> bool:
        return self._online

    @property
    def is_running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def snapshot(self) -> List[GridCell]:
        """Latest grid, row-major. Empty before the first tick."""
        with self._lock:
            return list(self._grid)

    def get_cell(self, sector_id: str) -> Optional[GridCell]:
        """
        Latest record for one sector.

        Raises:
            InvalidSectorError: If the identifier is outside the grid
        """
        self._layout.parse_id(sector_id)
        with self._lock:
            for cell in self._grid:
                if cell.sector_id == sector_id:
                    return cell
        return None

    def recent_decisions(self, count: int = 50) -> List[AgentDecision]:
        """Alerting decisions, newest first."""
        with self._lock:
            return list(self._decisions)[:count]

    # ═══════════════════════════════════════════════════════════════
    # REFRESH TICK
    # ═══════════════════════════════════════════════════════════════

    def tick(self, weather: Optional[WeatherSample] = None) -> TickResult:
        """
        Regenerate the whole grid once.

        Args:
            weather: Weather for this tick (fetched from the provider if omitted)

        Concurrent callers (background loop and API) run one after another.

        Returns:
            TickResult
        """
        with self._tick_lock:
            return self._run_tick(weather)

    def _run_tick(self, weather: Optional[WeatherSample]) -> TickResult:
        if weather is None:
            weather = self._weather_provider.fetch(
                Coordinates(lat=self._config.grid.center_lat, lng=self._config.grid.center_lng)
            )

        with self._lock:
            tick = self._tick

        sector_ids = list(self._layout.sector_ids())
        workers = self._config.pipeline.parallel_workers

        if workers > 1:
            with ThreadPoolExecutor(max_workers=workers) as executor:
                results = list(executor.map(
                    lambda sid: self._build_cell(sid, weather, tick), sector_ids
                ))
        else:
            results = [self._build_cell(sid, weather, tick) for sid in sector_ids]

        cells = [cell for cell, _ in results]
        decisions = [decision for _, decision in results]

        for cell in cells:
            self._state_store.record_mobility(cell.sector_id, cell.mobility_density, tick)

        alerts = []
        for decision in decisions:
            if not decision.alert:
                continue
            alert = self._alert_manager.process_decision(decision)
            if alert is not None:
                alerts.append(alert)

        # Reports decay once per tick after they have been scored
        self._state_store.decay_reports()

        with self._lock:
            self._grid = cells
            self._weather = weather
            for decision in decisions:
                if decision.alert:
                    self._decisions.appendleft(decision)
            self._tick = tick + 1

        result = TickResult(
            tick=tick,
            weather=weather,
            cells=cells,
            decisions=decisions,
            alerts=alerts
        )

        logger.debug(
            f"Tick {tick}: {len(cells)} sectors, "
            f"{len(result.alerting_decisions)} alerting, {len(alerts)} alerts"
        )
        return result

    def _build_cell(
        self,
        sector_id: str,
        weather: WeatherSample,
        tick: int
    ) -> Tuple[GridCell, AgentDecision]:
        """Fuse one sector. Reads cross-tick state but does not modify it."""
        bounds = self._layout.bounds(sector_id)
        center = self._layout.center(sector_id)
        south_west = bounds[0]

        mobility = self._mobility_feed.density(
            sector_id, tick, weather.is_day, weather.visibility
        )
        terrain = self._terrain.complexity(south_west.lat, south_west.lng)
        history = self._history.activity(sector_id)
        report_impact = self._state_store.report_impact(sector_id)
        mobility_delta = self._state_store.mobility_delta(sector_id, mobility)

        baseline = self._detector.compute_baseline(history)
        z_score = self._detector.z_score(mobility, baseline)

        decision = self._agent.decide(AgentInput(
            sector_id=sector_id,
            weather=weather,
            mobility=mobility,
            mobility_baseline=baseline,
            mobility_delta=mobility_delta,
            terrain=terrain,
            history=history
        ))

        # The cell score includes report impact; its tier follows that score
        risk_score = self._scorer.score(weather, mobility, terrain, history, report_impact)

        factors = list(decision.factors)
        if report_impact > 0:
            factors.append(VERIFIED_REPORT_FACTOR)

        cell = GridCell(
            sector_id=sector_id,
            bounds=bounds,
            center=center,
            weather_risk=self._scorer.weather_risk(weather),
            terrain_complexity=terrain,
            mobility_density=mobility,
            historical_activity=history,
            report_impact=report_impact,
            mobility_baseline=baseline,
            z_score=z_score,
            risk_score=risk_score,
            threat_level=self._scorer.classify(risk_score),
            anomaly_detected=self._detector.is_anomalous(z_score),
            risk_factors=factors,
            monitor_next=decision.monitor_next,
            last_updated=int(self._clock() * 1000)
        )
        return cell, decision

    # ═══════════════════════════════════════════════════════════════
    # ROUTING
    # ═══════════════════════════════════════════════════════════════

    def plan_route(self, end_id: str, start_id: Optional[str] = None) -> RoutePlan:
        """
        Safest route over the latest snapshot.

        Args:
            end_id: Destination sector
            start_id: Origin sector (headquarters if omitted)

        Returns:
            RoutePlan (``found`` is False when no route exists)

        Raises:
            InvalidSectorError: If either identifier is outside the grid
        """
        start_id = start_id or self._config.grid.hq_sector_id
        self._layout.parse_id(start_id)
        self._layout.parse_id(end_id)

        with self._lock:
            grid = list(self._grid)
            weather = self._weather

        logger.info(f"Calculating route {start_id} -> {end_id}")
        return self._planner.plan_route(grid, start_id, end_id, weather)

    # ═══════════════════════════════════════════════════════════════
    # FIELD REPORTS & CONNECTIVITY
    # ═══════════════════════════════════════════════════════════════

    def submit_report(
        self,
        sector_id: Optional[str] = None,
        report_type: FieldReportType = FieldReportType.SUSPICIOUS_ACTIVITY,
        notes: str = "",
        coordinates: Optional[Coordinates] = None
    ) -> FieldReport:
        """
        File a verified field report.

        Online reports raise the sector's report impact immediately;
        offline reports wait in the outbox until ``sync``.

        Args:
            sector_id: Target sector (headquarters if omitted)
            report_type: Report category
            notes: Free-text notes
            coordinates: Report location (sector center if omitted)

        Returns:
            The filed FieldReport

        Raises:
            InvalidSectorError: If the identifier is outside the grid
        """
        sector_id = sector_id or self._config.grid.hq_sector_id
        self._layout.parse_id(sector_id)

        report = FieldReport(
            report_id=generate_event_id("rpt"),
            sector_id=sector_id,
            report_type=report_type,
            coordinates=coordinates or self._layout.center(sector_id),
            notes=notes
        )

        if self._online:
            self._apply_report(report)
        else:
            with self._lock:
                self._queued_reports.append(report)
            logger.info(f"Offline: report {report.report_id} saved to outbox")

        return report

    def _apply_report(self, report: FieldReport) -> None:
        impact = self._state_store.add_report(report.sector_id)
        cell = self.get_cell(report.sector_id)
        level = cell.threat_level if cell else ThreatLevel.LOW

        self._alert_manager.raise_alert(
            sector_id=report.sector_id,
            level=level,
            alert_type=AlertType.FIELD_REPORT,
            message=f"REPORT RECEIVED: {report.report_type.value} AT SECTOR {report.sector_id}",
            risk_score=cell.risk_score if cell else 0,
            factors=[VERIFIED_REPORT_FACTOR]
        )
        logger.info(
            f"Report {report.report_id} applied to {report.sector_id} "
            f"(impact={impact:.1f})"
        )

    @property
    def queued_reports(self) -> List[FieldReport]:
        with self._lock:
            return list(self._queued_reports)

    def set_online(self, online: bool) -> None:
        """Switch connectivity. Coming back online syncs queued data."""
        self._online = online
        self._alert_manager.set_online(online)
        if online:
            self.sync()

    def sync(self) -> Dict[str, int]:
        """
        Apply queued reports and release queued alerts.

        Returns:
            Counts of synced reports and alerts
        """
        with self._lock:
            reports, self._queued_reports = self._queued_reports, []

        for report in reports:
            self._apply_report(report)
        alerts = self._alert_manager.sync()

        if reports or alerts:
            logger.info(f"Data synced: {len(reports)} reports, {len(alerts)} alerts")
        return {"reports": len(reports), "alerts": len(alerts)}

    # ═══════════════════════════════════════════════════════════════
    # BACKGROUND REFRESH
    # ═══════════════════════════════════════════════════════════════

    def _refresh_loop(self) -> None:
        interval = self._config.pipeline.refresh_rate_ms / 1000.0
        logger.info("Grid refresh loop started")

        while not self._stop_event.is_set():
            try:
                self.tick()
            except Exception as e:
                logger.exception(f"Refresh tick failed: {e}")
            self._stop_event.wait(interval)

        logger.info("Grid refresh loop stopped")

    def start(self) -> None:
        """Start refreshing in a background thread."""
        if self.is_running:
            logger.warning("Grid refresh already running")
            return

        self._stop_event.clear()
        self._thread = threading.Thread(
            target=self._refresh_loop,
            daemon=True,
            name="Sentinel-Refresh"
        )
        self._thread.start()

    def stop(self) -> None:
        """Stop the background refresh."""
        if not self.is_running:
            return

        self._stop_event.set()
        self._thread.join(timeout=2.0)
        self._thread = None

    def get_status(self) -> dict:
        """Pipeline status for the API."""
        with self._lock:
            grid = list(self._grid)
            weather = self._weather
            tick = self._tick

        max_cell = max(grid, key=lambda c: c.risk_score, default=None)
        return {
            "tick": tick,
            "running": self.is_running,
            "online": self._online,
            "sectors": len(grid),
            "anomalies": sum(1 for c in grid if c.anomaly_detected),
            "max_risk_score": max_cell.risk_score if max_cell else 0,
            "max_threat_level": max_cell.threat_level.value if max_cell else ThreatLevel.LOW.value,
            "weather": weather.to_dict() if weather else None,
            "queued_reports": len(self.queued_reports),
            "report_state": self._state_store.get_statistics()
        }

    def __enter__(self):
        self.start()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.stop()
