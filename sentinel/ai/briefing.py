"""
Sentinel Grid - Border Sector Risk Intelligence
Tactical Briefing Module

Builds intelligence-officer prompts from fused sector data and relays
them to Gemini. Every call degrades to a fixed offline answer when no
client is configured or the uplink fails.
"""

import logging
from typing import List, Optional, Sequence

from sentinel.ai.gemini_client import GeminiClient, GeminiError
from sentinel.alerts.alert_types import Alert
from sentinel.grid.grid_cell import GridCell
from sentinel.grid.grid_types import WeatherSample

logger = logging.getLogger(__name__)

OFFLINE_CHAT_MESSAGE = "Offline: AI uplink not established (missing API key)."
CHAT_FAILURE_MESSAGE = "Uplink error. Unable to process tactical query."
EMPTY_CHAT_MESSAGE = "Command, please repeat. Signal interference."

CHAT_RISK_CUTOFF = 50
CHAT_ALERT_COUNT = 5
NORMAL_MOBILITY = 20


def offline_report(cell: GridCell, weather: WeatherSample) -> str:
    """Heuristic markdown briefing used without a live model."""
    light = "Daylight" if weather.is_day else "Night"
    factors = ", ".join(cell.risk_factors) or "None"
    return (
        f"## Offline Assessment: Sector {cell.sector_id}\n"
        f"- **Threat Level**: {cell.threat_level.value}\n"
        f"- **Risk Score**: {cell.risk_score}/100\n"
        f"- **Mobility**: {cell.mobility_density:.1f}% (normal ~{NORMAL_MOBILITY}%)\n"
        f"- **Conditions**: {light}, visibility {weather.visibility:.0f}m\n"
        f"- **Factors**: {factors}\n"
        f"- **Recommendation**: {cell.monitor_next or 'Maintain standard patrol.'}\n"
    )


class BriefingService:
    """
    Tactical briefing generator.

    Example:
        >>> service = BriefingService()            # offline
        >>> print(service.strategic_report(cell, weather))
    """

    def __init__(self, client: Optional[GeminiClient] = None):
        self._client = client
        logger.info(
            f"BriefingService initialized ({'live' if client else 'offline'})"
        )

    @classmethod
    def from_env(cls) -> "BriefingService":
        """Build a live service if GEMINI_API_KEY is set, offline otherwise."""
        try:
            return cls(GeminiClient())
        except GeminiError as e:
            logger.warning(f"Gemini unavailable, briefings offline: {e}")
            return cls()

    @property
    def is_live(self) -> bool:
        return self._client is not None

    def strategic_report(self, cell: GridCell, weather: WeatherSample) -> str:
        """
        Predictive threat assessment for one sector.

        Args:
            cell: Sector record
            weather: Current weather

        Returns:
            Markdown briefing
        """
        if self._client is None:
            return offline_report(cell, weather)

        light = "daylight" if weather.is_day else "low light"
        prompt = (
            "Act as a senior military intelligence officer and give a predictive "
            "threat assessment for one border sector.\n\n"
            "SECTOR DATA (FUSED SOURCES):\n"
            f"- ID: {cell.sector_id}\n"
            f"- Threat Level: {cell.threat_level.value} (Score: {cell.risk_score}/100)\n"
            f"- Mobility: {cell.mobility_density:.1f}% (normal ~{NORMAL_MOBILITY}%)\n"
            f"- Terrain Difficulty: {cell.terrain_complexity:.0f}%\n"
            f"- Historical Conflict: {cell.historical_activity:.0f}%\n\n"
            "LIVE WEATHER:\n"
            f"- Visibility: {weather.visibility:.0f}m\n"
            f"- Condition: {'Daylight' if weather.is_day else 'Night'}\n"
            f"- Wind: {weather.wind_speed} km/h\n\n"
            "ANALYSIS REQUIRED:\n"
            f"1. Probability of an infiltration attempt in the next 2 hours under {light}.\n"
            "2. Whether terrain and weather together favor the adversary.\n"
            f"3. Two specific actions for sector {cell.sector_id}.\n\n"
            "Format as a brief tactical briefing in Markdown."
        )

        try:
            response = self._client.generate(prompt)
        except GeminiError as e:
            logger.error(f"Strategic report for {cell.sector_id} failed: {e}")
            return offline_report(cell, weather)

        return response.text or offline_report(cell, weather)

    def commander_chat(
        self,
        query: str,
        grid: Sequence[GridCell],
        weather: WeatherSample,
        alerts: Sequence[Alert]
    ) -> str:
        """
        Answer a commander's question against the current situation.

        Only sectors above the risk cutoff and the most recent alerts are
        sent as context.
        """
        if self._client is None:
            return OFFLINE_CHAT_MESSAGE

        try:
            response = self._client.generate(
                query, system_prompt=self.build_sitrep(grid, weather, alerts)
            )
        except GeminiError as e:
            logger.error(f"Commander chat failed: {e}")
            return CHAT_FAILURE_MESSAGE

        return response.text or EMPTY_CHAT_MESSAGE

    @staticmethod
    def build_sitrep(
        grid: Sequence[GridCell],
        weather: WeatherSample,
        alerts: Sequence[Alert]
    ) -> str:
        """System instruction carrying the situation report."""
        hot: List[str] = [
            f"Sector {c.sector_id}: Risk {c.risk_score}, "
            f"Mobility {c.mobility_density:.0f}%, Factors: {', '.join(c.risk_factors)}"
            for c in grid
            if c.risk_score > CHAT_RISK_CUTOFF
        ]
        recent = [
            f"[{a.timestamp.strftime('%H:%M:%S')}] {a.level.value}: {a.message}"
            for a in list(alerts)[:CHAT_ALERT_COUNT]
        ]

        return (
            "You are the tactical assistant for a border sector defense grid. "
            "Your user is a sector commander. Answer briefly in military terms.\n\n"
            "SITREP:\n"
            f"- Weather: {'Day' if weather.is_day else 'Night'}, "
            f"visibility {weather.visibility:.0f}m, wind {weather.wind_speed} km/h\n"
            "- Active alerts:\n"
            f"{chr(10).join(recent) or 'None'}\n\n"
            f"CRITICAL SECTORS (risk > {CHAT_RISK_CUTOFF}):\n"
            f"{chr(10).join(hot) or 'All sectors currently nominal.'}\n\n"
            "If asked about hotspots, list the top 3 sectors by risk. "
            "If asked why, explain using the listed factors."
        )
