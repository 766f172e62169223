"""
Sentinel Grid - Border Sector Risk Intelligence
Agent Module - Shared Types

Inputs, outputs and rule definitions for the Autonomous Decision Agent.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional, Tuple

from sentinel.grid.grid_types import WeatherSample
from sentinel.risk.risk_types import ThreatLevel


class PriorityContext(Enum):
    """
    The single tag that selects the tactical advisory for a decision.

    Attributes:
        NORMAL: No specific rule fired
        VISIBILITY: Degraded visibility
        MOVEMENT: Rapid change in activity
        BORDER_INFILTRATION: Suspicious movement in a border sector
        ANOMALY: Statistically abnormal grouping
        CROWD: High crowd density
    """
    NORMAL = "NORMAL"
    VISIBILITY = "VISIBILITY"
    MOVEMENT = "MOVEMENT"
    BORDER_INFILTRATION = "BORDER_INFILTRATION"
    ANOMALY = "ANOMALY"
    CROWD = "CROWD"


@dataclass(frozen=True)
class AgentInput:
    """
    Per-sector input for one decision.

    Attributes:
        sector_id: Sector identifier
        weather: Current weather sample
        mobility: Movement density (0-100)
        mobility_baseline: Expected movement density
        mobility_delta: Absolute change in mobility since the previous tick
        terrain: Terrain complexity (0-100)
        history: Historical incident density (0-100)
    """
    sector_id: str
    weather: WeatherSample
    mobility: float
    mobility_baseline: float
    mobility_delta: float
    terrain: float
    history: float


@dataclass(frozen=True)
class DecisionFacts:
    """Derived facts the decision rules are evaluated against."""
    input: AgentInput
    is_border: bool
    is_anomalous: bool


@dataclass(frozen=True)
class DecisionRule:
    """
    One explanatory rule.

    When the predicate matches, ``factor`` is appended to the factor list
    and, if ``context`` is set, it replaces the current priority context.

    Attributes:
        name: Rule identifier
        factor: Factor tag emitted when the rule fires
        predicate: Test against DecisionFacts
        context: Priority context this rule claims (None leaves it unchanged)
    """
    name: str
    factor: str
    predicate: Callable[[DecisionFacts], bool]
    context: Optional[PriorityContext] = None


@dataclass(frozen=True)
class RuleGroup:
    """
    Mutually exclusive rules; the first matching rule in the group fires.
    """
    rules: Tuple[DecisionRule, ...]

    def first_match(self, facts: DecisionFacts) -> Optional[DecisionRule]:
        for rule in self.rules:
            if rule.predicate(facts):
                return rule
        return None


@dataclass(frozen=True)
class AgentDecision:
    """
    Immutable output of one agent evaluation.

    Attributes:
        sector_id: Sector identifier
        risk_score: Fused risk score (0-100, without report impact)
        risk_level: Capitalized tier name (e.g. "High")
        factors: Ordered explanatory tags
        monitor_next: Tactical next action
        alert: Whether the sector warrants an alert
        timestamp: Epoch milliseconds
        confidence: Decision confidence in [0.75, 0.99]
        threat_level: Tier enumeration behind risk_level
        z_score: Mobility deviation used for the anomaly check
        is_anomalous: Whether mobility was anomalous
        priority_context: Context that selected monitor_next
    """
    sector_id: str
    risk_score: int
    risk_level: str
    factors: Tuple[str, ...]
    monitor_next: str
    alert: bool
    timestamp: int
    confidence: float
    threat_level: ThreatLevel = ThreatLevel.LOW
    z_score: float = 0.0
    is_anomalous: bool = False
    priority_context: PriorityContext = PriorityContext.NORMAL

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            "sector_id": self.sector_id,
            "risk_score": self.risk_score,
            "risk_level": self.risk_level,
            "factors": list(self.factors),
            "monitor_next": self.monitor_next,
            "alert": self.alert,
            "timestamp": self.timestamp,
            "confidence": self.confidence
        }
