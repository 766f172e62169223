"""
Sentinel Grid - Border Sector Risk Intelligence
Autonomous Decision Agent Module

Role: virtual intelligence officer for one sector at a time.

Decision steps:
1. Compute the fused risk score, threat tier and mobility anomaly.
2. Evaluate the ordered rule table to build explanatory factors and a
   single priority context (the last rule that claims a context wins).
3. Map the priority context to a tactical "monitor next" advisory.
4. Decide whether to alert.
5. Estimate confidence, including a small random jitter that expresses
   epistemic uncertainty.
"""

import logging
import random
import time
from typing import Callable, Dict, List, Optional, Tuple

from sentinel.agent.agent_types import (
    AgentDecision,
    AgentInput,
    DecisionFacts,
    DecisionRule,
    PriorityContext,
    RuleGroup
)
from sentinel.config import AgentConfig
from sentinel.grid.sector_context import SectorClassifier
from sentinel.risk.anomaly import AnomalyDetector
from sentinel.risk.risk_engine import CompositeRiskScorer
from sentinel.risk.risk_types import ThreatLevel

# Configure module logger
logger = logging.getLogger(__name__)


ADVISORIES: Dict[PriorityContext, str] = {
    PriorityContext.BORDER_INFILTRATION: "Check fence line & gullies for footprints.",
    PriorityContext.VISIBILITY: "Switch to Thermal/IR. Scan treeline.",
    PriorityContext.MOVEMENT: "Identify vector of movement. Report group size.",
    PriorityContext.ANOMALY: "Investigate grouping pattern. Verify civilian status.",
    PriorityContext.CROWD: "Monitor chokepoints for high-value targets.",
}
AMBUSH_ZONE_ADVISORY = "Maintain vigilance. Known ambush zone."
DEFAULT_ADVISORY = "Scan sector for changes."


def build_rule_table(config: AgentConfig) -> Tuple[RuleGroup, ...]:
    """
    Build the ordered factor rules for the given thresholds.

    Groups are evaluated in order. Within a group only the first
    matching rule fires.

    Args:
        config: Agent thresholds

    Returns:
        Tuple of RuleGroups
    """
    def single(rule: DecisionRule) -> RuleGroup:
        return RuleGroup(rules=(rule,))

    return (
        RuleGroup(rules=(
            DecisionRule(
                name="critical_visibility",
                factor="Critical Low Visibility",
                predicate=lambda f: f.input.weather.visibility < config.critical_visibility,
                context=PriorityContext.VISIBILITY
            ),
            DecisionRule(
                name="low_visibility",
                factor="Low Visibility",
                predicate=lambda f: f.input.weather.visibility < config.low_visibility,
                context=PriorityContext.VISIBILITY
            ),
        )),
        single(DecisionRule(
            name="night",
            factor="Night Ops Conditions",
            predicate=lambda f: not f.input.weather.is_day
        )),
        single(DecisionRule(
            name="high_wind",
            factor="High Wind Interference",
            predicate=lambda f: f.input.weather.wind_speed > config.high_wind
        )),
        single(DecisionRule(
            name="rapid_change",
            factor="Rapid Activity Change",
            predicate=lambda f: f.input.mobility_delta > config.rapid_change_delta,
            context=PriorityContext.MOVEMENT
        )),
        RuleGroup(rules=(
            DecisionRule(
                name="border_movement",
                factor="Border Patch Movement",
                predicate=lambda f: f.is_border and (
                    f.is_anomalous
                    or f.input.mobility_delta > config.border_movement_delta
                ),
                context=PriorityContext.BORDER_INFILTRATION
            ),
            DecisionRule(
                name="abnormal_crowd",
                factor="Abnormal Crowd Pattern",
                predicate=lambda f: f.is_anomalous,
                context=PriorityContext.ANOMALY
            ),
            DecisionRule(
                name="crowd_density",
                factor="High Crowd Density",
                predicate=lambda f: f.input.mobility > config.crowd_density,
                context=PriorityContext.CROWD
            ),
        )),
        single(DecisionRule(
            name="complex_terrain",
            factor="Complex Terrain",
            predicate=lambda f: f.input.terrain > config.complex_terrain
        )),
        single(DecisionRule(
            name="incident_history",
            factor="Historical Incident Zone",
            predicate=lambda f: f.input.history > config.incident_history
        )),
    )


class AutonomousAgent:
    """
    Produces explainable alert decisions for individual sectors.

    The agent holds no per-sector state. Randomness (confidence jitter)
    comes from an injectable source so tests can pin it.

    Example:
        >>> agent = AutonomousAgent(rng=random.Random(7))
        >>> decision = agent.decide(AgentInput(
        ...     sector_id="0-2", weather=weather, mobility=72,
        ...     mobility_baseline=20, mobility_delta=35, terrain=30, history=85
        ... ))
        >>> decision.alert
        True
    """

    def __init__(
        self,
        config: Optional[AgentConfig] = None,
        scorer: Optional[CompositeRiskScorer] = None,
        detector: Optional[AnomalyDetector] = None,
        classifier: Optional[SectorClassifier] = None,
        rng: Optional[random.Random] = None,
        clock: Callable[[], float] = time.time
    ):
        """
        Initialize the agent.

        Args:
            config: Agent thresholds and confidence parameters
            scorer: Composite risk scorer
            detector: Anomaly detector
            classifier: Sector classifier (border rule)
            rng: Source of confidence jitter (anything with ``random()``)
            clock: Time source returning epoch seconds
        """
        self._config = config or AgentConfig()
        self._scorer = scorer or CompositeRiskScorer()
        self._detector = detector or AnomalyDetector()
        self._classifier = classifier or SectorClassifier()
        self._rng = rng or random.Random()
        self._clock = clock
        self._rules = build_rule_table(self._config)

        logger.info(f"AutonomousAgent initialized with {len(self._rules)} rule groups")

    @property
    def config(self) -> AgentConfig:
        return self._config

    @property
    def rules(self) -> Tuple[RuleGroup, ...]:
        return self._rules

    def decide(self, agent_input: AgentInput) -> AgentDecision:
        """
        Evaluate one sector.

        Args:
            agent_input: Sector signals for this tick

        Returns:
            AgentDecision
        """
        risk_score = self._scorer.score(
            agent_input.weather,
            agent_input.mobility,
            agent_input.terrain,
            agent_input.history
        )
        threat_level = self._scorer.classify(risk_score)
        z_score = self._detector.z_score(agent_input.mobility, agent_input.mobility_baseline)
        is_anomalous = self._detector.is_anomalous(z_score)
        is_border = self._classifier.is_border(agent_input.sector_id)

        facts = DecisionFacts(
            input=agent_input,
            is_border=is_border,
            is_anomalous=is_anomalous
        )
        factors, context = self._evaluate_rules(facts)
        monitor_next = self._advise(context, agent_input.history)
        alert = self._should_alert(threat_level, is_anomalous, is_border, agent_input.mobility_delta)
        confidence = self._confidence(bool(factors), is_anomalous)

        decision = AgentDecision(
            sector_id=agent_input.sector_id,
            risk_score=risk_score,
            risk_level=threat_level.display_name,
            factors=tuple(factors),
            monitor_next=monitor_next,
            alert=alert,
            timestamp=int(self._clock() * 1000),
            confidence=confidence,
            threat_level=threat_level,
            z_score=z_score,
            is_anomalous=is_anomalous,
            priority_context=context
        )

        logger.debug(
            f"Sector {agent_input.sector_id}: score={risk_score} "
            f"level={threat_level.value} z={z_score} context={context.value} "
            f"alert={alert}"
        )
        return decision

    def _evaluate_rules(self, facts: DecisionFacts) -> Tuple[List[str], PriorityContext]:
        """Run the rule table; later context-claiming rules overwrite earlier ones."""
        factors: List[str] = []
        context = PriorityContext.NORMAL

        for group in self._rules:
            rule = group.first_match(facts)
            if rule is None:
                continue
            factors.append(rule.factor)
            if rule.context is not None:
                context = rule.context

        return factors, context

    def _advise(self, context: PriorityContext, history: float) -> str:
        if context in ADVISORIES:
            return ADVISORIES[context]
        if history > self._config.ambush_history:
            return AMBUSH_ZONE_ADVISORY
        return DEFAULT_ADVISORY

    def _should_alert(
        self,
        threat_level: ThreatLevel,
        is_anomalous: bool,
        is_border: bool,
        mobility_delta: float
    ) -> bool:
        """
        Alert on HIGH/CRITICAL, on MEDIUM with an anomaly, or on sudden
        border movement regardless of tier.
        """
        if threat_level.is_concerning:
            return True
        if threat_level == ThreatLevel.MEDIUM and is_anomalous:
            return True
        return is_border and mobility_delta > self._config.border_alert_delta

    def _confidence(self, has_factors: bool, is_anomalous: bool) -> float:
        cfg = self._config
        clarity = cfg.confidence_step if has_factors else -cfg.confidence_step
        if is_anomalous:
            clarity += cfg.confidence_step

        jitter = self._rng.random() * cfg.confidence_jitter
        raw = cfg.confidence_base + clarity + jitter
        return round(min(cfg.confidence_max, max(cfg.confidence_min, raw)), 2)

    def __repr__(self) -> str:
        return f"AutonomousAgent(rule_groups={len(self._rules)})"
