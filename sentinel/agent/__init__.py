"""
Sentinel Grid - Border Sector Risk Intelligence
Agent Module

Autonomous, explainable per-sector alert decisions.
"""

from sentinel.agent.agent_types import (
    PriorityContext,
    AgentInput,
    AgentDecision,
    DecisionFacts,
    DecisionRule,
    RuleGroup
)
from sentinel.agent.decision_agent import (
    AutonomousAgent,
    build_rule_table,
    ADVISORIES,
    AMBUSH_ZONE_ADVISORY,
    DEFAULT_ADVISORY
)

__all__ = [
    "PriorityContext",
    "AgentInput",
    "AgentDecision",
    "DecisionFacts",
    "DecisionRule",
    "RuleGroup",
    "AutonomousAgent",
    "build_rule_table",
    "ADVISORIES",
    "AMBUSH_ZONE_ADVISORY",
    "DEFAULT_ADVISORY",
]
