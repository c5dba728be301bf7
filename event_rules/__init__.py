"""EventBridge rule constructs with cross-account and cross-region target support."""

from .event_pattern import EventPattern
from .rule import ImportedRule, Rule
from .schedule import Schedule
from .target import IRuleTarget, RuleTargetConfig, RuleTargetInput, RuleTargetInputProperties
from .targets import EventBusTarget, SnsTopicTarget, SqsQueueTarget
from .util import merge_event_pattern, render_event_pattern, same_env_dimension

__all__ = [
    # Constructs
    "Rule",
    "ImportedRule",
    # Rule configuration
    "EventPattern",
    "Schedule",
    # Targets
    "IRuleTarget",
    "RuleTargetConfig",
    "RuleTargetInput",
    "RuleTargetInputProperties",
    "SqsQueueTarget",
    "SnsTopicTarget",
    "EventBusTarget",
    # Helpers
    "merge_event_pattern",
    "render_event_pattern",
    "same_env_dimension",
]
