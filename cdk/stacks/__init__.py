"""CDK stacks for the cross-account scheduled event example."""

from .constants import (
    CONTEXT_SCHEDULE_EXPRESSION,
    CONTEXT_SOURCE_ACCOUNT,
    CONTEXT_SOURCE_REGION,
    CONTEXT_TARGET_ACCOUNT,
    CONTEXT_TARGET_REGION,
    DEFAULT_SCHEDULE_EXPRESSION,
    QUEUE_STACK_NAME,
    SCHEDULED_RULE_STACK_NAME,
)
from .queue_stack import QueueStack
from .scheduled_rule_stack import ScheduledRuleStack

__all__ = [
    # Stacks
    "QueueStack",
    "ScheduledRuleStack",
    # Constants
    "QUEUE_STACK_NAME",
    "SCHEDULED_RULE_STACK_NAME",
    "DEFAULT_SCHEDULE_EXPRESSION",
    "CONTEXT_SOURCE_ACCOUNT",
    "CONTEXT_SOURCE_REGION",
    "CONTEXT_TARGET_ACCOUNT",
    "CONTEXT_TARGET_REGION",
    "CONTEXT_SCHEDULE_EXPRESSION",
]
