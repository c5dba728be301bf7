"""Constants used across CDK stacks."""

# Stack names - used when deploying with `cdk deploy <name>`
QUEUE_STACK_NAME = "EventTargetQueueStack"
SCHEDULED_RULE_STACK_NAME = "ScheduledRuleStack"

# Resource identifiers
TARGET_QUEUE_ID = "TargetQueue"
SCHEDULED_RULE_ID = "ScheduledRule"

# Default schedule when none is passed via context
DEFAULT_SCHEDULE_EXPRESSION = "rate(10 minutes)"

# CDK context keys - passed via --context flags
CONTEXT_SOURCE_ACCOUNT = "source_account"
CONTEXT_SOURCE_REGION = "source_region"
CONTEXT_TARGET_ACCOUNT = "target_account"
CONTEXT_TARGET_REGION = "target_region"
CONTEXT_SCHEDULE_EXPRESSION = "schedule_expression"
