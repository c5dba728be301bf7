"""Constants used across the event rule constructs."""

# Service principal that EventBridge uses when delivering to targets
EVENTS_SERVICE_PRINCIPAL = "events.amazonaws.com"

# Action granted on a foreign event bus for cross-environment delivery
PUT_EVENTS_ACTION = "events:PutEvents"

# Every account/region has an event bus with this name
DEFAULT_EVENT_BUS_NAME = "default"

# Construct ids - fixed so repeated lookups find the existing child
RULE_RESOURCE_ID = "Resource"
EVENTS_ROLE_ID = "EventsRole"
EVENT_BUS_POLICY_STACK_PREFIX = "EventBusPolicy"
EVENT_BUS_POLICY_RESOURCE_ID = "GivePermToOtherAccount"

# Rule state values
STATE_ENABLED = "ENABLED"
STATE_DISABLED = "DISABLED"

# Annotation id for cron schedules that leave the minute field open
CRON_MINUTES_NOT_SET_WARNING_ID = "@aws-cdk/aws-events:scheduleWillRunEveryMinute"
