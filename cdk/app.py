#!/usr/bin/env python3
"""
CDK app for the cross-account scheduled event example.

This app defines two stacks, usually in different environments:

    EventTargetQueueStack - SQS queue in the target account/region
    ScheduledRuleStack    - scheduled rule in the source account/region

When the environments differ, synthesis also produces an
EventBusPolicy-<source account>-<target region>-<target account> support
stack, deployed before ScheduledRuleStack.

Usage:
    cdk deploy --all \\
        --context source_account="111111111111" \\
        --context source_region="us-east-1" \\
        --context target_account="222222222222" \\
        --context target_region="us-east-1"
"""

import os

import aws_cdk as cdk
from stacks import (
    CONTEXT_SCHEDULE_EXPRESSION,
    CONTEXT_SOURCE_ACCOUNT,
    CONTEXT_SOURCE_REGION,
    CONTEXT_TARGET_ACCOUNT,
    CONTEXT_TARGET_REGION,
    DEFAULT_SCHEDULE_EXPRESSION,
    QUEUE_STACK_NAME,
    SCHEDULED_RULE_STACK_NAME,
    QueueStack,
    ScheduledRuleStack,
)

app = cdk.App()

# Fall back to the CDK CLI's resolved account/region when context is not given
default_account = os.environ.get("CDK_DEFAULT_ACCOUNT")
default_region = os.environ.get("CDK_DEFAULT_REGION")

source_env = cdk.Environment(
    account=app.node.try_get_context(CONTEXT_SOURCE_ACCOUNT) or default_account,
    region=app.node.try_get_context(CONTEXT_SOURCE_REGION) or default_region,
)
target_env = cdk.Environment(
    account=app.node.try_get_context(CONTEXT_TARGET_ACCOUNT) or default_account,
    region=app.node.try_get_context(CONTEXT_TARGET_REGION) or default_region,
)
schedule_expression = (
    app.node.try_get_context(CONTEXT_SCHEDULE_EXPRESSION) or DEFAULT_SCHEDULE_EXPRESSION
)

queue_stack = QueueStack(app, QUEUE_STACK_NAME, env=target_env)

ScheduledRuleStack(
    app,
    SCHEDULED_RULE_STACK_NAME,
    queue=queue_stack.queue,
    schedule_expression=schedule_expression,
    env=source_env,
)

app.synth()
