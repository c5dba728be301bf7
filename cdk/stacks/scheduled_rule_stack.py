"""
CDK stack with a scheduled EventBridge rule targeting an SQS queue.

The queue may live in another account or region. In that case the rule
targets the default event bus of the queue's environment, and synthesis
adds the bus policy support stack and the mirror rule automatically.

Usage:
    cdk deploy ScheduledRuleStack \\
        --context source_account="111111111111" \\
        --context source_region="us-east-1" \\
        --context schedule_expression="rate(10 minutes)"
"""

from aws_cdk import CfnOutput, Stack
from aws_cdk import aws_sqs as sqs
from constructs import Construct

from event_rules import Rule, Schedule, SqsQueueTarget

from .constants import SCHEDULED_RULE_ID


class ScheduledRuleStack(Stack):
    """
    Stack holding a scheduled rule that delivers to a queue.

    Attributes:
        rule: The scheduled rule.
    """

    def __init__(
        self,
        scope: Construct,
        construct_id: str,
        *,
        queue: sqs.IQueue,
        schedule_expression: str,
        **kwargs,
    ) -> None:
        """
        Initialize the ScheduledRuleStack.

        Args:
            scope: CDK app or stage scope.
            construct_id: Unique identifier for this stack.
            queue: Queue receiving the scheduled events.
            schedule_expression: EventBridge schedule, e.g. ``rate(10 minutes)``.
            **kwargs: Additional stack properties (env, etc.).

        Raises:
            ValueError: If schedule_expression is empty.
        """
        super().__init__(scope, construct_id, **kwargs)

        if not schedule_expression or not schedule_expression.strip():
            raise ValueError("schedule_expression cannot be empty")

        self.rule = Rule(
            self,
            SCHEDULED_RULE_ID,
            schedule=Schedule.expression(schedule_expression),
            description=f"Deliver {schedule_expression} ticks to a queue",
        )
        self.rule.add_target(SqsQueueTarget(queue))

        CfnOutput(
            self,
            "RuleArn",
            value=self.rule.rule_arn,
            description="ARN of the scheduled rule",
        )
