"""
CDK stack for the SQS queue that receives scheduled events.

Deploy this stack in the target account/region. When the rule lives in a
different environment, the mirror rule that delivers into the queue is
added to this stack.

Usage:
    cdk deploy EventTargetQueueStack \\
        --context target_account="222222222222" \\
        --context target_region="us-east-1"
"""

from aws_cdk import CfnOutput, Duration, RemovalPolicy, Stack
from aws_cdk import aws_sqs as sqs
from constructs import Construct

from .constants import TARGET_QUEUE_ID


class QueueStack(Stack):
    """
    Stack owning the queue targeted by the scheduled rule.

    Attributes:
        queue: The SQS queue receiving events.
    """

    def __init__(self, scope: Construct, construct_id: str, **kwargs) -> None:
        """
        Initialize the QueueStack.

        Args:
            scope: CDK app or stage scope.
            construct_id: Unique identifier for this stack.
            **kwargs: Additional stack properties (env, etc.).
        """
        super().__init__(scope, construct_id, **kwargs)

        self.queue = sqs.Queue(
            self,
            TARGET_QUEUE_ID,
            retention_period=Duration.days(4),
            removal_policy=RemovalPolicy.DESTROY,
        )

        CfnOutput(
            self,
            "QueueArn",
            value=self.queue.queue_arn,
            description="ARN of the queue receiving scheduled events",
        )
