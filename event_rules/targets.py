"""Concrete rule targets for SQS queues, SNS topics and event buses."""

from typing import TYPE_CHECKING

from aws_cdk import Stack
from aws_cdk import aws_events as events
from aws_cdk import aws_iam as iam
from aws_cdk import aws_sns as sns
from aws_cdk import aws_sqs as sqs

from .constants import EVENTS_SERVICE_PRINCIPAL, PUT_EVENTS_ACTION
from .target import RuleTargetConfig, RuleTargetInput
from .util import same_env_dimension

if TYPE_CHECKING:
    from .rule import Rule


def _events_principal_for(rule: "Rule", queue: sqs.IQueue) -> iam.ServicePrincipal | None:
    """
    Events service principal restricted to messages sent on behalf of ``rule``.

    None when the queue is in another environment; the mirror rule created
    next to the queue binds the target again and grants access there.
    """
    if not (
        same_env_dimension(rule.env.account, queue.env.account)
        and same_env_dimension(rule.env.region, queue.env.region)
    ):
        return None

    rule_stack = Stack.of(rule)
    if rule_stack is Stack.of(queue):
        return iam.ServicePrincipal(
            EVENTS_SERVICE_PRINCIPAL,
            conditions={"ArnEquals": {"aws:SourceArn": rule.rule_arn}},
        )

    # the rule stack already references the queue, so the queue policy cannot
    # reference the rule back; allow rules of the same account and region
    return iam.ServicePrincipal(
        EVENTS_SERVICE_PRINCIPAL,
        conditions={
            "ArnLike": {
                "aws:SourceArn": Stack.of(queue).format_arn(
                    service="events",
                    resource="rule",
                    resource_name="*",
                    account=rule_stack.account,
                    region=rule_stack.region,
                )
            }
        },
    )


class SqsQueueTarget:
    """
    Deliver matched events to an SQS queue.

    The queue policy is extended so EventBridge may send messages to it.
    FIFO queues need ``message_group_id``.
    """

    def __init__(
        self,
        queue: sqs.IQueue,
        *,
        message_group_id: str | None = None,
        input: RuleTargetInput | None = None,
        dead_letter_queue: sqs.IQueue | None = None,
        retry_attempts: int | None = None,
    ) -> None:
        self.queue = queue
        self.message_group_id = message_group_id
        self.input = input
        self.dead_letter_queue = dead_letter_queue
        self.retry_attempts = retry_attempts

    def bind(self, rule: "Rule", target_id: str | None = None) -> RuleTargetConfig:
        principal = _events_principal_for(rule, self.queue)
        if principal is not None:
            self.queue.grant_send_messages(principal)

        return RuleTargetConfig(
            arn=self.queue.queue_arn,
            target_resource=self.queue,
            input=self.input,
            sqs_parameters=(
                events.CfnRule.SqsParametersProperty(message_group_id=self.message_group_id)
                if self.message_group_id
                else None
            ),
            dead_letter_config=(
                events.CfnRule.DeadLetterConfigProperty(arn=self.dead_letter_queue.queue_arn)
                if self.dead_letter_queue
                else None
            ),
            retry_policy=(
                events.CfnRule.RetryPolicyProperty(maximum_retry_attempts=self.retry_attempts)
                if self.retry_attempts is not None
                else None
            ),
        )


class SnsTopicTarget:
    """Publish matched events to an SNS topic."""

    def __init__(self, topic: sns.ITopic, *, input: RuleTargetInput | None = None) -> None:
        self.topic = topic
        self.input = input

    def bind(self, rule: "Rule", target_id: str | None = None) -> RuleTargetConfig:
        self.topic.grant_publish(iam.ServicePrincipal(EVENTS_SERVICE_PRINCIPAL))

        return RuleTargetConfig(
            arn=self.topic.topic_arn,
            target_resource=self.topic,
            input=self.input,
        )


class EventBusTarget:
    """
    Forward matched events to another event bus.

    No owning resource is reported, so the bus is always attached to the
    rule directly. If a role is given it is allowed to put events on the bus.
    """

    def __init__(self, event_bus: events.IEventBus, *, role: iam.IRole | None = None) -> None:
        self.event_bus = event_bus
        self.role = role

    def bind(self, rule: "Rule", target_id: str | None = None) -> RuleTargetConfig:
        if self.role is not None:
            self.role.add_to_principal_policy(
                iam.PolicyStatement(
                    actions=[PUT_EVENTS_ACTION],
                    resources=[self.event_bus.event_bus_arn],
                )
            )

        return RuleTargetConfig(arn=self.event_bus.event_bus_arn, role=self.role)
