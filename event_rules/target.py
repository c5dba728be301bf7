"""
Target descriptors for EventBridge rules.

A target is anything that can be bound to a rule. Binding yields a
``RuleTargetConfig`` describing where events go, which role delivers them,
and the resource that owns the destination (if any). The owning resource
decides whether the target can be attached directly or has to be mirrored
into another account/region.
"""

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Protocol

from aws_cdk import IResource, Stack
from aws_cdk import aws_events as events
from aws_cdk import aws_iam as iam

if TYPE_CHECKING:
    from .rule import Rule


@dataclass(frozen=True)
class RuleTargetInputProperties:
    """Rendered input options for a single target."""

    input: str | None = None
    input_path: str | None = None
    input_template: str | None = None
    input_paths_map: dict[str, str] | None = None


@dataclass(frozen=True)
class RuleTargetInput:
    """
    Input passed to a target instead of the full matched event.

    Build instances with the ``from_*`` factories. ``text`` and ``obj``
    are serialized as JSON against the rule's stack when bound.
    """

    text: Any = None
    input_path: str | None = None
    input_template: str | None = None
    input_paths_map: dict[str, str] | None = None

    @classmethod
    def from_text(cls, text: str) -> "RuleTargetInput":
        """Pass a fixed string to the target."""
        return cls(text=text)

    @classmethod
    def from_object(cls, obj: Any) -> "RuleTargetInput":
        """Pass a JSON object to the target."""
        return cls(text=obj)

    @classmethod
    def from_event_path(cls, path: str) -> "RuleTargetInput":
        """Pass the part of the event selected by a JSONPath, e.g. ``$.detail``."""
        return cls(input_path=path)

    @classmethod
    def from_template(
        cls, template: str, paths_map: dict[str, str] | None = None
    ) -> "RuleTargetInput":
        """Pass a template filled from event fields named in ``paths_map``."""
        return cls(input_template=template, input_paths_map=paths_map)

    def bind(self, rule: "Rule") -> RuleTargetInputProperties:
        return RuleTargetInputProperties(
            input=Stack.of(rule).to_json_string(self.text) if self.text is not None else None,
            input_path=self.input_path,
            input_template=self.input_template,
            input_paths_map=self.input_paths_map,
        )


@dataclass
class RuleTargetConfig:
    """
    Properties a target returns when bound to a rule.

    Attributes:
        arn: ARN of the destination that receives events.
        id: Explicit target id; a generated ``Target<N>`` id is used if None.
        role: Role EventBridge assumes to deliver to the destination.
        target_resource: Resource owning the destination, used to work out
            the destination's account and region.
        input: Input sent to the target instead of the matched event.
    """

    arn: str
    id: str | None = None
    role: iam.IRole | None = None
    target_resource: IResource | None = None
    input: RuleTargetInput | None = None
    ecs_parameters: events.CfnRule.EcsParametersProperty | None = None
    http_parameters: events.CfnRule.HttpParametersProperty | None = None
    kinesis_parameters: events.CfnRule.KinesisParametersProperty | None = None
    run_command_parameters: events.CfnRule.RunCommandParametersProperty | None = None
    batch_parameters: events.CfnRule.BatchParametersProperty | None = None
    dead_letter_config: events.CfnRule.DeadLetterConfigProperty | None = None
    retry_policy: events.CfnRule.RetryPolicyProperty | None = None
    sqs_parameters: events.CfnRule.SqsParametersProperty | None = None


class IRuleTarget(Protocol):
    """Something that can receive events from a rule."""

    def bind(self, rule: "Rule", target_id: str | None = None) -> RuleTargetConfig:
        """Return the target configuration for the given rule."""
        ...
