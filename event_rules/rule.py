"""
EventBridge rule construct with cross-account and cross-region targets.

A rule matches events by pattern or schedule and sends them to targets.
Targets owned by a stack in the rule's own environment are attached
directly. A target owned by a stack in another account or region is
handled differently:

- the rule sends events to the default event bus of the target environment
- cross-account: a support stack adds a policy on that bus allowing the
  source account to put events, and deploys before the rule's stack
- cross-region: a role on the rule is allowed to put events on that bus
- a mirror rule, created in the target's stack, replays the rule's pattern
  and schedule against the actual target

See https://docs.aws.amazon.com/eventbridge/latest/userguide/eb-cross-account.html

Usage:
    rule = Rule(source_stack, "Nightly", schedule=Schedule.rate(Duration.days(1)))
    rule.add_target(SqsQueueTarget(queue_in_other_account))
"""

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Any

import jsii
from aws_cdk import (
    Annotations,
    App,
    ArnFormat,
    Environment,
    IResource,
    Names,
    PhysicalName,
    Resource,
    Stack,
    Token,
)
from aws_cdk import aws_events as events
from aws_cdk import aws_iam as iam
from constructs import Construct, IValidation

from .constants import (
    CRON_MINUTES_NOT_SET_WARNING_ID,
    DEFAULT_EVENT_BUS_NAME,
    EVENT_BUS_POLICY_RESOURCE_ID,
    EVENT_BUS_POLICY_STACK_PREFIX,
    EVENTS_ROLE_ID,
    EVENTS_SERVICE_PRINCIPAL,
    PUT_EVENTS_ACTION,
    RULE_RESOURCE_ID,
    STATE_DISABLED,
    STATE_ENABLED,
)
from .event_pattern import EventPattern
from .schedule import Schedule
from .target import IRuleTarget
from .util import merge_event_pattern, render_event_pattern, same_env_dimension

logger = logging.getLogger(__name__)


@jsii.implements(IValidation)
class _RuleValidation:
    def __init__(self, rule: "Rule") -> None:
        self._rule = rule

    def validate(self) -> list[str]:
        return self._rule._validate()


@dataclass
class _OwnPattern:
    """Pattern built up on the rule itself."""

    event_pattern: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class _MirroredPattern:
    """Pattern owned by another rule and rendered from it."""

    source: "Rule"


class ImportedRule(Resource):
    """A rule defined outside this app, referenced by ARN."""

    def __init__(self, scope: Construct, construct_id: str, event_rule_arn: str) -> None:
        super().__init__(scope, construct_id, environment_from_arn=event_rule_arn)

        parts = Stack.of(scope).split_arn(event_rule_arn, ArnFormat.SLASH_RESOURCE_NAME)
        self.rule_arn = event_rule_arn
        self.rule_name = parts.resource_name or ""


class Rule(Resource):
    """
    Defines an EventBridge rule (``AWS::Events::Rule``) in this stack.

    Either an event pattern or a schedule must be defined by synthesis time.
    The pattern can be extended with ``add_event_pattern`` and targets added
    with ``add_target``.

    Attributes:
        rule_arn: ARN of the rule.
        rule_name: Name of the rule.
    """

    def __init__(
        self,
        scope: Construct,
        construct_id: str,
        *,
        description: str | None = None,
        rule_name: str | None = None,
        enabled: bool | None = None,
        schedule: Schedule | None = None,
        event_pattern: EventPattern | None = None,
        targets: Sequence[IRuleTarget] | None = None,
        event_bus: events.IEventBus | None = None,
        _mirror_of: "Rule | None" = None,
    ) -> None:
        """
        Initialize the Rule.

        Args:
            scope: Construct scope, usually a stack.
            construct_id: Unique identifier within the scope.
            description: Description of the rule's purpose.
            rule_name: Physical name; generated by CloudFormation if None.
            enabled: Whether the rule is enabled (default True).
            schedule: Schedule or rate that triggers the rule.
            event_pattern: Pattern of events the rule matches.
            targets: Targets invoked when the rule matches.
            event_bus: Event bus the rule is associated with (default bus if None).

        Raises:
            ValueError: If both ``event_bus`` and ``schedule`` are given.
        """
        super().__init__(scope, construct_id, physical_name=rule_name)

        if event_bus is not None and schedule is not None:
            raise ValueError("Cannot associate rule with 'eventBus' when using 'schedule'")

        if schedule is not None and schedule.minute_undefined_warning:
            Annotations.of(self).add_warning_v2(
                CRON_MINUTES_NOT_SET_WARNING_ID, schedule.minute_undefined_warning
            )

        self._description = description
        self._schedule_expression = schedule.expression_string if schedule else None
        self._targets: list[events.CfnRule.TargetProperty] = []
        # target "account:region" keys whose event bus is already wired up
        self._xenv_targets_added: set[str] = set()
        # rules in other environments that replay this rule's pattern
        self._mirrors: list[Rule] = []
        self._pattern: _OwnPattern | _MirroredPattern = (
            _MirroredPattern(_mirror_of) if _mirror_of is not None else _OwnPattern()
        )

        self._resource = events.CfnRule(
            self,
            RULE_RESOURCE_ID,
            name=self._physical_name,
            description=description,
            state=STATE_DISABLED if enabled is False else STATE_ENABLED,
            schedule_expression=self._schedule_expression,
            event_bus_name=event_bus.event_bus_name if event_bus else None,
        )

        self.rule_arn = self._get_resource_arn_attribute(
            self._resource.attr_arn,
            service="events",
            resource="rule",
            resource_name=self._physical_name,
        )
        self.rule_name = self._get_resource_name_attribute(self._resource.ref)

        self.node.add_validation(_RuleValidation(self))

        if _mirror_of is not None:
            _mirror_of._mirrors.append(self)
            self._sync_event_pattern()
        else:
            self.add_event_pattern(event_pattern)

        for target in targets or []:
            self.add_target(target)

    @staticmethod
    def from_event_rule_arn(scope: Construct, construct_id: str, event_rule_arn: str) -> ImportedRule:
        """
        Import an existing rule by ARN.

        Args:
            scope: Parent construct.
            construct_id: Construct id for the import.
            event_rule_arn: ARN like ``arn:aws:events:<region>:<account>:rule/MyRule``.
        """
        return ImportedRule(scope, construct_id, event_rule_arn)

    @property
    def is_mirror(self) -> bool:
        """True if this rule replays the pattern of another rule."""
        return isinstance(self._pattern, _MirroredPattern)

    def add_event_pattern(self, event_pattern: EventPattern | None) -> None:
        """
        Add an event pattern filter to this rule.

        Values are merged into any pattern already defined: lists are
        concatenated and nested ``detail`` objects merged.
        """
        if event_pattern is None:
            return
        if isinstance(self._pattern, _MirroredPattern):
            # rendered from the source rule
            return
        merge_event_pattern(self._pattern.event_pattern, event_pattern.to_dict())
        self._sync_event_pattern()

    def add_target(self, target: IRuleTarget | None) -> None:
        """
        Add a target to the rule.

        No-op if target is None. Targets owned by a stack in a different
        account or region are routed through that environment's default
        event bus and a mirror rule in the target's stack.

        Raises:
            ValueError: If a cross-environment target cannot be wired up.
        """
        if target is None:
            return

        # ids follow the number of targets rendered so far
        auto_generated_id = f"Target{len(self._targets)}"

        target_config = target.bind(self, auto_generated_id)
        input_props = target_config.input.bind(self) if target_config.input else None

        role_arn = target_config.role.role_arn if target_config.role else None
        target_id = target_config.id or auto_generated_id

        target_resource = target_config.target_resource
        if target_resource is not None:
            target_stack = Stack.of(target_resource)
            target_account = target_resource.env.account or target_stack.account
            target_region = target_resource.env.region or target_stack.region

            source_stack = Stack.of(self)
            if not same_env_dimension(
                source_stack.account, target_account
            ) or not same_env_dimension(source_stack.region, target_region):
                self._add_cross_env_target(
                    target, target_resource, target_stack, target_account, target_region, target_id
                )
                return

        logger.debug("Attaching target %s to rule %s", target_id, self.node.path)
        self._targets.append(
            events.CfnRule.TargetProperty(
                id=target_id,
                arn=target_config.arn,
                role_arn=role_arn,
                ecs_parameters=target_config.ecs_parameters,
                http_parameters=target_config.http_parameters,
                kinesis_parameters=target_config.kinesis_parameters,
                run_command_parameters=target_config.run_command_parameters,
                batch_parameters=target_config.batch_parameters,
                dead_letter_config=target_config.dead_letter_config,
                retry_policy=target_config.retry_policy,
                sqs_parameters=target_config.sqs_parameters,
                input=input_props.input if input_props else None,
                input_path=input_props.input_path if input_props else None,
                input_transformer=(
                    events.CfnRule.InputTransformerProperty(
                        input_template=input_props.input_template,
                        input_paths_map=input_props.input_paths_map,
                    )
                    if input_props is not None and input_props.input_template is not None
                    else None
                ),
            )
        )
        self._sync_targets()

    def _add_cross_env_target(
        self,
        target: IRuleTarget,
        target_resource: IResource,
        target_stack: Stack,
        target_account: str,
        target_region: str,
        target_id: str,
    ) -> None:
        if not target_account or Token.is_unresolved(target_account):
            raise ValueError(
                "You need to provide a concrete account for the target stack when using "
                "cross-account or cross-region events"
            )
        if not target_region or Token.is_unresolved(target_region):
            raise ValueError(
                "You need to provide a concrete region for the target stack when using "
                "cross-account or cross-region events"
            )
        if Token.is_unresolved(Stack.of(self).account):
            raise ValueError(
                "You need to provide a concrete account for the source stack when using "
                "cross-account or cross-region events"
            )

        source_app = self.node.root
        if not App.is_app(source_app):
            raise ValueError(
                "Event stack which uses cross-account or cross-region targets must be part of a CDK app"
            )
        target_app = target_resource.node.root
        if not App.is_app(target_app):
            raise ValueError(
                "Target stack which uses cross-account or cross-region event targets must be part "
                "of a CDK app"
            )
        if source_app is not target_app:
            raise ValueError("Event stack and target stack must belong to the same CDK app")

        logger.debug(
            "Routing target %s of rule %s through %s/%s",
            target_id,
            self.node.path,
            target_account,
            target_region,
        )

        # the mirror rule lives next to the real target and renders this rule's pattern
        mirror_rule_scope = self._obtain_mirror_rule_scope(target_stack, target_account, target_region)

        # the rule itself targets the default event bus of the target environment
        self._ensure_xenv_target_event_bus(target_stack, target_account, target_region, target_id)

        Rule(
            mirror_rule_scope,
            f"{Names.unique_id(self)}-{target_id}",
            targets=[target],
            schedule=(
                Schedule.expression(self._schedule_expression) if self._schedule_expression else None
            ),
            description=self._description,
            _mirror_of=self,
        )

    def _ensure_xenv_target_event_bus(
        self, target_stack: Stack, target_account: str, target_region: str, target_id: str
    ) -> None:
        """
        Target the default event bus of another environment, once per account and region.

        Cross-region delivery needs a role allowed to put events on the bus.
        Cross-account delivery needs a policy on the bus, which must exist
        before the rule is created, so it goes in a support stack the rule's
        stack depends on.
        """
        key = f"{target_account}:{target_region}"
        if key in self._xenv_targets_added:
            return
        self._xenv_targets_added.add(key)

        source_stack = Stack.of(self)
        event_bus_arn = target_stack.format_arn(
            service="events",
            resource="event-bus",
            resource_name=DEFAULT_EVENT_BUS_NAME,
            region=target_region,
            account=target_account,
        )

        role_arn = None
        if not same_env_dimension(target_region, source_stack.region):
            role_arn = self._cross_region_put_events_role(event_bus_arn).role_arn

        self._targets.append(
            events.CfnRule.TargetProperty(id=target_id, arn=event_bus_arn, role_arn=role_arn)
        )
        self._sync_targets()

        source_account = source_stack.account
        if same_env_dimension(source_account, target_account):
            return

        source_app = self.node.root
        stack_id = f"{EVENT_BUS_POLICY_STACK_PREFIX}-{source_account}-{target_region}-{target_account}"
        event_bus_policy_stack = source_app.node.try_find_child(stack_id)
        if event_bus_policy_stack is None:
            logger.info(
                "Creating event bus policy stack %s for account %s", stack_id, source_account
            )
            event_bus_policy_stack = Stack(
                source_app,
                stack_id,
                env=Environment(account=target_account, region=target_region),
                stack_name=(
                    f"{target_stack.stack_name}-{EVENT_BUS_POLICY_STACK_PREFIX}-support-"
                    f"{target_region}-{source_account}"
                ),
            )
            events.CfnEventBusPolicy(
                event_bus_policy_stack,
                EVENT_BUS_POLICY_RESOURCE_ID,
                action=PUT_EVENTS_ACTION,
                statement_id=f"Allow-account-{source_account}",
                principal=source_account,
            )

        # the bus policy has to be deployed before the rule that targets the bus
        source_stack.add_dependency(event_bus_policy_stack)

    def _obtain_mirror_rule_scope(
        self, target_stack: Stack, target_account: str, target_region: str
    ) -> Construct:
        """
        Return the scope for the mirror rule of a cross-environment target.

        This is the target's own stack when the target is defined in it.
        Imported resources would need a fresh support stack in the target
        environment, which is not supported.
        """
        if same_env_dimension(target_stack.account, target_account) and same_env_dimension(
            target_stack.region, target_region
        ):
            return target_stack

        raise ValueError(
            "Cannot create a cross-account or cross-region rule for an imported resource "
            "(create a stack with the right environment for the imported resource)"
        )

    def _cross_region_put_events_role(self, event_bus_arn: str) -> iam.IRole:
        """Return the rule's events role, creating it on first use, allowed to put events on the bus."""
        role = self.node.try_find_child(EVENTS_ROLE_ID)
        if role is None:
            role = iam.Role(
                self,
                EVENTS_ROLE_ID,
                role_name=PhysicalName.GENERATE_IF_NEEDED,
                assumed_by=iam.ServicePrincipal(EVENTS_SERVICE_PRINCIPAL),
            )

        role.add_to_principal_policy(
            iam.PolicyStatement(actions=[PUT_EVENTS_ACTION], resources=[event_bus_arn])
        )
        return role

    def _render_event_pattern(self) -> dict[str, Any] | None:
        if isinstance(self._pattern, _MirroredPattern):
            return self._pattern.source._render_event_pattern()
        return render_event_pattern(self._pattern.event_pattern)

    def _render_targets(self) -> list[events.CfnRule.TargetProperty] | None:
        if not self._targets:
            return None
        return list(self._targets)

    def _sync_event_pattern(self) -> None:
        """Write the rendered pattern to the resource and to every mirror of this rule."""
        self._resource.event_pattern = self._render_event_pattern()
        for mirror in self._mirrors:
            mirror._sync_event_pattern()

    def _sync_targets(self) -> None:
        self._resource.targets = self._render_targets()

    def _validate(self) -> list[str]:
        # a mirror rule renders the source's pattern, which the source validates
        if isinstance(self._pattern, _MirroredPattern):
            return []
        if not self._pattern.event_pattern and not self._schedule_expression:
            return ["Either 'eventPattern' or 'schedule' must be defined"]
        return []
