"""The ServiceBinding resource of the servicebinding.io group."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import datetime

from .apis import (
    Condition,
    ConditionSet,
    ConditionStatus,
    FieldError,
    LocalObjectReference,
    ObjectMeta,
    Reference,
    Status,
    err_missing_field,
    new_living_condition_set,
)
from .labsinternal import (
    SERVICE_BINDING_PROJECTION_CONDITION_READY,
    EnvVar,
    ServiceBindingProjection,
    WorkloadReference,
    validate_env,
    validate_workload,
)
from .meta import GroupKind, GroupResource, GroupVersion, GroupVersionKind, Scheme

GROUP_NAME = "servicebinding.io"
SERVICE_BINDING_LABEL_KEY = GROUP_NAME + "/servicebinding"
SERVICE_BINDING_ANNOTATION_KEY = GROUP_NAME + "/service-binding"
SCHEME_GROUP_VERSION = GroupVersion(GROUP_NAME, "v1alpha3")

SERVICE_BINDING_CONDITION_READY = "Ready"
SERVICE_BINDING_CONDITION_SERVICE_AVAILABLE = "ServiceAvailable"
SERVICE_BINDING_CONDITION_PROJECTION_READY = "ProjectionReady"
INITIALIZE_CONDITION_REASON = "Unknown"

__all__ = [
    "EnvVar",
    "MetaCondition",
    "ServiceBinding",
    "ServiceBindingList",
    "ServiceBindingSpec",
    "ServiceBindingStatus",
    "WorkloadReference",
    "add_to_scheme",
    "kind",
    "resource",
]


def kind(kind: str) -> GroupKind:
    """Qualify a kind with this group."""
    return SCHEME_GROUP_VERSION.with_kind(kind).group_kind()


def resource(resource: str) -> GroupResource:
    """Qualify a resource with this group."""
    return SCHEME_GROUP_VERSION.with_resource(resource).group_resource()


@dataclass
class MetaCondition:
    """A standard status condition."""

    type: str
    status: ConditionStatus | None = None
    observed_generation: int = 0
    last_transition_time: datetime | None = None
    reason: str = ""
    message: str = ""


@dataclass
class ServiceBindingSpec:
    name: str = ""
    type: str = ""
    provider: str = ""
    workload: WorkloadReference | None = None
    service: Reference | None = None
    env: list[EnvVar] = field(default_factory=list)


@dataclass
class ServiceBindingStatus:
    """Observed state of a ServiceBinding: Ready, ServiceAvailable, ProjectionReady."""

    observed_generation: int = 0
    conditions: list[MetaCondition] = field(default_factory=list)
    binding: LocalObjectReference | None = None

    def initialize_conditions(self, now: datetime) -> None:
        """Put the three conditions in order, keeping any that already exist."""

        def fresh(condition_type: str) -> MetaCondition:
            return MetaCondition(
                type=condition_type,
                status=ConditionStatus.UNKNOWN,
                last_transition_time=now,
                reason=INITIALIZE_CONDITION_REASON,
            )

        found = {
            t: fresh(t)
            for t in (
                SERVICE_BINDING_CONDITION_READY,
                SERVICE_BINDING_CONDITION_SERVICE_AVAILABLE,
                SERVICE_BINDING_CONDITION_PROJECTION_READY,
            )
        }
        for cond in self.conditions:
            if cond.type in found:
                found[cond.type] = replace(cond)
        self.conditions = list(found.values())

    @property
    def _ready(self) -> MetaCondition:
        return self.conditions[0]

    @property
    def _service_available(self) -> MetaCondition:
        return self.conditions[1]

    @property
    def _projection_ready(self) -> MetaCondition:
        return self.conditions[2]

    def mark_service_available(self, now: datetime) -> None:
        cond = self._service_available
        if cond.status != ConditionStatus.TRUE:
            cond.last_transition_time = now
        cond.status = ConditionStatus.TRUE
        cond.reason = "Available"
        cond.message = ""
        self.aggregate_ready_condition(now)

    def mark_service_unavailable(self, reason: str, message: str, now: datetime) -> None:
        cond = self._service_available
        if cond.status != ConditionStatus.FALSE:
            cond.last_transition_time = now
        cond.status = ConditionStatus.FALSE
        cond.reason = reason
        cond.message = message
        self.aggregate_ready_condition(now)

    def propagate_service_binding_projection_status(
        self, projection: ServiceBindingProjection | None, now: datetime
    ) -> None:
        """Mirror the projection's Ready condition into ProjectionReady."""
        if projection is None:
            return
        source = projection.status.get_condition(SERVICE_BINDING_PROJECTION_CONDITION_READY)
        if source is None:
            source = Condition(type="")
        new_status = source.status or ConditionStatus.UNKNOWN

        cond = self._projection_ready
        if cond.status != new_status:
            cond.last_transition_time = now
        cond.status = new_status
        if source.reason:
            cond.reason = source.reason
        elif cond.status == ConditionStatus.TRUE:
            cond.reason = "Projected"
        else:
            cond.reason = "Unknown"
        cond.message = source.message
        self.aggregate_ready_condition(now)

    def aggregate_ready_condition(self, now: datetime) -> None:
        """Derive Ready from ServiceAvailable and ProjectionReady."""
        ready = self._ready
        available = self._service_available
        projected = self._projection_ready
        previous = ready.status

        def follow(status: ConditionStatus, prefix: str, source: MetaCondition) -> None:
            ready.status = status
            ready.reason = f"{prefix}{source.reason}"
            ready.message = source.message

        if available.status == ConditionStatus.TRUE and projected.status == ConditionStatus.TRUE:
            ready.status = ConditionStatus.TRUE
            ready.reason = "Ready"
            ready.message = ""
        elif available.status == ConditionStatus.FALSE:
            follow(ConditionStatus.FALSE, SERVICE_BINDING_CONDITION_SERVICE_AVAILABLE, available)
        elif projected.status == ConditionStatus.FALSE:
            follow(ConditionStatus.FALSE, SERVICE_BINDING_CONDITION_PROJECTION_READY, projected)
        elif available.status == ConditionStatus.UNKNOWN:
            follow(ConditionStatus.UNKNOWN, SERVICE_BINDING_CONDITION_SERVICE_AVAILABLE, available)
        elif projected.status == ConditionStatus.UNKNOWN:
            follow(ConditionStatus.UNKNOWN, SERVICE_BINDING_CONDITION_PROJECTION_READY, projected)

        if ready.status != previous:
            ready.last_transition_time = now


@dataclass
class ServiceBinding:
    """Binds a service's secret into a workload."""

    metadata: ObjectMeta = field(default_factory=ObjectMeta)
    spec: ServiceBindingSpec = field(default_factory=ServiceBindingSpec)
    status: ServiceBindingStatus = field(default_factory=ServiceBindingStatus)

    def validate(self) -> FieldError:
        errs = FieldError()
        if self.spec.workload is None:
            errs = errs.also(err_missing_field("spec.workload"))
        else:
            errs = errs.also(validate_workload(self.spec.workload, "spec.workload"))

        if self.spec.service is None:
            errs = errs.also(err_missing_field("spec.service"))
        else:
            errs = errs.also(validate_workload(self.spec.service, "spec.service"))
            if not self.spec.service.name:
                errs = errs.also(err_missing_field("spec.service.name"))

        return errs.also(validate_env(self.spec.env))

    def set_defaults(self) -> None:
        """Default the binding name to the resource name."""
        if not self.spec.name:
            self.spec.name = self.metadata.name

    def get_group_version_kind(self) -> GroupVersionKind:
        return SCHEME_GROUP_VERSION.with_kind("ServiceBinding")

    def get_status(self) -> Status:
        """An empty status; ServiceBinding tracks its own conditions."""
        return Status()

    def get_condition_set(self) -> ConditionSet:
        return new_living_condition_set()


@dataclass
class ServiceBindingList:
    items: list[ServiceBinding] = field(default_factory=list)


def add_to_scheme(scheme: Scheme) -> None:
    """Register this group's types with a scheme."""
    scheme.add_known_types(SCHEME_GROUP_VERSION, ServiceBinding, ServiceBindingList)