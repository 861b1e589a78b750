"""The ProvisionedService resource of the bindings.labs.vmware.com group."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime

from .apis import (
    CONDITION_READY,
    Condition,
    ConditionSet,
    ConditionStatus,
    FieldError,
    LocalObjectReference,
    ObjectMeta,
    Status,
    err_missing_field,
    new_living_condition_set,
)
from .meta import GroupKind, GroupResource, GroupVersion, GroupVersionKind, Scheme

GROUP_NAME = "bindings.labs.vmware.com"
SCHEME_GROUP_VERSION = GroupVersion(GROUP_NAME, "v1alpha1")

PROVISIONED_SERVICE_ANNOTATION_KEY = GROUP_NAME + "/provisioned-service"
PROVISIONED_SERVICE_CONDITION_READY = CONDITION_READY

_PS_COND_SET = new_living_condition_set()


def kind(kind: str) -> GroupKind:
    """Qualify a kind with this group."""
    return SCHEME_GROUP_VERSION.with_kind(kind).group_kind()


def resource(resource: str) -> GroupResource:
    """Qualify a resource with this group."""
    return SCHEME_GROUP_VERSION.with_resource(resource).group_resource()


def _meta_to_dict(meta: ObjectMeta) -> dict:
    return {
        key: value
        for key, value in (
            ("name", meta.name),
            ("namespace", meta.namespace),
            ("generation", meta.generation),
            ("labels", dict(meta.labels)),
            ("annotations", dict(meta.annotations)),
        )
        if value
    }


def _meta_from_dict(data: dict) -> ObjectMeta:
    return ObjectMeta(
        name=data.get("name", ""),
        namespace=data.get("namespace", ""),
        generation=data.get("generation", 0),
        labels=dict(data.get("labels") or {}),
        annotations=dict(data.get("annotations") or {}),
    )


def _condition_to_dict(cond: Condition) -> dict:
    out: dict = {"type": cond.type}
    if cond.status is not None:
        out["status"] = cond.status.value
    if cond.severity:
        out["severity"] = cond.severity
    if cond.last_transition_time is not None:
        out["lastTransitionTime"] = cond.last_transition_time.isoformat()
    if cond.reason:
        out["reason"] = cond.reason
    if cond.message:
        out["message"] = cond.message
    return out


def _condition_from_dict(data: dict) -> Condition:
    status = data.get("status")
    when = data.get("lastTransitionTime")
    return Condition(
        type=data.get("type", ""),
        status=ConditionStatus(status) if status else None,
        severity=data.get("severity", ""),
        last_transition_time=datetime.fromisoformat(when) if when else None,
        reason=data.get("reason", ""),
        message=data.get("message", ""),
    )


@dataclass
class ProvisionedServiceSpec:
    binding: LocalObjectReference = field(default_factory=LocalObjectReference)


@dataclass
class ProvisionedServiceStatus(Status):
    binding: LocalObjectReference = field(default_factory=LocalObjectReference)

    def mark_ready(self) -> None:
        _PS_COND_SET.manage(self).mark_true(PROVISIONED_SERVICE_CONDITION_READY)

    def initialize_conditions(self) -> None:
        _PS_COND_SET.manage(self).initialize_conditions()


@dataclass
class ProvisionedService:
    """A service whose binding secret is named directly in its spec."""

    metadata: ObjectMeta = field(default_factory=ObjectMeta)
    spec: ProvisionedServiceSpec = field(default_factory=ProvisionedServiceSpec)
    status: ProvisionedServiceStatus = field(default_factory=ProvisionedServiceStatus)

    def validate(self) -> FieldError:
        errs = FieldError()
        if not self.spec.binding.name:
            errs = errs.also(err_missing_field("spec.binding.name"))
        return errs

    def set_defaults(self) -> None:
        """Fill in any sub-objects left unset; set values are kept as they are."""
        if self.metadata is None:
            self.metadata = ObjectMeta()
        if self.spec is None:
            self.spec = ProvisionedServiceSpec()
        elif self.spec.binding is None:
            self.spec.binding = LocalObjectReference()
        if self.status is None:
            self.status = ProvisionedServiceStatus()
        elif self.status.binding is None:
            self.status.binding = LocalObjectReference()

    def get_group_version_kind(self) -> GroupVersionKind:
        return SCHEME_GROUP_VERSION.with_kind("ProvisionedService")

    def get_status(self) -> Status:
        return self.status

    def get_condition_set(self) -> ConditionSet:
        return _PS_COND_SET

    def to_dict(self) -> dict:
        status: dict = {}
        if self.status.observed_generation:
            status["observedGeneration"] = self.status.observed_generation
        if self.status.conditions:
            status["conditions"] = [_condition_to_dict(c) for c in self.status.conditions]
        if self.status.annotations is not None:
            status["annotations"] = dict(self.status.annotations)
        status["binding"] = {"name": self.status.binding.name}
        return {
            "apiVersion": str(SCHEME_GROUP_VERSION),
            "kind": "ProvisionedService",
            "metadata": _meta_to_dict(self.metadata),
            "spec": {"binding": {"name": self.spec.binding.name}},
            "status": status,
        }

    @classmethod
    def from_dict(cls, data: dict) -> ProvisionedService:
        spec = data.get("spec") or {}
        status = data.get("status") or {}
        annotations = status.get("annotations")
        return cls(
            metadata=_meta_from_dict(data.get("metadata") or {}),
            spec=ProvisionedServiceSpec(
                binding=LocalObjectReference(
                    name=(spec.get("binding") or {}).get("name", "")
                )
            ),
            status=ProvisionedServiceStatus(
                observed_generation=status.get("observedGeneration", 0),
                conditions=[_condition_from_dict(c) for c in status.get("conditions") or []],
                annotations=dict(annotations) if annotations is not None else None,
                binding=LocalObjectReference(
                    name=(status.get("binding") or {}).get("name", "")
                ),
            ),
        )


@dataclass
class ProvisionedServiceList:
    items: list[ProvisionedService] = field(default_factory=list)


def add_to_scheme(scheme: Scheme) -> None:
    """Register this group's types with a scheme."""
    scheme.add_known_types(SCHEME_GROUP_VERSION, ProvisionedService, ProvisionedServiceList)