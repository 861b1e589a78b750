"""The ServiceBindingProjection resource of the internal bindings group."""

from __future__ import annotations

import copy
from collections import defaultdict
from dataclasses import dataclass, field

from .apis import (
    CONDITION_READY,
    FieldError,
    LocalObjectReference,
    ObjectMeta,
    Reference,
    Status,
    err_disallowed_fields,
    err_missing_field,
    err_multiple_one_of,
)
from .meta import GroupKind, GroupResource, GroupVersion, GroupVersionKind, Scheme

GROUP_NAME = "internal.bindings.labs.vmware.com"
SCHEME_GROUP_VERSION = GroupVersion(GROUP_NAME, "v1alpha1")

SERVICE_BINDING_PROJECTION_ANNOTATION_KEY = GROUP_NAME + "/projection"
SERVICE_BINDING_PROJECTION_CONDITION_READY = CONDITION_READY


def kind(kind: str) -> GroupKind:
    """Qualify a kind with this group."""
    return SCHEME_GROUP_VERSION.with_kind(kind).group_kind()


def resource(resource: str) -> GroupResource:
    """Qualify a resource with this group."""
    return SCHEME_GROUP_VERSION.with_resource(resource).group_resource()


@dataclass
class EnvVar:
    """Projects one key of the binding secret as an environment variable."""

    name: str = ""
    key: str = ""

    def validate(self) -> FieldError:
        errs = FieldError()
        if not self.name:
            errs = errs.also(err_missing_field("name"))
        if not self.key:
            errs = errs.also(err_missing_field("key"))
        return errs


@dataclass
class WorkloadReference(Reference):
    """A workload reference, optionally limited to some of its containers."""

    containers: list[str] = field(default_factory=list)


def validate_workload(workload: Reference, path: str) -> FieldError:
    """Validate a namespace-less reference found at ``path``."""
    probe = copy.deepcopy(workload)
    probe.namespace = "fake"
    errs = FieldError().also(probe.validate().via_field(path))
    if workload.namespace:
        errs = errs.also(err_disallowed_fields(f"{path}.namespace"))
    return errs


def validate_env(env: list[EnvVar]) -> FieldError:
    """Validate env entries under ``spec.env`` and reject repeated names."""
    errs = FieldError()
    by_name: dict[str, list[int]] = defaultdict(list)
    for index, var in enumerate(env):
        errs = errs.also(var.validate().via_field_index("env", index).via_field("spec"))
        by_name[var.name].append(index)
    for indexes in by_name.values():
        if len(indexes) > 1:
            errs = errs.also(
                err_multiple_one_of(*(f"spec.env[{i}].name" for i in indexes))
            )
    return errs


@dataclass
class ServiceBindingProjectionSpec:
    name: str = ""
    type: str = ""
    provider: str = ""
    binding: LocalObjectReference = field(default_factory=LocalObjectReference)
    workload: WorkloadReference = field(default_factory=WorkloadReference)
    env: list[EnvVar] = field(default_factory=list)


@dataclass
class ServiceBindingProjectionStatus(Status):
    pass


@dataclass
class ServiceBindingProjection:
    """Injects a binding secret into a workload."""

    metadata: ObjectMeta = field(default_factory=ObjectMeta)
    spec: ServiceBindingProjectionSpec = field(default_factory=ServiceBindingProjectionSpec)
    status: ServiceBindingProjectionStatus = field(
        default_factory=ServiceBindingProjectionStatus
    )

    def validate(self) -> FieldError:
        errs = FieldError()
        if not self.spec.name:
            errs = errs.also(err_missing_field("spec.name"))
        if not self.spec.binding.name:
            errs = errs.also(err_missing_field("spec.binding"))
        errs = errs.also(validate_workload(self.spec.workload, "spec.workload"))
        errs = errs.also(validate_env(self.spec.env))
        if self.status.annotations is not None:
            errs = errs.also(err_disallowed_fields("status.annotations"))
        return errs

    def set_defaults(self) -> None:
        """Fill in any sub-objects left unset; set values are kept as they are."""
        if self.metadata is None:
            self.metadata = ObjectMeta()
        if self.spec is None:
            self.spec = ServiceBindingProjectionSpec()
        else:
            if self.spec.binding is None:
                self.spec.binding = LocalObjectReference()
            if self.spec.workload is None:
                self.spec.workload = WorkloadReference()
            elif self.spec.workload.containers is None:
                self.spec.workload.containers = []
            if self.spec.env is None:
                self.spec.env = []
        if self.status is None:
            self.status = ServiceBindingProjectionStatus()

    def get_group_version_kind(self) -> GroupVersionKind:
        return SCHEME_GROUP_VERSION.with_kind("ServiceBindingProjection")


@dataclass
class ServiceBindingProjectionList:
    items: list[ServiceBindingProjection] = field(default_factory=list)


def add_to_scheme(scheme: Scheme) -> None:
    """Register this group's types with a scheme."""
    scheme.add_known_types(
        SCHEME_GROUP_VERSION, ServiceBindingProjection, ServiceBindingProjectionList
    )