"""The Serviceable duck type: resources exposing a binding secret in status."""

from __future__ import annotations

from dataclasses import dataclass, field

from .apis import LocalObjectReference, ObjectMeta
from .meta import GroupKind, GroupResource, GroupVersion, Scheme

GROUP_NAME = "duck.bindings.labs.vmware.com"
SCHEME_GROUP_VERSION = GroupVersion(GROUP_NAME, "v1alpha3")


def kind(kind: str) -> GroupKind:
    return SCHEME_GROUP_VERSION.with_kind(kind).group_kind()


def resource(resource: str) -> GroupResource:
    return SCHEME_GROUP_VERSION.with_resource(resource).group_resource()


def add_to_scheme(scheme: Scheme) -> None:
    scheme.add_known_types(SCHEME_GROUP_VERSION)


@dataclass
class Serviceable:
    binding: LocalObjectReference = field(default_factory=LocalObjectReference)

    def get_full_type(self) -> ServiceableType:
        return ServiceableType()


@dataclass
class ServiceableType:
    """Skeleton resource carrying a Serviceable status."""

    metadata: ObjectMeta = field(default_factory=ObjectMeta)
    status: Serviceable = field(default_factory=Serviceable)

    def populate(self) -> None:
        self.status = Serviceable(binding=LocalObjectReference(name="my-secret"))

    def get_list_type(self) -> ServiceableTypeList:
        return ServiceableTypeList()

    def to_dict(self) -> dict:
        meta = {
            key: value
            for key, value in (
                ("name", self.metadata.name),
                ("namespace", self.metadata.namespace),
                ("generation", self.metadata.generation),
                ("labels", self.metadata.labels),
                ("annotations", self.metadata.annotations),
            )
            if value
        }
        return {
            "metadata": meta,
            "status": {"binding": {"name": self.status.binding.name}},
        }

    @classmethod
    def from_dict(cls, data: dict) -> ServiceableType:
        meta = data.get("metadata") or {}
        binding = ((data.get("status") or {}).get("binding") or {}).get("name", "")
        return cls(
            metadata=ObjectMeta(
                name=meta.get("name", ""),
                namespace=meta.get("namespace", ""),
                generation=meta.get("generation", 0),
                labels=dict(meta.get("labels") or {}),
                annotations=dict(meta.get("annotations") or {}),
            ),
            status=Serviceable(binding=LocalObjectReference(name=binding)),
        )


@dataclass
class ServiceableTypeList:
    items: list[ServiceableType] = field(default_factory=list)


def _contains(expected, actual) -> bool:
    if isinstance(expected, dict):
        return isinstance(actual, dict) and all(
            key in actual and _contains(value, actual[key]) for key, value in expected.items()
        )
    return expected == actual


def verify_type(instance, implementable) -> None:
    """Check that ``instance`` round-trips the fields of ``implementable``'s duck type.

    Raises ValueError when the instance loses any populated field.
    """
    full = implementable.get_full_type()
    full.populate()
    data = full.to_dict()
    rebuilt = type(instance).from_dict(data).to_dict()
    if not _contains(data.get("status", {}), rebuilt.get("status", {})):
        raise ValueError(
            f"{type(instance).__name__} does not implement "
            f"{type(implementable).__name__}: status {rebuilt.get('status')!r}"
        )