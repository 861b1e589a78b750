"""Group, version, kind and resource identifiers and a minimal type scheme."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class GroupKind:
    """A kind qualified by its API group."""

    group: str
    kind: str

    def __str__(self) -> str:
        return f"{self.kind}.{self.group}" if self.group else self.kind


@dataclass(frozen=True)
class GroupResource:
    """A resource qualified by its API group."""

    group: str
    resource: str

    def __str__(self) -> str:
        return f"{self.resource}.{self.group}" if self.group else self.resource


@dataclass(frozen=True)
class GroupVersion:
    """An API group together with one of its versions."""

    group: str
    version: str

    def with_kind(self, kind: str) -> GroupVersionKind:
        return GroupVersionKind(self.group, self.version, kind)

    def with_resource(self, resource: str) -> GroupVersionResource:
        return GroupVersionResource(self.group, self.version, resource)

    def __str__(self) -> str:
        return f"{self.group}/{self.version}" if self.group else self.version


@dataclass(frozen=True)
class GroupVersionKind:
    """A fully qualified kind."""

    group: str
    version: str
    kind: str

    def group_kind(self) -> GroupKind:
        return GroupKind(self.group, self.kind)

    def group_version(self) -> GroupVersion:
        return GroupVersion(self.group, self.version)

    def __str__(self) -> str:
        return f"{self.group}/{self.version}, Kind={self.kind}"


@dataclass(frozen=True)
class GroupVersionResource:
    """A fully qualified resource."""

    group: str
    version: str
    resource: str

    def group_resource(self) -> GroupResource:
        return GroupResource(self.group, self.resource)

    def __str__(self) -> str:
        return f"{self.group}/{self.version}, Resource={self.resource}"


@dataclass
class Scheme:
    """Registry mapping group versions to the types known under them."""

    _types: dict[GroupVersion, dict[str, type]] = field(default_factory=dict)

    def add_known_types(self, group_version: GroupVersion, *args: type) -> None:
        """Register types under a group version, keyed by their class name."""
        known = self._types.setdefault(group_version, {})
        for cls in args:
            if not isinstance(cls, type):
                raise TypeError(f"expected a class, got {cls!r}")
            known[cls.__name__] = cls

    def known_types(self, group_version: GroupVersion) -> dict[str, type]:
        return dict(self._types.get(group_version, {}))

    def recognizes(self, gvk: GroupVersionKind) -> bool:
        return gvk.kind in self._types.get(gvk.group_version(), {})