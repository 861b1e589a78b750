"""Field errors, conditions and common object references."""

from __future__ import annotations

import enum
import re
from dataclasses import dataclass, field, replace
from datetime import datetime, timezone


@dataclass(frozen=True)
class _Leaf:
    message: str
    paths: tuple[str, ...]
    details: str = ""


def _is_index(part: str) -> bool:
    return part.startswith("[") and part.endswith("]")


def _flatten(parts: list[str]) -> str:
    out: list[str] = []
    for part in parts:
        for piece in part.split("."):
            if piece == "":
                continue
            if out and _is_index(piece):
                out[-1] += piece
            else:
                out.append(piece)
    return ".".join(out)


class FieldError:
    """A set of validation errors, each attached to one or more field paths."""

    def __init__(self, message: str = "", paths=(), details: str = ""):
        self._leaves: tuple[_Leaf, ...] = (
            (_Leaf(message, tuple(paths), details),) if message else ()
        )

    @classmethod
    def _of(cls, leaves) -> FieldError:
        err = cls()
        err._leaves = tuple(leaves)
        return err

    def also(self, *args: FieldError | None) -> FieldError:
        leaves = list(self._leaves)
        for other in args:
            if other is not None:
                leaves.extend(other._leaves)
        return self._of(leaves)

    def via_field(self, *args: str) -> FieldError:
        prefix = list(args)
        return self._of(
            replace(leaf, paths=tuple(_flatten(prefix + [p]) for p in leaf.paths))
            for leaf in self._leaves
        )

    def via_index(self, index: int) -> FieldError:
        return self.via_field(f"[{index}]")

    def via_field_index(self, field: str, index: int) -> FieldError:
        return self.via_index(index).via_field(field)

    def _merged(self) -> list[tuple[str, list[str], str]]:
        grouped: dict[tuple[str, str], set[str]] = {}
        for leaf in self._leaves:
            grouped.setdefault((leaf.message, leaf.details), set()).update(leaf.paths)
        return sorted(
            ((msg, sorted(paths), details) for (msg, details), paths in grouped.items()),
            key=lambda item: (item[0], item[2]),
        )

    def __str__(self) -> str:
        lines = []
        for message, paths, details in self._merged():
            line = f"{message}: {', '.join(paths)}"
            if details:
                line += f"\n{details}"
            lines.append(line)
        return "\n".join(lines)

    def __bool__(self) -> bool:
        return bool(self._leaves)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, FieldError):
            return NotImplemented
        return self._merged() == other._merged()

    def __repr__(self) -> str:
        return f"FieldError({str(self)!r})"


def err_missing_field(*args: str) -> FieldError:
    return FieldError("missing field(s)", args)


def err_disallowed_fields(*args: str) -> FieldError:
    return FieldError("must not set the field(s)", args)


def err_multiple_one_of(*args: str) -> FieldError:
    return FieldError("expected exactly one, got both", args)


def _err_missing_one_of(*args: str) -> FieldError:
    return FieldError("expected exactly one, got neither", args)


def err_invalid_value(value, field: str) -> FieldError:
    return FieldError(f"invalid value: {value}", [field])


class ConditionStatus(str, enum.Enum):
    TRUE = "True"
    FALSE = "False"
    UNKNOWN = "Unknown"


def _now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class Condition:
    type: str
    status: ConditionStatus | None = None
    severity: str = ""
    last_transition_time: datetime | None = None
    reason: str = ""
    message: str = ""


@dataclass
class Status:
    observed_generation: int = 0
    conditions: list[Condition] = field(default_factory=list)
    annotations: dict[str, str] | None = None

    def get_condition(self, condition_type: str) -> Condition | None:
        return next((c for c in self.conditions if c.type == condition_type), None)


@dataclass(frozen=True)
class ConditionSet:
    """A happy condition together with the conditions it depends on."""

    happy: str
    dependents: tuple[str, ...] = ()

    def manage(self, status: Status) -> ConditionManager:
        return ConditionManager(self, status)


class ConditionManager:
    """Applies a condition set's rules to a status."""

    def __init__(self, condition_set: ConditionSet, status: Status):
        self._set = condition_set
        self._status = status

    def _put(self, cond: Condition) -> None:
        existing = self.get_condition(cond.type)
        if existing is not None and (
            existing.status, existing.reason, existing.message, existing.severity
        ) == (cond.status, cond.reason, cond.message, cond.severity):
            return
        cond.last_transition_time = _now()
        others = [c for c in self._status.conditions if c.type != cond.type]
        self._status.conditions = sorted(others + [cond], key=lambda c: c.type)

    def initialize_conditions(self) -> None:
        happy = self.get_condition(self._set.happy)
        if happy is None:
            happy = Condition(self._set.happy, ConditionStatus.UNKNOWN)
            self._put(happy)
        dep_status = (
            ConditionStatus.TRUE
            if happy.status == ConditionStatus.TRUE
            else ConditionStatus.UNKNOWN
        )
        for dep in self._set.dependents:
            if self.get_condition(dep) is None:
                self._put(Condition(dep, dep_status))

    def get_condition(self, condition_type: str) -> Condition | None:
        return self._status.get_condition(condition_type)

    def mark_true(self, condition_type: str) -> None:
        self._put(Condition(condition_type, ConditionStatus.TRUE))
        if condition_type == self._set.happy:
            return
        for dep in self._set.dependents:
            cond = self.get_condition(dep)
            if cond is None or cond.status != ConditionStatus.TRUE:
                return
        self._put(Condition(self._set.happy, ConditionStatus.TRUE))

    def mark_false(self, condition_type: str, reason: str, message: str) -> None:
        self._put(Condition(condition_type, ConditionStatus.FALSE, reason=reason, message=message))
        if condition_type != self._set.happy and condition_type in self._set.dependents:
            self._put(
                Condition(self._set.happy, ConditionStatus.FALSE, reason=reason, message=message)
            )

    def mark_unknown(self, condition_type: str, reason: str, message: str) -> None:
        self._put(
            Condition(condition_type, ConditionStatus.UNKNOWN, reason=reason, message=message)
        )
        if condition_type != self._set.happy and condition_type in self._set.dependents:
            happy = self.get_condition(self._set.happy)
            if happy is None or happy.status != ConditionStatus.FALSE:
                self._put(
                    Condition(
                        self._set.happy, ConditionStatus.UNKNOWN, reason=reason, message=message
                    )
                )

    def is_happy(self) -> bool:
        cond = self.get_condition(self._set.happy)
        return cond is not None and cond.status == ConditionStatus.TRUE


CONDITION_READY = "Ready"


def new_living_condition_set(*args: str) -> ConditionSet:
    """A condition set whose happy condition is Ready."""
    return ConditionSet(CONDITION_READY, tuple(args))


@dataclass
class LocalObjectReference:
    name: str = ""


@dataclass
class ObjectMeta:
    name: str = ""
    namespace: str = ""
    generation: int = 0
    labels: dict[str, str] = field(default_factory=dict)
    annotations: dict[str, str] = field(default_factory=dict)


@dataclass
class LabelSelector:
    match_labels: dict[str, str] = field(default_factory=dict)
    match_expressions: list[dict] = field(default_factory=list)


_DNS_LABEL = re.compile(r"^[a-z0-9]([-a-z0-9]*[a-z0-9])?$")
_DNS_SUBDOMAIN = re.compile(r"^[a-z0-9]([-a-z0-9]*[a-z0-9])?(\.[a-z0-9]([-a-z0-9]*[a-z0-9])?)*$")


@dataclass
class Reference:
    """A reference to an object by name or by label selector."""

    api_version: str = ""
    kind: str = ""
    namespace: str = ""
    name: str = ""
    selector: LabelSelector | None = None

    def validate(self) -> FieldError:
        errs = FieldError()
        if not self.api_version:
            errs = errs.also(err_missing_field("apiVersion"))
        elif self.api_version.count("/") > 1 or "" in self.api_version.split("/"):
            errs = errs.also(err_invalid_value(self.api_version, "apiVersion"))
        if not self.kind:
            errs = errs.also(err_missing_field("kind"))
        if not self.namespace:
            errs = errs.also(err_missing_field("namespace"))
        elif len(self.namespace) > 63 or not _DNS_LABEL.match(self.namespace):
            errs = errs.also(err_invalid_value(self.namespace, "namespace"))
        if self.selector is not None and self.name:
            errs = errs.also(err_multiple_one_of("selector", "name"))
        elif self.selector is None:
            if not self.name:
                errs = errs.also(_err_missing_one_of("selector", "name"))
            elif len(self.name) > 253 or not _DNS_SUBDOMAIN.match(self.name):
                errs = errs.also(err_invalid_value(self.name, "name"))
        return errs