import copy

import pytest

from servicebinding.apis import (
    LabelSelector,
    LocalObjectReference,
    err_disallowed_fields,
    err_missing_field,
    err_multiple_one_of,
)
from servicebinding.labsinternal import (
    SCHEME_GROUP_VERSION,
    EnvVar,
    ServiceBindingProjection,
    ServiceBindingProjectionSpec,
    ServiceBindingProjectionStatus,
    WorkloadReference,
    add_to_scheme,
    kind,
    resource,
)
from servicebinding.meta import Scheme


def _valid(**spec_overrides) -> ServiceBindingProjection:
    spec = ServiceBindingProjectionSpec(
        name="my-binding",
        binding=LocalObjectReference(name="my-secret"),
        workload=WorkloadReference(api_version="apps/v1", kind="Deployment", name="my-workload"),
    )
    for key, value in spec_overrides.items():
        setattr(spec, key, value)
    return ServiceBindingProjection(spec=spec)


def test_register_helpers():
    assert str(kind("Foo")) == "Foo.internal.bindings.labs.vmware.com"
    assert str(resource("Foo")) == "Foo.internal.bindings.labs.vmware.com"
    assert str(SCHEME_GROUP_VERSION) == "internal.bindings.labs.vmware.com/v1alpha1"


def test_add_to_scheme():
    scheme = Scheme()
    add_to_scheme(scheme)
    assert scheme.recognizes(SCHEME_GROUP_VERSION.with_kind("ServiceBindingProjection"))
    assert scheme.recognizes(SCHEME_GROUP_VERSION.with_kind("ServiceBindingProjectionList"))
    assert not scheme.recognizes(SCHEME_GROUP_VERSION.with_kind("ServiceBinding"))


def test_get_group_version_kind():
    assert (
        str(ServiceBindingProjection().get_group_version_kind())
        == "internal.bindings.labs.vmware.com/v1alpha1, Kind=ServiceBindingProjection"
    )


def test_set_defaults_changes_nothing():
    seed = _valid()
    actual = copy.deepcopy(seed)
    actual.set_defaults()
    assert actual == seed


def test_validate_valid():
    errs = _valid().validate()
    assert str(errs) == ""
    assert not errs


def test_validate_workload_selector_is_valid():
    workload = WorkloadReference(
        api_version="apps/v1", kind="Deployment", selector=LabelSelector()
    )
    assert str(_valid(workload=workload).validate()) == ""


def test_validate_empty():
    assert str(ServiceBindingProjection().validate()) == (
        "expected exactly one, got neither: spec.workload.name, spec.workload.selector\n"
        "missing field(s): spec.binding, spec.name, "
        "spec.workload.apiVersion, spec.workload.kind"
    )


def test_validate_disallows_workload_namespace():
    workload = WorkloadReference(
        api_version="apps/v1", kind="Deployment", name="my-app", namespace="default"
    )
    assert _valid(workload=workload).validate() == err_disallowed_fields(
        "spec.workload.namespace"
    )


def test_validate_empty_env():
    expected = err_missing_field("spec.env[0].name").also(err_missing_field("spec.env[0].key"))
    assert _valid(env=[EnvVar()]).validate() == expected


def test_validate_duplicate_env():
    env = [EnvVar(name="MY_VAR", key="my-key1"), EnvVar(name="MY_VAR", key="my-key2")]
    assert _valid(env=env).validate() == err_multiple_one_of(
        "spec.env[0].name", "spec.env[1].name"
    )


def test_validate_valid_env():
    assert str(_valid(env=[EnvVar(name="MY_VAR", key="my-key")]).validate()) == ""


def test_validate_disallows_status_annotations():
    projection = _valid()
    projection.status = ServiceBindingProjectionStatus(annotations={})
    assert projection.validate() == err_disallowed_fields("status.annotations")


def test_validate_does_not_mutate_workload():
    projection = _valid()
    projection.validate()
    assert projection.spec.workload.namespace == ""


@pytest.mark.parametrize(
    "var, expected",
    [
        (EnvVar(name="A", key="b"), ""),
        (EnvVar(key="b"), "missing field(s): name"),
        (EnvVar(name="A"), "missing field(s): key"),
        (EnvVar(), "missing field(s): key, name"),
    ],
)
def test_env_var_validate(var, expected):
    assert str(var.validate()) == expected


def test_workload_reference_keeps_containers():
    workload = WorkloadReference(api_version="apps/v1", kind="Deployment", containers=["app"])
    assert workload.containers == ["app"]
    assert str(workload.validate()).startswith("expected exactly one, got neither")