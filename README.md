# servicebinding

Resource models for service bindings as plain Python dataclasses. The package
has no runtime dependencies.

It covers four API groups:

- `servicebinding.duck`: the `Serviceable` duck type
  (`duck.bindings.labs.vmware.com/v1alpha3`), with `ServiceableType` and
  `verify_type`. `verify_type` checks that a resource class keeps a populated
  `Serviceable` status through a `to_dict`/`from_dict` round trip. It raises
  `ValueError` when the class does not.
- `servicebinding.labs`: `ProvisionedService` (`bindings.labs.vmware.com/v1alpha1`).
  It has `to_dict()` and `ProvisionedService.from_dict()`.
- `servicebinding.labsinternal`: `ServiceBindingProjection` and `EnvVar`
  (`internal.bindings.labs.vmware.com/v1alpha1`).
- `servicebinding.bindings`: `ServiceBinding` (`servicebinding.io/v1alpha3`) and
  its `Ready`, `ServiceAvailable` and `ProjectionReady` conditions.

Two modules hold what these groups share:

- `servicebinding.meta`: group/version/kind/resource names and a small type
  `Scheme`.
- `servicebinding.apis`: `FieldError`, `Condition`, `Status`, `ConditionSet`,
  `ConditionManager`, and `LocalObjectReference`, `ObjectMeta`, `LabelSelector`
  and `Reference`.

## Installing

```
pip install servicebinding
```

## Validating a resource

`validate()` returns a `FieldError`, and does not raise. A `FieldError` with
nothing to report is false. Its text lists each message once, followed by the
paths it applies to:

```python
from servicebinding import bindings

binding = bindings.ServiceBinding()
err = binding.validate()
if err:
    print(err)  # missing field(s): spec.service, spec.workload
```

Workload and service references may not carry a namespace. Each `env` entry
needs both a `name` and a `key`, and two entries may not share a name.

`set_defaults()` fills in defaults. On a `ServiceBinding` it copies
`metadata.name` into `spec.name` when `spec.name` is empty.

## Tracking status

`ServiceBindingStatus` always holds its three conditions in the order `Ready`,
`ServiceAvailable`, `ProjectionReady`. `Ready` is worked out from the other two:

```python
from datetime import datetime, timezone
from servicebinding import bindings

status = bindings.ServiceBindingStatus()
now = datetime.now(timezone.utc)
status.initialize_conditions(now)
status.mark_service_unavailable("NotFound", "service is missing", now)
ready = status.conditions[0]
print(ready.status.value, ready.reason)  # False ServiceAvailableNotFound
```

`propagate_service_binding_projection_status(projection, now)` copies the
projection's `Ready` condition into `ProjectionReady`.

`ProvisionedService` uses a living condition set from `servicebinding.apis`:

```python
from servicebinding import labs

service = labs.ProvisionedService()
service.status.mark_ready()
print(service.status.get_condition("Ready").status.value)  # True
```

## Names and schemes

```python
from servicebinding import labs, meta

print(labs.kind("Foo"))  # Foo.bindings.labs.vmware.com
print(labs.ProvisionedService().get_group_version_kind())
# bindings.labs.vmware.com/v1alpha1, Kind=ProvisionedService

scheme = meta.Scheme()
labs.add_to_scheme(scheme)
print(scheme.recognizes(labs.ProvisionedService().get_group_version_kind()))  # True
```

## What it does not do

This is a library of data types only. It has no reconcilers, no admission
webhooks, no cluster client and no command-line tool. Nothing in it talks to a
cluster or watches resources. Your own code does that and uses these types to
validate, default and set status on them.

## Running the tests

```
pip install -e ".[test]"
pytest
```