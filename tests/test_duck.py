import pytest

from servicebinding.duck import (
    Serviceable,
    ServiceableType,
    ServiceableTypeList,
    add_to_scheme,
    kind,
    resource,
    verify_type,
)
from servicebinding.meta import Scheme


def test_register_helpers():
    assert str(kind("Foo")) == "Foo.duck.bindings.labs.vmware.com"
    assert str(resource("Foo")) == "Foo.duck.bindings.labs.vmware.com"


def test_add_to_scheme_registers_no_types():
    scheme = Scheme()
    add_to_scheme(scheme)
    assert not scheme.recognizes(kind("Serviceable").group_kind if False else _gvk("Serviceable"))


def _gvk(name):
    from servicebinding.duck import SCHEME_GROUP_VERSION

    return SCHEME_GROUP_VERSION.with_kind(name)


def test_populate_sets_binding():
    full = Serviceable().get_full_type()
    full.populate()
    assert full.status.binding.name == "my-secret"


def test_to_dict_round_trip():
    full = ServiceableType()
    full.populate()
    full.metadata.name = "svc"
    assert ServiceableType.from_dict(full.to_dict()) == full


def test_list_type():
    assert ServiceableType().get_list_type() == ServiceableTypeList(items=[])


def test_verify_type_accepts_compatible():
    assert verify_type(ServiceableType(), Serviceable()) is None


def test_verify_type_rejects_incompatible():
    class Lossy:
        @classmethod
        def from_dict(cls, data):
            return cls()

        def to_dict(self):
            return {"status": {}}

    with pytest.raises(ValueError):
        verify_type(Lossy(), Serviceable())