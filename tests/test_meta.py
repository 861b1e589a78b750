import pytest

from servicebinding.meta import GroupVersion, GroupVersionKind, Scheme


def test_group_version_kind_str():
    gv = GroupVersion("bindings.labs.vmware.com", "v1alpha1")
    assert str(gv.with_kind("ProvisionedService")) == (
        "bindings.labs.vmware.com/v1alpha1, Kind=ProvisionedService"
    )


def test_group_version_str():
    assert str(GroupVersion("servicebinding.io", "v1alpha3")) == "servicebinding.io/v1alpha3"


def test_group_kind_and_resource_str():
    gv = GroupVersion("servicebinding.io", "v1alpha3")
    assert str(gv.with_kind("Foo").group_kind()) == "Foo.servicebinding.io"
    assert str(gv.with_resource("Foo").group_resource()) == "Foo.servicebinding.io"


def test_gvk_group_version_round_trip():
    gv = GroupVersion("g", "v1")
    assert gv.with_kind("K").group_version() == gv


def test_scheme_registers_types():
    class Thing:
        pass

    scheme = Scheme()
    gv = GroupVersion("g", "v1")
    scheme.add_known_types(gv, Thing)
    assert scheme.known_types(gv) == {"Thing": Thing}
    assert scheme.recognizes(gv.with_kind("Thing"))
    assert not scheme.recognizes(GroupVersionKind("g", "v2", "Thing"))


def test_scheme_rejects_non_class():
    with pytest.raises(TypeError):
        Scheme().add_known_types(GroupVersion("g", "v1"), "Thing")