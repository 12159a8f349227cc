"""Tests for interface role classification."""

from ovntopo.model.resources import Interface
from ovntopo.model.state import NodeNetworkState
from ovntopo.normalize.interfaces import (
    classify_interfaces,
    controller_names,
    is_bridge,
    is_logical,
    vrf_interfaces,
)


def _iface(**data):
    return Interface.from_dict(data)


def test_ovs_interface_is_bridge_only_when_it_is_a_controller():
    interfaces = [
        _iface(name="eno1", type="ethernet", controller="br-ex"),
        _iface(name="br-ex", type="ovs-interface", state="up"),
        _iface(name="ovn-k8s-mp0", type="ovs-interface", state="up", controller="br-int"),
    ]
    controllers = controller_names(interfaces)
    assert controllers == {"br-ex", "br-int"}
    assert is_bridge(interfaces[1], controllers)
    assert not is_bridge(interfaces[2], controllers)
    assert is_logical(interfaces[2], controllers)


def test_ignored_and_patch_ports_are_not_logical():
    controllers = frozenset()
    ignored = _iface(name="ovs-port", type="ovs-interface", state="ignore")
    patch = _iface(name="patch-br-ex-to-br-int", type="ovs-interface", state="up")
    assert not is_logical(ignored, controllers)
    assert not is_logical(patch, controllers)


def test_patch_property_prevents_bridge_role():
    interfaces = [
        _iface(name="eth0", controller="br-x"),
        _iface(name="br-x", type="ovs-interface", patch={"peer": "y"}),
    ]
    assert not is_bridge(interfaces[1], controller_names(interfaces))


def test_classify_interfaces(load_nns):
    interfaces = NodeNetworkState.from_dict(load_nns("partial-missing-fields")).interfaces
    buckets = classify_interfaces(interfaces)
    assert [i.name for i in buckets.ethernet] == ["eth0"]
    assert [i.name for i in buckets.bond] == ["bond0"]
    assert [i.name for i in buckets.vlan] == ["vlan10"]
    assert [i.name for i in buckets.logical] == ["ovn-k8s-mp2"]
    assert [i.name for i in buckets.vrf] == ["vrf-edge"]
    assert [i.name for i in buckets.other] == ["vrf-edge", "tun0"]
    assert buckets.bridge == ()


def test_vrf_interfaces_in_reported_order():
    interfaces = [
        _iface(name="vrf-b", type="vrf"),
        _iface(name="eth0", type="ethernet"),
        _iface(name="vrf-a", type="vrf"),
    ]
    assert [i.name for i in vrf_interfaces(interfaces)] == ["vrf-b", "vrf-a"]
