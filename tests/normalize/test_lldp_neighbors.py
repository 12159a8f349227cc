"""Tests for LLDP neighbor extraction and availability."""

from ovntopo.model.resources import Interface
from ovntopo.model.state import NodeNetworkState
from ovntopo.normalize.lldp import extract_lldp_neighbors, has_lldp_neighbors, neighbor_from_block


def _interfaces(load_nns, name):
    return NodeNetworkState.from_dict(load_nns(name)).interfaces


def test_extracts_neighbors_and_normalizes_fields(load_nns):
    neighbors = extract_lldp_neighbors(_interfaces(load_nns, "host-lldp"))

    assert len(neighbors) == 2
    assert sorted(n.local_interface for n in neighbors) == ["enp44s0", "enp45s0"]
    first = neighbors[0]
    assert first.id == "lldp-enp44s0-0"
    assert first.label == "USWEnterprise48PoE"
    assert first.system_name == "USWEnterprise48PoE"
    assert first.chassis_id == "28:70:4E:D4:53:B0"
    assert first.port_id == "Port 12"
    assert first.system_description == "USW-Enterprise-48-PoE, 6.6.55"
    assert first.capabilities == ("MAC Bridge component", "Router")


def test_label_falls_back_to_chassis_id(load_nns):
    second = extract_lldp_neighbors(_interfaces(load_nns, "host-lldp"))[1]
    assert second.system_name is None
    assert second.label == "74:83:C2:11:22:33"


def test_label_falls_back_to_ordinal():
    neighbor = neighbor_from_block("eth0", 2, ({"type": 2, "port-id": "  "},))
    assert neighbor.label == "Neighbor 3"
    assert neighbor.port_id is None
    assert neighbor.id == "lldp-eth0-2"


def test_first_non_empty_value_wins():
    block = ({"system-name": ""}, {"system-name": "  sw-a  "}, {"system-name": "sw-b"})
    assert neighbor_from_block("eth0", 0, block).system_name == "sw-a"


def test_availability(load_nns):
    assert has_lldp_neighbors(_interfaces(load_nns, "host-lldp"))
    assert not has_lldp_neighbors(_interfaces(load_nns, "basic-host"))


def test_availability_needs_enabled_and_discovered():
    enabled_only = Interface.from_dict({"name": "a", "lldp": {"enabled": True}})
    discovered_only = Interface.from_dict(
        {"name": "b", "lldp": {"enabled": False, "neighbors": [[{"system-name": "sw"}]]}}
    )
    assert not has_lldp_neighbors([enabled_only])
    assert not has_lldp_neighbors([discovered_only])
    assert has_lldp_neighbors([enabled_only, discovered_only])
