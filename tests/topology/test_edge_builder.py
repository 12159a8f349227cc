"""Tests for the topology edge builder."""

import pytest

from ovntopo.io.loader import load_bundle
from ovntopo.model.resources import Interface
from ovntopo.model.state import NodeNetworkState, TopologyInputs
from ovntopo.topology.edges import (
    RULE_BASE_IFACE,
    RULE_CONTROLLER,
    RULE_ROUTE_ADVERTISEMENT,
    Edge,
    EdgeSet,
    build_topology_edges,
)


def _pairs(edges):
    return [f"{e.source}->{e.target}" for e in edges]


def _cudn(name, topology, labels, physnet=None):
    network = {"topology": topology}
    if physnet:
        network["localnet"] = {"physicalNetworkName": physnet}
    return {"metadata": {"name": name, "labels": labels}, "spec": {"network": network}}


ADVERTISE_RA = {
    "metadata": {"name": "vrf-blue"},
    "spec": {
        "networkSelectors": [
            {
                "networkSelectionType": "ClusterUserDefinedNetworks",
                "clusterUserDefinedNetworkSelector": {
                    "networkSelector": {"matchLabels": {"advertise": "true"}}
                },
            }
        ]
    },
}


class TestEdgeSet:
    def test_dedup_by_ordered_pair(self):
        edges = EdgeSet()
        assert edges.add("a", "b", "x")
        assert not edges.add("a", "b", "y")
        assert edges.add("b", "a")
        assert len(edges) == 2
        assert edges.to_list()[0].kind == "x"

    def test_empty_endpoints_rejected(self):
        edges = EdgeSet()
        assert not edges.add("", "b")
        assert not edges.add("a", None)
        assert len(edges) == 0

    def test_edge_equality_ignores_kind(self):
        assert Edge("a", "b", "controller") == Edge("a", "b", "nad")
        assert Edge("a", "b").key == "a=>b"


def test_basic_host_end_to_end(load_nns):
    inputs = TopologyInputs.from_resources(node_network_state=load_nns("basic-host"))
    edges = build_topology_edges(inputs)
    assert sorted(_pairs(edges)) == [
        "br-ex->ovn-physnet",
        "eno1->br-ex",
        "ovn-k8s-mp0->br-int",
    ]


def test_same_pair_from_two_rules_appears_once():
    interfaces = (
        Interface.from_dict({"name": "eno1", "type": "ethernet", "controller": "vlan10"}),
        Interface.from_dict({"name": "vlan10", "type": "vlan", "vlan": {"base-iface": "eno1"}}),
        Interface.from_dict({"name": "eno1", "type": "ethernet", "controller": "vlan10"}),
    )
    inputs = TopologyInputs(state=NodeNetworkState(interfaces=interfaces))
    edges = build_topology_edges(inputs)
    assert _pairs(edges) == ["eno1->vlan10"]
    assert edges[0].kind == RULE_CONTROLLER


def test_base_iface_rule():
    interfaces = (
        Interface.from_dict({"name": "bond0", "type": "bond"}),
        Interface.from_dict({"name": "bond0.20", "type": "vlan", "vlan": {"base-iface": "bond0"}}),
    )
    edges = build_topology_edges(TopologyInputs(state=NodeNetworkState(interfaces=interfaces)))
    assert _pairs(edges) == ["bond0->bond0.20"]
    assert edges[0].kind == RULE_BASE_IFACE


class TestLldpGating:
    def test_hidden_by_default(self, load_nns):
        inputs = TopologyInputs.from_resources(node_network_state=load_nns("host-lldp"))
        edges = build_topology_edges(inputs, show_lldp_neighbors=False)
        assert not any(e.source.startswith("lldp-") for e in edges)

    def test_one_edge_per_neighbor(self, load_nns):
        inputs = TopologyInputs.from_resources(node_network_state=load_nns("host-lldp"))
        edges = build_topology_edges(inputs, show_lldp_neighbors=True)
        lldp_pairs = [p for p in _pairs(edges) if p.startswith("lldp-")]
        assert lldp_pairs == ["lldp-enp44s0-0->enp44s0", "lldp-enp45s0-0->enp45s0"]


class TestRouteAdvertisementEdges:
    @pytest.fixture
    def cudns(self):
        return [
            _cudn("blue-l2", "Layer2", {"advertise": "true"}),
            _cudn("blue-l3", "Layer3", {"advertise": "true"}),
            _cudn("blue-localnet", "Localnet", {"advertise": "true"}, physnet="physnet"),
            _cudn("red-l2", "Layer2", {"advertise": "false"}),
        ]

    def test_vrf_links_only_routed_selected_cudns(self, load_nns, cudns):
        inputs = TopologyInputs.from_resources(
            node_network_state=load_nns("vrf-mixed-routes"),
            cudns=cudns,
            route_advertisements=[ADVERTISE_RA],
        )
        edges = build_topology_edges(inputs)
        vrf_edges = [e for e in edges if e.source == "vrf-blue"]
        assert _pairs(vrf_edges) == ["vrf-blue->cudn-blue-l2", "vrf-blue->cudn-blue-l3"]
        assert all(e.kind == RULE_ROUTE_ADVERTISEMENT for e in vrf_edges)
        assert "ovn-physnet->cudn-blue-localnet" in _pairs(edges)

    def test_skipped_when_api_unavailable(self, load_nns, cudns):
        inputs = TopologyInputs.from_resources(
            node_network_state=load_nns("vrf-mixed-routes"),
            cudns=cudns,
            route_advertisements=None,
        )
        edges = build_topology_edges(inputs)
        assert not any(e.source == "vrf-blue" for e in edges)

    def test_truncated_ra_name(self, cudns):
        ra = {**ADVERTISE_RA, "metadata": {"name": "advertise-tenant-blue"}}
        inputs = TopologyInputs.from_resources(
            node_network_state={
                "status": {"currentState": {"interfaces": [{"name": "advertise-tenan", "type": "vrf"}]}}
            },
            cudns=cudns,
            route_advertisements=[ra],
        )
        assert "advertise-tenan->cudn-blue-l2" in _pairs(build_topology_edges(inputs))


def test_full_host_edges(bundle_path):
    inputs, _ = load_bundle(bundle_path("full-host"))
    edges = build_topology_edges(inputs)
    assert _pairs(edges) == [
        "eno1->bond0",
        "eno2->bond0",
        "bond0->br-ex",
        "vlan200->br-vm",
        "bond0->vlan200",
        "ovn-k8s-mp0->br-int",
        "br-ex->ovn-physnet",
        "ovn-physnet->cudn-machinenet",
        "cudn-tenant-blue->attachment-cudn-tenant-blue",
        "cudn-machinenet->attachment-cudn-machinenet",
        "udn-team-a-private->attachment-udn-team-a-private",
        "cudn-machinenet->nad-vms-machinenet",
        "br-vm->nad-default-vm-bridge",
        "udn-team-a-private->nad-team-a-private",
        "vrf-blue->cudn-tenant-blue",
    ]


def test_cudn_backed_nad_has_no_ovn_edge(bundle_path):
    inputs, _ = load_bundle(bundle_path("full-host"))
    pairs = _pairs(build_topology_edges(inputs))
    assert "ovn-physnet->nad-vms-machinenet" not in pairs


def test_standalone_localnet_nad_hangs_off_mapping():
    inputs = TopologyInputs.from_resources(
        nads=[
            {
                "metadata": {"name": "ln", "namespace": "vms"},
                "spec": {"config": '{"type": "ovn-k8s-cni-overlay", "physicalNetworkName": "physnet"}'},
            }
        ]
    )
    assert _pairs(build_topology_edges(inputs)) == ["ovn-physnet->nad-vms-ln"]


def test_empty_inputs():
    assert build_topology_edges(TopologyInputs()) == []
