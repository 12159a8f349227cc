"""Tests for the end-to-end topology view pipeline."""

import json
from dataclasses import replace

import pytest

from ovntopo.config import DEFAULT_CONFIG, TopologyConfig
from ovntopo.io.loader import load_bundle
from ovntopo.model.state import TopologyInputs
from ovntopo.topology.view import (
    NAD_CONFIG_REGEX_FALLBACK,
    NAD_CONFIG_UNPARSEABLE,
    VRF_WITHOUT_ROUTE_ADVERTISEMENT,
    build_topology_view,
    collect_warnings,
    physical_entry_points,
)
from ovntopo.types.base import Column, NodeKind


@pytest.fixture
def basic_view(load_nns):
    inputs = TopologyInputs.from_resources(node_network_state=load_nns("basic-host"))
    return build_topology_view(inputs)


@pytest.fixture
def full_view(bundle_path):
    inputs, config = load_bundle(bundle_path("full-host"))
    return build_topology_view(inputs, config)


class TestBasicHost:
    def test_gravity(self, basic_view):
        assert basic_view.gravity == {
            "eno1": 25,
            "br-ex": 50,
            "ovn-physnet": 148,
            "ovn-k8s-mp0": 800,
            "br-int": 799,
        }

    def test_columns(self, basic_view):
        assert dict(basic_view.columns) == {
            Column.PHYSICAL: ("eno1",),
            Column.BRIDGES: ("br-ex",),
            Column.LOGICAL: ("ovn-k8s-mp0",),
            Column.OVN_MAPPINGS: ("ovn-physnet",),
        }

    def test_nodes(self, basic_view):
        mapping = basic_view.node("ovn-physnet")
        assert mapping.kind is NodeKind.OVN_MAPPING
        assert mapping.label == "physnet"
        assert mapping.data == {"bridge": "br-ex"}
        assert basic_view.node("br-int") is None

    def test_highlight(self, basic_view):
        highlighted = basic_view.highlight("eno1")
        assert {"eno1", "br-ex", "ovn-physnet"} <= highlighted
        assert "ovn-k8s-mp0" not in highlighted

    def test_no_lldp(self, basic_view):
        assert basic_view.lldp_available is False
        assert basic_view.warnings == ()


def test_entry_points_are_interfaces_without_upstream(full_view, bundle_path):
    inputs, _ = load_bundle(bundle_path("full-host"))
    assert physical_entry_points(inputs, full_view.graph) == [
        "eno1",
        "eno2",
        "vrf-blue",
        "ovn-k8s-mp0",
    ]


class TestFullHost:
    def test_enslaved_and_important_scores(self, full_view):
        assert full_view.gravity["bond0"] == 25
        assert full_view.gravity["br-ex"] == 50

    def test_udn_nodes_sort_last(self, full_view):
        networks = full_view.columns[Column.NETWORKS]
        assert set(networks) == {"cudn-tenant-blue", "cudn-machinenet", "udn-team-a-private"}
        assert networks[-1] == "udn-team-a-private"
        assert full_view.gravity["udn-team-a-private"] > 50000

    def test_bridges_column(self, full_view):
        assert full_view.columns[Column.BRIDGES] == ("br-ex", "br-vm")

    def test_every_column_present(self, full_view):
        assert list(full_view.columns) == [
            Column.PHYSICAL,
            Column.BONDS,
            Column.VLANS,
            Column.BRIDGES,
            Column.LOGICAL,
            Column.VRFS,
            Column.OVN_MAPPINGS,
            Column.NETWORKS,
            Column.NADS,
            Column.ATTACHMENTS,
        ]

    def test_vrf_node_data(self, full_view):
        vrf = full_view.node("vrf-blue")
        assert vrf.column is Column.VRFS
        assert vrf.data["routeAdvertisement"] == "vrf-blue"
        assert vrf.data["routeTableId"] == 100
        assert vrf.data["brIntPorts"] == ["ovn-k8s-mp0"]
        assert [r["destination"] for r in vrf.data["routes"]] == ["10.132.0.0/16"]

    def test_attachment_node_data(self, full_view):
        attachment = full_view.node("attachment-cudn-tenant-blue")
        assert attachment.data == {"namespaces": ["blue-a", "blue-b"]}

    def test_regex_fallback_warning(self, full_view):
        assert [(w.code, w.subject) for w in full_view.warnings] == [
            (NAD_CONFIG_REGEX_FALLBACK, "nad-default-vm-bridge")
        ]

    def test_highlight_through_bridge(self, full_view):
        highlighted = full_view.highlight("br-ex")
        for node in ("eno1", "eno2", "bond0", "ovn-physnet", "cudn-machinenet"):
            assert node in highlighted
        assert "nad-vms-machinenet" in highlighted
        assert "vlan200" not in highlighted

    def test_to_dict_is_json_serializable(self, full_view):
        data = json.loads(json.dumps(full_view.to_dict()))
        assert data["lldpAvailable"] is False
        assert len(data["edges"]) == 15
        assert data["columns"]["networks"][-1] == "udn-team-a-private"
        assert data["warnings"][0]["code"] == NAD_CONFIG_REGEX_FALLBACK


def test_deterministic(bundle_path):
    inputs, config = load_bundle(bundle_path("full-host"))
    first = build_topology_view(inputs, config)
    second = build_topology_view(inputs, config)
    assert first.to_dict() == second.to_dict()
    assert first.edges == second.edges


class TestLldpView:
    def test_hidden_by_default(self, load_nns):
        inputs = TopologyInputs.from_resources(node_network_state=load_nns("host-lldp"))
        view = build_topology_view(inputs)
        assert view.lldp_available is True
        assert Column.LLDP_NEIGHBORS not in view.columns

    def test_shown(self, load_nns):
        inputs = TopologyInputs.from_resources(node_network_state=load_nns("host-lldp"))
        view = build_topology_view(inputs, replace(DEFAULT_CONFIG, show_lldp_neighbors=True))
        assert set(view.columns[Column.LLDP_NEIGHBORS]) == {"lldp-enp44s0-0", "lldp-enp45s0-0"}
        neighbor = view.node("lldp-enp44s0-0")
        assert neighbor.label == "USWEnterprise48PoE"
        assert neighbor.data["capabilities"] == ["MAC Bridge component", "Router"]


class TestWarnings:
    def test_unparseable_nad_config(self):
        inputs = TopologyInputs.from_resources(
            nads=[{"metadata": {"name": "bad", "namespace": "ns"}, "spec": {"config": "garbage"}}]
        )
        warnings = collect_warnings(inputs)
        assert [(w.code, w.subject) for w in warnings] == [(NAD_CONFIG_UNPARSEABLE, "nad-ns-bad")]

    def test_valid_config_without_upstream_is_silent(self):
        inputs = TopologyInputs.from_resources(
            nads=[
                {
                    "metadata": {"name": "l2", "namespace": "ns"},
                    "spec": {"config": '{"type": "ovn-k8s-cni-overlay", "topology": "layer2"}'},
                }
            ]
        )
        assert collect_warnings(inputs) == []

    def test_vrf_without_route_advertisement(self, load_nns):
        inputs = TopologyInputs.from_resources(
            node_network_state=load_nns("vrf-mixed-routes"), route_advertisements=[]
        )
        warnings = collect_warnings(inputs)
        assert [(w.code, w.subject) for w in warnings] == [
            (VRF_WITHOUT_ROUTE_ADVERTISEMENT, "vrf-blue")
        ]

    def test_no_vrf_warning_when_api_unavailable(self, load_nns):
        inputs = TopologyInputs.from_resources(
            node_network_state=load_nns("vrf-mixed-routes"), route_advertisements=None
        )
        assert collect_warnings(inputs) == []

    def test_warnings_are_logged(self, caplog):
        inputs = TopologyInputs.from_resources(
            nads=[{"metadata": {"name": "bad", "namespace": "ns"}, "spec": {"config": "garbage"}}]
        )
        with caplog.at_level("WARNING", logger="ovntopo"):
            collect_warnings(inputs)
        assert NAD_CONFIG_UNPARSEABLE in caplog.text


def test_config_important_nodes_override(load_nns):
    inputs = TopologyInputs.from_resources(node_network_state=load_nns("basic-host"))
    config = TopologyConfig.from_dict({"importantNodes": ["ovn-k8s-mp0"]})
    view = build_topology_view(inputs, config)
    assert view.gravity["ovn-k8s-mp0"] == 50
    assert view.gravity["br-ex"] != 50


class TestLldpToggleKeepsOrder:
    NNS = {
        "metadata": {"name": "worker-2"},
        "status": {
            "currentState": {
                "interfaces": [
                    {
                        "name": "eno1",
                        "type": "ethernet",
                        "state": "up",
                        "controller": "br-ex",
                        "lldp": {
                            "enabled": True,
                            "neighbors": [[{"type": 5, "system-name": "tor-1"}]],
                        },
                    },
                    {"name": "eno2", "type": "ethernet", "state": "up", "controller": "br-phys"},
                    {"name": "br-ex", "type": "ovs-bridge", "state": "up"},
                    {"name": "br-phys", "type": "ovs-bridge", "state": "up"},
                ],
                "ovn": {
                    "bridge-mappings": [
                        {"bridge": "br-ex", "localnet": "physnet"},
                        {"bridge": "br-phys", "localnet": "other"},
                    ]
                },
            }
        },
    }
    CUDNS = [
        {
            "metadata": {"name": "x"},
            "spec": {
                "network": {"topology": "Localnet", "localnet": {"physicalNetworkName": "physnet"}}
            },
        }
    ]

    def _view(self, show_lldp):
        inputs = TopologyInputs.from_resources(node_network_state=self.NNS, cudns=self.CUDNS)
        return build_topology_view(inputs, replace(DEFAULT_CONFIG, show_lldp_neighbors=show_lldp))

    def test_host_gravity_unchanged(self):
        hidden = self._view(False)
        shown = self._view(True)
        assert hidden.gravity["ovn-physnet"] == 98
        assert hidden.gravity["cudn-x"] == 97
        assert {k: v for k, v in shown.gravity.items() if k != "lldp-eno1-0"} == dict(
            hidden.gravity
        )

    def test_primary_lineage_keeps_top_slot(self):
        for show_lldp in (False, True):
            view = self._view(show_lldp)
            assert view.columns[Column.OVN_MAPPINGS] == ("ovn-physnet", "ovn-other")

    def test_neighbor_sorts_with_local_interface(self):
        shown = self._view(True)
        assert shown.gravity["lldp-eno1-0"] == shown.gravity["eno1"] == 25
        assert shown.columns[Column.LLDP_NEIGHBORS] == ("lldp-eno1-0",)
        assert "lldp-eno1-0" in shown.highlight("br-ex")
