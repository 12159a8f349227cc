"""Tests for bundle loading and schema validation."""

from pathlib import Path

import jsonschema
import pytest

from ovntopo.io.loader import inputs_from_bundle, load_bundle, load_bundle_yaml


def test_empty_document_is_empty_bundle() -> None:
    assert load_bundle_yaml("") == {}
    inputs, config = inputs_from_bundle({})
    assert inputs.interfaces == ()
    assert inputs.route_advertisements is None
    assert config.show_lldp_neighbors is False


def test_top_level_must_be_mapping() -> None:
    with pytest.raises(ValueError, match="dictionary at top-level"):
        load_bundle_yaml("- a\n- b\n")


def test_unknown_top_level_key() -> None:
    with pytest.raises(ValueError, match="Unrecognized top-level key"):
        load_bundle_yaml("nodes: []\n")


def test_resource_section_must_be_list() -> None:
    with pytest.raises(ValueError, match="'networkAttachmentDefinitions' must be a list"):
        load_bundle_yaml("networkAttachmentDefinitions: {name: x}\n")


def test_null_resource_section_allowed() -> None:
    data = load_bundle_yaml("clusterUserDefinedNetworks: null\n")
    inputs, _ = inputs_from_bundle(data)
    assert inputs.cudns == ()


@pytest.mark.parametrize(
    "text",
    [
        "config: {showLldpNeighbors: 'yes'}\n",
        "config: {importantNodes: br-ex}\n",
        "config: {maxPathDepth: 1}\n",
        "config: {colors: dark}\n",
        "nodeNetworkState: [1, 2]\n",
        "userDefinedNetworks: [1]\n",
    ],
)
def test_schema_violations(text: str) -> None:
    with pytest.raises(jsonschema.ValidationError):
        load_bundle_yaml(text)


def test_empty_route_advertisements_means_none_exist() -> None:
    inputs, _ = inputs_from_bundle(load_bundle_yaml("routeAdvertisements: []\n"))
    assert inputs.route_advertisements == ()


def test_json_text_accepted() -> None:
    data = load_bundle_yaml('{"config": {"showLldpNeighbors": true}}')
    _, config = inputs_from_bundle(data)
    assert config.show_lldp_neighbors is True


def test_load_full_host(bundle_path) -> None:
    inputs, config = load_bundle(bundle_path("full-host"))
    assert inputs.state.node_name == "worker-1"
    assert [c.name for c in inputs.cudns] == ["tenant-blue", "machinenet"]
    assert [u.name for u in inputs.udns] == ["private"]
    assert len(inputs.nads) == 3
    assert [ra.name for ra in inputs.route_advertisements] == ["vrf-blue"]
    assert config.gravity.important_nodes == frozenset({"br-ex"})


def test_basic_host_has_no_route_advertisements_api(bundle_path) -> None:
    inputs, _ = load_bundle(bundle_path("basic-host"))
    assert inputs.route_advertisements is None
    assert [i.name for i in inputs.interfaces] == ["eno1", "br-ex", "ovn-k8s-mp0"]


def test_missing_file(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        load_bundle(tmp_path / "absent.yaml")
