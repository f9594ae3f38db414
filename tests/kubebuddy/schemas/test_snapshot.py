import unittest
from unittest.mock import patch, mock_open
from pydantic import ValidationError
from kubebuddy.exceptions import InvalidInputError
from kubebuddy.schemas.snapshot import Snapshot, get_snapshot_from_config_file, parse_snapshot


SNAPSHOT_YAML = """
nodes:
  - id: node-1
    provider: ovh
    tags:
      env: prod
components:
  - id: xeon
    type: cpu
    specs:
      threads: 16
installed_components:
  - node_id: node-1
    component_id: xeon
    quantity: 2
services:
  - id: api
    min_spec: {cores: 2}
    max_spec: {cores: 4}
    placement:
      spreadMax: 1
assignments:
  - service_id: api
    node_id: node-1
"""


class TestSnapshot(unittest.TestCase):
    """
    Unit tests for class Snapshot
    """

    def test_empty_snapshot(self):
        """ All collections default to empty """
        snapshot = Snapshot()
        self.assertEqual(snapshot.nodes, [])
        self.assertEqual(snapshot.assignments, [])

    def test_duplicate_ids_rejected(self):
        """ Node, component and service identifiers are unique """
        with self.assertRaises(ValidationError):
            Snapshot(nodes=[{'id': 'n'}, {'id': 'n'}])
        with self.assertRaises(ValidationError):
            Snapshot(services=[{'id': 's'}, {'id': 's'}])
        with self.assertRaises(ValidationError):
            Snapshot(components=[{'id': 'c', 'type': 'cpu'}, {'id': 'c', 'type': 'ram'}])

    def test_unknown_collection_rejected(self):
        """ Unknown top level keys are rejected """
        with self.assertRaises(ValidationError):
            Snapshot(racks=[])

    def test_services_by_id(self):
        """ Services are indexed by identifier """
        snapshot = Snapshot(services=[{'id': 'a'}, {'id': 'b'}])
        self.assertEqual(sorted(snapshot.services_by_id), ['a', 'b'])


class TestParseSnapshot(unittest.TestCase):
    """
    Unit tests for parse_snapshot
    """

    def test_none_is_empty(self):
        """ An empty document is an empty snapshot """
        self.assertEqual(parse_snapshot(None).nodes, [])

    def test_not_a_mapping(self):
        """ A list document is rejected """
        with self.assertRaises(InvalidInputError):
            parse_snapshot([{'id': 'n'}])

    def test_invalid_content(self):
        """ Schema errors are reported as InvalidInputError """
        with self.assertRaises(InvalidInputError):
            parse_snapshot({'nodes': [{'name': 'no id'}]})


class TestGetSnapshotFromConfigFile(unittest.TestCase):
    """
    Unit tests for get_snapshot_from_config_file
    """

    @patch("builtins.open", new_callable=mock_open, read_data=SNAPSHOT_YAML)
    def test_load(self, mock_file):
        """ A snapshot file is loaded and validated """
        snapshot = get_snapshot_from_config_file("snapshot.yml")

        self.assertEqual(snapshot.nodes[0].tags, {'env': 'prod'})
        self.assertEqual(snapshot.installed_components[0].quantity, 2)
        self.assertEqual(snapshot.services[0].placement.spread_max, 1)
        self.assertEqual(snapshot.assignments[0].node_id, 'node-1')

    @patch("builtins.open", new_callable=mock_open, read_data="nodes: [unclosed\n")
    def test_invalid_yaml(self, mock_file):
        """ Unparsable files raise InvalidInputError """
        with self.assertRaises(InvalidInputError):
            get_snapshot_from_config_file("snapshot.yml")

    @patch("builtins.open", new_callable=mock_open, read_data="nodes:\n  - id: n\n    state: broken\n")
    def test_invalid_snapshot(self, mock_file):
        """ Invalid entities raise InvalidInputError """
        with self.assertRaises(InvalidInputError):
            get_snapshot_from_config_file("snapshot.yml")

    @patch("builtins.open", side_effect=FileNotFoundError)
    def test_missing_file(self, mock_file):
        """ Missing files raise FileNotFoundError """
        with self.assertRaises(FileNotFoundError):
            get_snapshot_from_config_file("missing.yml")
