"""
KubeBuddy Snapshot Schema

A snapshot holds the full in-memory collections the capacity core works on:
nodes, the hardware catalog, installed components, services and assignments.
The storage layer (or a YAML/JSON export of it) provides the snapshot; the core
never mutates it.

YAML Example:
-------------
.. code-block:: yaml

    nodes:
      - id: node-1
        tags: {env: prod}
    components:
      - id: xeon
        type: cpu
        specs: {threads: 16}
    installed_components:
      - node_id: node-1
        component_id: xeon
        quantity: 2
    services:
      - id: api
        min_spec: {cores: 2}
        max_spec: {cores: 4}
    assignments:
      - service_id: api
        node_id: node-1

Usage:
------
Use `get_snapshot_from_config_file(path)` to load and validate a snapshot file.
"""

import yaml
from typing import Any, Dict, List
from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator
from kubebuddy.config import load_yaml
from kubebuddy.exceptions import InvalidInputError
from kubebuddy.schemas.assignments import Assignment
from kubebuddy.schemas.components import Component, InstalledComponent
from kubebuddy.schemas.nodes import Node
from kubebuddy.schemas.services import Service


class Snapshot(BaseModel):
    """
    Point-in-time view of all entities used for capacity planning.

    Raises:
        pydantic.ValidationError: If the input data does not conform to the expected schema
            or if node, component or service identifiers are not unique.
    """
    nodes: List[Node] = Field(default_factory=list, description="Compute nodes.")
    components: List[Component] = Field(default_factory=list, description="Hardware catalog.")
    installed_components: List[InstalledComponent] = Field(
        default_factory=list,
        description="Components installed in nodes."
    )
    services: List[Service] = Field(default_factory=list, description="Services.")
    assignments: List[Assignment] = Field(default_factory=list, description="Service assignments.")

    model_config = ConfigDict(extra="forbid")

    @model_validator(mode='after')
    def validate_unique_ids(self) -> "Snapshot":
        """
        Validates that node, component and service identifiers are unique.

        Raises:
            ValueError: If an identifier is used twice within a collection.
        """
        for collection in ('nodes', 'components', 'services'):
            seen = set()
            for item in getattr(self, collection):
                if item.id in seen:
                    raise ValueError(f"Duplicate id '{item.id}' in {collection}")
                seen.add(item.id)
        return self

    @property
    def services_by_id(self) -> Dict[str, Service]:
        """ Services indexed by their identifier. """
        return {service.id: service for service in self.services}


def parse_snapshot(data: Any) -> Snapshot:
    """
    Validate raw snapshot data.

    Args:
        data (Any): Parsed YAML or JSON content.

    Returns:
        Snapshot: Validated snapshot.

    Raises:
        InvalidInputError: If the data is not a valid snapshot.
    """
    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise InvalidInputError("Snapshot must be a mapping of collections")
    try:
        return Snapshot(**data)
    except ValidationError as err:
        raise InvalidInputError(f"Invalid snapshot: {err}") from err


def get_snapshot_from_config_file(snapshot_file: str) -> Snapshot:
    """
    Load and validate a snapshot from a YAML or JSON file.

    Environment variables in the file are expanded (`${VAR}` or `${VAR:-default}`).

    Args:
        snapshot_file (str): Path to the snapshot file.

    Returns:
        Snapshot: Validated snapshot.

    Raises:
        InvalidInputError: If the file content is not a valid snapshot.
        FileNotFoundError: If the file does not exist.
    """
    try:
        data = load_yaml(snapshot_file)
    except yaml.YAMLError as err:
        raise InvalidInputError(f"Snapshot file '{snapshot_file}' is not valid YAML: {err}") from err
    return parse_snapshot(data)
