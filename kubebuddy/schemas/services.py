"""
KubeBuddy Service Schemas

A service is a workload with resource requirements and placement rules.

Key Components:
---------------
- **Expression**: A tag expression (`Exists`, `DoesNotExist`, `In`, `NotIn`) against one tag key.
- **TagSelector**: Exact label matches and/or expressions; all clauses must pass.
- **PlacementRules**: Affinity selectors (all must match), anti-affinity selectors
  (none may match) and an optional spread limit (max instances per node).
- **Service**: Identity, minimum spec (must be available to place), maximum spec
  (used for allocation accounting and purchase sizing) and placement rules.

Both snake_case and the camelCase names used by the REST API are accepted
(`matchLabels`, `matchExpressions`, `antiAffinity`, `spreadMax`, `topologyKey`).

YAML Example:
-------------
.. code-block:: yaml

    services:
      - id: postgres
        min_spec: {cores: 2, memory: 4096}
        max_spec: {cores: 4, memory: 8192}
        placement:
          affinity:
            - matchLabels: {env: prod}
          antiAffinity:
            - matchExpressions:
                - {key: maintenance, operator: Exists}
          spreadMax: 1
"""

from typing import Dict, List, Literal, Optional
from pydantic import BaseModel, ConfigDict, Field
from kubebuddy.schemas.common import Resources

Operator = Literal['In', 'NotIn', 'Exists', 'DoesNotExist']


class Expression(BaseModel):
    """ Tag matching expression. """
    key: str = Field(..., description="Tag key.")
    operator: Operator = Field(..., description="Matching operator.")
    values: List[str] = Field(default_factory=list, description="Values for In/NotIn.")

    model_config = ConfigDict(extra="forbid")


class TagSelector(BaseModel):
    """ Selects nodes by their tags. """
    match_labels: Dict[str, str] = Field(
        default_factory=dict,
        alias="matchLabels",
        description="Tags that must be present with exactly these values."
    )
    match_expressions: List[Expression] = Field(
        default_factory=list,
        alias="matchExpressions",
        description="Expressions that must all hold."
    )

    model_config = ConfigDict(extra="forbid", populate_by_name=True)


class PlacementRules(BaseModel):
    """ Placement constraints of a service. """
    affinity: List[TagSelector] = Field(default_factory=list, description="Selectors that must all match the node.")
    anti_affinity: List[TagSelector] = Field(
        default_factory=list,
        alias="antiAffinity",
        description="Selectors that must not match the node."
    )
    spread_max: int = Field(default=0, ge=0, alias="spreadMax", description="Max instances per node (0 = unlimited).")
    topology_key: Optional[str] = Field(default=None, alias="topologyKey", description="Tag key to spread across.")

    model_config = ConfigDict(extra="forbid", populate_by_name=True)


class Service(BaseModel):
    """ KubeBuddy Service Schema. """
    id: str = Field(..., description="Unique service identifier.")
    name: str = Field(default="", description="Service name.")
    min_spec: Resources = Field(default_factory=dict, description="Resources that must be available to place the service.")
    max_spec: Resources = Field(default_factory=dict, description="Resources reserved per instance once placed.")
    placement: PlacementRules = Field(default_factory=PlacementRules, description="Placement rules.")

    model_config = ConfigDict(extra="forbid")
