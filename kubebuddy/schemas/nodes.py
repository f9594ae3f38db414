"""
KubeBuddy Node Schema

A node is a physical or virtual compute resource on which services are placed.

The total resources of a node are *derived*: they are computed from the
hardware components installed on the node (see
:func:`kubebuddy.capacity.aggregator.aggregate_resources`) and are never
serialized.

YAML Example:
-------------
.. code-block:: yaml

    nodes:
      - id: node-1
        name: rack1-srv1
        type: baremetal
        provider: ovh
        region: eu-west
        state: active
        tags:
          env: prod
          type: baremetal
        monthly_cost: 120.0
"""

from datetime import date
from typing import Dict, Mapping, Optional
from pydantic import BaseModel, ConfigDict, Field
from kubebuddy.schemas.common import NodeState, NodeType, Resources


class Node(BaseModel):
    """ KubeBuddy Node Schema. """
    id: str = Field(..., description="Unique node identifier.")
    name: str = Field(default="", description="Human readable node name.")
    type: NodeType = Field(default="baremetal", description="Node type.")
    provider: str = Field(default="", description="Hosting provider.")
    region: str = Field(default="", description="Region or datacenter.")
    tags: Dict[str, str] = Field(default_factory=dict, description="Node labels used by placement rules.")
    state: NodeState = Field(default="active", description="Lifecycle state.")

    monthly_cost: Optional[float] = Field(default=None, description="Monthly billing amount.")
    annual_cost: Optional[float] = Field(default=None, description="Annual billing amount.")
    contract_end_date: Optional[date] = Field(default=None, description="End of the hosting contract.")
    next_renewal_date: Optional[date] = Field(default=None, description="Next contract renewal.")

    resources: Resources = Field(
        default_factory=dict,
        exclude=True,
        description="Total resources derived from installed components. Never serialized."
    )

    model_config = ConfigDict(extra="forbid")

    @property
    def is_active(self) -> bool:
        """ True if the node accepts new placements. """
        return self.state == 'active'

    def matches_tags(self, required: Mapping[str, str]) -> bool:
        """
        Check whether the node carries all required tags.

        A required tag with an empty value still needs the tag to be present.

        Args:
            required (Mapping[str, str]): Tags the node must have, with exact values.

        Returns:
            bool: True if every required tag is present with the same value.
        """
        for key, value in required.items():
            if key not in self.tags or self.tags[key] != value:
                return False
        return True
