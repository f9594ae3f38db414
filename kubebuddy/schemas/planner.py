"""
KubeBuddy Capacity Planning Schemas

Request and result models of :meth:`kubebuddy.capacity.planner.CapacityPlanner.plan`.

Key Components:
---------------
- **Constraints**: Optional filters (explicit node, provider, region, required tags)
  and a minimum buffer fraction to keep free after placement.
- **PlanRequest**: Service to place and its constraints.
- **Candidate**: A feasible node with its projected utilization, remaining
  resources and fit score.
- **Recommendation**: Hardware to purchase when no node is feasible.
- **PlanResult**: Either ranked candidates (`feasible=True`) or recommendations.

Example:
--------
    >>> PlanRequest(service_id="postgres", constraints={"region": "eu-west", "min_buffer": 0.2})
"""

from typing import Dict, List, Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator
from kubebuddy.schemas.common import NodeType, Resources
from kubebuddy.schemas.nodes import Node


class Constraints(BaseModel):
    """ Optional filters for capacity planning. """
    node_id: Optional[str] = Field(default=None, description="Only consider this node; placement rules are skipped.")
    provider: Optional[str] = Field(default=None, description="Only consider nodes of this provider.")
    region: Optional[str] = Field(default=None, description="Only consider nodes in this region.")
    tags: Dict[str, str] = Field(default_factory=dict, description="Tags the node must carry.")
    min_buffer: float = Field(
        default=0.0,
        description="Fraction of resources (0.0-1.0) that must stay free after placement."
    )

    model_config = ConfigDict(extra="forbid")

    @field_validator('min_buffer')
    def validate_min_buffer(cls, value: float) -> float:
        """
        Validates the minimum buffer fraction.

        Raises:
            ValueError: If the buffer is not within [0, 1).
        """
        if not 0.0 <= value < 1.0:
            raise ValueError(f"min_buffer must be within [0, 1), got {value}")
        return value


class PlanRequest(BaseModel):
    """ Capacity planning request. """
    service_id: str = Field(..., description="Service to place.")
    constraints: Constraints = Field(default_factory=Constraints, description="Optional planning constraints.")

    model_config = ConfigDict(extra="forbid")


class Candidate(BaseModel):
    """ Node able to host the service. """
    node: Node = Field(..., description="Candidate node.")
    utilization_after: float = Field(..., description="Average utilization (0.0-1.0) after placing the minimum spec.")
    available_after: Resources = Field(default_factory=dict, description="Resources left after placing the minimum spec, for the allocated keys.")
    score: float = Field(..., description="Fit score, higher is better.")


class Recommendation(BaseModel):
    """ Hardware purchase suggestion. """
    type: NodeType = Field(..., description="Preferred node type.")
    spec: Resources = Field(default_factory=dict, description="Suggested node resources.")
    quantity: int = Field(default=1, description="Number of nodes to purchase.")
    rationale: str = Field(default="", description="Why this recommendation was made.")


class PlanResult(BaseModel):
    """ Result of a capacity planning request. """
    feasible: bool = Field(..., description="True if at least one node can host the service.")
    candidates: List[Candidate] = Field(default_factory=list, description="Feasible nodes, best first.")
    recommendations: List[Recommendation] = Field(default_factory=list, description="Purchase suggestions.")
    message: str = Field(default="", description="Human readable outcome.")
