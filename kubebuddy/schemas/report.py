"""
KubeBuddy Capacity Report Schemas

Models returned by :func:`kubebuddy.capacity.report.build_capacity_report`.
"""

from typing import Dict, List, Optional
from pydantic import BaseModel, Field
from kubebuddy.schemas.common import Resources
from kubebuddy.schemas.nodes import Node


class ResourceStatistics(BaseModel):
    """
    Statistics over the assignments of one node.

    `min` and `max` are the sums of the assigned services' minimum and maximum
    specs; `avg` and `median` are computed over the per-assignment maximum specs.
    All values are scaled by the assignment quantity.
    """
    min: Resources = Field(default_factory=dict)
    max: Resources = Field(default_factory=dict)
    avg: Dict[str, float] = Field(default_factory=dict)
    median: Dict[str, float] = Field(default_factory=dict)


class NodeUtilization(BaseModel):
    """ Allocation status of one node. """
    node: Node
    total: Resources = Field(default_factory=dict)
    allocated: Resources = Field(default_factory=dict)
    available: Resources = Field(default_factory=dict)
    utilization_pct: float = Field(..., description="Average utilization in percent.")
    statistics: Optional[ResourceStatistics] = None


class CapacityReport(BaseModel):
    """ Capacity overview of all nodes. """
    total_nodes: int
    active_nodes: int
    total_services: int
    total_assignments: int
    node_utilization: List[NodeUtilization] = Field(default_factory=list)
