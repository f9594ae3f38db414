"""
Capacity Report

Summarizes, for every node, what is allocated, what is left and how the
assigned services are sized.

Per node statistics:
--------------------
- ``min``: sum of the assigned services' minimum specs,
- ``max``: sum of the assigned services' maximum specs,
- ``avg`` / ``median``: over the per-assignment maximum specs.

All figures are scaled by the assignment quantity. ``min`` and ``max`` follow
the arithmetic of :mod:`kubebuddy.resources.numeric`, so integral sums stay
integers. Nodes without assignments have no statistics.
"""

from statistics import median
from typing import Dict, Iterable, List, Mapping, Optional
from kubebuddy.capacity.allocation import get_allocated_resources, get_available_resources
from kubebuddy.resources.numeric import Number
from kubebuddy.resources.vector import ResourceVector, average_utilization
from kubebuddy.schemas.assignments import Assignment
from kubebuddy.schemas.nodes import Node
from kubebuddy.schemas.report import CapacityReport, NodeUtilization, ResourceStatistics
from kubebuddy.schemas.services import Service


def resource_statistics(assignments: Iterable[Assignment],
                        services_by_id: Mapping[str, Service]) -> Optional[ResourceStatistics]:
    """
    Compute min/max/avg/median resource figures over assignments.

    Args:
        assignments (Iterable[Assignment]): Assignments of one node.
        services_by_id (Mapping[str, Service]): Services indexed by identifier.

    Returns:
        Optional[ResourceStatistics]: Statistics, None if there are no assignments.
    """
    assignments = list(assignments)
    if not assignments:
        return None

    min_totals = ResourceVector()
    max_totals = ResourceVector()
    max_values: Dict[str, List[Number]] = {}

    for assignment in assignments:
        service = services_by_id.get(assignment.service_id)
        if service is None:
            continue
        quantity = assignment.effective_quantity

        for key, value in ResourceVector(service.min_spec).scaled(quantity).items():
            min_totals.accumulate(key, value)

        for key, value in ResourceVector(service.max_spec).scaled(quantity).items():
            max_totals.accumulate(key, value)
            max_values.setdefault(key, []).append(value)

    return ResourceStatistics(
        min=dict(min_totals),
        max=dict(max_totals),
        avg={key: float(sum(values)) / len(values) for key, values in max_values.items()},
        median={key: float(median(values)) for key, values in max_values.items()},
    )


def node_utilization(node: Node,
                     assignments: List[Assignment],
                     services_by_id: Mapping[str, Service]) -> NodeUtilization:
    """
    Allocation status of one node.

    Args:
        node (Node): Node with its derived total resources.
        assignments (List[Assignment]): All assignments.
        services_by_id (Mapping[str, Service]): Services indexed by identifier.

    Returns:
        NodeUtilization: Allocated and available resources, utilization and statistics.
    """
    total = ResourceVector(node.resources)
    allocated = get_allocated_resources(node, assignments, services_by_id)
    available = get_available_resources(total, allocated)
    return NodeUtilization(
        node=node,
        total=dict(total),
        allocated=dict(allocated),
        available=dict(available),
        utilization_pct=average_utilization(total, allocated) * 100,
        statistics=resource_statistics([a for a in assignments if a.node_id == node.id], services_by_id),
    )


def build_capacity_report(nodes: Iterable[Node],
                          services: Iterable[Service],
                          assignments: Iterable[Assignment]) -> CapacityReport:
    """
    Build a capacity overview of all nodes.

    Args:
        nodes (Iterable[Node]): Nodes with their derived total resources.
        services (Iterable[Service]): All services.
        assignments (Iterable[Assignment]): All assignments.

    Returns:
        CapacityReport: Totals and per-node utilization.
    """
    nodes = list(nodes)
    services = list(services)
    assignments = list(assignments)
    services_by_id = {service.id: service for service in services}

    return CapacityReport(
        total_nodes=len(nodes),
        active_nodes=sum(1 for node in nodes if node.is_active),
        total_services=len(services),
        total_assignments=len(assignments),
        node_utilization=[node_utilization(node, assignments, services_by_id) for node in nodes],
    )
