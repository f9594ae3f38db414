"""
Allocation Accounting

Computes what is reserved on a node by its current assignments, and what is
left.

Each assignment reserves the *maximum* spec of its service, multiplied by the
assignment quantity (an unset quantity counts as one). Assignments of unknown
services are ignored.

Example:
    >>> get_available_resources({'cpu': 8, 'ram': 32}, {'cpu': 3})
    ResourceVector({'cpu': 5, 'ram': 32})
"""

from typing import Iterable, Mapping
from kubebuddy.resources.numeric import Number
from kubebuddy.resources.vector import ResourceVector
from kubebuddy.schemas.assignments import Assignment
from kubebuddy.schemas.nodes import Node
from kubebuddy.schemas.services import Service


def get_allocated_resources(node: Node,
                            assignments: Iterable[Assignment],
                            services_by_id: Mapping[str, Service]) -> ResourceVector:
    """
    Sum the resources reserved on a node by its assignments.

    Args:
        node (Node): Node to account for.
        assignments (Iterable[Assignment]): Assignments; those of other nodes are ignored.
        services_by_id (Mapping[str, Service]): Services indexed by identifier.

    Returns:
        ResourceVector: Allocated resources. The numeric type of an entry follows
        the first value seen for its key.
    """
    allocated = ResourceVector()
    for assignment in assignments:
        if assignment.node_id != node.id:
            continue
        service = services_by_id.get(assignment.service_id)
        if service is None:
            continue
        for key, value in ResourceVector(service.max_spec).scaled(assignment.effective_quantity).items():
            allocated.accumulate(key, value)
    return allocated


def get_available_resources(total: Mapping[str, Number], allocated: Mapping[str, Number]) -> ResourceVector:
    """
    Subtract allocated resources from total resources.

    Keys missing from `allocated` are reported with their full total; keys
    only present in `allocated` are not reported.

    Args:
        total (Mapping[str, Number]): Total resources.
        allocated (Mapping[str, Number]): Allocated resources.

    Returns:
        ResourceVector: Available resources.
    """
    return ResourceVector(total).minus(allocated)
