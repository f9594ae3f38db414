"""
KubeBuddy Capacity Planner

This module answers the question: *where can a service be placed, and what
should be purchased if nowhere fits?*

The planner works on a snapshot of nodes (with their derived total resources),
services and assignments supplied by the caller. It computes a point-in-time
plan and does not reserve anything.

Planning steps:
---------------
1. Resolve the service; an unknown service yields an infeasible result.
2. Keep active nodes that satisfy the request constraints (node, provider,
   region, tags).
3. Unless a node was explicitly requested, enforce the service placement rules.
4. Keep nodes whose available resources fit the service minimum spec.
5. With a minimum buffer, drop nodes whose average utilization after placing
   the minimum spec would exceed ``1 - min_buffer``. Utilization is the mean of
   ``allocated / total`` over the keys allocated after placement.
6. Score the remaining nodes: ``100 - 100 * |utilization_after - target|``
   with a target utilization of 65% by default.
7. Rank by descending score, ties broken by node identifier.
8. Without any candidate, recommend purchasing a node sized after the service
   maximum spec.

Usage Example:
--------------
.. code-block:: python

    from kubebuddy.capacity.planner import CapacityPlanner
    from kubebuddy.schemas.snapshot import get_snapshot_from_config_file

    planner = CapacityPlanner.from_snapshot(get_snapshot_from_config_file("snapshot.yml"))
    result = planner.plan({"service_id": "postgres", "constraints": {"region": "eu-west"}})

Error handling:
    - Infeasible plans are returned as results, never raised.
    - Malformed requests raise :class:`~kubebuddy.exceptions.InvalidInputError`.
"""

from typing import Any, Dict, Iterable, List, Mapping, Optional, Union
from pydantic import ValidationError
import kubebuddy.config as config
from kubebuddy.capacity.aggregator import with_total_resources
from kubebuddy.capacity.allocation import get_allocated_resources, get_available_resources
from kubebuddy.capacity.diagnostics import AggregationDiagnostics
from kubebuddy.capacity.placement import can_place_on
from kubebuddy.exceptions import InvalidInputError
from kubebuddy.logger import get_logger
from kubebuddy.resources.vector import ResourceVector, average_utilization, can_fit_resources
from kubebuddy.schemas.assignments import Assignment
from kubebuddy.schemas.nodes import Node
from kubebuddy.schemas.planner import Candidate, Constraints, PlanRequest, PlanResult, Recommendation
from kubebuddy.schemas.services import Service
from kubebuddy.schemas.snapshot import Snapshot

logger = get_logger(__name__)

SERVICE_NOT_FOUND = "service not found"
FOUND_CANDIDATES = "found suitable nodes"
NO_CANDIDATES = "no suitable nodes found, recommendations generated"


def fit_score(utilization: float, target: float) -> float:
    """
    Score a projected utilization; the target utilization scores 100.

    Args:
        utilization (float): Average utilization after placement (0.0-1.0).
        target (float): Ideal utilization.

    Returns:
        float: Score, decreasing linearly with the distance to the target.
    """
    return 100.0 - 100.0 * abs(utilization - target)


def preferred_node_type(service: Service, default: str = 'baremetal') -> str:
    """
    Infer the node type to purchase from the service affinity rules.

    An affinity selector pinning the ``type`` label to ``vps`` or ``vm`` selects
    that type; the last such selector wins.

    Args:
        service (Service): Service to place.
        default (str): Type used when no selector pins a type.

    Returns:
        str: Preferred node type.
    """
    preferred = default
    for selector in service.placement.affinity:
        pinned = selector.match_labels.get('type')
        if pinned in ('vps', 'vm'):
            preferred = pinned
    return preferred


class CapacityPlanner:
    """
    Evaluates where a service can be placed.

    The planner is stateless between calls: every call of :meth:`plan` only
    reads the nodes, services and assignments given at construction time.
    """

    def __init__(self,
                 nodes: Iterable[Node],
                 services: Iterable[Service],
                 assignments: Iterable[Assignment],
                 target_utilization: Optional[float] = None,
                 default_node_type: Optional[str] = None) -> None:
        """
        Initialize the planner.

        Args:
            nodes (Iterable[Node]): Nodes with their derived total `resources` set.
            services (Iterable[Service]): All services.
            assignments (Iterable[Assignment]): All current assignments.
            target_utilization (float, optional): Ideal utilization used for scoring.
                Defaults to ``TARGET_UTILIZATION`` from the KubeBuddy configuration.
            default_node_type (str, optional): Node type recommended when affinity rules
                do not pin one. Defaults to ``DEFAULT_NODE_TYPE`` from the configuration.
        """
        self.nodes = list(nodes)
        self.services = list(services)
        self.assignments = list(assignments)
        self.services_by_id: Dict[str, Service] = {service.id: service for service in self.services}
        self.target_utilization = float(config.TARGET_UTILIZATION if target_utilization is None else target_utilization)
        self.default_node_type = default_node_type or config.DEFAULT_NODE_TYPE

    @classmethod
    def from_snapshot(cls,
                      snapshot: Snapshot,
                      diagnostics: Optional[AggregationDiagnostics] = None,
                      **kwargs: Any) -> "CapacityPlanner":
        """
        Build a planner from a snapshot, deriving node totals from installed hardware.

        Args:
            snapshot (Snapshot): Snapshot of all entities.
            diagnostics (AggregationDiagnostics, optional): Collector for skipped hardware data.
            **kwargs: Passed to the constructor.

        Returns:
            CapacityPlanner: Planner over the snapshot.
        """
        nodes = with_total_resources(snapshot.nodes,
                                     snapshot.components,
                                     snapshot.installed_components,
                                     diagnostics)
        return cls(nodes, snapshot.services, snapshot.assignments, **kwargs)

    @staticmethod
    def _parse_request(request: Union[PlanRequest, Mapping[str, Any]]) -> PlanRequest:
        if isinstance(request, PlanRequest):
            return request
        if not isinstance(request, Mapping):
            raise InvalidInputError(f"Plan request must be a mapping, got {type(request).__name__}")
        try:
            return PlanRequest.model_validate(dict(request))
        except ValidationError as err:
            raise InvalidInputError(f"Invalid plan request: {err}") from err

    def _matches_constraints(self, node: Node, constraints: Constraints) -> bool:
        if constraints.node_id and node.id != constraints.node_id:
            return False
        if constraints.provider and node.provider != constraints.provider:
            return False
        if constraints.region and node.region != constraints.region:
            return False
        if constraints.tags and not node.matches_tags(constraints.tags):
            return False
        return True

    def evaluate_node(self, service: Service, node: Node, constraints: Constraints) -> Optional[Candidate]:
        """
        Evaluate a single node for a service.

        Args:
            service (Service): Service to place.
            node (Node): Node to evaluate.
            constraints (Constraints): Request constraints.

        Returns:
            Optional[Candidate]: The scored candidate, or None if the node cannot host the service.
        """
        if not node.is_active:
            logger.debug("Node %s skipped: state is %s", node.id, node.state)
            return None

        if not self._matches_constraints(node, constraints):
            logger.debug("Node %s skipped: request constraints not met", node.id)
            return None

        if not constraints.node_id and not can_place_on(service, node, self.assignments):
            logger.debug("Node %s skipped: placement rules of %s not met", node.id, service.id)
            return None

        total = ResourceVector(node.resources)
        allocated = get_allocated_resources(node, self.assignments, self.services_by_id)
        available = get_available_resources(total, allocated)

        if not can_fit_resources(service.min_spec, available):
            logger.debug("Node %s skipped: minimum spec of %s does not fit", node.id, service.id)
            return None

        allocated_after = allocated.plus(service.min_spec)
        utilization = average_utilization(total, allocated_after)

        if constraints.min_buffer > 0 and utilization > 1.0 - constraints.min_buffer:
            logger.debug("Node %s skipped: utilization %.2f leaves less than %.0f%% free",
                         node.id, utilization, constraints.min_buffer * 100)
            return None

        remaining = get_available_resources(total, allocated_after)
        available_after = {key: value for key, value in remaining.items()
                           if key in allocated_after and total[key] > 0}

        return Candidate(
            node=node,
            utilization_after=utilization,
            available_after=available_after,
            score=fit_score(utilization, self.target_utilization),
        )

    def recommend(self, service: Service) -> List[Recommendation]:
        """
        Recommend hardware to purchase for a service no node can host.

        Args:
            service (Service): Service to place.

        Returns:
            List[Recommendation]: A single node sized after the service maximum spec.
        """
        return [
            Recommendation(
                type=preferred_node_type(service, self.default_node_type),
                spec=dict(service.max_spec),
                quantity=1,
                rationale="based on service max spec",
            )
        ]

    def plan(self, request: Union[PlanRequest, Mapping[str, Any]]) -> PlanResult:
        """
        Evaluate where a service can be placed.

        Args:
            request (Union[PlanRequest, Mapping]): Plan request or its dictionary form.

        Returns:
            PlanResult: Ranked candidates, or purchase recommendations when no node fits.

        Raises:
            InvalidInputError: If the request is malformed.
        """
        request = self._parse_request(request)

        service = self.services_by_id.get(request.service_id)
        if service is None:
            return PlanResult(feasible=False, message=SERVICE_NOT_FOUND)

        candidates = []
        for node in self.nodes:
            candidate = self.evaluate_node(service, node, request.constraints)
            if candidate is not None:
                candidates.append(candidate)

        candidates.sort(key=lambda c: (-c.score, c.node.id))

        if candidates:
            return PlanResult(feasible=True, candidates=candidates, message=FOUND_CANDIDATES)

        return PlanResult(feasible=False, recommendations=self.recommend(service), message=NO_CANDIDATES)
