"""
Aggregation Diagnostics

Hardware aggregation never fails: a component missing from the catalog, a
spec field with an unexpected name or a RAID group with too few disks simply
contributes less (often nothing) to the node total. This silently undercounts
capacity.

:class:`AggregationDiagnostics` is an optional collector that records a
warning for each such skip so that operators can fix their hardware data.
Collecting diagnostics never changes aggregation results.

Example:
    .. code-block:: python

        diagnostics = AggregationDiagnostics()
        total = aggregate_resources(components, installed, "node-1", diagnostics)
        for warning in diagnostics:
            print(warning)
"""

from dataclasses import dataclass
from typing import Iterator, List
from kubebuddy.logger import get_logger

logger = get_logger(__name__)

COMPONENT_NOT_FOUND = 'component_not_found'
UNKNOWN_CATEGORY = 'unknown_category'
NO_MATCHING_FIELD = 'no_matching_field'
NON_NUMERIC_FIELD = 'non_numeric_field'
RAID_FALLBACK = 'raid_fallback'


@dataclass(frozen=True)
class AggregationWarning:
    """
    A hardware record that contributed less than expected to a node total.

    Attributes:
        node_id (str): Node being aggregated.
        reason (str): One of the reason constants of this module.
        record_id (str): Installed-component record, empty for RAID group warnings.
        component_id (str): Catalog component involved, if any.
        detail (str): Human readable explanation.
    """

    node_id: str
    reason: str
    record_id: str = ""
    component_id: str = ""
    detail: str = ""

    def __str__(self) -> str:
        where = f"node {self.node_id}"
        if self.component_id:
            where += f", component {self.component_id}"
        return f"[{self.reason}] {where}: {self.detail}"


class AggregationDiagnostics:
    """ Collects :class:`AggregationWarning` entries. """

    def __init__(self) -> None:
        self.warnings: List[AggregationWarning] = []

    def warn(self, node_id: str, reason: str, record_id: str = "", component_id: str = "", detail: str = "") -> None:
        """ Record a warning. """
        warning = AggregationWarning(node_id, reason, record_id or "", component_id or "", detail)
        self.warnings.append(warning)
        logger.debug("Hardware aggregation: %s", warning)

    def for_node(self, node_id: str) -> List[AggregationWarning]:
        """ Warnings recorded for one node. """
        return [w for w in self.warnings if w.node_id == node_id]

    def __iter__(self) -> Iterator[AggregationWarning]:
        return iter(self.warnings)

    def __len__(self) -> int:
        return len(self.warnings)
