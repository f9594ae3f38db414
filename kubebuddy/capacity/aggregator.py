"""
Hardware Aggregator

Derives the total resources of a node from the hardware components installed
in it.

Aggregated resources:
---------------------
- ``cores``: CPU threads (or cores) x quantity.
- ``memory``: RAM capacity in MB x quantity. Gigabyte fields are converted.
- ``nvme``: storage capacity, RAID groups reduced with :mod:`kubebuddy.capacity.raid`.
- ``gpu``: number of GPUs.
- ``vram``: GPU memory in MB x quantity. Gigabyte fields are converted.
- ``bandwidth_gbps``: NIC link speed x quantity.

Spec field names are looked up in priority order in the configured
:class:`~kubebuddy.schemas.hardware_fields.HardwareFieldTable`; the first
positive numeric value wins. A record whose fields cannot be matched
contributes nothing. Aggregation never raises on bad hardware data; pass an
:class:`~kubebuddy.capacity.diagnostics.AggregationDiagnostics` to see what was skipped.

Example:
    .. code-block:: python

        total = aggregate_resources(snapshot.components, snapshot.installed_components, "node-1")
"""

from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence, Tuple
from kubebuddy.capacity import diagnostics as diag
from kubebuddy.capacity.diagnostics import AggregationDiagnostics
from kubebuddy.capacity.raid import calculate_raid_capacity, expand_disks, raid_falls_back
from kubebuddy.resources import numeric
from kubebuddy.resources.numeric import Number
from kubebuddy.resources.vector import ResourceVector
from kubebuddy.schemas.components import COMPONENT_TYPES, Component, InstalledComponent
from kubebuddy.schemas.hardware_fields import HardwareFieldTable, default_hardware_fields
from kubebuddy.schemas.nodes import Node


class HardwareAggregator:
    """ Sums installed hardware into node resource vectors. """

    def __init__(self, field_table: Optional[HardwareFieldTable] = None) -> None:
        """
        Initialize the aggregator.

        Args:
            field_table (HardwareFieldTable, optional): Spec field-name table.
                Defaults to the configured table.
        """
        self.fields = field_table or default_hardware_fields()

    def aggregate(self,
                  components: Iterable[Component],
                  installed: Iterable[InstalledComponent],
                  node_id: str,
                  diagnostics: Optional[AggregationDiagnostics] = None) -> ResourceVector:
        """
        Compute the total resources of one node.

        Args:
            components (Iterable[Component]): Hardware catalog.
            installed (Iterable[InstalledComponent]): Installed-component records; records
                of other nodes are ignored.
            node_id (str): Node to aggregate.
            diagnostics (AggregationDiagnostics, optional): Collector for skipped data.

        Returns:
            ResourceVector: Total resources of the node.
        """
        catalog = {component.id: component for component in components}
        resources = ResourceVector()
        raid_groups: Dict[Tuple[str, str], List[Tuple[Number, int]]] = {}
        standalone: List[Tuple[Number, int]] = []

        for record in installed:
            if record.node_id != node_id:
                continue

            component = catalog.get(record.component_id)
            if component is None:
                self._warn(diagnostics, node_id, diag.COMPONENT_NOT_FOUND, record,
                           detail=f"component '{record.component_id}' is not in the catalog")
                continue

            category = self.fields.category_of(component.type)
            if category is None:
                if component.type not in COMPONENT_TYPES:
                    self._warn(diagnostics, node_id, diag.UNKNOWN_CATEGORY, record, component,
                               f"component type '{component.type}' is not aggregated")
                continue

            quantity = record.quantity
            if quantity <= 0:
                continue

            if category == 'cpu':
                count = self._lookup(component, self.fields.cpu_count_fields, node_id, record, diagnostics)
                if count > 0:
                    resources.accumulate('cores', numeric.normalize(numeric.scale(count, quantity)))

            elif category == 'ram':
                size = self._lookup_sized(component,
                                          self.fields.ram_large_unit_fields,
                                          self.fields.ram_base_unit_fields,
                                          node_id, record, diagnostics)
                if size > 0:
                    resources.accumulate('memory', numeric.normalize(numeric.scale(size, quantity)))

            elif category == 'storage':
                size = self._lookup(component, self.fields.storage_size_fields, node_id, record, diagnostics)
                if size > 0:
                    if record.raid_key is not None:
                        raid_groups.setdefault(record.raid_key, []).append((size, quantity))
                    else:
                        standalone.append((size, quantity))

            elif category == 'gpu':
                resources.accumulate('gpu', quantity)
                vram = self._lookup_sized(component,
                                          self.fields.gpu_vram_large_unit_fields,
                                          self.fields.gpu_vram_base_unit_fields,
                                          node_id, record, diagnostics)
                if vram > 0:
                    resources.accumulate('vram', numeric.normalize(numeric.scale(vram, quantity)))

            elif category == 'nic':
                speed = self._lookup(component, self.fields.nic_speed_fields, node_id, record, diagnostics)
                if speed > 0:
                    resources.accumulate('bandwidth_gbps', numeric.scale(speed, quantity))

        storage = self._storage_capacity(raid_groups, standalone, node_id, diagnostics)
        if storage > 0:
            resources['nvme'] = numeric.normalize(storage)

        return resources

    def _storage_capacity(self,
                          raid_groups: Mapping[Tuple[str, str], List[Tuple[Number, int]]],
                          standalone: Sequence[Tuple[Number, int]],
                          node_id: str,
                          diagnostics: Optional[AggregationDiagnostics]) -> Number:
        """ Sum RAID group capacities and non-redundant disks. """
        total: Number = 0
        for (group, level), disks in raid_groups.items():
            disk_count = len(expand_disks(disks))
            if disk_count and raid_falls_back(level, disk_count):
                self._warn(diagnostics, node_id, diag.RAID_FALLBACK,
                           detail=f"RAID group '{group}' has {disk_count} disk(s), "
                                  f"too few for {level}; counted as plain sum")
            total = numeric.add(total, calculate_raid_capacity(disks, level))
        for size, quantity in standalone:
            total = numeric.add(total, numeric.scale(size, quantity))
        return total

    def _find(self, specs: Mapping[str, Any], fields: Sequence[str]) -> Tuple[Optional[Number], List[str]]:
        """ First positive numeric value among `fields`, and the fields holding non-numeric values. """
        non_numeric = []
        for name in fields:
            if name not in specs:
                continue
            value = specs[name]
            if not numeric.is_number(value):
                non_numeric.append(name)
                continue
            if value > 0:
                return value, non_numeric
        return None, non_numeric

    def _lookup(self,
                component: Component,
                fields: Sequence[str],
                node_id: str,
                record: InstalledComponent,
                diagnostics: Optional[AggregationDiagnostics]) -> Number:
        """ Per-unit value of the first matching field, 0 if none matches. """
        value, non_numeric = self._find(component.specs, fields)
        if value is None:
            self._warn_unmatched(diagnostics, node_id, record, component, fields, non_numeric)
            return 0
        return value

    def _lookup_sized(self,
                      component: Component,
                      large_unit_fields: Sequence[str],
                      base_unit_fields: Sequence[str],
                      node_id: str,
                      record: InstalledComponent,
                      diagnostics: Optional[AggregationDiagnostics]) -> Number:
        """ Per-unit size in the base unit; large-unit fields take precedence and are converted. """
        value, non_numeric_large = self._find(component.specs, large_unit_fields)
        if value is not None:
            return numeric.scale(value, self.fields.large_unit_factor)
        value, non_numeric_base = self._find(component.specs, base_unit_fields)
        if value is not None:
            return value
        self._warn_unmatched(diagnostics, node_id, record, component,
                             list(large_unit_fields) + list(base_unit_fields),
                             non_numeric_large + non_numeric_base)
        return 0

    def _warn_unmatched(self, diagnostics, node_id, record, component, fields, non_numeric) -> None:
        if non_numeric:
            self._warn(diagnostics, node_id, diag.NON_NUMERIC_FIELD, record, component,
                       f"spec field(s) {', '.join(non_numeric)} are not numeric")
        else:
            self._warn(diagnostics, node_id, diag.NO_MATCHING_FIELD, record, component,
                       f"none of the spec fields {', '.join(fields)} holds a positive value")

    @staticmethod
    def _warn(diagnostics: Optional[AggregationDiagnostics],
              node_id: str,
              reason: str,
              record: Optional[InstalledComponent] = None,
              component: Optional[Component] = None,
              detail: str = "") -> None:
        if diagnostics is None:
            return
        diagnostics.warn(node_id,
                         reason,
                         record_id=record.id if record else "",
                         component_id=component.id if component else (record.component_id if record else ""),
                         detail=detail)


def aggregate_resources(components: Iterable[Component],
                        installed: Iterable[InstalledComponent],
                        node_id: str,
                        diagnostics: Optional[AggregationDiagnostics] = None,
                        field_table: Optional[HardwareFieldTable] = None) -> ResourceVector:
    """
    Compute the total resources of a node from its installed components.

    Args:
        components (Iterable[Component]): Hardware catalog.
        installed (Iterable[InstalledComponent]): Installed-component records.
        node_id (str): Node to aggregate.
        diagnostics (AggregationDiagnostics, optional): Collector for skipped data.
        field_table (HardwareFieldTable, optional): Spec field-name table.

    Returns:
        ResourceVector: Total resources of the node.
    """
    return HardwareAggregator(field_table).aggregate(components, installed, node_id, diagnostics)


def with_total_resources(nodes: Iterable[Node],
                         components: Iterable[Component],
                         installed: Iterable[InstalledComponent],
                         diagnostics: Optional[AggregationDiagnostics] = None,
                         field_table: Optional[HardwareFieldTable] = None) -> List[Node]:
    """
    Return copies of `nodes` with their derived total resources filled in.

    The given nodes are not modified.

    Args:
        nodes (Iterable[Node]): Nodes to resolve.
        components (Iterable[Component]): Hardware catalog.
        installed (Iterable[InstalledComponent]): Installed-component records of all nodes.
        diagnostics (AggregationDiagnostics, optional): Collector for skipped data.
        field_table (HardwareFieldTable, optional): Spec field-name table.

    Returns:
        List[Node]: Node copies with `resources` set.
    """
    aggregator = HardwareAggregator(field_table)
    components = list(components)
    by_node: Dict[str, List[InstalledComponent]] = {}
    for record in installed:
        by_node.setdefault(record.node_id, []).append(record)

    return [
        node.model_copy(update={
            'resources': dict(aggregator.aggregate(components, by_node.get(node.id, []), node.id, diagnostics))
        })
        for node in nodes
    ]
