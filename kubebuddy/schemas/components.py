"""
KubeBuddy Hardware Component Schemas

This module defines the hardware catalog and the records that install
catalog components into nodes.

Key Components:
---------------
- **Component**: A catalog entry (CPU, RAM, storage, GPU, NIC, PSU, other) with
  a free-form `specs` map. Spec field names and units are vendor specific.
- **InstalledComponent**: Links a node to a component with a quantity, an optional
  physical slot and serial number and, for storage, an optional RAID level and group.

Storage records that share a RAID group and level are aggregated as one array.

YAML Example:
-------------
.. code-block:: yaml

    components:
      - id: epyc-7443
        type: cpu
        manufacturer: AMD
        model: EPYC 7443
        specs:
          cores: 24
          threads: 48
      - id: nvme-1tb
        type: storage
        specs:
          capacity_gb: 1000

    installed_components:
      - node_id: node-1
        component_id: nvme-1tb
        quantity: 4
        raid_level: "10"
        raid_group: md0
"""

from typing import Any, Dict, List, Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator
from kubebuddy.capacity.raid import normalize_raid_level

COMPONENT_TYPES: List[str] = ['cpu', 'ram', 'storage', 'gpu', 'nic', 'psu', 'other']


class Component(BaseModel):
    """ Hardware catalog entry. """
    id: str = Field(..., description="Unique component identifier.")
    name: str = Field(default="", description="Component name.")
    type: str = Field(..., description="Component category (cpu, ram, storage, gpu, nic, psu, other).")
    manufacturer: str = Field(default="", description="Manufacturer.")
    model: str = Field(default="", description="Model reference.")
    specs: Dict[str, Any] = Field(default_factory=dict, description="Vendor specifications.")
    notes: str = Field(default="", description="Free-form notes.")

    model_config = ConfigDict(extra="forbid")

    @field_validator('type', mode='before')
    def normalize_type(cls, value: Any) -> Any:
        """ Categories are matched case-insensitively. """
        if isinstance(value, str):
            return value.strip().lower()
        return value


class InstalledComponent(BaseModel):
    """ A component installed in a node. """
    id: str = Field(default="", description="Record identifier.")
    node_id: str = Field(..., description="Node the component is installed in.")
    component_id: str = Field(..., description="Installed catalog component.")
    quantity: int = Field(default=1, ge=0, description="Number of installed units.")
    slot: Optional[str] = Field(default=None, description="Physical slot or position (e.g. 'DIMM0-3', 'Bay 0').")
    serial_no: Optional[str] = Field(default=None, description="Serial number.")
    notes: Optional[str] = Field(default=None, description="Installation notes.")
    raid_level: Optional[str] = Field(default=None, description="RAID level for storage: 0, 1, 5, 6 or 10.")
    raid_group: Optional[str] = Field(default=None, description="RAID group; storage records of a group form one array.")

    model_config = ConfigDict(extra="forbid")

    @field_validator('raid_level', mode='before')
    def validate_raid_level(cls, value: Any) -> Optional[str]:
        """
        Normalizes the RAID level to its canonical form.

        Args:
            value (Any): RAID level, numeric (`5`, `"10"`) or named (`"raid5"`).

        Returns:
            Optional[str]: Canonical RAID level or None.

        Raises:
            ValueError: If the RAID level is unknown.
        """
        if value is None:
            return None
        return normalize_raid_level(str(value))

    @property
    def raid_key(self) -> Optional[tuple]:
        """ (group, level) identifying the RAID array of this record, None if not part of one. """
        if self.raid_group and self.raid_level and self.raid_level != 'none':
            return (self.raid_group, self.raid_level)
        return None
