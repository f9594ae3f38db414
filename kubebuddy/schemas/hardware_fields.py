"""
Hardware Spec Field Table

Vendor spec sheets do not agree on field names: a CPU may declare ``threads``,
``thread_count``, ``cores`` or ``core_count``; a memory module ``capacity_gb``
or ``size``. The :class:`HardwareFieldTable` lists, for every attribute the
aggregator extracts, the candidate field names in priority order.

The table is loaded from YAML so that it can follow vendor naming drift
without code changes. The packaged default lives in
``kubebuddy/config/hardware_fields.yml`` and can be replaced by pointing the
``KUBEBUDDY_HARDWARE_FIELDS`` environment variable at another file.

YAML Example:
-------------
.. code-block:: yaml

    categories:
      cpu: [cpu]
      ram: [ram, memory]
    cpu_count_fields: [threads, cores]
    ram_large_unit_fields: [capacity_gb]
    ram_base_unit_fields: [memory]
    large_unit_factor: 1024
"""

from functools import lru_cache
from typing import Dict, List, Optional
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator
import kubebuddy.config as config
from kubebuddy.config import load_yaml
from kubebuddy.exceptions import InvalidInputError

AGGREGATED_CATEGORIES = ('cpu', 'ram', 'storage', 'gpu', 'nic')


class HardwareFieldTable(BaseModel):
    """ Ordered candidate spec field names per extracted attribute. """
    categories: Dict[str, List[str]] = Field(
        default_factory=lambda: {
            'cpu': ['cpu'],
            'ram': ['ram', 'memory'],
            'storage': ['storage', 'nvme', 'ssd', 'hdd'],
            'gpu': ['gpu'],
            'nic': ['nic'],
        },
        description="Component types (and aliases) handled by each aggregated category."
    )
    cpu_count_fields: List[str] = Field(default_factory=lambda: ['threads', 'thread_count', 'cores', 'core_count'])
    ram_large_unit_fields: List[str] = Field(default_factory=lambda: ['capacity_gb', 'size_gb', 'memory_gb'])
    ram_base_unit_fields: List[str] = Field(default_factory=lambda: ['memory', 'size'])
    storage_size_fields: List[str] = Field(default_factory=lambda: ['size', 'capacity_gb', 'storage_gb', 'capacity'])
    gpu_vram_large_unit_fields: List[str] = Field(default_factory=lambda: ['vram_gb', 'memory_gb', 'video_memory_gb'])
    gpu_vram_base_unit_fields: List[str] = Field(default_factory=lambda: ['vram', 'memory'])
    nic_speed_fields: List[str] = Field(default_factory=lambda: ['speed_gbps'])
    large_unit_factor: int = Field(default=1024, gt=0, description="Conversion factor from large-unit fields to the base unit.")

    model_config = ConfigDict(extra="forbid")

    @field_validator('categories')
    def validate_categories(cls, value: Dict[str, List[str]]) -> Dict[str, List[str]]:
        """
        Validates that only aggregated categories are configured.

        Raises:
            ValueError: If an unknown category is configured.
        """
        unknown = set(value) - set(AGGREGATED_CATEGORIES)
        if unknown:
            raise ValueError(f"Unknown hardware categories: {sorted(unknown)}")
        return {category: [alias.lower() for alias in aliases] for category, aliases in value.items()}

    def category_of(self, component_type: str) -> Optional[str]:
        """
        Map a component type to the aggregated category handling it.

        Args:
            component_type (str): Component type as stored in the catalog.

        Returns:
            Optional[str]: Aggregated category, None if the type is not aggregated.
        """
        component_type = component_type.lower()
        for category, aliases in self.categories.items():
            if component_type in aliases:
                return category
        return None


def load_hardware_fields(yaml_file: str) -> HardwareFieldTable:
    """
    Load a hardware field table from a YAML file.

    Args:
        yaml_file (str): Path to the YAML file.

    Returns:
        HardwareFieldTable: Validated field table.

    Raises:
        InvalidInputError: If the file content is not a valid field table.
    """
    cfg = load_yaml(yaml_file) or {}
    try:
        return HardwareFieldTable(**cfg)
    except (ValidationError, TypeError) as err:
        raise InvalidInputError(f"Invalid hardware field table '{yaml_file}': {err}") from err


@lru_cache(maxsize=1)
def default_hardware_fields() -> HardwareFieldTable:
    """
    Return the configured hardware field table.

    Uses ``HARDWARE_FIELDS_FILE`` from the KubeBuddy configuration when set,
    the packaged default table otherwise. The table is read once per process.
    """
    return load_hardware_fields(config.HARDWARE_FIELDS_FILE or config.HARDWARE_FIELDS_DEFAULT_FILE)
