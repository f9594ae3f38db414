"""
Shared KubeBuddy Schema Types

This module defines the reusable types shared by the KubeBuddy schemas.

Components:
-----------
- `Resources`: Resource vector field type, a mapping of resource keys to numbers.
- `NodeType`: Allowed node types (`baremetal`, `vps`, `vm`).
- `NodeState`: Allowed node lifecycle states.

Resource values are validated strictly: integers stay integers and fractional
values stay floats, so that serialized vectors preserve the mixed
integer/fractional nature of the data. Booleans and numeric strings are rejected.

Example Usage:
--------------
    >>> class Demand(BaseModel):
    ...     spec: Resources
    >>> Demand(spec={"cores": 4, "bandwidth_gbps": 2.5}).spec
    {'cores': 4, 'bandwidth_gbps': 2.5}
"""

from typing import Dict, Literal, Union
from pydantic import StrictFloat, StrictInt


Resources = Dict[str, Union[StrictInt, StrictFloat]]
""" Mapping of resource keys (e.g. `cores`, `memory`, `nvme`) to integral or fractional values. """

NodeType = Literal['baremetal', 'vps', 'vm']
""" Physical server, virtual private server or virtual machine. """

NodeState = Literal['active', 'maintenance', 'decommissioned']
""" Lifecycle state of a node. Only active nodes are considered for placement. """
