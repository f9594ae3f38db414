"""
RAID Capacity Calculator

Computes the usable capacity of a RAID array from the sizes of its disks.

Supported levels:
-----------------
- ``raid0``: striping, capacity is the sum of all disks.
- ``raid1``: mirroring, capacity is the smallest disk.
- ``raid5``: single parity, ``(n - 1) * smallest`` for at least 3 disks.
- ``raid6``: double parity, ``(n - 2) * smallest`` for at least 4 disks.
- ``raid10``: mirrored stripes, ``sum / 2`` for an even number of at least 4 disks.

Arrays that cannot be built at the requested level (too few disks, odd disk
count for ``raid10``) and unknown or empty levels fall back to the plain sum of
all disks. The calculator never raises.

Example:
    >>> calculate_raid_capacity([(100, 3)], 'raid5')
    200
    >>> calculate_raid_capacity([(100, 2)], 'raid5')
    200
"""

from typing import Iterable, List, Optional, Tuple
from kubebuddy.resources import numeric
from kubebuddy.resources.numeric import Number

RAID_NONE = 'none'
RAID_LEVELS = ('raid0', 'raid1', 'raid5', 'raid6', 'raid10')

_RAID_ALIASES = {
    '0': 'raid0',
    '1': 'raid1',
    '5': 'raid5',
    '6': 'raid6',
    '10': 'raid10',
    'none': RAID_NONE,
}


def normalize_raid_level(level: Optional[str]) -> Optional[str]:
    """
    Convert a RAID level to its canonical form.

    Both numeric (``'5'``) and named (``'RAID5'``) forms are accepted,
    case and surrounding whitespace are ignored.

    Args:
        level (Optional[str]): RAID level as entered by a user.

    Returns:
        Optional[str]: Canonical level (``'raid0'`` ... ``'raid10'`` or ``'none'``),
        None for an empty level.

    Raises:
        ValueError: If the level is not a known RAID level.
    """
    if level is None:
        return None
    normalized = str(level).strip().lower()
    if not normalized:
        return None
    if normalized in RAID_LEVELS:
        return normalized
    if normalized in _RAID_ALIASES:
        return _RAID_ALIASES[normalized]
    raise ValueError(f"Invalid RAID level '{level}' (use 0, 1, 5, 6 or 10)")


def raid_falls_back(level: Optional[str], disk_count: int) -> bool:
    """
    Tell whether an array of `disk_count` disks at `level` degrades to a plain sum.

    Args:
        level (Optional[str]): Canonical RAID level.
        disk_count (int): Number of disks in the array.

    Returns:
        bool: True if the array cannot be formed and its capacity is the sum of its disks.
    """
    if level == 'raid5':
        return disk_count < 3
    if level == 'raid6':
        return disk_count < 4
    if level == 'raid10':
        return disk_count < 4 or disk_count % 2 != 0
    return level not in ('raid0', 'raid1')


def expand_disks(disks: Iterable[Tuple[Number, int]]) -> List[Number]:
    """ Expand (size, quantity) pairs into one entry per physical disk. """
    expanded = []
    for size, quantity in disks:
        expanded.extend([size] * max(int(quantity), 0))
    return expanded


def _sum(sizes: List[Number]) -> Number:
    total = 0
    for size in sizes:
        total = numeric.add(total, size)
    return total


def calculate_raid_capacity(disks: Iterable[Tuple[Number, int]], level: Optional[str]) -> Number:
    """
    Compute the usable capacity of one RAID group.

    Args:
        disks (Iterable[Tuple[Number, int]]): (disk size, quantity) pairs of the group.
        level (Optional[str]): RAID level of the group, canonical form expected.

    Returns:
        Number: Usable capacity, 0 for an empty group.
    """
    sizes = expand_disks(disks)
    if not sizes:
        return 0

    count = len(sizes)
    if level == 'raid1':
        return min(sizes)
    if level == 'raid0' or raid_falls_back(level, count):
        return _sum(sizes)
    if level == 'raid5':
        return numeric.scale(min(sizes), count - 1)
    if level == 'raid6':
        return numeric.scale(min(sizes), count - 2)
    # raid10
    return numeric.normalize(_sum(sizes) / 2)
