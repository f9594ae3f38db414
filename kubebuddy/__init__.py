""" KubeBuddy package. """
from dotenv import load_dotenv
from importlib.metadata import version, PackageNotFoundError

# load env vars from .kbenv
load_dotenv('.kbenv')

from kubebuddy.exceptions import KubeBuddyException, InvalidInputError
from kubebuddy.resources import ResourceVector, can_fit_resources
from kubebuddy.capacity.aggregator import aggregate_resources, with_total_resources
from kubebuddy.capacity.allocation import get_allocated_resources, get_available_resources
from kubebuddy.capacity.diagnostics import AggregationDiagnostics
from kubebuddy.capacity.placement import can_place_on
from kubebuddy.capacity.planner import CapacityPlanner
from kubebuddy.capacity.report import build_capacity_report
from kubebuddy.schemas.snapshot import get_snapshot_from_config_file


try:
    __version__ = version('kubebuddy')
except PackageNotFoundError:
    __version__ = "unknown"
