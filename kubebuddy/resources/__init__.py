""" Resource vectors and their numeric semantics. """

from kubebuddy.resources.numeric import Number
from kubebuddy.resources.vector import ResourceVector, can_fit_resources, average_utilization
