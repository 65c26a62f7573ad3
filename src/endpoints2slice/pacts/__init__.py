"""Public contracts — value types and manifest helpers."""

from endpoints2slice.pacts.types import (
    Address, EndpointPort, Subset, EndpointsResource, Endpoint, EndpointSlice,
)
from endpoints2slice.pacts.helpers import full_name, merge_diff

__all__ = [
    "Address",
    "EndpointPort",
    "Subset",
    "EndpointsResource",
    "Endpoint",
    "EndpointSlice",
    "full_name",
    "merge_diff",
]
