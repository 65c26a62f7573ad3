"""endpoints2slice — mirror legacy Endpoints into discovery.k8s.io/v1 EndpointSlices.

Re-exports the public API. Callers can import directly from here or from
endpoints2slice.pacts.
"""

from endpoints2slice.pacts.types import (
    Address, EndpointPort, Subset, EndpointsResource, Endpoint, EndpointSlice,
)
from endpoints2slice.core.address import is_ipv6
from endpoints2slice.core.convert import convert, conversion_warnings, convert_manifests
from endpoints2slice.core.provider import EndpointSliceProvider, create_or_patch

__all__ = [
    "Address",
    "EndpointPort",
    "Subset",
    "EndpointsResource",
    "Endpoint",
    "EndpointSlice",
    "is_ipv6",
    "convert",
    "conversion_warnings",
    "convert_manifests",
    "EndpointSliceProvider",
    "create_or_patch",
]
