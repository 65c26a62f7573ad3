"""Endpoints → EndpointSlice conversion."""

import copy
import fnmatch

from endpoints2slice.pacts.helpers import full_name
from endpoints2slice.pacts.types import (
    Address, Endpoint, EndpointPort, EndpointSlice, EndpointsResource,
)
from endpoints2slice.core.address import address_family, all_ipv6, is_ipv6
from endpoints2slice.core.constants import (
    ADDRESS_TYPE_IPV4, ADDRESS_TYPE_IPV6, ENDPOINTS_KIND, LABEL_SERVICE_NAME,
)


def _endpoint_from_address(address: Address, ready: bool) -> Endpoint:
    """Build a single-address Endpoint record from an Endpoints address."""
    return Endpoint(
        addresses=[address.ip],
        ready=ready,
        target_ref=copy.deepcopy(address.target_ref),
        node_name=address.node_name,
    )


def _endpoints_from_addresses(addresses: list[Address], address_type: str,
                              ready: bool) -> list[Endpoint]:
    """Keep the addresses matching *address_type*, in order."""
    want_ipv6 = address_type == ADDRESS_TYPE_IPV6
    return [_endpoint_from_address(a, ready) for a in addresses
            if is_ipv6(a.ip) == want_ipv6]


def convert(endpoints: EndpointsResource | dict) -> EndpointSlice:
    """Derive an EndpointSlice from an Endpoints resource.

    Only the first subset is consulted. The address type is IPv6 when every
    address of that subset (ready and not-ready) is IPv6, IPv4 otherwise;
    addresses of the other family are left out. Ready endpoints come first.
    Accepts a raw manifest dict as well.
    """
    if isinstance(endpoints, dict):
        endpoints = EndpointsResource.from_manifest(endpoints)

    # TODO: dual-stack would need one slice per family instead of a single address_type
    endpoint_slice = EndpointSlice(
        name=endpoints.name,
        labels={LABEL_SERVICE_NAME: endpoints.name},
        address_type=ADDRESS_TYPE_IPV4,
        namespace=endpoints.namespace,
    )
    if not endpoints.subsets:
        return endpoint_slice

    subset = endpoints.subsets[0]
    endpoint_slice.ports = [EndpointPort(p.port, p.name, p.protocol)
                            for p in subset.ports]

    everything = subset.ready_addresses + subset.not_ready_addresses
    if all_ipv6(a.ip for a in everything):
        endpoint_slice.address_type = ADDRESS_TYPE_IPV6

    endpoint_slice.endpoints = (
        _endpoints_from_addresses(subset.ready_addresses,
                                  endpoint_slice.address_type, True)
        + _endpoints_from_addresses(subset.not_ready_addresses,
                                    endpoint_slice.address_type, False)
    )
    return endpoint_slice


def conversion_warnings(endpoints: EndpointsResource,
                        endpoint_slice: EndpointSlice) -> list[str]:
    """List what convert() dropped: extra subsets and off-family addresses."""
    warnings: list[str] = []
    name = endpoints.name or "?"
    if len(endpoints.subsets) > 1:
        warnings.append(
            f"Endpoints '{name}': only the first of {len(endpoints.subsets)} "
            f"subsets was converted, the rest are ignored")
    if not endpoints.subsets:
        return warnings
    subset = endpoints.subsets[0]
    dropped = [a.ip for a in subset.ready_addresses + subset.not_ready_addresses
               if address_family(a.ip) != endpoint_slice.address_type]
    if dropped:
        warnings.append(
            f"Endpoints '{name}': {len(dropped)} address(es) excluded, not "
            f"{endpoint_slice.address_type}: {', '.join(dropped)}")
    return warnings


def _is_excluded(name: str, exclude_list: list[str]) -> bool:
    """Check if an Endpoints name matches any exclude pattern (supports wildcards)."""
    return any(fnmatch.fnmatch(name, pattern) for pattern in exclude_list)


def convert_manifests(manifests: dict[str, list[dict]],
                      config: dict) -> tuple[list[EndpointSlice], list[str]]:
    """Convert every Endpoints manifest: returns (slices, warnings)."""
    warnings: list[str] = []
    slices: list[EndpointSlice] = []
    exclude = config.get("exclude") or []
    for manifest in manifests.get(ENDPOINTS_KIND, []):
        endpoints = EndpointsResource.from_manifest(manifest)
        if not endpoints.name:
            warnings.append(f"{full_name(manifest)} has no metadata.name — skipped")
            continue
        if _is_excluded(endpoints.name, exclude):
            continue
        endpoint_slice = convert(endpoints)
        warnings.extend(conversion_warnings(endpoints, endpoint_slice))
        slices.append(endpoint_slice)
    return slices, warnings
