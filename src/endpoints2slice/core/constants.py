"""Constants shared by the converter, the provider, and the CLI."""

# Label tying an EndpointSlice to the Service it belongs to
LABEL_SERVICE_NAME = "kubernetes.io/service-name"

ADDRESS_TYPE_IPV4 = "IPv4"
ADDRESS_TYPE_IPV6 = "IPv6"

ENDPOINTS_KIND = "Endpoints"
ENDPOINTSLICE_KIND = "EndpointSlice"
ENDPOINTSLICE_API_VERSION = "discovery.k8s.io/v1"

# Identity of the slice mirrored for the API server's own Service
DEFAULT_NAMESPACE = "default"
DEFAULT_SERVICE_NAME = "kubernetes"

CONFIG_FILENAME = "endpoints2slice.yaml"
DEFAULT_OUTPUT_FILE = "endpointslices.yaml"
