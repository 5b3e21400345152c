from kuweni.service.gateway_client import LocalGateway


def get_gateway() -> LocalGateway:
    """The HTTP routes always call the adapters in-process (stateless, safe to create per-request)."""
    return LocalGateway()
