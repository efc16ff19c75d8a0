"""Errors raised by language model gateways."""


class GatewayError(Exception):
    """Base class for gateway failures."""


class GatewayNotConfiguredError(GatewayError):
    """No provider or credentials are available."""


class GatewayRequestError(GatewayError):
    """The upstream call failed or timed out."""


class GatewayResponseError(GatewayError):
    """The upstream reply was empty or unusable."""
