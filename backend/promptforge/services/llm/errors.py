"""
Gateway error taxonomy.

Every failure a provider call can produce is raised as a GatewayError
subclass so route handlers can map them to HTTP responses in one place.
"""


class GatewayError(Exception):
    """Base class for all gateway failures."""


class ConfigurationError(GatewayError, ValueError):
    """The selected provider is missing required configuration (API key)."""


class UnsupportedProviderError(GatewayError, ValueError):
    """The provider tag is not one the gateway knows how to route."""

    def __init__(self, provider):
        self.provider = provider
        super().__init__(f"unsupported provider: {provider}")


class TransportError(GatewayError):
    """The HTTP exchange itself failed (connection refused, timeout, ...)."""


class SerializationError(GatewayError):
    """A request or response body was not the JSON we expected."""


class ProviderResponseError(GatewayError):
    """The provider answered with a non-2xx status."""

    def __init__(self, provider: str, status_code: int, body: str):
        self.provider = provider
        self.status_code = status_code
        self.body = body
        super().__init__(
            f"{provider} API request failed with status {status_code}: {body}"
        )


class EmptyResponseError(ProviderResponseError):
    """A 2xx response that carried no choices / content blocks."""

    def __init__(self, provider: str, status_code: int = 200, body: str = ""):
        super().__init__(provider, status_code, body)
        # Replace the generic message with the short diagnostic
        self.args = (f"no response from {provider}",)


class AnalysisError(GatewayError):
    """One branch of a dual analysis failed; the cause holds the original error."""
