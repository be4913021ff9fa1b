class ProviderUpstreamError(RuntimeError):
    """Raised when the messaging provider fails (network errors, non-2xx responses)."""

    def __init__(self, message: str, status_code: int | None = None, error_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.error_code = error_code


class ProviderConfigError(RuntimeError):
    """Raised when the provider client is needed but credentials or base URL are missing."""
    pass
