"""Error types for the EngagementHQ API client."""


class UpstreamError(Exception):
    """Base error for all EngagementHQ API failures."""


class UpstreamConnectionError(UpstreamError):
    """The API could not be reached."""


class AuthenticationError(UpstreamError):
    """The token endpoint rejected the credentials or answered unexpectedly."""


class NotAuthenticatedError(UpstreamError):
    """A call that needs a bearer token was made before authenticating."""

    def __init__(self) -> None:
        super().__init__("client not authenticated - call authenticate() first")


class UpstreamRequestError(UpstreamError):
    """An authenticated API request failed."""

    def __init__(self, detail: str, status_code: int | None = None) -> None:
        self.status_code = status_code
        super().__init__(detail)
