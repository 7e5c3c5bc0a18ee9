"""
Custom exceptions for goshippo
"""


class GoShippoError(Exception):
    """Base exception for all goshippo errors"""

    code: int = 500

    def __init__(self, message: str, code: int | None = None):
        if code is not None:
            self.code = code
        super().__init__(message)


class UnparsableContentError(GoShippoError):
    """
    Raised when the server returns a body that is not valid JSON.

    This is checked before the HTTP status, so a malformed body on a failing
    request is reported here rather than as a ShippoAPIError.
    """

    def __init__(self, error: Exception, content: str, code: int = 500):
        self.error = error
        self.content = content
        super().__init__("Server returned unparsable content.", code=code)


class ShippoAPIError(GoShippoError):
    """
    Raised when Shippo answers with a non-2xx status.

    Includes the status code and the full textual response (status line,
    headers and body) to enable better user guidance.
    """

    def __init__(self, status_code: int, response_text: str):
        self.status_code = status_code
        self.response_text = response_text
        super().__init__(response_text, code=status_code)

    def get_user_guidance(self) -> str:
        """Get user-friendly guidance based on status code"""
        if self.status_code == 401:
            return (
                "Authentication failed. Please check your Shippo API token.\n"
                "Test and live tokens are different, make sure you use the right one."
            )
        elif self.status_code == 403:
            return "The token is not allowed to access this resource."
        elif self.status_code == 404:
            return (
                "Resource not found. Please check the path you requested.\n"
                "Paths must not start with a leading slash."
            )
        elif self.status_code == 429:
            return "Rate limit exceeded. Please wait a few moments and try again."
        elif self.status_code >= 500:
            return (
                "Shippo server error. This is usually temporary.\n"
                "Please try again in a few moments."
            )
        else:
            return "Please check the request parameters and try again."


class PollTimeoutError(GoShippoError):
    """Raised when polling an asynchronous job exceeds the maximum wait time"""

    def __init__(self, max_wait: float, elapsed: float, code: int = 488):
        self.max_wait = max_wait
        self.elapsed = elapsed
        super().__init__("Maximum wait time exceeded.", code=code)


class ConfigurationError(GoShippoError):
    """
    Raised when required configuration values are missing or invalid.

    Missing required values are caught early rather than silently falling
    back to hardcoded defaults.
    """

    def __init__(self, message: str, config_key: str | None = None):
        self.config_key = config_key
        if config_key:
            super().__init__(f"Configuration error for '{config_key}': {message}")
        else:
            super().__init__(f"Configuration error: {message}")
