"""goshippo - a thin client for Shippo's REST API"""

from .client import ShippoClient
from .exceptions import (
    ConfigurationError,
    GoShippoError,
    PollTimeoutError,
    ShippoAPIError,
    UnparsableContentError,
)
from .http_client import HttpClient

__all__ = [
    "ConfigurationError",
    "GoShippoError",
    "HttpClient",
    "PollTimeoutError",
    "ShippoAPIError",
    "ShippoClient",
    "UnparsableContentError",
]
