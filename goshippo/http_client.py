"""HTTP agent abstraction for dependency injection and testability."""

from http.cookiejar import CookieJar

import requests

from .logging_config import get_module_logger

logger = get_module_logger("http_client")


class HttpClient:
    """
    HTTP agent used by ShippoClient to send requests.

    Wraps a requests.Session so cookies persist across requests. Any object
    with a compatible send(request) method can be injected instead, which
    enables easy mocking in unit tests.
    """

    def __init__(self, session: requests.Session | None = None, timeout: float | None = None):
        """
        Initialize the agent

        Args:
            session: Session to send through (a new one with an empty cookie jar if None)
            timeout: Optional request timeout in seconds
        """
        self.session = session or requests.Session()
        self.timeout = timeout

    @property
    def cookies(self) -> CookieJar:
        """Cookie store shared by every request sent through this agent"""
        return self.session.cookies

    def send(self, request: requests.Request, **kwargs) -> requests.Response:
        """
        Send a request.

        The request is prepared against the session so stored cookies are
        attached; cookies set by the response are stored back.

        Args:
            request: Unprepared requests.Request
            **kwargs: Additional arguments to pass to Session.send()

        Returns:
            requests.Response object

        Raises:
            requests.exceptions.RequestException: On transport failures
        """
        prepared = self.session.prepare_request(request)
        kwargs.setdefault("timeout", self.timeout)
        logger.debug(f"{prepared.method} {prepared.url}")
        return self.session.send(prepared, **kwargs)

    def close(self) -> None:
        """Close the underlying session and release pooled connections."""
        self.session.close()
