"""
Client for Shippo's REST API
https://goshippo.com/docs/reference

A light-weight wrapper that hides the request cycle: it adds the
authentication and content headers, encodes PUT/POST data as JSON, decodes
JSON responses and turns failures into exceptions. It does not model the
resources (addresses, shipments, rates) the web service exposes; callers get
plain decoded JSON back.

A ShippoClient instance is not safe for concurrent use. The agent's cookie
jar and last_response are shared by every call, so callers that need
threads must use one client per thread or synchronise externally.
"""

import json
import time
from typing import Any

import requests

from .config import Config, config
from .exceptions import (
    ConfigurationError,
    PollTimeoutError,
    ShippoAPIError,
    UnparsableContentError,
)
from .http_client import HttpClient
from .logging_config import get_module_logger

logger = get_module_logger("client")


class ShippoClient:
    """
    Client for the Shippo REST API

    Example:
        >>> shippo = ShippoClient(token="shippo_test_xxx", version="2018-02-08")
        >>> addresses = shippo.get("addresses")

    Paths passed to get, get_all, poll, post, put and delete must not start
    with a slash.
    """

    def __init__(
        self,
        token: str,
        version: str | None = None,
        debug_flag: bool = False,
        agent: Any | None = None,
        config_obj: Config | None = None,
    ):
        """
        Initialize the client. No network I/O happens here.

        Args:
            token: Shippo API token (test or live)
            version: API version to request, like "2018-02-08". If None, the
                     version configured in the Shippo account is used.
            debug_flag: Spare writable flag; when set, every request/response
                        pair is logged at DEBUG level
            agent: Object with a send(request) method (built lazily if None)
            config_obj: Config object (uses global config if None)

        Raises:
            ConfigurationError: If the token is empty
        """
        if not token:
            raise ConfigurationError("an API token is required", config_key="token")

        self._token = token
        self._version = version
        self.debug_flag = debug_flag
        self.config = config_obj or config
        self.last_response: requests.Response | None = None

        self._agent = agent
        self._owns_agent = False

        self.base_url = self.config.get("api.shippo.base_url", "https://api.goshippo.com")
        self.auth_scheme = self.config.get("api.shippo.auth_scheme", "ShippoToken")
        self.version_header = self.config.get("api.shippo.version_header", "Shippo-API-Version")

    @property
    def token(self) -> str:
        return self._token

    @property
    def version(self) -> str | None:
        return self._version

    @property
    def agent(self):
        """HTTP agent, a cookie-keeping HttpClient unless one was supplied"""
        if self._agent is None:
            self._agent = HttpClient(timeout=self.config.get("api.timeouts.api_request"))
            self._owns_agent = True
        return self._agent

    def close(self) -> None:
        """Close the default agent. Injected agents are left to their owner."""
        if self._owns_agent and self._agent is not None:
            self._agent.close()
            self._agent = None
            self._owns_agent = False

    def __enter__(self) -> "ShippoClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    # Request methods

    def get(self, path: str, params: dict[str, Any] | None = None) -> Any:
        """
        Perform a GET request, used for reading data from the service

        Args:
            path: Path of the REST interface, e.g. "addresses"
            params: Query parameters added to the URL

        Returns:
            Decoded JSON response
        """
        request = self._build_request("GET", self._create_uri(path), params=params)
        return self._process_request(request)

    def get_all(self, path: str, params: dict[str, Any] | None = None) -> Any:
        """
        Perform as many GET requests as needed to fetch all pages of data

        Follows the "next" URL of each page. If any page fails, the error
        propagates and the results gathered so far are discarded.

        Args:
            path: Path of the REST interface
            params: Query parameters for the first page

        Returns:
            The first page's response, with the results of every page
            concatenated in its "results" key
        """
        request = self._build_request("GET", self._create_uri(path), params=params)
        base_response = self._process_request(request)

        get_more = base_response.get("next")
        pages = 1
        while get_more:
            pages += 1
            logger.debug(f"Fetching page {pages} of {path}: {get_more}")
            response = self._process_request(self._build_request("GET", get_more))
            base_response.setdefault("results", []).extend(response.get("results") or [])
            get_more = response.get("next")

        logger.debug(f"Fetched {pages} page(s) of {path}")
        return base_response

    def poll(
        self,
        path: str,
        params: dict[str, Any] | None = None,
        max_wait: float | None = None,
    ) -> Any:
        """
        Poll a GET endpoint with exponential backoff

        Waits 1 second, then 2, then 4, ... while the response status is
        QUEUED or WAITING, until the total elapsed time passes max_wait.

        Args:
            path: Path of the REST interface
            params: Query parameters added to the URL
            max_wait: Longest time to wait in seconds (defaults to 70)

        Returns:
            The first response whose status is no longer in progress

        Raises:
            PollTimeoutError: If max_wait is exceeded
        """
        if max_wait is None:
            max_wait = self.config.get("api.polling.max_wait", 70)
        in_progress = self.config.get("api.polling.in_progress_statuses", ["QUEUED", "WAITING"])

        request = self._build_request("GET", self._create_uri(path), params=params)
        start_time = time.monotonic()
        wait_time = self.config.get("api.polling.initial_wait", 1)
        response = self._process_request(request)

        while isinstance(response, dict) and response.get("status") in in_progress:
            logger.info(f"{path} is {response['status']}, checking again in {wait_time}s")
            time.sleep(wait_time)
            elapsed_time = time.monotonic() - start_time
            if elapsed_time > max_wait:
                logger.error(f"Gave up polling {path} after {elapsed_time:.1f}s")
                raise PollTimeoutError(
                    max_wait,
                    elapsed_time,
                    code=self.config.get("api.errors.poll_timeout_code", 488),
                )
            response = self._process_request(request)
            wait_time *= 2

        return response

    def delete(self, path: str, params: dict[str, Any] | None = None) -> Any:
        """
        Perform a DELETE request, deleting data from the service

        Args:
            path: Path of the REST interface
            params: Query parameters added to the URL
        """
        request = self._build_request("DELETE", self._create_uri(path), params=params)
        return self._process_request(request)

    def put(self, path: str, params: dict[str, Any] | None = None) -> Any:
        """
        Perform a PUT request, used for updating data in the service

        Args:
            path: Path of the REST interface
            params: Data to send, encoded as a UTF-8 JSON body
        """
        request = self._build_request("PUT", self._create_uri(path), body=self._encode(params))
        return self._process_request(request)

    def post(self, path: str, params: dict[str, Any] | None = None) -> Any:
        """
        Perform a POST request, used for creating data in the service

        Args:
            path: Path of the REST interface
            params: Data to send, encoded as a UTF-8 JSON body
        """
        request = self._build_request("POST", self._create_uri(path), body=self._encode(params))
        return self._process_request(request)

    # Debugging

    def format_last_exchange(self) -> str:
        """
        Render the last request/response pair as text, for bug reports

        The token in the Authorization header is masked.
        """
        if self.last_response is None:
            return ""
        parts = []
        if self.last_response.request is not None:
            parts.append(self._request_as_string(self.last_response.request))
        parts.append(_response_as_string(self.last_response))
        return "\n\n".join(parts)

    # Internals

    def _create_uri(self, path: str) -> str:
        return "/".join([self.base_url, path])

    @staticmethod
    def _encode(params: dict[str, Any] | None) -> bytes:
        if params is None:
            params = {}
        return json.dumps(params, ensure_ascii=False).encode("utf-8")

    def _build_request(
        self,
        method: str,
        uri: str,
        params: dict[str, Any] | None = None,
        body: bytes | None = None,
    ) -> requests.Request:
        request = requests.Request(method, uri, params=params, data=body)
        self._add_headers(request)
        return request

    def _add_headers(self, request: requests.Request) -> None:
        request.headers["Authorization"] = f"{self.auth_scheme} {self.token}"
        request.headers["Content-Type"] = "application/json"
        request.headers["Accept-Charset"] = "utf-8"
        if self.version:
            request.headers[self.version_header] = self.version

    def _process_request(self, request: requests.Request) -> Any:
        response = self.agent.send(request)
        if response.request is None:
            response.request = request.prepare()
        self.last_response = response

        if self.debug_flag:
            logger.debug(self.format_last_exchange())

        return self._process_response(response)

    def _process_response(self, response: requests.Response) -> Any:
        content = response.text
        try:
            result = json.loads(content)
        except ValueError as e:
            logger.warning(
                f"Unparsable response from {response.url} (HTTP {response.status_code}): {e}"
            )
            raise UnparsableContentError(
                e, content, code=self.config.get("api.errors.unparsable_code", 500)
            ) from e

        if 200 <= response.status_code < 300:
            return result

        logger.warning(f"Shippo API error from {response.url}: HTTP {response.status_code}")
        raise ShippoAPIError(response.status_code, _response_as_string(response))

    def _request_as_string(self, request) -> str:
        lines = [f"{request.method} {request.url}"]
        for name, value in request.headers.items():
            if name.lower() == "authorization":
                value = f"{self.auth_scheme} ****"
            lines.append(f"{name}: {value}")
        body = request.body
        if isinstance(body, bytes):
            body = body.decode("utf-8", errors="replace")
        if body:
            lines.append("")
            lines.append(body)
        return "\n".join(lines)


def _response_as_string(response: requests.Response) -> str:
    """Status line, headers and body of a response"""
    lines = [f"{response.status_code} {response.reason or ''}".rstrip()]
    for name, value in response.headers.items():
        lines.append(f"{name}: {value}")
    lines.append("")
    lines.append(response.text)
    return "\n".join(lines)
