import logging
from dataclasses import dataclass, field
from typing import Any, Literal

import requests
from requests import HTTPError, RequestException, Response

from orthanc_api_client.config import DEFAULT_TIMEOUT, ArchiveConfig
from orthanc_api_client.errors import NotFoundError, TransportError

HttpMethod = Literal['GET', 'POST']

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class OrthancApiClient:
    """
    Orthanc REST API client object.
    """

    url: str
    """
    URL of the Orthanc archive to which this client sends its requests, without trailing slash.
    """

    username: str | None
    """
    Username of the HTTP basic credentials, or `None` if the archive does not require any.
    """

    password: str | None = field(default=None, repr=False)
    """
    Password of the HTTP basic credentials.
    """

    timeout: float = DEFAULT_TIMEOUT
    """
    Timeout in seconds of each individual request.
    """

    session: requests.Session = field(default_factory=requests.Session, repr=False, compare=False)
    """
    HTTP session used to send the requests, which can be replaced to share a connection pool or in
    tests.
    """

    @staticmethod
    def connect(config: ArchiveConfig, session: requests.Session | None = None) -> 'OrthancApiClient':
        """
        Create an API client from an archive configuration. No request is sent, use the liveness
        probe to check that the archive is reachable.
        """

        return OrthancApiClient(
            url      = config.url,
            username = config.username,
            password = config.password,
            timeout  = config.timeout,
            session  = session if session is not None else requests.Session(),
        )

    @property
    def auth(self) -> tuple[str, str] | None:
        if self.username is None:
            return None

        return (self.username, self.password or '')

    def request(
        self,
        method: HttpMethod,
        route: str,
        data: Any = None,
        headers: dict[str, str] | None = None,
    ) -> Response:
        """
        Send a request to the Orthanc API and return its response. This method uses unstructured
        values as the route and the return value, use the endpoint functions for structured calls.

        :param method:  The HTTP method of the request
        :param route:   The API route to call, example: `patients/abc/studies`
        :param data:    A body to add to the request
        :param headers: Additional HTTP headers to add to the request

        Raise a `NotFoundError` if the archive answers 404 or 410, and a `TransportError` for any
        other failure.
        """

        url = f'{self.url}/{route}'
        logger.debug(f"{method} {url}")

        try:
            response = self.session.request(
                method,
                url,
                data=data,
                headers=headers,
                auth=self.auth,
                timeout=self.timeout,
                allow_redirects=False,
            )

            response.raise_for_status()
        except HTTPError as error:
            status_code = error.response.status_code
            if status_code in (404, 410):
                raise NotFoundError(f"Resource '{route}' not found in the archive.", route, status_code) from error

            raise TransportError(
                f"Request {method} '{route}' failed with HTTP status {status_code}.",
                route,
                status_code,
            ) from error
        except RequestException as error:
            raise TransportError(f"Request {method} '{route}' failed: {error}", route) from error

        # Redirects are not followed, so only a 2xx answer carries the requested resource.
        if response.status_code >= 300:
            raise TransportError(
                f"Request {method} '{route}' failed with HTTP status {response.status_code}.",
                route,
                response.status_code,
            )

        return response

    def get(self, route: str) -> Response:
        """
        Send a GET request to the Orthanc API.
        """

        return self.request('GET', route)

    def post(self, route: str, data: Any, headers: dict[str, str] | None = None) -> Response:
        """
        Send a POST request to the Orthanc API.
        """

        return self.request('POST', route, data=data, headers=headers)
