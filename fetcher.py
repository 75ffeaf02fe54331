"""HTTP fetching with bounded manual redirect following."""

import httpx

from config import Config
from logging_setup import get_logger


logger = get_logger("fetcher")

REDIRECT_STATUSES = frozenset({301, 302, 303, 307, 308})


class FetchError(Exception):
    """Base exception for fetch failures."""

    def __init__(self, url: str, message: str):
        super().__init__(message)
        self.url = url


class TransportError(FetchError):
    """Raised on malformed URLs and connection-level failures."""


class HttpStatusError(FetchError):
    """Raised when the terminal response is not 200 OK."""

    def __init__(self, url: str, status_code: int, body: str):
        super().__init__(url, f"GET {url} returned HTTP {status_code}: {body.strip()[:200]}")
        self.status_code = status_code
        self.body = body


class TooManyRedirectsError(FetchError):
    """Raised when a request is still redirecting after max_redirects hops."""

    def __init__(self, url: str, max_redirects: int):
        super().__init__(url, f"GET {url} exceeded {max_redirects} redirects")
        self.max_redirects = max_redirects


def make_client(config: Config) -> httpx.Client:
    """Build the HTTP client used for every request of a run.

    Redirects are handled by fetch() so each hop is logged and counted.
    """
    return httpx.Client(
        headers={"User-Agent": config.user_agent},
        timeout=config.timeout,
        follow_redirects=False,
    )


def fetch(client: httpx.Client, url: str, max_redirects: int = 5) -> bytes:
    """GET a URL and return the body of the final 200 response.

    Redirect responses carrying a Location header are followed, resolving
    relative locations against the URL that produced them, for at most
    max_redirects hops.
    """
    current = url
    for _ in range(max_redirects + 1):
        try:
            request_url = httpx.URL(current)
        except httpx.InvalidURL as e:
            raise TransportError(current, f"Invalid URL {current!r}: {e}") from e

        logger.info("GET %s %s", request_url.host, request_url.path)
        try:
            response = client.get(request_url)
        except httpx.HTTPError as e:
            raise TransportError(current, f"GET {current} failed: {e}") from e

        location = response.headers.get("location")
        if response.status_code in REDIRECT_STATUSES and location:
            current = str(request_url.join(location))
            logger.debug("Redirected (%d) to %s", response.status_code, current)
            continue

        if response.status_code != httpx.codes.OK:
            raise HttpStatusError(current, response.status_code, response.text)

        return response.content

    raise TooManyRedirectsError(url, max_redirects)
