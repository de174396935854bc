# Copyright 2025 Roger Cibrian
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""HTTP transport seam for storeversion.

Fetchers only need a GET with custom headers that exposes the status code and
the text body. They talk to the HttpClient protocol so tests and host
applications can supply their own transport; RequestsHttpClient is the
default implementation built on requests.

Transport failures (DNS, refused connections, timeouts) surface as
TransportError. Non-200 responses are returned, not raised: each fetcher
decides what a status means for its store.

Note:
    No retries are configured. Each fetcher issues its request exactly once;
    the only second attempt in the engine is the Mi Store to Play Store
    fallback made by the dispatcher.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol

import requests

from storeversion import __version__
from storeversion.exceptions import TransportError
from storeversion.logging import get_global_logger

DEFAULT_TIMEOUT = 30


@dataclass(frozen=True)
class HttpResponse:
    """Minimal view of an HTTP response.

    Attributes:
        status_code: HTTP status code.
        text: Decoded response body.
        url: Final URL the body was served from.
    """

    status_code: int
    text: str
    url: str


class HttpClient(Protocol):
    """Protocol for the transport used by store fetchers."""

    def get(self, url: str, headers: dict[str, str] | None = None) -> HttpResponse:
        """Issue a GET request.

        Args:
            url: Absolute URL including the query string.
            headers: Extra request headers.

        Returns:
            The response, whatever its status code.

        Raises:
            TransportError: If the request could not complete.
        """
        ...


def make_session() -> requests.Session:
    """Create a requests.Session with a default User-Agent.

    Store fetchers override the User-Agent per request where the store
    needs a browser signature.
    """
    s = requests.Session()
    s.headers.update({"User-Agent": f"storeversion/{__version__}"})
    return s


class RequestsHttpClient:
    """HttpClient backed by a requests.Session.

    Args:
        session: Session to use. A new one from make_session() by default.
        timeout: Per-request timeout in seconds, None to wait forever.
    """

    def __init__(
        self,
        session: requests.Session | None = None,
        timeout: float | None = DEFAULT_TIMEOUT,
    ) -> None:
        self.session = session or make_session()
        self.timeout = timeout

    def get(self, url: str, headers: dict[str, str] | None = None) -> HttpResponse:
        logger = get_global_logger()
        logger.debug("HTTP", f"GET {url}")

        try:
            response = self.session.get(url, headers=headers, timeout=self.timeout)
        except requests.exceptions.RequestException as err:
            raise TransportError(f"Request to {url} failed: {err}", url=url) from err

        logger.debug(
            "HTTP", f"{response.status_code} {response.reason} ({len(response.text)} chars)"
        )
        return HttpResponse(
            status_code=response.status_code,
            text=response.text,
            url=response.url,
        )
