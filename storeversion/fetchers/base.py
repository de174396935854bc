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

"""Store fetcher protocol, registry and fetch outcome for storeversion.

This module defines the foundational components for the fetcher set:

- StoreQuery: Everything a fetcher may need to identify the application
- StoreFetcher protocol: Interface that every store fetcher implements
- Fetcher registry: Dict mapping fetcher names to implementations
- FetchOutcome / attempt_fetch(): An explicit success-or-failure result
  used by the dispatcher to decide on the Mi Store fallback

Each fetcher owns its endpoint construction and response decoding, and
turns a response into a VersionRecord or raises a StoreVersionError:

- play_store: Scrapes the Play Store listing (Android)
- app_store: Queries the iTunes lookup JSON API (iOS)
- mi_store: Scrapes the Xiaomi GetApps listing (Android, Xiaomi devices)

Design Philosophy:
    - Fetchers are Protocol classes (structural subtyping, not inheritance)
    - Registration happens at module import time (fetchers self-register)
    - Fetchers are stateless; transport and settings are passed per call

Example:
    Running a fetcher directly:
        ```python
        from storeversion.config import load_settings
        from storeversion.environment import PackageInfo
        from storeversion.fetchers import StoreQuery, get_fetcher
        from storeversion.http import RequestsHttpClient

        fetcher = get_fetcher("play_store")
        query = StoreQuery(package=PackageInfo("com.example.app", "1.0.0"))
        record = fetcher.get_version_info(
            query, RequestsHttpClient(), load_settings()
        )
        ```
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Protocol
from urllib.parse import urlencode

from storeversion.environment import PackageInfo
from storeversion.exceptions import StoreVersionError
from storeversion.http import HttpClient
from storeversion.results import VersionRecord

# -------------------------------
# Query
# -------------------------------


@dataclass(frozen=True)
class StoreQuery:
    """Identifiers available for one lookup.

    Attributes:
        package: Local package info, if the caller has it.
        play_store_id: Explicit Play Store id; defaults to the package name.
        apple_id: Explicit App Store track id; the bundle id is used otherwise.
        country: App Store region code; the store's own default when None.
    """

    package: PackageInfo | None = None
    play_store_id: str | None = None
    apple_id: str | None = None
    country: str | None = None

    @property
    def package_name(self) -> str | None:
        return self.package.package_name if self.package else None

    @property
    def local_version(self) -> str | None:
        return self.package.version if self.package else None


# -------------------------------
# Fetcher Protocol
# -------------------------------


class StoreFetcher(Protocol):
    """Protocol for store fetchers."""

    def get_version_info(
        self,
        query: StoreQuery,
        http_client: HttpClient,
        settings: dict[str, Any],
    ) -> VersionRecord:
        """Fetch the published version from one store.

        Args:
            query: Identifiers for the application.
            http_client: Transport used for the single request.
            settings: Effective settings (see storeversion.config).

        Returns:
            A record with store_version and platform populated.

        Raises:
            MissingIdentifierError: If no usable identifier is available.
            NotFoundError: If the store does not know the application.
            ExtractionFailedError: If the response could not be decoded.
            TransportError: If the request could not complete.
        """
        ...


# -------------------------------
# Fetcher Registry
# -------------------------------

_FETCHER_REGISTRY: dict[str, type[StoreFetcher]] = {}


def register_fetcher(name: str, fetcher_class: type[StoreFetcher]) -> None:
    """Register a store fetcher by name.

    Registering the same name twice overwrites the previous registration,
    which lets tests substitute a fake store.
    """
    _FETCHER_REGISTRY[name] = fetcher_class


def get_fetcher(name: str) -> StoreFetcher:
    """Get a new fetcher instance by name.

    Raises:
        KeyError: If the name is not registered. Fetcher names are fixed by
            the dispatcher, so an unknown name is a programming error.
    """
    if name not in _FETCHER_REGISTRY:
        available = ", ".join(_FETCHER_REGISTRY) or "(none)"
        raise KeyError(f"Unknown store fetcher: {name!r}. Available: {available}")
    return _FETCHER_REGISTRY[name]()


# -------------------------------
# Outcome
# -------------------------------


@dataclass(frozen=True)
class FetchOutcome:
    """Result of one fetch attempt: exactly one of record or error is set."""

    fetcher: str
    record: VersionRecord | None = None
    error: StoreVersionError | None = None

    @property
    def ok(self) -> bool:
        return self.record is not None


def attempt_fetch(
    name: str,
    query: StoreQuery,
    http_client: HttpClient,
    settings: dict[str, Any],
) -> FetchOutcome:
    """Run a fetcher and capture its failure instead of raising it.

    Only StoreVersionError is captured; anything else is a bug and
    propagates.
    """
    try:
        record = get_fetcher(name).get_version_info(query, http_client, settings)
    except StoreVersionError as err:
        return FetchOutcome(fetcher=name, error=err)
    return FetchOutcome(fetcher=name, record=record)


def build_url(base: str, params: dict[str, Any]) -> str:
    """Append url-encoded params to base, skipping None values."""
    query = urlencode({k: v for k, v in params.items() if v is not None})
    return f"{base}?{query}" if query else base
