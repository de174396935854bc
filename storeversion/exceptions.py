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

"""Exception hierarchy for storeversion.

This module defines a custom exception hierarchy that allows library users
to distinguish between the ways a version lookup can fail. All exceptions
inherit from StoreVersionError, allowing users to catch every lookup failure
with a single except clause if needed.

- UnsupportedPlatformError: Platform outside Android and iOS
- MissingIdentifierError: No usable store or package identifier
- NotFoundError: The store does not know the application
- ExtractionFailedError: The store answered but the version could not be read
- TransportError: The HTTP request itself could not complete
- ConfigError: Settings file could not be loaded

Example:
    Deciding what to do with a failed lookup:
        ```python
        from storeversion.core import resolve_version
        from storeversion.exceptions import NotFoundError, TransportError

        try:
            record = resolve_version("android", package_info)
        except NotFoundError as e:
            print(f"Not published: {e}")
        except TransportError as e:
            print(f"Try again later: {e}")
        ```
"""

from __future__ import annotations

__all__ = [
    "StoreVersionError",
    "UnsupportedPlatformError",
    "MissingIdentifierError",
    "NotFoundError",
    "ExtractionFailedError",
    "TransportError",
    "ConfigError",
]


class StoreVersionError(Exception):
    """Base exception for all storeversion errors.

    Attributes:
        store: Name of the fetcher that raised the error (e.g., "play_store"),
            or None when the error is not tied to a store.
    """

    def __init__(self, message: str, *, store: str | None = None) -> None:
        super().__init__(message)
        self.store = store


class UnsupportedPlatformError(StoreVersionError):
    """Raised when the platform is neither Android nor iOS.

    No fetcher is attempted and no network call is made.
    """

    def __init__(self, platform: object) -> None:
        super().__init__(f"Unsupported platform: {platform!r}")
        self.platform = platform


class MissingIdentifierError(StoreVersionError):
    """Raised when no store or package identifier could be determined."""

    pass


class NotFoundError(StoreVersionError):
    """Raised when a store indicates the application does not exist there.

    This covers both non-200 responses and successful responses with an
    empty result set.

    Attributes:
        status_code: HTTP status returned by the store.
        url: Request URL.
    """

    def __init__(
        self,
        message: str,
        *,
        store: str | None = None,
        status_code: int | None = None,
        url: str | None = None,
    ) -> None:
        super().__init__(message, store=store)
        self.status_code = status_code
        self.url = url


class ExtractionFailedError(StoreVersionError):
    """Raised when a store answered 200 but no version could be read.

    Distinct from NotFoundError: the request succeeded, the content did not
    match any known shape.
    """

    def __init__(
        self, message: str, *, store: str | None = None, url: str | None = None
    ) -> None:
        super().__init__(message, store=store)
        self.url = url


class TransportError(StoreVersionError):
    """Raised when the HTTP request could not complete.

    Covers connection failures, DNS errors, timeouts and the like. The
    original requests exception is chained as __cause__.
    """

    def __init__(self, message: str, *, url: str | None = None) -> None:
        super().__init__(message)
        self.url = url


class ConfigError(StoreVersionError):
    """Raised for settings-related errors.

    This exception is raised when there are problems with:

    - Missing settings files
    - YAML parse errors
    - Settings documents that are not a mapping
    """

    pass
