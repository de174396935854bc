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

"""Public API return types for storeversion.

VersionRecord is the single value returned by resolve_version(). It is
frozen so a resolved record can be passed around without being mutated.

Example:
    Comparing against the running build:
        ```python
        from storeversion.core import resolve_version

        record = resolve_version("ios", package_info, country="gb")
        if record.store_version != record.local_version:
            print(f"Update available at {record.store_url}")
        ```

Note:
    Version strings are returned verbatim. Ordering ("is the store build
    newer?") is left to the caller.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from storeversion.exceptions import UnsupportedPlatformError


class Platform(str, Enum):
    """Store family a record was produced by."""

    ANDROID = "android"
    IOS = "ios"

    @classmethod
    def parse(cls, value: Platform | str) -> Platform:
        """Coerce a platform name (case-insensitive) to a Platform.

        Raises:
            UnsupportedPlatformError: If the value is not a known platform.
        """
        if isinstance(value, Platform):
            return value
        if isinstance(value, str):
            try:
                return cls(value.strip().lower())
            except ValueError:
                pass
        raise UnsupportedPlatformError(value)


@dataclass(frozen=True)
class VersionRecord:
    """Version published on a store, next to the locally installed one.

    Attributes:
        store_version: Version string resolved from the store.
        platform: Store family that produced the record.
        store_url: Listing URL used, for display or deep-linking. None when
            the store does not expose one.
        local_version: Version of the running build, as supplied by the
            caller. Opaque to the engine.
    """

    store_version: str
    platform: Platform
    store_url: str | None = None
    local_version: str | None = None
