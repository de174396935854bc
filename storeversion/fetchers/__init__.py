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

"""Store fetchers for storeversion.

One fetcher per store, all behind the StoreFetcher protocol. Each knows its
endpoint shape, the identifiers it needs, and how to turn the response into
a VersionRecord.

Available Fetchers:
    play_store : PlayStoreFetcher
        Scrapes the Play Store listing and runs the pattern cascade.
    app_store : AppStoreFetcher
        Queries the iTunes lookup JSON API.
    mi_store : MiStoreFetcher
        Scrapes the Xiaomi GetApps listing for its versionName token.

Example:
    ```python
    from storeversion.fetchers import get_fetcher

    fetcher = get_fetcher("app_store")
    ```
"""

# Import fetcher modules to trigger self-registration
from . import (
    app_store,  # noqa: F401
    mi_store,  # noqa: F401
    play_store,  # noqa: F401
)
from .base import (
    FetchOutcome,
    StoreFetcher,
    StoreQuery,
    attempt_fetch,
    get_fetcher,
    register_fetcher,
)

__all__ = [
    "FetchOutcome",
    "StoreFetcher",
    "StoreQuery",
    "attempt_fetch",
    "get_fetcher",
    "register_fetcher",
]
