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

"""Play Store fetcher for storeversion.

Scrapes the public Play Store listing for an Android application and mines
the published version out of the inline page data. Google offers no public
API for this, so the version is extracted with the pattern cascade in
storeversion.extraction.

Request:
    GET https://play.google.com/store/apps/details?id=<package>
    with a browser User-Agent (see settings play_store.headers).

Identifier:
    The explicit play_store_id wins; otherwise the local package name.

Error Handling:
    - MissingIdentifierError: no play_store_id and no package name. Raised
      before the request is issued.
    - NotFoundError: any status other than 200.
    - ExtractionFailedError: 200 but no version found in the page.
    - TransportError: raised by the HTTP client, propagated unchanged.

Example:
    ```python
    from storeversion.fetchers.play_store import PlayStoreFetcher

    record = PlayStoreFetcher().get_version_info(query, http_client, settings)
    print(record.store_version, record.store_url)
    ```
"""

from __future__ import annotations

from typing import Any

from storeversion.exceptions import (
    ExtractionFailedError,
    MissingIdentifierError,
    NotFoundError,
)
from storeversion.extraction import PLAY_CALLBACK_MARKER, extract_play_store_version
from storeversion.http import HttpClient
from storeversion.logging import get_global_logger
from storeversion.results import Platform, VersionRecord

from .base import StoreQuery, build_url, register_fetcher


class PlayStoreFetcher:
    """Fetcher for the Google Play Store listing page."""

    name = "play_store"

    def get_version_info(
        self,
        query: StoreQuery,
        http_client: HttpClient,
        settings: dict[str, Any],
    ) -> VersionRecord:
        logger = get_global_logger()
        cfg = settings["play_store"]

        app_id = query.play_store_id or query.package_name
        if not app_id:
            raise MissingIdentifierError(
                "Application id is not provided: pass play_store_id or package info",
                store=self.name,
            )

        url = build_url(f"https://{cfg['authority']}{cfg['path']}", {"id": app_id})
        logger.verbose("FETCH", f"Play Store lookup: {url}")

        response = http_client.get(url, headers=dict(cfg.get("headers") or {}))
        if response.status_code != 200:
            raise NotFoundError(
                f"Application {app_id!r} not found in Play Store "
                f"(HTTP {response.status_code}), verify your app id",
                store=self.name,
                status_code=response.status_code,
                url=url,
            )

        version = extract_play_store_version(
            response.text,
            app_id,
            cfg.get("callback_marker") or PLAY_CALLBACK_MARKER,
        )
        if version is None:
            raise ExtractionFailedError(
                f"Failed to extract Play Store version for {app_id!r}",
                store=self.name,
                url=url,
            )

        logger.verbose("FETCH", f"Play Store version: {version}")
        return VersionRecord(
            store_version=version,
            platform=Platform.ANDROID,
            store_url=url,
            local_version=query.local_version,
        )


# Register this fetcher when the module is imported
register_fetcher(PlayStoreFetcher.name, PlayStoreFetcher)
