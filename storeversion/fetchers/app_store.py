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

"""App Store fetcher for storeversion.

Queries Apple's iTunes lookup API, a stable JSON endpoint, for an iOS
application.

Request:
    GET https://itunes.apple.com/lookup?id=<appleId>&country=<cc>&version=2
    or, without an apple id,
    GET https://itunes.apple.com/lookup?bundleId=<bundle>&country=<cc>&version=2

    ``country`` is only sent when given (argument or settings
    app_store.country); Apple applies its own default region otherwise.

Response:
    {"resultCount": 1, "results": [{"version": "...", "trackViewUrl": "..."}]}

    Unknown ids still answer 200, with an empty ``results`` list. That is
    reported as NotFoundError, never as an empty record.

Error Handling:
    - ValueError: neither apple_id nor package info given. This is a caller
      bug and is raised before any request.
    - NotFoundError: status other than 200, or an empty result list.
    - ExtractionFailedError: body is not JSON, has no ``results`` list, or
      the first result has no version.
    - TransportError: raised by the HTTP client, propagated unchanged.
"""

from __future__ import annotations

import json
from typing import Any

from storeversion.exceptions import ExtractionFailedError, NotFoundError
from storeversion.http import HttpClient
from storeversion.logging import get_global_logger
from storeversion.results import Platform, VersionRecord

from .base import StoreQuery, build_url, register_fetcher


class AppStoreFetcher:
    """Fetcher for the iTunes lookup API."""

    name = "app_store"

    def get_version_info(
        self,
        query: StoreQuery,
        http_client: HttpClient,
        settings: dict[str, Any],
    ) -> VersionRecord:
        logger = get_global_logger()
        cfg = settings["app_store"]

        if query.apple_id is None and query.package is None:
            raise ValueError("One of apple_id or package info must be provided")

        if query.apple_id is not None:
            params: dict[str, Any] = {"id": query.apple_id}
        else:
            params = {"bundleId": query.package_name}
        params["country"] = query.country or cfg.get("country")
        params["version"] = "2"

        url = build_url(f"https://{cfg['authority']}{cfg['path']}", params)
        logger.verbose("FETCH", f"App Store lookup: {url}")

        response = http_client.get(url, headers=dict(cfg.get("headers") or {}))
        if response.status_code != 200:
            raise NotFoundError(
                f"Application not found in App Store (HTTP {response.status_code}), "
                "verify your app id",
                store=self.name,
                status_code=response.status_code,
                url=url,
            )

        try:
            payload = json.loads(response.text)
        except json.JSONDecodeError as err:
            raise ExtractionFailedError(
                f"Invalid JSON response from App Store. Response: {response.text[:200]}",
                store=self.name,
                url=url,
            ) from err

        results = payload.get("results") if isinstance(payload, dict) else None
        if not isinstance(results, list):
            raise ExtractionFailedError(
                "App Store response has no 'results' list", store=self.name, url=url
            )
        logger.debug("FETCH", f"App Store returned {len(results)} result(s)")

        if not results:
            raise NotFoundError(
                "Application not found in App Store, verify your app id",
                store=self.name,
                status_code=response.status_code,
                url=url,
            )

        first = results[0]
        version = first.get("version") if isinstance(first, dict) else None
        if not version:
            raise ExtractionFailedError(
                "App Store result has no version field", store=self.name, url=url
            )

        logger.verbose("FETCH", f"App Store version: {version}")
        return VersionRecord(
            store_version=str(version),
            platform=Platform.IOS,
            store_url=first.get("trackViewUrl"),
            local_version=query.local_version,
        )


# Register this fetcher when the module is imported
register_fetcher(AppStoreFetcher.name, AppStoreFetcher)
