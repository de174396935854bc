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

"""Mi Store fetcher for storeversion.

Scrapes Xiaomi's global GetApps listing. Xiaomi devices often ship apps from
this store instead of Google Play, so on those devices it is asked first.

Request:
    GET https://global.app.mi.com/details?lo=IN&la=en&id=<package>
    with a Xiaomi Android User-Agent and ``en-IN`` Accept-Language. The
    listing serves different markup to clients it does not recognise.

The page carries a ``versionName:"x.y.z"`` token that is matched directly
against the whole body.

Error Handling:
    - MissingIdentifierError: no package info.
    - NotFoundError: any status other than 200.
    - ExtractionFailedError: 200 but no versionName token.
    - TransportError: raised by the HTTP client, propagated unchanged.

Note:
    The dispatcher treats every one of these as a reason to fall back to
    the Play Store.
"""

from __future__ import annotations

from typing import Any

from storeversion.exceptions import (
    ExtractionFailedError,
    MissingIdentifierError,
    NotFoundError,
)
from storeversion.extraction import extract_mi_store_version
from storeversion.http import HttpClient
from storeversion.logging import get_global_logger
from storeversion.results import Platform, VersionRecord

from .base import StoreQuery, build_url, register_fetcher


class MiStoreFetcher:
    """Fetcher for the Xiaomi GetApps listing page."""

    name = "mi_store"

    def get_version_info(
        self,
        query: StoreQuery,
        http_client: HttpClient,
        settings: dict[str, Any],
    ) -> VersionRecord:
        logger = get_global_logger()
        cfg = settings["mi_store"]

        package_name = query.package_name
        if not package_name:
            raise MissingIdentifierError(
                "Mi Store lookup requires the package name", store=self.name
            )

        params = dict(cfg.get("params") or {})
        params["id"] = package_name
        url = build_url(cfg["url"], params)
        logger.verbose("FETCH", f"Mi Store lookup: {url}")

        response = http_client.get(url, headers=dict(cfg.get("headers") or {}))
        if response.status_code != 200:
            raise NotFoundError(
                f"Application {package_name!r} not found in Mi Store "
                f"(HTTP {response.status_code})",
                store=self.name,
                status_code=response.status_code,
                url=url,
            )

        version = extract_mi_store_version(response.text)
        if version is None:
            raise ExtractionFailedError(
                "Failed to extract Mi Store version", store=self.name, url=url
            )

        logger.verbose("FETCH", f"Mi Store version: {version}")
        return VersionRecord(
            store_version=version,
            platform=Platform.ANDROID,
            store_url=url,
            local_version=query.local_version,
        )


# Register this fetcher when the module is imported
register_fetcher(MiStoreFetcher.name, MiStoreFetcher)
