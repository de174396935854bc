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

"""Version resolution for storeversion.

This module picks the store(s) to ask for a platform and owns the single
fallback the engine performs.

Dispatch:
    ios      -> app_store
    android  -> play_store
    android on a Xiaomi-family device -> mi_store, then play_store

    On a Xiaomi-family device any Mi Store failure (transport error, non-200,
    or unreadable page) is logged and the Play Store is asked instead, with
    the same identifiers. A Play Store failure is then surfaced as is. There
    is no retry loop: at most two requests are made per call, one after the
    other.

Any platform other than Android or iOS is rejected with
UnsupportedPlatformError before the device classifier or any store is
consulted.

Example:
    ```python
    from storeversion.core import resolve_version
    from storeversion.environment import PackageInfo, StaticDeviceClassifier

    record = resolve_version(
        "android",
        PackageInfo("com.example.app", "1.0.0"),
        device_classifier=StaticDeviceClassifier("Xiaomi"),
    )
    print(record.store_version)
    ```
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from storeversion.config import load_settings
from storeversion.environment import (
    DEFAULT_OEM_MARKERS,
    DeviceClassifier,
    PackageInfo,
    is_oem_manufacturer,
)
from storeversion.fetchers import StoreQuery, attempt_fetch, get_fetcher
from storeversion.http import HttpClient, RequestsHttpClient
from storeversion.logging import get_global_logger
from storeversion.results import Platform, VersionRecord


def plan_fetchers(
    platform: Platform,
    manufacturer: str | None = None,
    oem_markers: Iterable[str] = DEFAULT_OEM_MARKERS,
) -> tuple[str, ...]:
    """Return the fetcher names to try, in order.

    Every name but the last is a fallback-able attempt; the last one's
    failure is final.
    """
    if platform is Platform.IOS:
        return ("app_store",)
    if is_oem_manufacturer(manufacturer, oem_markers):
        return ("mi_store", "play_store")
    return ("play_store",)


def resolve_version(
    platform: Platform | str,
    package_info: PackageInfo | None = None,
    *,
    play_store_id: str | None = None,
    apple_id: str | None = None,
    country: str | None = None,
    device_classifier: DeviceClassifier | None = None,
    http_client: HttpClient | None = None,
    settings: dict[str, Any] | None = None,
) -> VersionRecord:
    """Resolve the version currently published for the running application.

    Args:
        platform: "android", "ios" or a Platform member.
        package_info: Package name and installed version of the running
            build. Required on Android unless play_store_id is given; on
            iOS unless apple_id is given.
        play_store_id: Play Store id, when it differs from the package name.
        apple_id: App Store track id; the bundle id is used otherwise.
        country: App Store region code (iOS only).
        device_classifier: Reports the device manufacturer on Android.
            Without one the device is treated as non-Xiaomi.
        http_client: Transport. A RequestsHttpClient by default.
        settings: Effective settings. load_settings() by default.

    Returns:
        The resolved record, with store_version and platform populated.

    Raises:
        UnsupportedPlatformError: If platform is not Android or iOS.
        MissingIdentifierError: If no identifier can be determined.
        NotFoundError: If the store does not know the application.
        ExtractionFailedError: If the store response could not be read.
        TransportError: If the request could not complete.
        ValueError: On iOS when neither apple_id nor package_info is given.
    """
    logger = get_global_logger()

    resolved_platform = Platform.parse(platform)
    settings = settings if settings is not None else load_settings()
    if http_client is None:
        http_client = RequestsHttpClient(timeout=settings["http"].get("timeout"))

    query = StoreQuery(
        package=package_info,
        play_store_id=play_store_id,
        apple_id=apple_id,
        country=country,
    )

    manufacturer = None
    if resolved_platform is Platform.ANDROID and device_classifier is not None:
        manufacturer = device_classifier.manufacturer()
        logger.debug("DISPATCH", f"Device manufacturer: {manufacturer!r}")

    plan = plan_fetchers(
        resolved_platform,
        manufacturer,
        settings["device"].get("oem_markers", DEFAULT_OEM_MARKERS),
    )
    logger.verbose("DISPATCH", f"Platform {resolved_platform.value}: {' -> '.join(plan)}")

    *fallible, final = plan
    for name in fallible:
        outcome = attempt_fetch(name, query, http_client, settings)
        if outcome.ok:
            return outcome.record
        logger.verbose(
            "DISPATCH", f"{name} check failed, falling back to {final}: {outcome.error}"
        )

    return get_fetcher(final).get_version_info(query, http_client, settings)
