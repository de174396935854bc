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

"""Collaborators that describe the running application and device.

The engine does not inspect the host itself. The caller supplies:

- PackageInfo: what the local package inspector knows about the running
  build (package name and installed version).
- A DeviceClassifier: reports the device manufacturer. It is only consulted
  on Android, where it decides whether the Mi Store is tried first.

Example:
    ```python
    from storeversion.environment import PackageInfo, StaticDeviceClassifier

    package = PackageInfo(package_name="com.example.app", version="1.4.0")
    device = StaticDeviceClassifier("Xiaomi")
    ```
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from typing import Protocol

DEFAULT_OEM_MARKERS: tuple[str, ...] = ("xiaomi", "mi")


@dataclass(frozen=True)
class PackageInfo:
    """Identity of the locally installed build.

    Attributes:
        package_name: Android package name or iOS bundle identifier.
        version: Installed version string, if known.
    """

    package_name: str
    version: str | None = None


class DeviceClassifier(Protocol):
    """Protocol for reporting the device manufacturer."""

    def manufacturer(self) -> str:
        """Return the manufacturer name, in any case."""
        ...


class StaticDeviceClassifier:
    """DeviceClassifier that reports a fixed manufacturer."""

    def __init__(self, manufacturer: str = "") -> None:
        self._manufacturer = manufacturer

    def manufacturer(self) -> str:
        return self._manufacturer


def is_oem_manufacturer(
    manufacturer: str | None, markers: Iterable[str] = DEFAULT_OEM_MARKERS
) -> bool:
    """Return True if the manufacturer belongs to the OEM store family.

    The manufacturer is lowercased and tested for each marker as a
    substring, so "Xiaomi", "XIAOMI" and "Mi" all qualify.
    """
    if not manufacturer:
        return False
    name = manufacturer.lower()
    return any(marker.lower() in name for marker in markers)
