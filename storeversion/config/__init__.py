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

"""Settings loading for storeversion.

Built-in defaults describe the real store endpoints. A YAML file can
override any part of them; dicts are merged recursively and lists/scalars
are replaced (last wins).

Public API:

- load_settings: Load the effective settings
- DEFAULT_SETTINGS: The built-in defaults

Example:
    ```python
    from pathlib import Path
    from storeversion.config import load_settings

    settings = load_settings(Path("storeversion.yaml"))
    print(settings["app_store"]["country"])
    ```
"""

from .loader import DEFAULT_SETTINGS, load_settings

__all__ = ["DEFAULT_SETTINGS", "load_settings"]
