"""
storeversion - published app version lookup

Resolves the version of a mobile application currently published on its
store, so a host application can compare it with its own build and decide
whether to prompt for an update.

storeversion provides:
  - Play Store listing scraping with an ordered pattern cascade
  - iTunes lookup API queries for iOS
  - Xiaomi GetApps lookups on Xiaomi devices, falling back to Play
  - Typed errors distinguishing "not published" from "unreadable page"
    and transport failures
  - YAML-overridable endpoints and headers

Quick Start
-----------
From Python:

    from storeversion import PackageInfo, resolve_version

    record = resolve_version("android", PackageInfo("com.example.app", "1.0.0"))
    print(record.store_version, record.store_url)

From the command line:

    $ storever resolve --platform android --package-name com.example.app

Package Structure
-----------------
cli : module
    Command-line interface with argparse.
core : module
    Platform dispatch and the Mi Store fallback.
fetchers : package
    One fetcher per store.
extraction : module
    Version pattern cascade for scraped pages.
config : package
    Settings defaults and YAML overrides.
"""

__version__ = "0.1.0"
__description__ = "Resolve the version of a mobile app published on its store"

# Re-export commonly used names for convenience
from storeversion.core import resolve_version
from storeversion.environment import PackageInfo, StaticDeviceClassifier
from storeversion.results import Platform, VersionRecord

__all__ = [
    "__version__",
    "__description__",
    "resolve_version",
    "PackageInfo",
    "StaticDeviceClassifier",
    "Platform",
    "VersionRecord",
]
