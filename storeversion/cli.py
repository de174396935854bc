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

"""Command-line interface for storeversion.

Commands:

    resolve: Look up the version published on the store
    extract: Run the version extractor over a saved HTML page

Example:
    Resolve an Android app:
        ```bash
        $ storever resolve --platform android --package-name com.example.app
        ```

    Resolve on a Xiaomi device, with details:
        ```bash
        $ storever resolve --platform android --package-name com.example.app \
            --manufacturer Xiaomi --verbose
        ```

    Resolve an iOS app in the UK store:
        ```bash
        $ storever resolve --platform ios --apple-id 284882215 --country gb
        ```

    Debug extraction against a saved listing:
        ```bash
        $ storever extract listing.html --marker com.example.app
        ```

Exit Codes:

- 0: Success
- 1: Error (lookup failure, bad settings, or no version found)
"""

from __future__ import annotations

import argparse
from pathlib import Path
import sys

from storeversion import __version__
from storeversion.config import load_settings
from storeversion.core import resolve_version
from storeversion.environment import PackageInfo, StaticDeviceClassifier
from storeversion.exceptions import StoreVersionError
from storeversion.extraction import (
    extract_mi_store_version,
    extract_play_store_version,
)
from storeversion.http import RequestsHttpClient
from storeversion.logging import get_logger, set_global_logger


def cmd_resolve(args: argparse.Namespace) -> int:
    """Handler for 'storever resolve'.

    Returns:
        Exit code (0 for success, 1 for failure).
    """
    logger = get_logger(verbose=args.verbose, debug=args.debug)
    set_global_logger(logger)

    package_info = None
    if args.package_name:
        package_info = PackageInfo(args.package_name, args.local_version)

    try:
        settings = load_settings(Path(args.config) if args.config else None)
        record = resolve_version(
            args.platform,
            package_info,
            play_store_id=args.play_store_id,
            apple_id=args.apple_id,
            country=args.country,
            device_classifier=StaticDeviceClassifier(args.manufacturer or ""),
            http_client=RequestsHttpClient(timeout=settings["http"].get("timeout")),
            settings=settings,
        )
    except (StoreVersionError, ValueError) as err:
        print(f"Error: {err}")
        if args.verbose or args.debug:
            import traceback

            traceback.print_exc()
        return 1

    print("=" * 70)
    print("RESOLVE RESULTS")
    print("=" * 70)
    print(f"Platform:        {record.platform.value}")
    print(f"Store Version:   {record.store_version}")
    print(f"Local Version:   {record.local_version or '-'}")
    print(f"Store URL:       {record.store_url or '-'}")
    print("=" * 70)

    return 0


def cmd_extract(args: argparse.Namespace) -> int:
    """Handler for 'storever extract'.

    Returns:
        Exit code (0 when a version was found, 1 otherwise).
    """
    logger = get_logger(verbose=args.verbose, debug=args.debug)
    set_global_logger(logger)

    html_path = Path(args.file)
    if not html_path.exists():
        print(f"Error: File not found: {html_path}")
        return 1

    document = html_path.read_text(encoding="utf-8", errors="replace")
    if args.mi:
        version = extract_mi_store_version(document)
    elif args.marker:
        version = extract_play_store_version(document, args.marker)
    else:
        print("Error: --marker is required unless --mi is given")
        return 1

    if version is None:
        print("No version found")
        return 1

    print(version)
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="storever",
        description="Look up the version of a mobile app published on its store",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"storever {__version__}",
    )

    subparsers = parser.add_subparsers(
        dest="command",
        help="Available commands",
        required=True,
    )

    # 'resolve' command
    parser_resolve = subparsers.add_parser(
        "resolve",
        help="Look up the published version",
        description="Query the store for the platform and print the published version.",
    )
    parser_resolve.add_argument(
        "--platform",
        required=True,
        help="Target platform: android or ios",
    )
    parser_resolve.add_argument(
        "--package-name",
        help="Android package name or iOS bundle id",
    )
    parser_resolve.add_argument(
        "--local-version",
        help="Installed version, echoed in the results",
    )
    parser_resolve.add_argument(
        "--play-store-id",
        help="Play Store id, when it differs from the package name",
    )
    parser_resolve.add_argument(
        "--apple-id",
        help="App Store track id (iOS)",
    )
    parser_resolve.add_argument(
        "--country",
        help="App Store region code (iOS)",
    )
    parser_resolve.add_argument(
        "--manufacturer",
        help="Device manufacturer; Xiaomi devices try the Mi Store first",
    )
    parser_resolve.add_argument(
        "--config",
        help="YAML settings file overriding the built-in endpoints",
    )
    parser_resolve.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Show which stores are queried",
    )
    parser_resolve.add_argument(
        "-d",
        "--debug",
        action="store_true",
        help="Show HTTP and extraction details (implies --verbose)",
    )
    parser_resolve.set_defaults(func=cmd_resolve)

    # 'extract' command
    parser_extract = subparsers.add_parser(
        "extract",
        help="Extract a version from a saved HTML page",
        description="Run the store page extractor over a local file, without network access.",
    )
    parser_extract.add_argument(
        "file",
        help="Path to the saved HTML page",
    )
    parser_extract.add_argument(
        "--marker",
        help="Application id the data script must mention (Play Store pages)",
    )
    parser_extract.add_argument(
        "--mi",
        action="store_true",
        help="Treat the page as a Mi Store listing",
    )
    parser_extract.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Show extraction progress",
    )
    parser_extract.add_argument(
        "-d",
        "--debug",
        action="store_true",
        help="Show every pattern tried (implies --verbose)",
    )
    parser_extract.set_defaults(func=cmd_extract)

    return parser


def main(argv: list[str] | None = None) -> None:
    """Main entry point for the storever CLI.

    This function is registered as the 'storever' console script in
    pyproject.toml.
    """
    args = build_parser().parse_args(argv)
    sys.exit(args.func(args))


if __name__ == "__main__":
    main()
