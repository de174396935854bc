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

"""Version extraction from scraped store pages.

Stores without a structured API embed the published version somewhere in
their page markup. This module mines it out: BeautifulSoup isolates the
page scripts and regular expressions find the version inside them.

Play Store pages:
    The listing inlines its data in many ``<script>`` blocks. Only blocks
    that mention both the application id (the marker) and the
    ``AF_initDataCallback`` loader are considered. Five patterns are then
    tried, most specific first, against every candidate block:

    1. ``["1.2.3"]``
    2. ``['1.2.3']``
    3. ``"1.2.3"``
    4. ``'1.2.3'``
    5. ``1.2.3`` (bare, last resort)

    Patterns are the outer loop and scripts the inner loop, so a permissive
    pattern never wins over a stricter one that matches a later script.

Mi Store pages:
    The page carries a stable ``versionName:"1.2.3"`` token that is matched
    directly against the whole body.

Both extractors return None rather than raising when nothing matches, so a
change in store markup degrades into a "no version" result.

Example:
    ```python
    from storeversion.extraction import extract_play_store_version

    version = extract_play_store_version(html, "com.example.app")
    ```
"""

from __future__ import annotations

import re

from bs4 import BeautifulSoup

from storeversion.logging import get_global_logger

PLAY_CALLBACK_MARKER = "AF_initDataCallback"

# ASCII digits only; "\d" alone would accept any Unicode decimal digit.
# Ordered most specific first.
VERSION_PATTERNS: tuple[re.Pattern[str], ...] = (
    re.compile(r'\["(\d+\.\d+\.\d+)"\]', re.ASCII),
    re.compile(r"\['(\d+\.\d+\.\d+)'\]", re.ASCII),
    re.compile(r'"(\d+\.\d+\.\d+)"', re.ASCII),
    re.compile(r"'(\d+\.\d+\.\d+)'", re.ASCII),
    re.compile(r"\b\d+\.\d+\.\d+\b", re.ASCII),
)

MI_VERSION_PATTERN = re.compile(r'versionName\s*:\s*"([\d.]+)"', re.ASCII)


def find_candidate_scripts(
    document: str, marker: str, callback_marker: str = PLAY_CALLBACK_MARKER
) -> list[str]:
    """Return the contents of body scripts that mention both markers.

    Args:
        document: Full HTML page.
        marker: Application id the script must mention.
        callback_marker: Data-loader name the script must mention.

    Returns:
        Script contents in document order. Empty when the page has no
        ``<body>`` or no qualifying script.
    """
    logger = get_global_logger()

    soup = BeautifulSoup(document, "html.parser")
    if soup.body is None:
        logger.debug("EXTRACT", "No <body> element found")
        return []

    scripts = [str(tag.string or "") for tag in soup.body.find_all("script")]
    logger.debug("EXTRACT", f"Found {len(scripts)} script block(s) in body")

    candidates = [s for s in scripts if marker in s and callback_marker in s]
    logger.debug(
        "EXTRACT",
        f"{len(candidates)} script(s) contain {marker!r} and {callback_marker!r}",
    )
    return candidates


def match_version(
    scripts: list[str],
    patterns: tuple[re.Pattern[str], ...] = VERSION_PATTERNS,
) -> str | None:
    """Return the first version found by the pattern cascade.

    Args:
        scripts: Candidate script contents, in priority order.
        patterns: Compiled patterns, in priority order. A pattern with a
            capture group yields the group; otherwise the full match.

    Returns:
        The version string, or None when no pattern matches any script.
    """
    logger = get_global_logger()

    for pattern in patterns:
        for script in scripts:
            match = pattern.search(script)
            if match is None:
                continue
            version = match.group(1) if pattern.groups else match.group(0)
            logger.debug(
                "EXTRACT", f"Matched {version} with pattern {pattern.pattern!r}"
            )
            return version

    logger.debug("EXTRACT", "No version pattern matched")
    return None


def extract_play_store_version(
    document: str, marker: str, callback_marker: str = PLAY_CALLBACK_MARKER
) -> str | None:
    """Extract the published version from a Play Store listing page.

    Args:
        document: Full HTML body of the listing.
        marker: Application id used to pick the data-carrying script.
        callback_marker: Data-loader name used to pick the script.

    Returns:
        A dotted-triplet version string, or None.
    """
    if not document:
        return None
    return match_version(find_candidate_scripts(document, marker, callback_marker))


def extract_mi_store_version(document: str) -> str | None:
    """Extract the ``versionName`` value from a Mi Store listing page.

    Returns:
        The quoted version value, or None when the token is absent.
    """
    logger = get_global_logger()

    if not document:
        return None

    match = MI_VERSION_PATTERN.search(document)
    if match is None:
        logger.debug("EXTRACT", "Mi Store versionName token not found")
        return None

    logger.debug("EXTRACT", f"Mi Store version extracted: {match.group(1)}")
    return match.group(1)
