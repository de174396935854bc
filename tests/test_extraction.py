"""
Tests for storeversion.extraction module.

Tests the Play Store pattern cascade including:
- Each of the five patterns on its own
- Pattern priority across and within scripts
- Body and script isolation
And the Mi Store versionName extractor.
"""

from __future__ import annotations

import pytest

from storeversion.extraction import (
    extract_mi_store_version,
    extract_play_store_version,
    find_candidate_scripts,
    match_version,
)

from .conftest import PACKAGE, make_mi_page, make_play_page


class TestPatternCascade:
    """Tests for the five version patterns."""

    @pytest.mark.parametrize(
        "script_body, expected",
        [
            ('["1.2.3"]', "1.2.3"),
            ("['4.5.6']", "4.5.6"),
            ('null, "7.8.9", null', "7.8.9"),
            ("null, '10.11.12', null", "10.11.12"),
            ("null, 13.14.15, null", "13.14.15"),
        ],
        ids=["bracketed-double", "bracketed-single", "double", "single", "bare"],
    )
    def test_each_pattern_extracts_version(self, script_body, expected):
        """Test that every pattern shape yields the embedded version."""
        html = make_play_page(script_body)
        assert extract_play_store_version(html, PACKAGE) == expected

    def test_bracketed_wins_over_bare_in_same_script(self):
        """Test that a bracketed match beats an earlier bare match."""
        html = make_play_page('1.0.0, [["2.0.0"]]')
        assert extract_play_store_version(html, PACKAGE) == "2.0.0"

    def test_higher_priority_pattern_wins_across_scripts(self):
        """Test that patterns are the outer loop, scripts the inner one."""
        first = f"<script>AF_initDataCallback('{PACKAGE}', 1.0.0)</script>"
        second = f"<script>AF_initDataCallback('{PACKAGE}', [\"3.0.0\"])</script>"
        html = f"<html><body>{first}{second}</body></html>"
        assert extract_play_store_version(html, PACKAGE) == "3.0.0"

    def test_first_script_wins_for_same_pattern(self):
        """Test that within a pattern the earlier script wins."""
        scripts = ['["1.1.1"]', '["2.2.2"]']
        assert match_version(scripts) == "1.1.1"

    def test_no_version_returns_none(self):
        """Test that a qualifying script without a version yields None."""
        html = make_play_page("null, 'no version here'")
        assert extract_play_store_version(html, PACKAGE) is None


class TestDocumentIsolation:
    """Tests for body and script selection."""

    def test_empty_document_returns_none(self):
        """Test that an empty document yields None."""
        assert extract_play_store_version("", PACKAGE) is None

    def test_missing_body_returns_none(self):
        """Test that a page without <body> yields None instead of raising."""
        html = f"<html><script>AF_initDataCallback('{PACKAGE}', [\"1.2.3\"])</script></html>"
        assert extract_play_store_version(html, PACKAGE) is None

    def test_body_tag_is_case_insensitive(self):
        """Test that uppercase tags with attributes are recognised."""
        html = (
            '<HTML><BODY class="x"><SCRIPT type="text/javascript">'
            f"AF_initDataCallback('{PACKAGE}', [\"5.6.7\"])"
            "</SCRIPT></BODY></HTML>"
        )
        assert extract_play_store_version(html, PACKAGE) == "5.6.7"

    def test_head_scripts_are_ignored(self):
        """Test that only scripts inside <body> are candidates."""
        html = make_play_page("null")
        # The head script carries ["0.0.1"] but sits outside the body.
        assert extract_play_store_version(html, PACKAGE) is None

    def test_script_without_callback_marker_is_excluded(self):
        """Test that a script with the key but no callback is skipped."""
        html = f"<html><body><script>var d = ['{PACKAGE}', [\"1.2.3\"]];</script></body></html>"
        assert extract_play_store_version(html, PACKAGE) is None

    def test_script_without_key_is_excluded(self):
        """Test that a callback script for another app is skipped."""
        html = make_play_page('["1.2.3"]', marker="com.other.app")
        assert extract_play_store_version(html, PACKAGE) is None

    def test_find_candidate_scripts_keeps_document_order(self):
        """Test that candidates are returned in document order."""
        html = (
            "<body>"
            f"<script>AF_initDataCallback('{PACKAGE}', 'a')</script>"
            "<script>unrelated()</script>"
            f"<script>AF_initDataCallback('{PACKAGE}', 'b')</script>"
            "</body>"
        )
        scripts = find_candidate_scripts(html, PACKAGE)
        assert len(scripts) == 2
        assert scripts[0].endswith("'a')")
        assert scripts[1].endswith("'b')")

    def test_custom_callback_marker(self):
        """Test that the callback marker can be overridden."""
        html = f"<body><script>LOAD('{PACKAGE}', [\"8.8.8\"])</script></body>"
        assert extract_play_store_version(html, PACKAGE) is None
        assert extract_play_store_version(html, PACKAGE, "LOAD") == "8.8.8"


class TestMiStoreExtraction:
    """Tests for the versionName extractor."""

    def test_extracts_version_name(self):
        """Test extracting a versionName token."""
        assert extract_mi_store_version(make_mi_page("1.14.3")) == "1.14.3"

    def test_allows_whitespace_around_colon(self):
        """Test that spacing around the colon is tolerated."""
        assert extract_mi_store_version('{versionName : "2.0"}') == "2.0"

    def test_missing_token_returns_none(self):
        """Test that a page without the token yields None."""
        assert extract_mi_store_version(make_mi_page(None)) is None

    def test_empty_document_returns_none(self):
        """Test that an empty document yields None."""
        assert extract_mi_store_version("") is None


class TestMarkupEdgeCases:
    """Tests for script text that looks like markup or digits."""

    def test_closing_body_inside_script_text(self):
        """Test that a literal </body> in script text does not end the body."""
        html = (
            "<body><script>AF_initDataCallback({data:['com.example.app', "
            '"</body>", ["1.2.3"]]})</script></body>'
        )
        assert extract_play_store_version(html, PACKAGE) == "1.2.3"

    def test_empty_script_tag_is_skipped(self):
        """Test that an empty <script> does not break candidate selection."""
        html = make_play_page('["4.4.4"]').replace("<body>", "<body><script></script>")
        assert extract_play_store_version(html, PACKAGE) == "4.4.4"

    def test_non_ascii_digits_are_not_versions(self):
        """Test that only ASCII digits form a dotted triplet."""
        html = make_play_page('["١.٢.٣"]')
        assert extract_play_store_version(html, PACKAGE) is None

    def test_non_ascii_digits_rejected_by_mi_extractor(self):
        """Test that versionName must use ASCII digits."""
        assert extract_mi_store_version('versionName:"١.٢"') is None

    def test_ascii_version_after_non_ascii_decoy(self):
        """Test that an ASCII version still wins past a non-ASCII decoy."""
        html = make_play_page('["١.٢.٣"], "2.5.0"')
        assert extract_play_store_version(html, PACKAGE) == "2.5.0"
