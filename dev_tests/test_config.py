"""
Tests for config.py - Configuration management module.

Test Areas:
1. Environment Loading
2. Invalid Values
3. Derived Settings (main action, JSZip, company domain)
"""

import pytest
from pydantic import ValidationError

from config import (
    DEFAULT_JSZIP_INTEGRITY,
    DEFAULT_JSZIP_URL,
    GroupSettings,
    get_host_from_url,
)


# ============================================================================
# Environment Loading
# ============================================================================

class TestEnvironmentLoading:
    """Tests for environment variable loading."""

    def test_uses_default_values_when_env_missing(self, make_config):
        """Given: No gallery variables in env, Then: Defaults apply"""
        cfg = make_config()
        assert cfg.GROUPS.allowed_cdn_hosts == ""
        assert cfg.GROUPS.max_group_file_count == 50
        assert cfg.GROUPS.head_request_concurrency == 20
        assert cfg.BRANDING.company_name == "Company"
        assert cfg.FEATURES.enable_demo is False
        assert cfg.FEATURES.enable_zip_download is True
        assert cfg.FEATURES.default_grid_columns == 2
        assert cfg.CACHE.gallery_seconds == 3600
        assert cfg.APP_PORT == 8000

    def test_loads_group_limits(self, make_config):
        cfg = make_config(
            ALLOWED_CDN_HOSTS=" a.ucarecdn.com, b.ucarecdn.com ",
            MAX_GROUP_FILE_COUNT="10",
            HEAD_REQUEST_CONCURRENCY="4",
            HEAD_REQUEST_TIMEOUT_SECONDS="2.5",
        )
        assert cfg.GROUPS.allowed_hosts() == {"a.ucarecdn.com", "b.ucarecdn.com"}
        assert cfg.GROUPS.max_group_file_count == 10
        assert cfg.GROUPS.head_request_concurrency == 4
        assert cfg.GROUPS.head_request_timeout_seconds == 2.5

    def test_loads_branding(self, make_config):
        cfg = make_config(COMPANY_NAME="Acme", BRAND_COLOR="#ff0000", HEADER_TITLE="Uploads")
        assert cfg.BRANDING.company_name == "Acme"
        assert cfg.BRANDING.brand_color == "#ff0000"
        assert cfg.BRANDING.header_title == "Uploads"

    def test_default_on_toggles_only_disabled_by_false(self, make_config):
        cfg = make_config(ENABLE_ZIP_DOWNLOAD="false", ENABLE_OPEN_ALL="no", ENABLE_LIGHTBOX="FALSE")
        assert cfg.FEATURES.enable_zip_download is False
        assert cfg.FEATURES.enable_open_all is True
        assert cfg.FEATURES.enable_lightbox is True

    def test_opt_in_toggles_only_enabled_by_true(self, make_config):
        cfg = make_config(ENABLE_DEMO="true", VIDEO_AUTOPLAY="1")
        assert cfg.FEATURES.enable_demo is True
        assert cfg.FEATURES.video_autoplay is False

    def test_image_fit(self, make_config):
        assert make_config(IMAGE_FIT="cover").FEATURES.image_fit == "cover"
        assert make_config(IMAGE_FIT="stretch").FEATURES.image_fit == "contain"

    def test_cache_lifetimes(self, make_config):
        cfg = make_config(CACHE_GALLERY_SECONDS="0", CACHE_SCRIPT_CDN_SECONDS="86400")
        assert cfg.CACHE.gallery_seconds == 0
        assert cfg.CACHE.script_cdn_seconds == 86400


# ============================================================================
# Invalid Values
# ============================================================================

class TestInvalidValues:
    """Invalid environment values fall back to defaults."""

    def test_invalid_integer_env_var_ignored(self, make_config):
        cfg = make_config(MAX_GROUP_FILE_COUNT="lots", HEAD_REQUEST_CONCURRENCY="0")
        assert cfg.GROUPS.max_group_file_count == 50
        assert cfg.GROUPS.head_request_concurrency == 20

    def test_invalid_timeout_ignored(self, make_config):
        assert make_config(HEAD_REQUEST_TIMEOUT_SECONDS="-1").GROUPS.head_request_timeout_seconds == 10.0
        assert make_config(HEAD_REQUEST_TIMEOUT_SECONDS="x").GROUPS.head_request_timeout_seconds == 10.0

    @pytest.mark.parametrize("value", ["0", "5", "two"])
    def test_grid_columns_out_of_range(self, make_config, value):
        assert make_config(DEFAULT_GRID_COLUMNS=value).FEATURES.default_grid_columns == 2

    def test_group_settings_are_frozen(self, make_config):
        cfg = make_config()
        with pytest.raises(ValidationError):
            cfg.GROUPS.max_group_file_count = 1000

    def test_group_settings_reject_zero_limits(self):
        with pytest.raises(ValidationError):
            GroupSettings(max_group_file_count=0)


# ============================================================================
# Derived Settings
# ============================================================================

class TestMainAction:
    """Tests for get_main_action()."""

    def test_default_is_lightbox(self, make_config):
        assert make_config().get_main_action() == "lightbox"

    @pytest.mark.parametrize("action", ["download", "open"])
    def test_explicit_action(self, make_config, action):
        assert make_config(MAIN_ACTION=action).get_main_action() == action

    def test_lightbox_disabled_falls_back_to_download(self, make_config):
        cfg = make_config(MAIN_ACTION="lightbox", ENABLE_LIGHTBOX="false")
        assert cfg.get_main_action() == "download"

    def test_unknown_action(self, make_config):
        assert make_config(MAIN_ACTION="zoom").get_main_action() == "lightbox"
        assert make_config(MAIN_ACTION="zoom", ENABLE_LIGHTBOX="false").get_main_action() == "download"


class TestJsZipConfig:
    """Tests for get_jszip_config()."""

    def test_default(self, make_config):
        assert make_config().get_jszip_config() == {
            "primary": DEFAULT_JSZIP_URL,
            "fallback": DEFAULT_JSZIP_URL,
            "integrity": DEFAULT_JSZIP_INTEGRITY,
        }

    def test_custom_url_without_integrity_skips_sri(self, make_config):
        jszip = make_config(JSZIP_URL="https://cdn.acme.example/jszip.js").get_jszip_config()
        assert jszip["primary"] == "https://cdn.acme.example/jszip.js"
        assert jszip["fallback"] == DEFAULT_JSZIP_URL
        assert jszip["integrity"] is None

    def test_custom_url_with_integrity(self, make_config):
        jszip = make_config(
            JSZIP_URL="https://cdn.acme.example/jszip.js",
            JSZIP_INTEGRITY="sha384-abc",
        ).get_jszip_config()
        assert jszip["integrity"] == "sha384-abc"

    def test_integrity_ignored_for_default_url(self, make_config):
        jszip = make_config(JSZIP_INTEGRITY="sha384-abc").get_jszip_config()
        assert jszip["integrity"] == DEFAULT_JSZIP_INTEGRITY


class TestUtilityFunctions:
    """Tests for company_domain() and get_host_from_url()."""

    @pytest.mark.parametrize("url,expected", [
        ("https://acme.example/", "acme.example"),
        ("http://acme.example/shop", "acme.example/shop"),
        ("acme.example", "acme.example"),
    ])
    def test_company_domain(self, make_config, url, expected):
        assert make_config(COMPANY_URL=url).company_domain() == expected

    @pytest.mark.parametrize("url,expected", [
        ("https://fonts.acme.example/a.css", "fonts.acme.example"),
        ("https://localhost:8080/x", "localhost:8080"),
        ("not a url", None),
        ("", None),
        (None, None),
    ])
    def test_get_host_from_url(self, url, expected):
        assert get_host_from_url(url) == expected
