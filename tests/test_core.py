"""
Tests for core models, keys, durations and configuration.
"""

from pathlib import Path

import pytest

from cacher.core import config
from cacher.core.duration import parse_duration
from cacher.core.exceptions import (
    CacheBackendError,
    CacherError,
    ConfigurationError,
    InvalidDurationError,
    ValidationError,
)
from cacher.core.keys import entity_prefix, normalize_query, query_digest, query_key
from cacher.core.models import QUERY_DEFAULTS, ReadPlan, Route, Settings
from cacher.core.validation import validate_entity_name


class TestSettings:
    """Tests for the Settings dataclass."""

    def test_defaults(self):
        assert Settings().as_dict() == {
            "cache_config_name": "default",
            "clear_on_delete": True,
            "clear_on_save": True,
            "auto": False,
            "compress": False,
        }

    def test_from_options_ignores_unknown_keys(self):
        settings = Settings.from_options({"auto": True, "prefix": "x"})
        assert settings == Settings(auto=True)

    def test_from_none(self):
        assert Settings.from_options(None) == Settings()

    def test_frozen(self):
        settings = Settings()
        with pytest.raises(AttributeError):
            settings.auto = True

    def test_string_flag_is_not_truthy(self):
        with pytest.raises(ValidationError) as exc_info:
            Settings.from_options({"auto": "false"})

        assert exc_info.value.field == "auto"
        assert "expected True or False" in str(exc_info.value)

    def test_empty_cache_config_name(self):
        with pytest.raises(ValidationError) as exc_info:
            Settings(cache_config_name="")

        assert exc_info.value.field == "cache_config_name"


class TestValidateEntityName:
    """Tests for entity name validation."""

    @pytest.mark.parametrize("name", ["Post", "BlogPost", "post_comment", "Post-2"])
    def test_valid_names(self, name):
        assert validate_entity_name(name) == name

    def test_separator_rejected(self):
        with pytest.raises(ValidationError) as exc_info:
            validate_entity_name("Post:draft")

        assert "cannot contain ':'" in str(exc_info.value)

    @pytest.mark.parametrize("name", ["", None, "Post\x00", "Post\t"])
    def test_invalid_names(self, name):
        with pytest.raises(ValidationError):
            validate_entity_name(name)


class TestReadPlan:
    """Tests for ReadPlan."""

    def test_default_route_is_primary(self):
        plan = ReadPlan(query={})
        assert plan.route is Route.PRIMARY
        assert plan.will_cache is False

    def test_cache_route(self):
        assert ReadPlan(query={}, route=Route.CACHE).will_cache is True

    def test_route_str(self):
        assert str(Route.CACHE) == "cache"


class TestKeys:
    """Tests for cache key derivation."""

    def test_normalize_fills_defaults(self):
        normalized = normalize_query({"conditions": {"id": 1}})
        assert normalized["conditions"] == {"id": 1}
        assert normalized["page"] == 1
        assert set(normalized) == set(QUERY_DEFAULTS)

    def test_normalize_drops_directive(self):
        assert "cache" not in normalize_query({"cache": True})

    def test_normalize_does_not_share_defaults(self):
        normalized = normalize_query(None)
        normalized["joins"].append("x")
        assert QUERY_DEFAULTS["joins"] == []

    def test_digest_ignores_key_order(self):
        a = {"conditions": {"id": 1, "published": True}, "limit": 5}
        b = {"limit": 5, "conditions": {"published": True, "id": 1}}
        assert query_digest(a) == query_digest(b)

    def test_digest_matches_padded_query(self):
        """Test that an explicit default and an omitted option hash alike."""
        assert query_digest({}) == query_digest({"page": 1, "callbacks": True})

    def test_digest_differs_per_query(self):
        assert query_digest({"conditions": {"id": 1}}) != query_digest({"conditions": {"id": 2}})

    def test_query_key_shape(self):
        key = query_key("Post", "default", {"conditions": {"id": 1}})
        entity, source, digest = key.split(":")
        assert entity == "Post"
        assert source == "default"
        assert len(digest) == 32

    def test_compressed_key_suffix(self):
        plain = query_key("Post", "default", {})
        compressed = query_key("Post", "default", {}, compress=True)
        assert compressed == plain + ":gz"

    def test_entity_prefix(self):
        assert query_key("Post", "default", {}).startswith(entity_prefix("Post"))
        assert not query_key("PostTag", "default", {}).startswith(entity_prefix("Post"))


class TestParseDuration:
    """Tests for duration parsing."""

    @pytest.mark.parametrize(
        "value,expected",
        [
            ("+1 hour", 3600),
            ("1 hour", 3600),
            ("+30 minutes", 1800),
            ("+2 days", 172800),
            ("+1 week", 604800),
            ("45 secs", 45),
            ("+1 day 6 hours", 108000),
            ("+1 DAY", 86400),
            ("3600", 3600),
            (900, 900),
        ],
    )
    def test_valid(self, value, expected):
        assert parse_duration(value) == expected

    @pytest.mark.parametrize("value", ["", "soon", "+1 fortnight", "-1 hour", "hour", True, -5])
    def test_invalid(self, value):
        with pytest.raises(InvalidDurationError):
            parse_duration(value)


class TestConfig:
    """Tests for environment configuration."""

    @pytest.mark.parametrize("value", ["1", "true", "YES", " on "])
    def test_cache_disabled_truthy(self, monkeypatch, value):
        monkeypatch.setenv(config.DISABLE_ENV, value)
        assert config.cache_disabled() is True

    @pytest.mark.parametrize("value", ["", "0", "false", "off"])
    def test_cache_disabled_falsy(self, monkeypatch, value):
        monkeypatch.setenv(config.DISABLE_ENV, value)
        assert config.cache_disabled() is False

    def test_cache_disabled_unset(self):
        assert config.cache_disabled() is False

    def test_default_db_path(self, monkeypatch):
        monkeypatch.delenv(config.DB_PATH_ENV, raising=False)
        assert config.default_db_path() == Path.home() / ".cacher" / "cache.db"

    def test_default_ttl(self, monkeypatch):
        monkeypatch.delenv(config.DEFAULT_TTL_ENV, raising=False)
        assert config.default_ttl() == config.DEFAULT_TTL

    def test_default_ttl_invalid(self, monkeypatch):
        monkeypatch.setenv(config.DEFAULT_TTL_ENV, "whenever")
        with pytest.raises(InvalidDurationError):
            config.default_ttl()


class TestExceptions:
    """Tests for the exception hierarchy."""

    def test_details_in_str(self):
        error = CacheBackendError("purge", "backend unavailable")
        assert str(error) == "Cache error during purge: backend unavailable"
        assert error.operation == "purge"

    def test_message_only(self):
        assert str(CacherError("boom")) == "boom"

    def test_hierarchy(self):
        assert issubclass(InvalidDurationError, ValidationError)
        assert issubclass(ValidationError, CacherError)
        assert issubclass(ConfigurationError, CacherError)
        assert issubclass(CacheBackendError, CacherError)
