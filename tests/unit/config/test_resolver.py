"""Unit tests for configuration resolution.

These tests verify the core behaviors of the resolver:
- With no overrides the resolved record is exactly the hard-coded defaults.
- Call options > instance defaults > environment > defaults, per field.
- Empty environment variables count as unset.
"""

import os
from unittest.mock import patch

import pytest

from morphql.config import (
    FIELD_ORDER,
    UNSET,
    ConfigResolver,
    EnvironmentConfigLoader,
    FrozenConfig,
    default_values,
    mapping_stage,
    resolve_config,
)

pytestmark = pytest.mark.unit


class TestDefaults:
    def test_resolve_without_sources_equals_defaults(self):
        resolved = resolve_config({}, {})

        assert resolved.to_frozen() == FrozenConfig(**default_values())
        assert set(resolved.origin.values()) == {"default"}

    def test_default_record_values(self):
        frozen = resolve_config().to_frozen()

        assert frozen.provider == "cli"
        assert frozen.runtime == "node"
        assert frozen.cli_path == "morphql"
        assert frozen.node_path == "node"
        assert frozen.qjs_path is None
        assert frozen.cache_dir is None
        assert frozen.server_url == "http://localhost:3000"
        assert frozen.api_key is None
        assert frozen.timeout == 30

    def test_resolution_is_idempotent(self):
        with patch.dict(os.environ, {"MORPHQL_PROVIDER": "server"}):
            first = resolve_config({"timeout": 5}, {"api_key": "k"})
            second = resolve_config({"timeout": 5}, {"api_key": "k"})

        assert first == second


class TestPrecedence:
    def test_call_beats_instance_beats_env(self):
        with patch.dict(os.environ, {"MORPHQL_SERVER_URL": "http://env:1"}):
            call = resolve_config(
                {"server_url": "http://call:1"}, {"server_url": "http://instance:1"}
            )
            instance = resolve_config({}, {"server_url": "http://instance:1"})
            env = resolve_config({}, {})

        assert (call.server_url, call.origin["server_url"]) == ("http://call:1", "call")
        assert (instance.server_url, instance.origin["server_url"]) == (
            "http://instance:1",
            "instance",
        )
        assert (env.server_url, env.origin["server_url"]) == ("http://env:1", "env")

    def test_each_field_is_resolved_independently(self):
        """Setting only timeout at call level must not affect provider."""
        with patch.dict(os.environ, {"MORPHQL_PROVIDER": "server"}):
            resolved = resolve_config({"timeout": 5}, {"runtime": "qjs"})

        assert resolved.timeout == 5
        assert resolved.origin["timeout"] == "call"
        assert resolved.provider == "server"
        assert resolved.origin["provider"] == "env"
        assert resolved.runtime == "qjs"
        assert resolved.origin["runtime"] == "instance"
        assert resolved.origin["cli_path"] == "default"

    def test_none_values_fall_through(self):
        resolved = resolve_config({"provider": None}, {"provider": "server"})

        assert resolved.provider == "server"
        assert resolved.origin["provider"] == "instance"

    def test_unknown_keys_are_ignored(self):
        resolved = resolve_config({"query": "q", "colour": "blue"}, {"nope": 1})

        assert not hasattr(resolved, "colour")
        assert resolved.to_frozen() == FrozenConfig(**default_values())


class TestEnvironmentTier:
    def test_empty_env_var_is_treated_as_unset(self):
        with patch.dict(os.environ, {"MORPHQL_PROVIDER": "", "MORPHQL_TIMEOUT": ""}):
            resolved = resolve_config()

        assert resolved.provider == "cli"
        assert resolved.timeout == 30
        assert resolved.origin["provider"] == "default"

    def test_env_values_are_not_coerced(self):
        with patch.dict(os.environ, {"MORPHQL_TIMEOUT": "12.5"}):
            resolved = resolve_config()

        assert resolved.timeout == "12.5"

    def test_every_field_maps_to_one_env_var(self):
        environ = {f"MORPHQL_{field.upper()}": f"v-{field}" for field in FIELD_ORDER}
        resolver = ConfigResolver(EnvironmentConfigLoader(environ))

        resolved = resolver.resolve()

        for field in FIELD_ORDER:
            assert getattr(resolved, field) == f"v-{field}"
            assert resolved.origin[field] == "env"

    def test_loader_returns_unset_marker(self):
        loader = EnvironmentConfigLoader({"MORPHQL_API_KEY": ""})

        assert loader.lookup("api_key") is UNSET
        assert loader.lookup("cache_dir") is UNSET
        assert loader.load_env_config() == {}

    def test_env_summary_redacts_api_key(self):
        loader = EnvironmentConfigLoader(
            {"MORPHQL_API_KEY": "secret", "MORPHQL_PROVIDER": "server", "HOME": "/x"}
        )

        assert loader.get_env_summary() == {
            "MORPHQL_PROVIDER": "server",
            "MORPHQL_API_KEY": "<redacted>",
        }


class TestStages:
    def test_mapping_stage_reports_absent_values(self):
        stage = mapping_stage({"provider": "server", "runtime": None})

        assert stage("provider") == "server"
        assert stage("runtime") is UNSET
        assert stage("timeout") is UNSET

    def test_stage_order(self):
        origins = [origin for origin, _ in ConfigResolver().stages()]

        assert origins == ["call", "instance", "env", "default"]


class TestResolvedConfig:
    def test_with_overrides_marks_call_origin(self):
        resolved = resolve_config().with_overrides(provider="server", bogus=1)

        assert resolved.provider == "server"
        assert resolved.origin["provider"] == "call"
        assert resolved.origin["runtime"] == "default"

    def test_str_and_repr_redact_api_key(self):
        resolved = resolve_config({"api_key": "super-secret"})

        assert "super-secret" not in str(resolved)
        assert "super-secret" not in repr(resolved.to_frozen())
        assert "[REDACTED]" in str(resolved.to_frozen())

    def test_audit_shows_origins_without_secrets(self):
        with patch.dict(
            os.environ,
            {"MORPHQL_API_KEY": "env-secret", "MORPHQL_SERVER_URL": "http://e:1"},
        ):
            report = resolve_config({"provider": "server"}).audit()

        assert "provider: call:server" in report
        assert "server_url: env:MORPHQL_SERVER_URL=http://e:1" in report
        assert "api_key: env:MORPHQL_API_KEY=<redacted>" in report
        assert "env-secret" not in report
        assert "timeout: default:30" in report

    def test_frozen_config_is_immutable(self):
        frozen = resolve_config().to_frozen()

        with pytest.raises(AttributeError):
            frozen.provider = "server"  # type: ignore[misc]
