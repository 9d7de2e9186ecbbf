"""Settings, source registry and entrypoint tests"""

import json
from pathlib import Path

import pytest

from vps_catalog import etl_entrypoint
from vps_catalog.core.config import Settings
from vps_catalog.core.errors import CollectionLoadError
from vps_catalog.core.logging import _normalize_level
from vps_catalog.ingestion import PROVIDER_SOURCES, build_sources

CREDENTIAL_VARS = [
    "DIGITALOCEAN_API_KEY",
    "HETZNER_API_KEY",
    "VULTR_API_KEY",
    "UPCLOUD_USERNAME",
    "UPCLOUD_PASSWORD",
    "SCALEWAY_API_KEY",
    "VPS_CATALOG_API_URL",
    "VPS_CATALOG_API_KEY",
]


@pytest.fixture
def clean_env(monkeypatch):
    for name in CREDENTIAL_VARS + ["HETZNER_INCLUDE_ARM", "ENV", "LOG_LEVEL", "HTTP_TIMEOUT_SECONDS", "STRICT_VALIDATION"]:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


class TestSettings:
    def test_defaults(self, clean_env):
        config = Settings(_env_file=None)

        assert config.ENV == "dev"
        assert config.hetzner_include_arm is False
        assert config.HTTP_TIMEOUT_SECONDS == 15.0
        assert config.STRICT_VALIDATION is False
        assert all(getattr(config, name) is None for name in CREDENTIAL_VARS)

    def test_reads_environment(self, clean_env):
        clean_env.setenv("HETZNER_API_KEY", "hz-token")
        clean_env.setenv("HETZNER_INCLUDE_ARM", "true")
        clean_env.setenv("HTTP_TIMEOUT_SECONDS", "5")

        config = Settings(_env_file=None)

        assert config.HETZNER_API_KEY == "hz-token"
        assert config.hetzner_include_arm is True
        assert config.HTTP_TIMEOUT_SECONDS == 5.0

    @pytest.mark.parametrize(
        "value,enabled",
        [("true", True), ("TRUE", False), ("1", False), ("yes", False), ("foo", False), ("", False)],
    )
    def test_arm_flag_only_accepts_exact_true(self, clean_env, value, enabled):
        clean_env.setenv("HETZNER_INCLUDE_ARM", value)

        config = Settings(_env_file=None)

        assert config.hetzner_include_arm is enabled
        assert build_sources(config, only=["hetzner"])[0].include_arm is enabled

    def test_debug_is_suppressed_in_production(self, clean_env):
        assert Settings(_env_file=None, ENV="prod", LOG_LEVEL="DEBUG").effective_log_level == "INFO"
        assert Settings(_env_file=None, ENV="dev", LOG_LEVEL="DEBUG").effective_log_level == "DEBUG"

    @pytest.mark.parametrize(
        "value,expected",
        [("debug", "DEBUG"), ("warn", "WARNING"), (None, "INFO"), ("verbose", "INFO")],
    )
    def test_log_level_normalization(self, value, expected):
        assert _normalize_level(value) == expected


class TestBuildSources:
    def test_registration_order(self, clean_env):
        sources = build_sources(Settings(_env_file=None))

        assert tuple(source.name for source in sources) == PROVIDER_SOURCES

    def test_settings_are_passed_explicitly(self, clean_env):
        config = Settings(
            _env_file=None,
            HETZNER_API_KEY="hz",
            HETZNER_INCLUDE_ARM="true",
            UPCLOUD_USERNAME="user",
            UPCLOUD_PASSWORD="secret",
            HTTP_TIMEOUT_SECONDS=3.0,
        )

        sources = {source.name: source for source in build_sources(config)}

        assert sources["hetzner"].api_key == "hz"
        assert sources["hetzner"].include_arm is True
        assert sources["upcloud"].missing_credentials() == []
        assert sources["digitalocean"].missing_credentials() == ["DIGITALOCEAN_API_KEY"]
        assert all(source.timeout == 3.0 for source in sources.values())

    def test_remote_feed_is_registered_last_when_configured(self, clean_env):
        config = Settings(_env_file=None, VPS_CATALOG_API_URL="https://catalog.example.com/plans")

        sources = build_sources(config)

        assert sources[-1].name == "remote"
        assert len(sources) == len(PROVIDER_SOURCES) + 1

    def test_only_filters_and_keeps_order(self, clean_env):
        sources = build_sources(Settings(_env_file=None), only=["scaleway", "linode"])

        assert [source.name for source in sources] == ["linode", "scaleway"]

    def test_unknown_name_is_rejected(self, clean_env):
        with pytest.raises(ValueError, match="Unknown source"):
            build_sources(Settings(_env_file=None), only=["aws"])


class TestEntrypoint:
    @pytest.fixture
    def config(self, clean_env, tmp_path):
        config = Settings(_env_file=None, OUTPUT_PATH=str(tmp_path / "vps_plans.json"))
        clean_env.setattr(etl_entrypoint, "settings", config)
        return config

    def test_writes_snapshot(self, config, captured_logs):
        snapshot = etl_entrypoint.main(["digitalocean"])

        assert snapshot.total == 0
        written = json.loads(Path(config.OUTPUT_PATH).read_text(encoding="utf-8"))
        assert written["plans"] == []
        assert "DIGITALOCEAN_API_KEY not set, skipping DigitalOcean plans" in captured_logs.messages("WARNING")

    def test_unknown_source_exits_2(self, config):
        with pytest.raises(SystemExit) as exc_info:
            etl_entrypoint.main(["aws"])

        assert exc_info.value.code == 2

    def test_load_failure_exits_1(self, config, monkeypatch, captured_logs):
        async def failing_build(sources):
            raise CollectionLoadError("1 plan(s) failed schema validation", failures=["x-1: website: Required"])

        monkeypatch.setattr(etl_entrypoint, "run_catalog_build", failing_build)

        with pytest.raises(SystemExit) as exc_info:
            etl_entrypoint.main(["digitalocean"])

        assert exc_info.value.code == 1
        assert "x-1: website: Required" in captured_logs.messages("ERROR")
