import pathlib

import pytest

import ghdash.app as app
import ghdash.cache as dashboard_cache
import ghdash.storage as dashboard_storage


@pytest.fixture(name="clean_environment", autouse=True)
def clean_environment_fixture(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("GITHUB_DASHBOARD_SETTINGS_YAML", raising=False)


def test_defaults():
    settings = app.Settings()

    assert settings.github.base_url == "https://api.github.com"
    assert settings.github.rate_limit_warning_threshold == 100
    assert settings.github.back_pressure_partitions == [
        dashboard_cache.Partition.PULL_REQUEST,
        dashboard_cache.Partition.REPOSITORY,
    ]
    assert settings.cache.sweep_interval_seconds == 300
    assert settings.cache.persist_debounce_seconds == 5
    assert settings.cache.snapshot_key == "gh-dashboard-cache"
    assert settings.pipelines.repository_concurrency == 8
    assert settings.pipelines.pull_request_concurrency == 4
    assert isinstance(settings.storage, dashboard_storage.MemoryStorageSettings)


def test_partition_settings_defaults():
    partition_settings = app.Settings().cache.partition_settings

    assert partition_settings == dashboard_cache.DEFAULT_PARTITION_SETTINGS


def test_environment_overrides(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setenv("GITHUB_DASHBOARD_PIPELINES__REPOSITORY_CONCURRENCY", "2")
    monkeypatch.setenv("GITHUB_DASHBOARD_GITHUB__TOKEN", "ghp_from_env")

    settings = app.Settings()

    assert settings.pipelines.repository_concurrency == 2
    assert settings.github.token == "ghp_from_env"


def test_yaml_source(monkeypatch: pytest.MonkeyPatch, tmp_path: pathlib.Path):
    settings_path = tmp_path / "settings.yaml"
    settings_path.write_text(
        "\n".join(
            [
                "storage:",
                "  type: local_dir",
                f"  path: {tmp_path / 'state'}",
                "cache:",
                "  ttl_minutes:",
                "    USER: 30",
                "  max_entries:",
                "    PULL_REQUEST: 50",
            ]
        )
    )
    monkeypatch.setenv("GITHUB_DASHBOARD_SETTINGS_YAML", str(settings_path))

    settings = app.Settings()

    assert isinstance(settings.storage, dashboard_storage.LocalDirStorageSettings)
    assert settings.storage.path == str(tmp_path / "state")
    partition_settings = settings.cache.partition_settings
    assert partition_settings[dashboard_cache.Partition.USER].ttl_minutes == 30
    assert partition_settings[dashboard_cache.Partition.USER].max_entries == 100
    assert partition_settings[dashboard_cache.Partition.PULL_REQUEST].max_entries == 50
