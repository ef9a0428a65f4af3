import datetime
import typing

import aiohttp
import pytest

import ghdash.cache as dashboard_cache
import ghdash.errors as errors
import ghdash.github.clients as github_clients
import ghdash.github.services as github_services
import ghdash.plugin_registration as plugin_registration
import tests.fakes as fakes

BASE_URL = "https://api.test"
TOKEN = "test-token"


@pytest.fixture(name="register_default_plugins", autouse=True, scope="session")
def register_default_plugins_fixture() -> None:
    plugin_registration.register_default_plugins()


@pytest.fixture(name="clock")
def clock_fixture() -> fakes.FakeClock:
    return fakes.FakeClock()


@pytest.fixture(name="error_service")
def error_service_fixture(clock: fakes.FakeClock) -> errors.ErrorService:
    return errors.ErrorService(clock=clock)


@pytest.fixture(name="cache_store")
def cache_store_fixture(clock: fakes.FakeClock) -> dashboard_cache.TypedCacheStore:
    return dashboard_cache.TypedCacheStore(clock=clock)


@pytest.fixture(name="fake_session")
def fake_session_fixture() -> fakes.FakeSession:
    return fakes.FakeSession(base_url=BASE_URL)


@pytest.fixture(name="client")
def client_fixture(
    fake_session: fakes.FakeSession,
    cache_store: dashboard_cache.TypedCacheStore,
    error_service: errors.ErrorService,
) -> github_clients.RestGithubClient:
    return github_clients.RestGithubClient(
        aiohttp_client=typing.cast(aiohttp.ClientSession, fake_session),
        token=TOKEN,
        cache_store=cache_store,
        error_service=error_service,
        base_url=BASE_URL,
    )


@pytest.fixture(name="dashboard")
def dashboard_fixture(
    client: github_clients.RestGithubClient,
    error_service: errors.ErrorService,
) -> github_services.GithubDashboard:
    return github_services.GithubDashboard.from_client(client=client, error_service=error_service)


@pytest.fixture(name="reset_at")
def reset_at_fixture() -> datetime.datetime:
    return datetime.datetime(2024, 1, 1, 1, 0, tzinfo=datetime.UTC)
