import logging

import pytest

import ghdash.errors as errors
import ghdash.github.clients as github_clients
import tests.fakes as fakes


def test_report_stores_entry(error_service: errors.ErrorService, clock: fakes.FakeClock):
    entry = error_service.report(
        "boom",
        category=errors.ErrorCategory.API,
        severity=errors.ErrorSeverity.WARNING,
        context={"repository": "widgets"},
    )

    assert entry.message == "boom"
    assert entry.timestamp == clock.now
    assert entry.category == errors.ErrorCategory.API
    assert entry.severity == errors.ErrorSeverity.WARNING
    assert entry.context == {"repository": "widgets"}
    assert entry.stack is None
    assert error_service.get_log() == [entry]


def test_ring_log_drops_oldest_entries():
    error_service = errors.ErrorService(max_log_size=3)

    for index in range(5):
        error_service.report(f"error {index}")

    assert [entry.message for entry in error_service.get_log()] == ["error 2", "error 3", "error 4"]


def test_get_log_returns_copy(error_service: errors.ErrorService):
    error_service.report("boom")

    error_service.get_log().clear()

    assert len(error_service.get_log()) == 1


def test_clear_log(error_service: errors.ErrorService):
    error_service.report("boom")
    error_service.clear_log()

    assert error_service.get_log() == []


def test_token_is_redacted(error_service: errors.ErrorService):
    received: list[errors.LoggedEntry] = []
    error_service.subscribe(received.append)

    entry = error_service.report(
        "boom",
        context={"token": "ghp_secret", "request": {"token": "ghp_secret", "path": "/orgs/acme"}},
    )

    assert entry.context == {
        "token": errors.REDACTED,
        "request": {"token": errors.REDACTED, "path": "/orgs/acme"},
    }
    assert received[0].context == entry.context
    assert "ghp_secret" not in repr(error_service.get_log())


def test_listener_errors_are_isolated(error_service: errors.ErrorService):
    received: list[errors.LoggedEntry] = []

    def broken_listener(entry: errors.LoggedEntry) -> None:
        raise RuntimeError("listener failure")

    error_service.subscribe(broken_listener)
    error_service.subscribe(received.append)

    entry = error_service.report("boom")

    assert received == [entry]


def test_unsubscribe(error_service: errors.ErrorService):
    received: list[errors.LoggedEntry] = []
    error_service.subscribe(received.append)
    error_service.unsubscribe(received.append)

    error_service.report("boom")

    assert received == []


def test_stack_is_recorded_for_source_error(error_service: errors.ErrorService):
    try:
        raise ValueError("broken payload")
    except ValueError as e:
        entry = error_service.report("boom", source_error=e)

    assert entry.stack is not None
    assert "ValueError: broken payload" in entry.stack


def test_entries_are_emitted_to_sink(error_service: errors.ErrorService, caplog: pytest.LogCaptureFixture):
    with caplog.at_level(logging.INFO, logger="ghdash.errors"):
        error_service.report("quota is low", severity=errors.ErrorSeverity.WARNING)

    records = [record for record in caplog.records if record.name == "ghdash.errors"]
    assert len(records) == 1
    assert records[0].levelno == logging.WARNING
    assert "quota is low" in records[0].getMessage()


def test_report_exception_uses_error_category(error_service: errors.ErrorService):
    error = github_clients.RestGithubClient.AuthError(
        "Bad credentials",
        status=401,
        category=errors.ErrorCategory.AUTH,
    )

    entry = error_service.report_exception(error)

    assert entry.category == errors.ErrorCategory.AUTH
    assert entry.severity == errors.ErrorSeverity.ERROR
    assert entry.message == "Bad credentials"


def test_report_exception_falls_back_to_network(error_service: errors.ErrorService):
    entry = error_service.report_exception(ConnectionResetError("reset by peer"), message="Request failed")

    assert entry.category == errors.ErrorCategory.NETWORK
    assert entry.severity == errors.ErrorSeverity.ERROR
    assert entry.message == "Request failed"


def test_report_exception_rate_limit_is_warning(error_service: errors.ErrorService):
    error = github_clients.RestGithubClient.RateLimitExceededError("exhausted", reset_at=fakes.START_TIME)

    entry = error_service.report_exception(error)

    assert entry.category == errors.ErrorCategory.RATE_LIMIT
    assert entry.severity == errors.ErrorSeverity.WARNING
