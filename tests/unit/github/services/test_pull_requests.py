import datetime

import pytest
import pytest_mock

import ghdash.errors as errors
import ghdash.github.clients as github_clients
import ghdash.github.models as github_models
import ghdash.github.services as github_services

CREATED_AT = datetime.datetime(2024, 1, 1, tzinfo=datetime.UTC)


def _repository(name: str) -> github_models.Repository:
    return github_models.Repository(name=name, is_archived=False, pushed_at=CREATED_AT)


def _header(number: int, author_login: str | None = "octocat") -> github_models.PullRequestHeader:
    return github_models.PullRequestHeader(
        number=number,
        title=f"Pull request {number}",
        url=f"https://github.com/acme/widgets/pull/{number}",
        created_at=CREATED_AT,
        updated_at=CREATED_AT,
        author_login=author_login,
        labels=(),
        is_draft=False,
    )


@pytest.fixture(name="patched_client")
def patched_client_fixture(
    mocker: pytest_mock.MockerFixture,
    client: github_clients.RestGithubClient,
) -> github_clients.RestGithubClient:
    async def get_repository_pull_requests(owner: str, repository: str) -> list[github_models.PullRequestHeader]:
        return [_header(1)]

    async def get_pull_request_reviews(owner: str, repository: str, number: int) -> list[github_models.ReviewSummary]:
        if repository == "gadgets":
            raise RuntimeError("reviews are unavailable")
        return [github_models.ReviewSummary(state="APPROVED", reviewer_id=2, submitted_at=CREATED_AT)]

    async def get_user(login: str) -> github_models.UserProfile:
        return github_models.UserProfile(login=login, display_name="The Octocat")

    mocker.patch.object(
        client,
        "get_all_repositories",
        return_value=[_repository("widgets"), _repository("gadgets"), _repository("sprockets")],
    )
    mocker.patch.object(client, "get_repository_pull_requests", side_effect=get_repository_pull_requests)
    mocker.patch.object(client, "get_pull_request_reviews", side_effect=get_pull_request_reviews)
    mocker.patch.object(client, "get_user", side_effect=get_user)
    return client


@pytest.mark.asyncio
async def test_failed_pull_request_is_dropped(
    patched_client: github_clients.RestGithubClient,
    dashboard: github_services.GithubDashboard,
    error_service: errors.ErrorService,
):
    pull_requests = await dashboard.get_open_pull_requests("acme")

    assert sorted(pull_request.repo_name for pull_request in pull_requests) == ["sprockets", "widgets"]
    assert all(pull_request.review_state == github_models.ReviewState.APPROVED for pull_request in pull_requests)
    assert all(pull_request.author.display_name == "The Octocat" for pull_request in pull_requests)

    warnings = [entry for entry in error_service.get_log() if entry.severity == errors.ErrorSeverity.WARNING]
    assert len(warnings) == 1
    assert warnings[0].context == {"org": "acme", "repository": "gadgets", "number": 1}


@pytest.mark.asyncio
async def test_pull_request_fields(
    patched_client: github_clients.RestGithubClient,
    dashboard: github_services.GithubDashboard,
):
    pull_requests = await dashboard.get_open_pull_requests("acme")
    pull_request = next(pull_request for pull_request in pull_requests if pull_request.repo_name == "widgets")

    assert pull_request.number == 1
    assert pull_request.title == "Pull request 1"
    assert pull_request.author == github_models.UserProfile(login="octocat", display_name="The Octocat")
    assert pull_request.reviews == (
        github_models.ReviewSummary(state="APPROVED", reviewer_id=2, submitted_at=CREATED_AT),
    )


@pytest.mark.asyncio
async def test_deleted_author_is_ghost(
    mocker: pytest_mock.MockerFixture,
    client: github_clients.RestGithubClient,
    dashboard: github_services.GithubDashboard,
):
    mocker.patch.object(client, "get_all_repositories", return_value=[_repository("widgets")])
    mocker.patch.object(client, "get_repository_pull_requests", return_value=[_header(1, author_login=None)])
    mocker.patch.object(client, "get_pull_request_reviews", return_value=[])
    get_user = mocker.patch.object(client, "get_user")

    [pull_request] = await dashboard.get_open_pull_requests("acme")

    assert pull_request.author.login == "ghost"
    assert pull_request.review_state == github_models.ReviewState.PENDING
    get_user.assert_not_called()


@pytest.mark.asyncio
async def test_failed_repository_is_skipped(
    mocker: pytest_mock.MockerFixture,
    patched_client: github_clients.RestGithubClient,
    dashboard: github_services.GithubDashboard,
    error_service: errors.ErrorService,
):
    async def get_repository_pull_requests(owner: str, repository: str) -> list[github_models.PullRequestHeader]:
        if repository == "widgets":
            raise github_clients.RestGithubClient.NetworkError("connection reset")
        return [_header(1)]

    mocker.patch.object(patched_client, "get_repository_pull_requests", side_effect=get_repository_pull_requests)

    pull_requests = await dashboard.get_open_pull_requests("acme")

    assert [pull_request.repo_name for pull_request in pull_requests] == ["sprockets"]
    assert {entry.context.get("repository") for entry in error_service.get_log()} == {"widgets", "gadgets"}


@pytest.mark.asyncio
async def test_repository_enumeration_failure(
    mocker: pytest_mock.MockerFixture,
    client: github_clients.RestGithubClient,
    dashboard: github_services.GithubDashboard,
):
    cause = github_clients.RestGithubClient.NetworkError("connection refused")
    mocker.patch.object(client, "get_all_repositories", side_effect=cause)

    with pytest.raises(github_services.AggregationError) as exc_info:
        await dashboard.get_open_pull_requests("acme")

    assert exc_info.value.__cause__ is cause
    assert exc_info.value.category == errors.ErrorCategory.NETWORK


@pytest.mark.asyncio
async def test_rate_limit_is_not_swallowed(
    mocker: pytest_mock.MockerFixture,
    patched_client: github_clients.RestGithubClient,
    dashboard: github_services.GithubDashboard,
    reset_at: datetime.datetime,
):
    mocker.patch.object(
        patched_client,
        "get_pull_request_reviews",
        side_effect=github_clients.RestGithubClient.RateLimitExceededError("exhausted", reset_at=reset_at),
    )

    with pytest.raises(github_clients.RestGithubClient.RateLimitExceededError) as exc_info:
        await dashboard.get_open_pull_requests("acme")

    assert exc_info.value.reset_at == reset_at


@pytest.mark.asyncio
async def test_concurrency_widths_are_used(
    mocker: pytest_mock.MockerFixture,
    patched_client: github_clients.RestGithubClient,
    dashboard: github_services.GithubDashboard,
):
    batch = mocker.spy(patched_client, "batch")

    await dashboard.get_open_pull_requests("acme")

    widths = sorted({call.kwargs["width"] for call in batch.call_args_list})
    assert widths == [4, 8]
