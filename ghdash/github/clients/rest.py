import abc
import dataclasses
import datetime
import logging
import typing
import urllib.parse

import aiohttp
import pydantic

import ghdash.cache as cache
import ghdash.errors as errors
import ghdash.github.models as github_models
import ghdash.utils.asyncio as asyncio_utils
import ghdash.utils.json as json_utils
import ghdash.utils.pydantic as pydantic_utils

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://api.github.com"
DEFAULT_RATE_LIMIT_WARNING_THRESHOLD = 100
DEFAULT_BACK_PRESSURE_PARTITIONS = (cache.Partition.PULL_REQUEST, cache.Partition.REPOSITORY)
# (remaining below, TTL factor), tightest first
BACK_PRESSURE_STEPS = ((20, 3), (50, 2))

type RateLimitListener = typing.Callable[[github_models.RateLimitState], None]


class BaseRequest(abc.ABC):
    @property
    def method(self) -> str:
        return "GET"

    @property
    @abc.abstractmethod
    def path(self) -> str: ...

    @property
    @abc.abstractmethod
    def params(self) -> dict[str, typing.Any]: ...

    @property
    @abc.abstractmethod
    def partition(self) -> cache.Partition: ...

    @property
    def cache_key(self) -> str:
        query = urllib.parse.urlencode(sorted((key, str(value)) for key, value in self.params.items()))
        if not query:
            return self.path
        return f"{self.path}?{query}"


class PaginatedRequest(BaseRequest):
    page: int

    @abc.abstractmethod
    def with_page(self, page: int) -> typing.Self: ...


class BaseResponse(pydantic_utils.BaseModel):
    def to_dataclass(self) -> typing.Any:
        raise NotImplementedError


class _User(pydantic_utils.BaseModel):
    id: int
    login: str


# https://docs.github.com/en/rest/orgs/orgs#get-an-organization
@dataclasses.dataclass(frozen=True)
class GetOrganizationRequest(BaseRequest):
    org: github_models.OrganizationName

    @property
    def path(self) -> str:
        return f"/orgs/{self.org}"

    @property
    def params(self) -> dict[str, typing.Any]:
        return {}

    @property
    def partition(self) -> cache.Partition:
        return cache.Partition.ORGANIZATION


class GetOrganizationResponse(BaseResponse):
    login: str
    name: str | None = None
    description: str | None = None

    def to_dataclass(self) -> github_models.Organization:
        return github_models.Organization(
            login=self.login,
            display_name=self.name or self.login,
            description=self.description,
        )


# https://docs.github.com/en/rest/repos/repos#list-organization-repositories
@dataclasses.dataclass(frozen=True)
class GetOrganizationRepositoriesRequest(PaginatedRequest):
    org: github_models.OrganizationName
    per_page: int = 100
    page: int = 1
    sort: typing.Literal["created", "updated", "pushed", "full_name"] | None = None
    direction: typing.Literal["asc", "desc"] | None = None

    @property
    def path(self) -> str:
        return f"/orgs/{self.org}/repos"

    @property
    def params(self) -> dict[str, typing.Any]:
        params: dict[str, typing.Any] = {
            "per_page": self.per_page,
            "page": self.page,
        }
        if self.sort is not None:
            params["sort"] = self.sort
        if self.direction is not None:
            params["direction"] = self.direction
        return params

    @property
    def partition(self) -> cache.Partition:
        return cache.Partition.REPOSITORY

    def with_page(self, page: int) -> typing.Self:
        return dataclasses.replace(self, page=page)


class _Repository(pydantic_utils.BaseModel):
    name: str
    archived: bool = False
    pushed_at: datetime.datetime | None = None
    language: str | None = None
    topics: list[str] = pydantic.Field(default_factory=list)


class GetOrganizationRepositoriesResponse(BaseResponse, pydantic.RootModel[list[_Repository]]):
    root: list[_Repository]

    def to_dataclass(self) -> list[github_models.Repository]:
        return [
            github_models.Repository(
                name=repository.name,
                is_archived=repository.archived,
                pushed_at=repository.pushed_at,
                language=repository.language,
                topics=tuple(repository.topics),
            )
            for repository in self.root
        ]


# https://docs.github.com/en/rest/pulls/pulls#list-pull-requests
@dataclasses.dataclass(frozen=True)
class GetRepositoryPullRequestsRequest(BaseRequest):
    owner: str
    repository: github_models.RepositoryName
    state: typing.Literal["open", "closed", "all"] = "open"
    per_page: int = 100

    @property
    def path(self) -> str:
        return f"/repos/{self.owner}/{self.repository}/pulls"

    @property
    def params(self) -> dict[str, typing.Any]:
        return {
            "state": self.state,
            "per_page": self.per_page,
        }

    @property
    def partition(self) -> cache.Partition:
        return cache.Partition.PULL_REQUEST


class _Label(pydantic_utils.BaseModel):
    name: str
    color: str | None = None


class _PullRequest(pydantic_utils.BaseModel):
    number: int
    title: str
    html_url: str
    created_at: datetime.datetime
    updated_at: datetime.datetime
    user: _User | None = None
    labels: list[_Label] = pydantic.Field(default_factory=list)
    draft: bool = False


class GetRepositoryPullRequestsResponse(BaseResponse, pydantic.RootModel[list[_PullRequest]]):
    root: list[_PullRequest]

    def to_dataclass(self) -> list[github_models.PullRequestHeader]:
        return [
            github_models.PullRequestHeader(
                number=pr.number,
                title=pr.title,
                url=pr.html_url,
                created_at=pr.created_at,
                updated_at=pr.updated_at,
                author_login=pr.user.login if pr.user else None,
                labels=tuple(github_models.Label(name=label.name, color=label.color) for label in pr.labels),
                is_draft=pr.draft,
            )
            for pr in self.root
        ]


# https://docs.github.com/en/rest/pulls/reviews#list-reviews-for-a-pull-request
@dataclasses.dataclass(frozen=True)
class GetPullRequestReviewsRequest(BaseRequest):
    owner: str
    repository: github_models.RepositoryName
    number: int
    per_page: int = 100

    @property
    def path(self) -> str:
        return f"/repos/{self.owner}/{self.repository}/pulls/{self.number}/reviews"

    @property
    def params(self) -> dict[str, typing.Any]:
        return {"per_page": self.per_page}

    @property
    def partition(self) -> cache.Partition:
        return cache.Partition.PULL_REQUEST


class _Review(pydantic_utils.BaseModel):
    user: _User | None = None
    state: str
    submitted_at: datetime.datetime | None = None


class GetPullRequestReviewsResponse(BaseResponse, pydantic.RootModel[list[_Review]]):
    root: list[_Review]

    def to_dataclass(self) -> list[github_models.ReviewSummary]:
        return [
            github_models.ReviewSummary(
                state=review.state,
                reviewer_id=review.user.id if review.user else None,
                submitted_at=review.submitted_at,
            )
            for review in self.root
        ]


# https://docs.github.com/en/rest/users/users#get-a-user
@dataclasses.dataclass(frozen=True)
class GetUserRequest(BaseRequest):
    login: github_models.UserLogin

    @property
    def path(self) -> str:
        return f"/users/{self.login}"

    @property
    def params(self) -> dict[str, typing.Any]:
        return {}

    @property
    def partition(self) -> cache.Partition:
        return cache.Partition.USER


class GetUserResponse(BaseResponse):
    login: str
    name: str | None = None

    def to_dataclass(self) -> github_models.UserProfile:
        return github_models.UserProfile(login=self.login, display_name=self.name or self.login)


# https://docs.github.com/en/rest/actions/workflows#list-repository-workflows
@dataclasses.dataclass(frozen=True)
class GetRepositoryWorkflowsRequest(BaseRequest):
    owner: str
    repository: github_models.RepositoryName
    per_page: int = 100

    @property
    def path(self) -> str:
        return f"/repos/{self.owner}/{self.repository}/actions/workflows"

    @property
    def params(self) -> dict[str, typing.Any]:
        return {"per_page": self.per_page}

    @property
    def partition(self) -> cache.Partition:
        return cache.Partition.WORKFLOW_RUN


class GetRepositoryWorkflowsResponse(BaseResponse):
    class Workflow(pydantic_utils.BaseModel):
        id: int
        name: str
        state: str

    total_count: int = 0
    workflows: list[Workflow]

    def to_dataclass(self) -> list[github_models.Workflow]:
        return [
            github_models.Workflow(
                id=workflow.id,
                name=workflow.name,
                is_enabled=workflow.state == "active",
            )
            for workflow in self.workflows
        ]


# https://docs.github.com/en/rest/actions/workflow-runs#list-workflow-runs-for-a-workflow
@dataclasses.dataclass(frozen=True)
class GetWorkflowRunsRequest(BaseRequest):
    owner: str
    repository: github_models.RepositoryName
    workflow_id: int
    per_page: int = 1

    @property
    def path(self) -> str:
        return f"/repos/{self.owner}/{self.repository}/actions/workflows/{self.workflow_id}/runs"

    @property
    def params(self) -> dict[str, typing.Any]:
        return {"per_page": self.per_page}

    @property
    def partition(self) -> cache.Partition:
        return cache.Partition.WORKFLOW_RUN


class GetWorkflowRunsResponse(BaseResponse):
    class WorkflowRun(pydantic_utils.BaseModel):
        id: int
        html_url: str
        status: str
        conclusion: str | None = None
        created_at: datetime.datetime

    total_count: int = 0
    workflow_runs: list[WorkflowRun]

    def to_dataclass(self) -> list[github_models.WorkflowRun]:
        return [
            github_models.WorkflowRun(
                id=workflow_run.id,
                url=workflow_run.html_url,
                status=workflow_run.status,
                conclusion=workflow_run.conclusion,
                created_at=workflow_run.created_at,
            )
            for workflow_run in self.workflow_runs
        ]


# https://docs.github.com/en/rest/actions/workflow-jobs#list-jobs-for-a-workflow-run
@dataclasses.dataclass(frozen=True)
class GetWorkflowRunJobsRequest(BaseRequest):
    owner: str
    repository: github_models.RepositoryName
    run_id: int
    per_page: int = 100

    @property
    def path(self) -> str:
        return f"/repos/{self.owner}/{self.repository}/actions/runs/{self.run_id}/jobs"

    @property
    def params(self) -> dict[str, typing.Any]:
        return {"per_page": self.per_page}

    @property
    def partition(self) -> cache.Partition:
        return cache.Partition.WORKFLOW_RUN


class _Job(pydantic_utils.BaseModel):
    class Step(pydantic_utils.BaseModel):
        name: str
        number: int
        status: str | None = None
        conclusion: str | None = None
        completed_at: datetime.datetime | None = None

    id: int
    name: str
    status: str
    conclusion: str | None = None
    steps: list[Step] = pydantic.Field(default_factory=list)


class GetWorkflowRunJobsResponse(BaseResponse):
    total_count: int = 0
    jobs: list[_Job]

    def to_dataclass(self) -> list[github_models.Job]:
        return [
            github_models.Job(
                id=job.id,
                name=job.name,
                status=job.status,
                conclusion=job.conclusion,
            )
            for job in self.jobs
        ]


# https://docs.github.com/en/rest/actions/workflow-jobs#get-a-job-for-a-workflow-run
@dataclasses.dataclass(frozen=True)
class GetJobRequest(BaseRequest):
    owner: str
    repository: github_models.RepositoryName
    job_id: int

    @property
    def path(self) -> str:
        return f"/repos/{self.owner}/{self.repository}/actions/jobs/{self.job_id}"

    @property
    def params(self) -> dict[str, typing.Any]:
        return {}

    @property
    def partition(self) -> cache.Partition:
        return cache.Partition.WORKFLOW_RUN


class GetJobResponse(BaseResponse, _Job):
    def to_dataclass(self) -> github_models.JobFailure:
        return github_models.JobFailure(
            job_name=self.name,
            failed_steps=tuple(
                github_models.FailedStep(
                    name=step.name,
                    number=step.number,
                    error="Failed" if step.completed_at is not None else "Timeout or canceled",
                )
                for step in self.steps
                if step.conclusion == "failure"
            ),
        )


# https://docs.github.com/en/rest/checks/runs#list-check-run-annotations
@dataclasses.dataclass(frozen=True)
class GetCheckRunAnnotationsRequest(BaseRequest):
    owner: str
    repository: github_models.RepositoryName
    check_run_id: int
    per_page: int = 100

    @property
    def path(self) -> str:
        return f"/repos/{self.owner}/{self.repository}/check-runs/{self.check_run_id}/annotations"

    @property
    def params(self) -> dict[str, typing.Any]:
        return {"per_page": self.per_page}

    @property
    def partition(self) -> cache.Partition:
        return cache.Partition.WORKFLOW_RUN


class _Annotation(pydantic_utils.BaseModel):
    path: str
    start_line: int | None = None
    annotation_level: str
    title: str | None = None
    message: str


class GetCheckRunAnnotationsResponse(BaseResponse, pydantic.RootModel[list[_Annotation]]):
    root: list[_Annotation]

    def to_dataclass(self) -> list[github_models.Annotation]:
        return [
            github_models.Annotation(
                level=annotation.annotation_level,
                message=annotation.message,
                title=annotation.title,
                file=annotation.path,
                line=annotation.start_line,
            )
            for annotation in self.root
        ]


class _ErrorBody(pydantic_utils.BaseModel):
    message: str | None = None
    documentation_url: str | None = None


def _parse_rate_limit(headers: typing.Mapping[str, str]) -> github_models.RateLimitState | None:
    raw_remaining = headers.get("x-ratelimit-remaining")
    raw_reset = headers.get("x-ratelimit-reset")
    if raw_remaining is None or raw_reset is None:
        return None

    try:
        remaining = max(0, int(raw_remaining))
        reset_at = datetime.datetime.fromtimestamp(int(raw_reset), tz=datetime.UTC)
    except ValueError:
        logger.warning("Malformed rate limit headers remaining(%s) reset(%s)", raw_remaining, raw_reset)
        return None

    return github_models.RateLimitState(remaining=remaining, reset_at=reset_at)


def back_pressure_factor(remaining: int) -> int:
    for limit, factor in BACK_PRESSURE_STEPS:
        if remaining < limit:
            return factor
    return 1


class RestGithubClient:
    class BaseError(Exception):
        category: errors.ErrorCategory = errors.ErrorCategory.NETWORK

        def __init__(self, message: str, *args: typing.Any) -> None:
            super().__init__(message, *args)
            self.message = message

    class NetworkError(BaseError): ...

    class InvalidResponseError(BaseError):
        category = errors.ErrorCategory.API

    class ResponseError(BaseError):
        def __init__(
            self,
            message: str,
            status: int,
            category: errors.ErrorCategory,
            documentation_url: str | None = None,
        ) -> None:
            super().__init__(message)
            self.status = status
            self.category = category
            self.documentation_url = documentation_url

    class NotFoundError(ResponseError): ...

    class AuthError(ResponseError): ...

    class RateLimitExceededError(BaseError):
        category = errors.ErrorCategory.RATE_LIMIT

        def __init__(self, message: str, reset_at: datetime.datetime) -> None:
            super().__init__(message)
            self.reset_at = reset_at

    def __init__(
        self,
        aiohttp_client: aiohttp.ClientSession,
        token: str,
        cache_store: cache.TypedCacheStore,
        error_service: errors.ErrorService,
        base_url: str = DEFAULT_BASE_URL,
        rate_limit_warning_threshold: int = DEFAULT_RATE_LIMIT_WARNING_THRESHOLD,
        back_pressure_partitions: typing.Iterable[cache.Partition] = DEFAULT_BACK_PRESSURE_PARTITIONS,
    ) -> None:
        self._aiohttp_client = aiohttp_client
        self._token = token
        self._cache = cache_store
        self._error_service = error_service
        self._base_url = base_url.rstrip("/")
        self._rate_limit_warning_threshold = rate_limit_warning_threshold
        self._back_pressure_partitions = tuple(back_pressure_partitions)

        self._rate_limit_state: github_models.RateLimitState | None = None
        self._rate_limit_listeners: list[RateLimitListener] = []

    @classmethod
    def from_token(
        cls,
        token: str,
        cache_store: cache.TypedCacheStore,
        error_service: errors.ErrorService,
        **kwargs: typing.Any,
    ) -> typing.Self:
        aiohttp_client = aiohttp.ClientSession()
        return cls(
            aiohttp_client=aiohttp_client,
            token=token,
            cache_store=cache_store,
            error_service=error_service,
            **kwargs,
        )

    async def dispose(self) -> None:
        await self._aiohttp_client.close()

    @property
    def rate_limit_state(self) -> github_models.RateLimitState | None:
        return self._rate_limit_state

    def subscribe_rate_limit_warning(self, listener: RateLimitListener) -> None:
        self._rate_limit_listeners.append(listener)

    async def request(
        self,
        request: BaseRequest,
        ttl_minutes: float | None = None,
    ) -> json_utils.JsonValue:
        key = request.cache_key
        entry = self._cache.get(request.partition, key)
        if entry is not None:
            logger.debug("Cache hit Partition(%s) key(%s)", request.partition.value, key)
            return entry.data

        data = await self._fetch(request)
        # no suspension between here and the write, the entry is never stale on insert
        self._cache.set(request.partition, key, data, ttl_minutes)
        return data

    async def paginate(
        self,
        request: PaginatedRequest,
    ) -> typing.AsyncGenerator[tuple[PaginatedRequest, json_utils.JsonValue], None]:
        page = request.page
        while True:
            page_request = request.with_page(page)
            raw_page = await self.request(page_request)
            if not raw_page:
                return

            yield page_request, raw_page
            page += 1

    async def batch[ItemT, ResultT](
        self,
        items: typing.Sequence[ItemT],
        handler: typing.Callable[[ItemT], typing.Awaitable[ResultT]],
        width: int,
        on_error: asyncio_utils.ErrorHandler[ItemT] | None = None,
    ) -> list[ResultT]:
        return await asyncio_utils.gather_in_chunks(
            items,
            handler,
            chunk_size=width,
            on_error=on_error,
            reraise=(self.RateLimitExceededError,),
        )

    def _prepare_url(self, path: str) -> str:
        return f"{self._base_url}{path}"

    async def _fetch(self, request: BaseRequest) -> json_utils.JsonValue:
        headers = {
            "Authorization": f"Bearer {self._token}",
            "Accept": "application/vnd.github+json",
        }
        url = self._prepare_url(request.path)
        logger.debug("Requesting method(%s) url(%s) params(%s)", request.method, url, request.params)

        try:
            async with self._aiohttp_client.request(
                method=request.method,
                url=url,
                params=request.params,
                headers=headers,
            ) as response:
                rate_limit_state = self._handle_rate_limit(response.headers)

                if response.status >= 400:
                    raise await self._build_response_error(
                        request=request,
                        status=response.status,
                        reason=response.reason,
                        body=await response.text(),
                        rate_limit_state=rate_limit_state,
                    )

                raw_body = await response.text()
        except (aiohttp.ClientError, TimeoutError) as e:
            error = self.NetworkError(f"GitHub API request to {request.path} has failed: {e!r}")
            self._report(error, request)
            raise error from e

        try:
            return json_utils.loads_str(raw_body)
        except ValueError as e:
            error = self.InvalidResponseError(f"GitHub API returned malformed JSON for {request.path}")
            self._report(error, request)
            raise error from e

    async def _build_response_error(
        self,
        request: BaseRequest,
        status: int,
        reason: str | None,
        body: str,
        rate_limit_state: github_models.RateLimitState | None,
    ) -> BaseError:
        error_body = _ErrorBody()
        try:
            error_body = _ErrorBody.model_validate(json_utils.loads_str(body))
        except (ValueError, pydantic.ValidationError):
            logger.debug("Error response of %s has no JSON body", request.path)

        if status in (403, 429) and rate_limit_state is not None and rate_limit_state.remaining == 0:
            rate_limit_error = self.RateLimitExceededError(
                f"GitHub API rate limit exceeded, resets at {rate_limit_state.reset_at.isoformat()}",
                reset_at=rate_limit_state.reset_at,
            )
            self._error_service.report(
                rate_limit_error.message,
                source_error=rate_limit_error,
                category=errors.ErrorCategory.RATE_LIMIT,
                severity=errors.ErrorSeverity.ERROR,
                context={"path": request.path, "reset_at": rate_limit_state.reset_at.isoformat()},
            )
            return rate_limit_error

        message = f"GitHub API Error: status={status} message={error_body.message or reason or 'Unknown Error'}"
        if error_body.documentation_url:
            message = f"{message} (see {error_body.documentation_url})"

        error_class: type[RestGithubClient.ResponseError]
        if status in (401, 403):
            error_class, category = self.AuthError, errors.ErrorCategory.AUTH
        elif status == 404:
            error_class, category = self.NotFoundError, errors.ErrorCategory.API
        else:
            error_class, category = self.ResponseError, errors.ErrorCategory.NETWORK

        error = error_class(
            message,
            status=status,
            category=category,
            documentation_url=error_body.documentation_url,
        )
        self._report(error, request)
        return error

    def _report(self, error: BaseError, request: BaseRequest) -> None:
        context: dict[str, typing.Any] = {"path": request.path, "params": request.params}
        if isinstance(error, self.ResponseError):
            context["status"] = error.status
            context["documentation_url"] = error.documentation_url

        self._error_service.report(
            error.message,
            source_error=error,
            category=error.category,
            severity=errors.ErrorSeverity.ERROR,
            context=context,
        )

    def _handle_rate_limit(self, headers: typing.Mapping[str, str]) -> github_models.RateLimitState | None:
        state = _parse_rate_limit(headers)
        if state is None:
            return None

        self._rate_limit_state = state
        is_warning = state.remaining < self._rate_limit_warning_threshold
        # above the warning threshold the configured TTLs are restored
        self._apply_back_pressure(back_pressure_factor(state.remaining) if is_warning else 1)

        if is_warning:
            self._error_service.report(
                f"API rate limit warning: {state.remaining} calls remaining, resets at {state.reset_at.isoformat()}",
                category=errors.ErrorCategory.RATE_LIMIT,
                severity=errors.ErrorSeverity.WARNING,
                context={"remaining": state.remaining, "reset_at": state.reset_at.isoformat()},
            )
            for listener in list(self._rate_limit_listeners):
                try:
                    listener(state)
                except Exception:
                    logger.exception("Rate limit listener %r has failed", listener)

        return state

    def _apply_back_pressure(self, factor: int) -> None:
        for partition in self._back_pressure_partitions:
            self._cache.set_default_ttl(partition, self._cache.get_configured_ttl(partition) * factor)

    async def _parse[ResponseT: BaseResponse](
        self,
        request: BaseRequest,
        response_model: type[ResponseT],
    ) -> ResponseT:
        raw_data = await self.request(request)
        return self._validate(request, raw_data, response_model)

    def _validate[ResponseT: pydantic.BaseModel](
        self,
        request: BaseRequest,
        raw_data: json_utils.JsonValue,
        response_model: type[ResponseT],
    ) -> ResponseT:
        try:
            return response_model.model_validate(raw_data)
        except pydantic.ValidationError as e:
            # the body was cached before validation, drop it so the next call refetches
            self._cache.remove(request.partition, request.cache_key)
            error = self.InvalidResponseError(f"Unexpected response shape for {request.path}: {e}")
            self._report(error, request)
            raise error from e

    async def get_organization(self, org: github_models.OrganizationName) -> github_models.Organization:
        response = await self._parse(GetOrganizationRequest(org=org), GetOrganizationResponse)
        return response.to_dataclass()

    async def get_organization_repositories(
        self,
        request: GetOrganizationRepositoriesRequest,
    ) -> typing.AsyncGenerator[github_models.Repository, None]:
        async for page_request, raw_page in self.paginate(request):
            response = self._validate(page_request, raw_page, GetOrganizationRepositoriesResponse)
            for repository in response.to_dataclass():
                yield repository

    async def get_all_repositories(
        self,
        org: github_models.OrganizationName,
        per_page: int = 100,
    ) -> list[github_models.Repository]:
        return [
            repository
            async for repository in self.get_organization_repositories(
                GetOrganizationRepositoriesRequest(org=org, per_page=per_page),
            )
            if not repository.is_archived
        ]

    async def get_active_repositories(
        self,
        org: github_models.OrganizationName,
        limit: int = 20,
    ) -> list[github_models.Repository]:
        response = await self._parse(
            GetOrganizationRepositoriesRequest(org=org, per_page=limit, sort="pushed", direction="desc"),
            GetOrganizationRepositoriesResponse,
        )
        return [repository for repository in response.to_dataclass() if not repository.is_archived]

    async def get_repository_pull_requests(
        self,
        owner: str,
        repository: github_models.RepositoryName,
    ) -> list[github_models.PullRequestHeader]:
        response = await self._parse(
            GetRepositoryPullRequestsRequest(owner=owner, repository=repository),
            GetRepositoryPullRequestsResponse,
        )
        return response.to_dataclass()

    async def get_pull_request_reviews(
        self,
        owner: str,
        repository: github_models.RepositoryName,
        number: int,
    ) -> list[github_models.ReviewSummary]:
        response = await self._parse(
            GetPullRequestReviewsRequest(owner=owner, repository=repository, number=number),
            GetPullRequestReviewsResponse,
        )
        return response.to_dataclass()

    async def get_user(self, login: github_models.UserLogin) -> github_models.UserProfile:
        response = await self._parse(GetUserRequest(login=login), GetUserResponse)
        return response.to_dataclass()

    async def get_repository_workflows(
        self,
        owner: str,
        repository: github_models.RepositoryName,
    ) -> list[github_models.Workflow]:
        response = await self._parse(
            GetRepositoryWorkflowsRequest(owner=owner, repository=repository),
            GetRepositoryWorkflowsResponse,
        )
        return response.to_dataclass()

    async def get_latest_workflow_run(
        self,
        owner: str,
        repository: github_models.RepositoryName,
        workflow_id: int,
    ) -> github_models.WorkflowRun | None:
        response = await self._parse(
            GetWorkflowRunsRequest(owner=owner, repository=repository, workflow_id=workflow_id),
            GetWorkflowRunsResponse,
        )
        workflow_runs = response.to_dataclass()
        if not workflow_runs:
            return None
        return workflow_runs[0]

    async def get_workflow_run_jobs(
        self,
        owner: str,
        repository: github_models.RepositoryName,
        run_id: int,
    ) -> list[github_models.Job]:
        response = await self._parse(
            GetWorkflowRunJobsRequest(owner=owner, repository=repository, run_id=run_id),
            GetWorkflowRunJobsResponse,
        )
        return response.to_dataclass()

    async def get_job_failure(
        self,
        owner: str,
        repository: github_models.RepositoryName,
        job_id: int,
    ) -> github_models.JobFailure:
        response = await self._parse(
            GetJobRequest(owner=owner, repository=repository, job_id=job_id),
            GetJobResponse,
        )
        return response.to_dataclass()

    async def get_check_run_annotations(
        self,
        owner: str,
        repository: github_models.RepositoryName,
        check_run_id: int,
    ) -> list[github_models.Annotation]:
        response = await self._parse(
            GetCheckRunAnnotationsRequest(owner=owner, repository=repository, check_run_id=check_run_id),
            GetCheckRunAnnotationsResponse,
        )
        return response.to_dataclass()


__all__ = [
    "BACK_PRESSURE_STEPS",
    "BaseRequest",
    "GetCheckRunAnnotationsRequest",
    "GetJobRequest",
    "GetOrganizationRepositoriesRequest",
    "GetOrganizationRequest",
    "GetPullRequestReviewsRequest",
    "GetRepositoryPullRequestsRequest",
    "GetRepositoryWorkflowsRequest",
    "GetUserRequest",
    "GetWorkflowRunJobsRequest",
    "GetWorkflowRunsRequest",
    "PaginatedRequest",
    "RateLimitListener",
    "RestGithubClient",
    "back_pressure_factor",
]
