import typing

import ghdash.errors as errors
import ghdash.github.clients as github_clients
import ghdash.github.models as github_models
import ghdash.github.services.pull_requests as pull_request_services
import ghdash.github.services.repositories as repository_services
import ghdash.github.services.workflows as workflow_services


class GithubDashboard:
    def __init__(
        self,
        client: github_clients.RestGithubClient,
        repository_service: repository_services.RepositoryService,
        pull_request_service: pull_request_services.PullRequestService,
        workflow_service: workflow_services.WorkflowService,
    ) -> None:
        self.client = client
        self.repository_service = repository_service
        self.pull_request_service = pull_request_service
        self.workflow_service = workflow_service

    @classmethod
    def from_client(
        cls,
        client: github_clients.RestGithubClient,
        error_service: errors.ErrorService,
        repository_concurrency: int = pull_request_services.DEFAULT_REPOSITORY_CONCURRENCY,
        pull_request_concurrency: int = pull_request_services.DEFAULT_PULL_REQUEST_CONCURRENCY,
        workflow_concurrency: int = workflow_services.DEFAULT_WORKFLOW_CONCURRENCY,
        page_size: int = repository_services.DEFAULT_PAGE_SIZE,
        active_repositories_limit: int = repository_services.DEFAULT_ACTIVE_REPOSITORIES_LIMIT,
    ) -> typing.Self:
        repository_service = repository_services.RepositoryService(
            client=client,
            page_size=page_size,
            active_repositories_limit=active_repositories_limit,
        )
        return cls(
            client=client,
            repository_service=repository_service,
            pull_request_service=pull_request_services.PullRequestService(
                client=client,
                repository_service=repository_service,
                error_service=error_service,
                repository_concurrency=repository_concurrency,
                pull_request_concurrency=pull_request_concurrency,
            ),
            workflow_service=workflow_services.WorkflowService(
                client=client,
                error_service=error_service,
                workflow_concurrency=workflow_concurrency,
            ),
        )

    async def get_organization(self, org: github_models.OrganizationName) -> github_models.Organization:
        return await self.repository_service.get_organization(org)

    async def get_open_pull_requests(self, org: github_models.OrganizationName) -> list[github_models.PullRequest]:
        return await self.pull_request_service.get_open_pull_requests(org)

    async def get_active_repositories(self, org: github_models.OrganizationName) -> list[github_models.Repository]:
        return await self.repository_service.get_active_repositories(org)

    async def get_all_repositories(self, org: github_models.OrganizationName) -> list[github_models.Repository]:
        return await self.repository_service.get_all_repositories(org)

    async def get_repository_workflows(
        self,
        org: github_models.OrganizationName,
        repository: github_models.RepositoryName,
    ) -> list[github_models.WorkflowSummary]:
        return await self.workflow_service.get_repository_workflows(org, repository)

    def subscribe_rate_limit_warning(self, listener: github_clients.RateLimitListener) -> None:
        self.client.subscribe_rate_limit_warning(listener)

    def subscribe_missing_scope(self, listener: workflow_services.MissingScopeListener) -> None:
        self.workflow_service.subscribe_missing_scope(listener)


__all__ = [
    "GithubDashboard",
]
