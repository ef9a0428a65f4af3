import asyncio
import logging

import ghdash.errors as errors
import ghdash.github.clients as github_clients
import ghdash.github.models as github_models
import ghdash.github.services.repositories as repository_services
import ghdash.github.services.review_state as review_state_services

logger = logging.getLogger(__name__)

DEFAULT_REPOSITORY_CONCURRENCY = 8
DEFAULT_PULL_REQUEST_CONCURRENCY = 4
GHOST_LOGIN = "ghost"


class PullRequestService:
    def __init__(
        self,
        client: github_clients.RestGithubClient,
        repository_service: repository_services.RepositoryService,
        error_service: errors.ErrorService,
        repository_concurrency: int = DEFAULT_REPOSITORY_CONCURRENCY,
        pull_request_concurrency: int = DEFAULT_PULL_REQUEST_CONCURRENCY,
    ) -> None:
        self._client = client
        self._repository_service = repository_service
        self._error_service = error_service
        self.repository_concurrency = repository_concurrency
        self.pull_request_concurrency = pull_request_concurrency

    async def get_open_pull_requests(self, org: github_models.OrganizationName) -> list[github_models.PullRequest]:
        repositories = await self._repository_service.get_all_repositories(org)

        async def process_repository(repository: github_models.Repository) -> list[github_models.PullRequest]:
            return await self._get_repository_pull_requests(org, repository.name)

        def on_repository_error(repository: github_models.Repository, error: Exception) -> None:
            self._error_service.report(
                f"Failed to fetch pull requests of {org}/{repository.name}",
                source_error=error,
                category=errors.classify(error),
                severity=errors.ErrorSeverity.WARNING,
                context={"org": org, "repository": repository.name},
            )

        per_repository = await self._client.batch(
            repositories,
            process_repository,
            width=self.repository_concurrency,
            on_error=on_repository_error,
        )

        pull_requests = [pull_request for chunk in per_repository for pull_request in chunk]
        logger.info("Collected %s open pull requests in Organization(%s)", len(pull_requests), org)
        return pull_requests

    async def _get_repository_pull_requests(
        self,
        org: github_models.OrganizationName,
        repository: github_models.RepositoryName,
    ) -> list[github_models.PullRequest]:
        headers = await self._client.get_repository_pull_requests(org, repository)

        async def process_pull_request(header: github_models.PullRequestHeader) -> github_models.PullRequest:
            return await self._enrich(org, repository, header)

        def on_pull_request_error(header: github_models.PullRequestHeader, error: Exception) -> None:
            self._error_service.report(
                f"Pull request {org}/{repository}#{header.number} has been skipped: {error}",
                source_error=error,
                category=errors.classify(error),
                severity=errors.ErrorSeverity.WARNING,
                context={"org": org, "repository": repository, "number": header.number},
            )

        return await self._client.batch(
            headers,
            process_pull_request,
            width=self.pull_request_concurrency,
            on_error=on_pull_request_error,
        )

    async def _get_author(self, login: github_models.UserLogin | None) -> github_models.UserProfile:
        if login is None:
            return github_models.UserProfile(login=GHOST_LOGIN, display_name=GHOST_LOGIN)
        return await self._client.get_user(login)

    async def _enrich(
        self,
        org: github_models.OrganizationName,
        repository: github_models.RepositoryName,
        header: github_models.PullRequestHeader,
    ) -> github_models.PullRequest:
        reviews, author = await asyncio.gather(
            self._client.get_pull_request_reviews(org, repository, header.number),
            self._get_author(header.author_login),
        )

        return github_models.PullRequest(
            number=header.number,
            title=header.title,
            url=header.url,
            created_at=header.created_at,
            updated_at=header.updated_at,
            repo_name=repository,
            author=author,
            labels=header.labels,
            review_state=review_state_services.derive_review_state(reviews),
            is_draft=header.is_draft,
            reviews=tuple(reviews),
        )


__all__ = [
    "PullRequestService",
]
