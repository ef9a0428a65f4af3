import logging

import ghdash.github.clients as github_clients
import ghdash.github.models as github_models
import ghdash.github.services.errors as service_errors

logger = logging.getLogger(__name__)

DEFAULT_PAGE_SIZE = 100
DEFAULT_ACTIVE_REPOSITORIES_LIMIT = 20


class RepositoryService:
    def __init__(
        self,
        client: github_clients.RestGithubClient,
        page_size: int = DEFAULT_PAGE_SIZE,
        active_repositories_limit: int = DEFAULT_ACTIVE_REPOSITORIES_LIMIT,
    ) -> None:
        self._client = client
        self.page_size = page_size
        self.active_repositories_limit = active_repositories_limit

    async def get_organization(self, org: github_models.OrganizationName) -> github_models.Organization:
        try:
            return await self._client.get_organization(org)
        except github_clients.RestGithubClient.RateLimitExceededError:
            raise
        except github_clients.RestGithubClient.BaseError as e:
            raise service_errors.AggregationError(f"Failed to fetch Organization({org})") from e

    async def get_all_repositories(self, org: github_models.OrganizationName) -> list[github_models.Repository]:
        try:
            repositories = await self._client.get_all_repositories(org, per_page=self.page_size)
        except github_clients.RestGithubClient.RateLimitExceededError:
            raise
        except github_clients.RestGithubClient.BaseError as e:
            raise service_errors.AggregationError(f"Failed to list repositories of Organization({org})") from e

        logger.debug("Found %s non-archived repositories in Organization(%s)", len(repositories), org)
        return repositories

    async def get_active_repositories(self, org: github_models.OrganizationName) -> list[github_models.Repository]:
        try:
            return await self._client.get_active_repositories(org, limit=self.active_repositories_limit)
        except github_clients.RestGithubClient.RateLimitExceededError:
            raise
        except github_clients.RestGithubClient.BaseError as e:
            raise service_errors.AggregationError(f"Failed to list active repositories of Organization({org})") from e


__all__ = [
    "RepositoryService",
]
