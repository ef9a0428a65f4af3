from .rest import (
    BACK_PRESSURE_STEPS,
    BaseRequest,
    GetCheckRunAnnotationsRequest,
    GetJobRequest,
    GetOrganizationRepositoriesRequest,
    GetOrganizationRequest,
    GetPullRequestReviewsRequest,
    GetRepositoryPullRequestsRequest,
    GetRepositoryWorkflowsRequest,
    GetUserRequest,
    GetWorkflowRunJobsRequest,
    GetWorkflowRunsRequest,
    PaginatedRequest,
    RateLimitListener,
    RestGithubClient,
    back_pressure_factor,
)

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
