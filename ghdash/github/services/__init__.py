from .dashboard import GithubDashboard
from .errors import AggregationError
from .pull_requests import PullRequestService
from .repositories import RepositoryService
from .review_state import derive_review_state, latest_reviews
from .workflows import MissingScopeListener, WorkflowService, status_color

__all__ = [
    "AggregationError",
    "GithubDashboard",
    "MissingScopeListener",
    "PullRequestService",
    "RepositoryService",
    "WorkflowService",
    "derive_review_state",
    "latest_reviews",
    "status_color",
]
