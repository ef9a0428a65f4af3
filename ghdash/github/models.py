import dataclasses
import datetime
import enum

type UserLogin = str
type UserId = int
type OrganizationName = str
type RepositoryName = str

type WorkflowRunStatus = str
type WorkflowRunConclusion = str


class ReviewState(str, enum.Enum):
    APPROVED = "APPROVED"
    CHANGES_REQUESTED = "CHANGES_REQUESTED"
    PENDING = "PENDING"


class StatusColor(str, enum.Enum):
    PENDING = "pending"
    SUCCESS = "success"
    FAILURE = "failure"
    NEUTRAL = "neutral"


@dataclasses.dataclass(frozen=True)
class RateLimitState:
    remaining: int
    reset_at: datetime.datetime


@dataclasses.dataclass(frozen=True)
class Organization:
    login: OrganizationName
    display_name: str
    description: str | None


@dataclasses.dataclass(frozen=True)
class Repository:
    name: RepositoryName
    is_archived: bool
    pushed_at: datetime.datetime | None
    language: str | None = None
    topics: tuple[str, ...] = ()


@dataclasses.dataclass(frozen=True)
class UserProfile:
    login: UserLogin
    display_name: str


@dataclasses.dataclass(frozen=True)
class Label:
    name: str
    color: str | None = None


@dataclasses.dataclass(frozen=True)
class ReviewSummary:
    state: str
    reviewer_id: UserId | None
    submitted_at: datetime.datetime | None


@dataclasses.dataclass(frozen=True)
class PullRequestHeader:
    number: int
    title: str
    url: str
    created_at: datetime.datetime
    updated_at: datetime.datetime
    author_login: UserLogin | None
    labels: tuple[Label, ...]
    is_draft: bool


@dataclasses.dataclass(frozen=True)
class PullRequest:
    number: int
    title: str
    url: str
    created_at: datetime.datetime
    updated_at: datetime.datetime
    repo_name: RepositoryName
    author: UserProfile
    labels: tuple[Label, ...]
    review_state: ReviewState
    is_draft: bool
    reviews: tuple[ReviewSummary, ...]


@dataclasses.dataclass(frozen=True)
class Workflow:
    id: int
    name: str
    is_enabled: bool


@dataclasses.dataclass(frozen=True)
class FailedStep:
    name: str
    number: int
    error: str


@dataclasses.dataclass(frozen=True)
class JobFailure:
    job_name: str
    failed_steps: tuple[FailedStep, ...]


@dataclasses.dataclass(frozen=True)
class Annotation:
    level: str
    message: str
    title: str | None
    file: str
    line: int | None


@dataclasses.dataclass(frozen=True)
class Job:
    id: int
    name: str
    status: str
    conclusion: str | None


@dataclasses.dataclass(frozen=True)
class WorkflowRun:
    id: int
    status: WorkflowRunStatus
    conclusion: WorkflowRunConclusion | None
    created_at: datetime.datetime
    url: str
    failure_details: tuple[JobFailure, ...] = ()
    annotations: tuple[Annotation, ...] = ()


@dataclasses.dataclass(frozen=True)
class WorkflowSummary:
    workflow_name: str
    is_enabled: bool
    last_run: WorkflowRun


__all__ = [
    "Annotation",
    "FailedStep",
    "Job",
    "JobFailure",
    "Label",
    "Organization",
    "OrganizationName",
    "PullRequest",
    "PullRequestHeader",
    "RateLimitState",
    "Repository",
    "RepositoryName",
    "ReviewState",
    "ReviewSummary",
    "StatusColor",
    "UserId",
    "UserLogin",
    "UserProfile",
    "Workflow",
    "WorkflowRun",
    "WorkflowRunConclusion",
    "WorkflowRunStatus",
    "WorkflowSummary",
]
