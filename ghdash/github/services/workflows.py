import dataclasses
import logging
import typing

import ghdash.errors as errors
import ghdash.github.clients as github_clients
import ghdash.github.models as github_models
import ghdash.github.services.errors as service_errors

logger = logging.getLogger(__name__)

DEFAULT_WORKFLOW_CONCURRENCY = 4

type MissingScopeListener = typing.Callable[[], None]


def status_color(
    status: github_models.WorkflowRunStatus,
    conclusion: github_models.WorkflowRunConclusion | None,
) -> github_models.StatusColor:
    if status == "in_progress":
        return github_models.StatusColor.PENDING
    if status == "completed":
        if conclusion == "success":
            return github_models.StatusColor.SUCCESS
        if conclusion == "failure":
            return github_models.StatusColor.FAILURE
    return github_models.StatusColor.NEUTRAL


class WorkflowService:
    """
    Collects the latest run of every workflow in a repository.

    Failed runs are enriched with step-level failure reasons of their failed jobs.
    Annotations are collected for every job of the run. The first annotation
    lookup rejected as forbidden or not found is taken as a hint that the token
    lacks the actions read scope; subscribers are notified once per instance.
    """

    def __init__(
        self,
        client: github_clients.RestGithubClient,
        error_service: errors.ErrorService,
        workflow_concurrency: int = DEFAULT_WORKFLOW_CONCURRENCY,
    ) -> None:
        self._client = client
        self._error_service = error_service
        self.workflow_concurrency = workflow_concurrency

        self._missing_scope_listeners: list[MissingScopeListener] = []
        self._missing_scope_reported = False

    @property
    def missing_scope_reported(self) -> bool:
        return self._missing_scope_reported

    def subscribe_missing_scope(self, listener: MissingScopeListener) -> None:
        self._missing_scope_listeners.append(listener)

    async def get_repository_workflows(
        self,
        org: github_models.OrganizationName,
        repository: github_models.RepositoryName,
    ) -> list[github_models.WorkflowSummary]:
        try:
            workflows = await self._client.get_repository_workflows(org, repository)
        except github_clients.RestGithubClient.RateLimitExceededError:
            raise
        except github_clients.RestGithubClient.BaseError as e:
            raise service_errors.AggregationError(f"Failed to list workflows of {org}/{repository}") from e

        async def process_workflow(workflow: github_models.Workflow) -> github_models.WorkflowSummary | None:
            return await self._summarize(org, repository, workflow)

        def on_workflow_error(workflow: github_models.Workflow, error: Exception) -> None:
            self._report_warning(
                f"Workflow {workflow.name} of {org}/{repository} has been skipped: {error}",
                error=error,
                context={"org": org, "repository": repository, "workflow_id": workflow.id},
            )

        summaries = await self._client.batch(
            workflows,
            process_workflow,
            width=self.workflow_concurrency,
            on_error=on_workflow_error,
        )
        return [summary for summary in summaries if summary is not None]

    async def _summarize(
        self,
        org: github_models.OrganizationName,
        repository: github_models.RepositoryName,
        workflow: github_models.Workflow,
    ) -> github_models.WorkflowSummary | None:
        last_run = await self._client.get_latest_workflow_run(org, repository, workflow.id)
        if last_run is None:
            logger.debug("Workflow(%s) of %s/%s has no runs yet", workflow.name, org, repository)
            return None

        return github_models.WorkflowSummary(
            workflow_name=workflow.name,
            is_enabled=workflow.is_enabled,
            last_run=await self._enrich_run(org, repository, last_run),
        )

    async def _enrich_run(
        self,
        org: github_models.OrganizationName,
        repository: github_models.RepositoryName,
        run: github_models.WorkflowRun,
    ) -> github_models.WorkflowRun:
        try:
            jobs = await self._client.get_workflow_run_jobs(org, repository, run.id)
        except github_clients.RestGithubClient.RateLimitExceededError:
            raise
        except github_clients.RestGithubClient.BaseError as e:
            self._report_warning(
                f"Jobs of run {run.id} in {org}/{repository} are unavailable",
                error=e,
                context={"org": org, "repository": repository, "run_id": run.id},
            )
            return run

        failure_details: list[github_models.JobFailure] = []
        if run.conclusion == "failure":
            failure_details = await self._get_failure_details(org, repository, jobs)

        annotations = await self._get_annotations(org, repository, jobs)

        return dataclasses.replace(
            run,
            failure_details=tuple(failure_details),
            annotations=tuple(annotations),
        )

    async def _get_failure_details(
        self,
        org: github_models.OrganizationName,
        repository: github_models.RepositoryName,
        jobs: list[github_models.Job],
    ) -> list[github_models.JobFailure]:
        failed_jobs = [job for job in jobs if job.conclusion == "failure"]

        async def process_job(job: github_models.Job) -> github_models.JobFailure:
            return await self._client.get_job_failure(org, repository, job.id)

        def on_job_error(job: github_models.Job, error: Exception) -> None:
            self._report_warning(
                f"Failure details of job {job.name} in {org}/{repository} are unavailable",
                error=error,
                context={"org": org, "repository": repository, "job_id": job.id},
            )

        return await self._client.batch(
            failed_jobs,
            process_job,
            width=self.workflow_concurrency,
            on_error=on_job_error,
        )

    async def _get_annotations(
        self,
        org: github_models.OrganizationName,
        repository: github_models.RepositoryName,
        jobs: list[github_models.Job],
    ) -> list[github_models.Annotation]:
        async def process_job(job: github_models.Job) -> list[github_models.Annotation]:
            return await self._client.get_check_run_annotations(org, repository, job.id)

        def on_job_error(job: github_models.Job, error: Exception) -> None:
            if isinstance(
                error,
                (github_clients.RestGithubClient.AuthError, github_clients.RestGithubClient.NotFoundError),
            ):
                if self._missing_scope_reported:
                    logger.debug("Annotations of Job(%s) in %s/%s are unavailable: %r", job.id, org, repository, error)
                    return

                self._signal_missing_scope(error)
                return

            self._report_warning(
                f"Annotations of job {job.name} in {org}/{repository} are unavailable",
                error=error,
                context={"org": org, "repository": repository, "job_id": job.id},
            )

        per_job = await self._client.batch(
            jobs,
            process_job,
            width=self.workflow_concurrency,
            on_error=on_job_error,
        )
        return [annotation for annotations in per_job for annotation in annotations]

    def _signal_missing_scope(self, error: Exception) -> None:
        if self._missing_scope_reported:
            return
        self._missing_scope_reported = True

        self._error_service.report(
            "GitHub token is missing required scopes, add actions:read to view workflow annotations",
            source_error=error,
            category=errors.ErrorCategory.AUTH,
            severity=errors.ErrorSeverity.WARNING,
        )
        for listener in list(self._missing_scope_listeners):
            try:
                listener()
            except Exception:
                logger.exception("Missing scope listener %r has failed", listener)

    def _report_warning(self, message: str, error: Exception, context: dict[str, typing.Any]) -> None:
        self._error_service.report(
            message,
            source_error=error,
            category=errors.classify(error),
            severity=errors.ErrorSeverity.WARNING,
            context=context,
        )


__all__ = [
    "MissingScopeListener",
    "WorkflowService",
    "status_color",
]
