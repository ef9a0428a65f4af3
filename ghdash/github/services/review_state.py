import typing

import ghdash.github.models as github_models


def _is_later(candidate: github_models.ReviewSummary, current: github_models.ReviewSummary) -> bool:
    # missing submission time sorts first
    if candidate.submitted_at is None:
        return False
    if current.submitted_at is None:
        return True
    return candidate.submitted_at > current.submitted_at


def latest_reviews(
    reviews: typing.Iterable[github_models.ReviewSummary],
) -> dict[github_models.UserId | None, github_models.ReviewSummary]:
    result: dict[github_models.UserId | None, github_models.ReviewSummary] = {}
    for review in reviews:
        current = result.get(review.reviewer_id)
        if current is None or _is_later(review, current):
            result[review.reviewer_id] = review

    return result


def derive_review_state(reviews: typing.Iterable[github_models.ReviewSummary]) -> github_models.ReviewState:
    """
    Derives the overall review state from the latest review of every reviewer.

    CHANGES_REQUESTED wins over APPROVED, which wins over PENDING. Reviews of the
    same reviewer with equal submission times keep the first one seen.
    """
    states = {review.state for review in latest_reviews(reviews).values()}

    if github_models.ReviewState.CHANGES_REQUESTED.value in states:
        return github_models.ReviewState.CHANGES_REQUESTED
    if github_models.ReviewState.APPROVED.value in states:
        return github_models.ReviewState.APPROVED
    return github_models.ReviewState.PENDING


__all__ = [
    "derive_review_state",
    "latest_reviews",
]
