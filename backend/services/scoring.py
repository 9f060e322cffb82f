"""Batch-relative composite scoring of content posts."""

from typing import Sequence

from models.content import ContentPost

ENGAGEMENT_WEIGHT = 60
REACH_WEIGHT = 40


def score_posts(posts: Sequence[ContentPost]) -> list[ContentPost]:
    """Score each post 0-100 against the maxima of this batch.

    Engagement rate carries 60% and reach 40%, each divided by the batch
    maximum (never below 1). A score only ranks posts within the batch it was
    computed in.
    """
    if not posts:
        return list(posts)

    max_engagement = max(max(p.engagement_rate for p in posts), 1)
    max_reach = max(max(p.reach for p in posts), 1)

    return [
        post.model_copy(
            update={
                "score": (post.engagement_rate / max_engagement) * ENGAGEMENT_WEIGHT
                + (post.reach / max_reach) * REACH_WEIGHT
            }
        )
        for post in posts
    ]
