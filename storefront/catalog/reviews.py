"""Product review lookups and aggregate statistics."""

from typing import Iterable

from ..models import ProductReview, ReviewStats


def reviews_for_product(reviews: Iterable[ProductReview], product_id: int) -> list[ProductReview]:
    return [review for review in reviews if review.product_id == product_id]


def review_stats(reviews: Iterable[ProductReview]) -> ReviewStats:
    """
    Summarize a set of reviews.

    The distribution always has keys 1..5; an empty set gives zero totals
    and a 0 average.
    """
    reviews = list(reviews)
    if not reviews:
        return ReviewStats()

    distribution = {star: 0 for star in range(1, 6)}
    for review in reviews:
        distribution[review.rating] += 1

    return ReviewStats(
        total_reviews=len(reviews),
        average_rating=sum(review.rating for review in reviews) / len(reviews),
        rating_distribution=distribution,
    )
