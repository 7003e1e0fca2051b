"""
FastAPI dependencies for submittal review.

This module provides dependency injection functions for the review
endpoints. The process holds exactly one review controller.
"""

from submittal_review.ai.providers.factory import create_review_provider
from submittal_review.review.controller import ReviewController
from submittal_review.utils.logger import logger

_review_controller: ReviewController | None = None


def get_review_controller() -> ReviewController:
    """
    Get or create the review controller singleton.

    Returns:
        ReviewController: The controller owning the active document
    """
    global _review_controller
    if _review_controller is None:
        _review_controller = ReviewController(create_review_provider())
        logger.info("Initialized ReviewController")
    return _review_controller
