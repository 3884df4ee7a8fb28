import logging
from fastapi import APIRouter, Body, Depends, status
from motor.motor_asyncio import AsyncIOMotorCollection

from rate_that_airline.database.db import get_review_collection
from rate_that_airline.models.review.review import (
    ReviewValidationError,
    build_review_document,
    validate_review,
)
from rate_that_airline.services.json import return_json, return_error_json

logger = logging.getLogger(__name__)

review_router = APIRouter(
    prefix="/api/reviews",
    tags=["ReviewAPI"],
)


# List all reviews
@review_router.get("")
async def list_reviews(
    collection: AsyncIOMotorCollection = Depends(get_review_collection),
):
    try:
        # No sort: reviews come back in store order.
        reviews = await collection.find({}).to_list(length=None)
    except Exception:
        logger.exception("Error fetching reviews")
        return return_error_json(
            message="Server error fetching reviews.",
            code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )

    return return_json(data=reviews, code=status.HTTP_200_OK)


# Submit a new review
@review_router.post("")
async def create_review(
    payload: dict = Body(...),
    collection: AsyncIOMotorCollection = Depends(get_review_collection),
):
    try:
        review = validate_review(payload)
        review_doc = build_review_document(review)

        insert_result = await collection.insert_one(review_doc)
        review_doc["_id"] = insert_result.inserted_id

    except ReviewValidationError as e:
        logger.warning("Rejected review: %s", e.message)
        return return_error_json(message=e.message, code=status.HTTP_400_BAD_REQUEST)

    except Exception:
        logger.exception("Error saving review")
        return return_error_json(
            message="Server error saving review.",
            code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )

    return return_json(data={"_id": review_doc.pop("_id"), **review_doc}, code=status.HTTP_201_CREATED)
