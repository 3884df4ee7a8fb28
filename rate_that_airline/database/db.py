from fastapi import Request
from motor.motor_asyncio import AsyncIOMotorCollection


def get_review_collection(request: Request) -> AsyncIOMotorCollection:
    # Set once by the lifespan handler, shared by every request.
    return request.app.state.review_collection
