from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi import status
import logging
from config import HOST, LOG_LEVEL, PORT
from rate_that_airline.database.connections import lifespan
from rate_that_airline.includes import get_all_routers
from rate_that_airline.services.json import return_error_json


logging.basicConfig(level=LOG_LEVEL)
logger = logging.getLogger(__name__)


def create_app() -> FastAPI:
    logger.info("🚀 Starting FastAPI application")

    app = FastAPI(
        title="Rate That Airline API",
        description="Stores airline reviews and lists them back",
        version="1.0.0",
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )
    for router in get_all_routers():
        app.include_router(router)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(RequestValidationError)
    async def request_validation_exception_handler(request: Request, exc: RequestValidationError):
        # Malformed JSON or a body that is not an object.
        errors = exc.errors()
        logger.warning("Invalid request body on %s: %s", request.url.path, errors)
        message = "; ".join(error.get("msg", "Invalid request body") for error in errors)
        return return_error_json(
            message=message or "Invalid request body",
            code=status.HTTP_400_BAD_REQUEST,
        )

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception):
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return return_error_json(
            message="An unexpected error occurred.",
            code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )

    @app.get("/")
    async def Index(req: Request):
        return {"message": "Welcome to Rate That Airline API"}

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host=HOST, port=PORT)
