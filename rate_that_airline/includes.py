from rate_that_airline.routes.review.router import review_router as review


def get_all_routers():
    return [
        review,
    ]
