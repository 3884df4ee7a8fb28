from fastapi.responses import JSONResponse
from fastapi import status

from rate_that_airline.utilities.convert_object_id import convert_object_ids


def return_json(data=None, code: int = status.HTTP_200_OK):
    return JSONResponse(
        status_code=code,
        content=convert_object_ids(data)
    )

def return_error_json(message: str = "Error", code: int = status.HTTP_400_BAD_REQUEST):
    return JSONResponse(
        status_code=code,
        content={"message": message}
    )
