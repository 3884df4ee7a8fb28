import math
from datetime import datetime, timezone
from typing import Annotated, Any, Optional, Union

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field, ValidationError

DEFAULT_USER = "Anonymous"
BSON_INT_MIN = -(2**63)
BSON_INT_MAX = 2**63 - 1


class ReviewValidationError(ValueError):
    """A review payload was rejected before reaching the store."""

    def __init__(self, message: str, errors: Optional[list] = None):
        super().__init__(message)
        self.message = message
        self.errors = errors or []


def _to_number(value: Any) -> Union[int, float]:
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, (int, float)):
        number = value
    elif isinstance(value, str):
        try:
            number = int(value)
        except ValueError:
            try:
                number = float(value)
            except ValueError:
                raise ValueError(f"Cast to Number failed for value {value!r}")
    else:
        raise ValueError(f"Cast to Number failed for value {value!r}")
    if isinstance(number, float) and not math.isfinite(number):
        raise ValueError(f"Cast to Number failed for value {value!r}")
    if isinstance(number, int) and not BSON_INT_MIN <= number <= BSON_INT_MAX:
        # Too wide for a BSON int64; stored as a double instead.
        number = float(number)
    return number


def _to_text(value: Any) -> Any:
    if isinstance(value, bool):
        return "true" if value else "false"
    return value


Number = Annotated[Union[int, float], BeforeValidator(_to_number)]
Text = Annotated[str, BeforeValidator(_to_text)]


class ReviewSchema(BaseModel):
    model_config = ConfigDict(extra="ignore", coerce_numbers_to_str=True)


class Ratings(ReviewSchema):
    overall: Number = Field(..., description="Overall rating")
    punctuality: Optional[Number] = None
    food: Optional[Number] = None
    comfort: Optional[Number] = None
    staff: Optional[Number] = None
    entertainment: Optional[Number] = None
    value: Optional[Number] = None
    wifi: Optional[Number] = None
    groundService: Optional[Number] = None


class Comments(ReviewSchema):
    punctuality: Optional[Text] = None
    food: Optional[Text] = None
    comfort: Optional[Text] = None
    staff: Optional[Text] = None
    entertainment: Optional[Text] = None
    value: Optional[Text] = None
    wifi: Optional[Text] = None
    groundService: Optional[Text] = None
    overall: Optional[Text] = None


class ReviewCreate(ReviewSchema):
    airline: Text = Field(..., min_length=1, description="Airline name")
    flight: Optional[Text] = Field(None, description="Flight number")
    route: Optional[Text] = Field(None, description="Route, e.g. JFK-LHR")
    date: Optional[Text] = Field(None, description="Flight date, YYYY-MM-DD")
    ratings: Ratings
    comments: Optional[Comments] = None
    user: Optional[Text] = Field(None, description="Reviewer display name")


def today_utc() -> str:
    return datetime.now(timezone.utc).date().isoformat()


def _format_errors(errors: list) -> str:
    parts = []
    for error in errors:
        path = ".".join(str(loc) for loc in error["loc"]) or "body"
        parts.append(f"{path}: {error['msg']}")
    return "Review validation failed: " + ", ".join(parts)


def validate_review(payload: Any) -> ReviewCreate:
    """Check a raw request body against the review schema.

    A missing or null ``ratings`` object is treated as empty so the failure
    points at ``ratings.overall``, the field that is actually required.
    """
    if isinstance(payload, dict) and payload.get("ratings") is None:
        payload = {**payload, "ratings": {}}
    try:
        return ReviewCreate.model_validate(payload)
    except ValidationError as exc:
        errors = exc.errors(include_url=False, include_context=False, include_input=False)
        raise ReviewValidationError(_format_errors(errors), errors) from exc


def build_review_document(review: ReviewCreate, now: Optional[datetime] = None) -> dict:
    """Turn a validated review into the document that gets inserted.

    Fills the ``date`` and ``user`` defaults and stamps ``createdAt`` and
    ``updatedAt``. MongoDB keeps milliseconds only, so the timestamp is
    truncated here to match what a later read returns.
    """
    now = now or datetime.now(timezone.utc)
    now = now.replace(microsecond=now.microsecond // 1000 * 1000)

    document = review.model_dump(exclude_none=True)
    if not document.get("comments"):
        document.pop("comments", None)
    document.setdefault("date", today_utc())
    document.setdefault("user", DEFAULT_USER)
    document["createdAt"] = now
    document["updatedAt"] = now
    return document
