"""REST API error response models.

Structured error responses that provide consistent format for all HTTP errors.
"""

from pydantic import BaseModel, ConfigDict


class ErrorDetail(BaseModel):
    """Individual error detail for field-level errors."""

    field: str
    message: str
    code: str | None = None

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "field": "start_time",
                "message": "Must be HH:MM (24h)",
                "code": "INVALID_TIME",
            }
        }
    )


class ErrorResponse(BaseModel):
    """Structured error response format.

    Supports:
    - Simple errors (just detail and code)
    - Multi-field validation errors (detail + errors array)
    - AI payload rejections naming the missing fields

    Examples:
        Simple error:
            {
                "detail": "Test drive slot is already booked",
                "code": "CONFLICT"
            }

        AI payload rejection:
            {
                "detail": "AI response missing fields: confidence",
                "code": "MISSING_FIELDS",
                "missing_fields": ["confidence"]
            }
    """

    detail: str
    code: str | None = None
    errors: list[ErrorDetail] | None = None
    missing_fields: list[str] | None = None

    model_config = ConfigDict(
        json_schema_extra={
            "examples": [
                {"detail": "Car with identifier '42' not found", "code": "NOT_FOUND"},
                {"detail": "Test drive slot is already booked", "code": "CONFLICT"},
                {
                    "detail": "Validation failed",
                    "code": "VALIDATION_ERROR",
                    "errors": [
                        {
                            "field": "end_time",
                            "message": "Must be after start_time",
                            "code": "INVALID_RANGE",
                        }
                    ],
                },
                {
                    "detail": "AI response missing fields: year",
                    "code": "MISSING_FIELDS",
                    "missing_fields": ["year"],
                },
            ]
        }
    )
