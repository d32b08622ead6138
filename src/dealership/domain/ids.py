from __future__ import annotations

from uuid import UUID

from dealership.domain.errors import ValidationError


def require_uuid(value: str, field: str) -> str:
    """
    Raises:
        ValidationError: If value is not a valid UUID string
    """
    try:
        UUID(value)
    except (ValueError, TypeError, AttributeError):
        raise ValidationError(
            errors=[
                {
                    "field": field,
                    "message": "Must be a valid UUID format",
                    "code": "INVALID_UUID",
                }
            ]
        )
    return value
