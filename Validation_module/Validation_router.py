from fastapi import APIRouter

from .field_validators import VALIDATION_RULES

router = APIRouter(prefix="/api/v1/validation-rules", tags=["Validation"])


@router.get("")
def get_validation_rules():
    """Field rules applied to the intake forms, for client-side checks."""
    return {
        "success": True,
        "message": "Validation rules retrieved successfully",
        "data": VALIDATION_RULES,
    }
