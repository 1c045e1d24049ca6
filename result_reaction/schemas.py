"""
Pydantic models for API response documentation.

Result payloads are arbitrary JSON taken from the store, so only the error
shape is modelled here.
"""

from pydantic import BaseModel, Field


class ErrorResponse(BaseModel):
    """
    Response model for failed result lookups.
    """

    detail: str = Field(..., description="Human readable description of the failure")

    model_config = {
        "json_schema_extra": {
            "example": {"detail": "No result available for query: orders-by-region"}
        }
    }


ERROR_RESPONSES = {
    400: {"model": ErrorResponse, "description": "Store rejected the request"},
    404: {"model": ErrorResponse, "description": "Query or result not found"},
    502: {"model": ErrorResponse, "description": "Store unavailable"},
    504: {"model": ErrorResponse, "description": "Store did not answer in time"},
}
