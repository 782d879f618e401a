"""
FixNexus Backend: Pydantic Request/Response Schemas
=====================================================

What:  Response models for the API contract between frontend and backend.
How:   Service and booking documents are schemaless and pass through as plain
       dicts; only the write acknowledgements, small status objects and
       error bodies are modelled here.

Write acknowledgements keep the camelCase keys of the MongoDB driver result
objects (insertedId, matchedCount, ...) because the frontend reads them.
"""

from typing import Optional

from pydantic import BaseModel, Field


_ALIASED = {"populate_by_name": True}


class InsertResult(BaseModel):
    """Returned by POST /services and POST /booked-services."""

    acknowledged: bool = Field(default=True)
    inserted_id: str = Field(alias="insertedId", description="Hex ObjectId of the new document")

    model_config = _ALIASED


class UpdateResult(BaseModel):
    """
    Returned by PUT /services/{id} and PATCH /booked-services/{id}.

    matched_count is 0 when the id did not exist; for an upsert the new
    document's id is reported in upserted_id.
    """

    acknowledged: bool = Field(default=True)
    matched_count: int = Field(alias="matchedCount")
    modified_count: int = Field(alias="modifiedCount")
    upserted_id: Optional[str] = Field(default=None, alias="upsertedId")
    upserted_count: int = Field(default=0, alias="upsertedCount")

    model_config = _ALIASED


class DeleteResult(BaseModel):
    """deleted_count is 0 or 1; deleting an absent id is not an error."""

    acknowledged: bool = Field(default=True)
    deleted_count: int = Field(alias="deletedCount")

    model_config = _ALIASED


class CountResponse(BaseModel):
    count: int = Field(description="Size of the full filtered set, ignoring page/size")


class SuccessResponse(BaseModel):
    success: bool = Field(default=True)


class ErrorResponse(BaseModel):
    """
    Standardized error body for all API errors.

    Example:
        {
            "error": "forbidden",
            "message": "Forbidden access",
            "request_id": "a1b2c3d4"
        }
    """

    error: str = Field(description="Machine-readable error code")
    message: str = Field(description="Human-readable error description")
    details: Optional[dict] = Field(default=None, description="Additional error context")
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")


class HealthResponse(BaseModel):
    status: str = Field(description="Overall service status: healthy, unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="MongoDB connectivity: connected, disconnected")
    uptime_seconds: float = Field(description="Seconds since service started")
