"""
FixNexus Backend: Booked Service Route Handlers
=================================================

What:  Endpoints over the `bookedServices` collection.

Visibility is split by role:
    GET /booked-services/{email}   bookings where the caller is userEmail
    GET /services-to-do/{email}    bookings where the caller is providerEmail
Both are gated and ownership-checked. Insert, status patch and delete are open.
"""

from typing import Any, Dict, List

from fastapi import APIRouter, Body, Depends

from fixnexus.database import get_booked_services_store
from fixnexus.dependencies import GATED_RESPONSES, ensure_owner, require_token
from fixnexus.schemas.documents import DeleteResult, InsertResult, UpdateResult
from fixnexus.services.document_store import DocumentStore

router = APIRouter(tags=["Booked Services"])


@router.post("/booked-services", response_model=InsertResult, summary="Book a service")
async def create_booking(
    booking: Dict[str, Any] = Body(...),
    store: DocumentStore = Depends(get_booked_services_store),
) -> InsertResult:
    return await store.insert_one(booking)


@router.get(
    "/booked-services/{email}",
    responses=GATED_RESPONSES,
    summary="Bookings made by the authenticated customer",
)
async def list_customer_bookings(
    email: str,
    claims: Dict[str, Any] = Depends(require_token),
    store: DocumentStore = Depends(get_booked_services_store),
) -> List[Dict[str, Any]]:
    ensure_owner(email, claims)
    return await store.find_many({"userEmail": email})


@router.patch(
    "/booked-services/{id}",
    response_model=UpdateResult,
    summary="Merge fields (e.g. status) into a booking",
)
async def update_booking(
    id: str,
    fields: Dict[str, Any] = Body(..., examples=[{"status": "done"}]),
    store: DocumentStore = Depends(get_booked_services_store),
) -> UpdateResult:
    return await store.merge_fields(id, fields)


@router.delete("/booked-services/{id}", response_model=DeleteResult, summary="Delete a booking")
async def delete_booking(
    id: str,
    store: DocumentStore = Depends(get_booked_services_store),
) -> DeleteResult:
    return await store.delete_one(id)


@router.get(
    "/services-to-do/{email}",
    responses=GATED_RESPONSES,
    summary="Bookings the authenticated provider has to fulfil",
)
async def list_provider_bookings(
    email: str,
    claims: Dict[str, Any] = Depends(require_token),
    store: DocumentStore = Depends(get_booked_services_store),
) -> List[Dict[str, Any]]:
    ensure_owner(email, claims)
    return await store.find_many({"providerEmail": email})
