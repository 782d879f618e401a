"""
FixNexus Backend: Service Route Handlers
==========================================

What:  CRUD endpoints over the `services` collection.
How:   Each handler maps one HTTP verb + path onto a single DocumentStore call.
       Only GET /manage-services/{email} is gated; the mutation routes are
       open, matching the deployed frontend.

Route Inventory:
    GET    /home-services             first 6 services
    GET    /services                  search + page/size pagination
    GET    /services-count            size of the same search filter
    GET    /services/{id}             single service, null when absent
    GET    /manage-services/{email}   services owned by the caller (gated)
    POST   /services                  insert
    PUT    /services/{id}             merge-upsert
    DELETE /services/{id}             delete
"""

import logging
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Body, Depends, Query

from fixnexus.database import get_services_store
from fixnexus.dependencies import GATED_RESPONSES, ensure_owner, require_token
from fixnexus.schemas.documents import (
    CountResponse,
    DeleteResult,
    InsertResult,
    UpdateResult,
)
from fixnexus.services.document_store import DocumentStore
from fixnexus.services.search import build_search_filter, page_window

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Services"])

HOME_SERVICES_LIMIT = 6


@router.get("/home-services", summary="Services shown on the home page")
async def list_home_services(
    store: DocumentStore = Depends(get_services_store),
) -> List[Dict[str, Any]]:
    return await store.find_many({}, limit=HOME_SERVICES_LIMIT)


@router.get(
    "/services",
    summary="Search services with pagination",
    description=(
        "Case-insensitive substring search on serviceName. `page` is 1-indexed; "
        "pagination applies only when both `page` and `size` are given."
    ),
)
async def list_services(
    size: Optional[int] = Query(default=None, ge=1, description="Items per page"),
    page: Optional[int] = Query(default=None, ge=1, description="1-indexed page number"),
    search: Optional[str] = Query(default=None, description="Substring of serviceName"),
    store: DocumentStore = Depends(get_services_store),
) -> List[Dict[str, Any]]:
    skip, limit = page_window(page, size)
    return await store.find_many(build_search_filter(search), skip=skip, limit=limit)


@router.get("/services-count", response_model=CountResponse, summary="Count matching services")
async def count_services(
    search: Optional[str] = Query(default=None, description="Substring of serviceName"),
    store: DocumentStore = Depends(get_services_store),
) -> CountResponse:
    return CountResponse(count=await store.count(build_search_filter(search)))


@router.get("/services/{id}", summary="Get a single service")
async def get_service(
    id: str,
    store: DocumentStore = Depends(get_services_store),
) -> Optional[Dict[str, Any]]:
    return await store.find_one(id)


@router.get(
    "/manage-services/{email}",
    responses=GATED_RESPONSES,
    summary="Services offered by the authenticated provider",
)
async def list_managed_services(
    email: str,
    claims: Dict[str, Any] = Depends(require_token),
    store: DocumentStore = Depends(get_services_store),
) -> List[Dict[str, Any]]:
    ensure_owner(email, claims)
    return await store.find_many({"providerEmail": email})


@router.post("/services", response_model=InsertResult, summary="Add a service")
async def create_service(
    service: Dict[str, Any] = Body(...),
    store: DocumentStore = Depends(get_services_store),
) -> InsertResult:
    return await store.insert_one(service)


@router.delete("/services/{id}", response_model=DeleteResult, summary="Delete a service")
async def delete_service(
    id: str,
    store: DocumentStore = Depends(get_services_store),
) -> DeleteResult:
    return await store.delete_one(id)


@router.put(
    "/services/{id}",
    response_model=UpdateResult,
    summary="Update a service, creating it if absent",
)
async def update_service(
    id: str,
    service: Dict[str, Any] = Body(...),
    store: DocumentStore = Depends(get_services_store),
) -> UpdateResult:
    return await store.replace_or_insert(id, service)
