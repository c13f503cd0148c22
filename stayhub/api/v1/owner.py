"""Owner property management API routes."""

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from stayhub.api.deps import PROPERTIES_MANAGE, ensure_allowed, get_current_user, get_db
from stayhub.models.user import User
from stayhub.schemas.property import PropertyCreate, PropertyListResponse, PropertyResponse
from stayhub.services import properties as property_service

router = APIRouter(prefix="/api/v1/owner/properties", tags=["owner"])


@router.post(
    "",
    response_model=PropertyResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a new property",
)
async def create_property(
    body: PropertyCreate,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> PropertyResponse:
    """Create a property owned by the authenticated owner.

    Coordinates left empty are looked up from the address.
    """
    ensure_allowed(current_user, PROPERTIES_MANAGE)
    prop = await property_service.create_property(db, current_user.id, body)
    return PropertyResponse.model_validate(prop)


@router.get(
    "",
    response_model=PropertyListResponse,
    summary="List properties owned by the current user",
)
async def list_properties(
    skip: int = Query(0, ge=0),
    limit: int = Query(20, ge=1, le=100),
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> PropertyListResponse:
    ensure_allowed(current_user, PROPERTIES_MANAGE)
    items, total = await property_service.list_owner_properties(db, current_user.id, skip, limit)
    return PropertyListResponse(
        items=[PropertyResponse.model_validate(prop) for prop in items],
        total=total,
    )
