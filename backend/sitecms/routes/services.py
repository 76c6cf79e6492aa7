"""
SiteCMS Backend: Services Routes
=================================

What:  CRUD over /api/services (practice areas shown on the public site).
       `file_url` holds a URL previously returned by POST /api/upload.
"""

from typing import List

from fastapi import APIRouter, Depends

from sitecms.dependencies import get_service_repository
from sitecms.repositories.services import ServiceRepository
from sitecms.schemas.common import SuccessResponse
from sitecms.schemas.content import ServicePayload, ServiceRead

router = APIRouter(prefix="/api/services", tags=["Services"])


@router.get("", response_model=List[ServiceRead], summary="List services")
async def list_services(
    services: ServiceRepository = Depends(get_service_repository),
) -> List[ServiceRead]:
    return [ServiceRead.model_validate(item) for item in await services.list_all()]


@router.post("", response_model=ServiceRead, summary="Create a service")
async def create_service(
    body: ServicePayload,
    services: ServiceRepository = Depends(get_service_repository),
) -> ServiceRead:
    record = await services.create(**body.model_dump())
    return ServiceRead.model_validate(record)


@router.put("/{service_id}", response_model=SuccessResponse, summary="Update a service")
async def update_service(
    service_id: int,
    body: ServicePayload,
    services: ServiceRepository = Depends(get_service_repository),
) -> SuccessResponse:
    # Every editable field is overwritten, omitted ones become NULL
    await services.update(service_id, body.model_dump())
    return SuccessResponse()


@router.delete("/{service_id}", response_model=SuccessResponse, summary="Delete a service")
async def delete_service(
    service_id: int,
    services: ServiceRepository = Depends(get_service_repository),
) -> SuccessResponse:
    await services.delete(service_id)
    return SuccessResponse()
