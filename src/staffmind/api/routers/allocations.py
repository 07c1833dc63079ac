from typing import Annotated, List

from fastapi import APIRouter, Depends, HTTPException, status

from staffmind.api.dependencies import get_allocation_service
from staffmind.domain.models import Allocation
from staffmind.engine import ResourceAllocationService
from staffmind.errors import InvalidStrategy, NoEligibleWorkers, ProjectNotFound, StoreUnavailable

router = APIRouter()


@router.post("/projects/{project_id}/allocate", response_model=Allocation)
async def allocate_project(
    project_id: str,
    service: Annotated[ResourceAllocationService, Depends(get_allocation_service)],
    strategy: str = "balanced",
):
    """
    Compute and store the allocation for a project, replacing any previous one.
    """
    try:
        return await service.allocate(project_id, strategy)
    except ProjectNotFound as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except NoEligibleWorkers as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))
    except InvalidStrategy as e:
        raise HTTPException(status_code=422, detail=str(e))
    except StoreUnavailable as e:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(e))


@router.get("/projects/{project_id}/allocation", response_model=Allocation)
def get_allocation(
    project_id: str,
    service: Annotated[ResourceAllocationService, Depends(get_allocation_service)],
):
    try:
        allocation = service.get_allocation(project_id)
    except StoreUnavailable as e:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(e))
    if not allocation:
        raise HTTPException(status_code=404, detail="Allocation not found")
    return allocation


@router.get("/allocations", response_model=List[Allocation])
def list_allocations(
    service: Annotated[ResourceAllocationService, Depends(get_allocation_service)],
):
    try:
        return service.list_allocations()
    except StoreUnavailable as e:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(e))
