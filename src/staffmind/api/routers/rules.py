from typing import Annotated, List

from fastapi import APIRouter, Depends, HTTPException

from staffmind.api.dependencies import get_allocation_service
from staffmind.engine import ResourceAllocationService
from staffmind.triggers import schemas

router = APIRouter()


@router.get("/rules", response_model=List[schemas.AllocationRule])
def list_rules(
    service: Annotated[ResourceAllocationService, Depends(get_allocation_service)],
):
    """
    List rebalancing rules in evaluation order.
    """
    return service.list_rules()


@router.patch("/rules/{rule_id}", response_model=schemas.AllocationRule)
def update_rule(
    rule_id: str,
    rule_update: schemas.RuleUpdate,
    service: Annotated[ResourceAllocationService, Depends(get_allocation_service)],
):
    """
    Enable or disable a rule.
    """
    try:
        return service.set_rule_enabled(rule_id, rule_update.enabled)
    except KeyError:
        raise HTTPException(status_code=404, detail="Rule not found")
