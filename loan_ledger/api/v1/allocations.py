"""Payment allocation endpoints"""
from fastapi import APIRouter, Depends, HTTPException, status

from loan_ledger.api.deps import get_allocation_service, get_expense_context
from loan_ledger.core.exceptions import NotFoundError, ValidationError
from loan_ledger.schemas.allocation import EngineState
from loan_ledger.schemas.draft import (DraftIndexRequest, DraftModeRequest,
                                       DraftOpenRequest, DraftResponse,
                                       DraftStateRequest, DraftUpdateRequest,
                                       ExpenseContext,
                                       SavedAllocationsResponse,
                                       SubmitResponse)
from loan_ledger.services.allocation_engine import AllocationEngine
from loan_ledger.services.allocation_service import AllocationService

router = APIRouter(prefix="/allocations", tags=["Allocations"])


def _draft_response(state: EngineState) -> DraftResponse:
    return DraftResponse(
        state=state,
        total=AllocationEngine.get_total(state),
        is_valid=AllocationEngine.is_valid(state),
    )


@router.get("/entry/{entry_id}", response_model=SavedAllocationsResponse)
async def get_saved_allocations(
    context: ExpenseContext = Depends(get_expense_context),
    service: AllocationService = Depends(get_allocation_service),
):
    """
    Get the allocations saved for an entry.

    Each item's percent is its share of the entry total, rounded to two
    decimals.

    Raises:
        404: If entry not found
    """
    items = await service.load_saved(context)
    return SavedAllocationsResponse(
        entry_id=context.entry_id,
        total_amount=context.total_amount,
        items=items,
    )


@router.post("/entry/{entry_id}/draft", response_model=DraftResponse)
async def open_draft(
    request: DraftOpenRequest,
    context: ExpenseContext = Depends(get_expense_context),
    service: AllocationService = Depends(get_allocation_service),
):
    """
    Open an allocation draft for an entry.

    Percent mode starts from the saved allocations when there are any;
    equal and amount modes start from the entry's group members.

    Raises:
        404: If entry not found
    """
    state = await service.open_draft(context, request.mode)
    return _draft_response(state)


@router.post("/draft/update", response_model=DraftResponse)
async def update_draft_item(request: DraftUpdateRequest):
    """
    Change one line item. Other items are left as they are.

    Raises:
        400: If amounts are edited in equal mode
        404: If index is out of range
    """
    try:
        state = AllocationEngine.update_item(request.state, request.index, request.changes)
        return _draft_response(state)
    except ValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.message)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=e.message)


@router.post("/draft/add", response_model=DraftResponse)
async def add_draft_item(request: DraftStateRequest):
    """Append a blank line item."""
    return _draft_response(AllocationEngine.add_item(request.state))


@router.post("/draft/remove", response_model=DraftResponse)
async def remove_draft_item(request: DraftIndexRequest):
    """
    Remove one line item.

    Raises:
        404: If index is out of range
    """
    try:
        return _draft_response(AllocationEngine.remove_item(request.state, request.index))
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=e.message)


@router.post("/draft/rebalance", response_model=DraftResponse)
async def rebalance_draft(request: DraftStateRequest):
    """Balance the draft to 100% or to the entry total."""
    return _draft_response(AllocationEngine.rebalance(request.state))


@router.post("/draft/rebalance-others", response_model=DraftResponse)
async def rebalance_other_items(request: DraftUpdateRequest):
    """
    Change one line item and rescale the rest around it.

    Raises:
        400: In equal mode, or if the new value is zero or exceeds the target
        404: If index is out of range
    """
    try:
        state = AllocationEngine.rebalance_others(
            request.state, request.index, request.changes
        )
        return _draft_response(state)
    except ValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.message)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=e.message)


@router.post("/draft/mode", response_model=DraftResponse)
async def switch_draft_mode(request: DraftModeRequest):
    """Restart the draft in another split mode."""
    return _draft_response(AllocationEngine.switch_mode(request.state, request.mode))


@router.put("/entry/{entry_id}", response_model=SubmitResponse)
async def save_allocations(
    request: DraftStateRequest,
    context: ExpenseContext = Depends(get_expense_context),
    service: AllocationService = Depends(get_allocation_service),
):
    """
    Validate a draft and replace all saved allocations of the entry.

    Either every allocation is saved or none is.

    Raises:
        400: If the draft is empty, does not balance, or lacks descriptions
        404: If entry not found
        500: If the allocations could not be saved
    """
    try:
        allocations = await service.save(context, request.state)
    except ValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.message)

    return SubmitResponse(entry_id=context.entry_id, allocations=allocations)
