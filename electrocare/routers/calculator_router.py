from typing import Optional
from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from electrocare.core.db import get_db
from electrocare.models.user_models import User
from electrocare.schemas.calculator_schemas import CalculatorRequest, CalculatorOut, CalculatorHistoryResponse
from electrocare.services.calculator_service import run_calculator, list_results
from electrocare.utils.get_user import get_current_user, get_optional_user

router = APIRouter(prefix="/calculator", tags=["Calculator"])


@router.post("", response_model=CalculatorOut, include_in_schema=False)
@router.post("/", response_model=CalculatorOut)
async def calculator_route(
    data: CalculatorRequest,
    db: AsyncSession = Depends(get_db),
    _user: Optional[User] = Depends(get_optional_user),
):
    return await run_calculator(db, data, _user)


@router.get("/history", response_model=CalculatorHistoryResponse)
async def calculator_history_route(db: AsyncSession = Depends(get_db), _user: User = Depends(get_current_user)):
    results = await list_results(db, _user.id)
    return {"message": f"{len(results)} calculations fetched successfully.", "data": results}
