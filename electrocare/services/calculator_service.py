# electrocare/services/calculator_service.py
import math
from typing import Optional
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select

from electrocare.models.calculator_models import CalculatorResult
from electrocare.models.user_models import User
from electrocare.schemas.calculator_schemas import CalculatorRequest, CalculatorOut

# appliance -> (watts, hours per day)
APPLIANCE_LOADS = {
    "lights": (5, 8),
    "fans": (75, 8),
    "acs": (1500, 6),
    "computers": (300, 8),
}
SYSTEM_LOSS_FACTOR = 1.2
PEAK_SUN_HOURS = 4.5
COST_PER_KW = 50000


def calculate(data: CalculatorRequest) -> CalculatorOut:
    watt_hours = sum(getattr(data, name) * watts * hours for name, (watts, hours) in APPLIANCE_LOADS.items())
    watt_hours += data.kitchen + data.misc
    daily = watt_hours / 1000
    capacity = math.ceil(daily * SYSTEM_LOSS_FACTOR / PEAK_SUN_HOURS)
    return CalculatorOut(
        daily_consumption=round(daily, 2),
        recommended_capacity=capacity,
        estimated_cost=capacity * COST_PER_KW,
    )


async def run_calculator(db: AsyncSession, data: CalculatorRequest, current_user: Optional[User]) -> CalculatorOut:
    """Compute the recommendation; keep a copy when the caller is identifiable."""
    outcome = calculate(data)

    user_id = current_user.id if current_user else None
    if user_id is None and data.user_id and await db.get(User, data.user_id):
        user_id = data.user_id

    if user_id:
        db.add(CalculatorResult(
            user_id=user_id,
            lights=data.lights,
            fans=data.fans,
            acs=data.acs,
            computers=data.computers,
            kitchen=data.kitchen,
            misc=data.misc,
            **outcome.model_dump(),
        ))
        await db.commit()
    return outcome


async def list_results(db: AsyncSession, user_id: str):
    result = await db.execute(
        select(CalculatorResult)
        .where(CalculatorResult.user_id == user_id)
        .order_by(CalculatorResult.created_at.desc())
    )
    return result.scalars().all()
