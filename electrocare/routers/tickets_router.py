from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession
from typing import Optional

from electrocare.core.db import get_db
from electrocare.models.complaint_models import Priority
from electrocare.models.ticket_models import Ticket, TicketStatus
from electrocare.models.user_models import User
from electrocare.schemas.installation_schemas import AssignTechnicianRequest
from electrocare.schemas.ticket_schemas import TicketCreate, TicketUpdate, TicketResponse, TicketListResponse
from electrocare.schemas.user_schemas import MessageResponse
from electrocare.services.assignment_service import assign_technician
from electrocare.services.ticket_service import (
    create_ticket, list_tickets_for, get_ticket_for, update_ticket, delete_ticket
)
from electrocare.utils.get_user import get_current_user

router = APIRouter(prefix="/tickets", tags=["Support Tickets"])


@router.post("", response_model=TicketResponse, status_code=status.HTTP_201_CREATED, include_in_schema=False)
@router.post("/", response_model=TicketResponse, status_code=status.HTTP_201_CREATED)
async def route_create_ticket(
    payload: TicketCreate,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    ticket = await create_ticket(db, payload, current_user)
    return {"message": "Ticket created successfully", "data": ticket}


@router.get("", response_model=TicketListResponse, include_in_schema=False)
@router.get("/", response_model=TicketListResponse)
async def route_list_tickets(
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
    status: Optional[TicketStatus] = Query(None),
    priority: Optional[Priority] = Query(None),
):
    tickets = await list_tickets_for(db, current_user, status=status, priority=priority)
    return {"message": f"{len(tickets)} tickets fetched successfully.", "data": tickets}


@router.get("/{ticket_id}", response_model=TicketResponse)
async def route_get_ticket(
    ticket_id: str,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    ticket = await get_ticket_for(db, ticket_id, current_user)
    return {"message": "Ticket fetched successfully", "data": ticket}


@router.put("/{ticket_id}", response_model=TicketResponse)
async def route_update_ticket(
    ticket_id: str,
    payload: TicketUpdate,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    ticket = await update_ticket(db, ticket_id, payload, current_user)
    return {"message": "Ticket updated successfully", "data": ticket}


@router.put("/{ticket_id}/assign-technician", response_model=TicketResponse)
async def route_assign_ticket_technician(
    ticket_id: str,
    payload: AssignTechnicianRequest,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    ticket = await assign_technician(db, Ticket, ticket_id, payload.technician_id, current_user)
    return {"message": "Technician assigned successfully", "data": ticket}


@router.delete("/{ticket_id}", response_model=MessageResponse)
async def route_delete_ticket(
    ticket_id: str,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    await delete_ticket(db, ticket_id, current_user)
    return {"message": "Ticket deleted successfully"}
