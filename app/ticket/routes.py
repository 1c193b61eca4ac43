# app/ticket/routes.py
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from app.core.config import Settings, get_settings
from app.core.database import get_db
from app.core.errors import MethodNotAllowed
from app.core.security import Principal, get_principal
from app.ticket.schemas import TicketCreate, TicketDetailOut, TicketDetailsOut, TicketOut, TicketUpdate
from app.ticket import services as ticket_service
from app.user.schemas import StaffOut

router = APIRouter(prefix="/ticket-manager", tags=["Tickets"])


@router.post("/create", response_model=TicketOut, status_code=201)
def create(
    ticket: TicketCreate,
    principal: Principal = Depends(get_principal),
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
):
    return ticket_service.create_ticket(db, ticket, principal, settings)


@router.get("/list", response_model=list[TicketDetailOut])
def list_all(principal: Principal = Depends(get_principal), db: Session = Depends(get_db)):
    return ticket_service.list_tickets(db, principal)


@router.get("/details", response_model=TicketDetailsOut)
def details(
    ticket_id: int | None = Query(default=None, alias="id", description="Ticket id"),
    principal: Principal = Depends(get_principal),
    db: Session = Depends(get_db),
):
    return ticket_service.get_ticket_details(db, ticket_id, principal)


@router.put("/update", response_model=TicketOut)
def update(
    ticket: TicketUpdate,
    principal: Principal = Depends(get_principal),
    db: Session = Depends(get_db),
):
    return ticket_service.update_ticket(db, ticket, principal)


@router.get("/staff", response_model=list[StaffOut])
def staff(principal: Principal = Depends(get_principal), db: Session = Depends(get_db)):
    return ticket_service.list_staff(db, principal)


# Known paths hit with the wrong method land here too, after authentication.
@router.api_route(
    "/{path:path}",
    methods=["GET", "POST", "PUT", "PATCH", "DELETE"],
    include_in_schema=False,
)
def fallback(path: str, principal: Principal = Depends(get_principal)):
    raise MethodNotAllowed()
