# app/ticket/services.py
"""Ticket workflow: create, list, details, update and assignable staff.

The ticket row is the primary write of every mutating operation and is
committed on its own. Attachment and history rows are secondary: they are
written after the ticket commit, and a failure there is logged and dropped,
so a successful response does not guarantee they exist.
"""
import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Query, Session, joinedload

from app.catalog import services as catalog_service
from app.core.config import Settings
from app.core.errors import InvalidRequest, NotFound, PermissionDenied
from app.core.security import Principal
from app.ticket.models import Adjunto, Historial, Ticket
from app.ticket.schemas import AttachmentIn, TicketCreate, TicketUpdate
from app.user import services as user_service
from app.user.models import Usuario
from app.user.roles import RESTRICTED_ROLES, TICKET_EDITOR_ROLES, normalize_role

logger = logging.getLogger(__name__)


def _ticket_query(db: Session) -> Query:
    return db.query(Ticket).options(
        joinedload(Ticket.categoria),
        joinedload(Ticket.prioridad),
        joinedload(Ticket.estado),
        joinedload(Ticket.area),
        joinedload(Ticket.reportador),
        joinedload(Ticket.asignado),
    )


def get_ticket(db: Session, ticket_id: int) -> Ticket | None:
    return _ticket_query(db).filter(Ticket.ticket_id == ticket_id).first()


def sees_only_own_tickets(profile: Usuario) -> bool:
    role = normalize_role(profile.tipo_usuario)
    # unknown roles get the narrowest view
    return role is None or role in RESTRICTED_ROLES


def create_ticket(db: Session, payload: TicketCreate, principal: Principal, settings: Settings) -> Ticket:
    if not payload.titulo.strip() or not payload.categoria_id:
        raise InvalidRequest("Missing required fields: titulo, categoria_id")

    profile = user_service.require_profile(db, principal)

    db_ticket = Ticket(
        titulo=payload.titulo,
        categoria_id=payload.categoria_id,
        detalles=payload.detalles,
        prioridad_id=payload.prioridad_id or settings.DEFAULT_PRIORITY_ID,
        estado_id=settings.OPEN_STATUS_ID,
        area_notificada_id=payload.area_notificada_id or settings.FALLBACK_AREA_ID,
        reportador_id=profile.usuario_id,
    )
    db.add(db_ticket)
    db.commit()
    db.refresh(db_ticket)
    logger.info("ticket %s created by usuario %s", db_ticket.ticket_id, profile.usuario_id)

    if payload.adjunto is not None:
        add_attachment(db, db_ticket.ticket_id, profile.usuario_id, payload.adjunto)

    return db_ticket


def add_attachment(db: Session, ticket_id: int, usuario_id: int, adjunto: AttachmentIn) -> Adjunto | None:
    """Best-effort: returns None and keeps the ticket when the insert fails."""
    db_adjunto = Adjunto(ticket_id=ticket_id, subido_por=usuario_id, **adjunto.model_dump())
    try:
        db.add(db_adjunto)
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        logger.warning("attachment insert failed for ticket %s", ticket_id, exc_info=True)
        return None
    return db_adjunto


def list_tickets(db: Session, principal: Principal) -> list[Ticket]:
    profile = user_service.require_profile(db, principal)

    query = _ticket_query(db).order_by(Ticket.fecha_creacion.desc(), Ticket.ticket_id.desc())
    if sees_only_own_tickets(profile):
        query = query.filter(Ticket.reportador_id == profile.usuario_id)
    return query.all()


def get_history(db: Session, ticket_id: int) -> list[Historial]:
    return (
        db.query(Historial)
        .options(joinedload(Historial.autor))
        .filter(Historial.ticket_id == ticket_id)
        .order_by(Historial.fecha_cambio.desc(), Historial.historial_id.desc())
        .all()
    )


def get_attachments(db: Session, ticket_id: int) -> list[Adjunto]:
    return (
        db.query(Adjunto)
        .filter(Adjunto.ticket_id == ticket_id)
        .order_by(Adjunto.adjunto_id.asc())
        .all()
    )


def _fetch_or_empty(fetch, db: Session, ticket_id: int, what: str) -> list:
    try:
        return fetch(db, ticket_id)
    except SQLAlchemyError:
        db.rollback()
        logger.warning("%s fetch failed for ticket %s", what, ticket_id, exc_info=True)
        return []


def get_ticket_details(db: Session, ticket_id: int | None, principal: Principal) -> dict:
    if not ticket_id:
        raise InvalidRequest("Missing ticket ID")

    ticket = get_ticket(db, ticket_id)
    if ticket is None:
        raise NotFound("Ticket not found")

    return {
        "ticket": ticket,
        "history": _fetch_or_empty(get_history, db, ticket_id, "history"),
        "attachments": _fetch_or_empty(get_attachments, db, ticket_id, "attachment"),
    }


def update_ticket(db: Session, payload: TicketUpdate, principal: Principal) -> Ticket:
    profile = user_service.require_profile(db, principal)
    if normalize_role(profile.tipo_usuario) not in TICKET_EDITOR_ROLES:
        raise PermissionDenied("Unauthorized: only Administrativo, Maestro or Soporte users can update tickets")

    changes = {
        field: value
        for field, value in payload.model_dump(exclude_unset=True, exclude={"ticket_id"}).items()
        if value is not None
    }
    if not changes:
        raise InvalidRequest("No fields to update")

    db_ticket = get_ticket(db, payload.ticket_id)
    if db_ticket is None:
        raise NotFound("Ticket not found")

    assignee = None
    if "maestro_notificado_id" in changes:
        assignee = user_service.get_user(db, changes["maestro_notificado_id"])
        if assignee is None:
            raise InvalidRequest(f"User {changes['maestro_notificado_id']} not found")
    if "estado_id" in changes:
        if catalog_service.get_entry(db, changes["estado_id"], "estado") is None:
            raise InvalidRequest(f"Unknown status {changes['estado_id']}")

    previous_assignee = db_ticket.asignado.nombre_completo if db_ticket.asignado else None
    previous_status = db_ticket.estado_id

    for field, value in changes.items():
        setattr(db_ticket, field, value)
    db.commit()
    db.refresh(db_ticket)
    logger.info("ticket %s updated by usuario %s: %s", db_ticket.ticket_id, profile.usuario_id, changes)

    if assignee is not None:
        entry = Historial(
            ticket_id=db_ticket.ticket_id,
            autor_id=profile.usuario_id,
            campo_modificado="maestro_notificado_id",
            valor_anterior=previous_assignee,
            valor_nuevo=assignee.nombre_completo,
            mensaje_cambio=f"[{profile.nombre_completo}] Reasignó la tarea a [{assignee.nombre_completo}]",
        )
    else:
        entry = Historial(
            ticket_id=db_ticket.ticket_id,
            autor_id=profile.usuario_id,
            campo_modificado="estado_id",
            valor_anterior=f"Estado {previous_status}",
            valor_nuevo=f"Estado {db_ticket.estado_id}",
            mensaje_cambio=f"[{profile.nombre_completo}] Actualizó el estado del ticket",
        )
    record_history(db, entry)

    return db_ticket


def record_history(db: Session, entry: Historial) -> Historial | None:
    """Best-effort append to the audit trail."""
    ticket_id = entry.ticket_id
    try:
        db.add(entry)
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        logger.warning("history insert failed for ticket %s", ticket_id, exc_info=True)
        return None
    return entry


def list_staff(db: Session, principal: Principal) -> list[Usuario]:
    return user_service.list_staff(db)
