# app/user/services.py
from sqlalchemy import func
from sqlalchemy.orm import Session

from app.core.errors import NotFound, ProfileNotFound
from app.core.security import Principal
from app.user.models import Usuario
from app.user.roles import STAFF_ROLES, spellings


def find_profile(db: Session, auth_uid: str) -> Usuario | None:
    return db.query(Usuario).filter(Usuario.auth_uid == auth_uid).first()


def require_profile(db: Session, principal: Principal) -> Usuario:
    """Profile of the caller; a missing row is a setup problem, not an auth one."""
    profile = find_profile(db, principal.id)
    if profile is None:
        raise ProfileNotFound()
    return profile


def get_profile(db: Session, principal: Principal) -> Usuario:
    profile = find_profile(db, principal.id)
    if profile is None:
        raise NotFound("Profile not found")
    return profile


def get_user(db: Session, usuario_id: int) -> Usuario | None:
    return db.query(Usuario).filter(Usuario.usuario_id == usuario_id).first()


def sync_profile(db: Session, principal: Principal) -> dict:
    # Profiles are created by a database trigger when a new identity signs up.
    return {"msg": "Sync logic placeholder"}


def list_staff(db: Session) -> list[Usuario]:
    return (
        db.query(Usuario)
        .filter(func.lower(func.trim(Usuario.tipo_usuario)).in_(spellings(STAFF_ROLES)))
        .order_by(Usuario.nombre.asc(), Usuario.usuario_id.asc())
        .all()
    )
