# app/user/routes.py
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.core.errors import RouteNotFound
from app.core.security import Principal, get_principal
from app.user import services as user_service
from app.user.schemas import ProfileOut, SyncOut

router = APIRouter(prefix="/user-admin", tags=["Users"])


@router.get("/profile", response_model=ProfileOut)
def profile(principal: Principal = Depends(get_principal), db: Session = Depends(get_db)):
    return user_service.get_profile(db, principal)


@router.post("/sync", response_model=SyncOut)
def sync(principal: Principal = Depends(get_principal), db: Session = Depends(get_db)):
    return user_service.sync_profile(db, principal)


@router.api_route(
    "/{path:path}",
    methods=["GET", "POST", "PUT", "PATCH", "DELETE"],
    include_in_schema=False,
)
def fallback(path: str, principal: Principal = Depends(get_principal)):
    raise RouteNotFound()
