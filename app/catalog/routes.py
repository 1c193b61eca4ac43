# app/catalog/routes.py
from fastapi import APIRouter, Depends
from sqlalchemy.orm import sessionmaker

from app.catalog import services as catalog_service
from app.catalog.schemas import CatalogsOut
from app.core.config import Settings, get_settings
from app.core.database import get_session_factory

router = APIRouter(prefix="/catalog-service", tags=["Catalogs"])


# Public: no principal is resolved for catalog reads.
@router.api_route("", methods=["GET", "POST", "PUT", "PATCH", "DELETE"], response_model=CatalogsOut)
def list_catalogs(
    session_factory: sessionmaker = Depends(get_session_factory),
    settings: Settings = Depends(get_settings),
):
    return catalog_service.list_catalogs(session_factory, max_workers=settings.CATALOG_WORKERS)
