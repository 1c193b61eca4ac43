# app/catalog/services.py
from concurrent.futures import ThreadPoolExecutor

from sqlalchemy.orm import Session, sessionmaker

from app.catalog.models import Catalogo
from app.catalog.schemas import CatalogEntryOut

# response key -> catalogo.tipo
CATALOG_TYPES = {
    "categorias": "categoria",
    "prioridades": "prioridad",
    "estados": "estado",
    "areas": "area",
}


def get_entries(db: Session, tipo: str) -> list[Catalogo]:
    return (
        db.query(Catalogo)
        .filter(Catalogo.tipo == tipo)
        .order_by(Catalogo.catalogo_id.asc())
        .all()
    )


def get_entry(db: Session, catalogo_id: int, tipo: str) -> Catalogo | None:
    return (
        db.query(Catalogo)
        .filter(Catalogo.catalogo_id == catalogo_id, Catalogo.tipo == tipo)
        .first()
    )


def _read_catalog(session_factory: sessionmaker, tipo: str) -> list[CatalogEntryOut]:
    # Each worker owns its session; rows are serialized before it closes.
    with session_factory() as db:
        return [CatalogEntryOut.model_validate(row) for row in get_entries(db, tipo)]


def list_catalogs(session_factory: sessionmaker, max_workers: int = 4) -> dict[str, list[CatalogEntryOut]]:
    """Read the four catalogs concurrently. Any failing read fails the whole call."""
    with ThreadPoolExecutor(max_workers=max_workers, thread_name_prefix="catalog") as pool:
        futures = {
            key: pool.submit(_read_catalog, session_factory, tipo)
            for key, tipo in CATALOG_TYPES.items()
        }
        return {key: future.result() for key, future in futures.items()}
