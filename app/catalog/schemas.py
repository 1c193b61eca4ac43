# app/catalog/schemas.py
from pydantic import BaseModel, Field


class CatalogEntryOut(BaseModel):
    catalogo_id: int
    nombre: str
    codigo: str | None = None

    model_config = {"from_attributes": True}


class CatalogsOut(BaseModel):
    categorias: list[CatalogEntryOut] = Field(default_factory=list)
    prioridades: list[CatalogEntryOut] = Field(default_factory=list)
    estados: list[CatalogEntryOut] = Field(default_factory=list)
    areas: list[CatalogEntryOut] = Field(default_factory=list)
