# app/ticket/schemas.py
from datetime import datetime

from pydantic import BaseModel, Field


class AttachmentIn(BaseModel):
    nombre_archivo: str = Field(..., min_length=1)
    url_storage: str = Field(..., min_length=1)
    tipo_mime: str | None = None
    tamano_bytes: int | None = Field(default=None, ge=0)
    bucket: str | None = None

    model_config = {"extra": "forbid"}


class TicketCreate(BaseModel):
    titulo: str = Field(..., min_length=1)
    categoria_id: int
    detalles: str | None = None
    prioridad_id: int | None = None
    area_notificada_id: int | None = None
    adjunto: AttachmentIn | None = None

    model_config = {"extra": "forbid"}


class TicketUpdate(BaseModel):
    ticket_id: int
    maestro_notificado_id: int | None = None
    estado_id: int | None = None

    model_config = {"extra": "forbid"}


class TicketOut(BaseModel):
    ticket_id: int
    titulo: str
    detalles: str | None = None
    categoria_id: int
    prioridad_id: int
    estado_id: int
    area_notificada_id: int
    reportador_id: int
    maestro_notificado_id: int | None = None
    fecha_creacion: datetime | None = None

    model_config = {"from_attributes": True}


# Joined names

class CatalogName(BaseModel):
    nombre: str

    model_config = {"from_attributes": True}


class CatalogNameCode(CatalogName):
    codigo: str | None = None


class PersonName(BaseModel):
    nombre: str
    apellido: str | None = None

    model_config = {"from_attributes": True}


class Reporter(PersonName):
    tipo_usuario: str


class TicketDetailOut(TicketOut):
    categoria: CatalogName | None = None
    prioridad: CatalogNameCode | None = None
    estado: CatalogName | None = None
    area: CatalogName | None = None
    reportador: Reporter | None = None
    asignado: PersonName | None = None


class HistoryOut(BaseModel):
    historial_id: int
    ticket_id: int
    autor_id: int
    campo_modificado: str
    valor_anterior: str | None = None
    valor_nuevo: str | None = None
    mensaje_cambio: str | None = None
    fecha_cambio: datetime | None = None
    autor: PersonName | None = None

    model_config = {"from_attributes": True}


class AttachmentOut(BaseModel):
    adjunto_id: int
    ticket_id: int
    subido_por: int
    nombre_archivo: str
    url_storage: str
    tipo_mime: str | None = None
    tamano_bytes: int | None = None
    bucket: str | None = None
    fecha_subida: datetime | None = None

    model_config = {"from_attributes": True}


class TicketDetailsOut(BaseModel):
    ticket: TicketDetailOut
    history: list[HistoryOut] = Field(default_factory=list)
    attachments: list[AttachmentOut] = Field(default_factory=list)
