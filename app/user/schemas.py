# app/user/schemas.py
from pydantic import BaseModel


class ProfileOut(BaseModel):
    usuario_id: int
    auth_uid: str
    nombre: str
    apellido: str | None = None
    tipo_usuario: str
    email: str | None = None

    model_config = {"from_attributes": True}


class StaffOut(BaseModel):
    usuario_id: int
    nombre: str
    apellido: str | None = None
    tipo_usuario: str

    model_config = {"from_attributes": True}


class SyncOut(BaseModel):
    msg: str
