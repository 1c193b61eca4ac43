# app/user/models.py
from sqlalchemy import Column, Integer, String
from app.core.database import Base


class Usuario(Base):
    __tablename__ = "usuario"

    usuario_id = Column(Integer, primary_key=True, index=True)
    auth_uid = Column(String, unique=True, index=True, nullable=False)
    nombre = Column(String, nullable=False)
    apellido = Column(String, nullable=True)
    tipo_usuario = Column(String, index=True, nullable=False)
    email = Column(String, nullable=True)

    @property
    def nombre_completo(self) -> str:
        return " ".join(p for p in (self.nombre, self.apellido) if p)
