# app/catalog/models.py
from sqlalchemy import Column, Integer, String
from app.core.database import Base


class Catalogo(Base):
    __tablename__ = "catalogo"

    catalogo_id = Column(Integer, primary_key=True, index=True)
    nombre = Column(String, nullable=False)
    codigo = Column(String, nullable=True)
    tipo = Column(String, index=True, nullable=False)  # categoria | prioridad | estado | area
