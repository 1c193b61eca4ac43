# app/ticket/models.py
from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from app.core.database import Base


class Ticket(Base):
    __tablename__ = "ticket"

    ticket_id = Column(Integer, primary_key=True, index=True)
    titulo = Column(String, nullable=False)
    detalles = Column(Text, nullable=True)

    categoria_id = Column(Integer, ForeignKey("catalogo.catalogo_id"), nullable=False)
    prioridad_id = Column(Integer, ForeignKey("catalogo.catalogo_id"), nullable=False)
    estado_id = Column(Integer, ForeignKey("catalogo.catalogo_id"), nullable=False, index=True)
    area_notificada_id = Column(Integer, ForeignKey("catalogo.catalogo_id"), nullable=False)
    reportador_id = Column(Integer, ForeignKey("usuario.usuario_id"), nullable=False, index=True)
    maestro_notificado_id = Column(Integer, ForeignKey("usuario.usuario_id"), nullable=True)

    fecha_creacion = Column(DateTime(timezone=True), server_default=func.now(), index=True)

    categoria = relationship("Catalogo", foreign_keys=[categoria_id])
    prioridad = relationship("Catalogo", foreign_keys=[prioridad_id])
    estado = relationship("Catalogo", foreign_keys=[estado_id])
    area = relationship("Catalogo", foreign_keys=[area_notificada_id])
    reportador = relationship("Usuario", foreign_keys=[reportador_id])
    asignado = relationship("Usuario", foreign_keys=[maestro_notificado_id])


class Adjunto(Base):
    __tablename__ = "adjunto"

    adjunto_id = Column(Integer, primary_key=True, index=True)
    ticket_id = Column(Integer, ForeignKey("ticket.ticket_id"), nullable=False, index=True)
    subido_por = Column(Integer, ForeignKey("usuario.usuario_id"), nullable=False)
    nombre_archivo = Column(String, nullable=False)
    url_storage = Column(String, nullable=False)
    tipo_mime = Column(String, nullable=True)
    tamano_bytes = Column(Integer, nullable=True)
    bucket = Column(String, nullable=True)
    fecha_subida = Column(DateTime(timezone=True), server_default=func.now())


class Historial(Base):
    """Append-only audit trail of assignee and status changes."""

    __tablename__ = "historial"

    historial_id = Column(Integer, primary_key=True, index=True)
    ticket_id = Column(Integer, ForeignKey("ticket.ticket_id"), nullable=False, index=True)
    autor_id = Column(Integer, ForeignKey("usuario.usuario_id"), nullable=False)
    campo_modificado = Column(String, nullable=False)
    valor_anterior = Column(String, nullable=True)
    valor_nuevo = Column(String, nullable=True)
    mensaje_cambio = Column(Text, nullable=True)
    fecha_cambio = Column(DateTime(timezone=True), server_default=func.now(), index=True)

    autor = relationship("Usuario", foreign_keys=[autor_id])
