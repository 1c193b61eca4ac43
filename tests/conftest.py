# tests/conftest.py
import os
import tempfile

_db_dir = tempfile.mkdtemp(prefix="helpdesk-tests-")
os.environ["DATABASE_URL"] = f"sqlite:///{os.path.join(_db_dir, 'test.db')}"
os.environ["AUTH_JWT_SECRET"] = "test-secret"
os.environ.pop("AUTH_JWT_AUDIENCE", None)

import pytest
from fastapi.testclient import TestClient

from app.catalog.models import Catalogo
from app.core.config import get_settings
from app.core.database import Base, SessionLocal, engine
from app.core.security import create_access_token
from app.main import app
from app.user.models import Usuario

CATALOGS = [
    (1, "Abierto", "ABI", "estado"),
    (2, "En proceso", "PRO", "estado"),
    (3, "Hardware", "HW", "categoria"),
    (4, "Software", "SW", "categoria"),
    (8, "Bajo", "BAJ", "prioridad"),
    (9, "Alto", "ALT", "prioridad"),
    (38, "Sistemas", "SIS", "area"),
    (39, "Mantenimiento", "MAN", "area"),
]

USERS = [
    (1, "uid-alumno", "Ana", "Lopez", "Alumno"),
    (2, "uid-estudiante", "Beto", "Ruiz", "estudiante"),
    (3, "uid-maestro", "Carla", "Diaz", "Maestro"),
    (4, "uid-admin", "Diego", "Soto", "Administrativo"),
    (5, "uid-soporte", "Elena", "Mora", "Soporte"),
    (6, "uid-root", "Fabio", "Vega", "Administrador"),
]


@pytest.fixture(autouse=True)
def database():
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    with SessionLocal() as db:
        db.add_all(
            Catalogo(catalogo_id=cid, nombre=nombre, codigo=codigo, tipo=tipo)
            for cid, nombre, codigo, tipo in CATALOGS
        )
        db.add_all(
            Usuario(usuario_id=uid, auth_uid=auth_uid, nombre=nombre, apellido=apellido, tipo_usuario=rol)
            for uid, auth_uid, nombre, apellido, rol in USERS
        )
        db.commit()
    yield


@pytest.fixture
def db():
    with SessionLocal() as session:
        yield session


@pytest.fixture
def client():
    return TestClient(app)


@pytest.fixture
def auth():
    def headers(auth_uid: str) -> dict:
        token = create_access_token(auth_uid, get_settings())
        return {"Authorization": f"Bearer {token}"}
    return headers
