# tests/test_tickets.py
import re

from app.ticket.models import Adjunto, Historial, Ticket
from app.core.database import engine

ALUMNO = "uid-alumno"
ESTUDIANTE = "uid-estudiante"
MAESTRO = "uid-maestro"
ADMIN = "uid-admin"
SOPORTE = "uid-soporte"


def create(client, auth, uid=ALUMNO, **body):
    payload = {"titulo": "Proyector roto", "categoria_id": 3}
    payload.update(body)
    return client.post("/ticket-manager/create", json=payload, headers=auth(uid))


def test_create_applies_defaults(client, auth):
    r = create(client, auth)
    assert r.status_code == 201
    data = r.json()
    assert data["titulo"] == "Proyector roto"
    assert data["categoria_id"] == 3
    assert data["prioridad_id"] == 8
    assert data["estado_id"] == 1
    assert data["area_notificada_id"] == 38
    assert data["reportador_id"] == 1
    assert data["maestro_notificado_id"] is None


def test_create_keeps_given_priority_and_area(client, auth):
    r = create(client, auth, prioridad_id=9, area_notificada_id=39, detalles="No enciende")
    assert r.status_code == 201
    data = r.json()
    assert data["prioridad_id"] == 9
    assert data["area_notificada_id"] == 39
    assert data["detalles"] == "No enciende"
    assert data["estado_id"] == 1


def test_create_validation_errors(client, auth):
    r1 = client.post("/ticket-manager/create", json={"categoria_id": 3}, headers=auth(ALUMNO))
    assert r1.status_code == 400
    assert "titulo" in r1.json()["error"]

    r2 = client.post("/ticket-manager/create", json={"titulo": "Sin categoria"}, headers=auth(ALUMNO))
    assert r2.status_code == 400
    assert "categoria_id" in r2.json()["error"]

    r3 = create(client, auth, titulo="   ")
    assert r3.status_code == 400
    assert r3.json()["error"] == "Missing required fields: titulo, categoria_id"

    # unknown fields are rejected
    r4 = create(client, auth, color="rojo")
    assert r4.status_code == 400


def test_create_without_profile_inserts_nothing(client, auth, db):
    r = create(client, auth, uid="uid-nobody")
    assert r.status_code == 400
    assert "profile not found" in r.json()["error"]
    assert db.query(Ticket).count() == 0


def test_create_with_attachment(client, auth):
    adjunto = {
        "nombre_archivo": "foto.png",
        "url_storage": "https://storage.example.com/tickets/foto.png",
        "tipo_mime": "image/png",
        "tamano_bytes": 2048,
        "bucket": "tickets",
    }
    r = create(client, auth, adjunto=adjunto)
    assert r.status_code == 201
    tid = r.json()["ticket_id"]

    r2 = client.get(f"/ticket-manager/details?id={tid}", headers=auth(ALUMNO))
    assert r2.status_code == 200
    attachments = r2.json()["attachments"]
    assert len(attachments) == 1
    assert attachments[0]["nombre_archivo"] == "foto.png"
    assert attachments[0]["subido_por"] == 1
    assert attachments[0]["ticket_id"] == tid


def test_attachment_failure_keeps_ticket(client, auth, db):
    Adjunto.__table__.drop(bind=engine)

    adjunto = {"nombre_archivo": "foto.png", "url_storage": "https://storage.example.com/foto.png"}
    r = create(client, auth, adjunto=adjunto)
    assert r.status_code == 201
    assert db.query(Ticket).filter(Ticket.ticket_id == r.json()["ticket_id"]).count() == 1


def test_list_restricted_role_sees_own_tickets(client, auth):
    mine = create(client, auth, uid=ALUMNO).json()
    other = create(client, auth, uid=ESTUDIANTE).json()

    r = client.get("/ticket-manager/list", headers=auth(ALUMNO))
    assert r.status_code == 200
    ids = {t["ticket_id"] for t in r.json()}
    assert ids == {mine["ticket_id"]}

    # legacy "estudiante" spelling is restricted too
    r2 = client.get("/ticket-manager/list", headers=auth(ESTUDIANTE))
    assert {t["ticket_id"] for t in r2.json()} == {other["ticket_id"]}


def test_list_staff_role_sees_all_newest_first(client, auth):
    a = create(client, auth, uid=ALUMNO, titulo="A").json()
    b = create(client, auth, uid=ESTUDIANTE, titulo="B").json()

    r = client.get("/ticket-manager/list", headers=auth(SOPORTE))
    assert r.status_code == 200
    data = r.json()
    assert [t["ticket_id"] for t in data] == [b["ticket_id"], a["ticket_id"]]

    first = data[0]
    assert first["categoria"]["nombre"] == "Hardware"
    assert first["prioridad"] == {"nombre": "Bajo", "codigo": "BAJ"}
    assert first["estado"]["nombre"] == "Abierto"
    assert first["area"]["nombre"] == "Sistemas"
    assert first["reportador"]["nombre"] == "Beto"
    assert first["asignado"] is None


def test_list_without_profile_fails(client, auth):
    r = client.get("/ticket-manager/list", headers=auth("uid-nobody"))
    assert r.status_code == 400


def test_details_requires_id(client, auth):
    r = client.get("/ticket-manager/details", headers=auth(ALUMNO))
    assert r.status_code == 400
    assert r.json()["error"] == "Missing ticket ID"


def test_details_not_found(client, auth):
    r = client.get("/ticket-manager/details?id=9999999", headers=auth(ALUMNO))
    assert r.status_code == 400
    assert r.json()["error"] == "Ticket not found"


def test_update_status_scenario(client, auth, db):
    tid = create(client, auth).json()["ticket_id"]

    r = client.put("/ticket-manager/update", json={"ticket_id": tid, "estado_id": 2}, headers=auth(ADMIN))
    assert r.status_code == 200
    assert r.json()["estado_id"] == 2

    history = db.query(Historial).filter(Historial.ticket_id == tid).all()
    assert len(history) == 1
    assert history[0].campo_modificado == "estado_id"
    assert history[0].valor_anterior == "Estado 1"
    assert history[0].valor_nuevo == "Estado 2"
    assert history[0].autor_id == 4


def test_update_assignee_writes_reassignment_message(client, auth, db):
    tid = create(client, auth).json()["ticket_id"]

    r = client.put(
        "/ticket-manager/update",
        json={"ticket_id": tid, "maestro_notificado_id": 3},
        headers=auth(ADMIN),
    )
    assert r.status_code == 200
    assert r.json()["maestro_notificado_id"] == 3

    history = db.query(Historial).filter(Historial.ticket_id == tid).all()
    assert len(history) == 1
    assert re.fullmatch(r"\[.+\] Reasignó la tarea a \[.+\]", history[0].mensaje_cambio)
    assert history[0].mensaje_cambio == "[Diego Soto] Reasignó la tarea a [Carla Diaz]"
    assert history[0].valor_nuevo == "Carla Diaz"

    details = client.get(f"/ticket-manager/details?id={tid}", headers=auth(ADMIN)).json()
    assert details["ticket"]["asignado"] == {"nombre": "Carla", "apellido": "Diaz"}


def test_update_by_student_is_rejected(client, auth, db):
    tid = create(client, auth).json()["ticket_id"]

    r = client.put("/ticket-manager/update", json={"ticket_id": tid, "estado_id": 2}, headers=auth(ALUMNO))
    assert r.status_code == 400
    assert r.json()["error"].startswith("Unauthorized")

    ticket = db.query(Ticket).filter(Ticket.ticket_id == tid).one()
    assert ticket.estado_id == 1
    assert db.query(Historial).count() == 0


def test_update_without_fields(client, auth):
    tid = create(client, auth).json()["ticket_id"]
    r = client.put("/ticket-manager/update", json={"ticket_id": tid}, headers=auth(MAESTRO))
    assert r.status_code == 400
    assert r.json()["error"] == "No fields to update"


def test_update_requires_ticket_id(client, auth):
    r = client.put("/ticket-manager/update", json={"estado_id": 2}, headers=auth(ADMIN))
    assert r.status_code == 400
    assert "ticket_id" in r.json()["error"]


def test_update_rejects_unknown_references(client, auth):
    tid = create(client, auth).json()["ticket_id"]

    r1 = client.put("/ticket-manager/update", json={"ticket_id": tid, "estado_id": 3}, headers=auth(ADMIN))
    assert r1.status_code == 400

    r2 = client.put(
        "/ticket-manager/update",
        json={"ticket_id": tid, "maestro_notificado_id": 999},
        headers=auth(ADMIN),
    )
    assert r2.status_code == 400

    r3 = client.put("/ticket-manager/update", json={"ticket_id": 999, "estado_id": 2}, headers=auth(ADMIN))
    assert r3.status_code == 400
    assert r3.json()["error"] == "Ticket not found"


def test_details_history_newest_first(client, auth):
    tid = create(client, auth).json()["ticket_id"]
    client.put("/ticket-manager/update", json={"ticket_id": tid, "estado_id": 2}, headers=auth(ADMIN))
    client.put("/ticket-manager/update", json={"ticket_id": tid, "maestro_notificado_id": 5}, headers=auth(SOPORTE))

    r = client.get(f"/ticket-manager/details?id={tid}", headers=auth(ALUMNO))
    assert r.status_code == 200
    data = r.json()
    assert data["ticket"]["ticket_id"] == tid
    assert data["ticket"]["estado"]["nombre"] == "En proceso"
    assert [h["campo_modificado"] for h in data["history"]] == ["maestro_notificado_id", "estado_id"]
    assert data["history"][0]["autor"]["nombre"] == "Elena"
    assert data["attachments"] == []


def test_history_failure_keeps_update(client, auth, db):
    tid = create(client, auth).json()["ticket_id"]
    Historial.__table__.drop(bind=engine)

    r = client.put("/ticket-manager/update", json={"ticket_id": tid, "estado_id": 2}, headers=auth(ADMIN))
    assert r.status_code == 200
    assert r.json()["estado_id"] == 2

    # details still answers with an empty history
    r2 = client.get(f"/ticket-manager/details?id={tid}", headers=auth(ADMIN))
    assert r2.status_code == 200
    assert r2.json()["history"] == []


def test_staff_lists_assignable_users_by_name(client, auth):
    r = client.get("/ticket-manager/staff", headers=auth(ALUMNO))
    assert r.status_code == 200
    data = r.json()
    assert [u["nombre"] for u in data] == ["Carla", "Diego", "Elena", "Fabio"]
    assert {u["tipo_usuario"] for u in data} == {"Maestro", "Administrativo", "Soporte", "Administrador"}


def test_attachment_fetch_failure_gives_empty_list(client, auth):
    tid = create(client, auth).json()["ticket_id"]
    Adjunto.__table__.drop(bind=engine)

    r = client.get(f"/ticket-manager/details?id={tid}", headers=auth(ALUMNO))
    assert r.status_code == 200
    data = r.json()
    assert data["ticket"]["ticket_id"] == tid
    assert data["attachments"] == []
