# tests/test_api.py
import json

from ecolepro.main import app
from ecolepro.services.ai_report_service import get_ai_report_service


async def test_health(client):
    r = await client.get("/health/")
    assert r.status_code == 200
    assert r.json()["status"] == "healthy"


async def test_full_health_reports_disabled_cache(client):
    r = await client.get("/health/full-health")
    assert r.status_code == 200
    assert r.json()["cache"] == "disabled"


async def test_session_headers_required(client):
    r = await client.get("/api/v1/settings/active-school")
    assert r.status_code == 401

    r = await client.get("/api/v1/settings/active-school", headers={"X-User-Id": "u", "X-User-Role": "WIZARD"})
    assert r.status_code == 401


async def test_active_school_settings(client, admin_headers):
    r = await client.get("/api/v1/settings/active-school", headers=admin_headers)
    assert r.status_code == 200
    body = r.json()
    assert body["school"]["id"] == "SCHOOL_01"
    assert "Mathématiques" in body["subjects"]
    assert "SETTINGS.write" in body["role_permissions"]["ADMIN"]


async def test_school_list_is_super_admin_only(client, teacher_headers, super_admin_headers):
    r = await client.get("/api/v1/settings/schools", headers=teacher_headers)
    assert r.status_code == 403

    r = await client.get("/api/v1/settings/schools", headers=super_admin_headers)
    assert r.status_code == 200
    assert len(r.json()) == 3


async def test_create_school(client, super_admin_headers):
    r = await client.post(
        "/api/v1/settings/schools",
        json={"name": "Lycée A", "modules": ["STUDENTS", "GRADES"], "type": "PRIMAIRE"},
        headers=super_admin_headers,
    )
    assert r.status_code == 200
    school = r.json()
    assert school["modules"] == ["STUDENTS", "GRADES"]
    assert school["type"] == "PRIMAIRE"

    r = await client.post("/api/v1/settings/schools", json={"address": "x"}, headers=super_admin_headers)
    assert r.status_code == 422


async def test_permissions_update_validated(client, admin_headers):
    r = await client.put(
        "/api/v1/settings/schools/SCHOOL_01/permissions",
        json={"role_permissions": {"TEACHER": ["GRADES.fly"]}, "subjects": ["Maths"]},
        headers=admin_headers,
    )
    assert r.status_code == 422
    assert r.json()["detail"]["value"] == "GRADES.fly"

    r = await client.put(
        "/api/v1/settings/schools/SCHOOL_01/permissions",
        json={"role_permissions": {"TEACHER": ["GRADES.read"]}, "subjects": ["Maths", "SVT"]},
        headers=admin_headers,
    )
    assert r.status_code == 200
    assert r.json()["config"]["subjects"] == ["Maths", "SVT"]


async def test_pin_change_and_verify(client, admin_headers):
    url = "/api/v1/settings/schools/SCHOOL_01/pin"
    r = await client.post(url, json={"current_pin": "1111", "new_pin": "1234", "confirm_pin": "1234"}, headers=admin_headers)
    assert r.status_code == 403

    r = await client.post(url, json={"current_pin": "0000", "new_pin": "1234", "confirm_pin": "4321"}, headers=admin_headers)
    assert r.status_code == 400

    r = await client.post(url, json={"current_pin": "0000", "new_pin": "12a4", "confirm_pin": "12a4"}, headers=admin_headers)
    assert r.status_code == 422

    r = await client.post(url, json={"current_pin": "0000", "new_pin": "1234", "confirm_pin": "1234"}, headers=admin_headers)
    assert r.status_code == 200

    r = await client.post(f"{url}/verify", json={"pin": "1234"}, headers=admin_headers)
    assert r.json() == {"valid": True}


async def test_module_access(client, teacher_headers):
    r = await client.get("/api/v1/settings/schools/SCHOOL_01/access/grades", headers=teacher_headers)
    assert r.json()["allowed"] is True

    r = await client.get("/api/v1/settings/schools/SCHOOL_01/access/SETTINGS", headers=teacher_headers)
    assert r.json()["allowed"] is False

    r = await client.get("/api/v1/settings/schools/SCHOOL_01/access/SETTINGS?role=ADMIN", headers=teacher_headers)
    assert r.json()["allowed"] is True


async def test_permission_helpers(client, admin_headers, teacher_headers):
    r = await client.get("/api/v1/permissions/modules", headers=teacher_headers)
    assert len(r.json()) == 13

    r = await client.post(
        "/api/v1/permissions/toggle",
        json={"role": "TEACHER", "permission_id": "FINANCE.read", "role_permissions": {"TEACHER": []}},
        headers=admin_headers,
    )
    assert r.json() == {"TEACHER": ["FINANCE.read"]}

    r = await client.post(
        "/api/v1/permissions/subjects/add",
        json={"subjects": ["Maths", "Français"], "name": "Philosophie"},
        headers=admin_headers,
    )
    assert r.json() == ["Maths", "Français", "Philosophie"]

    r = await client.post(
        "/api/v1/permissions/subjects/add",
        json={"subjects": ["Maths"], "name": "Maths"},
        headers=admin_headers,
    )
    assert r.status_code == 409


async def test_users_crud(client, admin_headers):
    r = await client.post(
        "/api/v1/users/",
        json={"name": "Awa", "email": "awa@ecole.ci", "role": "BURSAR"},
        headers=admin_headers,
    )
    assert r.status_code == 200
    user = r.json()
    assert user["school_id"] == "SCHOOL_01"
    assert user["last_login"] == "Jamais"

    r = await client.get("/api/v1/users/", headers=admin_headers)
    assert user["id"] in {u["id"] for u in r.json()}

    r = await client.delete(f"/api/v1/users/{user['id']}", headers=admin_headers)
    assert r.status_code == 200

    r = await client.delete(f"/api/v1/users/{user['id']}", headers=admin_headers)
    assert r.status_code == 404


async def test_audit_logs_super_admin_only(client, admin_headers, super_admin_headers):
    r = await client.get("/api/v1/audit-logs/", headers=admin_headers)
    assert r.status_code == 403

    r = await client.get("/api/v1/audit-logs/", headers=super_admin_headers)
    assert r.status_code == 200
    assert r.json()[0]["action"] == "Connexion"


async def test_backup_download_and_restore(client, super_admin_headers):
    r = await client.get("/api/v1/backup/", headers=super_admin_headers)
    assert r.status_code == 200
    assert "attachment; filename=ecolepro_backup_" in r.headers["content-disposition"]
    backup = r.text
    assert "schools" in json.loads(backup)

    r = await client.get("/api/v1/backup/?format=SQL", headers=super_admin_headers)
    assert r.text.startswith("-- EcolePro SQL Dump")
    assert r.headers["content-disposition"].endswith(".sql")

    r = await client.post(
        "/api/v1/backup/restore",
        files={"file": ("backup.sql", "-- EcolePro SQL Dump", "application/sql")},
        headers=super_admin_headers,
    )
    assert r.status_code == 415

    r = await client.post(
        "/api/v1/backup/restore",
        files={"file": ("backup.json", "{broken", "application/json")},
        headers=super_admin_headers,
    )
    assert r.status_code == 400
    assert r.json()["success"] is False

    r = await client.post(
        "/api/v1/backup/restore",
        files={"file": ("backup.json", backup, "application/json")},
        headers=super_admin_headers,
    )
    assert r.status_code == 200
    assert r.json()["success"] is True

    r = await client.get("/api/v1/audit-logs/", headers=super_admin_headers)
    assert r.json()[0]["action"] == "Restauration"


async def test_factory_reset(client, super_admin_headers, admin_headers):
    r = await client.post("/api/v1/backup/factory-reset", headers=admin_headers)
    assert r.status_code == 403

    await client.post("/api/v1/settings/schools", json={"name": "Temporaire"}, headers=super_admin_headers)
    r = await client.post("/api/v1/backup/factory-reset", headers=super_admin_headers)
    assert r.status_code == 200

    r = await client.get("/api/v1/settings/schools", headers=super_admin_headers)
    assert len(r.json()) == 3


class _FakeAIService:
    async def generate_report(self, student):
        return f"Commentaire pour {student.first_name}"

    async def analyze_cohort(self, students):
        return f"<ul><li>{len(students)} élèves</li></ul>"


async def test_ai_endpoints(client, teacher_headers):
    app.dependency_overrides[get_ai_report_service] = lambda: _FakeAIService()

    r = await client.post(
        "/api/v1/ai/report",
        json={"first_name": "Jean", "last_name": "Dupont", "average": 14.5, "attendance": 95},
        headers=teacher_headers,
    )
    assert r.json() == {"text": "Commentaire pour Jean"}

    r = await client.post(
        "/api/v1/ai/cohort-analysis",
        json={"students": [{"first_name": "Jean", "average": 12}, {"first_name": "Alice", "average": 16}]},
        headers=teacher_headers,
    )
    assert r.json() == {"text": "<ul><li>2 élèves</li></ul>"}


async def test_ai_without_key_fails_closed(client, teacher_headers):
    r = await client.post("/api/v1/ai/cohort-analysis", json={"students": []}, headers=teacher_headers)
    assert r.status_code == 200
    assert r.json()["text"] == "Erreur de configuration API."


async def test_delete_user_resolves_path_id_and_session_headers(client, admin_headers, super_admin_headers):
    r = await client.post(
        "/api/v1/users/",
        json={"name": "Koffi", "email": "koffi@pepites.ci", "role": "TEACHER", "school_id": "SCHOOL_02"},
        headers=super_admin_headers,
    )
    other_school_user = r.json()["id"]

    # the path id is the target, the X-User-Id header is the caller
    r = await client.delete(f"/api/v1/users/{other_school_user}", headers=admin_headers)
    assert r.status_code == 403

    r = await client.delete(f"/api/v1/users/{other_school_user}", headers=super_admin_headers)
    assert r.status_code == 200
    assert r.json()["message"] == f"System user {other_school_user} deleted"
