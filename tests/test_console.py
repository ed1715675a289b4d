"""Admin console tests: session login, CSRF, employee pages and import."""

import re

import pytest

from tests.factories import add_employee, sheet_row, workbook_bytes

CSRF_META = re.compile(r'<meta name="csrf-token" content="([^"]+)">')

ADMIN_FORM = {
    "first_names": "Laura",
    "last_names": "Restrepo",
    "email": "admin@talentoplus.com",
    "password": "Secreto123",
    "confirm_password": "Secreto123",
}


async def csrf_token(client, path: str) -> str:
    response = await client.get(path)
    assert response.status_code == 200
    match = CSRF_META.search(response.text)
    assert match is not None
    return match.group(1)


@pytest.fixture
async def admin_client(client):
    """Client signed in as the first administrator."""
    token = await csrf_token(client, "/Account/Register")
    response = await client.post("/Account/Register", data={**ADMIN_FORM, "csrf_token": token})
    assert response.status_code == 303
    assert response.headers["location"] == "/Dashboard"
    return client


class TestConsoleAccess:
    """Pages behind the administrator session."""

    @pytest.mark.parametrize("path", ["/Dashboard", "/Empleados", "/Empleados/Importar"])
    async def test_redirects_to_login(self, client, path: str) -> None:
        response = await client.get(path)

        assert response.status_code == 303
        assert response.headers["location"].startswith("/Account/Login?returnUrl=")

    async def test_root_goes_to_dashboard(self, client) -> None:
        response = await client.get("/")
        assert response.status_code == 303
        assert response.headers["location"] == "/Dashboard"

    async def test_login_page_offers_registration_when_no_admin(self, client) -> None:
        response = await client.get("/Account/Login")

        assert response.status_code == 200
        assert "/Account/Register" in response.text

    async def test_post_without_csrf_token_refused(self, client) -> None:
        await client.get("/Account/Login")

        response = await client.post(
            "/Account/Login", data={"email": "admin@talentoplus.com", "password": "Secreto123"}
        )

        assert response.status_code == 403


class TestAccount:
    """Registration, login and logout."""

    async def test_register_signs_in(self, admin_client) -> None:
        response = await admin_client.get("/Dashboard")

        assert response.status_code == 200
        assert "Bienvenido, Laura Restrepo." in response.text
        assert "Total empleados" in response.text

    async def test_second_registration_redirects_to_login(self, admin_client) -> None:
        response = await admin_client.get("/Account/Register")

        assert response.status_code == 303
        assert response.headers["location"] == "/Account/Login"

    async def test_weak_password_shows_policy_errors(self, client) -> None:
        token = await csrf_token(client, "/Account/Register")

        response = await client.post(
            "/Account/Register",
            data={**ADMIN_FORM, "password": "abc", "confirm_password": "abc", "csrf_token": token},
        )

        assert response.status_code == 200
        assert "al menos 6 caracteres" in response.text
        assert "al menos un dígito" in response.text

    async def test_overlong_password_shows_error(self, client) -> None:
        token = await csrf_token(client, "/Account/Register")
        password = "Secreto123" + "x" * 80

        response = await client.post(
            "/Account/Register",
            data={**ADMIN_FORM, "password": password, "confirm_password": password, "csrf_token": token},
        )

        assert response.status_code == 200
        assert "no puede superar los 72 bytes" in response.text

    async def test_logout_then_login(self, admin_client) -> None:
        token = await csrf_token(admin_client, "/Dashboard")
        response = await admin_client.post("/Account/Logout", data={"csrf_token": token})
        assert response.status_code == 303
        assert (await admin_client.get("/Dashboard")).status_code == 303

        token = await csrf_token(admin_client, "/Account/Login")
        response = await admin_client.post(
            "/Account/Login",
            data={
                "email": "admin@talentoplus.com",
                "password": "Secreto123",
                "return_url": "/Empleados",
                "csrf_token": token,
            },
        )

        assert response.status_code == 303
        assert response.headers["location"] == "/Empleados"

    async def test_wrong_password_rerenders_form(self, admin_client) -> None:
        token = await csrf_token(admin_client, "/Dashboard")
        await admin_client.post("/Account/Logout", data={"csrf_token": token})

        token = await csrf_token(admin_client, "/Account/Login")
        response = await admin_client.post(
            "/Account/Login",
            data={"email": "admin@talentoplus.com", "password": "Incorrecta1", "csrf_token": token},
        )

        assert response.status_code == 200
        assert "Email o contraseña incorrectos." in response.text

    async def test_external_return_url_ignored(self, admin_client) -> None:
        token = await csrf_token(admin_client, "/Dashboard")
        await admin_client.post("/Account/Logout", data={"csrf_token": token})

        token = await csrf_token(admin_client, "/Account/Login")
        response = await admin_client.post(
            "/Account/Login",
            data={
                "email": "admin@talentoplus.com",
                "password": "Secreto123",
                "return_url": "//evil.example.com",
                "csrf_token": token,
            },
        )

        assert response.headers["location"] == "/Dashboard"


class TestEmployeePages:
    """Employee CRUD from the console."""

    async def test_create_employee(self, admin_client) -> None:
        token = await csrf_token(admin_client, "/Empleados/Create")

        response = await admin_client.post(
            "/Empleados/Create",
            data={
                "csrf_token": token,
                "document": "5551234",
                "first_names": "Pedro",
                "last_names": "Arango",
                "birth_date": "1985-07-20",
                "address": "Calle 50 # 10-20",
                "phone": "3201112233",
                "email": "pedro.arango@example.com",
                "salary": "3500000",
                "hire_date": "2020-03-01",
                "status": "active",
                "education_level": "1",
                "professional_profile": "",
                "department_id": "4",
                "job_title_id": "4",
            },
        )

        assert response.status_code == 303
        page = await admin_client.get("/Empleados")
        assert "Empleado creado exitosamente" in page.text
        assert "Pedro" in page.text

    async def test_create_with_missing_fields_rerenders(self, admin_client) -> None:
        token = await csrf_token(admin_client, "/Empleados/Create")

        response = await admin_client.post(
            "/Empleados/Create", data={"csrf_token": token, "document": "1"}
        )

        assert response.status_code == 200
        assert "El campo es requerido" in response.text

    async def test_details_and_delete(self, admin_client, session) -> None:
        employee = await add_employee(session)

        details = await admin_client.get(f"/Empleados/Details/{employee.id}")
        assert details.status_code == 200
        assert "Ana María" in details.text

        token = await csrf_token(admin_client, f"/Empleados/Delete/{employee.id}")
        response = await admin_client.post(
            f"/Empleados/Delete/{employee.id}", data={"csrf_token": token}
        )
        assert response.status_code == 303

        missing = await admin_client.get(f"/Empleados/Details/{employee.id}")
        assert missing.status_code == 303
        assert missing.headers["location"] == "/Empleados"

    async def test_download_resume(self, admin_client, session) -> None:
        employee = await add_employee(session)

        response = await admin_client.get(f"/Empleados/DescargarPdf/{employee.id}")

        assert response.status_code == 200
        assert response.content.startswith(b"%PDF")

    async def test_import_workbook(self, admin_client) -> None:
        token = await csrf_token(admin_client, "/Empleados/Importar")
        content = workbook_bytes(sheet_row("1001", "marta@example.com"))

        response = await admin_client.post(
            "/Empleados/Importar",
            data={"csrf_token": token},
            files={
                "file": (
                    "empleados.xlsx",
                    content,
                    "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
                )
            },
        )

        assert response.status_code == 200
        assert "Importación completada: 1 insertados, 0 actualizados, 0 errores" in response.text

    async def test_import_rejects_other_extensions(self, admin_client) -> None:
        token = await csrf_token(admin_client, "/Empleados/Importar")

        response = await admin_client.post(
            "/Empleados/Importar",
            data={"csrf_token": token},
            files={"file": ("empleados.csv", b"1;Ana", "text/csv")},
        )

        assert response.status_code == 200
        assert "Solo se permiten archivos Excel" in response.text


class TestAskAI:
    """Dashboard chat endpoint."""

    async def test_requires_csrf_header(self, admin_client) -> None:
        response = await admin_client.post("/Dashboard/AskAI", json={"query": "Hola"})
        assert response.status_code == 403

    async def test_empty_question(self, admin_client) -> None:
        token = await csrf_token(admin_client, "/Dashboard")

        response = await admin_client.post(
            "/Dashboard/AskAI", json={"query": " "}, headers={"X-CSRF-Token": token}
        )

        assert response.status_code == 200
        assert response.json() == {
            "success": False,
            "response": None,
            "error": "La pregunta no puede estar vacía.",
        }

    async def test_missing_api_key(self, admin_client) -> None:
        token = await csrf_token(admin_client, "/Dashboard")

        response = await admin_client.post(
            "/Dashboard/AskAI",
            json={"query": "¿Cuántos empleados hay?"},
            headers={"X-CSRF-Token": token},
        )

        assert response.json()["error"] == "La API Key de Gemini no está configurada."
