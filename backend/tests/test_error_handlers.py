"""Exception boundary: kind-to-status mapping and the error envelope."""

import pytest
from fastapi import FastAPI, HTTPException
from fastapi.testclient import TestClient
from sqlalchemy.exc import IntegrityError, NoResultFound

from eps_family.api.error_handlers import register_exception_handlers
from eps_family.core.errors import (
    STATUS_BY_KIND,
    AppError,
    ConflictError,
    ErrorKind,
    InternalError,
    NotFoundError,
    UnauthorizedError,
    status_for,
)


class UniqueViolation(Exception):
    sqlstate = "23505"
    detail = "Key (email)=(alice@x.com) already exists."


class ForeignKeyViolation(Exception):
    sqlstate = "23503"


def _raiser(exc):
    async def endpoint():
        raise exc

    return endpoint


@pytest.fixture
def boundary_client():
    app = FastAPI()
    register_exception_handlers(app)
    routes = {
        "/conflict": ConflictError("A user with this email already exists"),
        "/unauthorized": UnauthorizedError("Invalid credentials"),
        "/not-found": NotFoundError("Family member not found"),
        "/with-errors": AppError(
            "Validation failed",
            kind=ErrorKind.VALIDATION,
            errors=[{"field": "email", "message": "email must be an email"}],
        ),
        "/internal": InternalError("secret detail"),
        "/http": HTTPException(status_code=403, detail="Forbidden"),
        "/unique": IntegrityError("INSERT INTO users", {}, UniqueViolation()),
        "/foreign-key": IntegrityError("INSERT INTO family_members", {}, ForeignKeyViolation()),
        "/no-result": NoResultFound("No row was found"),
        "/boom": RuntimeError("P1001 database unreachable"),
    }
    for path, exc in routes.items():
        app.add_api_route(path, _raiser(exc), methods=["GET"])

    @app.get("/items/{item_id}")
    async def get_item(item_id: int):
        return {"id": item_id}

    return TestClient(app, raise_server_exceptions=False)


def test_every_kind_has_a_status():
    assert set(STATUS_BY_KIND) == set(ErrorKind)
    assert status_for(ErrorKind.CONFLICT) == 409
    assert status_for(ErrorKind.UNAUTHORIZED) == 401
    assert status_for(ErrorKind.NOT_FOUND) == 404
    assert status_for(ErrorKind.VALIDATION) == 400
    assert status_for(ErrorKind.INTERNAL) == 500


def test_subclass_fixes_kind():
    assert NotFoundError("x").kind is ErrorKind.NOT_FOUND
    assert NotFoundError("x").status_code == 404


@pytest.mark.parametrize(
    "path, status_code, message",
    [
        ("/conflict", 409, "A user with this email already exists"),
        ("/unauthorized", 401, "Invalid credentials"),
        ("/not-found", 404, "Family member not found"),
        ("/http", 403, "Forbidden"),
        ("/no-result", 404, "Record not found"),
    ],
)
def test_client_errors_use_envelope(boundary_client, path, status_code, message):
    response = boundary_client.get(path)

    assert response.status_code == status_code
    body = response.json()
    assert body["statusCode"] == status_code
    assert body["message"] == message
    assert body["path"] == path
    assert body["timestamp"].endswith("+00:00")
    assert "errors" not in body


def test_app_error_details_are_included(boundary_client):
    body = boundary_client.get("/with-errors").json()

    assert body["statusCode"] == 400
    assert body["errors"] == [{"field": "email", "message": "email must be an email"}]


def test_unique_violation_maps_to_conflict_with_field(boundary_client):
    response = boundary_client.get("/unique")

    assert response.status_code == 409
    assert response.json()["message"] == "A record with this email already exists"


@pytest.mark.parametrize("path", ["/internal", "/foreign-key", "/boom"])
def test_unmapped_failures_are_generic_500(boundary_client, path):
    response = boundary_client.get(path)

    assert response.status_code == 500
    body = response.json()
    assert body["message"] == "Internal server error"
    assert "P1001" not in response.text
    assert "secret detail" not in response.text


def test_request_validation_maps_to_400(boundary_client):
    response = boundary_client.get("/items/not-a-number")

    assert response.status_code == 400
    body = response.json()
    assert body["message"] == "Validation failed"
    assert body["errors"][0]["field"] == "item_id"


def test_unknown_route_uses_envelope(boundary_client):
    response = boundary_client.get("/missing")

    assert response.status_code == 404
    assert response.json()["message"] == "Not Found"
