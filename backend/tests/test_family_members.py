"""Owner-scoped family member endpoints."""

import uuid

import pytest

from eps_family.core.security import TokenClaims, create_access_token, hash_password

MEMBER = {
    "fullName": "John Doe",
    "documentType": "CC",
    "documentNumber": "123456789",
    "birthDate": "1990-01-15",
    "address": "Calle 123",
    "phone": "1234567",
    "cellphone": "3001234567",
    "email": "john@correo.co",
    "department": "Antioquia",
    "city": "Medellín",
    "regime": "Contributivo",
    "relationship": "Hijo",
}


def _auth_headers(user):
    token = create_access_token(TokenClaims(subject=str(user.id), email=user.email))
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def owner(user_store):
    return user_store.add(email="owner@x.com", password_hash=hash_password("pw123456"), full_name="Owner")


@pytest.fixture
def stranger(user_store):
    return user_store.add(email="other@x.com", password_hash=hash_password("pw123456"), full_name="Other")


@pytest.fixture
def sura(provider_store):
    return provider_store.add(name="EPS Sura", code="EPS010")


def _create(client, user, **overrides):
    response = client.post("/api/family-members", json={**MEMBER, **overrides}, headers=_auth_headers(user))
    assert response.status_code == 201, response.text
    return response.json()


def test_requires_authentication(client, member_store):
    response = client.get("/api/family-members")

    assert response.status_code == 401


def test_create_embeds_eps_provider(client, member_store, owner, sura):
    body = _create(client, owner, epsProviderId=str(sura.id))

    assert body["fullName"] == "John Doe"
    assert body["userId"] == str(owner.id)
    assert body["birthDate"] == "1990-01-15"
    assert body["documentType"] == "CC"
    assert body["epsProvider"] == {"id": str(sura.id), "name": "EPS Sura", "code": "EPS010"}


def test_create_validates_payload(client, member_store, owner):
    response = client.post(
        "/api/family-members",
        json={"fullName": "J", "documentType": "XX", "email": "nope"},
        headers=_auth_headers(owner),
    )

    assert response.status_code == 400
    fields = {error["field"] for error in response.json()["errors"]}
    assert {"fullName", "documentType", "email", "relationship"} <= fields


def test_list_only_returns_callers_members_sorted(client, member_store, owner, stranger):
    _create(client, owner, fullName="Zoe Doe")
    _create(client, owner, fullName="Ana Doe")
    _create(client, stranger, fullName="Mallory")

    response = client.get("/api/family-members", headers=_auth_headers(owner))

    assert response.status_code == 200
    assert [m["fullName"] for m in response.json()] == ["Ana Doe", "Zoe Doe"]


def test_other_users_member_is_not_found(client, member_store, owner, stranger):
    member = _create(client, owner)
    headers = _auth_headers(stranger)
    path = f"/api/family-members/{member['id']}"

    for response in (
        client.get(path, headers=headers),
        client.put(path, json={"city": "Cali"}, headers=headers),
        client.delete(path, headers=headers),
    ):
        assert response.status_code == 404
        assert response.json()["message"] == "Family member not found"

    assert uuid.UUID(member["id"]) in member_store.members


def test_update_changes_only_supplied_fields(client, member_store, owner):
    member = _create(client, owner)

    response = client.put(
        f"/api/family-members/{member['id']}",
        json={"city": "Cali"},
        headers=_auth_headers(owner),
    )

    assert response.status_code == 200
    body = response.json()
    assert body["city"] == "Cali"
    assert body["department"] == "Antioquia"
    assert body["fullName"] == "John Doe"


def test_delete_removes_member(client, member_store, owner):
    member = _create(client, owner)
    path = f"/api/family-members/{member['id']}"

    response = client.delete(path, headers=_auth_headers(owner))

    assert response.status_code == 200
    assert response.json() == {"message": "Family member deleted successfully"}
    assert client.get(path, headers=_auth_headers(owner)).status_code == 404


def test_non_uuid_id_is_a_validation_error(client, member_store, owner):
    response = client.get("/api/family-members/not-a-uuid", headers=_auth_headers(owner))

    assert response.status_code == 400


def test_update_rejects_null_for_required_fields(client, member_store, owner):
    member = _create(client, owner)
    path = f"/api/family-members/{member['id']}"

    response = client.put(
        path,
        json={"fullName": None, "relationship": None, "city": None},
        headers=_auth_headers(owner),
    )

    assert response.status_code == 400
    body = response.json()
    assert body["message"] == "Validation failed"
    assert {error["field"] for error in body["errors"]} == {"fullName", "relationship"}
    unchanged = client.get(path, headers=_auth_headers(owner)).json()
    assert unchanged["fullName"] == "John Doe"
    assert unchanged["city"] == "Medellín"


def test_update_clears_optional_field_with_null(client, member_store, owner):
    member = _create(client, owner)

    response = client.put(
        f"/api/family-members/{member['id']}",
        json={"city": None},
        headers=_auth_headers(owner),
    )

    assert response.status_code == 200
    assert response.json()["city"] is None
    assert response.json()["relationship"] == "Hijo"
