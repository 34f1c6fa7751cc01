import base64
import json

import pytest

from ieltsmock.core.auth_parsing import (
    AuthUser,
    decode_jwt_claims,
    normalize_role,
    parse_auth_response,
    parse_me_response,
)
from ieltsmock.core.exceptions import ResponseParseError, TokenNotFoundError, TokenParseError


def make_jwt(claims):
    segment = base64.urlsafe_b64encode(json.dumps(claims).encode()).decode().rstrip("=")
    return f"eyJhbGciOiJIUzI1NiJ9.{segment}.signature"


def test_token_in_data_with_user_from_jwt_claims():
    token = make_jwt({"sub": "amy", "userId": "u-1", "firstName": "Amy", "authorities": ["ADMIN"]})

    session = parse_auth_response({"success": True, "data": token})

    assert session.token == token
    assert session.user.id == "amy"
    assert session.user.username == "amy"
    assert session.user.first_name == "Amy"
    assert session.user.role == "ADMIN"


def test_bare_string_token():
    token = make_jwt({"id": "u-2", "username": "bob"})

    session = parse_auth_response(token)

    assert session.user.id == "u-2"
    assert session.user.username == "bob"
    assert session.user.role == "USER"


def test_nested_token_and_user():
    payload = {
        "success": True,
        "data": {
            "token": "opaque",
            "user": {"id": "u-3", "firstName": "Cy", "lastName": "Lee", "username": "cy", "role": "admin"},
        },
    }

    session = parse_auth_response(payload)

    assert session.token == "opaque"
    assert session.user == AuthUser(id="u-3", first_name="Cy", last_name="Lee", username="cy", role="ADMIN")


def test_root_level_user_fields():
    session = parse_auth_response({"token": "opaque", "id": "u-4", "username": "dee"})

    assert session.user.id == "u-4"
    assert session.user.role == "USER"


def test_missing_token_raises():
    with pytest.raises(TokenNotFoundError):
        parse_auth_response({"success": False, "reason": "Bad credentials"})


def test_opaque_token_without_user_keeps_empty_user():
    session = parse_auth_response({"token": "not-a-jwt"})

    assert session.token == "not-a-jwt"
    assert session.user.id == ""


def test_decode_jwt_rejects_garbage():
    with pytest.raises(TokenParseError):
        decode_jwt_claims("abc")
    with pytest.raises(TokenParseError):
        decode_jwt_claims("a.!!!!.c")


def test_normalize_role():
    assert normalize_role("admin") == "ADMIN"
    assert normalize_role(None, ["USER", "ADMIN"]) == "ADMIN"
    assert normalize_role("teacher") == "USER"
    assert normalize_role("ROLE_ADMIN") == "USER"
    assert normalize_role(None, ["ROLE_ADMIN"]) == "USER"
    assert normalize_role() == "USER"


def test_parse_me_response_user_me_shape():
    user = parse_me_response(
        {"success": True, "data": {"id": "u-1", "fullName": "Amy Pond", "username": "amy", "roles": ["ADMIN"]}}
    )

    assert user.first_name == "Amy"
    assert user.last_name == "Pond"
    assert user.full_name == "Amy Pond"
    assert user.is_admin


def test_parse_me_response_rejects_unknown_shape():
    with pytest.raises(ResponseParseError):
        parse_me_response({"success": True})


def test_auth_user_dict_round_trip():
    user = AuthUser(id="u", first_name="A", last_name="B", username="ab", role="ADMIN")

    assert AuthUser.from_dict(user.to_dict()) == user


def test_prefixed_authority_is_not_admin():
    token = make_jwt({"sub": "amy", "authorities": ["ROLE_ADMIN"]})

    session = parse_auth_response({"success": True, "data": token})

    assert session.user.role == "USER"
    assert not session.user.is_admin
