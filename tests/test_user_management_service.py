import pytest

from ieltsmock.core.exceptions import UnsuccessfulResponseError
from ieltsmock.models.api_types import SaveStudentReqDto
from ieltsmock.services.users import UserManagementService

USER = {
    "id": "u1",
    "firstName": "Amy",
    "lastName": "Pond",
    "username": "amy",
    "roles": ["USER"],
    "createdDate": "01.09.2025 08:00:00",
}


@pytest.fixture
def service(transport):
    return UserManagementService(transport)


def test_get_all_students_with_filters(service, http_client, make_response):
    http_client.request.return_value = make_response({"success": True, "data": [USER], "totalCount": 1})

    resp = service.get_all_students(username="amy", full_name="Amy Pond")

    http_client.request.assert_called_once_with(
        "GET",
        "/users/get-all",
        params={"page": 0, "size": 100, "username": "amy", "fullName": "Amy Pond"},
    )
    assert resp.data[0].first_name == "Amy"


def test_get_all_students_failure_envelope_raises(service, http_client, make_response):
    http_client.request.return_value = make_response({"success": False, "reason": "Access denied"})

    with pytest.raises(UnsuccessfulResponseError):
        service.get_all_students()


def test_save_student_accepts_bare_user_payload(service, http_client, make_response):
    http_client.request.return_value = make_response(USER)

    resp = service.save_student(
        SaveStudentReqDto(first_name="Amy", last_name="Pond", username="amy", password="secret")
    )

    assert http_client.request.call_args.kwargs["json"] == {
        "firstName": "Amy",
        "lastName": "Pond",
        "username": "amy",
        "password": "secret",
    }
    assert resp.success is True
    assert resp.data["username"] == "amy"


def test_change_password(service, http_client, make_response):
    http_client.request.return_value = make_response({"success": True})

    service.change_password("u1", "n3w")

    http_client.request.assert_called_once_with(
        "PUT", "/users/change-password", json={"id": "u1", "password": "n3w"}
    )
