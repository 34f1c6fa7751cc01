from __future__ import annotations

from typing import Optional

from ieltsmock.core.pagination import normalize_page
from ieltsmock.models.api_types import (
    ChangePasswordReqDto,
    GetAllUsersParams,
    ResponseDtoListUserDto,
    ResponseDtoObject,
    SaveStudentReqDto,
)
from ieltsmock.services.base import BaseService

PREFIX = "/users"


class UserManagementService(BaseService):
    def get_all_students(
        self,
        page: int = 0,
        size: int = 100,
        username: Optional[str] = None,
        full_name: Optional[str] = None,
    ) -> ResponseDtoListUserDto:
        params = GetAllUsersParams(page=page, size=size, username=username, full_name=full_name).to_query()
        payload = self.transport.request("GET", f"{PREFIX}/get-all", params=params)
        return self._validate(ResponseDtoListUserDto, normalize_page(payload), f"{PREFIX}/get-all")

    def save_student(self, student: SaveStudentReqDto) -> ResponseDtoObject:
        return self._call(ResponseDtoObject, "POST", f"{PREFIX}/save-student", json=student.to_wire())

    def change_password(self, id: str, password: str) -> ResponseDtoObject:
        body = ChangePasswordReqDto(id=id, password=password).to_wire()
        return self._call(ResponseDtoObject, "PUT", f"{PREFIX}/change-password", json=body)
