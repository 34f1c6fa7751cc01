from __future__ import annotations

from ieltsmock.core.pagination import normalize_page
from ieltsmock.models.api_types import (
    GradeWritingReqDto,
    PaginationParams,
    ResponseDtoListMockResultDto,
    ResponseDtoString,
)
from ieltsmock.services.base import BaseService

PREFIX = "/mock-result"


class MockResultService(BaseService):
    def grade_writing(
        self,
        mock_id: str,
        section_id: str,
        writing_part_one_score: float,
        writing_part_two_score: float,
    ) -> ResponseDtoString:
        """Record the examiner's band scores (0-9) for both writing tasks."""
        body = GradeWritingReqDto(
            mock_id=mock_id,
            section_id=section_id,
            writing_part_one_score=writing_part_one_score,
            writing_part_two_score=writing_part_two_score,
        ).to_wire()
        return self._call(ResponseDtoString, "POST", f"{PREFIX}/grade-writing", json=body)

    def get_all_mock_results(self, page: int = 0, size: int = 20) -> ResponseDtoListMockResultDto:
        params = PaginationParams(page=page, size=size).to_query()
        payload = self.transport.request("GET", f"{PREFIX}/get-all-mock", params=params)
        return self._validate(ResponseDtoListMockResultDto, normalize_page(payload), f"{PREFIX}/get-all-mock")
