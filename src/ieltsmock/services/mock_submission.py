"""Student test taking (``/mock-submission``).

A mock is one attempt at a test. The usual flow is ``start_mock`` ->
``start_section`` -> ``send_answer`` per question -> ``finish_section``,
repeated per section.
"""

from __future__ import annotations

from typing import Optional

from ieltsmock.models.api_types import (
    FinishSectionReqDto,
    GetAllSectionsParams,
    GetSubmittedAnswersParams,
    PaginationParams,
    ResponseDtoListListeningAudioDto,
    ResponseDtoListMockDto,
    ResponseDtoListMockQuestionAnswerDto,
    ResponseDtoListPartDto,
    ResponseDtoListSectionDto,
    ResponseDtoListTestDto,
    ResponseDtoObject,
    ResponseDtoPartQuestionContentDto,
    ResponseDtoUUID,
    SendAnswerReqDto,
    StartMockReqDto,
    StartSectionReqDto,
)
from ieltsmock.services.base import BaseService
from ieltsmock.services.listening_audio import sort_by_ord

PREFIX = "/mock-submission"


class MockSubmissionService(BaseService):
    def start_mock(self, test_id: Optional[str] = None) -> ResponseDtoUUID:
        """Start a new mock. ``data`` holds the mock id."""
        body = StartMockReqDto(test_id=test_id).to_wire()
        return self._call(ResponseDtoUUID, "POST", f"{PREFIX}/start-mock", json=body)

    def start_section(self, mock_id: str, section_id: str) -> ResponseDtoObject:
        body = StartSectionReqDto(mock_id=mock_id, section_id=section_id).to_wire()
        return self._call(ResponseDtoObject, "POST", f"{PREFIX}/start-section", json=body)

    def send_answer(self, mock_id: str, section_id: str, question_ord: int, answer: str) -> ResponseDtoObject:
        body = SendAnswerReqDto(
            mock_id=mock_id,
            section_id=section_id,
            question_ord=question_ord,
            answer=answer,
        ).to_wire()
        return self._call(ResponseDtoObject, "POST", f"{PREFIX}/send-answer", json=body)

    def finish_section(self, mock_id: str, section_id: str) -> ResponseDtoObject:
        body = FinishSectionReqDto(mock_id=mock_id, section_id=section_id).to_wire()
        return self._call(ResponseDtoObject, "POST", f"{PREFIX}/finish-section", json=body)

    def get_all_tests(self, page: int = 0, size: int = 10) -> ResponseDtoListTestDto:
        """Active tests available for taking."""
        params = PaginationParams(page=page, size=size).to_query()
        return self._call(ResponseDtoListTestDto, "GET", f"{PREFIX}/get-all-test", params=params)

    def get_all_sections(self, test_id: str, mock_id: Optional[str] = None) -> ResponseDtoListSectionDto:
        """Sections of a test; passing ``mock_id`` includes per-mock section status."""
        params = GetAllSectionsParams(test_id=test_id, mock_id=mock_id).to_query()
        return self._call(ResponseDtoListSectionDto, "GET", f"{PREFIX}/get-all-section", params=params)

    def get_all_parts(self, section_id: str) -> ResponseDtoListPartDto:
        return self._call(
            ResponseDtoListPartDto, "GET", f"{PREFIX}/get-all-part", params={"sectionId": section_id}
        )

    def get_part_question_content(self, part_id: str) -> ResponseDtoPartQuestionContentDto:
        return self._call(
            ResponseDtoPartQuestionContentDto,
            "GET",
            f"{PREFIX}/get-part-question-content",
            params={"partId": part_id},
        )

    def get_all_listening_audio(self, test_id: str) -> ResponseDtoListListeningAudioDto:
        resp = self._call(
            ResponseDtoListListeningAudioDto,
            "GET",
            f"{PREFIX}/get-all-listening-audio",
            params={"testId": test_id},
        )
        if resp.data:
            resp.data = sort_by_ord(resp.data)
        return resp

    def get_submitted_answers(self, mock_id: str, section_id: str) -> ResponseDtoListMockQuestionAnswerDto:
        params = GetSubmittedAnswersParams(mock_id=mock_id, section_id=section_id).to_query()
        return self._call(
            ResponseDtoListMockQuestionAnswerDto,
            "GET",
            f"{PREFIX}/get-all-question-submitted-answers",
            params=params,
        )

    def get_all_mocks(self, page: int = 0, size: int = 10) -> ResponseDtoListMockDto:
        """Mocks of the signed-in user."""
        params = PaginationParams(page=page, size=size).to_query()
        return self._call(ResponseDtoListMockDto, "GET", f"{PREFIX}/get-all-mock", params=params)
