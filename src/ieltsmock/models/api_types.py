# API Response and Request Types
# Based on OpenAPI 3.1.0 specification from https://mock.fleetoneld.com/ielts-mock-main/swagger-ui/index.html

from __future__ import annotations

from datetime import datetime
from typing import Annotated, Any, Dict, Generic, List, Literal, Optional, TypeVar

from pydantic import (
    BaseModel,
    BeforeValidator,
    ConfigDict,
    Field,
    NonNegativeInt,
    PositiveInt,
)
from pydantic.alias_generators import to_camel

from ieltsmock.core.dates import parse_api_datetime

T = TypeVar("T")

ActiveFlag = Literal[0, 1]
SectionType = Literal["LISTENING", "READING", "WRITING", "SPEAKING"]
ApiDateTime = Annotated[Optional[datetime], BeforeValidator(parse_api_datetime)]


def _count_or_zero(value: Any) -> Any:
    # Spring serializes unset Integer counts as null
    return 0 if value is None else value


ApiCount = Annotated[int, BeforeValidator(_count_or_zero)]


class ApiModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )

    def to_wire(self) -> Dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


# -----------------
# Generic response types
# -----------------


class ResponseDto(ApiModel, Generic[T]):
    success: bool = False
    reason: Optional[str] = None
    count: ApiCount = 0
    total_count: ApiCount = 0
    data: Optional[T] = None


ResponseDtoObject = ResponseDto[Any]
ResponseDtoUUID = ResponseDto[str]
ResponseDtoString = ResponseDto[str]


# -----------------
# Test management
# -----------------


class TestDto(ApiModel):
    __test__ = False  # not a pytest class

    id: str
    name: str
    is_active: ActiveFlag = 0
    created_date: ApiDateTime = None
    updated_date: ApiDateTime = None

    @property
    def active(self) -> bool:
        return self.is_active == 1


class SectionDto(ApiModel):
    id: str
    section_type: SectionType
    is_active: ActiveFlag = 0
    updated_date: ApiDateTime = None

    @property
    def active(self) -> bool:
        return self.is_active == 1


class PartDto(ApiModel):
    id: str
    ord: int
    question_count: int = 0


class QuestionDto(ApiModel):
    id: str
    part_id: str
    part_ord: int = 0
    answers: List[str] = Field(default_factory=list)
    ord: int


class PartQuestionContentDto(ApiModel):
    # JSON encoded part content, see ieltsmock.models.part_content
    content: Optional[str] = None


class ListeningAudioDto(ApiModel):
    id: str
    file_id: str
    name: str = ""
    content_type: str = ""
    size: int = 0
    ord: Optional[int] = None


# -----------------
# Mock submission (student test taking)
# -----------------


class MockDto(ApiModel):
    id: str
    test_id: str
    is_finished: ActiveFlag = 0
    status: str = ""
    start_date: ApiDateTime = None
    sections: List[SectionDto] = Field(default_factory=list)

    @property
    def finished(self) -> bool:
        return self.is_finished == 1


class MockQuestionAnswerDto(ApiModel):
    question_ord: int
    answer: str = ""


# -----------------
# Mock results
# -----------------


class SectionResult(ApiModel):
    section_type: str
    status: str = ""
    correct_answers: Optional[int] = None
    score: Optional[float] = None


class MockResultDto(ApiModel):
    id: str
    test_id: str = ""
    test_name: Optional[str] = None
    user_id: str = ""
    user_name: Optional[str] = None
    user_first_name: Optional[str] = None
    user_last_name: Optional[str] = None
    start_date: ApiDateTime = None
    started_date: ApiDateTime = None
    finished_date: ApiDateTime = None
    status: str = ""
    sections: List[SectionResult] = Field(default_factory=list)
    listening_score: Optional[float] = None
    reading_score: Optional[float] = None
    writing_score: Optional[float] = None
    total_score: Optional[float] = None

    @property
    def student_name(self) -> str:
        full = " ".join(p for p in (self.user_first_name, self.user_last_name) if p)
        return full or self.user_name or ""


# -----------------
# Users
# -----------------


class UserDto(ApiModel):
    id: str
    first_name: str = ""
    last_name: str = ""
    username: str
    roles: List[str] = Field(default_factory=list)
    created_date: ApiDateTime = None
    updated_date: ApiDateTime = None


class UserMeDto(ApiModel):
    id: str
    full_name: str = ""
    username: str
    roles: List[str] = Field(default_factory=list)


# -----------------
# Files
# -----------------


class FileDto(ApiModel):
    id: str
    name: str = ""
    content_type: str = ""
    size: int = 0


# -----------------
# Authentication
# -----------------


class TokenDto(ApiModel):
    token: str


class SignUpDto(ApiModel):
    first_name: str = Field(min_length=1)
    last_name: str = Field(min_length=1)
    username: str = Field(min_length=1)
    password: str = Field(min_length=1)


class SignInDto(ApiModel):
    username: str = Field(min_length=1)
    password: str = Field(min_length=1)


# -----------------
# Request DTOs
# -----------------


class SaveTestReqDto(ApiModel):
    name: str = Field(min_length=1)


class UpdateActiveReqDto(ApiModel):
    id: str
    is_active: ActiveFlag


class SaveQuestionReqDto(ApiModel):
    section_id: str
    part_id: str
    ord: Optional[int] = None
    answers: List[str] = Field(default_factory=list)


class AddQuestionReqDto(ApiModel):
    section_id: str
    part_id: str
    ord: int
    answers: List[str] = Field(default_factory=list)


class UpdateQuestionReqDto(ApiModel):
    id: str
    part_id: str
    answers: List[str] = Field(default_factory=list)


class SavePartQuestionContentReqDto(ApiModel):
    part_id: str
    content: str


class SaveListeningAudioReqDto(ApiModel):
    test_id: str
    file_id: str


class ChangeListeningAudioOrdReqDto(ApiModel):
    ids: List[str] = Field(min_length=1)


class StartMockReqDto(ApiModel):
    test_id: Optional[str] = None


class StartSectionReqDto(ApiModel):
    mock_id: str
    section_id: str


class SendAnswerReqDto(ApiModel):
    mock_id: str
    section_id: str
    question_ord: int
    answer: str


class FinishSectionReqDto(ApiModel):
    mock_id: str
    section_id: str


class GradeWritingReqDto(ApiModel):
    mock_id: str
    section_id: str
    writing_part_one_score: float = Field(ge=0, le=9)
    writing_part_two_score: float = Field(ge=0, le=9)


class SaveStudentReqDto(ApiModel):
    first_name: str = Field(min_length=1)
    last_name: str = Field(min_length=1)
    username: str = Field(min_length=1)
    password: str = Field(min_length=1)


class ChangePasswordReqDto(ApiModel):
    id: str
    password: str = Field(min_length=1)


# -----------------
# Response aliases
# -----------------

ResponseDtoTestDto = ResponseDto[TestDto]
ResponseDtoListTestDto = ResponseDto[List[TestDto]]

ResponseDtoSectionDto = ResponseDto[SectionDto]
ResponseDtoListSectionDto = ResponseDto[List[SectionDto]]

ResponseDtoPartDto = ResponseDto[PartDto]
ResponseDtoListPartDto = ResponseDto[List[PartDto]]

ResponseDtoQuestionDto = ResponseDto[QuestionDto]
ResponseDtoListQuestionDto = ResponseDto[List[QuestionDto]]

ResponseDtoPartQuestionContentDto = ResponseDto[PartQuestionContentDto]

ResponseDtoListeningAudioDto = ResponseDto[ListeningAudioDto]
ResponseDtoListListeningAudioDto = ResponseDto[List[ListeningAudioDto]]

ResponseDtoMockDto = ResponseDto[MockDto]
ResponseDtoListMockDto = ResponseDto[List[MockDto]]

ResponseDtoMockQuestionAnswerDto = ResponseDto[MockQuestionAnswerDto]
ResponseDtoListMockQuestionAnswerDto = ResponseDto[List[MockQuestionAnswerDto]]

ResponseDtoListMockResultDto = ResponseDto[List[MockResultDto]]

ResponseDtoUserDto = ResponseDto[UserDto]
ResponseDtoListUserDto = ResponseDto[List[UserDto]]

ResponseDtoUserMeDto = ResponseDto[UserMeDto]

ResponseDtoFileDto = ResponseDto[FileDto]

ResponseDtoTokenDto = ResponseDto[TokenDto]


# -----------------
# Pagination and query parameters
# -----------------


class QueryParams(ApiModel):
    def to_query(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True)


class PaginationParams(QueryParams):
    page: NonNegativeInt = 0  # 0-indexed
    size: PositiveInt = 10


class GetAllUsersParams(PaginationParams):
    size: PositiveInt = 100
    username: Optional[str] = None
    full_name: Optional[str] = None


class GetAllQuestionsParams(QueryParams):
    section_id: str
    part_id: Optional[str] = None


class GetSubmittedAnswersParams(QueryParams):
    mock_id: str
    section_id: str


class GetAllSectionsParams(QueryParams):
    test_id: str
    mock_id: Optional[str] = None
