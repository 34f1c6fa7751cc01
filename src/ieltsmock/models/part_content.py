"""Part content envelope.

Each part stores one JSON document through ``save-part-question-content``::

    {"admin": {...}, "user": {...}}

``admin`` carries the full content including correct answers and is only
read by administrators. ``user`` is the same content with answers removed
and is what students receive. Early records stored the admin content at the
root without an envelope; those are still accepted.
"""

from __future__ import annotations

import re
from typing import Any, Dict, List, Literal, Optional, Union, get_args

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from ieltsmock.core.exceptions import ResponseParseError
from ieltsmock.core.json_utils import normalize_array, safe_multi_parse_json, safe_stringify_json

QuestionType = Literal[
    "MULTIPLE_CHOICE",
    "MULTIPLE_CHOICE_SINGLE",
    "MULTIPLE_QUESTIONS_MULTIPLE_CHOICE",
    "TRUE_FALSE_NOT_GIVEN",
    "YES_NO_NOT_GIVEN",
    "SENTENCE_COMPLETION",
    "SUMMARY_COMPLETION",
    "MATCH_HEADING",
    "SHORT_ANSWER",
    "MULTIPLE_CORRECT_ANSWERS",
    "MATRIX_TABLE",
]

QUESTION_TYPES = frozenset(get_args(QuestionType))

_RANGE_RE = re.compile(r"(\d+)\s*-\s*(\d+)")


class ContentModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="allow",
    )


def _as_options(value: Any) -> Optional[List[str]]:
    if value is None:
        return None
    if isinstance(value, str):
        decoded = safe_multi_parse_json(value)
        if isinstance(decoded, str):
            return [line.strip() for line in decoded.splitlines() if line.strip()]
        value = decoded
    return [str(v) for v in normalize_array(value)]


class AdminQuestion(ContentModel):
    question_number: Optional[int] = None
    text: Optional[str] = None
    options: Optional[List[str]] = None
    correct_answer: Optional[str] = None
    correct_answers: Optional[List[str]] = None

    @field_validator("options", mode="before")
    @classmethod
    def _normalize_options(cls, value: Any) -> Optional[List[str]]:
        return _as_options(value)

    def accepted_answers(self) -> List[str]:
        if self.correct_answers:
            return [a for a in self.correct_answers if a]
        if self.correct_answer:
            # "colour / color" style alternatives
            return [a.strip() for a in self.correct_answer.split("/") if a.strip()]
        return []


class UserQuestion(ContentModel):
    question_number: Optional[int] = None
    text: Optional[str] = None
    options: Optional[List[str]] = None

    @field_validator("options", mode="before")
    @classmethod
    def _normalize_options(cls, value: Any) -> Optional[List[str]]:
        return _as_options(value)


class _GroupBase(ContentModel):
    type: str
    range: Optional[str] = None
    instruction: Optional[str] = None
    heading_options: Optional[str] = None
    image_id: Optional[str] = None
    matrix_options: Optional[List[str]] = None

    @field_validator("questions", mode="before", check_fields=False)
    @classmethod
    def _normalize_questions(cls, value: Any) -> List[Any]:
        return normalize_array(value)

    @property
    def known_type(self) -> bool:
        return self.type in QUESTION_TYPES

    def range_bounds(self) -> Optional[tuple[int, int]]:
        if not self.range:
            return None
        match = _RANGE_RE.search(self.range)
        if not match:
            return None
        return int(match.group(1)), int(match.group(2))


class AdminQuestionGroup(_GroupBase):
    questions: List[AdminQuestion] = Field(default_factory=list)


class UserQuestionGroup(_GroupBase):
    questions: List[UserQuestion] = Field(default_factory=list)


class _PartBase(ContentModel):
    instruction: Optional[str] = None
    passage: Optional[str] = None

    @field_validator("question_groups", mode="before", check_fields=False)
    @classmethod
    def _normalize_groups(cls, value: Any) -> List[Any]:
        return normalize_array(value)


class AdminPartContent(_PartBase):
    image_id: Optional[str] = None
    question_groups: List[AdminQuestionGroup] = Field(default_factory=list)


class UserPartContent(_PartBase):
    image_id: Optional[str] = None
    question_groups: List[UserQuestionGroup] = Field(default_factory=list)


class PartContentEnvelope(ContentModel):
    admin: AdminPartContent = Field(default_factory=AdminPartContent)
    user: UserPartContent = Field(default_factory=UserPartContent)

    def to_content(self) -> str:
        """JSON string as stored by ``save-part-question-content``."""
        return safe_stringify_json(self.model_dump(mode="json", by_alias=True, exclude_none=True))


def strip_answers(admin: AdminPartContent) -> UserPartContent:
    data = admin.model_dump(by_alias=True, exclude_none=True)
    for group in data.get("questionGroups", []):
        for question in group.get("questions", []):
            question.pop("correctAnswer", None)
            question.pop("correctAnswers", None)
    return UserPartContent.model_validate(data)


def build_envelope(admin: Union[AdminPartContent, Dict[str, Any]]) -> PartContentEnvelope:
    if not isinstance(admin, AdminPartContent):
        admin = AdminPartContent.model_validate(admin)
    return PartContentEnvelope(admin=admin, user=strip_answers(admin))


def parse_part_content(raw: Any) -> PartContentEnvelope:
    """Decode stored part content into an envelope.

    Accepts the envelope (whose halves may themselves be JSON strings) and
    legacy records holding admin content at the root. A missing ``user``
    half is derived from ``admin``.
    """
    if raw is None or raw == "":
        return PartContentEnvelope()

    decoded = safe_multi_parse_json(raw)
    if not isinstance(decoded, dict):
        raise ResponseParseError(f"Part content is not a JSON object: {str(raw)[:100]!r}")

    if "admin" in decoded or "user" in decoded:
        admin_raw = safe_multi_parse_json(decoded.get("admin")) or {}
        user_raw = safe_multi_parse_json(decoded.get("user"))
    else:
        admin_raw = decoded
        user_raw = None

    if not isinstance(admin_raw, dict):
        raise ResponseParseError("Part content 'admin' is not a JSON object")

    admin = AdminPartContent.model_validate(admin_raw)
    if isinstance(user_raw, dict):
        user = UserPartContent.model_validate(user_raw)
    else:
        user = strip_answers(admin)
    return PartContentEnvelope(admin=admin, user=user)


def collect_answer_key(admin: AdminPartContent) -> Dict[int, List[str]]:
    """Map question number to accepted answers.

    Questions without an explicit number are numbered sequentially, starting
    at the group's range start when one is given, otherwise after the last
    number seen.
    """
    key: Dict[int, List[str]] = {}
    next_number = 1
    for group in admin.question_groups:
        bounds = group.range_bounds()
        if bounds:
            next_number = bounds[0]
        for question in group.questions:
            number = question.question_number or next_number
            key[number] = question.accepted_answers()
            next_number = number + 1
    return key
