from __future__ import annotations

from typing import List

from ieltsmock.models.api_types import (
    ChangeListeningAudioOrdReqDto,
    ListeningAudioDto,
    ResponseDtoListListeningAudioDto,
    ResponseDtoObject,
    SaveListeningAudioReqDto,
)
from ieltsmock.services.base import BaseService

PREFIX = "/test-management"


def sort_by_ord(audio: List[ListeningAudioDto]) -> List[ListeningAudioDto]:
    """Playback order: by ``ord``, entries without one last, ties kept in API order."""
    return sorted(audio, key=lambda a: (a.ord is None, a.ord or 0))


class ListeningAudioService(BaseService):
    def save_listening_audio(self, test_id: str, file_id: str) -> ResponseDtoObject:
        body = SaveListeningAudioReqDto(test_id=test_id, file_id=file_id).to_wire()
        return self._call(ResponseDtoObject, "POST", f"{PREFIX}/save-listening-audio", json=body)

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

    def change_listening_audio_order(self, ids: List[str]) -> ResponseDtoObject:
        body = ChangeListeningAudioOrdReqDto(ids=ids).to_wire()
        return self._call(ResponseDtoObject, "PUT", f"{PREFIX}/change-listening-audio-ord", json=body)

    def delete_listening_audio(self, id: str) -> ResponseDtoObject:
        return self._call(ResponseDtoObject, "DELETE", f"{PREFIX}/delete-listening-audio/{id}")
