import pytest
from pydantic import ValidationError

from ieltsmock.services.files import FileService
from ieltsmock.services.listening_audio import ListeningAudioService


@pytest.fixture
def service(transport):
    return ListeningAudioService(transport)


def test_get_all_listening_audio_sorted_by_ord(service, http_client, make_response):
    http_client.request.return_value = make_response(
        {
            "success": True,
            "data": [
                {"id": "a3", "fileId": "f3", "name": "no-ord.mp3"},
                {"id": "a2", "fileId": "f2", "name": "part2.mp3", "ord": 2},
                {"id": "a1", "fileId": "f1", "name": "part1.mp3", "ord": 1},
            ],
        }
    )

    resp = service.get_all_listening_audio("t1")

    assert [a.id for a in resp.data] == ["a1", "a2", "a3"]
    http_client.request.assert_called_once_with(
        "GET", "/test-management/get-all-listening-audio", params={"testId": "t1"}
    )


def test_save_reorder_and_delete(service, http_client, make_response):
    http_client.request.return_value = make_response({"success": True})

    service.save_listening_audio("t1", "f1")
    service.change_listening_audio_order(["a2", "a1"])
    service.delete_listening_audio("a1")

    calls = http_client.request.call_args_list
    assert calls[0].args == ("POST", "/test-management/save-listening-audio")
    assert calls[0].kwargs["json"] == {"testId": "t1", "fileId": "f1"}
    assert calls[1].args == ("PUT", "/test-management/change-listening-audio-ord")
    assert calls[1].kwargs["json"] == {"ids": ["a2", "a1"]}
    assert calls[2].args == ("DELETE", "/test-management/delete-listening-audio/a1")


def test_reorder_rejects_empty_list_before_calling_api(service, http_client):
    with pytest.raises(ValidationError):
        service.change_listening_audio_order([])

    http_client.request.assert_not_called()


def test_upload_file_from_path(transport, http_client, make_response, tmp_path):
    audio = tmp_path / "section1.mp3"
    audio.write_bytes(b"ID3")
    http_client.request.return_value = make_response(
        {"success": True, "data": {"id": "f1", "name": "section1.mp3", "contentType": "audio/mpeg", "size": 3}}
    )

    resp = FileService(transport).upload_file(audio)

    http_client.request.assert_called_once_with(
        "POST", "/file/upload", files={"file": ("section1.mp3", b"ID3", "audio/mpeg")}
    )
    assert resp.data.id == "f1"
    assert resp.data.size == 3


def test_upload_raw_bytes_requires_filename(transport):
    with pytest.raises(ValueError):
        FileService(transport).upload_file(b"data")


def test_file_urls_and_download(transport, http_client, make_response):
    files = FileService(transport)

    assert files.download_url("f1") == "https://example.test/ielts-mock-main/file/download/f1"
    assert files.file_url(None) is None
    assert files.file_url("") is None

    http_client.request.return_value = make_response(content=b"PNG")
    assert files.download("f1") == b"PNG"
    http_client.request.assert_called_once_with("GET", "/file/download/f1")
