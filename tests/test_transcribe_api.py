import json
import os

import pytest
from fastapi.testclient import TestClient

from dependencies import get_config
from exceptions import TranscriptionError
from main import app

WAV = b"RIFF\x24\x00\x00\x00WAVEfmt " + b"\x00" * 64


def _post(client, filename="clip.wav", content=WAV, content_type="audio/wav", field="audio"):
    return client.post("/transcribe", files={field: (filename, content, content_type)})


def _entries(path):
    return os.listdir(path) if os.path.exists(path) else []


def test_transcribe_returns_yes(client, transcription_service):
    response = _post(client)

    assert response.status_code == 200
    assert response.json() == {"success": True, "command": "YES"}
    assert len(transcription_service.calls) == 1


def test_transcribe_returns_no(client, transcription_service):
    transcription_service.result = transcription_service.result.model_copy(
        update={"text": "Nothing to report."}
    )

    response = _post(client)

    assert response.json() == {"success": True, "command": "NO"}


def test_missing_audio_field_is_rejected_without_transcribing(client, transcription_service, logs_dir):
    response = _post(client, field="file")

    assert response.status_code == 400
    body = response.json()
    assert body["success"] is False
    assert "No audio file provided" in body["error"]
    assert transcription_service.calls == []
    assert not os.path.exists(logs_dir)


def test_request_without_body_is_rejected(client, transcription_service):
    response = client.post("/transcribe")

    assert response.status_code == 400
    assert transcription_service.calls == []


@pytest.mark.parametrize(
    "filename, content_type, accepted",
    [
        ("clip.wav", "audio/wav", True),
        ("clip.WAV", "application/octet-stream", True),
        ("clip.bin", "audio/wav", True),
        ("clip.mp3", "audio/mpeg", False),
        ("notes.txt", "text/plain", False),
    ],
)
def test_type_check_accepts_mime_or_extension(
    client, transcription_service, filename, content_type, accepted
):
    response = _post(client, filename=filename, content_type=content_type)

    if accepted:
        assert response.status_code == 200
        assert len(transcription_service.calls) == 1
    else:
        assert response.status_code == 400
        assert response.json()["error"] == "Invalid file type. Only .wav files are allowed."
        assert transcription_service.calls == []


def test_oversized_upload_is_rejected(client, transcription_service, logs_dir, uploads_dir):
    response = _post(client, content=b"\x00" * (30 * 1024 * 1024))

    assert response.status_code == 400
    body = response.json()
    assert body["success"] is False
    assert body["error"] == "File too large"
    assert "25MB" in body["message"]
    assert transcription_service.calls == []
    assert not os.path.exists(logs_dir)
    assert _entries(uploads_dir) == []


def test_success_adds_one_folder_and_one_log_entry(client, logs_dir, uploads_dir):
    _post(client)
    log_path = os.path.join(logs_dir, "all_transcriptions.json")
    folders_before = len(_entries(logs_dir))
    with open(log_path) as f:
        records_before = len(json.load(f))

    response = _post(client)

    assert response.status_code == 200
    assert len(_entries(logs_dir)) == folders_before + 1
    with open(log_path) as f:
        assert len(json.load(f)) == records_before + 1
    assert _entries(uploads_dir) == []


def test_transcription_failure_returns_error_command(client, transcription_service, logs_dir, uploads_dir):
    transcription_service.error = TranscriptionError("clip.wav", Exception("unsupported audio"))

    response = _post(client)

    assert response.status_code == 200
    assert response.json() == {"success": False, "command": "ERROR"}
    folders = _entries(logs_dir)
    assert len(folders) == 1 and folders[0].startswith("error_")
    files = os.listdir(os.path.join(logs_dir, folders[0]))
    assert len(files) == 1 and files[0].endswith(".wav")
    assert not any(name.endswith(".json") for name in files)
    assert _entries(uploads_dir) == []


def test_unexpected_error_is_500(client, transcription_service, uploads_dir):
    transcription_service.error = RuntimeError("disk on fire")
    failing_client = TestClient(app, raise_server_exceptions=False)

    response = failing_client.post(
        "/transcribe", files={"audio": ("clip.wav", WAV, "audio/wav")}
    )

    assert response.status_code == 500
    assert response.json()["error"] == "Server error"
    assert _entries(uploads_dir) == []


def test_decision_is_published_when_enabled(client, app_config, publisher):
    enabled = app_config.model_copy(
        update={"rabbitmq": app_config.rabbitmq.model_copy(update={"publish_decisions": True})}
    )
    app.dependency_overrides[get_config] = lambda: enabled

    response = _post(client)

    assert response.status_code == 200
    assert publisher.published == [("command", "YES")]


def test_decision_is_not_published_by_default(client, publisher):
    _post(client)

    assert publisher.published == []


def test_health_reports_broker_state(client, publisher):
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json() == {
        "status": "OK",
        "message": "Transcription server is running",
        "mqttConnected": False,
    }

    publisher.connect()
    assert client.get("/health").json()["mqttConnected"] is True


def test_keywords_can_be_replaced_at_runtime(client, transcription_service):
    assert client.get("/keywords").json() == {
        "phrases": ["help", "help utopia", "help eutopia"]
    }

    response = client.put("/keywords", json={"phrases": ["open sesame"]})
    assert response.status_code == 200
    assert response.json() == {"phrases": ["open sesame"]}

    transcription_service.result = transcription_service.result.model_copy(
        update={"text": "Open Sesame please"}
    )
    assert _post(client).json()["command"] == "YES"


def test_keywords_rejects_empty_list(client):
    response = client.put("/keywords", json={"phrases": []})

    assert response.status_code == 400
