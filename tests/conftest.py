import os

os.environ.setdefault("ASSEMBLYAI_API_KEY", "test-api-key")
os.environ.setdefault("DD_TRACE_ENABLED", "false")
os.environ["RABBITMQ_HOST"] = ""

import pytest
from fastapi.testclient import TestClient

from config import DirectoriesConfig, load_config
from dependencies import get_command_analyzer, get_config, get_handler, get_publisher
from domain import CommandAnalyzer, TranscriptResult, UploadedAudio
from handlers import AudioUploadHandler
from infrastructure import LocalFileStorage
from infrastructure.interfaces import EventPublisher, TranscriptionService
from main import app


class SpyTranscriptionService(TranscriptionService):
    """Records every call and answers with a canned result or error."""

    def __init__(self, text: str = "Please HELP me"):
        self.calls: list[str] = []
        self.result = TranscriptResult(
            text=text,
            confidence=0.93,
            language_code="en_us",
            audio_duration=2.5,
            transcript_id="tx-123",
            status="completed",
        )
        self.error: Exception | None = None

    def transcribe(self, file_path: str) -> TranscriptResult:
        self.calls.append(file_path)
        if self.error is not None:
            raise self.error
        return self.result


class FakePublisher(EventPublisher):
    def __init__(self):
        self.connected = False
        self.published: list[tuple[str, str]] = []

    @property
    def is_connected(self) -> bool:
        return self.connected

    def connect(self) -> None:
        self.connected = True

    def disconnect(self) -> None:
        self.connected = False

    def publish(self, topic: str, message: str) -> bool:
        self.published.append((topic, message))
        return True


@pytest.fixture
def logs_dir(tmp_path) -> str:
    return str(tmp_path / "transcription_logs")


@pytest.fixture
def uploads_dir(tmp_path) -> str:
    return str(tmp_path / "uploads")


@pytest.fixture
def transcription_service() -> SpyTranscriptionService:
    return SpyTranscriptionService()


@pytest.fixture
def command_analyzer() -> CommandAnalyzer:
    return CommandAnalyzer(["help", "help utopia", "help eutopia"])


@pytest.fixture
def storage() -> LocalFileStorage:
    return LocalFileStorage()


@pytest.fixture
def handler(storage, transcription_service, command_analyzer, logs_dir) -> AudioUploadHandler:
    return AudioUploadHandler(storage, transcription_service, command_analyzer, logs_dir)


@pytest.fixture
def publisher() -> FakePublisher:
    return FakePublisher()


@pytest.fixture
def app_config(logs_dir, uploads_dir):
    return load_config().model_copy(
        update={"directories": DirectoriesConfig(uploads=uploads_dir, logs=logs_dir)}
    )


@pytest.fixture
def client(app_config, handler, command_analyzer, publisher):
    app.dependency_overrides[get_config] = lambda: app_config
    app.dependency_overrides[get_handler] = lambda: handler
    app.dependency_overrides[get_command_analyzer] = lambda: command_analyzer
    app.dependency_overrides[get_publisher] = lambda: publisher
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def make_upload(uploads_dir):
    """Writes a fake staged upload and returns its UploadedAudio."""
    counter = {"n": 0}

    def _make(content: bytes = b"RIFF fake wav data", filename: str = "clip.wav") -> UploadedAudio:
        os.makedirs(uploads_dir, exist_ok=True)
        counter["n"] += 1
        path = os.path.join(uploads_dir, f"audio-test-{counter['n']}.wav")
        with open(path, "wb") as f:
            f.write(content)
        return UploadedAudio(
            original_filename=filename,
            size=len(content),
            content_type="audio/wav",
            temp_path=path,
        )

    return _make
