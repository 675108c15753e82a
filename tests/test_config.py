import pytest

from config import DEFAULT_TRIGGER_PHRASES, load_config
from exceptions import ConfigurationError


def test_defaults(monkeypatch):
    for name in ["PORT", "UPLOADS_DIR", "LOGS_DIR", "TRIGGER_PHRASES", "PUBLISH_DECISIONS", "MAX_FILE_SIZE"]:
        monkeypatch.delenv(name, raising=False)

    config = load_config()

    assert config.server.port == 3001
    assert config.upload.max_file_size == 25 * 1024 * 1024
    assert config.upload.allowed_mime_types == ("audio/wav",)
    assert config.upload.allowed_extensions == (".wav",)
    assert config.directories.uploads == "./uploads"
    assert config.directories.logs == "./transcription_logs"
    assert config.triggers.phrases == DEFAULT_TRIGGER_PHRASES
    assert config.rabbitmq.topic_prefix == "eutopia"
    assert config.rabbitmq.publish_decisions is False


def test_missing_api_key_is_refused(monkeypatch):
    monkeypatch.delenv("ASSEMBLYAI_API_KEY", raising=False)
    monkeypatch.delenv("ASSEMBLY_AI_API_KEY", raising=False)

    with pytest.raises(ConfigurationError):
        load_config().validate_required()


def test_legacy_api_key_variable(monkeypatch):
    monkeypatch.delenv("ASSEMBLYAI_API_KEY", raising=False)
    monkeypatch.setenv("ASSEMBLY_AI_API_KEY", "legacy-key")

    config = load_config()

    config.validate_required()
    assert config.assemblyai.api_key == "legacy-key"


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("PORT", "8080")
    monkeypatch.setenv("TRIGGER_PHRASES", "open sesame, , help me")
    monkeypatch.setenv("PUBLISH_DECISIONS", "true")
    monkeypatch.setenv("RABBITMQ_HOST", "broker")

    config = load_config()

    assert config.server.port == 8080
    assert config.triggers.phrases == ("open sesame", "help me")
    assert config.rabbitmq.publish_decisions is True
    assert config.rabbitmq.host == "broker"
