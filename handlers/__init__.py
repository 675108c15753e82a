"""Request handlers."""

from .audio_upload_handler import AudioUploadHandler

__all__ = ["AudioUploadHandler"]
