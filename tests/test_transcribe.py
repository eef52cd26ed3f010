import os

import pytest
from django.core.files.uploadedfile import SimpleUploadedFile

from prepwise.api.config import SPEECH_CONFIG
from prepwise.api.services import speech_service

URL = "/api/v1/interviews/transcribe/"
MOCK_URL = "/api/v1/interviews/transcribe-mock/"


def audio(name="answer.wav", content_type="audio/wav", size=3000):
    return SimpleUploadedFile(name, b"\0" * size, content_type=content_type)


@pytest.fixture
def upload_dir(tmp_path, monkeypatch):
    monkeypatch.setitem(SPEECH_CONFIG, "UPLOAD_DIR", str(tmp_path))
    return tmp_path


@pytest.fixture
def speech_ready(monkeypatch):
    monkeypatch.setattr(speech_service, "is_ready", lambda: True)


@pytest.mark.django_db
class TestTranscribe:
    def test_requires_auth(self, anon_client):
        assert anon_client.post(URL, {}, format="multipart").status_code == 401

    def test_audio_required(self, client):
        res = client.post(URL, {}, format="multipart")
        assert res.status_code == 400
        assert res.data["detail"] == "No audio file provided"

    def test_rejects_unlisted_type(self, client):
        res = client.post(URL, {"audio": audio("a.ogg", "audio/ogg")}, format="multipart")
        assert res.status_code == 400
        assert res.data["detail"] == "Invalid file type. Please upload audio files only."

    def test_rejects_oversized(self, client, monkeypatch):
        monkeypatch.setitem(SPEECH_CONFIG, "MAX_UPLOAD_BYTES", 1024)
        res = client.post(URL, {"audio": audio()}, format="multipart")
        assert res.status_code == 400
        assert res.data["detail"].startswith("File size too large")

    def test_unconfigured_service(self, client, monkeypatch):
        monkeypatch.setattr(speech_service, "is_ready", lambda: False)
        res = client.post(URL, {"audio": audio()}, format="multipart")
        assert res.status_code == 503

    def test_transcribes_and_removes_upload(self, client, upload_dir, speech_ready, monkeypatch):
        seen = {}

        def fake_transcribe(path, locale=None):
            seen["path"], seen["locale"] = path, locale
            assert os.path.exists(path)
            return {"text": "I built a REST API", "duration": 4.2, "confidence": None}

        monkeypatch.setattr(speech_service, "transcribe_file", fake_transcribe)
        res = client.post(URL, {"audio": audio(), "locale": "en-GB"}, format="multipart")

        assert res.status_code == 200
        assert res.data == {"success": True, "text": "I built a REST API", "duration": 4.2, "confidence": None}
        assert seen["path"].endswith(".wav")
        assert seen["locale"] == "en-GB"
        assert list(upload_dir.iterdir()) == []

    def test_failure_is_500_and_cleans_up(self, client, upload_dir, speech_ready, monkeypatch):
        def fail(path, locale=None):
            raise speech_service.TranscriptionError("bad audio")

        monkeypatch.setattr(speech_service, "transcribe_file", fail)
        res = client.post(URL, {"audio": audio("a.webm", "audio/webm")}, format="multipart")

        assert res.status_code == 500
        assert res.data["detail"] == "Transcription failed"
        assert list(upload_dir.iterdir()) == []


@pytest.mark.django_db
class TestMockTranscribe:
    def test_audio_required(self, client):
        res = client.post(MOCK_URL, {}, format="multipart")
        assert res.status_code == 400
        assert res.data["detail"] == "Audio file is required"

    def test_rejects_non_audio(self, client):
        upload = SimpleUploadedFile("notes.txt", b"hello", content_type="text/plain")
        res = client.post(MOCK_URL, {"audio": upload}, format="multipart")
        assert res.status_code == 400

    def test_rejects_oversized(self, client, monkeypatch):
        monkeypatch.setitem(SPEECH_CONFIG, "MOCK_MAX_UPLOAD_BYTES", 1024)
        res = client.post(MOCK_URL, {"audio": audio()}, format="multipart")
        assert res.status_code == 400

    @pytest.mark.parametrize("content_type", ["audio/ogg", "application/octet-stream"])
    def test_simulated_text(self, client, content_type):
        res = client.post(MOCK_URL, {"audio": audio("a.bin", content_type, size=3500)}, format="multipart")
        assert res.status_code == 200
        assert res.data["success"] is True
        assert res.data["text"] == SPEECH_CONFIG["MOCK_TEXT"]
        assert res.data["duration"] == 3
        assert res.data["confidence"] == 0.95


class TestSpeechService:
    def test_unconfigured_raises(self, monkeypatch):
        monkeypatch.setattr(speech_service, "SPEECH_KEY", "")
        with pytest.raises(speech_service.TranscriptionError, match="not configured"):
            speech_service.transcribe_file("missing.wav")

    def test_save_upload_keeps_extension(self, upload_dir):
        path = speech_service.save_upload(audio("clip", "audio/mp3", size=10))
        assert path.startswith(str(upload_dir))
        assert path.endswith(".mp3")
        with open(path, "rb") as fh:
            assert fh.read() == b"\0" * 10
