# prepwise/api/services/speech_service.py
"""
Speech to text for recorded interview answers (Azure Speech SDK).

The upload is spooled to a temp file under SPEECH_CONFIG["UPLOAD_DIR"] and
recognised continuously until the session stops, so answers longer than a single
utterance come back whole. The file is removed afterwards whatever the outcome.
"""
from __future__ import annotations

import os
import threading
import uuid
from typing import TYPE_CHECKING, Any, Dict, List, Optional

from prepwise.api.config import SPEECH_CONFIG
from prepwise.api.utils.common_utils import get_logger

if TYPE_CHECKING:
    from azure.cognitiveservices.speech.audio import AudioConfig

log = get_logger(__name__)

SPEECH_KEY = os.getenv("SPEECH_KEY", "").strip()
SPEECH_REGION = os.getenv("SPEECH_REGION", "").strip()

TICKS_PER_SECOND = 10_000_000  # SDK durations are 100ns ticks

_EXTENSIONS = {"audio/webm": "webm", "audio/wav": "wav", "audio/mp3": "mp3", "audio/m4a": "m4a"}


class TranscriptionError(Exception):
    pass


def is_ready() -> bool:
    return bool(SPEECH_KEY and SPEECH_REGION)


def is_allowed_type(upload) -> bool:
    return (getattr(upload, "content_type", "") or "") in SPEECH_CONFIG["ALLOWED_TYPES"]


def is_audio_upload(upload) -> bool:
    content_type = getattr(upload, "content_type", "") or ""
    return content_type.startswith("audio/") or content_type == "application/octet-stream"


def save_upload(upload) -> str:
    os.makedirs(SPEECH_CONFIG["UPLOAD_DIR"], exist_ok=True)
    ext = _EXTENSIONS.get(upload.content_type, "webm")
    path = os.path.join(SPEECH_CONFIG["UPLOAD_DIR"], f"audio_{uuid.uuid4().hex}.{ext}")
    with open(path, "wb") as fh:
        for chunk in upload.chunks():
            fh.write(chunk)
    return path


def _audio_config(speechsdk, path: str) -> "AudioConfig":
    if path.endswith(".wav"):
        return speechsdk.audio.AudioConfig(filename=path)

    # compressed containers go through a push stream (needs GStreamer on the host)
    container = (
        speechsdk.AudioStreamContainerFormat.MP3 if path.endswith(".mp3") else speechsdk.AudioStreamContainerFormat.ANY
    )
    stream = speechsdk.audio.PushAudioInputStream(
        stream_format=speechsdk.audio.AudioStreamFormat(compressed_stream_format=container)
    )
    with open(path, "rb") as fh:
        stream.write(fh.read())
    stream.close()
    return speechsdk.audio.AudioConfig(stream=stream)


def transcribe_file(path: str, locale: Optional[str] = None) -> Dict[str, Any]:
    """
    Returns {"text", "duration", "confidence"}; duration is in seconds (None when
    nothing was recognised). The simple result format carries no confidence score.
    Raises TranscriptionError when the service is not configured, reports an error
    or does not finish within RECOGNITION_TIMEOUT seconds.
    """
    if not is_ready():
        raise TranscriptionError("Speech service is not configured (SPEECH_KEY / SPEECH_REGION)")

    import azure.cognitiveservices.speech as speechsdk

    cfg = speechsdk.SpeechConfig(subscription=SPEECH_KEY, region=SPEECH_REGION)
    cfg.speech_recognition_language = locale or SPEECH_CONFIG["LOCALE"]
    recognizer = speechsdk.SpeechRecognizer(speech_config=cfg, audio_config=_audio_config(speechsdk, path))

    parts: List[str] = []
    errors: List[str] = []
    ticks = 0
    done = threading.Event()

    def on_recognized(evt):
        nonlocal ticks
        if evt.result.reason == speechsdk.ResultReason.RecognizedSpeech and evt.result.text:
            parts.append(evt.result.text)
            ticks += evt.result.duration

    def on_canceled(evt):
        if evt.reason == speechsdk.CancellationReason.Error:
            errors.append(evt.error_details or "unknown error")
        done.set()

    recognizer.recognized.connect(on_recognized)
    recognizer.session_stopped.connect(lambda evt: done.set())
    recognizer.canceled.connect(on_canceled)

    recognizer.start_continuous_recognition()
    finished = done.wait(SPEECH_CONFIG["RECOGNITION_TIMEOUT"])
    recognizer.stop_continuous_recognition()

    if errors:
        raise TranscriptionError(errors[0])
    if not finished:
        raise TranscriptionError("Speech recognition timed out")

    text = " ".join(parts).strip()
    log.info(f"Transcribed {os.path.basename(path)}: {len(text)} chars in {len(parts)} segments")
    return {
        "text": text,
        "duration": ticks / TICKS_PER_SECOND if ticks else None,
        "confidence": None,
    }


def transcribe_upload(upload, locale: Optional[str] = None) -> Dict[str, Any]:
    path = save_upload(upload)
    try:
        return transcribe_file(path, locale)
    finally:
        if os.path.exists(path):
            os.remove(path)


def mock_transcription(upload) -> Dict[str, Any]:
    """Fixed text; the duration is a rough size-based estimate (1 s per KB)."""
    return {
        "text": SPEECH_CONFIG["MOCK_TEXT"],
        "duration": upload.size // 1000,
        "confidence": SPEECH_CONFIG["MOCK_CONFIDENCE"],
    }
