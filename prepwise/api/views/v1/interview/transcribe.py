# prepwise/api/views/v1/interview/transcribe.py
from drf_spectacular.utils import extend_schema
from rest_framework import permissions, status
from rest_framework.parsers import FormParser, MultiPartParser
from rest_framework.response import Response
from rest_framework.views import APIView

from prepwise.api.config import SPEECH_CONFIG
from prepwise.api.serializers.v1.interview import TranscribeIn, TranscriptionOut
from prepwise.api.services import speech_service
from prepwise.api.utils.common_utils import get_logger

log = get_logger(__name__)

INVALID_TYPE_MESSAGE = "Invalid file type. Please upload audio files only."


def _too_large(limit: int) -> Response:
    mb = limit // (1024 * 1024)
    return Response(
        {"detail": f"File size too large. Maximum size allowed is {mb}MB."},
        status=status.HTTP_400_BAD_REQUEST,
    )


class TranscribeAudioAPIView(APIView):
    permission_classes = [permissions.IsAuthenticated]
    parser_classes = [MultiPartParser, FormParser]

    @extend_schema(
        summary="Transcribe a Recorded Answer",
        description="""
Converts an uploaded `audio` file to text with Azure Speech.

- Accepted types: audio/webm, audio/wav, audio/mp3, audio/m4a (25MB max).
- The upload is deleted once recognition ends.
- Returns 503 when the speech service is not configured, 500 when recognition fails.
""",
        request=TranscribeIn,
        responses=TranscriptionOut,
    )
    def post(self, request, *args, **kwargs):
        s = TranscribeIn(data=request.data)
        s.is_valid(raise_exception=True)
        upload = s.validated_data.get("audio")

        if upload is None:
            return Response({"detail": "No audio file provided"}, status=status.HTTP_400_BAD_REQUEST)
        if not speech_service.is_allowed_type(upload):
            return Response({"detail": INVALID_TYPE_MESSAGE}, status=status.HTTP_400_BAD_REQUEST)
        if upload.size > SPEECH_CONFIG["MAX_UPLOAD_BYTES"]:
            return _too_large(SPEECH_CONFIG["MAX_UPLOAD_BYTES"])
        if not speech_service.is_ready():
            return Response(
                {"detail": "Speech service is not configured"}, status=status.HTTP_503_SERVICE_UNAVAILABLE
            )

        log.info(f"Transcription request: {upload.name} ({upload.size} bytes, {upload.content_type})")
        try:
            result = speech_service.transcribe_upload(upload, s.validated_data["locale"] or None)
        except speech_service.TranscriptionError as e:
            log.error(f"Transcription failed: {e}")
            return Response({"detail": "Transcription failed"}, status=status.HTTP_500_INTERNAL_SERVER_ERROR)

        return Response(TranscriptionOut(dict(result, success=True)).data)


class MockTranscribeAudioAPIView(APIView):
    permission_classes = [permissions.IsAuthenticated]
    parser_classes = [MultiPartParser, FormParser]

    @extend_schema(
        summary="Simulated Transcription",
        description="Accepts any audio upload (10MB max) and returns fixed text, for clients without a speech backend.",
        request=TranscribeIn,
        responses=TranscriptionOut,
    )
    def post(self, request, *args, **kwargs):
        s = TranscribeIn(data=request.data)
        s.is_valid(raise_exception=True)
        upload = s.validated_data.get("audio")

        if upload is None:
            return Response({"detail": "Audio file is required"}, status=status.HTTP_400_BAD_REQUEST)
        if not speech_service.is_audio_upload(upload):
            return Response({"detail": INVALID_TYPE_MESSAGE}, status=status.HTTP_400_BAD_REQUEST)
        if upload.size > SPEECH_CONFIG["MOCK_MAX_UPLOAD_BYTES"]:
            return _too_large(SPEECH_CONFIG["MOCK_MAX_UPLOAD_BYTES"])

        return Response(TranscriptionOut(dict(speech_service.mock_transcription(upload), success=True)).data)
