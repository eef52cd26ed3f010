# prepwise/api/views/v1/interview/start.py
from django.utils import timezone
from drf_spectacular.utils import extend_schema
from rest_framework import permissions, status
from rest_framework.response import Response
from rest_framework.views import APIView

from prepwise.api.models import InterviewSession
from prepwise.api.utils.common_utils import get_logger

from .session import get_user_session, not_found

log = get_logger(__name__)


class InterviewStartAPIView(APIView):
    permission_classes = [permissions.IsAuthenticated]

    @extend_schema(
        summary="Start Interview",
        description="Moves a created session to in_progress and returns the first question.",
        request=None,
    )
    def post(self, request, pk, *args, **kwargs):
        session = get_user_session(request, pk)
        if session is None:
            return not_found()
        if session.status != InterviewSession.Status.CREATED:
            return Response(
                {"detail": "Interview already started or completed"}, status=status.HTTP_400_BAD_REQUEST
            )

        session.status = InterviewSession.Status.IN_PROGRESS
        session.started_at = timezone.now()
        session.save(update_fields=["status", "started_at", "updated_at"])
        log.info(f"[interview] started session={session.id}")

        questions = session.questions or []
        return Response({
            "detail": "Interview started",
            "question": questions[0] if questions else None,
            "total_questions": len(questions),
        })
