# prepwise/api/views/v1/interview/finish.py
from django.utils import timezone
from drf_spectacular.utils import extend_schema
from rest_framework import permissions
from rest_framework.response import Response
from rest_framework.views import APIView

from prepwise.api.models import InterviewSession
from prepwise.api.services import interview_service
from prepwise.api.utils.common_utils import get_logger

from .session import get_user_session, not_found

log = get_logger(__name__)


class InterviewCompleteAPIView(APIView):
    permission_classes = [permissions.IsAuthenticated]

    @extend_schema(
        summary="Complete Interview",
        description="""
Closes the session and produces the overall feedback.

Without the language model, the score is the average of the answer scores
(70 when nothing was answered) with fixed feedback texts.
""",
        request=None,
    )
    def post(self, request, pk, *args, **kwargs):
        session = get_user_session(request, pk)
        if session is None:
            return not_found()

        summary_input = [
            {
                "question": r.question,
                "score": r.score,
                "strengths": (r.feedback or {}).get("strengths", []),
                "improvements": (r.feedback or {}).get("improvements", []),
            }
            for r in session.responses.all()
        ]
        overall = interview_service.generate_overall_feedback(summary_input)

        now = timezone.now()
        session.status = InterviewSession.Status.COMPLETED
        session.completed_at = now
        session.total_duration = int((now - session.started_at).total_seconds()) if session.started_at else 0
        session.overall_score = overall["score"]
        session.overall_feedback = overall["feedback"]
        session.save(update_fields=[
            "status", "completed_at", "total_duration", "overall_score", "overall_feedback", "updated_at",
        ])
        log.info(f"[interview] completed session={session.id} score={session.overall_score}")

        return Response({
            "detail": "Interview completed successfully",
            "overall_score": session.overall_score,
            "feedback": session.overall_feedback,
            "total_duration": session.total_duration,
        })


class InterviewFeedbackAPIView(APIView):
    permission_classes = [permissions.IsAuthenticated]

    @extend_schema(summary="Interview Feedback")
    def get(self, request, pk, *args, **kwargs):
        session = get_user_session(request, pk)
        if session is None:
            return not_found()

        responses = []
        for r in session.responses.all():
            q = session.find_question(r.question_id) or {}
            responses.append({
                "question": r.question,
                "type": q.get("type"),
                "feedback": r.feedback,
                "response_time": r.response_time,
            })
        overall = session.overall_feedback or {}
        return Response({
            "overall": overall,
            "score": session.overall_score,
            "duration": session.total_duration,
            "responses": responses,
            "recommendations": overall.get("recommendations", []),
        })
