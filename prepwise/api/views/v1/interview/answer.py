# prepwise/api/views/v1/interview/answer.py
from django.db import transaction
from drf_spectacular.utils import extend_schema
from rest_framework import permissions, status
from rest_framework.response import Response
from rest_framework.views import APIView

from prepwise.api.config import SCORER_CONFIG
from prepwise.api.models import InterviewResponse
from prepwise.api.serializers.v1.interview import InterviewAnswerIn, InterviewAnswerOut
from prepwise.api.services import interview_service, response_scorer
from prepwise.api.utils.common_utils import get_logger

from .session import get_user_session, not_found

log = get_logger(__name__)


class InterviewSubmitAnswerAPIView(APIView):
    permission_classes = [permissions.IsAuthenticated]

    @extend_schema(
        summary="Submit Answer",
        description="""
Scores one answer and stores it on the session.

- Coding questions are scored as `technical_coding`; technical and system design as `technical_conceptual`.
- `source` is `ai` when the remote assessor answered, `local` for the heuristic scorer.
""",
        request=InterviewAnswerIn,
        responses=InterviewAnswerOut,
    )
    def post(self, request, pk, *args, **kwargs):
        s = InterviewAnswerIn(data=request.data)
        s.is_valid(raise_exception=True)
        v = s.validated_data

        session = get_user_session(request, pk)
        if session is None:
            return not_found()
        question = session.find_question(v["question_id"])
        if question is None:
            return Response({"detail": "Question not found"}, status=status.HTTP_400_BAD_REQUEST)

        feedback, source = response_scorer.score_response(
            interview_service.scorer_question_type(question.get("type")),
            v["transcription"],
            v["code"] or None,
            v.get("response_time"),
            question.get("expected_duration"),
            question=question.get("question", ""),
            use_remote=SCORER_CONFIG["REMOTE_ENABLED"],
        )

        with transaction.atomic():
            InterviewResponse.objects.create(
                session=session,
                question_id=v["question_id"],
                question=question.get("question", ""),
                transcription=v["transcription"],
                code=v["code"],
                response_time=v.get("response_time"),
                recording_duration=v.get("recording_duration"),
                score=feedback["score"],
                feedback=feedback,
                feedback_source=source,
            )
            session.current_question_index += 1
            session.save(update_fields=["current_question_index", "updated_at"])

        log.info(f"[interview] answer session={session.id} q={v['question_id']} score={feedback['score']} src={source}")
        out = InterviewAnswerOut({"message": "Response submitted successfully", "feedback": feedback, "source": source})
        return Response(out.data)
