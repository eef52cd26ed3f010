# prepwise/api/views/v1/interview/next.py
from drf_spectacular.utils import extend_schema
from rest_framework import permissions
from rest_framework.response import Response
from rest_framework.views import APIView

from prepwise.api.serializers.v1.interview import InterviewNextOut
from prepwise.api.utils.common_utils import round_half_up

from .session import get_user_session, not_found


class InterviewNextQuestionAPIView(APIView):
    permission_classes = [permissions.IsAuthenticated]

    @extend_schema(
        summary="Get Next Question",
        description="""
Returns the first unanswered question with the progress so far.
When every question has an answer, returns `{"completed": true}`.
""",
        responses=InterviewNextOut,
    )
    def get(self, request, pk, *args, **kwargs):
        session = get_user_session(request, pk)
        if session is None:
            return not_found()

        questions = session.questions or []
        answered = session.responses.count()
        if answered >= len(questions):
            return Response({"completed": True, "message": "All questions completed"})

        total = len(questions)
        out = InterviewNextOut({
            "question": questions[answered],
            "progress": {
                "current": answered + 1,
                "total": total,
                "percentage": round_half_up((answered + 1) / total * 100),
            },
        })
        return Response(out.data)
