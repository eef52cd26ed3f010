# prepwise/api/views/v1/interview/analyze.py
from drf_spectacular.utils import extend_schema
from rest_framework import permissions
from rest_framework.response import Response
from rest_framework.views import APIView

from prepwise.api.serializers.v1.interview import AnalyzeResponseIn, AnalyzeResponseOut
from prepwise.api.services import interview_service, response_scorer


class AnalyzeResponseAPIView(APIView):
    permission_classes = [permissions.IsAuthenticated]

    @extend_schema(
        summary="Analyze a Single Response",
        description="Scores an answer outside of a session. `question_type` accepts session or scorer types.",
        request=AnalyzeResponseIn,
        responses=AnalyzeResponseOut,
    )
    def post(self, request, *args, **kwargs):
        s = AnalyzeResponseIn(data=request.data)
        s.is_valid(raise_exception=True)
        v = s.validated_data

        feedback, source = response_scorer.score_response(
            interview_service.scorer_question_type(v["question_type"]),
            v["response_text"],
            v.get("code") or None,
            v.get("response_time"),
            v.get("expected_duration"),
            question=v["question"],
        )
        return Response(AnalyzeResponseOut({"success": True, "feedback": feedback, "source": source}).data)
