# prepwise/api/views/v1/interview/session.py
import math

from drf_spectacular.utils import OpenApiParameter, extend_schema
from rest_framework import permissions, status
from rest_framework.response import Response
from rest_framework.views import APIView

from prepwise.api.config import INTERVIEW_CONFIG
from prepwise.api.models import InterviewSession
from prepwise.api.serializers.v1.interview import (
    HistoryQuery,
    InterviewCreateIn,
    InterviewCreateOut,
    InterviewHistoryItemSerializer,
    InterviewSessionSerializer,
)
from prepwise.api.services import interview_service
from prepwise.api.utils.common_utils import get_logger

log = get_logger(__name__)

NOT_FOUND = "Interview not found"


def get_user_session(request, pk):
    return InterviewSession.objects.filter(pk=pk, user=request.user).first()


def not_found() -> Response:
    return Response({"detail": NOT_FOUND}, status=status.HTTP_404_NOT_FOUND)


class InterviewCreateAPIView(APIView):
    permission_classes = [permissions.IsAuthenticated]

    @extend_schema(
        summary="Create Interview Session",
        description="""
Creates a practice interview for a software engineering internship.

- The job description must mention a software role (software, developer, engineer, ...).
- Questions are generated from the resume and job description; a fixed set of five is used otherwise.
""",
        request=InterviewCreateIn,
        responses={201: InterviewCreateOut},
    )
    def post(self, request, *args, **kwargs):
        s = InterviewCreateIn(data=request.data)
        s.is_valid(raise_exception=True)
        v = s.validated_data

        if not interview_service.is_tech_role(v["job_description"]):
            return Response(
                {"detail": interview_service.NOT_TECH_ROLE_MESSAGE}, status=status.HTTP_400_BAD_REQUEST
            )

        questions = interview_service.generate_questions(v["resume_text"], v["job_description"])
        session = InterviewSession.objects.create(
            user=request.user,
            job_title=v["job_title"],
            job_description=v["job_description"],
            resume_text=v["resume_text"],
            questions=questions,
            total_questions=len(questions) or INTERVIEW_CONFIG["DEFAULT_TOTAL_QUESTIONS"],
        )
        log.info(f"[interview] created session={session.id} questions={len(questions)}")

        out = InterviewCreateOut({
            "id": session.id,
            "status": session.status,
            "questions_count": len(questions),
            "estimated_duration": session.estimated_duration,
        })
        return Response(out.data, status=status.HTTP_201_CREATED)


class InterviewDetailAPIView(APIView):
    permission_classes = [permissions.IsAuthenticated]

    @extend_schema(summary="Get Interview Session", responses=InterviewSessionSerializer)
    def get(self, request, pk, *args, **kwargs):
        session = get_user_session(request, pk)
        if session is None:
            return not_found()
        return Response(InterviewSessionSerializer(session).data)


class InterviewCancelAPIView(APIView):
    permission_classes = [permissions.IsAuthenticated]

    @extend_schema(summary="Cancel Interview Session", request=None)
    def post(self, request, pk, *args, **kwargs):
        session = get_user_session(request, pk)
        if session is None:
            return not_found()
        if session.status == InterviewSession.Status.COMPLETED:
            return Response(
                {"detail": "Cannot cancel a completed interview"}, status=status.HTTP_400_BAD_REQUEST
            )
        session.status = InterviewSession.Status.CANCELLED
        session.save(update_fields=["status", "updated_at"])
        return Response({"detail": "Interview cancelled", "id": session.id, "status": session.status})


class InterviewHistoryAPIView(APIView):
    permission_classes = [permissions.IsAuthenticated]

    @extend_schema(
        summary="Interview History",
        parameters=[
            OpenApiParameter("page", int, required=False),
            OpenApiParameter("limit", int, required=False),
        ],
    )
    def get(self, request, *args, **kwargs):
        q = HistoryQuery(data=request.query_params)
        q.is_valid(raise_exception=True)
        page, limit = q.validated_data["page"], q.validated_data["limit"]

        qs = InterviewSession.objects.filter(user=request.user).order_by("-created_at")
        total = qs.count()
        rows = qs[(page - 1) * limit: page * limit]
        data = InterviewHistoryItemSerializer(rows, many=True).data
        return Response({
            "interviews": data,
            "pagination": {
                "current": page,
                "total": math.ceil(total / limit),
                "count": len(data),
                "total_records": total,
            },
        })
