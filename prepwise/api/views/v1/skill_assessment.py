import re

from django.db import IntegrityError, transaction
from drf_spectacular.utils import OpenApiParameter, extend_schema
from rest_framework import status
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from prepwise.api.exceptions import Conflict
from prepwise.api.models import SkillAssessment
from prepwise.api.serializers.v1.skill_assessment import (
    RatingsListQuery,
    SaveRatingsIn,
    SkillAssessmentSerializer,
)
from prepwise.api.services import skill_assessment_service as svc
from prepwise.api.utils.common_utils import get_logger

log = get_logger(__name__)

_UUID_RE = re.compile(r"^[0-9a-fA-F]{8}-?[0-9a-fA-F]{4}-?[0-9a-fA-F]{4}-?[0-9a-fA-F]{4}-?[0-9a-fA-F]{12}$")

_SORTS = {
    "updated_at": ["-updated_at"],
    "created_at": ["-created_at"],
    "confidence": ["-overall_score", "-updated_at"],
}


class SaveRatingsAPIView(APIView):
    permission_classes = [IsAuthenticated]

    @extend_schema(
        summary="Save technology ratings",
        description="""
Stores self-assessed confidence (1-10) for each technology of a resume.

- One assessment per resume hash; saving again replaces the ratings.
- Every invalid item is reported in `errors`.
""",
        request=SaveRatingsIn,
    )
    def post(self, request, *args, **kwargs):
        s = SaveRatingsIn(data=request.data)
        s.is_valid(raise_exception=True)
        v = s.validated_data

        resume_hash = v["resume_hash"].strip()
        if not resume_hash:
            return Response(
                {"detail": "Valid resume hash is required", "required": ["resume_hash"]},
                status=status.HTTP_400_BAD_REQUEST,
            )
        if not v["technologies"]:
            return Response(
                {"detail": "At least one technology rating is required", "required": ["technologies"]},
                status=status.HTTP_400_BAD_REQUEST,
            )

        technologies, errors = svc.validate_technologies(v["technologies"])
        if errors:
            return Response(
                {"detail": "Technology validation failed", "errors": errors}, status=status.HTTP_400_BAD_REQUEST
            )

        try:
            with transaction.atomic():
                assessment, created = SkillAssessment.objects.update_or_create(
                    user=request.user,
                    resume_hash=resume_hash,
                    defaults={"technologies": technologies, "is_saved": v["should_save"]},
                )
        except IntegrityError:
            raise Conflict("Skills assessment for this resume already exists")

        log.info(f"Skill assessment {'created' if created else 'updated'}: {assessment.id}")
        summary = svc.calculate_summary(technologies)
        return Response({
            "detail": (
                "Skills assessment saved successfully" if v["should_save"]
                else "Skills assessment draft updated successfully"
            ),
            "data": {
                "id": assessment.id,
                "resume_hash": assessment.resume_hash,
                "is_saved": assessment.is_saved,
                "technologies_count": len(technologies),
                "summary": summary,
                "created_at": assessment.created_at,
                "updated_at": assessment.updated_at,
            },
            "stats": {
                "total_technologies": summary["total_technologies"],
                "average_confidence": summary["average_confidence"],
                "distribution": {
                    "expert": summary["expert_count"],
                    "proficient": summary["proficient_count"],
                    "learning": summary["learning_count"],
                },
            },
        })


class RatingsListAPIView(APIView):
    permission_classes = [IsAuthenticated]

    @extend_schema(
        summary="List technology assessments",
        parameters=[
            OpenApiParameter("resume_hash", str, required=False, description="'all' disables the filter"),
            OpenApiParameter("include_unsaved", bool, required=False),
            OpenApiParameter("limit", int, required=False),
            OpenApiParameter("sort", str, required=False, enum=list(_SORTS)),
        ],
    )
    def get(self, request, *args, **kwargs):
        q = RatingsListQuery(data=request.query_params)
        q.is_valid(raise_exception=True)
        v = q.validated_data

        qs = SkillAssessment.objects.filter(user=request.user)
        if v["resume_hash"] and v["resume_hash"] != "all":
            qs = qs.filter(resume_hash=v["resume_hash"])
        if not v["include_unsaved"]:
            qs = qs.filter(is_saved=True)
        qs = qs.order_by(*_SORTS[v["sort"]])[: v["limit"]]

        entries = [svc.list_entry(a) for a in qs]
        return Response({
            "count": len(entries),
            "results": entries,
            "filter": {
                "resume_hash": v["resume_hash"] or None,
                "saved_only": not v["include_unsaved"],
                "sort_by": v["sort"],
            },
        })


class RatingsStatsAPIView(APIView):
    permission_classes = [IsAuthenticated]

    @extend_schema(summary="Technology assessment statistics")
    def get(self, request, *args, **kwargs):
        return Response(svc.user_stats(SkillAssessment.objects.filter(user=request.user)))


class RatingDetailAPIView(APIView):
    permission_classes = [IsAuthenticated]

    @extend_schema(
        summary="Get an assessment",
        description="`identifier` is either the assessment id or the resume hash.",
    )
    def get(self, request, identifier, *args, **kwargs):
        qs = SkillAssessment.objects.filter(user=request.user)
        by_hash = not _UUID_RE.match(identifier)
        assessment = None
        if not by_hash:
            assessment = qs.filter(pk=identifier).first()
        if assessment is None:
            assessment = qs.filter(resume_hash=identifier).first()
        if assessment is None:
            message = "Rating not found for this resume" if by_hash else "Skills assessment not found"
            return Response({"detail": message, "identifier": identifier}, status=status.HTTP_404_NOT_FOUND)

        data = SkillAssessmentSerializer(assessment).data
        data["analysis"] = svc.detailed_analysis(assessment)
        return Response(data)

    @extend_schema(summary="Delete an assessment", request=None)
    def delete(self, request, identifier, *args, **kwargs):
        assessment = None
        if _UUID_RE.match(identifier):
            assessment = SkillAssessment.objects.filter(pk=identifier, user=request.user).first()
        if assessment is None:
            return Response(
                {"detail": "Skills assessment not found or unauthorized", "assessment_id": identifier},
                status=status.HTTP_404_NOT_FOUND,
            )
        deleted = {
            "id": assessment.id,
            "resume_hash": assessment.resume_hash,
            "skills_count": len(assessment.technologies or []),
            "was_saved": assessment.is_saved,
        }
        assessment.delete()
        return Response({"detail": "Skills assessment deleted successfully", "deleted_assessment": deleted})


class SkillAssessmentHealthView(APIView):
    authentication_classes: list = []
    permission_classes = [AllowAny]

    @extend_schema(summary="Skill assessment health check")
    def get(self, request, *args, **kwargs):
        return Response({"status": "ok", "service": "skill-assessment"})
