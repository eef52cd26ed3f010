# prepwise/api/views/v1/cv_analysis.py
import math
from datetime import datetime, timezone

from drf_spectacular.utils import OpenApiParameter, extend_schema
from rest_framework import serializers, status
from rest_framework.parsers import FormParser, JSONParser, MultiPartParser
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from prepwise.api.config import CV_CONFIG
from prepwise.api.models import CVAnalysis
from prepwise.api.serializers.v1.cv_analysis import (
    CVAnalysisListItemSerializer,
    CVAnalysisSerializer,
    CVAnalyzeIn,
    CVAnalyzeProfileIn,
    CVSaveIn,
    CVToggleSaveIn,
)
from prepwise.api.services import cv_analysis_service as cv
from prepwise.api.utils.common_utils import get_logger, round_half_up
from prepwise.api.utils.file_utils import extract_pdf_text, is_pdf_upload

log = get_logger(__name__)

REQUIRED_INPUTS_MESSAGE = (
    "Resume file and job descriptions are required for software engineering internship analysis."
)
PDF_TEXT_MESSAGE = "Failed to extract text from PDF. Please ensure the file is a valid PDF with readable text."
MIN_EXTRACTED_CHARS = 50


class _ListAllQuery(serializers.Serializer):
    page = serializers.IntegerField(required=False, default=1, min_value=1)
    limit = serializers.IntegerField(required=False, default=10, min_value=1, max_value=100)
    include_unsaved = serializers.BooleanField(required=False, default=True)


def _stored_resume_text(text: str) -> str:
    return (text or "")[: CV_CONFIG["STORED_RESUME_CHARS"]]


def _get_owned(request, pk):
    return CVAnalysis.objects.filter(pk=pk, user=request.user).first()


class CVAnalyzeAPIView(APIView):
    permission_classes = [IsAuthenticated]
    parser_classes = [MultiPartParser, FormParser, JSONParser]

    @extend_schema(
        summary="Analyze a resume against job descriptions",
        description="""
Uploads a resume PDF and compares it with one or more software engineering job descriptions.

- `job_descriptions` may be a JSON list, a JSON-encoded list string or a repeated form field.
- Each job description gets a match percentage and structured recommendations.
- Non-technical postings are flagged and scored 0.
- The analysis is stored (unsaved) under the resume hash so it can be saved later.
""",
        request=CVAnalyzeIn,
    )
    def post(self, request, *args, **kwargs):
        s = CVAnalyzeIn(data=request.data)
        s.is_valid(raise_exception=True)
        upload = s.validated_data.get("resume")
        job_descriptions = s.validated_data["job_descriptions"]

        if upload is None or not job_descriptions:
            return Response({"detail": REQUIRED_INPUTS_MESSAGE}, status=status.HTTP_400_BAD_REQUEST)
        if not is_pdf_upload(upload):
            return Response({"detail": "Only PDF files are allowed"}, status=status.HTTP_400_BAD_REQUEST)
        if upload.size > CV_CONFIG["MAX_UPLOAD_BYTES"]:
            return Response({"detail": "File size must be less than 10MB"}, status=status.HTTP_400_BAD_REQUEST)

        resume_text = extract_pdf_text(upload)
        if len(resume_text.strip()) < MIN_EXTRACTED_CHARS:
            return Response({"detail": PDF_TEXT_MESSAGE}, status=status.HTTP_400_BAD_REQUEST)
        try:
            cv.validate_resume_content(resume_text)
        except cv.CVValidationError as e:
            log.warning(f"Resume rejected: {e}")
            return Response({"detail": PDF_TEXT_MESSAGE}, status=status.HTTP_400_BAD_REQUEST)

        resume_hash = cv.create_resume_hash(resume_text)
        outcome = cv.analyze_resume(resume_text, job_descriptions)
        results = outcome["results"]

        is_existing = CVAnalysis.objects.filter(user=request.user, resume_hash=resume_hash).exists()
        CVAnalysis.objects.update_or_create(
            user=request.user,
            resume_hash=resume_hash,
            defaults={
                "resume_text": _stored_resume_text(resume_text),
                "job_descriptions": outcome["job_descriptions_html"],
                "results": results,
                "extracted_technologies": outcome["extracted_technologies"],
                "is_saved": False,
                "used_profile_cv": False,
                "analysis_metadata": outcome["metadata"],
            },
        )

        stats = cv.result_stats(results, outcome["extracted_technologies"])
        return Response({
            "analysis": results,
            "resume_text": resume_text,
            "extracted_technologies": outcome["extracted_technologies"],
            "resume_hash": resume_hash,
            "metadata": {
                "resume_analyzed": True,
                "total_job_descriptions": len(job_descriptions),
                "non_tech_role_count": stats["non_tech_roles"],
                "software_engineering_role_count": stats["software_roles"],
                "avg_match_score": stats["avg_match_score"],
                "technologies_extracted": stats["technologies_extracted"],
                "is_existing_resume": is_existing,
                "processing_time": datetime.now(timezone.utc).isoformat(),
            },
            "recommendations": outcome["recommendations"],
        })


class CVAnalyzeProfileAPIView(APIView):
    permission_classes = [IsAuthenticated]

    @extend_schema(
        summary="Analyze the profile CV",
        description="Runs the analysis on the CV stored in the user's profile. Repeated requests are served from cache.",
        request=CVAnalyzeProfileIn,
    )
    def post(self, request, *args, **kwargs):
        s = CVAnalyzeProfileIn(data=request.data)
        s.is_valid(raise_exception=True)
        job_descriptions = s.validated_data["job_descriptions"]
        if not job_descriptions:
            return Response({"detail": "Job descriptions are required"}, status=status.HTTP_400_BAD_REQUEST)

        user = request.user
        if not user.has_cv:
            return Response(
                {"detail": "No CV uploaded in profile. Please upload your CV first."},
                status=status.HTTP_400_BAD_REQUEST,
            )
        if not user.cv_hash:
            return Response(
                {"detail": "CV data is corrupted. Please re-upload your CV."}, status=status.HTTP_400_BAD_REQUEST
            )

        combined_hash = cv.combined_profile_hash(user.cv_hash, job_descriptions)
        cached = CVAnalysis.objects.filter(user=user, resume_hash=combined_hash).first()
        if cached is not None:
            return Response({
                "detail": "Analysis retrieved from cache",
                "analysis_id": cached.id,
                "results": cached.results,
                "cached": True,
                "used_profile_cv": True,
            })

        outcome = cv.analyze_resume(user.cv_text, job_descriptions)
        analysis = CVAnalysis.objects.create(
            user=user,
            resume_hash=combined_hash,
            resume_text=_stored_resume_text(user.cv_text),
            job_descriptions=outcome["job_descriptions_html"],
            results=outcome["results"],
            extracted_technologies=outcome["extracted_technologies"],
            is_saved=True,
            used_profile_cv=True,
            analysis_metadata=outcome["metadata"],
        )
        return Response({
            "detail": "CV analysis completed using profile CV",
            "analysis_id": analysis.id,
            "results": analysis.results,
            "cached": False,
            "used_profile_cv": True,
        })


class CVSaveAPIView(APIView):
    permission_classes = [IsAuthenticated]

    @extend_schema(
        summary="Save or unsave an analysis",
        description="""
Marks an analysis as saved (`should_save=true`) or unsaved.

- With only `resume_hash`, the existing analysis is toggled.
- With `resume_text`, `job_descriptions` and `results`, the analysis is created or replaced.
  The hash is derived from `resume_text` when omitted.
""",
        request=CVSaveIn,
    )
    def post(self, request, *args, **kwargs):
        s = CVSaveIn(data=request.data)
        s.is_valid(raise_exception=True)
        v = s.validated_data

        resume_hash = v["resume_hash"]
        resume_text = v["resume_text"]
        job_descriptions = v.get("job_descriptions")
        results = v.get("results")
        should_save = v["should_save"]
        has_body = bool(resume_text or job_descriptions or results)

        if not resume_hash:
            if not has_body:
                return Response(
                    {"detail": "Resume hash is required to save/unsave analysis.", "required": ["resume_hash"]},
                    status=status.HTTP_400_BAD_REQUEST,
                )
            if not resume_text or not job_descriptions or not results:
                return Response(
                    {
                        "detail": "Missing required fields for saving analysis",
                        "required": ["resume_text", "job_descriptions", "results"],
                    },
                    status=status.HTTP_400_BAD_REQUEST,
                )
            resume_hash = cv.create_resume_hash(resume_text)

        normalized = [cv.normalize_result(r) for r in results] if results else None
        analysis = CVAnalysis.objects.filter(user=request.user, resume_hash=resume_hash).first()

        if analysis is not None:
            fields = ["is_saved", "updated_at"]
            if job_descriptions and normalized:
                analysis.job_descriptions = job_descriptions
                analysis.results = normalized
                fields += ["job_descriptions", "results"]
                if resume_text:
                    analysis.resume_text = _stored_resume_text(resume_text)
                    fields.append("resume_text")
            if v.get("extracted_technologies") is not None:
                analysis.extracted_technologies = v["extracted_technologies"]
                fields.append("extracted_technologies")
            analysis.is_saved = should_save
            analysis.save(update_fields=fields)
        elif resume_text and job_descriptions and normalized:
            analysis = CVAnalysis.objects.create(
                user=request.user,
                resume_hash=resume_hash,
                resume_text=_stored_resume_text(resume_text),
                job_descriptions=job_descriptions,
                results=normalized,
                extracted_technologies=v.get("extracted_technologies") or [],
                is_saved=should_save,
                analysis_metadata={"processing_date": datetime.now(timezone.utc).isoformat()},
            )
        else:
            return Response(
                {"detail": "CV analysis not found. Please analyze your resume first.", "resume_hash": resume_hash},
                status=status.HTTP_404_NOT_FOUND,
            )

        log.info(f"CV analysis {analysis.id} {'saved' if should_save else 'unsaved'}")
        return Response({
            "detail": "CV analysis saved successfully." if should_save else "CV analysis unsaved successfully.",
            "saved": should_save,
            "analysis": {
                "id": analysis.id,
                "resume_hash": analysis.resume_hash,
                "is_saved": analysis.is_saved,
                "analysis_count": len(analysis.results or []),
                "technologies_count": len(analysis.extracted_technologies or []),
                "updated_at": analysis.updated_at,
            },
            "stats": cv.result_stats(analysis.results or [], analysis.extracted_technologies or []),
        })


class CVSavedListAPIView(APIView):
    permission_classes = [IsAuthenticated]

    @extend_schema(summary="List saved analyses", responses=CVAnalysisListItemSerializer(many=True))
    def get(self, request, *args, **kwargs):
        qs = CVAnalysis.objects.filter(user=request.user, is_saved=True).order_by("-created_at")
        qs = qs[: CV_CONFIG["SAVED_LIST_LIMIT"]]
        data = CVAnalysisListItemSerializer(qs, many=True).data
        return Response({"count": len(data), "results": data})


def _list_entry(analysis: CVAnalysis) -> dict:
    results = analysis.results or []
    software = analysis.software_results
    return {
        "id": analysis.id,
        "is_saved": analysis.is_saved,
        "match_percentage": analysis.average_match,
        "total_jobs": len(results),
        "software_jobs": len(software),
        "non_tech_jobs": len(results) - len(software),
        "created_at": analysis.created_at,
        "updated_at": analysis.updated_at,
        "extracted_technologies": (analysis.extracted_technologies or [])[:10],
        "technologies_count": len(analysis.extracted_technologies or []),
        "has_high_matches": any((r.get("match_percentage") or 0) >= 70 for r in software),
        "summary": {
            "top_match": max((r.get("match_percentage") or 0 for r in software), default=0),
            "avg_match": analysis.average_match,
            "has_errors": any(r.get("has_error") for r in results),
            "is_comprehensive": any((r.get("analysis_quality") or {}).get("is_comprehensive") for r in results),
        },
    }


class CVAnalysisListAPIView(APIView):
    permission_classes = [IsAuthenticated]

    @extend_schema(
        summary="List all analyses",
        parameters=[
            OpenApiParameter("page", int, required=False),
            OpenApiParameter("limit", int, required=False),
            OpenApiParameter("include_unsaved", bool, required=False),
        ],
    )
    def get(self, request, *args, **kwargs):
        q = _ListAllQuery(data=request.query_params)
        q.is_valid(raise_exception=True)
        page, limit = q.validated_data["page"], q.validated_data["limit"]

        qs = CVAnalysis.objects.filter(user=request.user)
        if not q.validated_data["include_unsaved"]:
            qs = qs.filter(is_saved=True)
        qs = qs.order_by("-updated_at")

        total = qs.count()
        offset = (page - 1) * limit
        rows = list(qs[offset: offset + limit])
        entries = [_list_entry(a) for a in rows]

        return Response({
            "results": entries,
            "pagination": {
                "page": page,
                "limit": limit,
                "total": total,
                "pages": math.ceil(total / limit),
                "has_next": offset + len(rows) < total,
                "has_prev": page > 1,
            },
            "metadata": {
                "saved_count": sum(1 for a in rows if a.is_saved),
                "unsaved_count": sum(1 for a in rows if not a.is_saved),
                "total_technologies": sum(len(a.extracted_technologies or []) for a in rows),
                "avg_overall_match": (
                    round_half_up(sum(e["summary"]["avg_match"] for e in entries) / len(entries)) if entries else 0
                ),
            },
        })


class CVAnalysisDetailAPIView(APIView):
    permission_classes = [IsAuthenticated]

    @extend_schema(summary="Get an analysis", responses=CVAnalysisSerializer)
    def get(self, request, pk, *args, **kwargs):
        analysis = _get_owned(request, pk)
        if analysis is None:
            return Response({"detail": "CV analysis not found"}, status=status.HTTP_404_NOT_FOUND)
        return Response(CVAnalysisSerializer(analysis).data)

    @extend_schema(summary="Delete an analysis", request=None)
    def delete(self, request, pk, *args, **kwargs):
        analysis = _get_owned(request, pk)
        if analysis is None:
            return Response(
                {"detail": "Analysis not found or you do not have permission to delete it"},
                status=status.HTTP_404_NOT_FOUND,
            )
        deleted = {
            "id": analysis.id,
            "analysis_count": len(analysis.results or []),
            "was_saved": analysis.is_saved,
            "technologies_count": len(analysis.extracted_technologies or []),
        }
        analysis.delete()
        return Response({"detail": "Analysis deleted successfully", "deleted_analysis": deleted})


class CVAnalysisToggleSaveAPIView(APIView):
    permission_classes = [IsAuthenticated]

    @extend_schema(summary="Set the saved flag of an analysis", request=CVToggleSaveIn)
    def patch(self, request, pk, *args, **kwargs):
        s = CVToggleSaveIn(data=request.data)
        s.is_valid(raise_exception=True)
        analysis = _get_owned(request, pk)
        if analysis is None:
            return Response({"detail": "CV analysis not found"}, status=status.HTTP_404_NOT_FOUND)
        analysis.is_saved = s.validated_data["is_saved"]
        analysis.save(update_fields=["is_saved", "updated_at"])
        return Response({"id": analysis.id, "is_saved": analysis.is_saved})


class TechnologyStatsAPIView(APIView):
    permission_classes = [IsAuthenticated]

    @extend_schema(summary="Technology statistics across analyses")
    def get(self, request, *args, **kwargs):
        lists = CVAnalysis.objects.filter(user=request.user).values_list("extracted_technologies", flat=True)
        return Response(cv.technology_stats(list(lists)))
