from __future__ import annotations

import uuid

from django.conf import settings
from django.db import models

from prepwise.api.utils.common_utils import round_half_up


class CVAnalysis(models.Model):
    """A resume compared against one or more job descriptions."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="cv_analyses",
        db_index=True,
    )
    resume_hash = models.CharField(max_length=64, help_text="sha256 of the resume text (or resume + JDs)")
    resume_text = models.TextField(blank=True, default="")
    job_descriptions = models.JSONField(default=list, blank=True)
    results = models.JSONField(default=list, blank=True)
    extracted_technologies = models.JSONField(default=list, blank=True)
    is_saved = models.BooleanField(default=False, db_index=True)
    used_profile_cv = models.BooleanField(default=False)
    analysis_metadata = models.JSONField(default=dict, blank=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "cv_analysis"
        ordering = ["-created_at"]
        constraints = [
            models.UniqueConstraint(fields=["user", "resume_hash"], name="uniq_cv_analysis_user_hash")
        ]
        indexes = [
            models.Index(fields=["user", "created_at"], name="cv_analysis_user_id_5b1c2e_idx"),
            models.Index(fields=["user", "is_saved"], name="cv_analysis_user_id_8d0f4a_idx"),
        ]

    def __str__(self) -> str:
        return f"CVAnalysis({self.id}) user={self.user_id} jobs={len(self.results or [])}"

    # ---- derived ----
    @property
    def software_results(self) -> list[dict]:
        return [r for r in (self.results or []) if not r.get("is_non_tech_role")]

    @property
    def average_match(self) -> int:
        rows = self.software_results
        if not rows:
            return 0
        return round_half_up(sum(r.get("match_percentage", 0) for r in rows) / len(rows))

    @property
    def best_match(self) -> int:
        return max((r.get("match_percentage", 0) for r in (self.results or [])), default=0)

    def combined_recommendations(self) -> dict:
        out = {"content": [], "structure": []}
        for r in self.software_results:
            out["content"].extend(r.get("content_recommendations") or [])
            out["structure"].extend(r.get("structure_recommendations") or [])
        return out

    def summary(self) -> dict:
        return {
            "total_jobs": len(self.results or []),
            "software_jobs": len(self.software_results),
            "non_tech_jobs": len(self.results or []) - len(self.software_results),
            "average_match": self.average_match,
            "best_match": self.best_match,
            "technology_count": len(self.extracted_technologies or []),
        }
