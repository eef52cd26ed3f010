from __future__ import annotations

import uuid
from datetime import timedelta

from django.conf import settings
from django.db import models
from django.utils import timezone

from prepwise.api.utils.common_utils import round_half_up


class TechnologyCategory(models.TextChoices):
    PROGRAMMING_LANGUAGES = "Programming Languages", "Programming Languages"
    FRAMEWORKS = "Frameworks", "Frameworks"
    TOOLS = "Tools", "Tools"
    DATABASES = "Databases", "Databases"
    CLOUD_SERVICES = "Cloud Services", "Cloud Services"
    OTHER = "Other", "Other"


class SkillAssessment(models.Model):
    """
    Self-assessed confidence (1-10) for each technology found on a resume.
    `technologies` holds dicts of {name, category, confidence_level}.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="skill_assessments",
        db_index=True,
    )
    resume_hash = models.CharField(max_length=64)
    technologies = models.JSONField(default=list)
    is_saved = models.BooleanField(default=True)
    overall_score = models.PositiveSmallIntegerField(default=0)
    metadata = models.JSONField(default=dict, blank=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "skill_assessment"
        ordering = ["-updated_at", "-created_at"]
        constraints = [
            models.UniqueConstraint(fields=["user", "resume_hash"], name="uniq_skill_assessment_user_hash")
        ]
        indexes = [
            models.Index(fields=["user", "updated_at"], name="skill_asses_user_id_4f8e2a_idx"),
        ]

    def __str__(self) -> str:
        return f"SkillAssessment({self.id}) {len(self.technologies or [])} technologies"

    def save(self, *args, **kwargs):
        self.refresh_metadata()
        super().save(*args, **kwargs)

    def refresh_metadata(self) -> None:
        techs = self.technologies or []
        if not techs:
            return
        levels = [t["confidence_level"] for t in techs]
        avg = sum(levels) / len(levels)
        self.metadata = {
            "total_technologies": len(techs),
            "average_confidence": avg,
            "expert_level": sum(1 for lv in levels if lv >= 8),
            "proficient_level": sum(1 for lv in levels if 6 <= lv < 8),
            "beginner_level": sum(1 for lv in levels if lv < 6),
            "categories_count": len({t.get("category") for t in techs}),
            "last_updated": timezone.now().isoformat(),
        }
        self.overall_score = round_half_up(avg * 10)

    # ---- derived views ----
    @property
    def average_confidence(self) -> float:
        techs = self.technologies or []
        if not techs:
            return 0.0
        return sum(t["confidence_level"] for t in techs) / len(techs)

    @property
    def level(self) -> str:
        avg = self.average_confidence
        if avg >= 8:
            return "Expert"
        if avg >= 6:
            return "Advanced"
        if avg >= 4:
            return "Intermediate"
        return "Beginner"

    @property
    def categories(self) -> list[str]:
        seen: list[str] = []
        for t in self.technologies or []:
            if t.get("category") not in seen:
                seen.append(t.get("category"))
        return seen

    @property
    def assessment_type(self) -> str:
        return f"{', '.join(self.categories)} Assessment"

    @property
    def is_recent(self) -> bool:
        if not self.updated_at:
            return False
        return self.updated_at >= timezone.now() - timedelta(days=30)

    def technology_distribution(self) -> dict:
        distribution: dict[str, dict] = {}
        for t in self.technologies or []:
            bucket = distribution.setdefault(
                t["category"], {"count": 0, "average_confidence": 0, "technologies": []}
            )
            bucket["count"] += 1
            bucket["technologies"].append({"name": t["name"], "confidence_level": t["confidence_level"]})
        for bucket in distribution.values():
            techs = bucket["technologies"]
            bucket["average_confidence"] = sum(x["confidence_level"] for x in techs) / len(techs)
        return distribution

    def confidence_summary(self) -> dict:
        summary = {"expert": [], "proficient": [], "intermediate": [], "beginner": []}
        for t in self.technologies or []:
            lv = t["confidence_level"]
            if lv >= 8:
                summary["expert"].append(t)
            elif lv >= 6:
                summary["proficient"].append(t)
            elif lv >= 4:
                summary["intermediate"].append(t)
            else:
                summary["beginner"].append(t)
        return summary

    def needing_improvement(self, threshold: int = 5) -> list[dict]:
        return [t for t in self.technologies or [] if t["confidence_level"] < threshold]

    def strongest(self, threshold: int = 7) -> list[dict]:
        picked = [t for t in self.technologies or [] if t["confidence_level"] >= threshold]
        return sorted(picked, key=lambda t: t["confidence_level"], reverse=True)
