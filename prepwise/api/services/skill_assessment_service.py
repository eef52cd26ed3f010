# prepwise/api/services/skill_assessment_service.py
from __future__ import annotations

from datetime import timedelta
from typing import Any, Dict, Iterable, List, Tuple

from django.utils import timezone

from prepwise.api.models import SkillAssessment, TechnologyCategory
from prepwise.api.utils.common_utils import round_half_up

_CATEGORIES = {c.value for c in TechnologyCategory}


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def validate_technologies(technologies: List[Any]) -> Tuple[List[Dict[str, Any]], List[str]]:
    """
    Clean a list of raw ratings.
    Returns (cleaned, errors); errors are numbered from 1 in input order.
    """
    cleaned: List[Dict[str, Any]] = []
    errors: List[str] = []

    for i, tech in enumerate(technologies, start=1):
        if not isinstance(tech, dict):
            errors.append(f"Technology {i}: must be an object")
            continue

        name = tech.get("name")
        if not name or not isinstance(name, str) or not name.strip():
            errors.append(f"Technology {i}: name is required and must be a string")
            continue

        level = tech.get("confidence_level", tech.get("confidenceLevel"))
        if not _is_number(level):
            errors.append(f"Technology {i}: confidenceLevel is required and must be a number")
            continue
        if level < 1 or level > 10:
            errors.append(f"Technology {i}: confidenceLevel must be between 1 and 10")
            continue

        category = (tech.get("category") or TechnologyCategory.OTHER.value)
        category = category.strip() if isinstance(category, str) else category
        if category not in _CATEGORIES:
            errors.append(f"Technology {i}: category must be one of {', '.join(sorted(_CATEGORIES))}")
            continue

        cleaned.append({
            "name": name.strip()[:100],
            "category": category,
            "confidence_level": round_half_up(level),
        })

    return cleaned, errors


def calculate_summary(technologies: List[Dict[str, Any]]) -> Dict[str, Any]:
    if not technologies:
        return {
            "total_technologies": 0,
            "average_confidence": 0,
            "expert_count": 0,
            "proficient_count": 0,
            "learning_count": 0,
        }
    levels = [t["confidence_level"] for t in technologies]
    return {
        "total_technologies": len(levels),
        "average_confidence": round_half_up(sum(levels) / len(levels), 1),
        "expert_count": sum(1 for lv in levels if lv >= 8),
        "proficient_count": sum(1 for lv in levels if 6 <= lv < 8),
        "learning_count": sum(1 for lv in levels if lv < 6),
    }


def list_entry(assessment: SkillAssessment) -> Dict[str, Any]:
    techs = assessment.technologies or []
    summary = calculate_summary(techs)
    top = sorted(techs, key=lambda t: t["confidence_level"], reverse=True)[:5]
    return {
        "id": str(assessment.id),
        "resume_hash": assessment.resume_hash,
        "is_saved": assessment.is_saved,
        "assessment_type": assessment.assessment_type,
        "level": assessment.level,
        "score": assessment.overall_score,
        "total_technologies": summary["total_technologies"],
        "average_confidence": summary["average_confidence"],
        "expert_count": summary["expert_count"],
        "proficient_count": summary["proficient_count"],
        "learning_count": summary["learning_count"],
        "top_technologies": [
            {"name": t["name"], "confidence": t["confidence_level"], "category": t["category"]} for t in top
        ],
        "is_recent": assessment.is_recent,
        "created_at": assessment.created_at,
        "completed_at": assessment.updated_at,
    }


def user_stats(assessments: Iterable[SkillAssessment]) -> Dict[str, Any]:
    rows = list(assessments)
    stats: Dict[str, Any] = {
        "total_assessments": 0,
        "saved_assessments": 0,
        "draft_assessments": 0,
        "total_technologies": 0,
        "unique_technologies": 0,
        "average_score": 0,
        "expert_technologies": 0,
        "recent_assessments": 0,
        "first_assessment": None,
        "last_assessment": None,
    }
    if not rows:
        return stats

    cutoff = timezone.now() - timedelta(days=30)
    saved = sum(1 for a in rows if a.is_saved)
    all_techs = [t for a in rows for t in (a.technologies or [])]
    stats.update({
        "total_assessments": len(rows),
        "saved_assessments": saved,
        "draft_assessments": len(rows) - saved,
        "total_technologies": len(all_techs),
        "unique_technologies": len({t["name"].lower() for t in all_techs}),
        "average_score": round_half_up(sum(a.overall_score for a in rows) / len(rows), 1),
        "expert_technologies": sum(1 for t in all_techs if t["confidence_level"] >= 8),
        "recent_assessments": sum(1 for a in rows if a.updated_at and a.updated_at > cutoff),
        "first_assessment": min(a.created_at for a in rows),
        "last_assessment": max(a.updated_at for a in rows),
    })
    return stats


def detailed_analysis(assessment: SkillAssessment) -> Dict[str, Any]:
    techs = assessment.technologies or []
    strength = [t for t in techs if t["confidence_level"] >= 8]
    improvement = [t for t in techs if t["confidence_level"] < 6]
    balanced = [t for t in techs if 6 <= t["confidence_level"] < 8]

    breakdown: Dict[str, Dict[str, Any]] = {}
    for t in techs:
        bucket = breakdown.setdefault(t.get("category") or "Other", {"count": 0, "avg_confidence": 0, "skills": []})
        bucket["count"] += 1
        bucket["skills"].append(t)
    for bucket in breakdown.values():
        bucket["avg_confidence"] = round_half_up(sum(s["confidence_level"] for s in bucket["skills"]) / bucket["count"], 1)

    recommendations: List[str] = []
    if improvement:
        recommendations.append(f"Focus on improving {len(improvement)} skills with proficiency below 6/10")
    if strength:
        recommendations.append(f"Leverage your expertise in {', '.join(t['name'] for t in strength[:3])}")

    return {
        "strength_areas": strength,
        "improvement_areas": improvement,
        "balanced_areas": balanced,
        "category_breakdown": breakdown,
        "recommendations": recommendations,
    }
