# prepwise/api/services/training_service.py
from __future__ import annotations

from typing import Any, Dict, List, Tuple

from django.db import transaction
from django.db.models import Q

from prepwise.api.models import SkillAssessment, TrainingBooking, TrainingProgram, TrainingSlot
from prepwise.api.utils.common_utils import get_logger

log = get_logger(__name__)

IMPROVEMENT_THRESHOLD = 60


class SlotUnavailable(Exception):
    pass


CATALOGUE: List[Dict[str, Any]] = [
    {
        "title": "JavaScript Fundamentals Bootcamp",
        "category": "technical",
        "skill_type": "programming",
        "target_skill": "JavaScript",
        "type": "group",
        "duration": "5 sessions × 2 hours",
        "group_size": "5 participants",
        "level": "Beginner to Intermediate",
        "price": "LKR 25,000",
        "instructor": "Kasun Silva",
        "rating": "4.8",
        "description": "Comprehensive JavaScript training covering ES6+, DOM manipulation, and modern development practices.",
        "features": ["Live coding sessions", "Project-based learning", "Code reviews", "Career guidance"],
        "schedule": [
            ("2024-09-01", "10:00 AM - 12:00 PM", True),
            ("2024-09-03", "10:00 AM - 12:00 PM", True),
            ("2024-09-05", "10:00 AM - 12:00 PM", False),
            ("2024-09-08", "2:00 PM - 4:00 PM", True),
        ],
    },
    {
        "title": "React Development Mastery",
        "category": "technical",
        "skill_type": "frontend",
        "target_skill": "React",
        "type": "group",
        "duration": "5 sessions × 2.5 hours",
        "group_size": "5 participants",
        "level": "Intermediate",
        "price": "LKR 30,000",
        "instructor": "Priya Jayawardena",
        "rating": "4.9",
        "description": "Master React development with hooks, context, and modern patterns for building scalable applications.",
        "features": ["Hands-on projects", "Best practices", "Performance optimization", "Industry insights"],
        "schedule": [
            ("2024-09-10", "9:00 AM - 11:30 AM", True),
            ("2024-09-12", "9:00 AM - 11:30 AM", True),
            ("2024-09-15", "2:00 PM - 4:30 PM", True),
            ("2024-09-17", "2:00 PM - 4:30 PM", False),
        ],
    },
    {
        "title": "Node.js Backend Development",
        "category": "technical",
        "skill_type": "backend",
        "target_skill": "Node.js",
        "type": "group",
        "duration": "5 sessions × 2 hours",
        "group_size": "5 participants",
        "level": "Beginner to Advanced",
        "price": "LKR 35,000",
        "instructor": "Ravi Perera",
        "rating": "4.7",
        "description": "Complete Node.js backend development including APIs, databases, and deployment strategies.",
        "features": ["REST API development", "Database integration", "Authentication", "Deployment"],
        "schedule": [
            ("2024-09-20", "6:00 PM - 8:00 PM", True),
            ("2024-09-22", "6:00 PM - 8:00 PM", True),
            ("2024-09-25", "6:00 PM - 8:00 PM", True),
            ("2024-09-27", "6:00 PM - 8:00 PM", True),
        ],
    },
    {
        "title": "Effective Communication Skills",
        "category": "soft",
        "skill_type": "interpersonal",
        "target_skill": "Communication",
        "type": "one-on-one",
        "duration": "4 sessions × 1 hour",
        "group_size": "1-on-1 mentoring",
        "level": "All levels",
        "price": "LKR 20,000",
        "instructor": "Dr. Sanduni Fernando",
        "rating": "4.9",
        "description": "Personalized communication coaching to improve verbal, non-verbal, and written communication skills.",
        "features": ["Personalized feedback", "Public speaking practice", "Body language training", "Interview preparation"],
        "schedule": [
            ("2024-09-05", "3:00 PM - 4:00 PM", True),
            ("2024-09-06", "10:00 AM - 11:00 AM", True),
            ("2024-09-07", "2:00 PM - 3:00 PM", False),
            ("2024-09-08", "4:00 PM - 5:00 PM", True),
        ],
    },
    {
        "title": "Problem-Solving & Analytical Thinking",
        "category": "soft",
        "skill_type": "analytical",
        "target_skill": "Problem Solving",
        "type": "one-on-one",
        "duration": "3 sessions × 1.5 hours",
        "group_size": "1-on-1 coaching",
        "level": "Intermediate to Advanced",
        "price": "LKR 18,000",
        "instructor": "Prof. Chamara Wijesinghe",
        "rating": "4.8",
        "description": "Develop critical thinking and problem-solving methodologies for technical and business challenges.",
        "features": ["Case study analysis", "Logical reasoning", "Decision-making frameworks", "Creative thinking"],
        "schedule": [
            ("2024-09-10", "11:00 AM - 12:30 PM", True),
            ("2024-09-12", "3:00 PM - 4:30 PM", True),
            ("2024-09-15", "10:00 AM - 11:30 AM", True),
            ("2024-09-17", "2:00 PM - 3:30 PM", False),
        ],
    },
    {
        "title": "Leadership & Team Management",
        "category": "soft",
        "skill_type": "management",
        "target_skill": "Leadership",
        "type": "one-on-one",
        "duration": "6 sessions × 1 hour",
        "group_size": "1-on-1 executive coaching",
        "level": "Advanced",
        "price": "LKR 45,000",
        "instructor": "Dilhan Rodrigo",
        "rating": "5.0",
        "description": "Executive leadership coaching focusing on team management, strategic thinking, and organizational skills.",
        "features": ["Leadership assessment", "Team dynamics", "Conflict resolution", "Strategic planning"],
        "schedule": [
            ("2024-09-20", "9:00 AM - 10:00 AM", True),
            ("2024-09-21", "4:00 PM - 5:00 PM", True),
            ("2024-09-23", "11:00 AM - 12:00 PM", True),
            ("2024-09-25", "3:00 PM - 4:00 PM", True),
        ],
    },
]


@transaction.atomic
def seed_catalogue() -> Tuple[int, int]:
    """Create catalogue programmes missing by title. Returns (created, skipped)."""
    created = skipped = 0
    for entry in CATALOGUE:
        fields = {k: v for k, v in entry.items() if k not in ("title", "schedule")}
        program, was_created = TrainingProgram.objects.get_or_create(title=entry["title"], defaults=fields)
        if not was_created:
            skipped += 1
            continue
        for day, time, available in entry["schedule"]:
            TrainingSlot.objects.create(program=program, date=day, time=time, available=available)
        created += 1
    return created, skipped


def filter_programs(qs, category: str | None = None, search: str | None = None):
    if category and category != "all":
        qs = qs.filter(category=category)
    if search:
        qs = qs.filter(Q(title__icontains=search) | Q(target_skill__icontains=search))
    return qs


def skills_needing_improvement(user) -> List[Dict[str, Any]]:
    latest = SkillAssessment.objects.filter(user=user).order_by("-updated_at").first()
    if latest is None:
        return []
    out = []
    for t in latest.technologies or []:
        score = t["confidence_level"] * 10
        if score < IMPROVEMENT_THRESHOLD:
            out.append({"name": t["name"], "category": t.get("category"), "score": score})
    return out


def recommended_programs(user):
    """Programmes whose target skill matches one of the user's weak skills."""
    weak = skills_needing_improvement(user)
    names = {s["name"].strip().lower() for s in weak}
    programs = [p for p in TrainingProgram.objects.prefetch_related("slots") if p.target_skill.strip().lower() in names]
    return weak, programs


def book_slot(user, program: TrainingProgram, day, time: str) -> TrainingBooking:
    with transaction.atomic():
        slot = (
            TrainingSlot.objects.select_for_update()
            .filter(program=program, date=day, time=time)
            .first()
        )
        if slot is None or not slot.available:
            raise SlotUnavailable("Slot not available")
        slot.available = False
        slot.save(update_fields=["available"])
        booking = TrainingBooking.objects.create(user=user, slot=slot)
    log.info(f"Training booked: program={program.id} slot={slot.id} user={user.id}")
    return booking
