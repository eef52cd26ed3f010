# prepwise/api/models/interview.py

from __future__ import annotations

import uuid

from django.conf import settings
from django.db import models


class InterviewSession(models.Model):
    class Status(models.TextChoices):
        CREATED = "created", "Created"
        IN_PROGRESS = "in_progress", "In progress"
        COMPLETED = "completed", "Completed"
        CANCELLED = "cancelled", "Cancelled"

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="interview_sessions",
        db_index=True,
    )

    job_title = models.CharField(max_length=200)
    job_description = models.TextField()
    resume_text = models.TextField()
    # [{question_id, type, question, category, difficulty, expected_duration, follow_up_questions}]
    questions = models.JSONField(default=list, blank=True)
    total_questions = models.PositiveIntegerField(default=5)
    current_question_index = models.PositiveIntegerField(default=0)

    status = models.CharField(
        max_length=16,
        choices=Status.choices,
        default=Status.CREATED,
        db_index=True,
    )
    started_at = models.DateTimeField(null=True, blank=True)
    completed_at = models.DateTimeField(null=True, blank=True)
    total_duration = models.PositiveIntegerField(default=0, help_text="seconds")

    overall_score = models.PositiveSmallIntegerField(null=True, blank=True)
    overall_feedback = models.JSONField(default=dict, blank=True)

    created_at = models.DateTimeField(auto_now_add=True, db_index=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "interview_session"
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["user", "created_at"], name="interview_s_user_id_3e7a1f_idx"),
            models.Index(fields=["status", "created_at"], name="interview_s_status_9c2b6d_idx"),
        ]

    def __str__(self) -> str:
        return f"InterviewSession({self.id}, {self.job_title})"

    def find_question(self, question_id: str) -> dict | None:
        for q in self.questions or []:
            if q.get("question_id") == question_id:
                return q
        return None

    @property
    def estimated_duration(self) -> int:
        return sum(int(q.get("expected_duration") or 0) for q in self.questions or [])


class InterviewResponse(models.Model):
    """A candidate's answer to one session question, with its feedback."""

    class Source(models.TextChoices):
        AI = "ai", "AI"
        LOCAL = "local", "Local"

    session = models.ForeignKey(
        InterviewSession, on_delete=models.CASCADE, related_name="responses"
    )
    question_id = models.CharField(max_length=32)
    question = models.TextField()
    transcription = models.TextField(blank=True, default="")
    code = models.TextField(blank=True, default="")
    response_time = models.PositiveIntegerField(null=True, blank=True, help_text="seconds")
    recording_duration = models.PositiveIntegerField(null=True, blank=True, help_text="seconds")
    submitted_at = models.DateTimeField(auto_now_add=True)

    score = models.PositiveSmallIntegerField(default=0)
    feedback = models.JSONField(default=dict, blank=True)
    feedback_source = models.CharField(max_length=8, choices=Source.choices, default=Source.LOCAL)

    class Meta:
        db_table = "interview_response"
        ordering = ["submitted_at", "id"]

    def __str__(self):
        return f"Response {self.question_id} for Session {self.session_id}"
