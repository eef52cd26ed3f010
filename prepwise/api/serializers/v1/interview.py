# prepwise/api/serializers/v1/interview.py
from __future__ import annotations

from rest_framework import serializers

from prepwise.api.models import InterviewResponse, InterviewSession


# ===== Create =====
class InterviewCreateIn(serializers.Serializer):
    job_title = serializers.CharField(max_length=200, help_text="Role being practised for.")
    job_description = serializers.CharField(help_text="The full text of the job description.")
    resume_text = serializers.CharField(help_text="The full text of the candidate's resume.")


class InterviewCreateOut(serializers.Serializer):
    id = serializers.UUIDField()
    status = serializers.CharField()
    questions_count = serializers.IntegerField()
    estimated_duration = serializers.IntegerField(help_text="Sum of expected durations, seconds.")


# ===== Questions =====
class QuestionSerializer(serializers.Serializer):
    question_id = serializers.CharField()
    type = serializers.ChoiceField(choices=["behavioral", "technical", "system_design", "coding"])
    question = serializers.CharField()
    category = serializers.CharField(required=False, allow_blank=True)
    difficulty = serializers.ChoiceField(choices=["easy", "medium", "hard"])
    expected_duration = serializers.IntegerField(default=120)
    follow_up_questions = serializers.ListField(child=serializers.CharField(), required=False, default=list)


class ProgressSerializer(serializers.Serializer):
    current = serializers.IntegerField()
    total = serializers.IntegerField()
    percentage = serializers.IntegerField()


class InterviewNextOut(serializers.Serializer):
    completed = serializers.BooleanField(required=False)
    message = serializers.CharField(required=False)
    question = QuestionSerializer(required=False)
    progress = ProgressSerializer(required=False)


# ===== Answer =====
class InterviewAnswerIn(serializers.Serializer):
    question_id = serializers.CharField()
    transcription = serializers.CharField(required=False, allow_blank=True, default="")
    code = serializers.CharField(required=False, allow_blank=True, default="")
    response_time = serializers.IntegerField(required=False, allow_null=True, min_value=0)
    recording_duration = serializers.IntegerField(required=False, allow_null=True, min_value=0)


class FeedbackSerializer(serializers.Serializer):
    score = serializers.IntegerField(min_value=0, max_value=100)
    strengths = serializers.ListField(child=serializers.CharField())
    improvements = serializers.ListField(child=serializers.CharField())
    detailed_analysis = serializers.CharField()
    keyword_matches = serializers.ListField(child=serializers.CharField())
    communication_clarity = serializers.IntegerField(min_value=1, max_value=10)
    technical_accuracy = serializers.IntegerField(min_value=1, max_value=10)
    structured_response = serializers.IntegerField(min_value=1, max_value=10)


class InterviewAnswerOut(serializers.Serializer):
    message = serializers.CharField()
    feedback = FeedbackSerializer()
    source = serializers.ChoiceField(choices=["ai", "local"])


# ===== Standalone analysis =====
class AnalyzeResponseIn(serializers.Serializer):
    question = serializers.CharField(required=False, allow_blank=True, default="")
    question_type = serializers.CharField(required=False, allow_blank=True, default="technical_conceptual")
    response_text = serializers.CharField(required=False, allow_blank=True, default="")
    response_time = serializers.IntegerField(required=False, allow_null=True, min_value=0)
    code = serializers.CharField(required=False, allow_blank=True, allow_null=True, default="")
    expected_duration = serializers.IntegerField(required=False, allow_null=True, min_value=0)


class AnalyzeResponseOut(serializers.Serializer):
    success = serializers.BooleanField()
    feedback = FeedbackSerializer()
    source = serializers.ChoiceField(choices=["ai", "local"])


# ===== Transcription =====
class TranscribeIn(serializers.Serializer):
    audio = serializers.FileField(required=False, allow_null=True, help_text="Recorded answer (webm, wav, mp3, m4a)")
    locale = serializers.CharField(required=False, allow_blank=True, default="", help_text="e.g. en-US")


class TranscriptionOut(serializers.Serializer):
    success = serializers.BooleanField()
    text = serializers.CharField(allow_blank=True)
    duration = serializers.FloatField(allow_null=True, help_text="Seconds.")
    confidence = serializers.FloatField(allow_null=True)


# ===== Model views =====
class InterviewResponseSerializer(serializers.ModelSerializer):
    class Meta:
        model = InterviewResponse
        fields = (
            "id",
            "question_id",
            "question",
            "transcription",
            "code",
            "response_time",
            "recording_duration",
            "submitted_at",
            "score",
            "feedback",
            "feedback_source",
        )
        read_only_fields = fields


class InterviewSessionSerializer(serializers.ModelSerializer):
    responses = InterviewResponseSerializer(many=True, read_only=True)
    estimated_duration = serializers.IntegerField(read_only=True)

    class Meta:
        model = InterviewSession
        fields = (
            "id",
            "job_title",
            "job_description",
            "resume_text",
            "questions",
            "total_questions",
            "current_question_index",
            "status",
            "started_at",
            "completed_at",
            "total_duration",
            "overall_score",
            "overall_feedback",
            "estimated_duration",
            "responses",
            "created_at",
            "updated_at",
        )
        read_only_fields = fields


class InterviewHistoryItemSerializer(serializers.ModelSerializer):
    class Meta:
        model = InterviewSession
        fields = ("id", "job_title", "status", "overall_score", "created_at", "completed_at", "total_duration")
        read_only_fields = fields


class HistoryQuery(serializers.Serializer):
    page = serializers.IntegerField(required=False, default=1, min_value=1)
    limit = serializers.IntegerField(required=False, default=10, min_value=1, max_value=100)
