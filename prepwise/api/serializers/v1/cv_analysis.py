# prepwise/api/serializers/v1/cv_analysis.py
import json

from rest_framework import serializers
from rest_framework.fields import empty

from prepwise.api.models import CVAnalysis


class JobDescriptionsField(serializers.ListField):
    """
    Accepts a JSON list, a JSON-encoded list string (multipart) or a repeated
    form field. Blank entries are dropped.
    """

    child = serializers.CharField(allow_blank=True, trim_whitespace=True)

    def get_value(self, dictionary):
        if hasattr(dictionary, "getlist"):
            values = dictionary.getlist(self.field_name)
            if not values:
                return empty
            if len(values) == 1 and isinstance(values[0], str) and values[0].lstrip().startswith("["):
                return values[0]
            return values
        return dictionary.get(self.field_name, empty)

    def to_internal_value(self, data):
        if isinstance(data, str):
            try:
                data = json.loads(data) if data.lstrip().startswith("[") else [data]
            except json.JSONDecodeError:
                self.fail("invalid")
        values = super().to_internal_value(data)
        return [v for v in values if v]


class CVAnalyzeIn(serializers.Serializer):
    resume = serializers.FileField(required=False, allow_null=True, help_text="Resume PDF")
    job_descriptions = JobDescriptionsField(required=False, default=list)


class CVAnalyzeProfileIn(serializers.Serializer):
    job_descriptions = JobDescriptionsField(required=False, default=list)


class CVSaveIn(serializers.Serializer):
    resume_hash = serializers.CharField(required=False, allow_blank=True, max_length=64, default="")
    resume_text = serializers.CharField(required=False, allow_blank=True, default="")
    job_descriptions = serializers.ListField(child=serializers.CharField(), required=False)
    results = serializers.ListField(child=serializers.DictField(), required=False)
    extracted_technologies = serializers.ListField(child=serializers.DictField(), required=False)
    should_save = serializers.BooleanField(required=False, default=True)


class CVToggleSaveIn(serializers.Serializer):
    is_saved = serializers.BooleanField()


class CVAnalysisSerializer(serializers.ModelSerializer):
    summary = serializers.SerializerMethodField()

    class Meta:
        model = CVAnalysis
        fields = (
            "id",
            "resume_hash",
            "resume_text",
            "job_descriptions",
            "results",
            "extracted_technologies",
            "is_saved",
            "used_profile_cv",
            "analysis_metadata",
            "summary",
            "created_at",
            "updated_at",
        )
        read_only_fields = fields

    def get_summary(self, obj) -> dict:
        return obj.summary()


class CVAnalysisListItemSerializer(serializers.ModelSerializer):
    average_match = serializers.IntegerField(read_only=True)
    best_match = serializers.IntegerField(read_only=True)
    total_jobs = serializers.SerializerMethodField()
    software_jobs = serializers.SerializerMethodField()
    recommendations = serializers.SerializerMethodField()

    class Meta:
        model = CVAnalysis
        fields = (
            "id",
            "resume_hash",
            "job_descriptions",
            "results",
            "is_saved",
            "used_profile_cv",
            "average_match",
            "best_match",
            "total_jobs",
            "software_jobs",
            "recommendations",
            "created_at",
            "updated_at",
        )
        read_only_fields = fields

    def get_total_jobs(self, obj) -> int:
        return len(obj.results or [])

    def get_software_jobs(self, obj) -> int:
        return len(obj.software_results)

    def get_recommendations(self, obj) -> dict:
        return obj.combined_recommendations()
