from rest_framework import serializers

from prepwise.api.models import SkillAssessment


class SaveRatingsIn(serializers.Serializer):
    resume_hash = serializers.CharField(required=False, allow_blank=True, default="", max_length=64)
    # items are checked one by one so every problem can be reported together
    technologies = serializers.ListField(child=serializers.JSONField(), required=False, default=list)
    should_save = serializers.BooleanField(required=False, default=True)


class RatingsListQuery(serializers.Serializer):
    resume_hash = serializers.CharField(required=False, allow_blank=True, default="")
    include_unsaved = serializers.BooleanField(required=False, default=False)
    limit = serializers.IntegerField(required=False, default=20, min_value=1, max_value=100)
    sort = serializers.ChoiceField(
        choices=["updated_at", "created_at", "confidence"], required=False, default="updated_at"
    )


class TechnologySerializer(serializers.Serializer):
    name = serializers.CharField(max_length=100)
    category = serializers.CharField()
    confidence_level = serializers.IntegerField(min_value=1, max_value=10)


class SkillAssessmentSerializer(serializers.ModelSerializer):
    technologies = TechnologySerializer(many=True)
    level = serializers.CharField(read_only=True)
    assessment_type = serializers.CharField(read_only=True)
    is_recent = serializers.BooleanField(read_only=True)

    class Meta:
        model = SkillAssessment
        fields = (
            "id",
            "resume_hash",
            "technologies",
            "is_saved",
            "overall_score",
            "metadata",
            "level",
            "assessment_type",
            "is_recent",
            "created_at",
            "updated_at",
        )
        read_only_fields = fields
