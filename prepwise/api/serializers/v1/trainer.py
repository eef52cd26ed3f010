from rest_framework import serializers

from prepwise.api.models import Trainer, TrainerReview


class ExperienceSerializer(serializers.Serializer):
    title = serializers.CharField(max_length=100)
    company = serializers.CharField(max_length=100)
    years = serializers.IntegerField(min_value=0)


class EducationSerializer(serializers.Serializer):
    degree = serializers.CharField(max_length=100)
    institution = serializers.CharField(max_length=100)
    year_of_completion = serializers.IntegerField(min_value=1900, max_value=2100)


class TrainerSerializer(serializers.ModelSerializer):
    specialization_skills = serializers.ListField(child=serializers.CharField(allow_blank=True), required=False)
    experiences = ExperienceSerializer(many=True, required=False)
    education = EducationSerializer(many=True, required=False)
    experience_years = serializers.IntegerField(read_only=True)
    highest_education = serializers.DictField(read_only=True, allow_null=True)

    class Meta:
        model = Trainer
        fields = (
            "id",
            "trainer_id",
            "name",
            "email",
            "contact",
            "specialization_skills",
            "experiences",
            "education",
            "experience_years",
            "highest_education",
            "rating_average",
            "rating_count",
            "created_at",
            "updated_at",
        )
        read_only_fields = ("id", "rating_average", "rating_count", "created_at", "updated_at")

    def validate_email(self, value):
        return value.strip().lower()

    @staticmethod
    def _plain(validated_data):
        for key in ("experiences", "education"):
            if key in validated_data:
                validated_data[key] = [dict(item) for item in validated_data[key]]
        return validated_data

    def create(self, validated_data):
        return Trainer.objects.create(**self._plain(validated_data))

    def update(self, instance, validated_data):
        for attr, value in self._plain(validated_data).items():
            setattr(instance, attr, value)
        instance.save()
        return instance


class TrainerReviewIn(serializers.Serializer):
    rating = serializers.IntegerField(min_value=1, max_value=5)
    comment = serializers.CharField(required=False, allow_blank=True, default="", max_length=1000)


class TrainerReviewSerializer(serializers.ModelSerializer):
    user_name = serializers.CharField(source="user.name", read_only=True)

    class Meta:
        model = TrainerReview
        fields = ("id", "rating", "comment", "user_name", "created_at")
        read_only_fields = fields
