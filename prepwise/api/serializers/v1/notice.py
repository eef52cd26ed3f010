from rest_framework import serializers

from prepwise.api.models import Notice


class NoticeSerializer(serializers.ModelSerializer):
    class Meta:
        model = Notice
        fields = (
            "id",
            "title",
            "description",
            "event_date",
            "priority",
            "kind",
            "source",
            "url",
            "location",
            "tags",
            "created_at",
        )
        read_only_fields = ("id", "created_at")

    def validate_tags(self, value):
        if not isinstance(value, list) or not all(isinstance(t, str) for t in value):
            raise serializers.ValidationError("tags must be a list of strings")
        return [t.strip() for t in value if t.strip()]


class NoticeRangeQuery(serializers.Serializer):
    start_date = serializers.DateTimeField(
        required=True,
        input_formats=["iso-8601", "%Y-%m-%d"],
        error_messages={"required": "start_date and end_date are required"},
    )
    end_date = serializers.DateTimeField(
        required=True,
        input_formats=["iso-8601", "%Y-%m-%d"],
        error_messages={"required": "start_date and end_date are required"},
    )

    def validate(self, attrs):
        if attrs["start_date"] > attrs["end_date"]:
            raise serializers.ValidationError("start_date must not be after end_date")
        return attrs
