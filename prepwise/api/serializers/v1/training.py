from rest_framework import serializers

from prepwise.api.models import TrainingBooking, TrainingProgram, TrainingSlot


class TrainingSlotSerializer(serializers.ModelSerializer):
    class Meta:
        model = TrainingSlot
        fields = ("id", "date", "time", "available", "order")
        read_only_fields = fields


class TrainingProgramSerializer(serializers.ModelSerializer):
    schedule = TrainingSlotSerializer(source="slots", many=True, read_only=True)

    class Meta:
        model = TrainingProgram
        fields = (
            "id",
            "title",
            "category",
            "skill_type",
            "target_skill",
            "type",
            "duration",
            "group_size",
            "level",
            "price",
            "instructor",
            "rating",
            "description",
            "features",
            "schedule",
        )
        read_only_fields = fields


class TrainingListQuery(serializers.Serializer):
    category = serializers.CharField(required=False, allow_blank=True, default="")
    search = serializers.CharField(required=False, allow_blank=True, default="")


class BookingIn(serializers.Serializer):
    date = serializers.DateField(input_formats=["%Y-%m-%d", "iso-8601"])
    time = serializers.CharField(max_length=50)


class TrainingBookingSerializer(serializers.ModelSerializer):
    training_id = serializers.IntegerField(source="slot.program_id", read_only=True)
    training_title = serializers.CharField(source="slot.program.title", read_only=True)
    date = serializers.DateField(source="slot.date", read_only=True)
    time = serializers.CharField(source="slot.time", read_only=True)

    class Meta:
        model = TrainingBooking
        fields = ("id", "training_id", "training_title", "date", "time", "created_at")
        read_only_fields = fields
