from django.conf import settings
from django.db import models
from ordered_model.models import OrderedModel


class TrainingProgram(models.Model):
    """A bookable training course."""

    class Category(models.TextChoices):
        TECHNICAL = "technical", "Technical"
        SOFT = "soft", "Soft skills"

    class Format(models.TextChoices):
        GROUP = "group", "Group"
        ONE_ON_ONE = "one-on-one", "One-on-one"

    title = models.CharField(max_length=200)
    category = models.CharField(max_length=16, choices=Category.choices, db_index=True)
    skill_type = models.CharField(max_length=100, blank=True, default="")
    target_skill = models.CharField(max_length=100, help_text="Skill this course improves")
    type = models.CharField(max_length=16, choices=Format.choices, default=Format.GROUP)
    duration = models.CharField(max_length=50, blank=True, default="")
    group_size = models.CharField(max_length=50, blank=True, default="")
    level = models.CharField(max_length=50, blank=True, default="")
    price = models.CharField(max_length=50, blank=True, default="")
    instructor = models.CharField(max_length=100, blank=True, default="")
    rating = models.DecimalField(max_digits=2, decimal_places=1, default=0)
    description = models.TextField(blank=True, default="")
    features = models.JSONField(default=list, blank=True)

    class Meta:
        db_table = "training_program"
        ordering = ["id"]

    def __str__(self):
        return self.title


class TrainingSlot(OrderedModel):
    """A scheduled date/time for a training program."""

    program = models.ForeignKey(
        TrainingProgram,
        on_delete=models.CASCADE,
        related_name="slots",
    )
    date = models.DateField()
    time = models.CharField(max_length=50, help_text="e.g. '9:00 AM - 12:00 PM'")
    available = models.BooleanField(default=True)

    order_with_respect_to = "program"

    class Meta(OrderedModel.Meta):
        db_table = "training_slot"

    def __str__(self):
        return f"{self.program.title} @ {self.date} {self.time}"


class TrainingBooking(models.Model):
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="training_bookings",
    )
    slot = models.OneToOneField(
        TrainingSlot,
        on_delete=models.CASCADE,
        related_name="booking",
    )
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = "training_booking"
        ordering = ["-created_at"]

    def __str__(self):
        return f"{self.user} -> {self.slot}"
