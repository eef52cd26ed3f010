from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal

from django.conf import settings
from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models, transaction


class Trainer(models.Model):
    """
    Trainer directory entry.
    experiences: [{title, company, years}]
    education:   [{degree, institution, year_of_completion}]
    """

    trainer_id = models.CharField(max_length=50, unique=True)
    name = models.CharField(max_length=100)
    email = models.EmailField(unique=True)
    contact = models.CharField(max_length=20)
    specialization_skills = models.JSONField(default=list, blank=True)
    experiences = models.JSONField(default=list, blank=True)
    education = models.JSONField(default=list, blank=True)
    rating_average = models.DecimalField(
        max_digits=2,
        decimal_places=1,
        default=0,
        validators=[MinValueValidator(0), MaxValueValidator(5)],
    )
    rating_count = models.PositiveIntegerField(default=0)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "trainer"
        ordering = ["name"]

    def __str__(self):
        return f"{self.name} ({self.trainer_id})"

    def save(self, *args, **kwargs):
        self.specialization_skills = [
            s.strip() for s in (self.specialization_skills or []) if isinstance(s, str) and s.strip()
        ]
        super().save(*args, **kwargs)

    @property
    def experience_years(self) -> int:
        return sum(int(e.get("years") or 0) for e in self.experiences or [])

    @property
    def highest_education(self) -> dict | None:
        if not self.education:
            return None
        return max(self.education, key=lambda e: int(e.get("year_of_completion") or 0))

    @transaction.atomic
    def add_review(self, user, rating: int, comment: str = "") -> "TrainerReview":
        review = TrainerReview.objects.create(trainer=self, user=user, rating=rating, comment=comment)
        ratings = list(self.reviews.values_list("rating", flat=True))
        avg = Decimal(sum(ratings)) / Decimal(len(ratings))
        self.rating_average = avg.quantize(Decimal("0.1"), rounding=ROUND_HALF_UP)
        self.rating_count = len(ratings)
        self.save(update_fields=["rating_average", "rating_count", "specialization_skills", "updated_at"])
        return review


class TrainerReview(models.Model):
    trainer = models.ForeignKey(Trainer, on_delete=models.CASCADE, related_name="reviews")
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="trainer_reviews",
    )
    rating = models.PositiveSmallIntegerField(
        validators=[MinValueValidator(1), MaxValueValidator(5)],
    )
    comment = models.TextField(blank=True, default="")
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = "trainer_review"
        ordering = ["-created_at"]

    def __str__(self):
        return f"{self.trainer.name}: {self.rating}"
