from django.db import models


class Notice(models.Model):
    """Announcement or event shown on the notices board."""

    class Priority(models.TextChoices):
        LOW = "low", "Low"
        MEDIUM = "medium", "Medium"
        HIGH = "high", "High"

    class Kind(models.TextChoices):
        NOTICE = "notice", "Notice"
        EVENT = "event", "Event"

    title = models.CharField(max_length=255)
    description = models.TextField()
    event_date = models.DateTimeField(db_index=True)
    priority = models.CharField(max_length=8, choices=Priority.choices, default=Priority.MEDIUM)
    kind = models.CharField(max_length=8, choices=Kind.choices, default=Kind.NOTICE, db_index=True)
    source = models.CharField(max_length=100, blank=True, default="", help_text="Publisher name")
    url = models.URLField(blank=True, default="")
    location = models.CharField(max_length=255, blank=True, default="")
    tags = models.JSONField(default=list, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = "notice"
        ordering = ["-event_date"]

    def __str__(self):
        return self.title
