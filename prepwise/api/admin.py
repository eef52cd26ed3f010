from django.contrib import admin
from django.contrib.auth.admin import UserAdmin as BaseUserAdmin

from prepwise.api.models import (
    CVAnalysis,
    InterviewResponse,
    InterviewSession,
    Notice,
    SkillAssessment,
    Trainer,
    TrainerReview,
    TrainingBooking,
    TrainingProgram,
    TrainingSlot,
    User,
)


@admin.register(User)
class UserAdmin(BaseUserAdmin):
    list_display = ("email", "name", "account_type", "account_plan", "is_account_verified", "is_staff")
    list_filter = ("account_type", "account_plan", "is_account_verified", "is_staff")
    search_fields = ("email", "name")
    ordering = ("email",)
    fieldsets = (
        (None, {"fields": ("email", "password")}),
        (
            "Personal info",
            {"fields": ("name", "phone_number", "account_type", "account_plan", "notification_settings")},
        ),
        ("Verification", {"fields": ("is_account_verified",)}),
        ("Profile CV", {"fields": ("cv_file_name", "cv_file_size", "cv_hash", "cv_uploaded_at")}),
        (
            "Permissions",
            {
                "fields": (
                    "is_active",
                    "is_staff",
                    "is_superuser",
                    "groups",
                    "user_permissions",
                )
            },
        ),
        ("Important dates", {"fields": ("last_login", "last_active", "date_joined")}),
    )
    add_fieldsets = (
        (
            None,
            {
                "classes": ("wide",),
                "fields": ("email", "password1", "password2"),
            },
        ),
    )


@admin.register(CVAnalysis)
class CVAnalysisAdmin(admin.ModelAdmin):
    list_display = ("id", "user", "is_saved", "used_profile_cv", "created_at")
    search_fields = ("id", "resume_hash", "user__email")
    list_filter = ("is_saved", "used_profile_cv")
    ordering = ("-created_at",)


@admin.register(SkillAssessment)
class SkillAssessmentAdmin(admin.ModelAdmin):
    list_display = ("id", "user", "overall_score", "is_saved", "updated_at")
    search_fields = ("resume_hash", "user__email")
    list_filter = ("is_saved",)
    ordering = ("-updated_at",)


# === Interview ===
@admin.register(InterviewSession)
class InterviewSessionAdmin(admin.ModelAdmin):
    list_display = ("id", "user", "job_title", "status", "overall_score", "started_at", "completed_at")
    search_fields = ("id", "job_title", "user__email")
    list_filter = ("status",)
    ordering = ("-created_at",)


@admin.register(InterviewResponse)
class InterviewResponseAdmin(admin.ModelAdmin):
    list_display = ("id", "session", "question_id", "score", "feedback_source", "submitted_at")
    search_fields = ("session__id", "question", "transcription")
    list_filter = ("feedback_source",)
    ordering = ("session", "submitted_at")


@admin.register(Notice)
class NoticeAdmin(admin.ModelAdmin):
    list_display = ("title", "kind", "priority", "event_date", "source")
    search_fields = ("title", "description", "source")
    list_filter = ("kind", "priority")
    ordering = ("-event_date",)


# === Trainings ===
class TrainingSlotInline(admin.TabularInline):
    model = TrainingSlot
    fields = ("date", "time", "available", "order")
    readonly_fields = ("order",)
    extra = 0


@admin.register(TrainingProgram)
class TrainingProgramAdmin(admin.ModelAdmin):
    list_display = ("title", "category", "target_skill", "type", "level", "rating")
    search_fields = ("title", "target_skill")
    list_filter = ("category", "type")
    inlines = [TrainingSlotInline]


@admin.register(TrainingBooking)
class TrainingBookingAdmin(admin.ModelAdmin):
    list_display = ("id", "user", "slot", "created_at")
    search_fields = ("user__email", "slot__program__title")
    ordering = ("-created_at",)


@admin.register(Trainer)
class TrainerAdmin(admin.ModelAdmin):
    list_display = ("trainer_id", "name", "email", "rating_average", "rating_count")
    search_fields = ("trainer_id", "name", "email")
    ordering = ("name",)


@admin.register(TrainerReview)
class TrainerReviewAdmin(admin.ModelAdmin):
    list_display = ("trainer", "user", "rating", "created_at")
    list_filter = ("rating",)
    ordering = ("-created_at",)
