import uuid

import django.core.validators
import django.db.models.deletion
import django.utils.timezone
from django.conf import settings
from django.db import migrations, models

import prepwise.api.models.user


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("auth", "0012_alter_user_first_name_max_length"),
    ]

    operations = [
        migrations.CreateModel(
            name="User",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("password", models.CharField(max_length=128, verbose_name="password")),
                ("last_login", models.DateTimeField(blank=True, null=True, verbose_name="last login")),
                ("is_superuser", models.BooleanField(default=False, help_text="Designates that this user has all permissions without explicitly assigning them.", verbose_name="superuser status")),
                ("email", models.EmailField(help_text="Login email", max_length=254, unique=True)),
                ("name", models.CharField(blank=True, help_text="Display name", max_length=100)),
                ("phone_number", models.CharField(blank=True, max_length=20)),
                ("account_type", models.CharField(choices=[("Fresher", "Fresher"), ("Trainer", "Trainer")], default="Fresher", max_length=16)),
                ("account_plan", models.CharField(choices=[("basic", "Basic"), ("premium", "Premium")], default="basic", max_length=16)),
                ("is_account_verified", models.BooleanField(default=False)),
                ("verify_otp", models.CharField(blank=True, default="", max_length=6)),
                ("verify_otp_expire_at", models.DateTimeField(blank=True, null=True)),
                ("reset_otp", models.CharField(blank=True, default="", max_length=6)),
                ("reset_otp_expire_at", models.DateTimeField(blank=True, null=True)),
                ("notification_settings", models.JSONField(blank=True, default=prepwise.api.models.user.default_notification_settings)),
                ("cv_text", models.TextField(blank=True, default="")),
                ("cv_file_name", models.CharField(blank=True, default="", max_length=255)),
                ("cv_file_size", models.PositiveIntegerField(blank=True, null=True)),
                ("cv_hash", models.CharField(blank=True, default="", max_length=64)),
                ("cv_uploaded_at", models.DateTimeField(blank=True, null=True)),
                ("is_active", models.BooleanField(default=True)),
                ("is_staff", models.BooleanField(default=False)),
                ("date_joined", models.DateTimeField(default=django.utils.timezone.now)),
                ("last_active", models.DateTimeField(blank=True, null=True)),
                ("groups", models.ManyToManyField(blank=True, help_text="The groups this user belongs to. A user will get all permissions granted to each of their groups.", related_name="user_set", related_query_name="user", to="auth.group", verbose_name="groups")),
                ("user_permissions", models.ManyToManyField(blank=True, help_text="Specific permissions for this user.", related_name="user_set", related_query_name="user", to="auth.permission", verbose_name="user permissions")),
            ],
            options={
                "db_table": "users",
                "ordering": ["-date_joined"],
            },
            managers=[
                ("objects", prepwise.api.models.user.UserManager()),
            ],
        ),
        migrations.CreateModel(
            name="Notice",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("title", models.CharField(max_length=255)),
                ("description", models.TextField()),
                ("event_date", models.DateTimeField(db_index=True)),
                ("priority", models.CharField(choices=[("low", "Low"), ("medium", "Medium"), ("high", "High")], default="medium", max_length=8)),
                ("kind", models.CharField(choices=[("notice", "Notice"), ("event", "Event")], db_index=True, default="notice", max_length=8)),
                ("source", models.CharField(blank=True, default="", help_text="Publisher name", max_length=100)),
                ("url", models.URLField(blank=True, default="")),
                ("location", models.CharField(blank=True, default="", max_length=255)),
                ("tags", models.JSONField(blank=True, default=list)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
            ],
            options={
                "db_table": "notice",
                "ordering": ["-event_date"],
            },
        ),
        migrations.CreateModel(
            name="Trainer",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("trainer_id", models.CharField(max_length=50, unique=True)),
                ("name", models.CharField(max_length=100)),
                ("email", models.EmailField(max_length=254, unique=True)),
                ("contact", models.CharField(max_length=20)),
                ("specialization_skills", models.JSONField(blank=True, default=list)),
                ("experiences", models.JSONField(blank=True, default=list)),
                ("education", models.JSONField(blank=True, default=list)),
                ("rating_average", models.DecimalField(decimal_places=1, default=0, max_digits=2, validators=[django.core.validators.MinValueValidator(0), django.core.validators.MaxValueValidator(5)])),
                ("rating_count", models.PositiveIntegerField(default=0)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
            ],
            options={
                "db_table": "trainer",
                "ordering": ["name"],
            },
        ),
        migrations.CreateModel(
            name="TrainingProgram",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("title", models.CharField(max_length=200)),
                ("category", models.CharField(choices=[("technical", "Technical"), ("soft", "Soft skills")], db_index=True, max_length=16)),
                ("skill_type", models.CharField(blank=True, default="", max_length=100)),
                ("target_skill", models.CharField(help_text="Skill this course improves", max_length=100)),
                ("type", models.CharField(choices=[("group", "Group"), ("one-on-one", "One-on-one")], default="group", max_length=16)),
                ("duration", models.CharField(blank=True, default="", max_length=50)),
                ("group_size", models.CharField(blank=True, default="", max_length=50)),
                ("level", models.CharField(blank=True, default="", max_length=50)),
                ("price", models.CharField(blank=True, default="", max_length=50)),
                ("instructor", models.CharField(blank=True, default="", max_length=100)),
                ("rating", models.DecimalField(decimal_places=1, default=0, max_digits=2)),
                ("description", models.TextField(blank=True, default="")),
                ("features", models.JSONField(blank=True, default=list)),
            ],
            options={
                "db_table": "training_program",
                "ordering": ["id"],
            },
        ),
        migrations.CreateModel(
            name="CVAnalysis",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("resume_hash", models.CharField(help_text="sha256 of the resume text (or resume + JDs)", max_length=64)),
                ("resume_text", models.TextField(blank=True, default="")),
                ("job_descriptions", models.JSONField(blank=True, default=list)),
                ("results", models.JSONField(blank=True, default=list)),
                ("extracted_technologies", models.JSONField(blank=True, default=list)),
                ("is_saved", models.BooleanField(db_index=True, default=False)),
                ("used_profile_cv", models.BooleanField(default=False)),
                ("analysis_metadata", models.JSONField(blank=True, default=dict)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("user", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="cv_analyses", to=settings.AUTH_USER_MODEL)),
            ],
            options={
                "db_table": "cv_analysis",
                "ordering": ["-created_at"],
                "indexes": [
                    models.Index(fields=["user", "created_at"], name="cv_analysis_user_id_5b1c2e_idx"),
                    models.Index(fields=["user", "is_saved"], name="cv_analysis_user_id_8d0f4a_idx"),
                ],
                "constraints": [
                    models.UniqueConstraint(fields=("user", "resume_hash"), name="uniq_cv_analysis_user_hash"),
                ],
            },
        ),
        migrations.CreateModel(
            name="InterviewSession",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("job_title", models.CharField(max_length=200)),
                ("job_description", models.TextField()),
                ("resume_text", models.TextField()),
                ("questions", models.JSONField(blank=True, default=list)),
                ("total_questions", models.PositiveIntegerField(default=5)),
                ("current_question_index", models.PositiveIntegerField(default=0)),
                ("status", models.CharField(choices=[("created", "Created"), ("in_progress", "In progress"), ("completed", "Completed"), ("cancelled", "Cancelled")], db_index=True, default="created", max_length=16)),
                ("started_at", models.DateTimeField(blank=True, null=True)),
                ("completed_at", models.DateTimeField(blank=True, null=True)),
                ("total_duration", models.PositiveIntegerField(default=0, help_text="seconds")),
                ("overall_score", models.PositiveSmallIntegerField(blank=True, null=True)),
                ("overall_feedback", models.JSONField(blank=True, default=dict)),
                ("created_at", models.DateTimeField(auto_now_add=True, db_index=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("user", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="interview_sessions", to=settings.AUTH_USER_MODEL)),
            ],
            options={
                "db_table": "interview_session",
                "ordering": ["-created_at"],
                "indexes": [
                    models.Index(fields=["user", "created_at"], name="interview_s_user_id_3e7a1f_idx"),
                    models.Index(fields=["status", "created_at"], name="interview_s_status_9c2b6d_idx"),
                ],
            },
        ),
        migrations.CreateModel(
            name="InterviewResponse",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("question_id", models.CharField(max_length=32)),
                ("question", models.TextField()),
                ("transcription", models.TextField(blank=True, default="")),
                ("code", models.TextField(blank=True, default="")),
                ("response_time", models.PositiveIntegerField(blank=True, help_text="seconds", null=True)),
                ("recording_duration", models.PositiveIntegerField(blank=True, help_text="seconds", null=True)),
                ("submitted_at", models.DateTimeField(auto_now_add=True)),
                ("score", models.PositiveSmallIntegerField(default=0)),
                ("feedback", models.JSONField(blank=True, default=dict)),
                ("feedback_source", models.CharField(choices=[("ai", "AI"), ("local", "Local")], default="local", max_length=8)),
                ("session", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="responses", to="api.interviewsession")),
            ],
            options={
                "db_table": "interview_response",
                "ordering": ["submitted_at", "id"],
            },
        ),
        migrations.CreateModel(
            name="SkillAssessment",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("resume_hash", models.CharField(max_length=64)),
                ("technologies", models.JSONField(default=list)),
                ("is_saved", models.BooleanField(default=True)),
                ("overall_score", models.PositiveSmallIntegerField(default=0)),
                ("metadata", models.JSONField(blank=True, default=dict)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("user", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="skill_assessments", to=settings.AUTH_USER_MODEL)),
            ],
            options={
                "db_table": "skill_assessment",
                "ordering": ["-updated_at", "-created_at"],
                "indexes": [
                    models.Index(fields=["user", "updated_at"], name="skill_asses_user_id_4f8e2a_idx"),
                ],
                "constraints": [
                    models.UniqueConstraint(fields=("user", "resume_hash"), name="uniq_skill_assessment_user_hash"),
                ],
            },
        ),
        migrations.CreateModel(
            name="TrainerReview",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("rating", models.PositiveSmallIntegerField(validators=[django.core.validators.MinValueValidator(1), django.core.validators.MaxValueValidator(5)])),
                ("comment", models.TextField(blank=True, default="")),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("trainer", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="reviews", to="api.trainer")),
                ("user", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="trainer_reviews", to=settings.AUTH_USER_MODEL)),
            ],
            options={
                "db_table": "trainer_review",
                "ordering": ["-created_at"],
            },
        ),
        migrations.CreateModel(
            name="TrainingSlot",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("order", models.PositiveIntegerField(db_index=True, editable=False, verbose_name="order")),
                ("date", models.DateField()),
                ("time", models.CharField(help_text="e.g. '9:00 AM - 12:00 PM'", max_length=50)),
                ("available", models.BooleanField(default=True)),
                ("program", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="slots", to="api.trainingprogram")),
            ],
            options={
                "db_table": "training_slot",
                "ordering": ("order",),
                "abstract": False,
            },
        ),
        migrations.CreateModel(
            name="TrainingBooking",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("slot", models.OneToOneField(on_delete=django.db.models.deletion.CASCADE, related_name="booking", to="api.trainingslot")),
                ("user", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="training_bookings", to=settings.AUTH_USER_MODEL)),
            ],
            options={
                "db_table": "training_booking",
                "ordering": ["-created_at"],
            },
        ),
    ]
