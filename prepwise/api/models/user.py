from django.contrib.auth.models import AbstractBaseUser, BaseUserManager, PermissionsMixin
from django.db import models
from django.utils import timezone


def default_notification_settings():
    return {
        "email_updates": True,
        "cv_analysis_alerts": True,
        "skills_reminders": False,
    }


class UserManager(BaseUserManager):
    use_in_migrations = True

    def _create_user(self, email, password, **extra_fields):
        if not email:
            raise ValueError("The email must be set")
        email = self.normalize_email(email).lower()
        user = self.model(email=email, **extra_fields)
        user.set_password(password)
        user.save(using=self._db)
        return user

    def create_user(self, email, password=None, **extra_fields):
        extra_fields.setdefault("is_staff", False)
        extra_fields.setdefault("is_superuser", False)
        return self._create_user(email, password, **extra_fields)

    def create_superuser(self, email, password=None, **extra_fields):
        extra_fields.setdefault("is_staff", True)
        extra_fields.setdefault("is_superuser", True)
        if extra_fields.get("is_staff") is not True:
            raise ValueError("Superuser must have is_staff=True.")
        if extra_fields.get("is_superuser") is not True:
            raise ValueError("Superuser must have is_superuser=True.")
        return self._create_user(email, password, **extra_fields)


class User(AbstractBaseUser, PermissionsMixin):
    """Email-login account for candidates and trainers."""

    class AccountType(models.TextChoices):
        FRESHER = "Fresher", "Fresher"
        TRAINER = "Trainer", "Trainer"

    class AccountPlan(models.TextChoices):
        BASIC = "basic", "Basic"
        PREMIUM = "premium", "Premium"

    email = models.EmailField(unique=True, help_text="Login email")
    name = models.CharField(max_length=100, blank=True, help_text="Display name")
    phone_number = models.CharField(max_length=20, blank=True)
    account_type = models.CharField(
        max_length=16,
        choices=AccountType.choices,
        default=AccountType.FRESHER,
    )
    account_plan = models.CharField(
        max_length=16,
        choices=AccountPlan.choices,
        default=AccountPlan.BASIC,
    )

    # email verification / password reset
    is_account_verified = models.BooleanField(default=False)
    verify_otp = models.CharField(max_length=6, blank=True, default="")
    verify_otp_expire_at = models.DateTimeField(null=True, blank=True)
    reset_otp = models.CharField(max_length=6, blank=True, default="")
    reset_otp_expire_at = models.DateTimeField(null=True, blank=True)

    notification_settings = models.JSONField(default=default_notification_settings, blank=True)

    # profile CV
    cv_text = models.TextField(blank=True, default="")
    cv_file_name = models.CharField(max_length=255, blank=True, default="")
    cv_file_size = models.PositiveIntegerField(null=True, blank=True)
    cv_hash = models.CharField(max_length=64, blank=True, default="")
    cv_uploaded_at = models.DateTimeField(null=True, blank=True)

    is_active = models.BooleanField(default=True)
    is_staff = models.BooleanField(default=False)
    date_joined = models.DateTimeField(default=timezone.now)
    last_active = models.DateTimeField(null=True, blank=True)

    objects = UserManager()

    USERNAME_FIELD = "email"
    EMAIL_FIELD = "email"
    REQUIRED_FIELDS = ["name"]

    class Meta:
        db_table = "users"
        ordering = ["-date_joined"]

    def __str__(self):
        return self.email

    @property
    def has_cv(self) -> bool:
        return bool(self.cv_text)

    def clear_cv(self):
        self.cv_text = ""
        self.cv_file_name = ""
        self.cv_file_size = None
        self.cv_hash = ""
        self.cv_uploaded_at = None
