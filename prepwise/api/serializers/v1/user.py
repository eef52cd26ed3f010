import re

from dj_rest_auth.serializers import LoginSerializer
from rest_framework import serializers

from prepwise.api.models import User

PASSWORD_RE = re.compile(r"^(?=.*[A-Z])(?=.*\d)(?=.*[^A-Za-z0-9]).{6,}$")
PHONE_RE = re.compile(r"^\d{10}$")

PASSWORD_RULE_MESSAGE = (
    "Password must be at least 6 characters long, include one uppercase letter, "
    "one number, and one special character"
)


class UserRegisterSerializer(serializers.ModelSerializer):
    email = serializers.EmailField()
    password = serializers.CharField(write_only=True, style={"input_type": "password"})
    phone_number = serializers.CharField()
    account_type = serializers.ChoiceField(choices=User.AccountType.choices)

    class Meta:
        model = User
        fields = ("email", "password", "name", "phone_number", "account_type")
        extra_kwargs = {
            "name": {"required": True, "allow_blank": False},
        }

    def validate_email(self, value):
        return value.strip().lower()

    def validate_password(self, value):
        if not PASSWORD_RE.match(value):
            raise serializers.ValidationError(PASSWORD_RULE_MESSAGE)
        return value

    def validate_phone_number(self, value):
        if not PHONE_RE.match(value):
            raise serializers.ValidationError("Phone number must be exactly 10 digits")
        return value

    def create(self, validated_data):
        return User.objects.create_user(**validated_data)


class EmailLoginSerializer(LoginSerializer):
    username = None
    email = serializers.EmailField(required=True)
    password = serializers.CharField(style={"input_type": "password"})

    def get_auth_user(self, username, email, password):
        return self._validate_email(email.strip().lower(), password)


class UserDetailSerializer(serializers.ModelSerializer):
    has_cv = serializers.BooleanField(read_only=True)

    class Meta:
        model = User
        fields = (
            "id",
            "email",
            "name",
            "phone_number",
            "account_type",
            "account_plan",
            "is_account_verified",
            "notification_settings",
            "has_cv",
            "cv_file_name",
            "cv_uploaded_at",
            "date_joined",
            "last_active",
        )
        read_only_fields = (
            "id",
            "email",
            "account_plan",
            "is_account_verified",
            "cv_file_name",
            "cv_uploaded_at",
            "date_joined",
            "last_active",
        )


class ProfileUpdateIn(serializers.Serializer):
    name = serializers.CharField(required=False, max_length=100)
    phone_number = serializers.CharField(required=False, allow_blank=True, max_length=20)
    # unknown values are ignored rather than rejected
    account_type = serializers.CharField(required=False, allow_blank=True)


class ChangePasswordIn(serializers.Serializer):
    current_password = serializers.CharField(required=False, allow_blank=True, default="")
    new_password = serializers.CharField(required=False, allow_blank=True, default="")


class NotificationSettingsIn(serializers.Serializer):
    email_updates = serializers.BooleanField(required=False)
    cv_analysis_alerts = serializers.BooleanField(required=False)
    skills_reminders = serializers.BooleanField(required=False)


class DeleteAccountIn(serializers.Serializer):
    password = serializers.CharField(required=False, allow_blank=True, default="")


class VerifyEmailIn(serializers.Serializer):
    otp = serializers.CharField(required=False, allow_blank=True, default="")


class SendResetOtpIn(serializers.Serializer):
    email = serializers.EmailField()


class ResetPasswordIn(serializers.Serializer):
    email = serializers.EmailField()
    otp = serializers.CharField()
    new_password = serializers.CharField(style={"input_type": "password"})


class ProfileCVUploadIn(serializers.Serializer):
    cv = serializers.FileField()


class ProfileCVOut(serializers.Serializer):
    file_name = serializers.CharField(source="cv_file_name")
    file_size = serializers.IntegerField(source="cv_file_size")
    hash = serializers.CharField(source="cv_hash")
    uploaded_at = serializers.DateTimeField(source="cv_uploaded_at")
    text_length = serializers.SerializerMethodField()
    preview = serializers.SerializerMethodField()

    def get_text_length(self, obj) -> int:
        return len(obj.cv_text or "")

    def get_preview(self, obj) -> str:
        text = obj.cv_text or ""
        return text[:500] + ("..." if len(text) > 500 else "")
