from dj_rest_auth.views import LoginView as BaseLoginView
from dj_rest_auth.views import UserDetailsView
from django.db import transaction
from django.utils import timezone
from drf_spectacular.utils import extend_schema
from rest_framework import generics, status
from rest_framework.parsers import FormParser, JSONParser, MultiPartParser
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView
from rest_framework_simplejwt.tokens import RefreshToken

from prepwise.api.config import ACCOUNT_CONFIG
from prepwise.api.models import User
from prepwise.api.serializers.v1.user import (
    ChangePasswordIn,
    DeleteAccountIn,
    NotificationSettingsIn,
    ProfileCVOut,
    ProfileCVUploadIn,
    ProfileUpdateIn,
    ResetPasswordIn,
    SendResetOtpIn,
    UserDetailSerializer,
    UserRegisterSerializer,
    VerifyEmailIn,
)
from prepwise.api.services import account_service
from prepwise.api.utils.common_utils import get_logger
from prepwise.api.utils.file_utils import extract_pdf_text, is_pdf_upload

log = get_logger(__name__)

INVALID_LOGIN = "Invalid email or password. Please try again"


class UserRegisterView(generics.CreateAPIView):
    serializer_class = UserRegisterSerializer
    permission_classes = [AllowAny]

    @extend_schema(
        summary="Register",
        description="Creates a Fresher or Trainer account and returns the user with a JWT pair.",
        request=UserRegisterSerializer,
        responses={201: UserDetailSerializer},
    )
    def post(self, request, *args, **kwargs):
        s = self.get_serializer(data=request.data)
        s.is_valid(raise_exception=True)
        if User.objects.filter(email__iexact=s.validated_data["email"]).exists():
            return Response({"detail": "User already exists"}, status=status.HTTP_400_BAD_REQUEST)

        user = s.save()
        refresh = RefreshToken.for_user(user)
        log.info(f"User registered: id={user.id} type={user.account_type}")
        return Response(
            {
                "user": UserDetailSerializer(user).data,
                "access": str(refresh.access_token),
                "refresh": str(refresh),
            },
            status=status.HTTP_201_CREATED,
        )


class LoginView(BaseLoginView):
    """Email/password login; bad credentials answer 401 instead of 400."""

    def post(self, request, *args, **kwargs):
        self.request = request
        self.serializer = self.get_serializer(data=self.request.data)
        if not self.serializer.is_valid():
            errors = self.serializer.errors
            if "non_field_errors" in errors:
                return Response({"detail": INVALID_LOGIN}, status=status.HTTP_401_UNAUTHORIZED)
            return Response(errors, status=status.HTTP_400_BAD_REQUEST)

        self.login()
        User.objects.filter(pk=self.user.pk).update(last_active=timezone.now())
        return self.get_response()


class UserDetailView(UserDetailsView):
    pass


# ---------------------------------------------------------------------------
# Email verification / password reset
# ---------------------------------------------------------------------------
class SendVerifyOtpView(APIView):
    permission_classes = [IsAuthenticated]

    @extend_schema(summary="Send verification OTP", request=None)
    def post(self, request, *args, **kwargs):
        user = request.user
        if user.is_account_verified:
            return Response({"detail": "Account is already verified"}, status=status.HTTP_400_BAD_REQUEST)
        account_service.issue_verify_otp(user)
        return Response({"detail": "Verification OTP sent"})


class VerifyEmailView(APIView):
    permission_classes = [IsAuthenticated]

    @extend_schema(summary="Verify email with OTP", request=VerifyEmailIn)
    def post(self, request, *args, **kwargs):
        s = VerifyEmailIn(data=request.data)
        s.is_valid(raise_exception=True)
        try:
            account_service.verify_email(request.user, s.validated_data["otp"])
        except account_service.OtpError as e:
            return Response({"detail": str(e)}, status=status.HTTP_400_BAD_REQUEST)
        return Response({"detail": "Email verified successfully"})


class SendResetOtpView(APIView):
    authentication_classes: list = []
    permission_classes = [AllowAny]

    @extend_schema(summary="Send password reset OTP", request=SendResetOtpIn)
    def post(self, request, *args, **kwargs):
        s = SendResetOtpIn(data=request.data)
        s.is_valid(raise_exception=True)
        user = User.objects.filter(email__iexact=s.validated_data["email"]).first()
        if user is None:
            return Response({"detail": "User not found"}, status=status.HTTP_404_NOT_FOUND)
        account_service.issue_reset_otp(user)
        return Response({"detail": "Reset OTP sent"})


class ResetPasswordView(APIView):
    authentication_classes: list = []
    permission_classes = [AllowAny]

    @extend_schema(summary="Reset password with OTP", request=ResetPasswordIn)
    def post(self, request, *args, **kwargs):
        s = ResetPasswordIn(data=request.data)
        s.is_valid(raise_exception=True)
        v = s.validated_data
        user = User.objects.filter(email__iexact=v["email"]).first()
        if user is None:
            return Response({"detail": "User not found"}, status=status.HTTP_404_NOT_FOUND)
        try:
            account_service.reset_password(user, v["otp"], v["new_password"])
        except account_service.OtpError as e:
            return Response({"detail": str(e)}, status=status.HTTP_400_BAD_REQUEST)
        return Response({"detail": "Password has been reset successfully"})


# ---------------------------------------------------------------------------
# Profile
# ---------------------------------------------------------------------------
class ProfileView(APIView):
    permission_classes = [IsAuthenticated]

    @extend_schema(summary="Get profile", responses=UserDetailSerializer)
    def get(self, request, *args, **kwargs):
        return Response(UserDetailSerializer(request.user).data)

    @extend_schema(
        summary="Update profile",
        description="Updates name, phone number and account type. Unknown account types are ignored.",
        request=ProfileUpdateIn,
        responses=UserDetailSerializer,
    )
    def put(self, request, *args, **kwargs):
        s = ProfileUpdateIn(data=request.data)
        s.is_valid(raise_exception=True)
        v = s.validated_data
        user = request.user

        if v.get("name"):
            user.name = v["name"]
        if "phone_number" in v:
            user.phone_number = v["phone_number"]
        if v.get("account_type") in User.AccountType.values:
            user.account_type = v["account_type"]
        user.save(update_fields=["name", "phone_number", "account_type"])
        return Response({"detail": "Profile updated successfully", "user": UserDetailSerializer(user).data})


class ChangePasswordView(APIView):
    permission_classes = [IsAuthenticated]

    @extend_schema(summary="Change password", request=ChangePasswordIn)
    def put(self, request, *args, **kwargs):
        s = ChangePasswordIn(data=request.data)
        s.is_valid(raise_exception=True)
        current, new = s.validated_data["current_password"], s.validated_data["new_password"]

        if not current or not new:
            return Response({"detail": "Current and new passwords are required"}, status=status.HTTP_400_BAD_REQUEST)
        if len(new) < 6:
            return Response(
                {"detail": "New password must be at least 6 characters long"}, status=status.HTTP_400_BAD_REQUEST
            )
        user = request.user
        if not user.check_password(current):
            return Response({"detail": "Current password is incorrect"}, status=status.HTTP_400_BAD_REQUEST)

        user.set_password(new)
        user.save(update_fields=["password"])
        return Response({"detail": "Password updated successfully"})


class PlanUpgradeView(APIView):
    permission_classes = [IsAuthenticated]

    @extend_schema(summary="Upgrade to premium", request=None)
    def post(self, request, *args, **kwargs):
        user = request.user
        if user.account_plan == User.AccountPlan.PREMIUM:
            return Response({"detail": "Already on premium plan"}, status=status.HTTP_400_BAD_REQUEST)
        user.account_plan = User.AccountPlan.PREMIUM
        user.save(update_fields=["account_plan"])
        return Response({"detail": "Account upgraded to Premium successfully", "account_plan": user.account_plan})


class PlanDowngradeView(APIView):
    permission_classes = [IsAuthenticated]

    @extend_schema(summary="Downgrade to basic", request=None)
    def post(self, request, *args, **kwargs):
        user = request.user
        if user.account_plan == User.AccountPlan.BASIC:
            return Response({"detail": "Already on basic plan"}, status=status.HTTP_400_BAD_REQUEST)
        user.account_plan = User.AccountPlan.BASIC
        user.save(update_fields=["account_plan"])
        return Response({"detail": "Account downgraded to Basic", "account_plan": user.account_plan})


class NotificationSettingsView(APIView):
    permission_classes = [IsAuthenticated]

    @extend_schema(summary="Update notification settings", request=NotificationSettingsIn)
    def put(self, request, *args, **kwargs):
        s = NotificationSettingsIn(data=request.data)
        s.is_valid(raise_exception=True)
        user = request.user
        settings_ = dict(user.notification_settings or {})
        settings_.update(s.validated_data)
        user.notification_settings = settings_
        user.save(update_fields=["notification_settings"])
        return Response({"detail": "Notification settings updated", "notification_settings": settings_})


class DeleteAccountView(APIView):
    permission_classes = [IsAuthenticated]

    @extend_schema(
        summary="Delete account",
        description="Deletes the account and everything it owns after a password check.",
        request=DeleteAccountIn,
    )
    def delete(self, request, *args, **kwargs):
        s = DeleteAccountIn(data=request.data)
        s.is_valid(raise_exception=True)
        password = s.validated_data["password"]
        if not password:
            return Response({"detail": "Password is required"}, status=status.HTTP_400_BAD_REQUEST)
        user = request.user
        if not user.check_password(password):
            return Response({"detail": "Invalid password"}, status=status.HTTP_400_BAD_REQUEST)

        user_id = user.id
        with transaction.atomic():
            user.delete()
        log.info(f"User deleted: id={user_id}")
        return Response({"detail": "Account deleted successfully"})


# ---------------------------------------------------------------------------
# Profile CV
# ---------------------------------------------------------------------------
class ProfileCVView(APIView):
    permission_classes = [IsAuthenticated]
    parser_classes = [MultiPartParser, FormParser, JSONParser]

    @extend_schema(summary="Get profile CV", responses=ProfileCVOut)
    def get(self, request, *args, **kwargs):
        user = request.user
        if not user.has_cv:
            return Response({"detail": "No CV found in user profile"}, status=status.HTTP_404_NOT_FOUND)
        return Response(ProfileCVOut(user).data)

    @extend_schema(summary="Upload profile CV", request=ProfileCVUploadIn, responses=ProfileCVOut)
    def put(self, request, *args, **kwargs):
        upload = request.FILES.get("cv")
        if upload is None:
            return Response({"detail": "No PDF file uploaded"}, status=status.HTTP_400_BAD_REQUEST)
        if not is_pdf_upload(upload):
            return Response({"detail": "Only PDF files are allowed"}, status=status.HTTP_400_BAD_REQUEST)
        if upload.size > ACCOUNT_CONFIG["CV_MAX_BYTES"]:
            return Response({"detail": "File size must be less than 10MB"}, status=status.HTTP_400_BAD_REQUEST)

        text = extract_pdf_text(upload)
        if len(text.strip()) < ACCOUNT_CONFIG["CV_MIN_CHARS"]:
            return Response(
                {"detail": "PDF file appears to be empty or contains insufficient text content"},
                status=status.HTTP_400_BAD_REQUEST,
            )

        user = request.user
        account_service.store_profile_cv(user, text, upload.name, upload.size)
        return Response({"detail": "CV uploaded and saved successfully", "cv": ProfileCVOut(user).data})

    @extend_schema(summary="Delete profile CV", request=None)
    def delete(self, request, *args, **kwargs):
        user = request.user
        if not user.has_cv:
            return Response({"detail": "No CV found to delete"}, status=status.HTTP_404_NOT_FOUND)
        user.clear_cv()
        user.save(update_fields=["cv_text", "cv_file_name", "cv_file_size", "cv_hash", "cv_uploaded_at"])
        return Response({"detail": "CV deleted successfully"})
