# prepwise/api/services/account_service.py
from __future__ import annotations

from datetime import timedelta

from django.conf import settings
from django.core.mail import send_mail
from django.utils import timezone
from django.utils.crypto import get_random_string

from prepwise.api.config import ACCOUNT_CONFIG
from prepwise.api.utils.common_utils import get_logger, sha256_hex

log = get_logger(__name__)


class OtpError(ValueError):
    pass


VERIFY_SUBJECT = "OTP to Verify Account"
RESET_SUBJECT = "OTP to Reset Password"


def generate_otp() -> str:
    return get_random_string(6, allowed_chars="0123456789")


def _send_otp(user, subject: str, otp: str, purpose: str) -> None:
    body = (
        f"Hello {user.name or user.email},\n\n"
        f"Your one-time code to {purpose} is: {otp}\n\n"
        f"This code was requested for {user.email}. If it wasn't you, ignore this email."
    )
    send_mail(subject, body, settings.DEFAULT_FROM_EMAIL, [user.email], fail_silently=False)


def issue_verify_otp(user) -> str:
    otp = generate_otp()
    user.verify_otp = otp
    user.verify_otp_expire_at = timezone.now() + timedelta(seconds=ACCOUNT_CONFIG["VERIFY_OTP_TTL_SECONDS"])
    user.save(update_fields=["verify_otp", "verify_otp_expire_at"])
    _send_otp(user, VERIFY_SUBJECT, otp, "verify your account")
    log.info(f"Verification OTP sent to user={user.id}")
    return otp


def issue_reset_otp(user) -> str:
    otp = generate_otp()
    user.reset_otp = otp
    user.reset_otp_expire_at = timezone.now() + timedelta(seconds=ACCOUNT_CONFIG["RESET_OTP_TTL_SECONDS"])
    user.save(update_fields=["reset_otp", "reset_otp_expire_at"])
    _send_otp(user, RESET_SUBJECT, otp, "reset your password")
    log.info(f"Password reset OTP sent to user={user.id}")
    return otp


def check_otp(stored: str, expires_at, given: str) -> None:
    if not stored or stored != given:
        raise OtpError("Invalid OTP")
    if expires_at is None or expires_at < timezone.now():
        raise OtpError("OTP expired")


def verify_email(user, otp: str) -> None:
    check_otp(user.verify_otp, user.verify_otp_expire_at, otp)
    user.is_account_verified = True
    user.verify_otp = ""
    user.verify_otp_expire_at = None
    user.save(update_fields=["is_account_verified", "verify_otp", "verify_otp_expire_at"])


def reset_password(user, otp: str, new_password: str) -> None:
    check_otp(user.reset_otp, user.reset_otp_expire_at, otp)
    user.set_password(new_password)
    user.reset_otp = ""
    user.reset_otp_expire_at = None
    user.save(update_fields=["password", "reset_otp", "reset_otp_expire_at"])


def profile_cv_hash(text: str, user_id) -> str:
    day = timezone.now().date().isoformat()
    return sha256_hex(f"{text[:1000]}{user_id}{day}")[:16]


def store_profile_cv(user, text: str, file_name: str, file_size: int) -> None:
    user.cv_text = text
    user.cv_file_name = file_name
    user.cv_file_size = file_size
    user.cv_hash = profile_cv_hash(text, user.id)
    user.cv_uploaded_at = timezone.now()
    user.save(update_fields=["cv_text", "cv_file_name", "cv_file_size", "cv_hash", "cv_uploaded_at"])
    log.info(f"Profile CV stored for user={user.id} ({file_size} bytes)")
