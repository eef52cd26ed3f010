from dj_rest_auth.views import LogoutView
from django.urls import include, path
from rest_framework.routers import DefaultRouter
from rest_framework_simplejwt.views import TokenRefreshView

from prepwise.api.views.v1.cv_analysis import (
    CVAnalysisDetailAPIView,
    CVAnalysisListAPIView,
    CVAnalysisToggleSaveAPIView,
    CVAnalyzeAPIView,
    CVAnalyzeProfileAPIView,
    CVSaveAPIView,
    CVSavedListAPIView,
    TechnologyStatsAPIView,
)
from prepwise.api.views.v1.notice import NoticeViewSet
from prepwise.api.views.v1.skill_assessment import (
    RatingDetailAPIView,
    RatingsListAPIView,
    RatingsStatsAPIView,
    SaveRatingsAPIView,
    SkillAssessmentHealthView,
)
from prepwise.api.views.v1.trainer import TrainerViewSet
from prepwise.api.views.v1.training import (
    MyBookingsAPIView,
    RecommendedTrainingAPIView,
    TrainingBookAPIView,
    TrainingDetailAPIView,
    TrainingListAPIView,
)
from prepwise.api.views.v1.user import (
    ChangePasswordView,
    DeleteAccountView,
    LoginView,
    NotificationSettingsView,
    PlanDowngradeView,
    PlanUpgradeView,
    ProfileCVView,
    ProfileView,
    ResetPasswordView,
    SendResetOtpView,
    SendVerifyOtpView,
    UserDetailView,
    UserRegisterView,
    VerifyEmailView,
)

# ---- Interviews (split views) ----
from prepwise.api.views.v1.interview.analyze import AnalyzeResponseAPIView
from prepwise.api.views.v1.interview.answer import InterviewSubmitAnswerAPIView
from prepwise.api.views.v1.interview.finish import InterviewCompleteAPIView, InterviewFeedbackAPIView
from prepwise.api.views.v1.interview.next import InterviewNextQuestionAPIView
from prepwise.api.views.v1.interview.session import (
    InterviewCancelAPIView,
    InterviewCreateAPIView,
    InterviewDetailAPIView,
    InterviewHistoryAPIView,
)
from prepwise.api.views.v1.interview.start import InterviewStartAPIView
from prepwise.api.views.v1.interview.transcribe import MockTranscribeAudioAPIView, TranscribeAudioAPIView


router = DefaultRouter()
router.register(r"notices", NoticeViewSet, basename="notice")
router.register(r"trainers", TrainerViewSet, basename="trainer")

urlpatterns = [
    # Router URLs
    path("", include(router.urls)),

    # ----- Auth -----
    path("auth/registration/", UserRegisterView.as_view(), name="rest_register"),
    path("auth/login/", LoginView.as_view(), name="rest_login"),
    path("auth/logout/", LogoutView.as_view(), name="rest_logout"),
    path("auth/token/refresh/", TokenRefreshView.as_view(), name="token_refresh"),
    path("auth/user/", UserDetailView.as_view(), name="auth_user_detail"),
    path("auth/send-verify-otp/", SendVerifyOtpView.as_view(), name="auth-send-verify-otp"),
    path("auth/verify-email/", VerifyEmailView.as_view(), name="auth-verify-email"),
    path("auth/send-reset-otp/", SendResetOtpView.as_view(), name="auth-send-reset-otp"),
    path("auth/reset-password/", ResetPasswordView.as_view(), name="auth-reset-password"),

    # ----- User Profile -----
    path("user/profile/", ProfileView.as_view(), name="user-profile"),
    path("user/password/", ChangePasswordView.as_view(), name="user-password"),
    path("user/plan/upgrade/", PlanUpgradeView.as_view(), name="user-plan-upgrade"),
    path("user/plan/downgrade/", PlanDowngradeView.as_view(), name="user-plan-downgrade"),
    path("user/notifications/", NotificationSettingsView.as_view(), name="user-notifications"),
    path("user/account/", DeleteAccountView.as_view(), name="user-account"),
    path("user/cv/", ProfileCVView.as_view(), name="user-cv"),

    # ----- CV Analysis -----
    path("cv-analysis/", CVAnalysisListAPIView.as_view(), name="cv-analysis-list"),
    path("cv-analysis/analyze/", CVAnalyzeAPIView.as_view(), name="cv-analysis-analyze"),
    path("cv-analysis/analyze-profile/", CVAnalyzeProfileAPIView.as_view(), name="cv-analysis-analyze-profile"),
    path("cv-analysis/save/", CVSaveAPIView.as_view(), name="cv-analysis-save"),
    path("cv-analysis/saved/", CVSavedListAPIView.as_view(), name="cv-analysis-saved"),
    path("cv-analysis/technology-stats/", TechnologyStatsAPIView.as_view(), name="cv-analysis-technology-stats"),
    path("cv-analysis/<uuid:pk>/", CVAnalysisDetailAPIView.as_view(), name="cv-analysis-detail"),
    path("cv-analysis/<uuid:pk>/save/", CVAnalysisToggleSaveAPIView.as_view(), name="cv-analysis-toggle-save"),

    # ----- Technology self-assessment -----
    path("skills/health/", SkillAssessmentHealthView.as_view(), name="skills-health"),
    path("skills/ratings/", RatingsListAPIView.as_view(), name="skills-ratings-list"),
    path("skills/ratings/save/", SaveRatingsAPIView.as_view(), name="skills-ratings-save"),
    path("skills/ratings/stats/", RatingsStatsAPIView.as_view(), name="skills-ratings-stats"),
    path("skills/ratings/<str:identifier>/", RatingDetailAPIView.as_view(), name="skills-ratings-detail"),

    # ----- Interviews -----
    path("interviews/", InterviewCreateAPIView.as_view(), name="v1-interview-create"),
    path("interviews/history/", InterviewHistoryAPIView.as_view(), name="v1-interview-history"),
    path("interviews/analyze-response/", AnalyzeResponseAPIView.as_view(), name="v1-interview-analyze-response"),
    path("interviews/transcribe/", TranscribeAudioAPIView.as_view(), name="v1-interview-transcribe"),
    path("interviews/transcribe-mock/", MockTranscribeAudioAPIView.as_view(), name="v1-interview-transcribe-mock"),
    path("interviews/<uuid:pk>/", InterviewDetailAPIView.as_view(), name="v1-interview-detail"),
    path("interviews/<uuid:pk>/start/", InterviewStartAPIView.as_view(), name="v1-interview-start"),
    path("interviews/<uuid:pk>/next/", InterviewNextQuestionAPIView.as_view(), name="v1-interview-next"),
    path("interviews/<uuid:pk>/answer/", InterviewSubmitAnswerAPIView.as_view(), name="v1-interview-answer"),
    path("interviews/<uuid:pk>/complete/", InterviewCompleteAPIView.as_view(), name="v1-interview-complete"),
    path("interviews/<uuid:pk>/cancel/", InterviewCancelAPIView.as_view(), name="v1-interview-cancel"),
    path("interviews/<uuid:pk>/feedback/", InterviewFeedbackAPIView.as_view(), name="v1-interview-feedback"),

    # ----- Trainings -----
    path("trainings/", TrainingListAPIView.as_view(), name="training-list"),
    path("trainings/recommended/", RecommendedTrainingAPIView.as_view(), name="training-recommended"),
    path("trainings/my-bookings/", MyBookingsAPIView.as_view(), name="training-my-bookings"),
    path("trainings/<int:pk>/", TrainingDetailAPIView.as_view(), name="training-detail"),
    path("trainings/<int:pk>/book/", TrainingBookAPIView.as_view(), name="training-book"),
]
