# prepwise/api/config.py
import os

# =============================================================================
# PREPWISE SERVICE SETTINGS
# =============================================================================

# ------------------------------------------------------------------------------
# AI (Azure OpenAI)
# ------------------------------------------------------------------------------
# AZURE_OPENAI_ENDPOINT, AZURE_OPENAI_API_KEY are kept in the .env file
AI_CONFIG = {
    "CHAT_DEPLOYMENT": os.getenv("AZURE_OPENAI_DEPLOYMENT_NAME", "gpt-4o-mini"),
    "API_VERSION": os.getenv("AZURE_OPENAI_API_VERSION", "2024-02-01"),
}

# ------------------------------------------------------------------------------
# Interview response scorer
# ------------------------------------------------------------------------------
SCORER_CONFIG = {
    "REMOTE_ENABLED": os.getenv("SCORER_REMOTE_ENABLED", "1") == "1",
    "TEMPERATURE": 0.3,
    "MAX_TOKENS": 1200,
}

# ------------------------------------------------------------------------------
# CV analysis
# ------------------------------------------------------------------------------
CV_CONFIG = {
    "MAX_INPUT_CHARS": 50000,
    "SIMILARITY_TRUNCATE": 4000,
    "RECOMMENDATION_TRUNCATE": 4500,
    "STORED_RESUME_CHARS": 15000,
    "MIN_RESUME_CHARS": 100,
    "MIN_JD_CHARS": 50,
    "MAX_UPLOAD_BYTES": 10 * 1024 * 1024,
    "TEMPERATURE_SIMILARITY": 0.1,
    "TEMPERATURE_RECOMMEND": 0.3,
    "MAX_TOKENS_SIMILARITY": 10,
    "MAX_TOKENS_RECOMMEND": 2500,
    "MAX_TOKENS_TECHNOLOGIES": 1500,
    "SAVED_LIST_LIMIT": 50,
}

# ------------------------------------------------------------------------------
# Interview sessions
# ------------------------------------------------------------------------------
INTERVIEW_CONFIG = {
    "DEFAULT_TOTAL_QUESTIONS": 5,
    "GENERATED_QUESTIONS": 8,
    "DEFAULT_EXPECTED_DURATION": 120,
    "CONTEXT_MAX_CHARS": 2000,
    "TEMPERATURE_QUESTIONS": 0.3,
    "TEMPERATURE_FEEDBACK": 0.3,
    "MAX_TOKENS_QUESTIONS": 2000,
    "MAX_TOKENS_FEEDBACK": 1500,
    "FALLBACK_SCORE": 70,
}

# ------------------------------------------------------------------------------
# Speech to text (Azure Speech)
# ------------------------------------------------------------------------------
# SPEECH_KEY, SPEECH_REGION are kept in the .env file
SPEECH_CONFIG = {
    "LOCALE": os.getenv("SPEECH_DEFAULT_LOCALE", "en-US"),
    "UPLOAD_DIR": os.getenv("SPEECH_UPLOAD_DIR", os.path.join("uploads", "audio")),
    "MAX_UPLOAD_BYTES": 25 * 1024 * 1024,
    "MOCK_MAX_UPLOAD_BYTES": 10 * 1024 * 1024,
    "ALLOWED_TYPES": ("audio/webm", "audio/wav", "audio/mp3", "audio/m4a"),
    "RECOGNITION_TIMEOUT": int(os.getenv("SPEECH_RECOGNITION_TIMEOUT", "300")),
    "MOCK_TEXT": (
        "Audio transcription is currently simulated. In production, this would use a "
        "speech-to-text service to convert the audio to text."
    ),
    "MOCK_CONFIDENCE": 0.95,
}

# ------------------------------------------------------------------------------
# Accounts
# ------------------------------------------------------------------------------
ACCOUNT_CONFIG = {
    "VERIFY_OTP_TTL_SECONDS": 24 * 60 * 60,
    "RESET_OTP_TTL_SECONDS": 15 * 60,
    "CV_MAX_BYTES": 10 * 1024 * 1024,
    "CV_MIN_CHARS": 100,
}

# ------------------------------------------------------------------------------
# Notices
# ------------------------------------------------------------------------------
NOTICE_CONFIG = {
    "UPCOMING_LIMIT": 10,
    "MAX_TAGS": 3,
}
