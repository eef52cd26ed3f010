# prepwise/api/models/__init__.py
from .user import User
from .cv_analysis import CVAnalysis
from .skill_assessment import SkillAssessment, TechnologyCategory
from .interview import InterviewSession, InterviewResponse
from .notice import Notice
from .training import TrainingProgram, TrainingSlot, TrainingBooking
from .trainer import Trainer, TrainerReview

__all__ = [
    "User",
    "CVAnalysis",
    "SkillAssessment",
    "TechnologyCategory",
    "InterviewSession",
    "InterviewResponse",
    "Notice",
    "TrainingProgram",
    "TrainingSlot",
    "TrainingBooking",
    "Trainer",
    "TrainerReview",
]
