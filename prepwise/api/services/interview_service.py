# prepwise/api/services/interview_service.py
from __future__ import annotations

"""
Interview practice helpers: question generation, answer type mapping and
the end-of-session summary. The LLM is optional; every step has a fixed fallback.
"""

import json
from typing import Any, Dict, List

from openai import OpenAIError

from prepwise.api.config import INTERVIEW_CONFIG
from prepwise.api.services import response_scorer
from prepwise.api.utils import ai_utils
from prepwise.api.utils.common_utils import get_logger, round_half_up, truncate

log = get_logger(__name__)

TECH_ROLE_KEYWORDS = ["software", "developer", "engineer", "programming", "coding", "intern"]
NOT_TECH_ROLE_MESSAGE = "This interview system is designed specifically for software engineering internships"

QUESTION_TYPES = ("behavioral", "technical", "system_design", "coding")
DIFFICULTIES = ("easy", "medium", "hard")

DEFAULT_QUESTIONS: List[Dict[str, Any]] = [
    {
        "question_id": "q1",
        "question": "Tell me about yourself and why you're interested in software engineering",
        "type": "behavioral",
        "category": "introduction",
        "difficulty": "easy",
        "expected_duration": 120,
    },
    {
        "question_id": "q2",
        "question": "Describe a challenging programming project you've worked on",
        "type": "behavioral",
        "category": "experience",
        "difficulty": "medium",
        "expected_duration": 180,
    },
    {
        "question_id": "q3",
        "question": "How do you approach debugging a piece of code that isn't working?",
        "type": "technical",
        "category": "debugging",
        "difficulty": "medium",
        "expected_duration": 150,
    },
    {
        "question_id": "q4",
        "question": "Explain the difference between a stack and a queue",
        "type": "technical",
        "category": "data structures",
        "difficulty": "easy",
        "expected_duration": 120,
    },
    {
        "question_id": "q5",
        "question": "How would you find the maximum element in an unsorted array?",
        "type": "technical",
        "category": "algorithms",
        "difficulty": "medium",
        "expected_duration": 180,
    },
]

FALLBACK_RECOMMENDATIONS = [
    "Practice coding problems regularly",
    "Work on explaining technical concepts clearly",
    "Build more projects to gain practical experience",
]


def is_tech_role(job_description: str) -> bool:
    lower = (job_description or "").lower()
    return any(k in lower for k in TECH_ROLE_KEYWORDS)


def scorer_question_type(question_type: str) -> str:
    """Map a session question type onto the scorer's keyword tables."""
    qtype = (question_type or "").lower()
    if qtype == "coding":
        return response_scorer.TECHNICAL_CODING
    if qtype == "behavioral":
        return response_scorer.BEHAVIORAL
    if qtype in ("technical", "system_design"):
        return response_scorer.TECHNICAL_CONCEPTUAL
    return qtype


def default_questions() -> List[Dict[str, Any]]:
    return [dict(q, follow_up_questions=[]) for q in DEFAULT_QUESTIONS]


def normalize_questions(raw: Any) -> List[Dict[str, Any]]:
    if not isinstance(raw, list):
        return []
    default_duration = INTERVIEW_CONFIG["DEFAULT_EXPECTED_DURATION"]
    out: List[Dict[str, Any]] = []
    for index, q in enumerate(raw, start=1):
        if not isinstance(q, dict) or not str(q.get("question") or "").strip():
            continue
        qtype = str(q.get("type") or "behavioral").lower()
        difficulty = str(q.get("difficulty") or "medium").lower()
        try:
            duration = int(q.get("expected_duration") or q.get("expectedDuration") or default_duration)
        except (TypeError, ValueError):
            duration = default_duration
        follow_ups = q.get("follow_up_questions") or q.get("followUpQuestions") or []
        out.append({
            "question_id": str(q.get("question_id") or q.get("questionId") or f"q{index}"),
            "question": str(q["question"]).strip(),
            "type": qtype if qtype in QUESTION_TYPES else "behavioral",
            "category": str(q.get("category") or ""),
            "difficulty": difficulty if difficulty in DIFFICULTIES else "medium",
            "expected_duration": duration if duration > 0 else default_duration,
            "follow_up_questions": [str(f) for f in follow_ups if f] if isinstance(follow_ups, list) else [],
        })
    return out


def generate_questions(resume_text: str, job_description: str) -> List[Dict[str, Any]]:
    if not ai_utils.is_ready():
        return default_questions()

    limit = INTERVIEW_CONFIG["CONTEXT_MAX_CHARS"]
    count = INTERVIEW_CONFIG["GENERATED_QUESTIONS"]
    prompt = f"""You are a senior software engineering interviewer at a top tech company.
Generate {count} interview questions for a software engineering internship candidate.

Resume Summary: {truncate(resume_text, limit)}
Job Description: {truncate(job_description, limit)}

Mix: 3 behavioral, 3 technical (technologies from the resume/job), 2 coding or problem-solving.

Respond with a JSON array only:
[{{"question_id": "q1", "question": "...", "type": "behavioral|technical|system_design|coding",
  "category": "...", "difficulty": "easy|medium|hard", "expected_duration": 120, "follow_up_questions": []}}]"""

    try:
        raw = ai_utils.chat(
            [
                {"role": "system", "content": "You are an expert technical interviewer. Respond only with valid JSON array."},
                {"role": "user", "content": prompt},
            ],
            temperature=INTERVIEW_CONFIG["TEMPERATURE_QUESTIONS"],
            max_tokens=INTERVIEW_CONFIG["MAX_TOKENS_QUESTIONS"],
        )
    except (OpenAIError, RuntimeError) as e:
        log.error(f"Generate questions error: {e}")
        return default_questions()

    questions = normalize_questions(ai_utils.safe_extract_json(raw, default=[]))
    if not questions:
        log.warning("Question generation returned nothing usable, using default questions")
        return default_questions()
    return questions


def fallback_overall_feedback(scores: List[Any]) -> Dict[str, Any]:
    """Average the response scores (missing ones count as the fallback score)."""
    base = INTERVIEW_CONFIG["FALLBACK_SCORE"]
    values = [s if s is not None else base for s in scores]
    avg = round_half_up(sum(values) / len(values)) if values else base
    return {
        "score": avg,
        "feedback": {
            "technical_skills": {
                "score": avg,
                "feedback": "Shows basic understanding of software engineering concepts",
            },
            "communication_skills": {
                "score": avg,
                "feedback": "Communicates clearly with room for improvement",
            },
            "problem_solving": {
                "score": avg,
                "feedback": "Demonstrates logical thinking approach",
            },
            "recommendations": list(FALLBACK_RECOMMENDATIONS),
        },
    }


def _valid_overall(data: Any) -> bool:
    if not isinstance(data, dict) or not isinstance(data.get("score"), (int, float)):
        return False
    feedback = data.get("feedback")
    return isinstance(feedback, dict) and isinstance(feedback.get("recommendations"), list)


def generate_overall_feedback(responses: List[Dict[str, Any]]) -> Dict[str, Any]:
    """
    responses: [{question, score, strengths, improvements}]
    Returns {score, feedback: {technical_skills, communication_skills, problem_solving, recommendations}}.
    """
    scores = [r.get("score") for r in responses]
    if not ai_utils.is_ready():
        return fallback_overall_feedback(scores)

    prompt = f"""Generate comprehensive feedback for a software engineering intern interview.

Responses Summary: {json.dumps(responses, indent=2, ensure_ascii=False)}

Respond with JSON:
{{"score": 78, "feedback": {{
  "technical_skills": {{"score": 80, "feedback": "..."}},
  "communication_skills": {{"score": 85, "feedback": "..."}},
  "problem_solving": {{"score": 70, "feedback": "..."}},
  "recommendations": ["...", "..."]}}}}

Focus on intern-level expectations and growth potential."""

    try:
        raw = ai_utils.chat(
            [
                {"role": "system", "content": "You are a senior technical interviewer providing comprehensive feedback."},
                {"role": "user", "content": prompt},
            ],
            temperature=INTERVIEW_CONFIG["TEMPERATURE_FEEDBACK"],
            max_tokens=INTERVIEW_CONFIG["MAX_TOKENS_FEEDBACK"],
        )
    except (OpenAIError, RuntimeError) as e:
        log.error(f"Overall feedback error: {e}")
        return fallback_overall_feedback(scores)

    data = ai_utils.safe_extract_json(raw, default={})
    if not _valid_overall(data):
        log.warning("Overall feedback JSON unusable, using fallback")
        return fallback_overall_feedback(scores)
    data["score"] = max(0, min(100, round_half_up(data["score"])))
    return data
