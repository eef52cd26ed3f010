import pytest
from rest_framework.test import APIClient

from prepwise.api.models import InterviewResponse, InterviewSession
from prepwise.api.services import interview_service, response_scorer

from tests.samples import NON_TECH_JD, RESUME_TEXT, SOFTWARE_JD

CREATE_URL = "/api/v1/interviews/"


class TestQuestionHelpers:
    @pytest.mark.parametrize(
        "question_type,expected",
        [
            ("coding", response_scorer.TECHNICAL_CODING),
            ("technical", response_scorer.TECHNICAL_CONCEPTUAL),
            ("system_design", response_scorer.TECHNICAL_CONCEPTUAL),
            ("behavioral", response_scorer.BEHAVIORAL),
            ("technical_coding", response_scorer.TECHNICAL_CODING),
        ],
    )
    def test_scorer_question_type(self, question_type, expected):
        assert interview_service.scorer_question_type(question_type) == expected

    def test_tech_role_detection(self):
        assert interview_service.is_tech_role(SOFTWARE_JD)
        assert not interview_service.is_tech_role(NON_TECH_JD)

    def test_default_questions_without_llm(self):
        questions = interview_service.generate_questions(RESUME_TEXT, SOFTWARE_JD)
        assert [q["question_id"] for q in questions] == ["q1", "q2", "q3", "q4", "q5"]
        assert all(q["follow_up_questions"] == [] for q in questions)

    def test_normalize_generated_questions(self):
        questions = interview_service.normalize_questions([
            {"question": "Explain closures", "type": "Technical", "expectedDuration": 90},
            {"question": "  ", "type": "coding"},
            {"questionId": "x", "question": "Reverse a list", "type": "puzzle", "difficulty": "brutal"},
            "not a dict",
        ])
        assert questions[0]["question_id"] == "q1"
        assert questions[0]["type"] == "technical"
        assert questions[0]["expected_duration"] == 90
        assert questions[1]["question_id"] == "x"
        assert questions[1]["type"] == "behavioral"
        assert questions[1]["difficulty"] == "medium"
        assert questions[1]["expected_duration"] == 120
        assert len(questions) == 2

    def test_generated_questions_used_when_valid(self, monkeypatch):
        monkeypatch.setattr(interview_service.ai_utils, "is_ready", lambda: True)
        monkeypatch.setattr(
            interview_service.ai_utils,
            "chat",
            lambda *a, **kw: '[{"question": "What is a hash map?", "type": "technical"}]',
        )
        questions = interview_service.generate_questions(RESUME_TEXT, SOFTWARE_JD)
        assert [q["question"] for q in questions] == ["What is a hash map?"]

    def test_fallback_overall_feedback(self):
        assert interview_service.fallback_overall_feedback([])["score"] == 70
        assert interview_service.fallback_overall_feedback([90, None])["score"] == 80
        assert interview_service.fallback_overall_feedback([70, 71])["score"] == 71
        feedback = interview_service.fallback_overall_feedback([50])["feedback"]
        assert feedback["recommendations"] == interview_service.FALLBACK_RECOMMENDATIONS
        assert feedback["technical_skills"]["score"] == 50


@pytest.fixture
def session(client):
    res = client.post(
        CREATE_URL,
        {"job_title": "Backend Intern", "job_description": SOFTWARE_JD, "resume_text": RESUME_TEXT},
        format="json",
    )
    assert res.status_code == 201
    return InterviewSession.objects.get(pk=res.data["id"])


def url(session, action=""):
    return f"/api/v1/interviews/{session.id}/{action + '/' if action else ''}"


@pytest.mark.django_db
class TestInterviewFlow:
    def test_create_requires_fields(self, client):
        res = client.post(CREATE_URL, {"job_title": "Intern"}, format="json")
        assert res.status_code == 400

    def test_create_rejects_non_tech_roles(self, client):
        res = client.post(
            CREATE_URL,
            {"job_title": "Nurse", "job_description": NON_TECH_JD, "resume_text": RESUME_TEXT},
            format="json",
        )
        assert res.status_code == 400
        assert res.data["detail"] == interview_service.NOT_TECH_ROLE_MESSAGE

    def test_create_summary(self, client):
        res = client.post(
            CREATE_URL,
            {"job_title": "Backend Intern", "job_description": SOFTWARE_JD, "resume_text": RESUME_TEXT},
            format="json",
        )
        assert res.data["status"] == "created"
        assert res.data["questions_count"] == 5
        assert res.data["estimated_duration"] == 750

    def test_start_once(self, client, session):
        res = client.post(url(session, "start"))
        assert res.status_code == 200
        assert res.data["question"]["question_id"] == "q1"
        assert res.data["total_questions"] == 5
        session.refresh_from_db()
        assert session.status == InterviewSession.Status.IN_PROGRESS
        assert session.started_at is not None

        res = client.post(url(session, "start"))
        assert res.status_code == 400
        assert res.data["detail"] == "Interview already started or completed"

    def test_answer_then_next(self, client, session):
        client.post(url(session, "start"))

        res = client.get(url(session, "next"))
        assert res.data["question"]["question_id"] == "q1"
        assert res.data["progress"] == {"current": 1, "total": 5, "percentage": 20}

        res = client.post(
            url(session, "answer"),
            {
                "question_id": "q1",
                "transcription": "I am a computer science student because I enjoy building projects with my team.",
                "response_time": 110,
            },
            format="json",
        )
        assert res.status_code == 200
        assert res.data["source"] == "local"
        assert 0 <= res.data["feedback"]["score"] <= 100

        stored = InterviewResponse.objects.get(session=session)
        assert stored.feedback_source == InterviewResponse.Source.LOCAL
        assert stored.score == res.data["feedback"]["score"]
        session.refresh_from_db()
        assert session.current_question_index == 1

        res = client.get(url(session, "next"))
        assert res.data["progress"] == {"current": 2, "total": 5, "percentage": 40}

    def test_progress_percentage_rounds_half_up(self, client, session):
        first = session.questions[0]
        session.questions = [dict(first, question_id=f"q{i}") for i in range(1, 9)]
        session.save()

        res = client.get(url(session, "next"))
        assert res.data["progress"] == {"current": 1, "total": 8, "percentage": 13}

    def test_answer_unknown_question(self, client, session):
        res = client.post(url(session, "answer"), {"question_id": "q99", "transcription": "hi"}, format="json")
        assert res.status_code == 400
        assert res.data["detail"] == "Question not found"

    def test_empty_answer_scores_zero(self, client, session):
        res = client.post(url(session, "answer"), {"question_id": "q3", "transcription": ""}, format="json")
        assert res.data["feedback"]["score"] == 0

    def test_all_answered(self, client, session):
        for q in session.questions:
            client.post(url(session, "answer"), {"question_id": q["question_id"], "transcription": "ok"}, format="json")
        res = client.get(url(session, "next"))
        assert res.data["completed"] is True

    def test_complete_and_feedback(self, client, session):
        client.post(url(session, "start"))
        answer = client.post(
            url(session, "answer"),
            {"question_id": "q4", "transcription": "A stack is LIFO while a queue is FIFO, for example a call stack."},
            format="json",
        )

        res = client.post(url(session, "complete"))
        assert res.status_code == 200
        assert res.data["overall_score"] == answer.data["feedback"]["score"]
        session.refresh_from_db()
        assert session.status == InterviewSession.Status.COMPLETED
        assert session.completed_at is not None

        res = client.get(url(session, "feedback"))
        assert res.data["score"] == session.overall_score
        assert res.data["responses"][0]["type"] == "technical"
        assert res.data["recommendations"] == interview_service.FALLBACK_RECOMMENDATIONS

    def test_complete_without_answers(self, client, session):
        res = client.post(url(session, "complete"))
        assert res.data["overall_score"] == 70
        assert res.data["total_duration"] == 0

    def test_cancel(self, client, session):
        res = client.post(url(session, "cancel"))
        assert res.data["status"] == "cancelled"

        client.post(url(session, "complete"))
        res = client.post(url(session, "cancel"))
        assert res.status_code == 400

    def test_other_users_session_is_hidden(self, session, other_user):
        c = APIClient()
        c.force_authenticate(user=other_user)
        assert c.get(url(session)).status_code == 404
        assert c.post(url(session, "start")).status_code == 404

    def test_detail(self, client, session):
        res = client.get(url(session))
        assert res.status_code == 200
        assert len(res.data["questions"]) == 5
        assert res.data["responses"] == []

    def test_history(self, client, session):
        for _ in range(2):
            client.post(
                CREATE_URL,
                {"job_title": "Frontend Intern", "job_description": SOFTWARE_JD, "resume_text": RESUME_TEXT},
                format="json",
            )
        res = client.get("/api/v1/interviews/history/", {"page": 2, "limit": 2})
        assert res.data["pagination"] == {"current": 2, "total": 2, "count": 1, "total_records": 3}
        assert res.data["interviews"][0]["job_title"] == "Backend Intern"


@pytest.mark.django_db
class TestAnalyzeResponse:
    def test_standalone_scoring(self, client):
        res = client.post(
            "/api/v1/interviews/analyze-response/",
            {
                "question": "Find the maximum",
                "question_type": "coding",
                "response_text": "I iterate over the array once, so the time complexity is linear.",
                "code": "for x in values:\n    best = max(best, x)",
            },
            format="json",
        )
        assert res.status_code == 200
        assert res.data["success"] is True
        assert res.data["source"] == "local"
        assert "Discussed algorithm complexity and performance" in res.data["feedback"]["strengths"]
