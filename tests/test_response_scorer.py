import pytest

from prepwise.api.config import SCORER_CONFIG
from prepwise.api.services import response_scorer as scorer

FIND_MAX = """def find_max(values):
    # track the largest value seen
    best = values[0]
    for v in values:
        if v > best:
            best = v
    return best
"""


class TestEmptyAnswers:
    @pytest.mark.parametrize("text", ["", "   ", None])
    def test_blank_answer_scores_zero(self, text):
        feedback, source = scorer.score_response(scorer.BEHAVIORAL, text)
        assert source == "local"
        assert feedback["score"] == 0
        assert feedback["improvements"] == ["Please provide a complete response to the question"]
        assert feedback["communication_clarity"] == 1


class TestTimeManagement:
    @pytest.mark.parametrize(
        "response_time,expected,score",
        [
            (100, 100, 10),
            (60, 100, 5),
            (20, 100, -5),
            (250, 100, -3),
            (40, 100, 0),
            (None, 100, 0),
            (100, None, 0),
        ],
    )
    def test_ratio_bands(self, response_time, expected, score):
        assert scorer.analyze_time_management(response_time, expected)["score"] == score

    def test_feedback_text(self):
        assert scorer.analyze_time_management(100, 100)["feedback"] == "Excellent time management"
        assert scorer.analyze_time_management(40, 100)["feedback"] is None


class TestCodeQuality:
    def test_function_with_loop_and_comment(self):
        result = scorer.analyze_code_quality(FIND_MAX)
        # comment 8, names 5, loop 8, function 8, length 5
        assert result["score"] == 34
        assert result["technical"] == 4
        assert "Consider adding error handling to make code more robust" in result["improvements"]

    def test_error_handling_is_rewarded(self):
        code = "try:\n    run()\nexcept ValueError:\n    raise"
        result = scorer.analyze_code_quality(code)
        assert "Included error handling" in result["strengths"]
        assert "Provide a more complete implementation" in result["improvements"]

    def test_coding_answer_without_code(self):
        result = scorer.analyze_question_specific(scorer.TECHNICAL_CODING, "I would loop over the array.", None)
        assert "Provide code implementation along with explanation" in result["improvements"]
        assert result["technical"] < 5


class TestLocalAnalysis:
    def test_star_answer(self):
        text = (
            "During my internship the situation was tense because the build kept failing. "
            "My task was to fix the pipeline before the release. "
            "I implemented a cache and led the rollout with two teammates. "
            "As a result the build time dropped by 40% and I learned a lot about teamwork."
        )
        feedback = scorer.analyze_locally(scorer.BEHAVIORAL, text)
        assert "Excellent use of STAR method (Situation, Task, Action, Result)" in feedback["strengths"]
        assert "Included quantifiable metrics and specific details" in feedback["strengths"]
        assert 50 < feedback["score"] <= 100

    def test_scores_and_ratings_are_bounded(self):
        feedback = scorer.analyze_locally(scorer.TECHNICAL_CONCEPTUAL, "um like maybe a stack is a thing")
        assert 0 <= feedback["score"] <= 100
        for key in ("communication_clarity", "technical_accuracy", "structured_response"):
            assert 1 <= feedback[key] <= 10
        assert feedback["detailed_analysis"].startswith("Your response demonstrates")

    def test_keyword_matches_reported(self):
        text = "A stack has a different performance profile; for example an api can use a database."
        feedback = scorer.analyze_locally(scorer.TECHNICAL_CONCEPTUAL, text)
        assert "performance" in feedback["keyword_matches"]
        assert "database" in feedback["keyword_matches"]

    def test_unknown_type_uses_conceptual_vocabulary(self):
        feedback = scorer.analyze_locally("system_design", "The architecture uses a database.")
        assert "architecture" in feedback["keyword_matches"]

    def test_quality_defaults(self):
        feedback = scorer.ensure_feedback_quality({
            "strengths": [],
            "improvements": ["a", "a"],
            "score": 140,
            "communication_clarity": 0,
            "technical_accuracy": 12,
            "structured_response": 5.4,
        })
        assert feedback["strengths"] == ["Attempted to answer the question completely"]
        assert feedback["improvements"] == ["a"]
        assert feedback["score"] == 100
        assert feedback["communication_clarity"] == 1
        assert feedback["technical_accuracy"] == 10
        assert feedback["structured_response"] == 5


class TestRemoteSelection:
    def test_uses_remote_when_available(self, monkeypatch):
        remote = dict(scorer.empty_feedback(), score=88)
        monkeypatch.setattr(scorer.ai_utils, "is_ready", lambda: True)
        monkeypatch.setitem(SCORER_CONFIG, "REMOTE_ENABLED", True)
        monkeypatch.setattr(scorer, "analyze_remotely", lambda *a, **kw: remote)

        feedback, source = scorer.score_response(scorer.BEHAVIORAL, "I led the project.")
        assert source == "ai"
        assert feedback["score"] == 88

    def test_remote_failure_falls_back(self, monkeypatch):
        def boom(*args, **kwargs):
            raise RuntimeError("down")

        monkeypatch.setattr(scorer.ai_utils, "is_ready", lambda: True)
        monkeypatch.setitem(SCORER_CONFIG, "REMOTE_ENABLED", True)
        monkeypatch.setattr(scorer, "analyze_remotely", boom)

        _, source = scorer.score_response(scorer.BEHAVIORAL, "I led the project.")
        assert source == "local"

    def test_remote_disabled_per_call(self, monkeypatch):
        monkeypatch.setattr(scorer.ai_utils, "is_ready", lambda: True)
        monkeypatch.setattr(scorer, "analyze_remotely", lambda *a, **kw: pytest.fail("remote called"))

        _, source = scorer.score_response(scorer.BEHAVIORAL, "I led the project.", use_remote=False)
        assert source == "local"


def words(n, word="alpha"):
    return " ".join([word] * n)


class TestCommunicationQuality:
    @pytest.mark.parametrize(
        "lengths,strength,improvement",
        [
            ((12, 20), "Good sentence structure and variety", None),
            ((3, 1), None, "Expand your sentences for more detailed explanations"),
            ((35,), None, "Break down complex sentences for better clarity"),
            ((16, 16), None, None),
            ((10, 10), None, None),
        ],
    )
    def test_sentence_length_bands(self, lengths, strength, improvement):
        sentences = [words(n) for n in lengths]
        result = scorer.analyze_communication_quality(". ".join(sentences), sentences)
        sentence_notes = {
            "Good sentence structure and variety",
            "Expand your sentences for more detailed explanations",
            "Break down complex sentences for better clarity",
        }
        noted = sentence_notes & set(result["strengths"] + result["improvements"])
        assert noted == {n for n in (strength, improvement) if n}

    @pytest.mark.parametrize(
        "text,structure,note",
        [
            ("First we plan. Second we build. Finally we ship.", 7, "Excellent logical flow and structure"),
            ("We ship it because it works.", 6, "Good use of connecting words"),
            ("We ship it.", 4, "Use more connecting words to improve flow (however, therefore, because, etc.)"),
        ],
    )
    def test_connector_bands(self, text, structure, note):
        result = scorer.analyze_communication_quality(text, [])
        assert result["structure"] == structure
        assert note in result["strengths"] + result["improvements"]

    @pytest.mark.parametrize(
        "text,clarity",
        [
            ("We ship it", 6),
            ("um uh maybe we ship it", 5),
            ("um uh like you know actually basically maybe we ship it", 3),
        ],
    )
    def test_filler_bands(self, text, clarity):
        result = scorer.analyze_communication_quality(text, [])
        assert result["clarity"] == clarity
        penalised = "Reduce hesitation words (um, like, I think) for more confident delivery" in result["improvements"]
        assert penalised is (clarity == 3)


class TestContentDepth:
    def test_keyword_score_is_capped(self):
        text = (
            "concept principle example difference advantage disadvantage use case implementation "
            "performance scalability asynchronous synchronous callback promise api database"
        )
        result = scorer.analyze_content_depth(text, scorer.TECHNICAL_CONCEPTUAL)
        assert len(result["keywords"]) > 15
        assert result["score"] == 30
        assert "Used relevant technical vocabulary and concepts" in result["strengths"]

    @pytest.mark.parametrize(
        "text,score,note",
        [
            ("the cat on the mat", 0, "Provide specific examples to illustrate your points"),
            ("such as the cat on the mat", 10, "Included specific examples"),
            ("such as the cat on the mat, for instance the dog", 15, "Provided multiple concrete examples"),
        ],
    )
    def test_example_bonus(self, text, score, note):
        result = scorer.analyze_content_depth(text, scorer.BEHAVIORAL)
        assert result["keywords"] == []
        assert result["score"] == score
        assert note in result["strengths"] + result["improvements"]


class TestBehavioralSignals:
    @pytest.mark.parametrize(
        "text,strength,score",
        [
            ("I led the group and mentored two juniors.", "Demonstrated leadership and initiative", 10),
            ("I led the group.", None, 0),
            ("The problem was an obstacle, so I solved it.", "Strong focus on problem-solving", 8),
            ("The problem was small.", None, 0),
        ],
    )
    def test_leadership_and_problem_solving(self, text, strength, score):
        result = scorer.analyze_question_specific(scorer.BEHAVIORAL, text, None)
        assert result["score"] == score
        signals = {"Demonstrated leadership and initiative", "Strong focus on problem-solving"}
        assert signals & set(result["strengths"]) == ({strength} if strength else set())


class TestDetailedAnalysis:
    @pytest.mark.parametrize(
        "score,band",
        [
            (85, "This was an excellent response with strong technical depth and clear communication."),
            (70, "This was a solid response with good technical understanding."),
            (55, "This response shows potential but has room for improvement."),
            (30, "This response needs significant improvement in several areas."),
        ],
    )
    def test_score_bands(self, score, band):
        text = scorer.build_detailed_analysis({
            "strengths": ["Clear answer"],
            "improvements": [],
            "score": score,
            "communication_clarity": 5,
        })
        assert band in text
        assert text.startswith("Your response demonstrates clear answer. ")

    def test_improvements_and_clarity(self):
        text = scorer.build_detailed_analysis({
            "strengths": [],
            "improvements": ["Add Examples", "Mention Complexity", "Ignored"],
            "score": 50,
            "communication_clarity": 7,
        })
        assert text.startswith("Your response demonstrates basic understanding of the topic. ")
        assert "focus on add examples and mention complexity. " in text
        assert "ignored" not in text
        assert text.endswith("Your communication was clear and well-structured.")

    def test_low_clarity_advice(self):
        text = scorer.build_detailed_analysis(
            {"strengths": [], "improvements": [], "score": 10, "communication_clarity": 6}
        )
        assert text.endswith("using connecting words to improve flow.")
        assert "To enhance" not in text
