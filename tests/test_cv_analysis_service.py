import pytest

from prepwise.api.services import cv_analysis_service as cv

from tests.samples import NON_TECH_JD, RESUME_TEXT, SOFTWARE_JD


class TestValidation:
    def test_inputs_must_be_strings(self):
        with pytest.raises(cv.CVValidationError):
            cv.validate_inputs("", "jd")
        with pytest.raises(cv.CVValidationError):
            cv.validate_inputs("resume", 42)

    def test_input_length_limit(self):
        with pytest.raises(cv.CVValidationError, match="too long"):
            cv.validate_inputs("x" * 50001, "jd")

    def test_short_resume_rejected(self):
        with pytest.raises(cv.CVValidationError):
            cv.validate_resume_content("too short")
        assert cv.validate_resume_content(RESUME_TEXT) is True

    def test_job_description_flags(self):
        flags = cv.validate_job_description(SOFTWARE_JD)
        assert flags == {"is_internship": True, "is_software": True, "is_relevant": True}
        with pytest.raises(cv.CVValidationError):
            cv.validate_job_description("Developer")


class TestTextHelpers:
    def test_markdown_to_html(self):
        assert cv.convert_markdown_to_html("**Role**\n\nBuild\nthings") == "<strong>Role</strong><br/><br/>Build<br/>things"

    def test_strip_html(self):
        assert cv.strip_html_to_text("<p>Python&nbsp;&amp; Go<br/>APIs</p>") == "Python & Go\nAPIs"

    def test_hash_is_stable(self):
        assert cv.create_resume_hash("abc") == cv.create_resume_hash("abc")
        assert len(cv.create_resume_hash("abc")) == 64

    def test_combined_hash_depends_on_job_descriptions(self):
        assert cv.combined_profile_hash("h", ["a", "b"]) != cv.combined_profile_hash("h", ["a"])


class TestSimilarity:
    def test_non_tech_role_scores_zero(self):
        assert cv.looks_non_tech(NON_TECH_JD)
        assert cv.get_similarity_score(RESUME_TEXT, NON_TECH_JD) == 0.0

    def test_tech_keyword_overrides_indicator(self):
        assert not cv.looks_non_tech("Build the hospital patient portal in React and Python.")

    def test_fallback_caps_at_point_eight(self):
        assert cv.fallback_similarity(RESUME_TEXT, SOFTWARE_JD) == 0.8

    def test_fallback_without_keywords(self):
        assert cv.fallback_similarity(RESUME_TEXT, "A great opportunity with a friendly team.") == 0.1

    def test_fallback_partial_match(self):
        assert cv.fallback_similarity("I know python", "We use python and kotlin.") == 0.5

    @pytest.mark.parametrize(
        "similarity,expected",
        [(0, 0), (0.1, 3), (0.5, 24), (0.7, 46), (0.8, 60), (0.95, 90), (1.0, 100)],
    )
    def test_match_percentage_curve(self, similarity, expected):
        assert cv.match_percentage(similarity) == expected

    def test_keywordless_fallback_rounds_half_up(self):
        similarity = cv.fallback_similarity(RESUME_TEXT, "A great opportunity with a friendly team.")
        assert cv.match_percentage(similarity) == 3

    def test_match_percentage_non_tech(self):
        assert cv.match_percentage(0.9, is_non_tech_role=True) == 0


class TestRecommendations:
    def test_defaults_without_llm(self):
        recs = cv.get_structured_recommendations(RESUME_TEXT, SOFTWARE_JD)
        assert recs["is_non_tech_role"] is False
        for field in cv.RECOMMENDATION_FIELDS:
            assert recs[field] == cv.DEFAULT_RECOMMENDATIONS[field]

    def test_non_tech_without_llm(self):
        recs = cv.get_structured_recommendations(RESUME_TEXT, NON_TECH_JD)
        assert recs == {"is_non_tech_role": True, "message": cv.NON_TECH_MESSAGE}

    def test_merge_keeps_non_empty_lists(self):
        merged = cv.merge_recommendations({"strengths": ["Clear projects"], "content_weaknesses": []})
        assert merged["strengths"] == ["Clear projects"]
        assert merged["content_weaknesses"] == cv.DEFAULT_RECOMMENDATIONS["content_weaknesses"]

    def test_no_technologies_without_llm(self):
        assert cv.extract_technologies(RESUME_TEXT) == []


class TestAnalyzeResume:
    def test_mixed_job_descriptions(self):
        outcome = cv.analyze_resume(RESUME_TEXT, [SOFTWARE_JD, NON_TECH_JD])
        software, non_tech = outcome["results"]

        assert software["match_percentage"] == 60
        assert software["is_non_tech_role"] is False
        assert software["analysis_quality"]["is_comprehensive"] is True

        assert non_tech["is_non_tech_role"] is True
        assert non_tech["match_percentage"] == 0
        assert non_tech["message"] == cv.NON_TECH_MESSAGE

        meta = outcome["metadata"]
        assert meta["total_processed"] == 2
        assert meta["non_tech_role_count"] == 1
        assert meta["software_role_count"] == 1
        assert meta["avg_match_score"] == 60
        assert outcome["recommendations"]["next_steps"] == cv.NEXT_STEPS_SOFTWARE
        assert "1 out of 2" in outcome["recommendations"]["overall_feedback"]

    def test_short_job_description_is_an_error_result(self):
        outcome = cv.analyze_resume(RESUME_TEXT, ["Python dev"])
        result = outcome["results"][0]
        assert result["has_error"] is True
        assert result["is_non_tech_role"] is True
        assert result["message"].startswith("Job description validation failed")

    def test_all_non_tech(self):
        feedback = cv.overall_feedback(2, 2)
        assert feedback["next_steps"] == cv.NEXT_STEPS_NON_TECH
        assert feedback["overall_feedback"].startswith("All provided job descriptions")


class TestStats:
    def test_normalize_result(self):
        out = cv.normalize_result({"match_percentage": 130.4, "strengths": ["a", 1], "has_error": "yes"})
        assert out["match_percentage"] == 100
        assert out["strengths"] == ["a", "1"]
        assert out["has_error"] is False
        assert out["content_recommendations"] == []

    def test_result_stats_ignores_zero_matches(self):
        results = [
            {"match_percentage": 80, "is_non_tech_role": False},
            {"match_percentage": 0, "is_non_tech_role": False},
            {"match_percentage": 0, "is_non_tech_role": True},
        ]
        stats = cv.result_stats(results, [{"name": "Python"}])
        assert stats == {
            "total_analyses": 3,
            "software_roles": 2,
            "non_tech_roles": 1,
            "avg_match_score": 80,
            "technologies_extracted": 1,
        }

    def test_technology_stats(self):
        lists = [
            [{"name": "Python", "category": "Programming Languages", "confidence_level": 8}],
            [
                {"name": "Python", "category": "Programming Languages", "confidence_level": 6},
                {"name": "Docker", "category": "Tools", "confidence_level": 5},
            ],
            [],
        ]
        stats = cv.technology_stats(lists)
        assert stats["total_analyses"] == 2
        assert stats["unique_technologies"] == 2
        python = stats["technologies"][0]
        assert python["name"] == "Python"
        assert python["count"] == 2
        assert python["avg_confidence"] == 7
        assert stats["stats"]["most_frequent_category"] == "Programming Languages"
        assert len(stats["recommendations"]) == 5
        assert not any("Python" in r for r in stats["recommendations"])

    def test_technology_stats_empty(self):
        assert cv.technology_stats([])["total_analyses"] == 0
