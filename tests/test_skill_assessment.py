import pytest

from prepwise.api.models import SkillAssessment
from prepwise.api.services import skill_assessment_service as svc

SAVE_URL = "/api/v1/skills/ratings/save/"

RATINGS = [
    {"name": "Python", "category": "Programming Languages", "confidenceLevel": 9},
    {"name": "Django", "category": "Frameworks", "confidence_level": 7},
    {"name": "Docker", "confidenceLevel": 4},
]


class TestValidateTechnologies:
    def test_cleans_and_defaults_category(self):
        cleaned, errors = svc.validate_technologies(RATINGS)
        assert errors == []
        assert cleaned[2] == {"name": "Docker", "category": "Other", "confidence_level": 4}

    def test_reports_every_bad_item(self):
        _, errors = svc.validate_technologies([
            {"name": "", "confidenceLevel": 5},
            {"name": "Go", "confidenceLevel": "high"},
            {"name": "Rust", "confidenceLevel": 11},
            {"name": "Vim", "category": "Editors", "confidenceLevel": 5},
        ])
        assert errors[0] == "Technology 1: name is required and must be a string"
        assert errors[1] == "Technology 2: confidenceLevel is required and must be a number"
        assert errors[2] == "Technology 3: confidenceLevel must be between 1 and 10"
        assert errors[3].startswith("Technology 4: category must be one of")

    def test_summary_buckets(self):
        cleaned, _ = svc.validate_technologies(RATINGS)
        assert svc.calculate_summary(cleaned) == {
            "total_technologies": 3,
            "average_confidence": 6.7,
            "expert_count": 1,
            "proficient_count": 1,
            "learning_count": 1,
        }

    def test_half_values_round_up(self):
        cleaned, errors = svc.validate_technologies([
            {"name": n, "confidenceLevel": lv} for n, lv in (("Go", 7), ("Rust", 7), ("C", 7), ("Java", 8))
        ] + [{"name": "SQL", "confidenceLevel": 6.5}])
        assert errors == []
        assert cleaned[-1]["confidence_level"] == 7
        assert svc.calculate_summary(cleaned[:4])["average_confidence"] == 7.3


@pytest.mark.django_db
class TestAssessmentModel:
    def test_overall_score_rounds_half_up(self, user):
        techs = [{"name": n, "category": "Other", "confidence_level": lv} for n, lv in (("a", 7), ("b", 7), ("c", 7), ("d", 8))]
        a = SkillAssessment.objects.create(user=user, resume_hash="tie", technologies=techs)
        assert a.overall_score == 73

    def test_save_refreshes_score_and_metadata(self, user):
        cleaned, _ = svc.validate_technologies(RATINGS)
        a = SkillAssessment.objects.create(user=user, resume_hash="h", technologies=cleaned)
        assert a.overall_score == 67
        assert a.metadata["expert_level"] == 1
        assert a.metadata["categories_count"] == 3
        assert a.level == "Advanced"
        assert a.is_recent is True

    def test_detailed_analysis(self, user):
        cleaned, _ = svc.validate_technologies(RATINGS)
        a = SkillAssessment.objects.create(user=user, resume_hash="h", technologies=cleaned)
        analysis = svc.detailed_analysis(a)
        assert [t["name"] for t in analysis["strength_areas"]] == ["Python"]
        assert [t["name"] for t in analysis["improvement_areas"]] == ["Docker"]
        assert analysis["recommendations"] == [
            "Focus on improving 1 skills with proficiency below 6/10",
            "Leverage your expertise in Python",
        ]


@pytest.mark.django_db
class TestRatingsApi:
    def test_hash_required(self, client):
        res = client.post(SAVE_URL, {"technologies": RATINGS}, format="json")
        assert res.status_code == 400
        assert res.data["detail"] == "Valid resume hash is required"

    def test_technologies_required(self, client):
        res = client.post(SAVE_URL, {"resume_hash": "h", "technologies": []}, format="json")
        assert res.status_code == 400
        assert res.data["detail"] == "At least one technology rating is required"

    def test_validation_errors(self, client):
        res = client.post(SAVE_URL, {"resume_hash": "h", "technologies": [{"name": "X"}]}, format="json")
        assert res.status_code == 400
        assert res.data["errors"] == ["Technology 1: confidenceLevel is required and must be a number"]

    def test_save_then_replace(self, client, user):
        res = client.post(SAVE_URL, {"resume_hash": "h", "technologies": RATINGS}, format="json")
        assert res.status_code == 200
        assert res.data["stats"]["distribution"] == {"expert": 1, "proficient": 1, "learning": 1}

        res = client.post(
            SAVE_URL,
            {"resume_hash": "h", "technologies": RATINGS[:1], "should_save": False},
            format="json",
        )
        assert res.data["detail"] == "Skills assessment draft updated successfully"
        a = SkillAssessment.objects.get(user=user, resume_hash="h")
        assert len(a.technologies) == 1
        assert a.is_saved is False

    def test_list_filters(self, client, user):
        client.post(SAVE_URL, {"resume_hash": "a", "technologies": RATINGS}, format="json")
        client.post(SAVE_URL, {"resume_hash": "b", "technologies": RATINGS, "should_save": False}, format="json")

        res = client.get("/api/v1/skills/ratings/")
        assert res.data["count"] == 1

        res = client.get("/api/v1/skills/ratings/", {"include_unsaved": "true", "resume_hash": "all"})
        assert res.data["count"] == 2
        assert res.data["results"][0]["top_technologies"][0]["name"] == "Python"

        res = client.get("/api/v1/skills/ratings/", {"include_unsaved": "true", "resume_hash": "b"})
        assert res.data["count"] == 1

    def test_stats(self, client):
        client.post(SAVE_URL, {"resume_hash": "a", "technologies": RATINGS}, format="json")
        res = client.get("/api/v1/skills/ratings/stats/")
        assert res.status_code == 200
        assert res.data["total_assessments"] == 1
        assert res.data["unique_technologies"] == 3
        assert res.data["average_score"] == 67

    def test_stats_empty(self, client):
        res = client.get("/api/v1/skills/ratings/stats/")
        assert res.data["total_assessments"] == 0

    def test_detail_by_id_and_hash(self, client):
        created = client.post(SAVE_URL, {"resume_hash": "hash-1", "technologies": RATINGS}, format="json")
        pk = created.data["data"]["id"]

        by_id = client.get(f"/api/v1/skills/ratings/{pk}/")
        assert by_id.status_code == 200
        assert by_id.data["analysis"]["category_breakdown"]["Frameworks"]["count"] == 1

        by_hash = client.get("/api/v1/skills/ratings/hash-1/")
        assert by_hash.status_code == 200
        assert by_hash.data["resume_hash"] == "hash-1"

    def test_detail_not_found_messages(self, client):
        res = client.get("/api/v1/skills/ratings/missing/")
        assert res.status_code == 404
        assert res.data["detail"] == "Rating not found for this resume"

        res = client.get("/api/v1/skills/ratings/3f2b8c1e-1111-4a2b-9c3d-000000000000/")
        assert res.data["detail"] == "Skills assessment not found"

    def test_delete(self, client):
        created = client.post(SAVE_URL, {"resume_hash": "h", "technologies": RATINGS}, format="json")
        pk = created.data["data"]["id"]
        res = client.delete(f"/api/v1/skills/ratings/{pk}/")
        assert res.status_code == 200
        assert res.data["deleted_assessment"]["skills_count"] == 3
        assert client.delete(f"/api/v1/skills/ratings/{pk}/").status_code == 404

    def test_health_is_public(self, anon_client):
        assert anon_client.get("/api/v1/skills/health/").status_code == 200
