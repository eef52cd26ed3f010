from datetime import date

import pytest
from django.core.management import call_command

from prepwise.api.models import SkillAssessment, TrainingBooking, TrainingProgram, TrainingSlot
from prepwise.api.services import training_service

URL = "/api/v1/trainings/"


@pytest.fixture
def catalogue(db):
    training_service.seed_catalogue()
    return {p.title: p for p in TrainingProgram.objects.all()}


@pytest.fixture
def js_course(catalogue):
    return catalogue["JavaScript Fundamentals Bootcamp"]


@pytest.mark.django_db
class TestSeeding:
    def test_seed_is_idempotent(self):
        assert training_service.seed_catalogue() == (6, 0)
        assert training_service.seed_catalogue() == (0, 6)
        assert TrainingProgram.objects.count() == 6
        assert TrainingSlot.objects.count() == 24

    def test_slots_keep_schedule_order(self, js_course):
        dates = [s.date for s in js_course.slots.all()]
        assert dates == sorted(dates)

    def test_management_command(self, capsys):
        call_command("seed_trainings")
        assert "6 created, 0 skipped" in capsys.readouterr().out


class TestListing:
    def test_list_all(self, client, catalogue):
        res = client.get(URL)
        assert res.status_code == 200
        assert len(res.data) == 6
        assert len(res.data[0]["schedule"]) == 4

    def test_filter_by_category(self, client, catalogue):
        res = client.get(URL, {"category": "soft"})
        assert {p["category"] for p in res.data} == {"soft"}
        assert len(res.data) == 3

    def test_search_matches_target_skill(self, client, catalogue):
        res = client.get(URL, {"search": "react"})
        assert [p["title"] for p in res.data] == ["React Development Mastery"]

    def test_detail(self, client, js_course):
        res = client.get(f"{URL}{js_course.id}/")
        assert res.data["target_skill"] == "JavaScript"

    def test_detail_not_found(self, client, db):
        res = client.get(f"{URL}999/")
        assert res.status_code == 404
        assert res.data["detail"] == "Training not found"

    def test_requires_auth(self, anon_client, db):
        assert anon_client.get(URL).status_code == 401


class TestBooking:
    def test_book_slot(self, client, user, js_course):
        res = client.post(
            f"{URL}{js_course.id}/book/",
            {"date": "2024-09-01", "time": "10:00 AM - 12:00 PM"},
            format="json",
        )
        assert res.status_code == 201
        assert res.data["detail"] == (
            "Booking confirmed for JavaScript Fundamentals Bootcamp on 2024-09-01 at 10:00 AM - 12:00 PM"
        )
        slot = TrainingSlot.objects.get(program=js_course, date=date(2024, 9, 1))
        assert slot.available is False
        assert TrainingBooking.objects.get(slot=slot).user == user

    def test_slot_cannot_be_booked_twice(self, client, js_course):
        payload = {"date": "2024-09-03", "time": "10:00 AM - 12:00 PM"}
        client.post(f"{URL}{js_course.id}/book/", payload, format="json")
        res = client.post(f"{URL}{js_course.id}/book/", payload, format="json")
        assert res.status_code == 400
        assert res.data["detail"] == "Slot not available"

    def test_unavailable_or_unknown_slot(self, client, js_course):
        res = client.post(
            f"{URL}{js_course.id}/book/", {"date": "2024-09-05", "time": "10:00 AM - 12:00 PM"}, format="json"
        )
        assert res.status_code == 400
        res = client.post(f"{URL}{js_course.id}/book/", {"date": "2024-09-01", "time": "noon"}, format="json")
        assert res.status_code == 400

    def test_book_unknown_training(self, client, db):
        res = client.post(f"{URL}999/book/", {"date": "2024-09-01", "time": "x"}, format="json")
        assert res.status_code == 404

    def test_my_bookings(self, client, other_user, js_course):
        client.post(f"{URL}{js_course.id}/book/", {"date": "2024-09-01", "time": "10:00 AM - 12:00 PM"}, format="json")
        other_slot = js_course.slots.get(date=date(2024, 9, 8))
        TrainingBooking.objects.create(user=other_user, slot=other_slot)

        res = client.get(f"{URL}my-bookings/")
        assert len(res.data) == 1
        assert res.data[0]["training_title"] == js_course.title
        assert res.data[0]["date"] == "2024-09-01"


class TestRecommended:
    def test_no_assessment(self, client, catalogue):
        res = client.get(f"{URL}recommended/")
        assert res.data == {"skills_needing_improvement": [], "programs": []}

    def test_weak_skills_from_latest_assessment(self, client, user, catalogue):
        SkillAssessment.objects.create(
            user=user,
            resume_hash="older",
            technologies=[{"name": "Leadership", "category": "Other", "confidence_level": 2}],
        )
        SkillAssessment.objects.create(
            user=user,
            resume_hash="latest",
            technologies=[
                {"name": "react", "category": "Frameworks", "confidence_level": 5},
                {"name": "Node.js", "category": "Frameworks", "confidence_level": 6},
                {"name": "Communication", "category": "Other", "confidence_level": 3},
            ],
        )
        res = client.get(f"{URL}recommended/")
        assert res.data["skills_needing_improvement"] == [
            {"name": "react", "category": "Frameworks", "score": 50},
            {"name": "Communication", "category": "Other", "score": 30},
        ]
        assert [p["title"] for p in res.data["programs"]] == [
            "React Development Mastery",
            "Effective Communication Skills",
        ]
