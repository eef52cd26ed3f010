from decimal import Decimal

import pytest

from prepwise.api.models import Trainer

URL = "/api/v1/trainers/"

PAYLOAD = {
    "trainer_id": "TR-001",
    "name": "Nimal Perera",
    "email": " Nimal@Example.com ",
    "contact": "0771234567",
    "specialization_skills": ["Django", "  ", " REST "],
    "experiences": [
        {"title": "Engineer", "company": "Acme", "years": 3},
        {"title": "Lead", "company": "Globex", "years": 4},
    ],
    "education": [
        {"degree": "BSc", "institution": "UoM", "year_of_completion": 2012},
        {"degree": "MSc", "institution": "UoC", "year_of_completion": 2016},
    ],
}


@pytest.fixture
def trainer(db):
    return Trainer.objects.create(trainer_id="TR-100", name="Anura", email="anura@example.com", contact="0700000000")


@pytest.mark.django_db
class TestTrainerDirectory:
    def test_staff_create(self, staff_client):
        res = staff_client.post(URL, PAYLOAD, format="json")
        assert res.status_code == 201
        assert res.data["email"] == "nimal@example.com"
        assert res.data["specialization_skills"] == ["Django", "REST"]
        assert res.data["experience_years"] == 7
        assert res.data["highest_education"]["degree"] == "MSc"

    def test_non_staff_cannot_create(self, client):
        assert client.post(URL, PAYLOAD, format="json").status_code == 403

    def test_bad_nested_entry(self, staff_client):
        payload = dict(PAYLOAD, experiences=[{"title": "Engineer", "company": "Acme", "years": -1}])
        res = staff_client.post(URL, payload, format="json")
        assert res.status_code == 400
        assert "experiences" in res.data

    def test_public_list_ordered_by_name(self, anon_client, trainer):
        Trainer.objects.create(trainer_id="TR-101", name="Zara", email="zara@example.com", contact="1")
        Trainer.objects.create(trainer_id="TR-102", name="Aruni", email="aruni@example.com", contact="2")
        res = anon_client.get(URL)
        assert [t["name"] for t in res.data] == ["Anura", "Aruni", "Zara"]
        assert res.data[0]["highest_education"] is None


@pytest.mark.django_db
class TestTrainerReviews:
    def test_review_updates_average(self, client, other_user, trainer):
        trainer.add_review(other_user, 5)
        res = client.post(f"{URL}{trainer.id}/review/", {"rating": 4, "comment": "Clear"}, format="json")
        assert res.status_code == 201
        assert res.data["rating_average"] == Decimal("4.5")
        assert res.data["rating_count"] == 2
        assert res.data["review"]["comment"] == "Clear"

    def test_average_rounds_to_one_decimal(self, user, other_user, staff_user, trainer):
        trainer.add_review(user, 5)
        trainer.add_review(other_user, 4)
        trainer.add_review(staff_user, 4)
        trainer.refresh_from_db()
        assert trainer.rating_average == Decimal("4.3")
        assert trainer.rating_count == 3

    def test_rating_out_of_range(self, client, trainer):
        res = client.post(f"{URL}{trainer.id}/review/", {"rating": 6}, format="json")
        assert res.status_code == 400

    def test_review_needs_login(self, anon_client, trainer):
        assert anon_client.post(f"{URL}{trainer.id}/review/", {"rating": 3}, format="json").status_code == 401
