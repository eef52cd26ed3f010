import pytest
from rest_framework.test import APIClient

from prepwise.api.models import User
from prepwise.api.utils import ai_utils


@pytest.fixture(autouse=True)
def no_llm(monkeypatch):
    monkeypatch.setattr(ai_utils, "is_ready", lambda: False)


@pytest.fixture
def password():
    return "Secret1!"


@pytest.fixture
def user(db, password):
    return User.objects.create_user(
        email="fresher@example.com",
        password=password,
        name="Fresh Grad",
        phone_number="0123456789",
    )


@pytest.fixture
def other_user(db, password):
    return User.objects.create_user(email="other@example.com", password=password, name="Other")


@pytest.fixture
def staff_user(db, password):
    return User.objects.create_user(email="staff@example.com", password=password, name="Staff", is_staff=True)


@pytest.fixture
def anon_client():
    return APIClient()


@pytest.fixture
def client(user):
    c = APIClient()
    c.force_authenticate(user=user)
    return c


@pytest.fixture
def staff_client(staff_user):
    c = APIClient()
    c.force_authenticate(user=staff_user)
    return c
