from datetime import datetime, timedelta, timezone as dt_timezone
from types import SimpleNamespace

import pytest
from django.utils import timezone

from prepwise.api.models import Notice
from prepwise.api.services import notice_feed

URL = "/api/v1/notices/"


def make_notice(**overrides):
    data = {
        "title": "Cloud meetup",
        "description": "Monthly meetup",
        "event_date": timezone.now() + timedelta(days=3),
    }
    data.update(overrides)
    return Notice.objects.create(**data)


class TestFeedHelpers:
    def test_notice_type_by_source(self):
        assert notice_feed.get_notice_type("Reuters Tech") == "government"
        assert notice_feed.get_notice_type("The Verge") == "industry"
        assert notice_feed.get_notice_type("IEEE Spectrum") == "education"
        assert notice_feed.get_notice_type("Some Blog") == "industry"

    def test_priority_keywords(self):
        assert notice_feed.get_priority("Breaking: outage", "") == "high"
        assert notice_feed.get_priority("Python 3.14", "new release notes") == "medium"
        assert notice_feed.get_priority("Weekly digest", "links") == "low"

    def test_time_ago(self):
        now = datetime(2024, 5, 10, 12, 0, tzinfo=dt_timezone.utc)
        assert notice_feed.get_time_ago(now - timedelta(minutes=20), now) == "Less than an hour ago"
        assert notice_feed.get_time_ago(now - timedelta(hours=5), now) == "5 hours ago"
        assert notice_feed.get_time_ago(now - timedelta(days=3, hours=2), now) == "3 days ago"

    def test_extract_tags_caps_at_three(self):
        tags = notice_feed.extract_tags("AI and Blockchain startup", "Cybersecurity and IoT funding")
        assert tags == ["AI", "Blockchain", "Cybersecurity"]

    def test_extract_tags_collapses_first_space(self):
        assert "Machine Learning" in notice_feed.extract_tags("New machinelearning lab", "")

    def test_event_date_and_time_share_local_zone(self, settings):
        settings.TIME_ZONE = "Asia/Kolkata"
        event = SimpleNamespace(
            id=1,
            title="Late meetup",
            description="",
            event_date=datetime(2024, 5, 10, 20, 0, tzinfo=dt_timezone.utc),
            location="Online",
            tags=[],
            url="",
        )
        item = notice_feed.to_event_item(event)
        assert item["date"] == "2024-05-11"
        assert item["time"] == "1:30 AM"
        assert item["registration_url"] == "#"


@pytest.mark.django_db
class TestNoticeApi:
    def test_public_list(self, anon_client):
        make_notice(title="Old", event_date=timezone.now() - timedelta(days=1))
        make_notice(title="New")
        res = anon_client.get(URL)
        assert res.status_code == 200
        assert [n["title"] for n in res.data] == ["New", "Old"]

    def test_kind_filter(self, anon_client):
        make_notice(title="Hackathon", kind=Notice.Kind.EVENT)
        make_notice(title="Release")
        res = anon_client.get(URL, {"kind": "event"})
        assert [n["title"] for n in res.data] == ["Hackathon"]

    def test_writes_are_staff_only(self, anon_client, client, staff_client):
        payload = {
            "title": "Career fair",
            "description": "Meet employers",
            "event_date": "2030-01-10T10:00:00Z",
            "priority": "high",
            "tags": [" Careers ", ""],
        }
        assert anon_client.post(URL, payload, format="json").status_code == 401
        assert client.post(URL, payload, format="json").status_code == 403

        res = staff_client.post(URL, payload, format="json")
        assert res.status_code == 201
        assert res.data["tags"] == ["Careers"]
        assert res.data["kind"] == Notice.Kind.NOTICE

    def test_staff_delete(self, staff_client):
        notice = make_notice()
        assert staff_client.delete(f"{URL}{notice.id}/").status_code == 204
        assert not Notice.objects.exists()

    def test_upcoming_skips_past(self, anon_client):
        make_notice(title="Past", event_date=timezone.now() - timedelta(days=2))
        make_notice(title="Later", event_date=timezone.now() + timedelta(days=9))
        make_notice(title="Soon", event_date=timezone.now() + timedelta(days=1))
        res = anon_client.get(f"{URL}upcoming/")
        assert [n["title"] for n in res.data] == ["Soon", "Later"]

    def test_search_by_range(self, anon_client):
        make_notice(title="In", event_date=datetime(2030, 3, 5, 9, tzinfo=dt_timezone.utc))
        make_notice(title="Out", event_date=datetime(2030, 4, 5, 9, tzinfo=dt_timezone.utc))
        res = anon_client.get(f"{URL}search/", {"start_date": "2030-03-01", "end_date": "2030-03-31"})
        assert res.status_code == 200
        assert [n["title"] for n in res.data] == ["In"]

    def test_search_needs_both_dates(self, anon_client):
        res = anon_client.get(f"{URL}search/", {"start_date": "2030-03-01"})
        assert res.status_code == 400
        assert res.data["end_date"] == ["start_date and end_date are required"]

    def test_search_rejects_inverted_range(self, anon_client):
        res = anon_client.get(f"{URL}search/", {"start_date": "2030-03-31", "end_date": "2030-03-01"})
        assert res.status_code == 400

    def test_events_fallback(self, anon_client):
        res = anon_client.get(f"{URL}events/")
        assert res.data["source"] == "fallback"
        assert len(res.data["events"]) == len(notice_feed.SAMPLE_EVENTS)

    def test_events_stored(self, anon_client):
        make_notice(title="Workshop", kind=Notice.Kind.EVENT, location="Colombo")
        res = anon_client.get(f"{URL}events/")
        assert res.data["source"] == "stored"
        assert res.data["events"][0]["location"] == "Colombo"

    def test_feed_fallback(self, anon_client):
        res = anon_client.get(f"{URL}feed/")
        assert res.status_code == 200
        assert res.data["source"] == "fallback"
        assert len(res.data["notices"]) == 4

    def test_feed_decorates_stored_notices(self, anon_client):
        make_notice(
            title="Major AI launch",
            description="",
            source="TechCrunch",
            event_date=timezone.now() - timedelta(hours=3),
        )
        res = anon_client.get(f"{URL}feed/")
        item = res.data["notices"][0]
        assert res.data["source"] == "stored"
        assert item["type"] == "industry"
        assert item["priority"] == "high"
        assert item["time"] == "3 hours ago"
        assert item["tags"] == ["AI"]
        assert item["summary"] == "No description available"
