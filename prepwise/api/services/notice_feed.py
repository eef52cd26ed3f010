# prepwise/api/services/notice_feed.py
"""
Tech news/events board.
Stored notices are decorated with a type, priority, age and tags; the fixed
sample data is served when nothing is stored.
"""
from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, Iterable, List, Optional

from django.utils import timezone

from prepwise.api.config import NOTICE_CONFIG

GOVERNMENT_SOURCES = ["BBC", "Reuters", "Associated Press"]
INDUSTRY_SOURCES = ["TechCrunch", "Wired", "The Verge", "Ars Technica"]
EDUCATION_SOURCES = ["MIT Technology Review", "IEEE Spectrum"]

HIGH_PRIORITY_KEYWORDS = ["breaking", "urgent", "major", "critical", "launch", "announce"]
MEDIUM_PRIORITY_KEYWORDS = ["new", "update", "release", "introduces"]

POSSIBLE_TAGS = [
    "AI", "Machine Learning", "Blockchain", "Cryptocurrency", "Cloud Computing",
    "Cybersecurity", "Mobile", "Web Development", "Data Science", "IoT",
    "Startup", "Funding", "Innovation", "Research", "Software", "Hardware",
    "5G", "VR", "AR", "Quantum Computing", "Robotics",
]

FALLBACK_NOTICES: List[Dict[str, Any]] = [
    {
        "id": 1,
        "title": "Sri Lanka's AI Revolution: New Government Initiative Launched",
        "summary": "Government announces $50M investment in AI research and development across universities.",
        "source": "Ministry of Technology",
        "type": "government",
        "priority": "high",
        "time": "2 hours ago",
        "tags": ["AI", "Government", "Funding"],
        "url": "#",
    },
    {
        "id": 2,
        "title": "Dialog Axiata Launches 5G Network Nationwide",
        "summary": "Complete 5G coverage now available across Colombo, with expansion to other provinces.",
        "source": "Dialog Axiata",
        "type": "industry",
        "priority": "medium",
        "time": "5 hours ago",
        "tags": ["5G", "Telecommunications", "Infrastructure"],
        "url": "#",
    },
    {
        "id": 3,
        "title": "University of Colombo Opens New Computer Science Department",
        "summary": "State-of-the-art facilities with focus on AI, blockchain, and cybersecurity research.",
        "source": "University of Colombo",
        "type": "education",
        "priority": "medium",
        "time": "1 day ago",
        "tags": ["Education", "Computer Science", "Research"],
        "url": "#",
    },
    {
        "id": 4,
        "title": "Microsoft Azure Data Center Coming to Sri Lanka",
        "summary": "First cloud data center facility to be established in Colombo by 2025.",
        "source": "Microsoft",
        "type": "industry",
        "priority": "high",
        "time": "2 days ago",
        "tags": ["Cloud Computing", "Infrastructure", "Microsoft"],
        "url": "#",
    },
]

SAMPLE_EVENTS: List[Dict[str, Any]] = [
    {
        "id": 1,
        "title": "Sri Lanka Tech Summit 2024",
        "organizer": "SLASSCOM",
        "type": "conference",
        "mode": "hybrid",
        "date": "2024-09-15",
        "end_date": "2024-09-17",
        "time": "9:00 AM - 6:00 PM",
        "location": "Shangri-La Hotel, Colombo",
        "participants": "500+",
        "fee": "LKR 15,000",
        "description": "Annual technology summit featuring AI, blockchain, and startup ecosystem.",
        "tags": ["AI", "Blockchain", "Startups"],
        "registration_url": "#",
        "featured": True,
    },
    {
        "id": 2,
        "title": "Hackathon Sri Lanka 2024",
        "organizer": "University of Moratuwa",
        "type": "hackathon",
        "mode": "in-person",
        "date": "2024-09-01",
        "end_date": "2024-09-02",
        "time": "48 hours",
        "location": "University of Moratuwa",
        "participants": "200+",
        "fee": "Free",
        "description": "48-hour coding competition focusing on solutions for smart cities.",
        "tags": ["Coding", "Smart Cities", "Competition"],
        "registration_url": "#",
        "featured": False,
    },
    {
        "id": 3,
        "title": "AI/ML Workshop Series",
        "organizer": "APIIT Sri Lanka",
        "type": "workshop",
        "mode": "virtual",
        "date": "2024-08-30",
        "end_date": None,
        "time": "2:00 PM - 5:00 PM",
        "location": "Online",
        "participants": "100",
        "fee": "Free",
        "description": "Hands-on workshop covering machine learning fundamentals and practical applications.",
        "tags": ["Machine Learning", "AI", "Workshop"],
        "registration_url": "#",
        "featured": False,
    },
]


def get_notice_type(source_name: str) -> str:
    source_name = source_name or ""
    if any(s in source_name for s in GOVERNMENT_SOURCES):
        return "government"
    if any(s in source_name for s in INDUSTRY_SOURCES):
        return "industry"
    if any(s in source_name for s in EDUCATION_SOURCES):
        return "education"
    return "industry"


def get_priority(title: str, description: str) -> str:
    content = f"{title or ''} {description or ''}".lower()
    if any(k in content for k in HIGH_PRIORITY_KEYWORDS):
        return "high"
    if any(k in content for k in MEDIUM_PRIORITY_KEYWORDS):
        return "medium"
    return "low"


def get_time_ago(published_at: datetime, now: Optional[datetime] = None) -> str:
    now = now or timezone.now()
    hours = int((now - published_at).total_seconds() // 3600)
    if hours < 1:
        return "Less than an hour ago"
    if hours < 24:
        return f"{hours} hours ago"
    return f"{hours // 24} days ago"


def extract_tags(title: str, description: str) -> List[str]:
    content = f"{title or ''} {description or ''}".lower()
    found = [
        tag for tag in POSSIBLE_TAGS
        if tag.lower() in content or tag.lower().replace(" ", "", 1) in content
    ]
    return found[: NOTICE_CONFIG["MAX_TAGS"]]


def to_feed_item(notice) -> Dict[str, Any]:
    return {
        "id": notice.id,
        "title": notice.title,
        "summary": notice.description or "No description available",
        "source": notice.source,
        "type": get_notice_type(notice.source),
        "priority": get_priority(notice.title, notice.description),
        "time": get_time_ago(notice.event_date),
        "tags": notice.tags or extract_tags(notice.title, notice.description),
        "url": notice.url,
    }


def to_event_item(notice) -> Dict[str, Any]:
    local = timezone.localtime(notice.event_date)
    return {
        "id": notice.id,
        "title": notice.title,
        "description": notice.description,
        "date": local.date().isoformat(),
        "time": local.strftime("%I:%M %p").lstrip("0"),
        "location": notice.location,
        "tags": notice.tags or [],
        "registration_url": notice.url or "#",
    }


def build_feed(notices: Iterable, events: Iterable) -> Dict[str, Any]:
    items = [to_feed_item(n) for n in notices]
    event_items = [to_event_item(e) for e in events]
    return {
        "source": "stored" if items else "fallback",
        "notices": items or [dict(n) for n in FALLBACK_NOTICES],
        "events": event_items or [dict(e) for e in SAMPLE_EVENTS],
    }
