from prepwise.api.utils import ai_utils
from prepwise.api.utils.ai_utils import is_ready


class TestSafeExtractJson:
    def test_plain_json(self):
        assert ai_utils.safe_extract_json('{"score": 7}') == {"score": 7}

    def test_fenced_block_with_prose(self):
        raw = 'Here you go:\n```json\n[{"name": "Python", "category": "Tools",}]\n```\nThanks'
        assert ai_utils.safe_extract_json(raw) == [{"name": "Python", "category": "Tools"}]

    def test_object_inside_prose(self):
        raw = "Feedback follows {\"strengths\": [\"Clear\"], \"ok\": True, \"extra\": None} end"
        assert ai_utils.safe_extract_json(raw) == {"strengths": ["Clear"], "ok": True, "extra": None}

    def test_smart_quotes(self):
        assert ai_utils.safe_extract_json("{“a”: 1}") == {"a": 1}

    def test_default_when_unparseable(self):
        assert ai_utils.safe_extract_json("NON_TECH_ROLE", default=[]) == []
        assert ai_utils.safe_extract_json("") == {}
        assert ai_utils.safe_extract_json(None, default={"x": 1}) == {"x": 1}


class TestReadiness:
    def test_not_ready_without_credentials(self, monkeypatch):
        monkeypatch.setattr(ai_utils, "API_KEY", "")
        assert is_ready() is False
