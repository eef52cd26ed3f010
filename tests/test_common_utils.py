import pytest

from prepwise.api.utils.common_utils import dedupe, round_half_up, truncate


class TestRoundHalfUp:
    @pytest.mark.parametrize(
        "value,digits,expected",
        [(2.5, 0, 3), (12.5, 0, 13), (70.5, 0, 71), (2.4999, 0, 2), (7.25, 1, 7.3), (6.65, 1, 6.7), (0, 0, 0)],
    )
    def test_halves_round_up(self, value, digits, expected):
        assert round_half_up(value, digits) == expected

    def test_whole_digits_give_int(self):
        assert isinstance(round_half_up(3.5), int)
        assert isinstance(round_half_up(3.55, 1), float)


class TestTextHelpers:
    def test_truncate(self):
        assert truncate("abcdef", 3, "...") == "abc..."
        assert truncate("abc", 3, "...") == "abc"

    def test_dedupe_keeps_order(self):
        assert dedupe(["b", "a", "b", "c", "a"]) == ["b", "a", "c"]
