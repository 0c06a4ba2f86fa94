"""
Tests for stickler.merge.
"""

from types import MappingProxyType

from stickler import merge, omit


class TestMerge:
    def test_overlay_wins(self):
        assert merge({"a": 1, "b": 2}, {"b": 3}) == {"a": 1, "b": 3}

    def test_absent_key_never_overwrites(self):
        assert merge({"a": 1, "b": 2}, {"c": 3}) == {"a": 1, "b": 2, "c": 3}

    def test_present_falsy_key_overwrites(self):
        merged = merge({"a": 1, "b": "x", "c": True, "d": 5}, {"a": None, "b": "", "c": False, "d": 0})
        assert merged == {"a": None, "b": "", "c": False, "d": 0}

    def test_left_to_right(self):
        assert merge({"a": 1}, {"a": 2}, {"a": 3}) == {"a": 3}

    def test_none_arguments(self):
        assert merge(None, None) == {}
        assert merge(None, {"a": 1}) == {"a": 1}
        assert merge({"a": 1}, None) == {"a": 1}

    def test_shallow(self):
        nested = {"x": 1}
        merged = merge({"n": {"y": 2}}, {"n": nested})
        assert merged["n"] is nested

    def test_inputs_untouched(self):
        base = MappingProxyType({"a": 1})
        overlay = MappingProxyType({"b": 2})
        merged = merge(base, overlay)
        merged["c"] = 3
        assert dict(base) == {"a": 1}
        assert dict(overlay) == {"b": 2}

    def test_returns_new_dict(self):
        base = {"a": 1}
        assert merge(base) is not base


class TestOmit:
    def test_omit(self):
        assert omit({"a": 1, "value": 2, "b": 3}, "value") == {"a": 1, "b": 3}

    def test_omit_missing_key(self):
        assert omit({"a": 1}, "value", "every") == {"a": 1}

    def test_omit_none(self):
        assert omit(None, "value") == {}
