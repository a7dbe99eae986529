"""
清洗遍历单元测试
"""

from __future__ import annotations

import copy

from safelog.sanitization import SanitizerConfig, sanitize, walk


def _config(**kwargs) -> SanitizerConfig:
    base = dict(visible_chars=3, max_masked_chars=10, max_log_value_length=200, sensitive_field_substrings=["abc"])
    base.update(kwargs)
    return SanitizerConfig(**base)


class TestWalk:
    """mask + truncate 遍历测试"""

    def test_sensitive_key_is_masked(self) -> None:
        assert walk({"abc": "saudades", "other": "saudades"}, _config()) == {"abc": "*****des", "other": "saudades"}

    def test_nested_mappings_and_sequences(self) -> None:
        tree = {"users": [{"myAbc": "123456", "name": "ana"}], "meta": {"ABC": "xy"}}
        assert walk(tree, _config()) == {
            "users": [{"myAbc": "***456", "name": "ana"}],
            "meta": {"ABC": "**"},
        }

    def test_sensitive_container_is_masked_as_a_whole(self) -> None:
        result = walk({"abc": {"inner": "v"}}, _config(visible_chars=2))
        assert result["abc"] == "*" * 10 + '"}'

    def test_masked_value_is_not_truncated(self) -> None:
        config = _config(max_log_value_length=5)
        result = walk({"abc": "abcdefghij", "plain": "abcdefghij"}, config)
        assert result["abc"] == "*******hij"
        assert result["plain"] == "ab..."

    def test_long_strings_in_sequences_are_truncated(self) -> None:
        assert walk(["x" * 12], _config(max_log_value_length=10)) == ["x" * 7 + "..."]

    def test_scalar_root(self) -> None:
        assert walk("x" * 12, _config(max_log_value_length=10)) == "x" * 7 + "..."
        assert walk(None, _config()) is None

    def test_null_sensitive_value_stays_null(self) -> None:
        assert walk({"abc": None}, _config()) == {"abc": None}

    def test_input_tree_is_not_mutated(self) -> None:
        tree = {"abc": "saudades", "nested": {"abc": "123456"}, "list": [{"abc": "x"}]}
        snapshot = copy.deepcopy(tree)
        walk(tree, _config())
        assert tree == snapshot

    def test_single_pass_masks_each_field_once(self) -> None:
        once = walk({"abc": "123456"}, _config())
        assert once == {"abc": "***456"}
        assert walk(once, _config()) == once

    def test_empty_block_list_only_truncates(self) -> None:
        config = SanitizerConfig(max_log_value_length=4)
        assert walk({"password": "hunter22"}, config) == {"password": "h..."}


class TestSanitize:
    """serialize -> walk 端到端测试"""

    def test_cycle_and_mask_together(self) -> None:
        x: dict = {"abc": "saudades"}
        x["a"] = x
        assert sanitize(x, _config()) == {"abc": "*****des", "a": "Circular"}

    def test_placeholder_under_sensitive_key_is_masked(self) -> None:
        x: dict = {}
        x["abc"] = x
        assert sanitize(x, _config()) == {"abc": "*****lar"}

    def test_error_metadata_is_truncated(self) -> None:
        result = sanitize({"error": ValueError("x" * 50)}, _config(max_log_value_length=20))
        assert result["error"]["name"] == "ValueError"
        assert len(result["error"]["message"]) == 20
        assert result["error"]["message"].endswith("...")
