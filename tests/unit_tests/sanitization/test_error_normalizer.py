"""
错误对象归一化单元测试
"""

from __future__ import annotations

from safelog.exceptions import SerializationError
from safelog.sanitization import is_error_like, normalize_error


class JsError:
    """暴露 name / message / stack 的鸭子类型错误对象"""

    def __init__(self) -> None:
        self.name = "TypeError"
        self.message = "x is undefined"
        self.stack = "TypeError: x is undefined\n    at main.js:1:1"
        self.code = "E_UNDEF"


class TestIsErrorLike:
    def test_exceptions(self) -> None:
        assert is_error_like(ValueError("x")) is True

    def test_duck_typed_object(self) -> None:
        assert is_error_like(JsError()) is True

    def test_mapping_with_error_keys_is_plain_data(self) -> None:
        assert is_error_like({"message": "m", "stack": "s"}) is False

    def test_plain_values(self) -> None:
        assert is_error_like("boom") is False
        assert is_error_like(None) is False
        assert is_error_like(ValueError) is False

    def test_raising_attribute_is_not_error_like(self) -> None:
        """属性访问抛出非 AttributeError 异常时视为普通对象"""

        class Weird:
            stack = "s"

            @property
            def message(self) -> str:
                raise ValueError("nope")

        weird = Weird()
        assert is_error_like(weird) is False
        assert normalize_error(weird) is weird


class TestNormalizeError:
    """normalize_error 测试"""

    def test_constructed_error(self) -> None:
        """未抛出的异常也应包含 name / message / 非空 stack"""
        result = normalize_error(Exception("Falha"))
        assert result["name"] == "Exception"
        assert result["message"] == "Falha"
        assert result["stack"]
        assert "Falha" in result["stack"]

    def test_raised_error_includes_traceback(self) -> None:
        try:
            raise ValueError("bad value")
        except ValueError as exc:
            result = normalize_error(exc)
        assert result["stack"].startswith("Traceback")
        assert "test_raised_error_includes_traceback" in result["stack"]

    def test_own_public_fields_are_kept(self) -> None:
        error = RuntimeError("boom")
        error.status = 503
        error._private = "hidden"
        result = normalize_error(error)
        assert result["status"] == 503
        assert "_private" not in result

    def test_safelog_error_details(self) -> None:
        result = normalize_error(SerializationError(type_name="object", reason="nope"))
        assert result["name"] == "SerializationError"
        assert result["code"] == "SERIALIZATION_FAILED"
        assert result["details"] == {"type_name": "object", "reason": "nope"}

    def test_derived_fields_override_own_fields(self) -> None:
        error = RuntimeError("real")
        error.message = "shadow"
        assert normalize_error(error)["message"] == "real"

    def test_duck_typed_error(self) -> None:
        result = normalize_error(JsError())
        assert result == {
            "name": "TypeError",
            "message": "x is undefined",
            "stack": "TypeError: x is undefined\n    at main.js:1:1",
            "code": "E_UNDEF",
        }

    def test_unprintable_error(self) -> None:
        class Broken(Exception):
            def __str__(self) -> str:
                raise RuntimeError("no")

        result = normalize_error(Broken())
        assert result["message"] == "<unprintable Broken>"
        assert result["name"] == "Broken"

    def test_other_values_returned_unchanged(self) -> None:
        payload = {"message": "m"}
        assert normalize_error(payload) is payload
        assert normalize_error(42) == 42
