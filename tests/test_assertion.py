import pytest

from nsflow import assertion
from nsflow.assertion import AssertionException, check, exceptions_enabled, fire


def test_check_false_raises_with_message():
    with pytest.raises(AssertionException) as info:
        check(1 > 2, "1 > 2")
    assert 'Assertion "1 > 2" failed' in str(info.value)


def test_check_true_returns_none():
    assert check(True, "always") is None


def test_report_names_calling_function_and_file():
    with pytest.raises(AssertionException) as info:
        check(False, "cond")
    text = info.value.message
    assert 'in function "test_report_names_calling_function_and_file()"' in text
    assert "test_assertion.py" in text
    assert "Stack trace: " in text


def test_parameters_are_listed():
    with pytest.raises(AssertionException) as info:
        check(False, "cond", 1, "two", 3.5)
    assert "Assertion parameters: 1, two, 3.5\n" in info.value.message


def test_no_parameter_line_without_arguments():
    with pytest.raises(AssertionException) as info:
        fire("plain")
    assert "Assertion parameters" not in info.value.message


def test_fire_always_raises():
    with pytest.raises(AssertionException, match="explicit"):
        fire("explicit", 42)


def test_exceptions_enabled_restores_flag(monkeypatch):
    monkeypatch.setattr(assertion, "throw_assertion_exception", False)
    with exceptions_enabled():
        assert assertion.throw_assertion_exception is True
        with pytest.raises(AssertionException):
            check(False, "inside")
    assert assertion.throw_assertion_exception is False