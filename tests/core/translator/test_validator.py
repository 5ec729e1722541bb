from __future__ import annotations

import pytest

from core.translator.validator import get_missing_params, is_empty


@pytest.mark.parametrize("value", [None, "", [], (), {}, b""])
def test_is_empty_for_absent_values(value: object) -> None:
    assert is_empty(value) is True


@pytest.mark.parametrize("value", [False, 0, "x", ["hello"], b"\x00"])
def test_is_empty_false_for_real_values(value: object) -> None:
    assert is_empty(value) is False


def test_get_missing_params_returns_empty_when_all_present() -> None:
    assert get_missing_params({"text": ["hello"], "source": "en"}, ["text"]) == []


def test_get_missing_params_reports_absent_and_empty_in_required_order() -> None:
    params = {"model_id": "", "text": None}

    assert get_missing_params(params, ["text", "base_model_id", "model_id"]) == ["text", "base_model_id", "model_id"]


def test_get_missing_params_with_no_required_names() -> None:
    assert get_missing_params({}, []) == []


def test_get_missing_params_does_not_modify_params() -> None:
    params = {"text": ""}

    get_missing_params(params, ["text"])

    assert params == {"text": ""}
