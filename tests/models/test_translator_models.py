from __future__ import annotations

import io

import pytest

from models.translator_models import (
    CreateModelParams,
    DeleteModelResult,
    IdentifiedLanguages,
    IdentifyParams,
    ListModelsParams,
    TranslateParams,
    TranslationModel,
    TranslationModels,
)


def test_from_mapping_builds_params() -> None:
    params = TranslateParams.from_mapping({"text": ["hello"], "target": "es", "return_response": True})

    assert params.text == ["hello"]
    assert params.target == "es"
    assert params.source is None
    assert params.return_response is True


def test_from_mapping_accepts_none() -> None:
    params = ListModelsParams.from_mapping(None)

    assert params.as_mapping() == {
        "headers": None,
        "return_response": False,
        "source": None,
        "target": None,
        "default_models": None,
    }


def test_from_mapping_rejects_unknown_keys() -> None:
    with pytest.raises(TypeError):
        TranslateParams.from_mapping({"text": ["hello"], "model": "en-es"})


def test_snapshot_copies_lists_and_dicts() -> None:
    params = TranslateParams(text=["hello"], headers={"X-Trace": "1"})

    copied = params.snapshot()
    params.text.append("world")
    params.headers["X-Trace"] = "2"  # type: ignore[index]

    assert copied.text == ["hello"]
    assert copied.headers == {"X-Trace": "1"}
    assert copied is not params


def test_snapshot_shares_binary_payloads() -> None:
    corpus = io.BytesIO(b"<tmx/>")
    params = CreateModelParams(base_model_id="en-es", parallel_corpus=[corpus])

    copied = params.snapshot()

    assert copied.parallel_corpus == [corpus]
    assert copied.parallel_corpus[0] is corpus  # type: ignore[index]
    assert corpus.tell() == 0


def test_identified_languages_from_dict() -> None:
    result = IdentifiedLanguages.from_dict(
        {"languages": [{"language": "es", "confidence": 0.95}, {"language": "pt", "confidence": 0.03}]}
    )

    assert [lang.language for lang in result.languages] == ["es", "pt"]
    assert result.languages[0].confidence == pytest.approx(0.95)


def test_translation_models_tolerate_missing_fields() -> None:
    result = TranslationModels.from_dict(
        {
            "models": [
                {"model_id": "en-es", "source": "en", "target": "es", "default_model": True, "status": "available"},
                {"model_id": "custom-1", "base_model_id": "en-es", "owner": "instance-1"},
            ]
        }
    )

    assert result.models[0] == TranslationModel(
        model_id="en-es", source="en", target="es", default_model=True, status="available"
    )
    assert result.models[1].base_model_id == "en-es"
    assert result.models[1].status is None


def test_delete_model_result_to_dict() -> None:
    assert DeleteModelResult(status="OK").to_dict() == {"status": "OK"}


def test_identify_params_require_string_text() -> None:
    with pytest.raises(TypeError, match="'text' must be a str, not bytes"):
        IdentifyParams.from_mapping({"text": b"Bonjour"})
