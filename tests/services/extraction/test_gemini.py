"""Tests for the Gemini attribute extractor."""
import base64
import json
from types import SimpleNamespace

import pytest

from app.core.exceptions import AttributeExtractionError
from app.services.extraction.gemini import (
    ANALYSIS_RESPONSE_SCHEMA,
    FALLBACK_ATTRIBUTES,
    GeminiAttributeExtractor,
    InvalidModelResponseError,
    is_transient_error,
    parse_attributes,
)
from tests.conftest import make_frame

VALID_PAYLOAD = {
    "faceShape": "heart",
    "recommendedSizes": ["Small", "Medium"],
    "recommendedColors": ["Gold", "Silver"],
    "recommendedStyles": ["Round", "Cat-eye"],
    "confidence": 0.82,
    "reasoning": "Narrow chin with a wider forehead",
}


class StatusError(Exception):
    """Error carrying an HTTP-like status code."""

    def __init__(self, message, code):
        super().__init__(message)
        self.code = code


def text_response(payload) -> SimpleNamespace:
    text = payload if isinstance(payload, str) else json.dumps(payload)
    return SimpleNamespace(text=text)


def image_response(*parts) -> SimpleNamespace:
    return SimpleNamespace(candidates=[SimpleNamespace(content=SimpleNamespace(parts=list(parts)))])


def text_part(text):
    return SimpleNamespace(text=text, inline_data=None)


def inline_part(data, mime_type="image/png"):
    return SimpleNamespace(text=None, inline_data=SimpleNamespace(data=data, mime_type=mime_type))


@pytest.fixture
def gemini_client(mocker):
    client = mocker.MagicMock()
    client.aio.models.generate_content = mocker.AsyncMock()
    return client


@pytest.fixture
def sleep(mocker):
    return mocker.patch("app.services.extraction.gemini.asyncio.sleep", new=mocker.AsyncMock())


@pytest.fixture
def extractor(gemini_client):
    return GeminiAttributeExtractor(
        client=gemini_client,
        analysis_model="analysis-model",
        tryon_model="tryon-model",
        max_retries=3,
        retry_base_delay=2.0,
        fallback_enabled=True,
    )


class TestParseAttributes:
    """Parsing of the model's JSON answer."""

    def test_valid_payload(self):
        attributes = parse_attributes(json.dumps(VALID_PAYLOAD))
        assert attributes.face_shape == "heart"
        assert attributes.recommended_sizes == ["Small", "Medium"]
        assert attributes.recommended_styles == ["Round", "Cat-eye"]
        assert attributes.confidence == pytest.approx(0.82)

    def test_legacy_single_size_is_wrapped(self):
        payload = dict(VALID_PAYLOAD)
        del payload["recommendedSizes"]
        payload["recommendedSize"] = "Large"
        assert parse_attributes(json.dumps(payload)).recommended_sizes == ["Large"]

    @pytest.mark.parametrize("raw", [None, "", "not json", "[1, 2]"])
    def test_malformed_answers_rejected(self, raw):
        with pytest.raises(InvalidModelResponseError):
            parse_attributes(raw)

    @pytest.mark.parametrize("missing", ["faceShape", "recommendedSizes", "recommendedColors", "recommendedStyles"])
    def test_missing_fields_rejected(self, missing):
        payload = {k: v for k, v in VALID_PAYLOAD.items() if k != missing}
        with pytest.raises(InvalidModelResponseError):
            parse_attributes(json.dumps(payload))

    def test_schema_restricts_tokens_to_vocabularies(self):
        properties = ANALYSIS_RESPONSE_SCHEMA["properties"]
        assert "oval" in properties["faceShape"]["enum"]
        assert "Cat-eye" in properties["recommendedStyles"]["items"]["enum"]
        assert properties["recommendedSizes"]["max_items"] == 2


class TestTransientErrors:
    """Classification of retryable failures."""

    @pytest.mark.parametrize("error", [
        StatusError("server error", 503),
        RuntimeError("The model is overloaded. Please try again later."),
        RuntimeError("503 UNAVAILABLE"),
    ])
    def test_transient(self, error):
        assert is_transient_error(error)

    @pytest.mark.parametrize("error", [
        StatusError("bad request", 400),
        RuntimeError("API key not valid"),
        InvalidModelResponseError("Empty response from Gemini model"),
    ])
    def test_not_transient(self, error):
        assert not is_transient_error(error)


class TestExtractAttributes:
    """Retry and fallback behaviour of extract_attributes."""

    async def test_success_on_first_attempt(self, extractor, gemini_client, sleep):
        gemini_client.aio.models.generate_content.return_value = text_response(VALID_PAYLOAD)

        attributes = await extractor.extract_attributes(b"photo", "image/png")

        assert attributes.face_shape == "heart"
        gemini_client.aio.models.generate_content.assert_awaited_once()
        kwargs = gemini_client.aio.models.generate_content.call_args.kwargs
        assert kwargs["model"] == "analysis-model"
        assert kwargs["config"].response_mime_type == "application/json"
        sleep.assert_not_awaited()

    async def test_retries_while_overloaded(self, extractor, gemini_client, sleep):
        gemini_client.aio.models.generate_content.side_effect = [
            StatusError("overloaded", 503),
            RuntimeError("503 UNAVAILABLE"),
            text_response(VALID_PAYLOAD),
        ]

        attributes = await extractor.extract_attributes(b"photo")

        assert attributes.face_shape == "heart"
        assert gemini_client.aio.models.generate_content.await_count == 3
        assert [c.args[0] for c in sleep.await_args_list] == [2.0, 4.0]

    async def test_exhausted_retries_use_fallback(self, extractor, gemini_client, sleep):
        gemini_client.aio.models.generate_content.side_effect = StatusError("overloaded", 503)

        attributes = await extractor.extract_attributes(b"photo")

        assert attributes == FALLBACK_ATTRIBUTES
        assert gemini_client.aio.models.generate_content.await_count == 3
        assert sleep.await_count == 2

    async def test_non_transient_error_stops_retrying(self, extractor, gemini_client, sleep):
        gemini_client.aio.models.generate_content.side_effect = StatusError("permission denied", 403)

        attributes = await extractor.extract_attributes(b"photo")

        assert attributes == FALLBACK_ATTRIBUTES
        gemini_client.aio.models.generate_content.assert_awaited_once()
        sleep.assert_not_awaited()

    async def test_malformed_answer_uses_fallback(self, extractor, gemini_client, sleep):
        gemini_client.aio.models.generate_content.return_value = text_response({"faceShape": "oval"})

        attributes = await extractor.extract_attributes(b"photo")

        assert attributes == FALLBACK_ATTRIBUTES
        gemini_client.aio.models.generate_content.assert_awaited_once()

    async def test_fallback_disabled_raises(self, gemini_client, sleep):
        extractor = GeminiAttributeExtractor(
            client=gemini_client,
            max_retries=2,
            retry_base_delay=0.5,
            fallback_enabled=False,
        )
        gemini_client.aio.models.generate_content.side_effect = StatusError("overloaded", 503)

        with pytest.raises(AttributeExtractionError) as exc_info:
            await extractor.extract_attributes(b"photo")

        assert "overloaded" in exc_info.value.details["error"]
        assert gemini_client.aio.models.generate_content.await_count == 2
        sleep.assert_awaited_once_with(0.5)

    def test_fallback_attributes(self):
        assert FALLBACK_ATTRIBUTES.face_shape == "oval"
        assert FALLBACK_ATTRIBUTES.recommended_sizes == ["Medium", "Large"]
        assert FALLBACK_ATTRIBUTES.recommended_colors == ["Black", "Tortoise"]
        assert FALLBACK_ATTRIBUTES.recommended_styles == ["Rectangle", "Aviator"]
        assert FALLBACK_ATTRIBUTES.confidence == 0.5


class TestGenerateTryOn:
    """Virtual try-on rendering."""

    async def test_returns_generated_image(self, extractor, gemini_client):
        gemini_client.aio.models.generate_content.return_value = image_response(
            text_part("These frames balance your jawline."),
            inline_part(b"composite"),
        )
        frame = make_frame("aviator", name="Classic Aviator")

        result = await extractor.generate_try_on(b"photo", "image/jpeg", b"frame", "image/jpeg", frame)

        assert result.generated is True
        assert result.mime_type == "image/png"
        assert base64.b64decode(result.image_base64) == b"composite"
        assert result.description == "These frames balance your jawline."
        assert gemini_client.aio.models.generate_content.call_args.kwargs["model"] == "tryon-model"

    async def test_missing_image_returns_original_photo(self, extractor, gemini_client):
        gemini_client.aio.models.generate_content.return_value = image_response(text_part("No image"))
        frame = make_frame("aviator", name="Classic Aviator")

        result = await extractor.generate_try_on(b"photo", "image/jpeg", b"frame", "image/jpeg", frame)

        assert result.generated is False
        assert base64.b64decode(result.image_base64) == b"photo"
        assert result.mime_type == "image/jpeg"
        assert "Classic Aviator" in result.description

    async def test_model_error_returns_original_photo(self, extractor, gemini_client):
        gemini_client.aio.models.generate_content.side_effect = RuntimeError("quota exceeded")

        result = await extractor.generate_try_on(
            b"photo", "image/webp", b"frame", "image/jpeg", make_frame("x")
        )

        assert result.generated is False
        assert result.mime_type == "image/webp"
        assert base64.b64decode(result.image_base64) == b"photo"
