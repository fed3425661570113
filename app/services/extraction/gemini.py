"""
Gemini-based implementation of the facial attribute extractor.

This module classifies a face photo into the frame vocabularies with a single
structured-output call to a Gemini vision model, and renders virtual try-on
composites with a Gemini image model.

Key Features:
    - JSON response schema restricted to the catalog vocabularies
    - Retry with linear backoff while the model reports it is unavailable
    - Documented fallback attribute set once retries are exhausted
    - Try-on falls back to the original photo when generation fails

Example:
    ```python
    extractor = GeminiAttributeExtractor()

    with open("face.jpg", "rb") as f:
        attributes = await extractor.extract_attributes(f.read(), "image/jpeg")
    ```
"""
import asyncio
import base64
import json
from typing import Any, Dict, Optional

from google import genai
from google.genai import types
from pydantic import ValidationError

from app.core.config import settings
from app.core.exceptions import AttributeExtractionError
from app.core.logging import get_logger
from app.domain.entities.analysis import FacialAttributes, TryOnResult
from app.domain.entities.frame import FrameProduct
from app.domain.entities.vocabulary import FaceShape, FrameColor, FrameSize, FrameStyle
from app.domain.interfaces.extraction.attribute_extractor import AttributeExtractor

logger = get_logger(__name__)

ANALYSIS_SYSTEM_PROMPT = f"""You are an expert optical stylist and facial feature analyst.
Analyze the person's face in the image and provide frame recommendations.

Your task is to:
1. Determine the face shape
2. Recommend exactly two frame sizes based on facial proportions, best first
3. Suggest exactly two frame colors that complement skin tone and features
4. Recommend exactly two frame styles that enhance facial features

IMPORTANT: Use only these exact values for your recommendations:
- Face shapes: {", ".join(FaceShape.values())}
- Frame sizes: {", ".join(FrameSize.values())} (exactly as written)
- Frame colors: {", ".join(FrameColor.values())} (exactly as written)
- Frame styles: {", ".join(FrameStyle.values())} (exactly as written, note Cat-eye has lowercase 'e')

Consider factors like:
- Face width vs length ratio
- Jawline shape and prominence
- Cheekbone width and height
- Forehead width
- Skin tone and undertones
- Eye spacing and size

Respond with JSON in the exact format specified in the schema."""

ANALYSIS_USER_PROMPT = (
    "Analyze this person's facial features and provide detailed eyeglass frame "
    "recommendations based on their face shape, size, and features."
)


def _token_list(vocabulary: list) -> Dict[str, Any]:
    return {
        "type": "ARRAY",
        "items": {"type": "STRING", "enum": vocabulary},
        "min_items": 2,
        "max_items": 2,
    }


ANALYSIS_RESPONSE_SCHEMA: Dict[str, Any] = {
    "type": "OBJECT",
    "properties": {
        "faceShape": {"type": "STRING", "enum": FaceShape.values()},
        "recommendedSizes": _token_list(FrameSize.values()),
        "recommendedColors": _token_list(FrameColor.values()),
        "recommendedStyles": _token_list(FrameStyle.values()),
        "confidence": {
            "type": "NUMBER",
            "minimum": 0,
            "maximum": 1,
            "description": "Confidence score between 0 and 1",
        },
        "reasoning": {
            "type": "STRING",
            "description": "Brief explanation of the recommendations",
        },
    },
    "required": [
        "faceShape",
        "recommendedSizes",
        "recommendedColors",
        "recommendedStyles",
        "confidence",
        "reasoning",
    ],
}

# Neutral shape and the two most broadly suitable values per field
FALLBACK_ATTRIBUTES = FacialAttributes(
    face_shape=FaceShape.OVAL.value,
    recommended_sizes=[FrameSize.MEDIUM.value, FrameSize.LARGE.value],
    recommended_colors=[FrameColor.BLACK.value, FrameColor.TORTOISE.value],
    recommended_styles=[FrameStyle.RECTANGLE.value, FrameStyle.AVIATOR.value],
    confidence=0.5,
    reasoning=(
        "API temporarily unavailable. Providing versatile frame recommendations "
        "that work well for most face shapes."
    ),
)

TRANSIENT_MARKERS = ("overloaded", "UNAVAILABLE")


class InvalidModelResponseError(AttributeExtractionError):
    """Raised when the model answers with empty or malformed JSON."""
    pass


def is_transient_error(error: Exception) -> bool:
    """Whether the error means the model is temporarily unavailable."""
    if getattr(error, "code", None) == 503 or getattr(error, "status", None) == 503:
        return True
    message = str(error)
    return any(marker in message for marker in TRANSIENT_MARKERS)


def parse_attributes(raw_json: Optional[str]) -> FacialAttributes:
    """Parse the model's JSON answer into FacialAttributes.

    Raises:
        InvalidModelResponseError: If the answer is empty, not JSON or misses fields
    """
    if not raw_json:
        raise InvalidModelResponseError("Empty response from Gemini model")
    try:
        payload = json.loads(raw_json)
    except json.JSONDecodeError as e:
        raise InvalidModelResponseError(f"Gemini returned invalid JSON: {e}") from e
    if not isinstance(payload, dict):
        raise InvalidModelResponseError("Gemini response is not a JSON object")

    has_sizes = "recommendedSizes" in payload or "recommendedSize" in payload
    required = ("faceShape", "recommendedColors", "recommendedStyles")
    if not has_sizes or any(not payload.get(key) for key in required):
        raise InvalidModelResponseError(
            "Invalid response format from Gemini model",
            details={"keys": sorted(payload)},
        )
    try:
        return FacialAttributes.model_validate(payload)
    except ValidationError as e:
        raise InvalidModelResponseError(f"Gemini response failed validation: {e}") from e


class GeminiAttributeExtractor(AttributeExtractor):
    """
    Gemini implementation of the attribute extractor.

    Attributes:
        analysis_model: Model used for face classification
        tryon_model: Model used for try-on image generation
        max_retries: Attempts made before falling back
        retry_base_delay: Seconds to wait, multiplied by the attempt number
        fallback_enabled: Whether to return FALLBACK_ATTRIBUTES after failure
    """

    def __init__(
        self,
        client: Optional[genai.Client] = None,
        analysis_model: Optional[str] = None,
        tryon_model: Optional[str] = None,
        max_retries: Optional[int] = None,
        retry_base_delay: Optional[float] = None,
        fallback_enabled: Optional[bool] = None,
    ) -> None:
        """Store configuration; the client is created on first use."""
        self._client = client
        self.analysis_model = analysis_model or settings.GEMINI_ANALYSIS_MODEL
        self.tryon_model = tryon_model or settings.GEMINI_TRYON_MODEL
        self.max_retries = max_retries if max_retries is not None else settings.GEMINI_MAX_RETRIES
        self.retry_base_delay = (
            retry_base_delay if retry_base_delay is not None else settings.GEMINI_RETRY_BASE_DELAY
        )
        self.fallback_enabled = (
            fallback_enabled if fallback_enabled is not None else settings.GEMINI_FALLBACK_ENABLED
        )

    @property
    def client(self) -> genai.Client:
        """Gemini client, built from GEMINI_API_KEY on first access."""
        if self._client is None:
            logger.debug("Initializing Gemini client")
            self._client = genai.Client(api_key=settings.GEMINI_API_KEY)
        return self._client

    async def extract_attributes(
        self,
        image_bytes: bytes,
        mime_type: str = "image/jpeg",
    ) -> FacialAttributes:
        """Classify a face photo, retrying while the model is overloaded."""
        last_error: Optional[Exception] = None

        for attempt in range(1, self.max_retries + 1):
            try:
                logger.info(
                    "Requesting facial analysis",
                    attempt=attempt,
                    max_retries=self.max_retries,
                    model=self.analysis_model,
                )
                response = await self.client.aio.models.generate_content(
                    model=self.analysis_model,
                    contents=[
                        types.Part.from_bytes(data=image_bytes, mime_type=mime_type),
                        ANALYSIS_USER_PROMPT,
                    ],
                    config=types.GenerateContentConfig(
                        system_instruction=ANALYSIS_SYSTEM_PROMPT,
                        response_mime_type="application/json",
                        response_schema=ANALYSIS_RESPONSE_SCHEMA,
                    ),
                )
                attributes = parse_attributes(response.text)
                logger.info(
                    "Facial analysis succeeded",
                    attempt=attempt,
                    face_shape=attributes.face_shape,
                    confidence=attributes.confidence,
                )
                return attributes

            except Exception as e:
                last_error = e
                transient = is_transient_error(e)
                logger.warning(
                    "Facial analysis attempt failed",
                    attempt=attempt,
                    transient=transient,
                    error=str(e),
                )
                if not transient or attempt == self.max_retries:
                    break
                await asyncio.sleep(self.retry_base_delay * attempt)

        if self.fallback_enabled:
            logger.warning(
                "All facial analysis attempts failed, using fallback attributes",
                error=str(last_error),
            )
            return FALLBACK_ATTRIBUTES

        raise AttributeExtractionError(
            "Facial analysis failed",
            details={"error": str(last_error)},
        )

    async def generate_try_on(
        self,
        photo_bytes: bytes,
        photo_mime_type: str,
        frame_image_bytes: bytes,
        frame_image_mime_type: str,
        frame: FrameProduct,
    ) -> TryOnResult:
        """Render a try-on composite, returning the original photo on failure."""
        prompt = (
            f"Generate a high-quality, photorealistic virtual try-on image showing the person "
            f"from the first image wearing the {frame.name} eyeglass frames from the second image. "
            f"The frames are {frame.style} style in {frame.color} color by {frame.brand}.\n\n"
            "Create a professional virtual try-on that:\n"
            "- Maintains the person's exact facial features and expression\n"
            "- Properly fits and positions the frames on their face according to their face shape and size\n"
            "- Ensures the frame style, color, and design exactly match the provided frame photo\n"
            "- Uses natural lighting and realistic shadows\n"
            "- Looks like a professional eyewear photo\n\n"
            "Generate both the image and a brief description of how the frames suit this person's face."
        )
        try:
            response = await self.client.aio.models.generate_content(
                model=self.tryon_model,
                contents=[
                    types.Part.from_bytes(data=photo_bytes, mime_type=photo_mime_type),
                    types.Part.from_bytes(data=frame_image_bytes, mime_type=frame_image_mime_type),
                    prompt,
                ],
                config=types.GenerateContentConfig(response_modalities=["TEXT", "IMAGE"]),
            )
        except Exception as e:
            logger.error("Virtual try-on generation failed", frame_id=frame.id, error=str(e))
            return self._try_on_fallback(photo_bytes, photo_mime_type, frame)

        image_part = None
        texts = []
        candidates = response.candidates or []
        parts = candidates[0].content.parts if candidates and candidates[0].content else None
        for part in parts or []:
            if part.text:
                texts.append(part.text)
            inline = part.inline_data
            if image_part is None and inline and inline.data and (inline.mime_type or "").startswith("image/"):
                image_part = inline

        if image_part is None:
            logger.warning("Try-on response contained no image", frame_id=frame.id)
            return self._try_on_fallback(photo_bytes, photo_mime_type, frame)

        description = "".join(texts).strip() or "Generated virtual try-on showing the frames on your face"
        logger.info("Generated virtual try-on", frame_id=frame.id, mime_type=image_part.mime_type)
        return TryOnResult(
            image_base64=base64.b64encode(image_part.data).decode("ascii"),
            mime_type=image_part.mime_type,
            description=description,
            generated=True,
        )

    @staticmethod
    def _try_on_fallback(photo_bytes: bytes, mime_type: str, frame: FrameProduct) -> TryOnResult:
        return TryOnResult(
            image_base64=base64.b64encode(photo_bytes).decode("ascii"),
            mime_type=mime_type,
            description=(
                f"Virtual try-on preview: These {frame.name} frames by {frame.brand} in "
                f"{frame.color} would complement your facial features well. The {frame.style} "
                "style is a good match for your face shape."
            ),
            generated=False,
        )
