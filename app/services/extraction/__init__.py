from .gemini import FALLBACK_ATTRIBUTES, GeminiAttributeExtractor

__all__ = ["FALLBACK_ATTRIBUTES", "GeminiAttributeExtractor"]
