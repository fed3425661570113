from .attribute_extractor import AttributeExtractor, ImageFetcher

__all__ = ["AttributeExtractor", "ImageFetcher"]
