"""API and domain records."""

from models.base import CamelModel

# Brands
from models.brand import Brand, BrandStatus, Platform, ProcessedBrand
from models.stats import BrandStats

# Content
from models.content import ContentPerformance, ContentPost, MediaType

__all__ = [
    # Base
    "CamelModel",
    # Brands
    "Brand",
    "BrandStatus",
    "Platform",
    "ProcessedBrand",
    "BrandStats",
    # Content
    "ContentPerformance",
    "ContentPost",
    "MediaType",
]
