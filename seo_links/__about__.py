"""Metadata for seo_links."""

__all__ = [
    "__title__",
    "__version__",
    "__description__",
    "__credits__",
    "__requires_python__",
]

__title__ = "seo_links"
__version__ = "0.1.0"
__description__ = (
    "Single-page link extraction and classification engine for SEO reports."
)
__credits__ = [{"name": "seo_links contributors"}]
__requires_python__ = ">=3.9"
