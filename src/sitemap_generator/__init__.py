"""Sitemap generation for static-site pipelines."""

__version__ = "0.1.0"
