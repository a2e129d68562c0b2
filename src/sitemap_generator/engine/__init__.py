"""Freshness resolution, inclusion rules and sitemap assembly."""
