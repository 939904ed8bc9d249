"""Bundled sample requirement catalogs."""
