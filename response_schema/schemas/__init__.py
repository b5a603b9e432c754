"""Packaged JSON schema catalogs."""
