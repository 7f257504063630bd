"""Trámites: document tracking service for municipal offices."""
