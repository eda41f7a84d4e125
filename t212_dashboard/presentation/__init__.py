"""Presentation layer: FastAPI proxy endpoints."""
