"""Submittal review service backed by a hosted model provider."""
