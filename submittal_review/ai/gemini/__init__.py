"""Gemini AI integration package."""
