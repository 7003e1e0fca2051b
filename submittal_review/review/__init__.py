"""
Submittal review module.

This module owns the single active submittal: encoding the upload, running the
structured extraction, the follow-up document chat, and the derived exports.
"""
