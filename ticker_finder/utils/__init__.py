"""Shared utilities (logging integration, credential redaction)."""
