"""Utilities - resume file storage."""
