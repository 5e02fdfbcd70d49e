"""Vocabulary review scheduling and practice prioritisation service."""
