"""Shared libraries used across services."""
