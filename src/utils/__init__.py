"""Utilities shared across packages."""
