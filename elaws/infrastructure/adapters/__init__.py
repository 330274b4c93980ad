"""Adapters translating API responses into domain entities."""
