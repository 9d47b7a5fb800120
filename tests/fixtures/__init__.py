"""Shared test fixtures for adf-convert tests."""
