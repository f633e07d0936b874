"""Scriptura test suite."""
