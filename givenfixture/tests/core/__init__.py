"""Unit tests for the orchestration core.

These tests exercise the fixture engine without its adapters.
All ports are replaced with in-memory fakes from tests/fakes/.
"""
