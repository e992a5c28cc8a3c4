"""Tests for the double provider and instance builder adapters."""
