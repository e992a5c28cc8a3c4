"""Test suite for givenfixture.

Organized into four categories:

1. core/: Unit tests for the orchestration core
   - No third-party libraries, fast execution
   - Uses in-memory fakes for the ports

2. adapters/: Tests for the unittest.mock and hypothesis adapters

3. example/: End-to-end scenarios against a small breakfast domain

4. fakes/: Port implementations for testing
   - In-memory DoubleProviderPort and InstanceBuilderPort
   - Used by core unit tests
"""
