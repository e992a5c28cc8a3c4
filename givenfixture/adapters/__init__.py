"""Library adapters for givenfixture.

This package contains the third-party backed implementations of the core
port interfaces.

Adapter Organization:

- doubles/: Collaborator doubles (unittest.mock autospec)
- builders/: Random instance generation (hypothesis strategies)
"""
