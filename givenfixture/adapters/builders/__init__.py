"""Random instance builder adapters."""

from .hypothesis_builder import DEFAULT_COLLECTION_SIZE, HypothesisInstanceBuilder

__all__ = ["DEFAULT_COLLECTION_SIZE", "HypothesisInstanceBuilder"]
