"""Speech codec helpers: token bigrams, centroid encoding, codebook JSON and training utilities."""

__version__ = "0.1.0"
__all__ = ["bigram", "tokens", "centroids", "lpfloat", "progress", "training"]