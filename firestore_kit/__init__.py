"""Firestore value model, serialization of Python objects, query and transaction models, and error types."""

__version__ = "0.1.0"