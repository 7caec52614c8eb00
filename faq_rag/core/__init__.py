"""
Core business logic module.

Contains the document processing pipeline, similarity ranking and the
exception hierarchy. Submodules are imported directly by callers.
"""
