"""
Application layer.

Services that coordinate the core pipeline and the storage boundary
on behalf of the API.
"""
