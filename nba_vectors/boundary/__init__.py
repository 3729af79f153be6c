"""
Boundary layer for external services.

Provides adapters for the Pinecone vector indices.
"""
