"""
Core sparse encoding and upload logic.

Dependencies: tenacity
System role: Business logic between the data loaders and the vector store boundary
"""
