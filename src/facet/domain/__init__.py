"""
Facet domain layer.

Pure value objects, DTOs and ports. Nothing here performs I/O.
"""
