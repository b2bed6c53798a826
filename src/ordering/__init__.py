"""Record ordering structures.

This package holds the binary search tree that keeps ingested records
sorted by one field, plus the schema checks applied on insertion.
"""
