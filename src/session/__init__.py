"""End-to-end sort runs.

This package wires configuration, ingestion, ordering, and output into a
single call shared by the CLI and the Python API.
"""
