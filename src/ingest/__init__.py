"""Concurrent record ingestion.

This package resolves record sources, reads them in parallel, and funnels
every record into a single consumer that builds the ordering tree.
"""
