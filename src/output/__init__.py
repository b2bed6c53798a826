"""Sorted record output.

This package renders traversals as CSV text and handles the interrupt
signal that triggers an early flush.
"""
