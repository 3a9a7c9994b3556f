"""
Test helper utilities for timeline-converter testing.

This module provides reusable builders for export segments and canonical
records.
"""
