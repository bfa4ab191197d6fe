"""
Tests for swiftparser.
"""
