"""
Test suite for petfolio.

Unit tests live under tests/unit, mirroring the package layout.
"""
