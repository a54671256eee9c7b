"""
identspell Tests Package
========================
Test suite for the spelling analysis engine.

Run all tests: python3 -m pytest tests/identspell/ -v
Run specific: python3 -m pytest tests/identspell/test_segmenter.py -v
"""

__version__ = "1.0.0"
