"""
Test Package

Unit tests per module plus an end-to-end smoke test.
Run with: pytest tests/ -v

Shared score, feature and scheme builders live in tests/helpers.py.

Example:
    tests/test_sanity.py        - Smoke test through the package re-exports
    tests/test_segmenter.py     - Tests for scorevis/analysis/segmenter.py
    tests/test_preference.py    - Tests for scorevis/learning/preference.py
"""
