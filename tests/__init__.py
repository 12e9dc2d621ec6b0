"""Test package for geocluster.

This package contains:
- Unit tests (test_spatial.py, test_hooks.py, test_clustering.py)
- Layer source tests (test_source.py)
- Configuration tests (test_config.py)
- Test configuration (conftest.py)
"""
