"""Test suite for tonekit.

Test Structure:
- unit/curves/: Engine, segment solver, codec, channels and JSON documents
- unit/formats/path/: Path text parser and writer
- unit/config/: Config models and file loading
- unit/utils/: Logging and math helpers
- conftest.py: Shared fixtures and test configuration
"""
