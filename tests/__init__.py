"""
Test Suite for Monthly Averages

Test Structure:
- unit/: Unit tests mirroring src/ package structure
- integration/: CLI and end-to-end workflow tests
"""
