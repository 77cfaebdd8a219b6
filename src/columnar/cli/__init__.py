"""Cyclopts command-line surface for columnar."""
