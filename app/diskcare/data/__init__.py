"""Bundled data files for diskcare."""
