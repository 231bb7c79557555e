"""Bundled data files for dotman."""
