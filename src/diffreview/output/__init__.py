"""Reporters — Rich terminal view, JSON and YAML dumps."""
