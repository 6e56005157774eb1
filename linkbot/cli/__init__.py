"""CLI module for linkbot."""
