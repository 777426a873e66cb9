"""Command line maintenance tasks for petfolio."""
