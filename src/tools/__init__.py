"""Command line and reporting helpers."""
