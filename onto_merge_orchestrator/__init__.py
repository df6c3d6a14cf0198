"""Manifest-driven merge pipeline and command-line entry point."""
