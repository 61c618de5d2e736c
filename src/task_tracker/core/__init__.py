"""Ports shared between the CLI and the task store."""
