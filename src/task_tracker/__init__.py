"""
Personal task tracker.

A single-user CLI that keeps tasks in a local JSON file.
"""

__version__ = "0.1.0"
