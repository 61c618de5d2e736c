"""Command-line front end: bootstrap, command registry and entry point."""
