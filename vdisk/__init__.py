"""Command-line tool, script runner and REST daemon for the in-memory disk."""
