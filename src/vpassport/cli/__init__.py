"""Command-line interface for vpassport."""
