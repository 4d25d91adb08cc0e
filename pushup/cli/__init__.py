"""Command-line interface for PushUP."""
