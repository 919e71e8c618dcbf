"""Command-line entry points (``python -m memorybank.tools.<name>``)."""
