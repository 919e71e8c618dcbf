"""Validators for memory-bank instruction, chatmode and prompt conventions."""

__version__ = "0.1.0"
