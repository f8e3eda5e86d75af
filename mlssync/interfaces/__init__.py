"""Outer interfaces (command line) for mlssync."""
