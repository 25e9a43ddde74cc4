"""Command-line entry point for the appointment calendar."""
