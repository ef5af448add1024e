"""Command line interface for ecsctl."""
