"""Core ECS listing, inspection, and session logic."""
