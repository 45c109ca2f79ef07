"""Shared state and worker pool demonstrations."""
