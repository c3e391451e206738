"""Integration tests across notifier components."""
