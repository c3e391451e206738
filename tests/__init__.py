"""Tests for the Build SMS Notifier."""
