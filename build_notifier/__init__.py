"""Build SMS Notifier: text build results to recipients and culprits."""

__version__ = "1.0.0"
