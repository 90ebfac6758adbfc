"""Self-hosted web app for following YouTube channels through their feeds."""

__version__ = "0.1.0"