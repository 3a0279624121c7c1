"""Composable assertion matchers with descriptive failure messages."""

__version__ = "0.1.0"