"""Single-screen task list with key-value persistence."""

__version__ = "0.1.0"
