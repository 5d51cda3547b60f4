"""Local task list manager with a console view."""

__version__ = "0.1.0"
