"""taskline: terminal task manager with natural-language due dates synced to Todoist."""

__version__ = "0.1.0"
