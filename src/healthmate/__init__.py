"""healthmate: personal health tracking with daily logs, analytics and an AI assistant."""

__version__ = "0.1.0"
