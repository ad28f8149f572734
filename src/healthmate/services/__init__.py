"""Core services for healthmate."""

from .assistant import HealthAssistant
from .health_logs import HealthLogService

__all__ = ["HealthAssistant", "HealthLogService"]
