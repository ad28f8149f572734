"""AI assistant exchange models."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum


class ChatRole(str, Enum):
    SYSTEM = "system"
    USER = "user"
    ASSISTANT = "assistant"


@dataclass
class ChatTurn:
    """One message of a conversation."""

    role: ChatRole
    content: str

    def to_message(self) -> dict:
        """Format for the completion API."""
        return {"role": self.role.value, "content": self.content}

    @classmethod
    def from_dict(cls, data: dict) -> "ChatTurn":
        # The web client labels assistant turns "ai"
        role = data.get("role") or data.get("type") or "user"
        if role == "ai":
            role = "assistant"
        return cls(role=ChatRole(role), content=str(data.get("content", "")))


@dataclass
class ChatReply:
    """Assistant reply to a chat message."""

    response: str
    timestamp: datetime

    def to_dict(self) -> dict:
        return {"response": self.response, "timestamp": self.timestamp.isoformat()}


@dataclass
class DailySummary:
    """AI daily summary with recommendations and scores."""

    summary: str
    recommendations: list[str] = field(default_factory=list)
    health_score: int = 0
    trends: dict[str, str] = field(default_factory=dict)

    def to_dict(self) -> dict:
        return {
            "summary": self.summary,
            "recommendations": list(self.recommendations),
            "health_score": self.health_score,
            "trends": dict(self.trends),
        }
