"""Prompt building for the health assistant."""

from .prompts import build_chat_system_prompt, build_daily_summary_prompt

__all__ = ["build_chat_system_prompt", "build_daily_summary_prompt"]
