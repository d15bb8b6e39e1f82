"""Face reading domain: prompts and the analysis/chat service."""

from facefortune.fortune.prompts import ANALYSIS_PROMPT, build_chat_prompt
from facefortune.fortune.service import FortuneService

__all__ = ["ANALYSIS_PROMPT", "FortuneService", "build_chat_prompt"]
