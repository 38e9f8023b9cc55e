"""Language-model enrichment for the edu-stats lookup."""

from .llm import LanguageModel, LanguageModelError, MissingCredentials
from .prompts import build_estimate_prompt, build_fusion_prompt

__all__ = [
    "LanguageModel",
    "LanguageModelError",
    "MissingCredentials",
    "build_estimate_prompt",
    "build_fusion_prompt",
]
