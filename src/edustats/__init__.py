"""edu-stats: program cost, salary and employability lookups."""

from .pipeline import EduStatsPipeline, PipelineResult
from .config import EduStatsSettings

__all__ = ["EduStatsPipeline", "PipelineResult", "EduStatsSettings"]
