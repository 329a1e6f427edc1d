"""Core business logic layer.

Subpackages:
- calories: daily calorie target estimation
- planning: prompt building, response parsing and plan generation
- progress: weight history progress and remaining time
"""
__all__ = ["calories", "planning", "progress"]
