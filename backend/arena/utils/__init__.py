"""
工具函数包
"""
from .rate_limiter import RateLimiter
from .sanitize import (
    ValidationResult,
    sanitize_input,
    validate_character_input,
    validate_prompt,
    validate_world_input,
)

__all__ = [
    "RateLimiter",
    "ValidationResult",
    "sanitize_input",
    "validate_character_input",
    "validate_prompt",
    "validate_world_input",
]
