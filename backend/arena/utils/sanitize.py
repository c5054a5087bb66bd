"""
输入清洗与校验

所有文本在进入分类器之前经过这里：去掉尖括号、javascript: 协议、
内联事件处理器，并截断到长度上限。
"""
import re
from dataclasses import dataclass
from typing import Optional

from arena.config import settings

MIN_INPUT_LENGTH = 3

_ANGLE_BRACKETS = re.compile(r"[<>]")
_JS_PROTOCOL = re.compile(r"javascript:", re.IGNORECASE)
_INLINE_HANDLER = re.compile(r"on\w+\s*=", re.IGNORECASE)


@dataclass(frozen=True)
class ValidationResult:
    valid: bool
    error: Optional[str] = None


def sanitize_input(value: str, max_length: Optional[int] = None) -> str:
    """清洗用户输入（先过滤再截断，最后去首尾空白）"""
    limit = max_length if max_length is not None else settings.max_action_length
    cleaned = _ANGLE_BRACKETS.sub("", value or "")
    cleaned = _JS_PROTOCOL.sub("", cleaned)
    cleaned = _INLINE_HANDLER.sub("", cleaned)
    return cleaned[:limit].strip()


def _validate(value: str, empty_error: str, max_length: int) -> ValidationResult:
    trimmed = (value or "").strip()
    if not trimmed:
        return ValidationResult(False, empty_error)
    if len(trimmed) < MIN_INPUT_LENGTH:
        return ValidationResult(False, f"Must be at least {MIN_INPUT_LENGTH} characters")
    if len(trimmed) > max_length:
        return ValidationResult(False, f"Max {max_length} characters")
    return ValidationResult(True)


def validate_character_input(value: str) -> ValidationResult:
    return _validate(value, "Character description is required", settings.max_character_length)


def validate_world_input(value: str) -> ValidationResult:
    return _validate(value, "World description is required", settings.max_world_length)


def validate_prompt(value: str) -> ValidationResult:
    return _validate(value, "Action cannot be empty", settings.max_action_length)
