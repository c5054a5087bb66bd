"""
配置管理模块
"""
import logging
import os
from pydantic import BaseModel
from dotenv import load_dotenv

# 加载环境变量
load_dotenv()

logger = logging.getLogger(__name__)


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


class Settings(BaseModel):
    """应用配置"""

    # Gemini API 配置（旁白/解说，可选）
    gemini_api_key: str = os.getenv("GEMINI_API_KEY", "")
    gemini_flash_model: str = os.getenv("GEMINI_MODEL", "gemini-3-flash-preview")
    narration_enabled: bool = _env_bool("NARRATION_ENABLED", True)
    narration_timeout_seconds: float = float(os.getenv("NARRATION_TIMEOUT_SECONDS", "4.0"))

    # 画面流（外部协作方，可选）
    visual_timeout_seconds: float = float(os.getenv("VISUAL_TIMEOUT_SECONDS", "3.0"))

    # 对战历史持久化
    battle_history_path: str = os.getenv("BATTLE_HISTORY_PATH", "./data/battle_history.json")
    battle_history_limit: int = int(os.getenv("BATTLE_HISTORY_LIMIT", "50"))

    # 对战规则
    stalemate_turn_limit: int = int(os.getenv("STALEMATE_TURN_LIMIT", "30"))  # 0 = 关闭

    # 输入限流
    action_rate_limit_max: int = int(os.getenv("ACTION_RATE_LIMIT_MAX", "30"))
    action_rate_limit_window_seconds: float = float(
        os.getenv("ACTION_RATE_LIMIT_WINDOW_SECONDS", "60")
    )

    # 输入长度上限
    max_action_length: int = 500
    max_character_length: int = 200
    max_world_length: int = 200

    # API 配置
    api_prefix: str = "/api"
    cors_origins: list = ["*"]


# 全局配置实例
settings = Settings()


def validate_config() -> bool:
    """
    验证配置是否完整

    缺少 Gemini 密钥不会阻止游戏运行，只会回退到本地旁白。

    Returns:
        bool: 配置是否完整
    """
    if not settings.gemini_api_key:
        logger.warning(
            "GEMINI_API_KEY is not set; narration and commentary will use local fallback text"
        )
        return False

    return True
