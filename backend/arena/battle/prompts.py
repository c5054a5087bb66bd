"""
画面提示词模板

三层结构：
1. 基础场景（开流时发送一次）
2. 角色注入（说明场景里是谁、在哪）
3. 行动提示（对战中发送，使用状态描述而不是动作动词，避免画面循环）

这些字符串对对战规则不透明，只交给外部画面协作方。
"""
import re
from typing import Dict, List, Optional, Tuple

from .models.player import clamp_evolution_level

DEFAULT_ARENA = "a dramatic cinematic arena with atmospheric lighting"

BASE_WORLD_PROMPT = """A cinematic third-person view of a dramatic battle arena.
Two distinct characters face each other across the arena.
The world follows consistent physical rules.
Motion, damage, and environmental changes persist over time.
The camera behaves like a modern video game, eye-level wide shot.
Lighting is dramatic and atmospheric with strong highlights and deep shadows.
Cinematic depth of field, rich detail, AAA game quality."""


# ============================================
# 角色与开场
# ============================================

def build_character_prompt(character: str, world: str) -> str:
    """setup 阶段写入 PlayerState.character_prompt 的预览提示词"""
    return (
        f"A cinematic portrait of {character}, in a {world} environment. "
        "The camera is steady with close-up framing. "
        "Dramatic lighting with depth and atmosphere. "
        "Fantasy art style with rich detail."
    )


def build_battle_start_prompt(
    p1_character: str, p2_character: str, arena_description: Optional[str] = None
) -> str:
    arena = arena_description or DEFAULT_ARENA
    return f"""A dramatic battle arena: {arena}.
On the left side: {p1_character}, in a battle-ready stance.
On the right side: {p2_character}, in a battle-ready stance.
They are facing each other, ready for battle.
Cinematic wide shot, dramatic lighting, tense atmosphere.
AAA game quality, rich detail, cinematic depth of field."""


# ============================================
# 行动提示
# ============================================

# 动词前缀 → 状态描述
VERB_TO_STATE: List[Tuple[str, str]] = [
    ("unleashes", "is channeling"),
    ("attacks", "is attacking with"),
    ("strikes", "is mid-strike, connecting"),
    ("punches", "is delivering a powerful punch,"),
    ("kicks", "is delivering a powerful kick,"),
    ("slashes", "is mid-slash,"),
    ("shoots", "is firing,"),
    ("casts", "is channeling,"),
    ("summons", "has summoned"),
    ("throws", "has thrown"),
    ("charges", "is charging forward with"),
    ("blocks", "is blocking with"),
    ("dodges", "is evading,"),
    ("heals", "is surrounded by healing energy,"),
    ("defends", "is in a fortified defensive stance,"),
    ("taunts", "is taunting the opponent,"),
    ("launches", "has launched"),
    ("fires", "is firing,"),
    ("swings", "is mid-swing,"),
    ("crushes", "is crushing with"),
    ("smashes", "is smashing with"),
    ("blasts", "is blasting with"),
]

_STATE_PREFIX = re.compile(
    r"^(is |has |are |was |were |been |being |holding |wearing |surrounded |channeling |radiating )"
)


def convert_to_state_description(action: str) -> str:
    """
    把动作动词改写为状态描述

    "strikes with fire" → "is mid-strike, connecting with fire"
    未知动词统一包成 "is ..."，已经是状态描述的原样返回。
    """
    lower = action.lower().strip()
    for verb, state in VERB_TO_STATE:
        if lower.startswith(verb):
            return state + action.strip()[len(verb):]
    if not _STATE_PREFIX.match(lower):
        return f"is {action.strip()}"
    return action.strip()


def build_action_prompt(character_name: str, action: str, opponent_name: str) -> str:
    state_action = convert_to_state_description(action)
    return f"""{character_name} {state_action}.
This action has visible force and impact on the scene.
{opponent_name} is reacting realistically to the effect.
The environment is showing signs of the battle's intensity.
Dramatic cinematic camera angle captures the moment."""


# ============================================
# 进化外观修饰
# ============================================

EVOLUTION_VISUAL_MODIFIERS: Dict[int, List[str]] = {
    -2: [
        "Severely wounded and barely holding together",
        "Surrounded by a dark, corrupted aura",
        "Colors are dull, gray, and fading",
        "Cracked and broken appearance",
    ],
    -1: [
        "Visibly damaged and weakened",
        "Faded, desaturated coloring",
        "Battle-worn with visible scars",
        "Diminished presence",
    ],
    0: [],
    1: [
        "Enhanced with a glowing energy aura",
        "Eyes crackling with power",
        "More vibrant and radiant colors",
        "Confident and empowered stance",
    ],
    2: [
        "Transcendent form radiating cosmic energy",
        "Surrounded by reality-bending light effects",
        "Blindingly brilliant colors and divine glow",
        "Massive, dominating presence with otherworldly features",
    ],
}


def evolution_modifiers(level: int) -> List[str]:
    return list(EVOLUTION_VISUAL_MODIFIERS.get(clamp_evolution_level(level), []))


def build_evolved_character_prompt(base_character: str, world: str, evolution_level: int) -> str:
    """带进化外观修饰的角色提示词（基础形态不加修饰）"""
    modifiers = evolution_modifiers(evolution_level)
    lines = [f"A cinematic portrait of {base_character}, in a {world} environment."]
    if modifiers:
        lines.append(". ".join(modifiers) + ".")
    lines.extend([
        "The camera is steady with close-up framing.",
        "Dramatic lighting with depth and atmosphere.",
        "Fantasy art style with rich detail.",
    ])
    if not modifiers:
        lines.append("The character is in a powerful, confident pose.")
    return "\n".join(lines)


def build_evolved_battle_prompt(
    p1_character: str,
    p2_character: str,
    p1_level: int,
    p2_level: int,
    arena: Optional[str] = None,
) -> str:
    """对战开场提示词，每位角色只附加第一条外观修饰"""
    p1_mods = evolution_modifiers(p1_level)
    p2_mods = evolution_modifiers(p2_level)
    p1_desc = f"{p1_character}. {p1_mods[0]}" if p1_mods else p1_character
    p2_desc = f"{p2_character}. {p2_mods[0]}" if p2_mods else p2_character
    return build_battle_start_prompt(p1_desc, p2_desc, arena)
