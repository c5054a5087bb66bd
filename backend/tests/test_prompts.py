import random

from arena.battle.character_library import (
    ARENA_PRESETS,
    CHARACTER_ARCHETYPES,
    ArchetypeCategory,
    get_archetype,
    get_archetypes_by_category,
    get_arena_preset,
    get_random_archetype,
)
from arena.battle.prompts import (
    build_action_prompt,
    build_battle_start_prompt,
    build_evolved_battle_prompt,
    build_evolved_character_prompt,
    convert_to_state_description,
    evolution_modifiers,
)


def test_action_verbs_become_state_descriptions():
    assert convert_to_state_description("strikes with fire") == "is mid-strike, connecting with fire"
    assert convert_to_state_description("Summons a storm") == "has summoned a storm"
    assert convert_to_state_description("jumps over the wall") == "is jumps over the wall"
    assert convert_to_state_description("is glowing with rage") == "is glowing with rage"


def test_action_prompt_names_both_sides():
    prompt = build_action_prompt("Nyx", "blocks with a shield", "Ember")
    assert prompt.startswith("Nyx is blocking with a shield.")
    assert "Ember is reacting" in prompt


def test_battle_start_prompt_defaults_arena():
    prompt = build_battle_start_prompt("a knight", "a witch")
    assert "a dramatic cinematic arena" in prompt
    assert "On the left side: a knight" in prompt


def test_evolved_prompts_follow_level():
    assert evolution_modifiers(0) == []
    assert evolution_modifiers(5) == evolution_modifiers(2)

    base = build_evolved_character_prompt("a knight", "a volcano", 0)
    assert "powerful, confident pose" in base

    empowered = build_evolved_character_prompt("a knight", "a volcano", 1)
    assert "glowing energy aura" in empowered
    assert "confident pose" not in empowered.splitlines()[-1]

    battle = build_evolved_battle_prompt("a knight", "a witch", 2, -2, arena="ruins")
    assert "a knight. Transcendent form" in battle
    assert "a witch. Severely wounded" in battle
    assert "ruins" in battle


def test_character_library_lookup():
    assert len(CHARACTER_ARCHETYPES) == 10
    assert get_archetype("solar knight").name == "Solar Knight"
    assert get_archetype("nobody") is None
    assert {a.name for a in get_archetypes_by_category("scifi")} == {"Nexus-7", "Stellar Ace"}
    assert all(a.category == ArchetypeCategory.MODERN for a in get_archetypes_by_category(ArchetypeCategory.MODERN))
    assert get_archetype("Lumina").to_dict()["category"] == "supernatural"


def test_random_archetype_respects_exclusion():
    rng = random.Random(4)
    for _ in range(30):
        assert get_random_archetype("Void Mage", rng).name != "Void Mage"


def test_arena_presets():
    assert len(ARENA_PRESETS) == 5
    assert get_arena_preset("neon city").name == "Neon City"
    assert get_arena_preset("moon") is None
