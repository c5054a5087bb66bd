"""
预置角色与场地

快速开局用的角色/世界组合，按类别组织。
"""
import random
from dataclasses import asdict, dataclass
from enum import Enum
from typing import Any, Dict, List, Optional


class ArchetypeCategory(str, Enum):
    FANTASY = "fantasy"
    SCIFI = "scifi"
    SUPERNATURAL = "supernatural"
    MODERN = "modern"


@dataclass(frozen=True)
class CharacterArchetype:
    name: str
    character: str
    world: str
    category: ArchetypeCategory

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["category"] = self.category.value
        return data


@dataclass(frozen=True)
class ArenaPreset:
    name: str
    description: str


CHARACTER_ARCHETYPES: List[CharacterArchetype] = [
    # 奇幻
    CharacterArchetype(
        name="Solar Knight",
        character="A knight clad in molten gold armor wielding a plasma greatsword, radiating divine light and heat",
        world="An ancient volcanic arena with rivers of lava and obsidian pillars",
        category=ArchetypeCategory.FANTASY,
    ),
    CharacterArchetype(
        name="Void Mage",
        character="A hooded figure surrounded by floating runes and crackling purple energy, manipulating the fabric of space",
        world="A floating crystal palace above the clouds at sunset",
        category=ArchetypeCategory.FANTASY,
    ),
    CharacterArchetype(
        name="Shadow Assassin",
        character="A shadow assassin made of living smoke with twin obsidian daggers and glowing crimson eyes",
        world="A dark forest clearing with giant mushrooms glowing purple and swirling mist",
        category=ArchetypeCategory.FANTASY,
    ),
    CharacterArchetype(
        name="Storm Valkyrie",
        character="A fierce valkyrie in silver winged armor wielding a lightning spear crackling with electricity",
        world="A frozen tundra under shimmering aurora borealis with cracked ice and howling winds",
        category=ArchetypeCategory.FANTASY,
    ),
    # 科幻
    CharacterArchetype(
        name="Nexus-7",
        character="A sleek cybernetic warrior with glowing circuit patterns and adaptive plasma weapons across the body",
        world="A neon-lit cyberpunk rooftop at night with holographic billboards and rain",
        category=ArchetypeCategory.SCIFI,
    ),
    CharacterArchetype(
        name="Stellar Ace",
        character="An elite pilot in a form-fitting exosuit with holographic HUD displays and energy shields",
        world="A shattered space station orbiting a dying star with debris floating in zero gravity",
        category=ArchetypeCategory.SCIFI,
    ),
    # 超自然
    CharacterArchetype(
        name="Infernus",
        character="A towering demon wreathed in living fire with obsidian horns and veins flowing with molten lava",
        world="A hellscape of crumbling basalt with rivers of fire and a blood-red sky",
        category=ArchetypeCategory.SUPERNATURAL,
    ),
    CharacterArchetype(
        name="Lumina",
        character="A radiant celestial being with crystalline wings that shimmer with prismatic light and a halo of stars",
        world="A celestial palace floating among the stars with crystalline floors and nebula skies",
        category=ArchetypeCategory.SUPERNATURAL,
    ),
    # 现代
    CharacterArchetype(
        name="Iron Fist",
        character="A muscular martial artist with glowing tattoos and wrapped fists crackling with ki energy",
        world="A rain-soaked Tokyo street at night with neon signs reflecting off the wet pavement",
        category=ArchetypeCategory.MODERN,
    ),
    CharacterArchetype(
        name="Ghost Protocol",
        character="A figure in sleek tactical tech gear surrounded by floating holographic code and data streams",
        world="A high-tech underground bunker with screens showing cascading data and blue ambient lighting",
        category=ArchetypeCategory.MODERN,
    ),
]

ARENA_PRESETS: List[ArenaPreset] = [
    ArenaPreset(
        name="Ancient Coliseum",
        description="A ruined Roman coliseum at dusk with crumbling marble pillars, dust particles floating in golden light, dramatic shadows stretching across the sand floor",
    ),
    ArenaPreset(
        name="Neon City",
        description="A rain-soaked cyberpunk city rooftop at night, neon signs reflecting off wet surfaces, holographic billboards in the background, steam rising from vents",
    ),
    ArenaPreset(
        name="Volcanic Arena",
        description="An arena carved into an active volcano, rivers of lava flowing below, obsidian pillars rising from molten rock, ember particles floating upward",
    ),
    ArenaPreset(
        name="Frozen Tundra",
        description="A vast frozen wasteland under northern lights, ice crystals glittering in the aurora, cracked ice floor revealing dark water below",
    ),
    ArenaPreset(
        name="Floating Palace",
        description="A floating crystal palace high above the clouds, translucent crystal pillars, sunset light refracting through prismatic surfaces",
    ),
]


def get_archetype(name: str) -> Optional[CharacterArchetype]:
    """按名称查找（忽略大小写）"""
    wanted = name.strip().lower()
    for archetype in CHARACTER_ARCHETYPES:
        if archetype.name.lower() == wanted:
            return archetype
    return None


def get_archetypes_by_category(category) -> List[CharacterArchetype]:
    category = ArchetypeCategory(category)
    return [a for a in CHARACTER_ARCHETYPES if a.category == category]


def get_random_archetype(
    exclude_name: Optional[str] = None, rng: Optional[random.Random] = None
) -> CharacterArchetype:
    """随机挑选一个角色，可排除指定名称（例如对手已选的角色）"""
    rng = rng or random.Random()
    available = [a for a in CHARACTER_ARCHETYPES if a.name != exclude_name] or CHARACTER_ARCHETYPES
    return rng.choice(available)


def get_arena_preset(name: str) -> Optional[ArenaPreset]:
    wanted = name.strip().lower()
    return next((p for p in ARENA_PRESETS if p.name.lower() == wanted), None)
