"""Biome configuration and its registry representation."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Any


class BiomePrecipitation(enum.Enum):
    RAIN = "rain"
    SNOW = "snow"
    NONE = "none"


class BiomeGrassColorModifier(enum.Enum):
    """Special grass colouring used for swamps and dark oak forests."""

    SWAMP = "swamp"
    DARK_FOREST = "dark_forest"
    NONE = "none"


@dataclass
class BiomeMusic:
    replace_current_music: bool
    sound: str
    min_delay: int
    max_delay: int


@dataclass
class BiomeAdditionsSound:
    sound: str
    tick_chance: float


@dataclass
class BiomeMoodSound:
    sound: str
    tick_delay: int
    offset: float
    block_search_extent: int


@dataclass
class BiomeParticle:
    probability: float
    kind: str


def _to_i32(value: int) -> int:
    value &= 0xFFFFFFFF
    return value - (1 << 32) if value >= 1 << 31 else value


@dataclass
class Biome:
    """The configuration of one biome, registered once at startup."""

    name: str = "plains"
    precipitation: BiomePrecipitation = BiomePrecipitation.RAIN
    sky_color: int = 7907327
    water_fog_color: int = 329011
    fog_color: int = 12638463
    water_color: int = 4159204
    foliage_color: int | None = None
    grass_color: int | None = None
    grass_color_modifier: BiomeGrassColorModifier = BiomeGrassColorModifier.NONE
    music: BiomeMusic | None = None
    ambient_sound: str | None = None
    additions_sound: BiomeAdditionsSound | None = None
    mood_sound: BiomeMoodSound | None = None
    particle: BiomeParticle | None = None

    def to_registry_item(self, id: int) -> dict[str, Any]:
        """Build the biome registry entry for this biome; absent options are omitted."""
        effects: dict[str, Any] = {
            "sky_color": _to_i32(self.sky_color),
            "water_fog_color": _to_i32(self.water_fog_color),
            "fog_color": _to_i32(self.fog_color),
            "water_color": _to_i32(self.water_color),
        }
        if self.foliage_color is not None:
            effects["foliage_color"] = _to_i32(self.foliage_color)
        if self.grass_color is not None:
            effects["grass_color"] = _to_i32(self.grass_color)
        if self.grass_color_modifier is not BiomeGrassColorModifier.NONE:
            effects["grass_color_modifier"] = self.grass_color_modifier.value
        if self.music is not None:
            effects["music"] = {
                "replace_current_music": self.music.replace_current_music,
                "sound": self.music.sound,
                "max_delay": self.music.max_delay,
                "min_delay": self.music.min_delay,
            }
        if self.ambient_sound is not None:
            effects["ambient_sound"] = self.ambient_sound
        if self.additions_sound is not None:
            effects["additions_sound"] = {
                "sound": self.additions_sound.sound,
                "tick_chance": self.additions_sound.tick_chance,
            }
        if self.mood_sound is not None:
            effects["mood_sound"] = {
                "sound": self.mood_sound.sound,
                "tick_delay": self.mood_sound.tick_delay,
                "offset": self.mood_sound.offset,
                "block_search_extent": self.mood_sound.block_search_extent,
            }

        element: dict[str, Any] = {
            "precipitation": self.precipitation.value,
            "depth": 0.125,
            "temperature": 0.8,
            "scale": 0.05,
            "downfall": 0.4,
            "category": "none",
            "effects": effects,
        }
        if self.particle is not None:
            element["particle"] = {
                "probability": self.particle.probability,
                "options": {"kind": self.particle.kind},
            }

        return {"name": self.name, "id": id, "element": element}