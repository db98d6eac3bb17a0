import pytest

from blockworld.biome import (
    Biome,
    BiomeAdditionsSound,
    BiomeGrassColorModifier,
    BiomeMoodSound,
    BiomeMusic,
    BiomeParticle,
    BiomePrecipitation,
)


def test_defaults():
    biome = Biome()
    assert biome.name == "plains"
    assert biome.precipitation is BiomePrecipitation.RAIN
    assert biome.sky_color == 7907327
    assert biome.water_fog_color == 329011
    assert biome.fog_color == 12638463
    assert biome.water_color == 4159204
    assert biome.grass_color_modifier is BiomeGrassColorModifier.NONE


def test_default_registry_item():
    item = Biome().to_registry_item(3)
    assert item["name"] == "plains"
    assert item["id"] == 3
    element = item["element"]
    assert element["precipitation"] == "rain"
    assert element["depth"] == 0.125
    assert element["temperature"] == 0.8
    assert element["scale"] == 0.05
    assert element["downfall"] == 0.4
    assert element["category"] == "none"
    assert "particle" not in element
    assert element["effects"] == {
        "sky_color": 7907327,
        "water_fog_color": 329011,
        "fog_color": 12638463,
        "water_color": 4159204,
    }


@pytest.mark.parametrize(
    "precipitation,text",
    [
        (BiomePrecipitation.RAIN, "rain"),
        (BiomePrecipitation.SNOW, "snow"),
        (BiomePrecipitation.NONE, "none"),
    ],
)
def test_precipitation_names(precipitation, text):
    item = Biome(precipitation=precipitation).to_registry_item(0)
    assert item["element"]["precipitation"] == text


@pytest.mark.parametrize(
    "modifier,text",
    [
        (BiomeGrassColorModifier.SWAMP, "swamp"),
        (BiomeGrassColorModifier.DARK_FOREST, "dark_forest"),
    ],
)
def test_grass_modifier_names(modifier, text):
    effects = Biome(grass_color_modifier=modifier).to_registry_item(0)["element"]["effects"]
    assert effects["grass_color_modifier"] == text


def test_colors_wrap_to_signed():
    effects = Biome(sky_color=0xFFFFFFFF).to_registry_item(0)["element"]["effects"]
    assert effects["sky_color"] == -1


def test_optional_colors_included():
    effects = Biome(grass_color=0x00FF00, foliage_color=0x123456).to_registry_item(0)[
        "element"
    ]["effects"]
    assert effects["grass_color"] == 0x00FF00
    assert effects["foliage_color"] == 0x123456


def test_sounds_and_particle():
    biome = Biome(
        name="valence:default_biome",
        music=BiomeMusic(True, "music.game", 10, 20),
        ambient_sound="ambient.cave",
        additions_sound=BiomeAdditionsSound("ambient.additions", 0.01),
        mood_sound=BiomeMoodSound("ambient.mood", 6000, 2.0, 8),
        particle=BiomeParticle(0.5, "ash"),
    )
    item = biome.to_registry_item(1)
    assert item["name"] == "valence:default_biome"
    effects = item["element"]["effects"]
    assert effects["music"] == {
        "replace_current_music": True,
        "sound": "music.game",
        "max_delay": 20,
        "min_delay": 10,
    }
    assert effects["ambient_sound"] == "ambient.cave"
    assert effects["additions_sound"] == {"sound": "ambient.additions", "tick_chance": 0.01}
    assert effects["mood_sound"] == {
        "sound": "ambient.mood",
        "tick_delay": 6000,
        "offset": 2.0,
        "block_search_extent": 8,
    }
    assert item["element"]["particle"] == {"probability": 0.5, "options": {"kind": "ash"}}