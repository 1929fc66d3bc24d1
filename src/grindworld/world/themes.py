"""Static lookup tables for biomes, object pools, and scenario themes."""

from __future__ import annotations

from dataclasses import dataclass

from grindworld.models import Biome, ObjectType, ScenarioTheme

B = Biome
O = ObjectType
T = ScenarioTheme

ALL_BIOMES: tuple[Biome, ...] = tuple(Biome)

THEME_BIOMES: dict[ScenarioTheme, tuple[Biome, ...]] = {
    T.NONE: ALL_BIOMES,
    T.PASTORAL: (B.GRASSLAND, B.VILLAGE, B.FOREST),
    T.ARCHAEOLOGICAL: (B.RUINS, B.DESERT, B.MOUNTAINS),
    T.SURVIVAL: (B.FOREST, B.MOUNTAINS, B.LAKE),
    T.FANTASY: (B.FOREST, B.LAKE, B.MOUNTAINS),
    T.NAUTICAL: (B.LAKE, B.GRASSLAND, B.DESERT),
    T.INDUSTRIAL: (B.VILLAGE, B.MOUNTAINS, B.DESERT),
    T.APOCALYPTIC: (B.DESERT, B.RUINS, B.MOUNTAINS),
}

STARTING_BIOMES: dict[ScenarioTheme, Biome] = {
    T.NONE: B.GRASSLAND,
    T.PASTORAL: B.GRASSLAND,
    T.ARCHAEOLOGICAL: B.RUINS,
    T.SURVIVAL: B.FOREST,
    T.FANTASY: B.FOREST,
    T.NAUTICAL: B.LAKE,
    T.INDUSTRIAL: B.VILLAGE,
    T.APOCALYPTIC: B.DESERT,
}

INTERACTIVE_OBJECTS: dict[Biome, tuple[ObjectType, ...]] = {
    B.FOREST: (O.CHEST, O.MUSHROOM, O.LOG, O.BERRY_BUSH, O.PLANT),
    B.GRASSLAND: (O.CRATE, O.PLANT, O.WELL, O.CHEST, O.BERRY_BUSH),
    B.DESERT: (O.CRYSTAL, O.CRATE, O.STATUE, O.CART),
    B.MOUNTAINS: (O.CRYSTAL, O.CHEST, O.CAMPFIRE),
    B.LAKE: (O.CRATE, O.PLANT, O.WELL),
    B.VILLAGE: (O.CRATE, O.CHEST, O.WELL, O.CART),
    B.RUINS: (O.CHEST, O.STATUE, O.CRYSTAL, O.CRATE),
}

ENVIRONMENT_OBJECTS: dict[Biome, tuple[ObjectType, ...]] = {
    B.FOREST: (O.TREE, O.BUSH, O.ROCK, O.FLOWER),
    B.GRASSLAND: (O.TREE, O.FLOWER, O.BUSH, O.ROCK, O.FENCE),
    B.DESERT: (O.ROCK, O.BUSH, O.RUINS),
    B.MOUNTAINS: (O.ROCK, O.TREE, O.RUINS),
    B.LAKE: (O.TREE, O.ROCK, O.BUSH, O.BRIDGE),
    B.VILLAGE: (O.BUILDING, O.TREE, O.FLOWER, O.FENCE),
    B.RUINS: (O.RUINS, O.ROCK, O.BUSH, O.BUILDING),
}

# Interactive types a theme mixes into every biome's interactive pool.
THEME_INTERACTIVES: dict[ScenarioTheme, tuple[ObjectType, ...]] = {
    T.NONE: (),
    T.PASTORAL: (O.BERRY_BUSH, O.WELL, O.CART),
    T.ARCHAEOLOGICAL: (O.STATUE, O.CHEST),
    T.SURVIVAL: (O.CAMPFIRE, O.LOG),
    T.FANTASY: (O.CRYSTAL, O.MUSHROOM),
    T.NAUTICAL: (O.CHEST, O.CRATE),
    T.INDUSTRIAL: (O.CART, O.CRATE),
    T.APOCALYPTIC: (O.CRATE, O.CAMPFIRE),
}


@dataclass(frozen=True, slots=True)
class NPCPool:
    names: tuple[str, ...]
    personalities: tuple[str, ...]
    occupations: tuple[str, ...]
    topics: tuple[str, ...]
    background: str


DEFAULT_NAMES = ("Elena", "Marcus", "Aria", "Finn", "Luna", "Kai", "Nova", "Sage", "River", "Atlas")
DEFAULT_PERSONALITIES = (
    "friendly and outgoing",
    "wise and thoughtful",
    "mysterious and quiet",
    "cheerful and optimistic",
    "gruff but kind-hearted",
    "curious and inquisitive",
    "calm and peaceful",
    "energetic and enthusiastic",
)

DEFAULT_OCCUPATIONS: dict[Biome, tuple[str, ...]] = {
    B.FOREST: ("ranger", "herbalist", "hunter", "druid"),
    B.GRASSLAND: ("farmer", "shepherd", "trader", "wanderer"),
    B.DESERT: ("nomad", "merchant", "guide", "scholar"),
    B.MOUNTAINS: ("miner", "climber", "hermit", "blacksmith"),
    B.LAKE: ("fisherman", "sailor", "water keeper"),
    B.VILLAGE: ("shopkeeper", "innkeeper", "mayor", "craftsman"),
    B.RUINS: ("explorer", "scavenger", "historian"),
}

DEFAULT_TOPICS: dict[Biome, tuple[str, ...]] = {
    B.FOREST: ("nature", "wildlife", "herbs", "ancient trees"),
    B.GRASSLAND: ("farming", "weather", "travel", "seasons"),
    B.DESERT: ("survival", "stars", "ancient ruins", "trade routes"),
    B.MOUNTAINS: ("climbing", "minerals", "legends", "solitude"),
    B.LAKE: ("fishing", "boats", "water spirits", "tides"),
    B.VILLAGE: ("local news", "trade", "crafts", "community"),
    B.RUINS: ("lost history", "old stones", "forgotten roads"),
}

DEFAULT_BACKGROUND = "A local {occupation} who has spent years in this {biome} region."

THEME_NPC_POOLS: dict[ScenarioTheme, NPCPool] = {
    T.PASTORAL: NPCPool(
        names=("Martha", "Tobias", "Greta", "Hollis", "Wren", "Bram"),
        personalities=("warm and welcoming", "hardworking and humble", "chatty and neighborly"),
        occupations=("farmer", "miller", "shepherd", "baker", "carpenter"),
        topics=("harvest", "livestock", "village festivals", "weather"),
        background="A {occupation} who has worked the fields around this {biome} all their life.",
    ),
    T.ARCHAEOLOGICAL: NPCPool(
        names=("Dr. Ilsa Varn", "Professor Quill", "Tamsin", "Orrin", "Keeper Mael"),
        personalities=("scholarly and meticulous", "secretive and watchful", "excitable about discoveries"),
        occupations=("archaeologist", "scholar", "mystic guardian", "cartographer"),
        topics=("ancient civilizations", "lost artifacts", "temple glyphs", "old magic"),
        background="A {occupation} studying the remnants of a lost civilization in the {biome}.",
    ),
    T.SURVIVAL: NPCPool(
        names=("Jeb", "Rook", "Hazel", "Cade", "Mira"),
        personalities=("tough and resourceful", "wary of strangers", "practical and blunt"),
        occupations=("trapper", "survivalist", "outpost trader", "scout"),
        topics=("dangerous wildlife", "shelter", "supplies", "frontier outposts"),
        background="A {occupation} who has carved out a living on the edge of the {biome} wilds.",
    ),
    T.FANTASY: NPCPool(
        names=("Elowen", "Thalric", "Seraphine", "Gwydion", "Nyx"),
        personalities=("whimsical and mysterious", "ancient and serene", "mischievous but kind"),
        occupations=("wizard", "witch", "enchanter", "dragon keeper", "fae envoy"),
        topics=("spells", "enchanted creatures", "floating islands", "prophecies"),
        background="A {occupation} drawn to the magic that flows through this {biome}.",
    ),
    T.NAUTICAL: NPCPool(
        names=("Captain Brine", "Marisol", "Salty Pete", "Coral", "Finnegan"),
        personalities=("boisterous and daring", "superstitious and loyal", "shrewd and charming"),
        occupations=("pirate", "sailor", "merchant", "island native", "navigator"),
        topics=("buried treasure", "sea monsters", "trade winds", "hidden coves"),
        background="A {occupation} who washed ashore on this {biome} and never left.",
    ),
    T.INDUSTRIAL: NPCPool(
        names=("Cornelius Cog", "Ada Sprocket", "Percival", "Ivy Steam", "Barnaby"),
        personalities=("inventive and restless", "proper and aloof", "tired but proud"),
        occupations=("inventor", "engineer", "factory worker", "aristocrat", "clockmaker"),
        topics=("steam engines", "clockwork", "railways", "the latest invention"),
        background="A {occupation} working among the brass machines of this {biome}.",
    ),
    T.APOCALYPTIC: NPCPool(
        names=("Dust", "Raze", "Old Marla", "Vex", "Sparrow"),
        personalities=("desperate and guarded", "grim but fair", "hopeful despite everything"),
        occupations=("scavenger", "raider", "wasteland trader", "settlement medic"),
        topics=("clean water", "radiation", "raider gangs", "rebuilding"),
        background="A {occupation} surviving among the ruins of the old world in this {biome}.",
    ),
}

SKIN_TONES = ("#FFDBAC", "#F1C27D", "#E0AC69", "#C68642", "#8D5524")
CLOTHING_COLORS = ("#8B4513", "#228B22", "#4169E1", "#DC143C", "#8A2BE2", "#DAA520")

THEME_DESCRIPTIONS: dict[ScenarioTheme, str] = {
    T.PASTORAL: "A peaceful {biome} with gentle paths and signs of friendly settlers nearby.",
    T.ARCHAEOLOGICAL: "Weathered {biome} hiding fragments of a lost civilization.",
    T.SURVIVAL: "A harsh stretch of {biome} where resources must be hard won.",
    T.FANTASY: "An enchanted {biome} shimmering with quiet magic.",
    T.NAUTICAL: "A salt-swept {biome} that smells of the sea and buried treasure.",
    T.INDUSTRIAL: "A {biome} scarred by industry, echoing with distant machinery.",
    T.APOCALYPTIC: "A desolate {biome} littered with the remains of the old world.",
}
GENERIC_DESCRIPTION = "A {biome} area with various natural features and discoverable items"


@dataclass(frozen=True, slots=True)
class ScenarioPreset:
    id: str
    name: str
    theme: ScenarioTheme
    prompt: str


SCENARIO_PRESETS: tuple[ScenarioPreset, ...] = (
    ScenarioPreset(
        "peaceful_village",
        "Peaceful Village",
        T.PASTORAL,
        "A peaceful rural setting with rolling green hills, small farming villages, and friendly NPCs who are "
        "farmers, merchants, and crafters. The world is safe and welcoming with abundant resources.",
    ),
    ScenarioPreset(
        "ancient_ruins",
        "Ancient Ruins",
        T.ARCHAEOLOGICAL,
        "An ancient world filled with crumbling ruins, mysterious stone structures, and remnants of a lost magical "
        "civilization. NPCs are archaeologists, scholars, and mystic guardians.",
    ),
    ScenarioPreset(
        "frontier_wilderness",
        "Wild Frontier",
        T.SURVIVAL,
        "A rugged frontier wilderness with dense forests, treacherous mountains, and dangerous wildlife. NPCs are "
        "survivalists, traders, and adventurers.",
    ),
    ScenarioPreset(
        "magical_realm",
        "Magical Realm",
        T.FANTASY,
        "A mystical realm where magic is commonplace: enchanted forests with glowing plants, magical creatures, "
        "floating islands, and spellcasting NPCs.",
    ),
    ScenarioPreset(
        "pirate_islands",
        "Pirate Islands",
        T.NAUTICAL,
        "Tropical islands connected by ocean waters, with hidden coves and buried treasures. NPCs are pirates, "
        "sailors, merchants, and island natives.",
    ),
    ScenarioPreset(
        "steampunk_city",
        "Steampunk Metropolis",
        T.INDUSTRIAL,
        "A grand steampunk metropolis with brass buildings, steam-powered machinery, and clockwork contraptions. "
        "NPCs are inventors, engineers, factory workers, and aristocrats.",
    ),
    ScenarioPreset(
        "post_apocalyptic",
        "Post-Apocalyptic Wasteland",
        T.APOCALYPTIC,
        "A post-apocalyptic wasteland with ruined cities, radioactive zones, and struggling survivor settlements. "
        "NPCs are raiders, traders, and survivors.",
    ),
)


def find_preset(preset_id: str) -> ScenarioPreset | None:
    return next((preset for preset in SCENARIO_PRESETS if preset.id == preset_id), None)
