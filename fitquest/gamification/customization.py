"""Avatar customization options and level gates.

Most options are open from level 1; some unlock later:

    Lv 5   long hair
    Lv 10  mohawk, afro, compression shirt, green scheme
    Lv 15  dreads, ponytail, hoodie, purple scheme
    Lv 20  spiky hair, blue/green hair, jersey, orange scheme
    Lv 25  golden skin, purple/pink hair, muscle tee
    Lv 30  silver skin
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from ..database.db import get_session
from ..database.models import Character
from ..errors import (
    CharacterNotFoundError,
    CustomizationError,
    LockedOptionError,
    UnknownOptionError,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AvatarOption:
    id: str
    name: str
    color: str | None = None
    requires_level: int | None = None


# ── catalogs ─────────────────────────────────────────────────────────────

SKIN_TONES: list[AvatarOption] = [
    AvatarOption("light", "Light", "#F0D0B0"),
    AvatarOption("fair", "Fair", "#E8C4A0"),
    AvatarOption("medium", "Medium", "#D4A574"),
    AvatarOption("tan", "Tan", "#C68642"),
    AvatarOption("brown", "Brown", "#8D5524"),
    AvatarOption("dark", "Dark", "#5C3317"),
    AvatarOption("gold", "Golden", "#FFD700", requires_level=25),
    AvatarOption("silver", "Silver", "#C0C0C0", requires_level=30),
]

HAIR_STYLES: list[AvatarOption] = [
    AvatarOption("short", "Short"),
    AvatarOption("buzz", "Buzz Cut"),
    AvatarOption("bald", "Bald"),
    AvatarOption("medium", "Medium"),
    AvatarOption("long", "Long", requires_level=5),
    AvatarOption("mohawk", "Mohawk", requires_level=10),
    AvatarOption("afro", "Afro", requires_level=10),
    AvatarOption("dreads", "Dreads", requires_level=15),
    AvatarOption("ponytail", "Ponytail", requires_level=15),
    AvatarOption("spiky", "Spiky", requires_level=20),
]

HAIR_COLORS: list[AvatarOption] = [
    AvatarOption("black", "Black", "#2C1810"),
    AvatarOption("brown", "Brown", "#4E3629"),
    AvatarOption("blonde", "Blonde", "#F4E4C1"),
    AvatarOption("red", "Red", "#A52A2A"),
    AvatarOption("gray", "Gray", "#808080"),
    AvatarOption("white", "White", "#F5F5F5"),
    AvatarOption("blue", "Blue", "#4169E1", requires_level=20),
    AvatarOption("green", "Green", "#00FF00", requires_level=20),
    AvatarOption("purple", "Purple", "#9370DB", requires_level=25),
    AvatarOption("pink", "Pink", "#FF69B4", requires_level=25),
]

FACIAL_HAIR: list[AvatarOption] = [
    AvatarOption("clean", "Clean Shaven"),
    AvatarOption("stubble", "Stubble"),
    AvatarOption("goatee", "Goatee"),
    AvatarOption("beard", "Full Beard"),
    AvatarOption("mustache", "Mustache"),
    AvatarOption("van-dyke", "Van Dyke"),
]

EYE_COLORS: list[AvatarOption] = [
    AvatarOption("brown", "Brown", "#4A3728"),
    AvatarOption("blue", "Blue", "#4169E1"),
    AvatarOption("green", "Green", "#00A86B"),
    AvatarOption("hazel", "Hazel", "#8E7618"),
    AvatarOption("gray", "Gray", "#708090"),
    AvatarOption("amber", "Amber", "#FFBF00"),
]

OUTFITS: list[AvatarOption] = [
    AvatarOption("tee", "T-Shirt"),
    AvatarOption("tank", "Tank Top"),
    AvatarOption("compression", "Compression Shirt", requires_level=10),
    AvatarOption("hoodie", "Hoodie", requires_level=15),
    AvatarOption("jersey", "Jersey", requires_level=20),
    AvatarOption("muscle", "Muscle Tee", requires_level=25),
]

COLOR_SCHEMES: list[AvatarOption] = [
    AvatarOption("navy", "Navy Blue", "#1A2332"),
    AvatarOption("black", "Black", "#000000"),
    AvatarOption("red", "Red", "#DC2626"),
    AvatarOption("blue", "Blue", "#2563EB"),
    AvatarOption("green", "Green", "#059669", requires_level=10),
    AvatarOption("purple", "Purple", "#7C3AED", requires_level=15),
    AvatarOption("orange", "Orange", "#EA580C", requires_level=20),
]

CATALOGS: dict[str, list[AvatarOption]] = {
    "skin_tone": SKIN_TONES,
    "hair_style": HAIR_STYLES,
    "hair_color": HAIR_COLORS,
    "facial_hair": FACIAL_HAIR,
    "eye_color": EYE_COLORS,
    "outfit": OUTFITS,
    "color_scheme": COLOR_SCHEMES,
}

DEFAULT_CUSTOMIZATION: dict[str, str] = {
    "skin_tone": "light",
    "hair_style": "short",
    "hair_color": "black",
    "facial_hair": "clean",
    "eye_color": "brown",
    "outfit": "tee",
    "color_scheme": "navy",
}


# ── helpers ──────────────────────────────────────────────────────────────


def is_option_unlocked(requires_level: int | None, current_level: int) -> bool:
    if not requires_level:
        return True
    return current_level >= requires_level


def available_options(options: list[AvatarOption], level: int) -> list[AvatarOption]:
    """The subset of *options* a character at *level* may pick."""
    return [o for o in options if is_option_unlocked(o.requires_level, level)]


def find_option(field: str, option_id: str) -> AvatarOption:
    if field not in CATALOGS:
        raise CustomizationError(f"unknown avatar field {field!r}")
    for option in CATALOGS[field]:
        if option.id == option_id:
            return option
    raise UnknownOptionError(field, option_id)


def parse_avatar_config(raw) -> dict[str, str]:
    """Stored config → full config; missing or junk values get defaults."""
    if not isinstance(raw, dict):
        return dict(DEFAULT_CUSTOMIZATION)
    config = {}
    for field, default in DEFAULT_CUSTOMIZATION.items():
        value = raw.get(field)
        config[field] = value if isinstance(value, str) and value else default
    return config


def validate_customization(config: dict[str, str], level: int) -> None:
    """Raise unless every choice in *config* exists and is unlocked."""
    for field, option_id in config.items():
        option = find_option(field, option_id)
        if not is_option_unlocked(option.requires_level, level):
            raise LockedOptionError(field, option_id, option.requires_level)


# ── persistence ──────────────────────────────────────────────────────────


class CustomizationManager:
    """Loads and saves a character's avatar config."""

    def get_customization(self, user_id: str) -> dict[str, str]:
        with get_session() as db:
            character = db.query(Character).filter_by(user_id=user_id).first()
            if character is None:
                raise CharacterNotFoundError(user_id)
            return parse_avatar_config(character.avatar_config)

    def customize(self, user_id: str, changes: dict[str, str]) -> dict[str, str]:
        """Merge *changes* into the saved config and persist the result.

        Only the changed fields are checked against the level gates, so a
        character keeps options it picked before an admin lowered its XP.
        """
        with get_session() as db:
            character = db.query(Character).filter_by(user_id=user_id).first()
            if character is None:
                raise CharacterNotFoundError(user_id)

            validate_customization(changes, character.level)
            config = parse_avatar_config(character.avatar_config)
            config.update(changes)
            character.avatar_config = config

        logger.info("Updated avatar for user %s: %s", user_id, sorted(changes))
        return config
