"""Exceptions raised by the FitQuest progression services."""


class FitQuestError(Exception):
    """Base class for everything FitQuest raises on purpose."""


class CharacterNotFoundError(FitQuestError):
    def __init__(self, user_id: str) -> None:
        super().__init__(f"RPG character not found for user {user_id!r}")
        self.user_id = user_id


class InvalidAwardError(FitQuestError):
    """An XP award with an amount that isn't a whole number."""


class CustomizationError(FitQuestError):
    """An avatar change that can't be applied."""


class UnknownOptionError(CustomizationError):
    def __init__(self, field: str, option_id: str) -> None:
        super().__init__(f"unknown {field} option {option_id!r}")
        self.field = field
        self.option_id = option_id


class LockedOptionError(CustomizationError):
    def __init__(self, field: str, option_id: str, required_level: int) -> None:
        super().__init__(
            f"{field} option {option_id!r} unlocks at level {required_level}"
        )
        self.field = field
        self.option_id = option_id
        self.required_level = required_level
