"""Shared test helpers for FitQuest."""

from fitquest.database.db import get_session
from fitquest.database.models import Character


class SignalCollector:
    """Utility to capture pyqtSignal emissions into a list."""

    def __init__(self):
        self.items: list = []

    def slot(self, *args):
        self.items.append(args if len(args) > 1 else args[0] if args else None)

    def __call__(self, *args):
        self.slot(*args)

    def __len__(self):
        return len(self.items)

    def __getitem__(self, idx):
        return self.items[idx]

    @property
    def last(self):
        return self.items[-1] if self.items else None

    def clear(self):
        self.items.clear()


def load_character(user_id: str = "client-1") -> Character:
    """Re-read a character row from the database."""
    with get_session() as db:
        return db.query(Character).filter_by(user_id=user_id).one()


def set_character(user_id: str = "client-1", **values) -> None:
    """Poke column values straight into a character row."""
    with get_session() as db:
        character = db.query(Character).filter_by(user_id=user_id).one()
        for key, value in values.items():
            setattr(character, key, value)
