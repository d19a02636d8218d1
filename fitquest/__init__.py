"""FitQuest — RPG progression for fitness-coaching clients."""

__version__ = "0.1.0"
