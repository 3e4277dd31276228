"""A terminal falling-block puzzle game with a ranked score history file."""

__version__ = "1.0.0"