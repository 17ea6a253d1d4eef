"""A brick-breaking arcade game with ghost layers, musical blocks and a level editor."""

__version__ = "0.1.0"