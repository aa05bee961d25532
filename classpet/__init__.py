"""ClassPet: classroom rewards with coins, a shop and virtual pets."""

__version__ = "1.0.0"
