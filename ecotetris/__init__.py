"""A recycling-themed falling-block puzzle game: rules, achievements, input handling and pygame display."""

__version__ = "0.1.0"

__all__ = ["__version__"]