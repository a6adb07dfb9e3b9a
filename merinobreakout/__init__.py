"""Game logic for a brick-breaking arcade game with power-ups, portals and shareable unlock codes."""

__version__ = "0.1.0"
__all__ = ["__version__"]