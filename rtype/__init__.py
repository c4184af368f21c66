"""Networked side-scrolling shooter: entity-component game server over UDP and pygame client."""

__version__ = "0.1.0"