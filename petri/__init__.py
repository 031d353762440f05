"""
Petri Dish Population Simulator

A deterministic, headless simulation of circular entities in a growing
circular dish. Entities move, bounce, die by same-type collision or old
age, and breed on opposite-type collision.

Architecture: PetriSimulation is the source of truth. Renderers and stats
consumers read its state between steps.
"""

__version__ = "0.1.0"
