"""
Evodeck - Stage-based deck evolution card game engine.

A single-player engine where a deck of leveled cards is played against an
escalating score target. The engine provides:
- A card catalog with per-level effect tables
- Effect resolution (multipliers, cost-ignore tokens, purges)
- Draw/discard pile lifecycle
- The turn/stage state machine
- Evolution (permanent per-card level ups) between stages
"""

__version__ = "0.1.0"
