"""
Simulation layer - Cost accounting and load simulation.

Contains:
- Cost units
- Cost accountant and the consumer base class
- Load simulation harness
"""

from .accountant import CostAccountant, ResourceConsumer


__all__ = [
    "CostAccountant",
    "ResourceConsumer",
]
