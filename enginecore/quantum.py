"""Quantum simulation state and the event fired when it fluctuates."""

from __future__ import annotations

from dataclasses import dataclass, field

from enginecore.events import BaseEvent


@dataclass
class QuantumStateVector:
    """State of a simulated quantum system."""

    amplitudes: list[complex] = field(default_factory=list)
    energy_level: float = 0.0
    timestamp: int = 0


@dataclass
class QuantumEvent(BaseEvent):
    """Fired when a significant quantum fluctuation occurs."""

    simulation_tick: int
    resulting_state: QuantumStateVector