"""
Simulation package - Batch runs over many channel settings.

Contains:
- Single-run configuration and execution
- Batch runner for delivery-rate sweeps
"""

from .runner import BatchRunner, SimulationConfig, run_single_simulation

__all__ = [
    'BatchRunner',
    'SimulationConfig',
    'run_single_simulation'
]
