"""
Batch Runner for Delivery-Rate Sweeps

This module runs the stop-and-wait driver over a noisy channel for every
configured delivery rate, several times each, and collects one result row
per run.
"""

import os
import csv
import time
from typing import Optional, Callable, List, Dict
from dataclasses import dataclass

import numpy as np
from tqdm import tqdm

from ..config import (
    DELIVERY_RATES, RUNS_PER_CONFIGURATION, RNG_SEED_BASE,
    RESULTS_CSV, SWEEP_FRAME_COUNT, SWEEP_ACK_TIMEOUT,
    POLL_INTERVAL, DEFAULT_MESSAGE
)
from ..channel.noisy import NoisyChannel
from ..protocols.results import Outcome
from ..protocols.stop_and_wait import StopAndWaitProtocol
from ..utils.logger import SimulationLogger, LogLevel


@dataclass
class SimulationConfig:
    """Configuration for a single simulation run."""
    delivery_rate: float
    run_id: int = 0
    seed: int = RNG_SEED_BASE
    frame_count: int = SWEEP_FRAME_COUNT
    timeout: float = SWEEP_ACK_TIMEOUT
    poll_interval: float = POLL_INTERVAL
    message: str = DEFAULT_MESSAGE
    log_level: int = LogLevel.ERROR


def run_single_simulation(config: SimulationConfig) -> Dict:
    """
    Run stop-and-wait once over a seeded noisy channel.

    Args:
        config: Configuration for this run

    Returns:
        Dictionary with results
    """
    logger = SimulationLogger(name="sweep", level=config.log_level)
    channel = NoisyChannel(config.delivery_rate, seed=config.seed, logger=logger)
    protocol = StopAndWaitProtocol(
        channel,
        timeout=config.timeout,
        poll_interval=config.poll_interval,
        logger=logger
    )

    start_time = time.perf_counter()
    results = protocol.run(config.message, count=config.frame_count)
    elapsed = time.perf_counter() - start_time

    outcomes = [r.outcome for r in results]
    summary = protocol.metrics.get_summary()

    return {
        'delivery_rate': config.delivery_rate,
        'run_id': config.run_id,
        'seed': config.seed,
        'frames': config.frame_count,
        'acknowledged': outcomes.count(Outcome.ACKNOWLEDGED),
        'timed_out': outcomes.count(Outcome.TIMED_OUT),
        'lost': outcomes.count(Outcome.LOST),
        'delivery_ratio': summary['delivery_ratio'],
        'ack_ratio': summary['ack_ratio'],
        'ack_wait_mean': summary['ack_wait']['mean'],
        'wall_time': elapsed,
    }


class BatchRunner:
    """
    Batch Runner for delivery-rate sweeps.

    Attributes:
        delivery_rates: Delivery rates to test
        runs_per_config: Number of runs per delivery rate
        frame_count: Frames sent per run
        timeout: ACK timeout per frame
    """

    def __init__(
        self,
        delivery_rates: Optional[List[float]] = None,
        runs_per_config: int = RUNS_PER_CONFIGURATION,
        frame_count: int = SWEEP_FRAME_COUNT,
        timeout: float = SWEEP_ACK_TIMEOUT,
        output_file: str = RESULTS_CSV,
        show_progress: bool = True,
        on_progress: Optional[Callable[[int, int, dict], None]] = None
    ):
        """
        Initialize batch runner.

        Args:
            delivery_rates: Delivery rates (default from config)
            runs_per_config: Number of runs per delivery rate
            frame_count: Frames sent per run
            timeout: ACK timeout per frame in seconds
            output_file: Path to output CSV file
            show_progress: Display a tqdm progress bar
            on_progress: Callback for progress updates
        """
        self.delivery_rates = delivery_rates if delivery_rates is not None else DELIVERY_RATES
        self.runs_per_config = runs_per_config
        self.frame_count = frame_count
        self.timeout = timeout
        self.output_file = output_file
        self.show_progress = show_progress
        self.on_progress = on_progress

        self.results: List[Dict] = []

        self.total_runs = len(self.delivery_rates) * self.runs_per_config
        self.completed_runs = 0

    def _generate_run_configs(self) -> List[SimulationConfig]:
        """Generate all run configurations."""
        configs = []

        for rate_index, rate in enumerate(self.delivery_rates):
            for run_id in range(self.runs_per_config):
                # Unique seed for each run
                seed = RNG_SEED_BASE + rate_index * 1000 + run_id

                configs.append(SimulationConfig(
                    delivery_rate=rate,
                    run_id=run_id,
                    seed=seed,
                    frame_count=self.frame_count,
                    timeout=self.timeout
                ))

        return configs

    def run_sequential(self) -> List[Dict]:
        """
        Run all simulations one after another.

        Returns:
            List of result dictionaries
        """
        configs = self._generate_run_configs()
        self.results = []
        self.completed_runs = 0

        for config in tqdm(configs, desc="Simulations", disable=not self.show_progress):
            result = run_single_simulation(config)
            self.results.append(result)
            self.completed_runs += 1

            if self.on_progress:
                self.on_progress(self.completed_runs, self.total_runs, result)

        return self.results

    def save_results(self, filepath: Optional[str] = None) -> Optional[str]:
        """
        Save results to CSV file.

        Args:
            filepath: Output file path (default: self.output_file)

        Returns:
            Path written, or None if there was nothing to save
        """
        filepath = filepath or self.output_file

        if not self.results:
            return None

        out_dir = os.path.dirname(filepath)
        if out_dir:
            os.makedirs(out_dir, exist_ok=True)

        fieldnames = list(self.results[0].keys())

        with open(filepath, 'w', newline='') as f:
            writer = csv.DictWriter(f, fieldnames=fieldnames)
            writer.writeheader()
            writer.writerows(self.results)

        return filepath

    def get_aggregated_results(self) -> Dict[float, Dict]:
        """
        Get aggregated results per delivery rate.

        Returns:
            Dictionary mapping delivery rate to mean/std statistics
        """
        aggregated = {}

        for rate in self.delivery_rates:
            rows = [r for r in self.results if r['delivery_rate'] == rate]
            if not rows:
                continue

            ack_ratios = np.array([r['ack_ratio'] for r in rows])
            delivery_ratios = np.array([r['delivery_ratio'] for r in rows])
            timeouts = np.array([r['timed_out'] for r in rows])

            aggregated[rate] = {
                'runs': len(rows),
                'mean_ack_ratio': float(np.mean(ack_ratios)),
                'std_ack_ratio': float(np.std(ack_ratios)),
                'mean_delivery_ratio': float(np.mean(delivery_ratios)),
                'mean_timeouts': float(np.mean(timeouts)),
            }

        return aggregated
