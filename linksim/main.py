#!/usr/bin/env python3
"""
Data-Link Protocol Simulator - Main Entry Point

Command line interface wiring a channel and two machines together.
It provides options for:
- Unconfirmed transmission (utopia)
- Stop-and-wait with ACK timeout
- Delivery-rate sweep
- Configuration display

Usage:
    linksim --utopia --channel noisy --delivery-rate 0.5
    linksim --stop-and-wait --channel noisy --delivery-rate 0.8
    linksim --sweep --runs 5
"""

import argparse

from . import config as cfg
from .channel import Channel, IdealChannel, NoisyChannel, GilbertElliottChannel
from .protocols import FrameResult, Outcome, StopAndWaitProtocol, UtopiaProtocol
from .simulation.runner import BatchRunner
from .utils.logger import SimulationLogger, LogLevel, set_logger


OUTCOME_LINES = {
    Outcome.DELIVERED: "Frame {id} received: {text!r}",
    Outcome.LOST: "Frame {id} was lost",
    Outcome.ACKNOWLEDGED: "ACK received for frame {id}",
    Outcome.TIMED_OUT: "Timeout waiting for ACK on frame {id}",
}


def build_channel(args) -> Channel:
    """Create the channel selected on the command line."""
    if args.channel == 'ideal':
        return IdealChannel()
    if args.channel == 'burst':
        return GilbertElliottChannel(seed=args.seed)
    return NoisyChannel(args.delivery_rate, seed=args.seed)


def print_result(result: FrameResult):
    """Print one line for a frame outcome."""
    print(OUTCOME_LINES[result.outcome].format(id=result.frame_id, text=result.text))


def run_utopia(args):
    """Run unconfirmed transmission."""
    protocol = UtopiaProtocol(
        build_channel(args),
        on_result=print_result
    )
    results = protocol.run(args.message, count=args.frames)
    print_summary(protocol.metrics.get_summary())
    return results


def run_stop_and_wait(args):
    """Run stop-and-wait."""
    protocol = StopAndWaitProtocol(
        build_channel(args),
        timeout=args.timeout,
        on_result=print_result
    )
    results = protocol.run(args.message, count=args.frames)
    print_summary(protocol.metrics.get_summary())
    return results


def print_summary(summary: dict):
    """Print run counters."""
    print("\n" + "=" * 60)
    print("RESULTS")
    print("=" * 60)
    print(f"  Data frames sent: {summary['data_frames_sent']}")
    print(f"  Data frames delivered: {summary['data_frames_delivered']}")
    print(f"  Data frames lost: {summary['data_frames_lost']}")
    print(f"  ACKs received: {summary['acks_received']}")
    print(f"  Timeouts: {summary['timeouts']}")
    print(f"  Delivery ratio: {summary['delivery_ratio'] * 100:.1f}%")


def run_sweep(args):
    """Run a delivery-rate sweep."""
    runner = BatchRunner(
        runs_per_config=args.runs,
        frame_count=args.frames,
        timeout=args.timeout,
        output_file=args.output or cfg.RESULTS_CSV
    )

    print("=" * 60)
    print("DELIVERY RATE SWEEP")
    print("=" * 60)
    print(f"  Delivery rates: {runner.delivery_rates}")
    print(f"  Runs per rate: {runner.runs_per_config}")
    print(f"  Frames per run: {runner.frame_count}")

    results = runner.run_sequential()
    path = runner.save_results()

    print(f"\n{'rate':>6} {'ack ratio':>10} {'std':>8} {'timeouts':>9}")
    for rate, stats in runner.get_aggregated_results().items():
        print(f"{rate:>6.2f} {stats['mean_ack_ratio']:>10.3f} "
              f"{stats['std_ack_ratio']:>8.3f} {stats['mean_timeouts']:>9.1f}")
    if path:
        print(f"\nResults saved to: {path}")
    return results


def show_config(args):
    """Display current configuration."""
    print("=" * 60)
    print("SIMULATOR CONFIGURATION")
    print("=" * 60)

    print(f"\nProtocol:")
    print(f"  ACK timeout: {cfg.ACK_TIMEOUT * 1000:.0f} ms")
    print(f"  Poll interval: {cfg.POLL_INTERVAL * 1000:.0f} ms")
    print(f"  Frames per run: {cfg.DEFAULT_FRAME_COUNT}")

    print(f"\nNoisy Channel:")
    print(f"  Delivery rate: {cfg.DEFAULT_DELIVERY_RATE}")

    print(f"\nGilbert-Elliott Channel:")
    print(f"  Good State Delivery: {cfg.GOOD_STATE_DELIVERY}")
    print(f"  Bad State Delivery: {cfg.BAD_STATE_DELIVERY}")
    print(f"  P(Good→Bad): {cfg.P_GOOD_TO_BAD}")
    print(f"  P(Bad→Good): {cfg.P_BAD_TO_GOOD}")
    print(f"  Average Delivery: {cfg.calculate_average_delivery_rate():.3f}")

    print(f"\nSweep:")
    print(f"  Delivery rates: {cfg.DELIVERY_RATES}")
    print(f"  Runs per rate: {cfg.RUNS_PER_CONFIGURATION}")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="linksim",
        description="Data-Link Protocol Simulator",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  Unconfirmed transmission over a lossy channel:
    linksim --utopia --channel noisy --delivery-rate 0.5

  Stop-and-wait over a burst loss channel:
    linksim --stop-and-wait --channel burst --seed 7

  Delivery-rate sweep:
    linksim --sweep --runs 5 --output results.csv
        """
    )

    # Mode selection
    mode = parser.add_mutually_exclusive_group(required=True)
    mode.add_argument('--utopia', action='store_true',
                      help='Run unconfirmed transmission')
    mode.add_argument('--stop-and-wait', action='store_true',
                      help='Run stop-and-wait with ACK timeout')
    mode.add_argument('--sweep', action='store_true',
                      help='Run delivery-rate sweep')
    mode.add_argument('--config', action='store_true',
                      help='Show configuration')

    # Channel options
    parser.add_argument('--channel', '-c', choices=['ideal', 'noisy', 'burst'],
                        default='noisy', help='Channel model (default: noisy)')
    parser.add_argument('--delivery-rate', '-d', type=float,
                        default=cfg.DEFAULT_DELIVERY_RATE,
                        help=f'Noisy channel delivery probability (default: {cfg.DEFAULT_DELIVERY_RATE})')
    parser.add_argument('--seed', '-s', type=int, default=None,
                        help='Random seed (default: unseeded)')

    # Protocol options
    parser.add_argument('--frames', '-n', type=int, default=None,
                        help=f'Frames to send (default: {cfg.DEFAULT_FRAME_COUNT}, '
                             f'{cfg.SWEEP_FRAME_COUNT} per sweep run)')
    parser.add_argument('--message', '-m', type=str, default=cfg.DEFAULT_MESSAGE,
                        help='Payload carried by every frame')
    parser.add_argument('--timeout', '-t', type=float, default=None,
                        help=f'ACK timeout in seconds (default: {cfg.ACK_TIMEOUT}, '
                             f'{cfg.SWEEP_ACK_TIMEOUT} per sweep run)')

    # Sweep options
    parser.add_argument('--runs', '-r', type=int, default=cfg.RUNS_PER_CONFIGURATION,
                        help=f'Runs per delivery rate (default: {cfg.RUNS_PER_CONFIGURATION})')
    parser.add_argument('--output', '-o', type=str,
                        help='Output CSV path')
    parser.add_argument('--verbose', '-v', action='store_true',
                        help='Verbose output')

    return parser


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.frames is None:
        args.frames = cfg.SWEEP_FRAME_COUNT if args.sweep else cfg.DEFAULT_FRAME_COUNT
    if args.timeout is None:
        args.timeout = cfg.SWEEP_ACK_TIMEOUT if args.sweep else cfg.ACK_TIMEOUT

    if args.frames < 0:
        parser.error("--frames must be non-negative")
    if args.timeout < 0:
        parser.error("--timeout must be non-negative")

    set_logger(SimulationLogger(level=LogLevel.DEBUG if args.verbose else LogLevel.WARNING))

    if args.utopia:
        return run_utopia(args)
    elif args.stop_and_wait:
        return run_stop_and_wait(args)
    elif args.sweep:
        return run_sweep(args)
    elif args.config:
        return show_config(args)


if __name__ == "__main__":
    main()
