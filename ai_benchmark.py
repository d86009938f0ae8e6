#!/usr/bin/env python3
"""
Being Lucky AI Benchmark — points per turn and head-to-head win rates.

Usage: python ai_benchmark.py [--turns N] [--games N] [--strategy NAME]
       python ai_benchmark.py --verbose --turns 5000
       python ai_benchmark.py --csv
"""
import argparse
import itertools
import random
import statistics
import time

from ai import CautiousStrategy, GreedyStrategy, RandomStrategy, play_turn
from game_coordinator import GameCoordinator
from game_engine import Player


def benchmark_strategy(strategy, num_turns, seed=0):
    """Play num_turns consecutive turns for one player; return per-turn points and elapsed time."""
    random.seed(seed)
    player = Player(1)
    points = []
    t0 = time.perf_counter()
    for _ in range(num_turns):
        before = player.total_score
        play_turn(player, strategy)
        points.append(player.total_score - before)
    elapsed = time.perf_counter() - t0
    return points, elapsed


def head_to_head(first, second, num_games, start_seed=0):
    """Play num_games two-player games, alternating seats. Returns (wins_first, wins_second, ties)."""
    (name_a, strategy_a), (name_b, strategy_b) = first, second
    wins_a = wins_b = ties = 0
    for game in range(num_games):
        random.seed(start_seed + game)
        if game % 2 == 0:
            seats = [(name_a, strategy_a), (name_b, strategy_b)]
        else:
            seats = [(name_b, strategy_b), (name_a, strategy_a)]
        coordinator = GameCoordinator(seats)
        coordinator.play()
        leaders = coordinator.leaders()
        if len(leaders) > 1:
            ties += 1
        elif leaders[0] == name_a:
            wins_a += 1
        else:
            wins_b += 1
    return wins_a, wins_b, ties


def print_results(name, points, elapsed, verbose=False):
    """Print formatted per-turn results."""
    avg = sum(points) / len(points)
    busts = sum(1 for p in points if p == 0)
    print(f"  {name:12s}  avg/turn={avg:7.1f}  max={max(points):5d}  "
          f"zero turns={busts / len(points):5.1%}  ({len(points)} turns in {elapsed:.2f}s)")

    if verbose:
        stdev = statistics.stdev(points) if len(points) >= 2 else 0.0
        median = statistics.median(points)
        print(f"  {'':12s}  stdev={stdev:7.1f}  median={median:6.0f}")


def print_csv_row(name, points, elapsed):
    """Print one CSV data row."""
    avg = sum(points) / len(points)
    stdev = statistics.stdev(points) if len(points) >= 2 else 0.0
    print(f"{name},{len(points)},{avg:.1f},{stdev:.1f},{max(points)},{elapsed:.2f}")


def main(argv=None):
    parser = argparse.ArgumentParser(description="Being Lucky AI Benchmark")
    parser.add_argument("--turns", type=int, default=2000,
                        help="Turns per strategy for the points-per-turn table (default: 2000)")
    parser.add_argument("--games", type=int, default=100,
                        help="Games per pairing for head-to-head (default: 100)")
    parser.add_argument("--strategy", choices=["random", "cautious", "greedy"],
                        help="Run only a single strategy (skips head-to-head)")
    parser.add_argument("--verbose", action="store_true",
                        help="Show extra statistics (stdev, median)")
    parser.add_argument("--csv", action="store_true",
                        help="Output points-per-turn results as CSV")
    args = parser.parse_args(argv)

    all_strategies = {
        "random": ("Random", RandomStrategy()),
        "cautious": ("Cautious", CautiousStrategy()),
        "greedy": ("Greedy", GreedyStrategy()),
    }
    if args.strategy:
        strategies = [all_strategies[args.strategy]]
    else:
        strategies = list(all_strategies.values())

    if args.csv:
        print("strategy,turns,avg,stdev,max,elapsed_s")
        for name, strategy in strategies:
            points, elapsed = benchmark_strategy(strategy, args.turns)
            print_csv_row(name, points, elapsed)
        return

    print(f"Being Lucky AI Benchmark — {args.turns} turns per strategy")
    print("=" * 80)
    for name, strategy in strategies:
        points, elapsed = benchmark_strategy(strategy, args.turns)
        print_results(name, points, elapsed, verbose=args.verbose)

    if len(strategies) > 1:
        print("-" * 80)
        print(f"Head to head — {args.games} games per pairing")
        for first, second in itertools.combinations(strategies, 2):
            wins_a, wins_b, ties = head_to_head(first, second, args.games)
            print(f"  {first[0]:>10s} {wins_a:4d} - {wins_b:<4d} {second[0]:<10s}  ties={ties}")
    print("=" * 80)


if __name__ == "__main__":
    main()
