#!/usr/bin/env python3
"""
Memory profiling for the stepping engine.

Runs a random world for many generations in cycles and tracks resident
memory per cycle, to confirm that in-place stepping reuses its two buffers
and to compare it with the allocating immutable path.
"""

import gc
import json
import os
import time
from typing import Dict

import psutil

from torus_life.core.world import World
from torus_life.patterns import random_grid


def measure_memory_mb() -> float:
    """Get current process memory usage in MB."""
    process = psutil.Process(os.getpid())
    return process.memory_info().rss / 1024 / 1024


def run_cycle(world: World, steps: int, mutate: bool) -> World:
    """Advance the world by one profiling cycle."""
    return world.step_many(steps, mutate=mutate)


def profile_memory_usage(cycles: int = 20, steps: int = 50, size: int = 128,
                         mutate: bool = True, seed: int = 0) -> Dict:
    """Profile memory usage over multiple stepping cycles."""
    mode = "step_mut" if mutate else "step"
    print(f"Profiling {mode} over {cycles} cycles of {steps} generations "
          f"on a {size}x{size} grid...")
    print("=" * 60)

    gc.collect()
    baseline_memory = measure_memory_mb()
    print(f"Baseline Memory:              {baseline_memory:6.1f} MB")

    world = World(random_grid(size, size, density=0.35, seed=seed))
    setup_memory = measure_memory_mb()
    print(f"Memory After Setup:           {setup_memory:6.1f} MB")

    measurements = []
    for cycle in range(cycles):
        start_time = time.time()
        start_memory = measure_memory_mb()

        world = run_cycle(world, steps, mutate)

        end_memory = measure_memory_mb()
        time_taken = time.time() - start_time

        measurements.append({
            'cycle': cycle + 1,
            'generation': world.generation,
            'live_cells': world.count_live(),
            'start_memory_mb': start_memory,
            'end_memory_mb': end_memory,
            'delta_mb': end_memory - start_memory,
            'time_seconds': time_taken,
        })

        print(f"Cycle {cycle + 1:2d}: generation {world.generation:5d}, "
              f"{world.count_live():5d} live | "
              f"Memory: {start_memory:6.1f}MB -> {end_memory:6.1f}MB "
              f"({end_memory - start_memory:+5.1f}MB) | Time: {time_taken:.4f}s")

    gc.collect()
    final_memory = measure_memory_mb()

    deltas = [m['delta_mb'] for m in measurements]
    peak_memory = max(m['end_memory_mb'] for m in measurements)

    # Sliding window over the last six cycles
    memory_trend = []
    for i in range(5, cycles):
        window = measurements[max(0, i - 5):i + 1]
        memory_trend.append(sum(m['delta_mb'] for m in window) / len(window))

    avg_memory_trend = sum(memory_trend) / len(memory_trend) if memory_trend else 0.0
    leak_detected = avg_memory_trend > 0.5  # MB average growth per cycle
    total_generations = cycles * steps
    total_time = sum(m['time_seconds'] for m in measurements)

    results = {
        'timestamp': time.strftime('%Y-%m-%d %H:%M:%S'),
        'mode': mode,
        'cycles': cycles,
        'steps_per_cycle': steps,
        'grid_size': size,
        'memory_baseline_mb': baseline_memory,
        'memory_setup_mb': setup_memory,
        'memory_final_mb': final_memory,
        'peak_memory_mb': peak_memory,
        'avg_memory_delta_mb': sum(deltas) / len(deltas) if deltas else 0.0,
        'memory_trend_mb_per_cycle': avg_memory_trend,
        'generations_per_second': total_generations / total_time if total_time else 0.0,
        'leak_detected': leak_detected,
        'all_measurements': measurements,
    }

    print("\n" + "=" * 60)
    print("MEMORY PROFILING SUMMARY")
    print("=" * 60)
    print(f"Baseline Memory:             {results['memory_baseline_mb']:6.1f} MB")
    print(f"Final Memory After Cleanup:  {results['memory_final_mb']:6.1f} MB")
    print(f"Peak Memory Usage:           {results['peak_memory_mb']:6.1f} MB")
    print(f"Avg Memory Delta per Cycle:  {results['avg_memory_delta_mb']:+6.2f} MB")
    print(f"Memory Trend:                {results['memory_trend_mb_per_cycle']:+6.2f} MB/cycle")
    print(f"Throughput:                  {results['generations_per_second']:8.1f} generations/s")
    print(f"Leak Detection:              {'LEAK SUSPECTED' if leak_detected else 'NO LEAK'}")

    return results


if __name__ == "__main__":
    import argparse
    parser = argparse.ArgumentParser(description="Memory profiling for the stepping engine")
    parser.add_argument("--cycles", type=int, default=20, help="Number of profiling cycles")
    parser.add_argument("--steps", type=int, default=50, help="Generations per cycle")
    parser.add_argument("--size", type=int, default=128, help="Grid size (square)")
    parser.add_argument("--seed", type=int, default=0, help="Random seed for the starting grid")
    parser.add_argument("--immutable", action="store_true",
                        help="Profile step() instead of step_mut()")
    parser.add_argument("--output", type=str, default="logs/memory_profile.json",
                        help="Output log file")
    args = parser.parse_args()

    os.makedirs(os.path.dirname(args.output) or ".", exist_ok=True)

    results = profile_memory_usage(cycles=args.cycles, steps=args.steps, size=args.size,
                                   mutate=not args.immutable, seed=args.seed)

    with open(args.output, 'w') as f:
        json.dump(results, f, indent=2, default=str)

    print(f"\nDetailed results saved to: {args.output}")
