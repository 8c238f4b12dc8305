#!/usr/bin/env python3
"""
Profile script for obstacle_route to identify performance bottlenecks.
"""

import cProfile
import pstats
import io
import numpy as np
from numpy.typing import NDArray
import time
from typing import List, Tuple
from obstacle_route.api import plan_route


def generate_random_polygon(
    center: NDArray[np.float64],
    radius: float,
    n_vertices: int = 5
) -> NDArray[np.float64]:
    """Generate a random star-shaped polygon roughly centered at center."""
    angles = np.sort(np.random.uniform(0, 2 * np.pi, n_vertices))
    radii = np.random.uniform(0.5 * radius, 1.5 * radius, n_vertices)
    x = center[0] + radii * np.cos(angles)
    y = center[1] + radii * np.sin(angles)
    return np.column_stack([x, y])


def generate_grid_workload(
    grid_size: int = 4,
    vertices_per_obstacle: int = 6,
    cell: float = 100.0
) -> Tuple[NDArray[np.float64], NDArray[np.float64], List[NDArray[np.float64]]]:
    """
    Generate a workload for profiling.
    One obstacle per grid cell, with start and end on opposite sides of the grid.
    """
    obstacles = []
    for row in range(grid_size):
        for col in range(grid_size):
            center = np.array([(col + 0.5) * cell, (row + 0.5) * cell])
            jitter = np.random.uniform(-0.1 * cell, 0.1 * cell, 2)
            obstacles.append(generate_random_polygon(center + jitter, 0.25 * cell, vertices_per_obstacle))

    extent = grid_size * cell
    start = np.array([-0.5 * cell, np.random.uniform(0, extent)])
    end = np.array([extent + 0.5 * cell, np.random.uniform(0, extent)])
    return start, end, obstacles


def run_typical_workload(n_iterations: int = 100) -> None:
    """Run a small grid many times for profiling."""
    np.random.seed(42)  # For reproducibility

    for _ in range(n_iterations):
        start, end, obstacles = generate_grid_workload(grid_size=3, vertices_per_obstacle=5)
        plan_route(start, end, obstacles)


def run_many_obstacles_workload(n_iterations: int = 20) -> None:
    """Run workload with many obstacles for profiling."""
    np.random.seed(42)

    for _ in range(n_iterations):
        start, end, obstacles = generate_grid_workload(grid_size=8, vertices_per_obstacle=8)
        plan_route(start, end, obstacles)


def profile_function(func, description: str) -> None:
    """Profile a function and print statistics."""
    print(f"\n{'=' * 60}")
    print(f"Profiling: {description}")
    print('=' * 60)

    # Time the execution
    start = time.perf_counter()

    profiler = cProfile.Profile()
    profiler.enable()
    func()
    profiler.disable()

    elapsed = time.perf_counter() - start

    # Get stats
    s = io.StringIO()
    ps = pstats.Stats(profiler, stream=s).sort_stats('cumulative')
    ps.print_stats(30)
    print(s.getvalue())

    print(f"\nTotal time: {elapsed:.3f}s")


if __name__ == "__main__":
    print("Obstacle Route Performance Profiling")
    print("=" * 60)

    # Profile typical workload (3x3 grid, 5 vertices each)
    profile_function(
        lambda: run_typical_workload(100),
        "Typical workload (9 obstacles, 5 vertices, 100 iterations)"
    )

    # Profile many obstacles (8x8 grid, 8 vertices each)
    profile_function(
        lambda: run_many_obstacles_workload(20),
        "Many obstacles (64 obstacles, 8 vertices, 20 iterations)"
    )
