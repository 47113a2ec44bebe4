import time

import pytest

from delve.topology import GenerationConfig, GridBounds, generate

# Simple performance guardrail. Not a strict micro-benchmark; aims to catch large regressions.


@pytest.mark.performance
def test_max_grid_generation_seeds(quiet_log):
    bounds = GridBounds(100, 100, 120)
    config = GenerationConfig(branch_probability=0.6, loop_probability=0.5, max_branch_depth=6)
    max_seconds_per = 2.0  # generous threshold
    timings = []
    for s in [10101, 20202, 30303]:
        start = time.perf_counter()
        graph = generate(bounds, s, config, log=quiet_log)
        elapsed = time.perf_counter() - start
        timings.append(elapsed)
        assert graph.metrics["exit_distance"] >= 120
        assert elapsed < max_seconds_per, f"Seed {s} took {elapsed:.3f}s (> {max_seconds_per}s)"
    avg = sum(timings) / len(timings)
    assert avg < max_seconds_per * 0.85, f"Average generation {avg:.3f}s too high"


@pytest.mark.performance
def test_saturated_branches_and_loops_on_max_grid(quiet_log):
    bounds = GridBounds(100, 100, 198)
    config = GenerationConfig(branch_probability=1.0, max_branch_depth=200, loop_probability=1.0)
    for s in [1, 2]:
        start = time.perf_counter()
        graph = generate(bounds, s, config, log=quiet_log)
        elapsed = time.perf_counter() - start
        assert graph.metrics["loops_added"] > 0
        assert graph.metrics["exit_distance"] >= 198
        assert elapsed < 3.0, f"Seed {s} took {elapsed:.3f}s; loop phase {graph.metrics['phase_ms']['loop']}ms"
