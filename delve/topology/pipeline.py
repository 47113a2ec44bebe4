"""Pipeline orchestration for topology generation.

One attempt runs carve -> branch -> loop -> validate on a fresh graph with
its own seeded RNG. Failed attempts are discarded whole and the loop moves
on to the next seed drawn from a seed source derived from the caller's
seed, so a run is replayable end to end. Retry count and exhaustion are
plain values on the result or on the raised GenerationFailure.
"""

from __future__ import annotations

import random
import time
from dataclasses import dataclass
from typing import Any, Dict, Optional

from ..logging_utils import get_logger
from .bounds import GridBounds
from .branches import BranchGenerator
from .carver import PathCarver
from .config import GenerationConfig
from .connectivity import ConnectivityValidator
from .errors import GenerationFailure
from .graph import RoomGraph
from .loops import LoopConnector
from .metrics import init_metrics


@dataclass
class AttemptOutcome:
    seed: int
    graph: Optional[RoomGraph]
    metrics: Dict[str, Any]
    reason: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.graph is not None


def run_attempt(bounds: GridBounds, config: GenerationConfig, seed: int, log=None) -> AttemptOutcome:
    """Execute one generation attempt; never raises for an unlucky draw."""
    rng = random.Random(seed)
    metrics = init_metrics() if config.enable_metrics else {}
    phase_times = {}
    if config.enable_metrics:

        def _phase(label, fn, *a, **k):
            ps = time.perf_counter()
            r = fn(*a, **k)
            phase_times[label] = round((time.perf_counter() - ps) * 1000, 3)
            return r

    else:

        def _phase(label, fn, *a, **k):
            return fn(*a, **k)

    graph = RoomGraph(bounds, id_rng=rng)
    carver = PathCarver(bounds, rng, path_slack=config.path_slack, log=log)
    carved = _phase("carve", carver.carve, graph)
    if config.enable_metrics:
        metrics["phase_ms"] = phase_times
        metrics["backtracks"] = carved.backtracks
    if not carved.ok:
        return AttemptOutcome(seed, None, metrics, carved.reason)
    if config.enable_metrics:
        metrics["main_path_length"] = carved.length
        metrics["carved_rooms"] = len(graph)

    brancher = BranchGenerator(rng, config.branch_probability, config.max_branch_depth, config.max_branch_rooms, log=log)
    branch_rooms = _phase("branch", brancher.grow, graph)
    looper = LoopConnector(rng, config.loop_probability, bounds.min_path_length, log=log)
    loops = _phase("loop", looper.connect, graph)
    report = _phase("validate", ConnectivityValidator(bounds.min_path_length).validate, graph)

    if config.enable_metrics:
        metrics.update(
            rooms=len(graph),
            branch_rooms=branch_rooms,
            branch_saturated=brancher.saturated,
            loops_added=loops,
            loops_rejected=looper.rejected,
            exit_distance=report.exit_distance or 0,
        )
    if not report.ok:
        return AttemptOutcome(seed, None, metrics, report.reason)
    return AttemptOutcome(seed, graph, metrics)


def generate(bounds: GridBounds, seed: Optional[int] = None, config: Optional[GenerationConfig] = None, log=None) -> RoomGraph:
    """Generate a validated, frozen RoomGraph or raise GenerationFailure.

    ConfigurationError surfaces from GridBounds/GenerationConfig construction
    before anything here runs.
    """
    config = config or GenerationConfig()
    log = log or get_logger("delve.topology")
    # 0 is a valid deterministic seed; None => random
    if seed is None:
        seed = random.randint(1, 1_000_000)
    seed_source = random.Random(seed)
    start = time.perf_counter()
    log.info(event="generation_start", seed=seed, width=bounds.width, height=bounds.height, min_path=bounds.min_path_length)

    reasons = []
    attempt_seed = seed
    for attempt in range(1, config.max_attempts + 1):
        outcome = run_attempt(bounds, config, attempt_seed, log=log)
        if outcome.ok:
            graph = outcome.graph.freeze()
            graph.seed = seed
            graph.attempt_seed = attempt_seed
            graph.attempts = attempt
            if config.enable_metrics:
                outcome.metrics["attempts"] = attempt
                outcome.metrics["runtime_ms"] = round((time.perf_counter() - start) * 1000, 3)
            graph.metrics = outcome.metrics
            log.info(event="generation_complete", seed=seed, attempts=attempt, rooms=len(graph), exit_distance=outcome.metrics.get("exit_distance"))
            return graph
        reasons.append(outcome.reason)
        log.warn(event="attempt_failed", seed=seed, attempt=attempt, attempt_seed=attempt_seed, reason=outcome.reason)
        attempt_seed = seed_source.getrandbits(32)

    log.error(event="generation_failed", seed=seed, attempts=config.max_attempts)
    raise GenerationFailure(
        f"no valid layout for seed {seed} after {config.max_attempts} attempts",
        seed=seed,
        attempts=config.max_attempts,
        reasons=reasons,
    )


__all__ = ["generate", "run_attempt", "AttemptOutcome"]
