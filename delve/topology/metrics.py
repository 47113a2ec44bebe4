from typing import Dict


def init_metrics() -> Dict[str, int | float | dict]:
    return {
        'attempts': 0,
        'rooms': 0,
        'main_path_length': 0,
        'carved_rooms': 0,
        'backtracks': 0,
        'branch_rooms': 0,
        'branch_saturated': 0,
        'loops_added': 0,
        'loops_rejected': 0,
        'exit_distance': 0,
        'runtime_ms': 0.0,
        'phase_ms': {},
    }
