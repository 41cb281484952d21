from typing import Dict

def init_metrics() -> Dict[str, int | float | bool]:
    return {
        'main_path_requested': 0,
        'main_path_length': 0,
        'main_path_fallbacks': 0,
        'secondary_paths_built': 0,
        'secondary_paths_skipped': 0,
        'secondary_paths_truncated': 0,
        'secondary_rooms': 0,
        'oracle_probes': 0,
        'keys_placed': 0,
        'locks_placed': 0,
        'runtime_ms': 0.0,
    }
