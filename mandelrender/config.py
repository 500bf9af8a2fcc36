import json
from typing import Any, Dict, Optional

DEFAULTS: Dict[str, Any] = {
    "width": 800,
    "height": 600,
    "max_iterations": 100,
    "zoom": 1.0,
    "offset_x": 0.0,
    "offset_y": 0.0,
    "output": "mandelbrot.ppm",
    "workers": 1,
}

_TYPES = {
    "width": int,
    "height": int,
    "max_iterations": int,
    "zoom": float,
    "offset_x": float,
    "offset_y": float,
    "output": str,
    "workers": int,
}

def load_config(config_path: Optional[str]) -> Dict[str, Any]:
    if config_path:
        with open(config_path, "r", encoding="utf-8") as f:
            cfg = json.load(f)
        if not isinstance(cfg, dict):
            raise ValueError("Config JSON must be an object.")
        return cfg
    return dict(DEFAULTS)

def normalise_config(cfg: Dict[str, Any]) -> Dict[str, Any]:
    """Fill in defaults and coerce types. Range checks happen at render time."""
    unknown = sorted(set(cfg) - set(_TYPES))
    if unknown:
        raise ValueError(f"Unknown config field(s): {', '.join(unknown)}")

    out = dict(DEFAULTS)
    for k, v in cfg.items():
        try:
            out[k] = _TYPES[k](v)
        except (TypeError, ValueError) as e:
            raise ValueError(f"Invalid value for {k}: {v!r}") from e
    return out
