from __future__ import annotations

import argparse
import logging
import os
import time
from typing import Any, Dict, List, Optional, Tuple

from mandelrender.config import load_config, normalise_config
from mandelrender.errors import InvalidDimension, InvalidIterationCap, InvalidViewport, SinkUnavailable
from mandelrender.pipeline import RenderParameters, render_parameters
from mandelrender.sinks.dispatch import save
from mandelrender.util.logging_setup import configure_logging, start_log_forwarding, get_logger
from mandelrender.util.manifest import build_manifest, write_manifest

EXIT_OK = 0
EXIT_SINK_FAILED = 1
EXIT_INVALID = 2

# (output name, max_iterations, zoom, offset_x, offset_y)
DEMO_VIEWS: List[Tuple[str, int, float, float, float]] = [
    ("mandelbrot.ppm", 100, 1.0, 0.0, 0.0),
    ("mandelbrot_zoomed.ppm", 500, 0.001, -0.7436, 0.1318),
]

def build_arg_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="mandelrender", description="Escape-time Mandelbrot renderer.")
    p.add_argument("--config", type=str, default=None, help="Path to config JSON. Command-line values override it.")
    p.add_argument("--log-level", type=str, default="INFO", choices=["DEBUG","INFO","WARNING","ERROR"], help="Log level.")
    p.add_argument("--log-file", type=str, default="", help="Log file path (rotating). Empty disables file logging.")
    sub = p.add_subparsers(dest="cmd", required=True)

    r = sub.add_parser("render", help="Render one view to an image file.")
    r.add_argument("--width", type=int, default=None, help="Image width in pixels (>= 2).")
    r.add_argument("--height", type=int, default=None, help="Image height in pixels (>= 2).")
    r.add_argument("--max-iterations", dest="max_iterations", type=int, default=None, help="Iteration cap (>= 1).")
    r.add_argument("--zoom", type=float, default=None, help="Scale of the base window; smaller values magnify.")
    r.add_argument("--offset-x", dest="offset_x", type=float, default=None, help="Pan subtracted from the real bounds.")
    r.add_argument("--offset-y", dest="offset_y", type=float, default=None, help="Pan subtracted from the imaginary bounds.")
    r.add_argument("--output", type=str, default=None, help="Destination file (.ppm writes P3 text, other suffixes go through Pillow).")
    r.add_argument("--workers", type=int, default=None, help="Worker processes; 1 renders in-process.")
    r.add_argument("--progress", action="store_true", help="Show a progress bar.")
    r.add_argument("--manifest", type=str, default=None, help="Write a JSON run manifest to this path.")

    d = sub.add_parser("demo", help="Render the default view and the reference 0.001 zoom view.")
    d.add_argument("--output-dir", type=str, default=".", help="Directory for the demo images.")
    d.add_argument("--width", type=int, default=800)
    d.add_argument("--height", type=int, default=600)
    d.add_argument("--workers", type=int, default=1)

    return p

def _merge_overrides(cfg: Dict[str, Any], args: argparse.Namespace) -> Dict[str, Any]:
    out = dict(cfg)
    for key in ("width", "height", "max_iterations", "zoom", "offset_x", "offset_y", "output", "workers"):
        v = getattr(args, key, None)
        if v is not None:
            out[key] = v
    return out

def _render_and_save(params: RenderParameters, output: str, *, workers: int, progress: bool,
                     log_queue, log_level: int) -> float:
    start = time.perf_counter()
    buf = render_parameters(params, workers=workers, progress=progress, log_queue=log_queue, log_level=log_level)
    save(buf, output)
    return time.perf_counter() - start

def main(argv: Optional[list] = None) -> int:
    args = build_arg_parser().parse_args(argv)

    log_level = getattr(logging, args.log_level.upper(), logging.INFO)
    log_file = args.log_file if args.log_file and args.log_file.strip() else None
    logger = configure_logging(level=log_level, log_file=log_file)
    queue, listener = start_log_forwarding(logger)

    try:
        if args.cmd == "render":
            cfg = normalise_config(_merge_overrides(load_config(args.config), args))
            params = RenderParameters(
                width=cfg["width"], height=cfg["height"], max_iterations=cfg["max_iterations"],
                zoom=cfg["zoom"], offset_x=cfg["offset_x"], offset_y=cfg["offset_y"],
            )
            elapsed = _render_and_save(params, cfg["output"], workers=cfg["workers"], progress=args.progress,
                                       log_queue=queue, log_level=log_level)
            if args.manifest:
                manifest = build_manifest(parameters=params, output=cfg["output"], elapsed_seconds=elapsed)
                try:
                    write_manifest(args.manifest, manifest)
                except OSError as e:
                    logger.error("Could not write run manifest %s: %s", args.manifest, e)
                    return EXIT_SINK_FAILED
                logger.info("Run manifest written: %s", args.manifest)
            return EXIT_OK

        if args.cmd == "demo":
            for i, (name, max_iterations, zoom, offset_x, offset_y) in enumerate(DEMO_VIEWS):
                if i:
                    logger.info("Generating a zoomed-in view...")
                params = RenderParameters(args.width, args.height, max_iterations, zoom, offset_x, offset_y)
                _render_and_save(params, os.path.join(args.output_dir, name), workers=args.workers, progress=False,
                                 log_queue=queue, log_level=log_level)
            return EXIT_OK

        raise RuntimeError("Unknown command.")
    except (InvalidDimension, InvalidIterationCap, InvalidViewport) as e:
        logger.error("Invalid render parameters: %s", e)
        return EXIT_INVALID
    except SinkUnavailable as e:
        logger.error("%s", e)
        return EXIT_SINK_FAILED
    except (OSError, ValueError) as e:
        # config file unreadable or malformed
        logger.error("Invalid configuration: %s", e)
        return EXIT_INVALID
    finally:
        listener.stop()
