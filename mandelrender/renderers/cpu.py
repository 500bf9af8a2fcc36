from __future__ import annotations

import logging
from concurrent.futures import ProcessPoolExecutor
from typing import Iterable, List, Optional, Tuple

import numpy as np
from tqdm import tqdm

from mandelrender.color import color_of
from mandelrender.escape import escape_time
from mandelrender.util.logging_setup import configure_worker_logging, get_logger
from mandelrender.viewport import Viewport

_G = {}

def _init_worker(viewport, width, height, max_iterations, log_queue, log_level):
    _G["viewport"] = viewport
    _G["width"] = width
    _G["height"] = height
    _G["max_iterations"] = max_iterations
    if log_queue is not None:
        configure_worker_logging(log_queue, level=log_level)

def _render_band_in_worker(y0_y1: Tuple[int, int]):
    y0, y1 = y0_y1
    band = render_band(_G["viewport"], _G["width"], _G["height"], _G["max_iterations"], y0, y1)
    return y0, band

def split_bands(height: int, band_height: int) -> List[Tuple[int, int]]:
    """Half-open row ranges [y0, y1) covering 0..height exactly once."""
    if band_height <= 0:
        raise ValueError("band_height must be > 0")
    bands: List[Tuple[int, int]] = []
    y = 0
    while y < height:
        y1 = min(height, y + band_height)
        bands.append((y, y1))
        y = y1
    return bands

def render_band(viewport: Viewport, width: int, height: int, max_iterations: int, y0: int, y1: int) -> np.ndarray:
    logger = get_logger()
    band = np.zeros((y1 - y0, width, 3), dtype=np.uint8)
    reals, imags = viewport.axes(width, height)

    for yi, y in enumerate(range(y0, y1)):
        im = imags[y]
        for x in range(width):
            n = escape_time(complex(reals[x], im), max_iterations)
            band[yi, x] = color_of(n, max_iterations)

    logger.debug("Rendered rows %s..%s/%s", y0, y1, height)
    return band

def render_pixels(
    viewport: Viewport,
    width: int,
    height: int,
    max_iterations: int,
    *,
    workers: int = 1,
    band_height: int = 32,
    progress: bool = False,
    log_queue=None,
    log_level: int = logging.INFO,
) -> np.ndarray:
    """
    Fill a (height, width, 3) uint8 array band by band.

    With workers > 1 the bands are computed in a process pool; each band is
    written back at its own row offset so the result does not depend on the
    order the workers finish in.
    """
    buf = np.zeros((height, width, 3), dtype=np.uint8)
    bands = split_bands(height, band_height)

    pool: Optional[ProcessPoolExecutor] = None
    if workers > 1:
        pool = ProcessPoolExecutor(
            max_workers=workers,
            initializer=_init_worker,
            initargs=(viewport, width, height, max_iterations, log_queue, log_level),
        )
        results: Iterable[Tuple[int, np.ndarray]] = pool.map(_render_band_in_worker, bands)
    else:
        results = ((y0, render_band(viewport, width, height, max_iterations, y0, y1)) for y0, y1 in bands)

    try:
        if progress:
            results = tqdm(results, total=len(bands), unit="band", desc="render")
        for y0, band in results:
            buf[y0:y0 + band.shape[0]] = band
    finally:
        if pool is not None:
            pool.shutdown()

    return buf
