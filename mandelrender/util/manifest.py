import importlib.metadata as importlib_metadata
import json
import os
import platform
import sys
import time
from dataclasses import asdict, dataclass
from typing import Any, Dict, Optional

from mandelrender.pipeline import RenderParameters

@dataclass(frozen=True)
class RunManifest:
    started_utc: str
    parameters: Dict[str, Any]
    viewport: Dict[str, float]
    output: str
    elapsed_seconds: float
    python: Dict[str, Any]
    packages: Dict[str, str]
    system: Dict[str, Any]

def _utc_iso() -> str:
    return time.strftime("%Y-%m-%dT%H:%M:%SZ", time.gmtime())

def _pkg_version(name: str) -> Optional[str]:
    try:
        return importlib_metadata.version(name)
    except importlib_metadata.PackageNotFoundError:
        return None

def build_manifest(*, parameters: RenderParameters, output: str, elapsed_seconds: float) -> RunManifest:
    pkgs = {}
    for name in ["numpy", "Pillow", "tqdm"]:
        v = _pkg_version(name)
        if v:
            pkgs[name] = v

    return RunManifest(
        started_utc=_utc_iso(),
        parameters=asdict(parameters),
        viewport=asdict(parameters.viewport()),
        output=output,
        elapsed_seconds=round(elapsed_seconds, 3),
        python={"version": sys.version, "executable": sys.executable},
        packages=pkgs,
        system={"platform": platform.platform(), "machine": platform.machine()},
    )

def write_manifest(path: str, manifest: RunManifest) -> None:
    parent = os.path.dirname(path)
    if parent:
        os.makedirs(parent, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(asdict(manifest), f, indent=2, sort_keys=True)
