"""Layout runner — orchestrates load → compose → artifact generation."""

from __future__ import annotations

import json
import logging
import shutil
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Optional

import pandas as pd
import yaml

from resobox.engine.core import compose_frame
from resobox.ingest import JsonSnapshotSource
from resobox.layout.line_chart import line_series
from resobox.layout.projection import get_projection
from resobox.model.box import BoxSequence, normalize_instrument
from resobox.model.signal import Signal
from resobox.reporting.plots import plot_layout, plot_line_series
from resobox.viewport.window import DEFAULT_VISIBLE_COUNT, ViewportWindow

log = logging.getLogger(__name__)

# Repo root (two levels up from resobox/engine/runner.py)
_REPO_ROOT = Path(__file__).resolve().parent.parent.parent

REQUIRED_KEYS: tuple[str, ...] = ("instrument", "snapshot_path")


def _resolve(path: str | Path) -> Path:
    path = Path(path)
    return path if path.is_absolute() else _REPO_ROOT / path


@dataclass(frozen=True)
class LayoutConfig:
    """Settings for a single layout run, read from YAML."""

    instrument: str
    snapshot_path: Path
    output_dir: Path = _REPO_ROOT / "runs"
    projection: str = "2d"
    base_size: float = 12.0
    decay: Optional[float] = None
    window_start: int = 0
    window_count: int = DEFAULT_VISIBLE_COUNT
    signal_path: Optional[Path] = None
    now: Optional[str] = None
    plots: bool = True

    @classmethod
    def from_dict(cls, cfg: dict[str, Any]) -> LayoutConfig:
        missing = [k for k in REQUIRED_KEYS if not cfg.get(k)]
        if missing:
            raise ValueError(f"layout config missing required keys: {missing}")

        projection = get_projection(cfg.get("projection", "2d")).name
        window = cfg.get("window") or {}
        base_size = float(cfg.get("base_size", 12.0))
        if base_size <= 0:
            raise ValueError(f"base_size must be positive, got {base_size}")
        decay = cfg.get("decay")

        return cls(
            instrument=normalize_instrument(cfg["instrument"]),
            snapshot_path=_resolve(cfg["snapshot_path"]),
            output_dir=_resolve(cfg.get("output_dir") or "runs"),
            projection=projection,
            base_size=base_size,
            decay=float(decay) if decay is not None else None,
            window_start=int(window.get("start", 0)),
            window_count=int(window.get("count", DEFAULT_VISIBLE_COUNT)),
            signal_path=_resolve(cfg["signal_path"]) if cfg.get("signal_path") else None,
            now=str(cfg["now"]) if cfg.get("now") else None,
            plots=bool(cfg.get("plots", True)),
        )

    @classmethod
    def from_yaml(cls, path: Path) -> LayoutConfig:
        with open(path, "r", encoding="utf-8") as f:
            cfg = yaml.safe_load(f) or {}
        if not isinstance(cfg, dict):
            raise ValueError(f"{path} must hold a YAML mapping")
        return cls.from_dict(cfg)


def _load_signal(path: Optional[Path]) -> Optional[Signal]:
    if path is None:
        return None
    raw = json.loads(path.read_text(encoding="utf-8"))
    signal = Signal.from_dict(raw)
    log.info(
        "Signal   : %s %s pattern=%s at %s",
        signal.pair, signal.signal_type.value if signal.signal_type else "?",
        list(signal.pattern_sequence), signal.timestamp,
    )
    return signal


def _new_run_dir(output_dir: Path) -> tuple[str, Path]:
    base_id = datetime.now(timezone.utc).strftime("%Y%m%d_%H%M%S")
    run_id = base_id
    suffix = 1
    while (output_dir / run_id).exists():
        run_id = f"{base_id}_{suffix}"
        suffix += 1
    run_dir = output_dir / run_id
    run_dir.mkdir(parents=True)
    return run_id, run_dir


def run_layout(config_path: str) -> str:
    """Compose one layout frame from a snapshot and write all run artifacts.

    Parameters
    ----------
    config_path : str
        Path to a YAML config file (relative to repo root or absolute).

    Returns
    -------
    str
        The generated ``run_id``.
    """
    cfg_path = _resolve(config_path)
    cfg = LayoutConfig.from_yaml(cfg_path)

    # ── Generate run_id ──────────────────────────────────────────────
    run_id, run_dir = _new_run_dir(cfg.output_dir)
    (run_dir / "plots").mkdir(exist_ok=True)

    log.info("Run ID   : %s", run_id)
    log.info("Output   : %s", run_dir)
    log.info("Pair     : %s (%s)", cfg.instrument, cfg.projection)

    # ── Load data ────────────────────────────────────────────────────
    sequences = JsonSnapshotSource(cfg.snapshot_path).fetch([cfg.instrument])
    sequence = sequences.get(cfg.instrument)
    if sequence is None:
        log.warning("No box data for %s in %s", cfg.instrument, cfg.snapshot_path)
        sequence = BoxSequence(timestamp="", boxes=(), instrument=cfg.instrument)
    log.info("Boxes    : %d at %s", len(sequence), sequence.timestamp or "?")

    signal = _load_signal(cfg.signal_path)
    now = pd.Timestamp(cfg.now) if cfg.now else None

    # ── Compose frame ────────────────────────────────────────────────
    window = ViewportWindow(
        start=cfg.window_start, count=cfg.window_count, total=len(sequence),
    )
    frame = compose_frame(
        sequence,
        cfg.base_size,
        projection=cfg.projection,
        window=window,
        signal=signal,
        now=now,
        decay=cfg.decay,
    )
    nodes_df = frame.to_frame()

    # ── Write artifacts ──────────────────────────────────────────────
    # 1. config.yaml
    shutil.copy2(cfg_path, run_dir / "config.yaml")

    # 2. nodes.csv
    nodes_df.to_csv(run_dir / "nodes.csv", index=False)
    log.info("Wrote nodes.csv  (%s rows)", f"{len(nodes_df):,}")

    # 3. meta.json
    meta = {
        "run_id": run_id,
        "instrument": frame.instrument,
        "timestamp": frame.timestamp,
        "projection": frame.projection,
        "base_size": cfg.base_size,
        "decay": cfg.decay if cfg.decay is not None else get_projection(cfg.projection).decay,
        "n_boxes": len(sequence),
        "n_nodes": len(frame),
        "window_start": frame.window.start,
        "window_count": frame.window.count,
        "signal_id": signal.signal_id if signal else None,
        "n_signal_matches": int(sum(n.signal_match for n in frame.nodes)),
    }
    (run_dir / "meta.json").write_text(json.dumps(meta, indent=2), encoding="utf-8")
    log.info("Wrote meta.json")

    # 4. plots
    if cfg.plots:
        plot_layout(frame, run_dir / "plots" / "layout.png")
        plot_line_series(line_series(sequence), run_dir / "plots" / "line.png")

    # 5. README.md
    readme_lines = [
        "Fractal Box Layout",
        f"Pair: {frame.instrument} ({frame.projection})",
        f"Snapshot: {cfg.snapshot_path.name} at {frame.timestamp or '?'}",
        f"Window: [{frame.window.start}, {frame.window.end}) of {frame.window.total}",
        f"Run ID: {run_id}",
        f"Reproduce: python -m resobox layout --config {config_path}",
    ]
    (run_dir / "README.md").write_text("\n".join(readme_lines) + "\n", encoding="utf-8")
    log.info("Wrote README.md")

    log.info("✓ Run complete: %s", run_dir)
    return run_id
