"""
Command-line driver for annealing runs.

Usage::

    pyfullerene run --atoms 60 --iterations 100000 --output plots/
    pyfullerene run --config examples/anneal_c60.yaml
    pyfullerene energy data/atoms_test.dat
    pyfullerene scan --min 30 --max 60 --output plots/
    pyfullerene serve --port 9000
"""
from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

import pyfullerene
from pyfullerene.builder import load_yaml
from pyfullerene.core.schemas import AnnealingConfig
from pyfullerene.core.service import AnnealingService
from pyfullerene.io import (
    cluster_to_xyz,
    read_positions,
    write_histogram,
    write_positions,
    write_series,
)

logger = logging.getLogger(__name__)

# CLI option -> AnnealingConfig key
_RUN_OVERRIDES = {
    "atoms": "n_atoms",
    "iterations": "n_iterations",
    "beta_min": "beta_min",
    "beta_max": "beta_max",
    "exponent": "exponent",
    "radius": "initial_radius",
    "seed": "seed",
    "sample_interval": "sample_interval",
    "print_interval": "print_interval",
    "positions": "positions_file",
}


def setup_logging(level_str: str) -> None:
    level = getattr(logging, level_str.upper(), logging.INFO)
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )


def _add_schedule_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--iterations", type=int, help="Monte Carlo iterations")
    parser.add_argument("--beta-min", type=float, help="Initial inverse temperature")
    parser.add_argument("--beta-max", type=float, help="Final inverse temperature")
    parser.add_argument("--exponent", type=float, help="Schedule exponent p")
    parser.add_argument("--radius", type=float, help="Radius of the random start sphere")
    parser.add_argument("--seed", type=int, help="Random seed")
    parser.add_argument("--config", type=Path, help="YAML configuration file")
    parser.add_argument("--output", type=Path, default=Path("."), help="Output directory")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pyfullerene",
        description="Monte Carlo simulated annealing of bond-order clusters.",
    )
    parser.add_argument(
        "--version", action="version", version=f"pyfullerene {pyfullerene.__version__}"
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Set logging level",
    )
    subparsers = parser.add_subparsers(dest="command", required=True, help="Sub-commands")

    cmd_run = subparsers.add_parser("run", help="Anneal a single cluster")
    cmd_run.add_argument("--atoms", type=int, help="Atom count for a random start")
    cmd_run.add_argument("--positions", type=Path, help="Starting positions file (x y z per line)")
    cmd_run.add_argument("--sample-interval", type=int, help="Trace sampling stride")
    cmd_run.add_argument("--print-interval", type=int, help="Console progress stride (0 = off)")
    _add_schedule_arguments(cmd_run)

    cmd_energy = subparsers.add_parser("energy", help="Energy of a fixed configuration")
    cmd_energy.add_argument("positions", type=Path, help="Positions file (x y z per line)")
    cmd_energy.add_argument("--per-atom", action="store_true", help="Print per-atom energies")

    cmd_scan = subparsers.add_parser("scan", help="Final E/N for a range of sizes")
    cmd_scan.add_argument("--min", dest="n_min", type=int, default=30, help="Smallest size")
    cmd_scan.add_argument("--max", dest="n_max", type=int, default=60, help="Largest size")
    _add_schedule_arguments(cmd_scan)

    cmd_serve = subparsers.add_parser("serve", help="Run the REST API (needs the 'api' extra)")
    cmd_serve.add_argument("--host", default="127.0.0.1", help="Bind host (default: 127.0.0.1)")
    cmd_serve.add_argument("--port", type=int, default=8000, help="Bind port (default: 8000)")
    cmd_serve.add_argument("--reload", action="store_true", help="Restart on source changes")

    return parser


def _config_from_args(args: argparse.Namespace) -> AnnealingConfig:
    raw: Dict[str, Any] = load_yaml(args.config) if args.config else {}
    for option, key in _RUN_OVERRIDES.items():
        value = getattr(args, option, None)
        if value is not None:
            raw[key] = str(value) if isinstance(value, Path) else value
    return AnnealingConfig.from_dict(raw)


def _cmd_run(args: argparse.Namespace) -> int:
    config = _config_from_args(args)
    service = AnnealingService()
    result = service.run(config)

    out = args.output
    out.mkdir(parents=True, exist_ok=True)
    write_series(out / "energy_tab.dat", result.energies, x=result.iterations)
    write_series(out / "r_tab.dat", result.mean_radii, x=result.iterations)
    write_histogram(out / "pcf.dat", result.bin_centres, result.histogram)
    write_positions(out / "atoms.dat", service.cluster)
    (out / "cluster.xyz").write_text(cluster_to_xyz(service.cluster) + "\n")

    print(service.cluster)
    print(f"r_sr = {result.mean_radius}")
    print(f"E/N = {result.energy_per_atom}")
    print(
        f"acceptance: local {result.local_acceptance:.3f}, "
        f"global {result.global_acceptance:.3f}"
    )
    return 0


def _cmd_energy(args: argparse.Namespace) -> int:
    positions = read_positions(args.positions)
    report = AnnealingService().evaluate(positions)
    print(f"N = {report.n_atoms}")
    print(f"E = {report.energy:.6f}")
    print(f"E/N = {report.energy_per_atom:.6f}")
    print(f"r_sr = {report.mean_radius:.6f}")
    if args.per_atom:
        for i, e in enumerate(report.atom_energies):
            print(f"{i:5d}\t{e:.6f}")
    return 0


def _cmd_scan(args: argparse.Namespace) -> int:
    if args.n_max < args.n_min:
        raise ValueError(f"--max ({args.n_max}) must not be below --min ({args.n_min})")
    config = _config_from_args(args)

    def _report(n_atoms, result):
        print(f"N = {n_atoms}; E/N = {result.energy_per_atom}")

    scan = AnnealingService().scan_sizes(
        range(args.n_min, args.n_max + 1), config, on_result=_report
    )
    out = args.output
    out.mkdir(parents=True, exist_ok=True)
    write_series(out / "EN_tab.dat", scan.energies_per_atom, x=scan.sizes)
    return 0


def _cmd_serve(args: argparse.Namespace) -> int:
    try:
        import uvicorn
        from pyfullerene.api.app import create_app  # noqa: F401
    except ImportError as exc:
        raise ImportError(
            f"{exc}. The API server needs: pip install -e '.[api]'"
        ) from exc

    logger.info("Serving the annealing API on http://%s:%d", args.host, args.port)
    uvicorn.run(
        "pyfullerene.api.app:create_app",
        factory=True,
        host=args.host,
        port=args.port,
        log_level=args.log_level.lower(),
        reload=args.reload,
    )
    return 0


_COMMANDS = {
    "run": _cmd_run,
    "energy": _cmd_energy,
    "scan": _cmd_scan,
    "serve": _cmd_serve,
}


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging(args.log_level)
    try:
        return _COMMANDS[args.command](args)
    except (ValueError, RuntimeError, ImportError, OSError) as exc:
        logger.debug("Command failed", exc_info=True)
        print(f"Error: {exc}", file=sys.stderr)
        return 2


if __name__ == "__main__":
    raise SystemExit(main())
