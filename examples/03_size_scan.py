#!/usr/bin/env python3
"""
Example 3: Energy per Atom against Cluster Size

Anneals a fresh random cluster for every N in a range and tabulates
the final energy per atom. Each size gets its own generator, spawned
from one seed, so the scan is reproducible.

Usage:
    python examples/03_size_scan.py [n_min] [n_max] [n_iterations]
"""
import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from pyfullerene.core.schemas import AnnealingConfig
from pyfullerene.core.service import AnnealingService
from pyfullerene.io import write_series


def main():
    n_min = int(sys.argv[1]) if len(sys.argv) > 1 else 30
    n_max = int(sys.argv[2]) if len(sys.argv) > 2 else 40
    n_iterations = int(sys.argv[3]) if len(sys.argv) > 3 else 5_000

    print("=" * 55)
    print("  Example 3: SIZE SCAN")
    print(f"  N = {n_min}..{n_max}, {n_iterations} iterations each")
    print("=" * 55)

    config = AnnealingConfig(
        n_iterations=n_iterations,
        sample_interval=n_iterations,
        initial_radius=2.5,
        seed=2015,
    )

    def report(n_atoms, result):
        print(f"N = {n_atoms:3d}   E/N = {result.energy_per_atom:9.4f}   "
              f"r_mean = {result.mean_radius:.4f}")

    scan = AnnealingService().scan_sizes(range(n_min, n_max + 1), config, on_result=report)

    best = min(zip(scan.energies_per_atom, scan.sizes))
    print(f"\nLowest E/N: {best[0]:.4f} at N = {best[1]}")

    out = Path("plots")
    out.mkdir(exist_ok=True)
    write_series(out / "EN_tab.dat", scan.energies_per_atom, x=scan.sizes)
    print(f"Table written to {out / 'EN_tab.dat'}")
    print("=" * 55)


if __name__ == "__main__":
    main()
