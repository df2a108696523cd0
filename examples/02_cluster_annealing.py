#!/usr/bin/env python3
"""
Example 2: Annealing a C60-sized Cluster

Places 60 atoms at random on a sphere of radius 2.5 and anneals them
with beta rising quadratically from 1 to 100. Writes the energy and
mean radius traces, the pair correlation histogram and the final
positions as gnuplot data.

Usage:
    python examples/02_cluster_annealing.py [n_iterations]
"""
import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

import numpy as np
from pyfullerene.builder import ClusterBuilder
from pyfullerene.io import write_histogram, write_positions, write_series
from pyfullerene.montecarlo import AnnealingSchedule, MonteCarloEngine
from pyfullerene.observer import EnergyObserver, PrintObserver
from pyfullerene.potential import BrennerPotential


def main():
    n_iterations = int(sys.argv[1]) if len(sys.argv) > 1 else 20_000

    print("=" * 55)
    print("  Example 2: CLUSTER ANNEALING")
    print(f"  60 atoms, {n_iterations} iterations")
    print("=" * 55)

    rng = np.random.default_rng(60)
    cluster = (ClusterBuilder()
        .atoms(60)
        .on_sphere(radius=2.5)
        .rng(rng)
        .build())
    potential = BrennerPotential()

    print(f"\nInitial energy/atom: {cluster.compute_energy(potential) / 60:.4f}")

    energy_obs = EnergyObserver(interval=100)
    engine = MonteCarloEngine(
        cluster=cluster,
        potential=potential,
        schedule=AnnealingSchedule(1.0, 100.0, 2.0, n_iterations),
        rng=rng,
        observers=[energy_obs, PrintObserver(interval=max(n_iterations // 20, 1))],
    )
    engine.run()

    out = Path("plots")
    out.mkdir(exist_ok=True)
    write_series(out / "energy_tab.dat", energy_obs.energies, x=energy_obs.iterations)
    write_series(out / "r_tab.dat", energy_obs.mean_radii, x=energy_obs.iterations)
    write_histogram(
        out / "pcf.dat",
        cluster.pair_correlation_bins(),
        cluster.pair_correlation_histogram(),
    )
    write_positions(out / "atoms.dat", cluster)

    print(f"\n{'='*40}")
    print("FINAL STATE")
    print(f"{'='*40}")
    print(f"E/N:           {cluster.energy / cluster.n_atoms:.4f}")
    print(f"Mean radius:   {cluster.mean_radius():.4f}")
    print(f"Energy change: {energy_obs.get_energy_change():+.2%}")
    print(f"Output written to {out}/")
    print("=" * 55)


if __name__ == "__main__":
    main()
