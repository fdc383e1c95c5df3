"""
Example generating a landscape from a synthetic year of activity.
"""

import math

import matplotlib.pyplot as plt
import numpy as np

from py_terrain import ContributionCalendar, generate_landscape
from py_terrain.core import AleaPRNG
from py_terrain.log_config import configure_logging
from py_terrain.utils import identity_seed


def synthetic_counts(seed: str, weeks: int = 52) -> list:
    """A year of counts with a busy spring and a quiet winter."""
    rng = AleaPRNG(seed)
    counts = []
    for week in range(weeks):
        season = 0.5 + 0.5 * math.sin(week / weeks * 2 * math.pi)
        counts.append([
            int(rng.next() * 20 * season) if rng.next() < 0.4 + 0.5 * season else 0
            for _ in range(7)
        ])
    return counts


def main():
    configure_logging(level="INFO", fmt="console")

    seed = identity_seed("octocat", "dark")
    calendar = ContributionCalendar.from_counts(synthetic_counts("landscape_demo"))
    landscape = generate_landscape(calendar, seed)

    print(f"Total activity: {landscape.stats.total}")
    print(f"Longest streak: {landscape.stats.longest_streak} days")
    print(f"River cells: {len(landscape.biome_map.river_cells())}")
    print(f"Pond cells: {len(landscape.biome_map.pond_cells())}")
    print(f"Assets placed: {len(landscape.assets)}")
    for epic in landscape.epics:
        print(f"Landmark: {epic.building_type.value} ({epic.tier.value}) at week {epic.week}, day {epic.day}")

    cells = landscape.iso_cells
    xs = np.array([c.screen_x for c in cells])
    ys = np.array([c.screen_y - c.height for c in cells])
    levels = np.array([c.level for c in cells])
    water = np.array([landscape.biome_map.is_water((c.week, c.day)) for c in cells])

    fig, ax = plt.subplots(figsize=(14, 5))
    scatter = ax.scatter(xs, ys, c=levels, cmap="terrain", s=18, marker="D")
    ax.scatter(xs[water], ys[water], c="royalblue", s=18, marker="D")

    if landscape.assets:
        ax.scatter(
            [a.x for a in landscape.assets],
            [a.y - 3 for a in landscape.assets],
            c="darkgreen", s=3,
        )
    for epic in landscape.epics:
        ax.scatter(epic.center_x, epic.center_y - 10, marker="*", s=160, c="gold", edgecolors="black")

    ax.invert_yaxis()
    ax.set_aspect("equal")
    ax.set_title("Activity landscape")
    plt.colorbar(scatter, ax=ax, label="Level")
    plt.tight_layout()
    plt.savefig("landscape_demo.png", dpi=150)
    print("Saved landscape_demo.png")


if __name__ == "__main__":
    main()
