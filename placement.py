import math
from dataclasses import dataclass, field

import numpy as np

from open_locations import OpenLocations
from params import InvariantError
from proximity import ProximityIndex

TAU = 2 * math.pi

EMPTY = -1


@dataclass
class PlacementStats:
    seeded: int = 0
    grown: int = 0
    fallbacks: int = 0
    walk_steps: int = 0


@dataclass
class World:
    """Everything the placement mutates while colors get placed.

    grid holds the color code of every cell (EMPTY if unfilled),
    and directions the walk heading at the moment that cell got filled.
    Both are indexed [x, y].
    """

    color_size: int
    size: int
    grid: np.ndarray
    directions: np.ndarray
    open_locations: OpenLocations
    index: ProximityIndex
    stats: PlacementStats = field(default_factory=PlacementStats)

    @classmethod
    def create(cls, params, offsets):
        size = params.size
        return cls(
            color_size=params.color_size,
            size=size,
            grid=np.full((size, size), EMPTY, dtype=np.int64),
            directions=np.zeros((size, size), dtype=np.float64),
            open_locations=OpenLocations(size),
            index=ProximityIndex(params.color_size, size, offsets),
        )

    def is_full(self):
        return not self.open_locations and not (self.grid == EMPTY).any()

    def place(self, color, location, heading):
        if not self.open_locations.remove(location):
            raise InvariantError(f"Location {location} isn't open")
        self.fill(color, location, heading)

    def fill(self, color, location, heading):
        x, y = location
        if self.grid[x, y] != EMPTY:
            raise InvariantError(f"Location {location} was filled twice")

        r, g, b = (int(c) for c in color)
        self.grid[x, y] = r + g * self.color_size + b * self.color_size**2
        self.directions[x, y] = heading
        self.index.add((r, g, b), location)


def seed_color(world, color, rng):
    location = world.open_locations.remove_random(rng)
    if location is None:
        raise InvariantError("Ran out of open locations")

    world.fill(color, location, rng.uniform(0, TAU))

    return location


def walk(world, start, heading, turn_rate, alpha, max_steps):
    """Walk from start with a slowly curling heading until an empty cell is hit.

    Returns the empty cell's location and the heading at that point,
    or None when max_steps steps didn't hit one.
    """
    size = world.size
    x, y = float(start[0]), float(start[1])

    for step in range(1, max_steps + 1):
        x = (x + math.sin(heading)) % size
        y = (y + math.cos(heading)) % size

        # The turning decays as the walk gets longer
        heading += turn_rate / step**alpha
        if not math.isfinite(heading):
            raise InvariantError(f"Walk heading overflowed on step {step}")

        world.stats.walk_steps += 1

        location = (_nearest_cell(x, size), _nearest_cell(y, size))
        if world.grid[location] == EMPTY:
            return location, heading

    return None


def grow_color(world, color, params, rng):
    start = world.index.find_nearest_placed(color)
    heading = float(world.directions[start])

    walked = walk(
        world,
        start,
        heading,
        params.initial_turn_rate,
        params.alpha,
        params.max_walk_steps,
    )

    if walked is None:
        world.stats.fallbacks += 1
        return seed_color(world, color, rng)

    location, heading = walked
    world.place(color, location, heading)
    world.stats.grown += 1

    return location


def place_colors(world, colors, params, rng, progress=None):
    total = len(colors)

    for i, color in enumerate(colors):
        if i < params.num_seeds:
            seed_color(world, color, rng)
            world.stats.seeded += 1
        else:
            grow_color(world, color, params, rng)

        if progress is not None:
            progress(i + 1, total)

    if not world.is_full():
        raise InvariantError(
            f"{len(world.open_locations)} locations were left open after placing {total} colors"
        )

    return world


def _nearest_cell(coordinate, size):
    # Float modulo can round up to exactly size, which is the same cell as 0
    if not 0.0 <= coordinate <= size:
        raise InvariantError(f"Walk left the grid at coordinate {coordinate}")
    return math.floor(coordinate + 0.5) % size
