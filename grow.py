import argparse
import time
from pathlib import Path

import humanize
import numpy as np

from color_space import make_bases_offsets
from params import ConfigurationError, Params
from placement import World, place_colors
from render import render, save_image

SECONDS_BETWEEN_STATUS = 10


def print_status(placed, total, start_time, stats):
    print(
        f"Placed {humanize.intcomma(placed)}/{humanize.intcomma(total)} colors"
        f" ({placed / total:.1%})"
        f", {humanize.precisedelta(time.time() - start_time)}"
        f", {stats.fallbacks} fallbacks"
        f", {humanize.intword(stats.walk_steps, '%.3f')} walk steps"
    )


def make_status_printer(world, start_time):
    last_printed_time = time.time()

    def progress(placed, total):
        nonlocal last_printed_time

        if time.time() > last_printed_time + SECONDS_BETWEEN_STATUS:
            print_status(placed, total, start_time, world.stats)
            last_printed_time = time.time()

    return progress


def make_image(params, progress=None, verbose=False):
    params.validate()

    rng = np.random.default_rng(params.seed)

    if verbose:
        print(f"Shuffling {humanize.intcomma(params.color_count)} colors...")
    colors, offsets = make_bases_offsets(params.scale, rng)

    world = World.create(params, offsets)

    if verbose:
        print("Placing colors...")
    start_time = time.time()
    if progress is None and verbose:
        progress = make_status_printer(world, start_time)
    place_colors(world, colors, params, rng, progress)

    if verbose:
        print_status(params.color_count, params.color_count, start_time, world.stats)
        print(
            f"{world.stats.seeded} seeded, {world.stats.grown} grown"
            f", {world.stats.fallbacks} fell back to a random location"
        )

    return render(world.grid, params.color_size), world.stats


def add_parser_arguments(parser):
    defaults = Params()

    parser.add_argument(
        "output_dir",
        type=Path,
        nargs="?",
        default=Path("."),
        help="The directory to save the image to; its filename is derived from the other arguments",
    )
    parser.add_argument(
        "-sc",
        "--scale",
        type=int,
        default=defaults.scale,
        help="Every channel gets scale**2 levels, so the image is scale**3 pixels wide and holds scale**6 colors",
    )
    parser.add_argument(
        "-n",
        "--num-seeds",
        type=int,
        default=defaults.num_seeds,
        help="How many colors get placed at random locations before growing starts",
    )
    parser.add_argument(
        "-t",
        "--initial-turn-rate",
        type=float,
        default=defaults.initial_turn_rate,
        help="How much a growing walk turns on its first step, in radians",
    )
    parser.add_argument(
        "-a",
        "--alpha",
        type=float,
        default=defaults.alpha,
        help="How fast the turning decays as a walk gets longer; the turn of step n is turn_rate / n**alpha",
    )
    parser.add_argument(
        "-c",
        "--cycle-cap",
        type=int,
        default=defaults.cycle_cap,
        help="A walk gives up after crossing the image this many times, and the color goes to a random location",
    )
    parser.add_argument(
        "-s",
        "--seed",
        type=int,
        default=defaults.seed,
        help="The seed of the random number generator; the same seed always gives the same image",
    )


def main():
    start_time = time.time()

    parser = argparse.ArgumentParser(
        formatter_class=argparse.ArgumentDefaultsHelpFormatter
    )
    add_parser_arguments(parser)
    args = parser.parse_args()

    params = Params(
        scale=args.scale,
        num_seeds=args.num_seeds,
        initial_turn_rate=args.initial_turn_rate,
        alpha=args.alpha,
        cycle_cap=args.cycle_cap,
        seed=args.seed,
    )
    try:
        params.validate()
    except ConfigurationError as e:
        parser.error(str(e))

    output_image_path = args.output_dir / params.filename

    print(f"Start {params.filename}")
    pixels, _ = make_image(params, verbose=True)

    print(f"Saving {output_image_path}...")
    args.output_dir.mkdir(parents=True, exist_ok=True)
    save_image(pixels, output_image_path)

    print(f"Done in {humanize.precisedelta(time.time() - start_time)}")


if __name__ == "__main__":
    main()
