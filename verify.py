import argparse
from pathlib import Path

import numpy as np
from PIL import Image

from color_space import color_bases, scale_to_8bit


def _get_colors_and_counts(filepath):
    img = Image.open(filepath).convert("RGB")

    arr = np.array(img)

    # Arrange all pixels into a tall column of 3 RGB values and find unique rows (colors)
    colors, counts = np.unique(arr.reshape(-1, 3), axis=0, return_counts=1)

    return colors, counts, img.size


def _get_expected_colors(scale):
    color_size = scale**2
    colors = scale_to_8bit(color_bases(scale), color_size)

    # np.unique sorts rows the same way for both sides
    return np.unique(colors, axis=0)


def verify(output_image_path, scale):
    print("Verifying...")

    colors, counts, (width, height) = _get_colors_and_counts(output_image_path)
    expected_colors = _get_expected_colors(scale)

    size = scale**3
    assert (width, height) == (
        size,
        size,
    ), f"❌ The image is {width}x{height}, instead of {size}x{size}!"

    assert (counts == 1).all(), "❌ Some colors appear more than once!"

    assert np.array_equal(
        colors, expected_colors
    ), "❌ The set of colors isn't identical to every color of the scale!"

    print(f"🎉 Every one of the {scale**6} colors appears exactly once!")


def add_parser_arguments(parser):
    parser.add_argument(
        "output_image_path",
        type=Path,
        help="Path to the generated image",
    )
    parser.add_argument(
        "-sc",
        "--scale",
        type=int,
        default=12,
        help="The scale the image was generated with",
    )


def main():
    parser = argparse.ArgumentParser(
        formatter_class=argparse.ArgumentDefaultsHelpFormatter
    )
    add_parser_arguments(parser)
    args = parser.parse_args()

    verify(args.output_image_path, args.scale)


if __name__ == "__main__":
    main()
