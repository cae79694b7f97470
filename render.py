import numpy as np
from PIL import Image

from color_space import decode_colors, scale_to_8bit
from params import InvariantError


def render(grid, color_size):
    if (grid < 0).any():
        raise InvariantError(
            f"Can't render a grid with {int((grid < 0).sum())} empty cells"
        )

    # The grid is indexed [x, y], while image arrays are indexed [y, x]
    components = decode_colors(grid.T, color_size)

    return scale_to_8bit(components, color_size)


def save_image(pixels, output_image_path):
    img = Image.fromarray(pixels)
    img.save(output_image_path)
