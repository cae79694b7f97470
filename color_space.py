import numpy as np

from params import ConfigurationError


def color_bases(scale):
    """Every discretized color exactly once, in enumeration order.

    Color n is the mixed-radix decomposition of n in base scale**2, so
    the row index of a color in this array is also its color code.
    """
    if scale < 2:
        raise ConfigurationError(f"scale must be at least 2, got {scale}")

    color_size = scale**2
    n = np.arange(color_size**3, dtype=np.int64)

    return np.stack(
        (n % color_size, (n // color_size) % color_size, n // color_size**2),
        axis=1,
    ).astype(np.int32)


def color_offsets(bases):
    # All 8 sign combinations of every color, duplicates included
    signs = np.array(
        [
            [1, 1, 1],
            [1, 1, -1],
            [1, -1, 1],
            [1, -1, -1],
            [-1, 1, 1],
            [-1, 1, -1],
            [-1, -1, 1],
            [-1, -1, -1],
        ],
        dtype=np.int32,
    )
    bases = np.asarray(bases, dtype=np.int32)

    # Sign variants share their color's magnitude, so only the colors need sorting.
    # A stable sort keeps ties in enumeration order, so the probe order is fixed
    squared_magnitudes = np.sum(bases.astype(np.int64) ** 2, axis=1)
    order = np.argsort(squared_magnitudes, kind="stable")

    return (bases[order][:, np.newaxis, :] * signs[np.newaxis, :, :]).reshape(-1, 3)


def make_bases_offsets(scale, rng):
    bases = color_bases(scale)

    # The offsets come from the unshuffled colors
    offsets = color_offsets(bases)

    # This shuffle is the processing order of the placement
    shuffled = rng.permutation(bases)

    return shuffled, offsets


def encode_colors(colors, color_size):
    colors = np.asarray(colors, dtype=np.int64)
    return colors[..., 0] + colors[..., 1] * color_size + colors[..., 2] * color_size**2


def decode_colors(codes, color_size):
    codes = np.asarray(codes, dtype=np.int64)
    return np.stack(
        (codes % color_size, (codes // color_size) % color_size, codes // color_size**2),
        axis=-1,
    )


def scale_to_8bit(components, color_size):
    # round(c * 255 / (color_size - 1)) with halves rounded up, in exact integer math
    components = np.asarray(components, dtype=np.int64)
    denominator = color_size - 1

    return ((2 * 255 * components + denominator) // (2 * denominator)).astype(np.uint8)
