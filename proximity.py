import numpy as np

from params import InvariantError

FIRST_CHUNK_SIZE = 64
MAX_CHUNK_SIZE = 1 << 16


class ProximityIndex:
    """Maps placed colors to their grid location.

    Colors are looked up by color code, locations are stored encoded as
    x * size + y, with -1 meaning the color hasn't been placed yet.
    """

    def __init__(self, color_size, size, offsets):
        self.color_size = color_size
        self.size = size
        self.offsets = np.asarray(offsets, dtype=np.int32)

        self._locations = np.full(color_size**3, -1, dtype=np.int64)
        self._radix = np.array([1, color_size, color_size**2], dtype=np.int64)
        self._count = 0

    def __len__(self):
        return self._count

    def add(self, color, location):
        code = self._code(color)
        if self._locations[code] != -1:
            raise InvariantError(f"Color {tuple(color)} was placed twice")

        x, y = location
        self._locations[code] = x * self.size + y
        self._count += 1

    def location_of(self, color):
        encoded = int(self._locations[self._code(color)])
        if encoded == -1:
            return None
        return divmod(encoded, self.size)

    def find_nearest_placed(self, color):
        """Location of the placed color reached by the earliest offset.

        Offsets are probed in the order of the global offset table, in
        chunks that double in size, so that the common case of a close
        neighbor only touches the first few offsets.
        """
        color = np.asarray(color, dtype=np.int32)
        offset_count = len(self.offsets)

        start = 0
        chunk_size = FIRST_CHUNK_SIZE
        while start < offset_count:
            stop = min(start + chunk_size, offset_count)

            candidates = color + self.offsets[start:stop]

            # The offsets are in the same 0..color_size-1 representation as the colors
            in_range = np.all((candidates >= 0) & (candidates < self.color_size), axis=1)

            codes = np.where(in_range, candidates @ self._radix, 0)
            locations = np.where(in_range, self._locations[codes], -1)

            hits = np.flatnonzero(locations != -1)
            if hits.size:
                return divmod(int(locations[hits[0]]), self.size)

            start = stop
            chunk_size = min(chunk_size * 2, MAX_CHUNK_SIZE)

        raise InvariantError(f"No placed color is reachable from {tuple(color)}")

    def _code(self, color):
        r, g, b = (int(c) for c in color)
        if not all(0 <= c < self.color_size for c in (r, g, b)):
            raise InvariantError(f"Color {(r, g, b)} is outside the color space")
        return r + g * self.color_size + b * self.color_size**2
