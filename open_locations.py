import numpy as np


class OpenLocations:
    """The grid locations that haven't been filled yet.

    Members live in a dense array, with a side array mapping every
    location to its index in the dense array (-1 when absent).
    Removing a member swaps it with the last member and truncates,
    which makes both random and targeted removal O(1).

    Locations are (x, y) tuples, stored encoded as x * size + y.
    """

    def __init__(self, size):
        self.size = size

        self._members = np.arange(size * size, dtype=np.int64)
        self._positions = np.arange(size * size, dtype=np.int64)
        self._count = size * size

    def __len__(self):
        return self._count

    def __bool__(self):
        return self._count > 0

    def __contains__(self, location):
        encoded = self._encode(location)
        return encoded is not None and self._positions[encoded] != -1

    def remove_random(self, rng):
        if self._count == 0:
            return None

        index = int(rng.integers(self._count))
        encoded = int(self._members[index])
        self._remove_at(index)

        return divmod(encoded, self.size)

    def remove(self, location):
        encoded = self._encode(location)
        if encoded is None:
            return False

        index = int(self._positions[encoded])
        if index == -1:
            return False

        self._remove_at(index)
        return True

    def _remove_at(self, index):
        last = self._count - 1
        removed = self._members[index]
        moved = self._members[last]

        self._members[index] = moved
        self._positions[moved] = index
        self._positions[removed] = -1

        self._count = last

    def _encode(self, location):
        x, y = location
        if not (0 <= x < self.size and 0 <= y < self.size):
            return None
        return int(x) * self.size + int(y)
