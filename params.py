import math
from dataclasses import dataclass

# Past this, two levels of a channel round to the same 8-bit value
MAX_SCALE = 16


class ConfigurationError(ValueError):
    pass


class InvariantError(RuntimeError):
    pass


@dataclass(frozen=True)
class Params:
    scale: int = 12
    num_seeds: int = 35
    initial_turn_rate: float = 0.01
    alpha: float = 0.2
    cycle_cap: int = 10
    seed: int = 0

    @property
    def color_size(self):
        return self.scale**2

    @property
    def size(self):
        return self.scale**3

    @property
    def color_count(self):
        return self.scale**6

    @property
    def max_walk_steps(self):
        # Steps are numbered from 1, the same way the turn rate decay counts them
        return self.cycle_cap * self.size - 1

    @property
    def filename(self):
        return (
            f"img-{self.scale}-{self.num_seeds}"
            f"-{self.initial_turn_rate:g}-{self.alpha:g}"
            f"-{self.cycle_cap}-{self.seed}.png"
        )

    def validate(self):
        if not _is_int(self.scale) or not 2 <= self.scale <= MAX_SCALE:
            raise ConfigurationError(
                f"scale must be an integer in [2, {MAX_SCALE}], got {self.scale!r}"
            )

        # Without a seed the first grown color has no placed neighbor to start from
        if not _is_int(self.num_seeds) or not 0 < self.num_seeds < self.color_count:
            raise ConfigurationError(
                f"num_seeds must be in [1, {self.color_count - 1}] for scale {self.scale}"
                f", got {self.num_seeds!r}"
            )

        for name in ("initial_turn_rate", "alpha"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                raise ConfigurationError(f"{name} must be a number, got {value!r}")
            if not math.isfinite(value):
                raise ConfigurationError(f"{name} must be finite, got {value!r}")

        if not _is_int(self.cycle_cap) or self.cycle_cap < 1:
            raise ConfigurationError(
                f"cycle_cap must be a positive integer, got {self.cycle_cap!r}"
            )

        # A negative alpha makes every step turn more than the one before it
        if self.alpha < 0:
            raise ConfigurationError(f"alpha can't be negative, got {self.alpha!r}")

        # Headings carry over from walk to walk, so the total turn of a run has to stay finite
        if not math.isfinite(
            abs(self.initial_turn_rate) * self.max_walk_steps * self.color_count
        ):
            raise ConfigurationError(
                f"initial_turn_rate {self.initial_turn_rate!r} is too large"
                f" for {self.color_count} walks of {self.max_walk_steps} steps"
            )

        if not _is_int(self.seed) or not 0 <= self.seed < 2**64:
            raise ConfigurationError(
                f"seed must be an unsigned 64-bit integer, got {self.seed!r}"
            )

        return self


def _is_int(value):
    return isinstance(value, int) and not isinstance(value, bool)
