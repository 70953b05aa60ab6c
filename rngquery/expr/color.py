import random
from dataclasses import dataclass

from ..sample import Sample


@dataclass(frozen=True)
class ColorSample(Sample):
    """An RGB color rendered as ``#RRGGBB``."""
    r: int
    g: int
    b: int

    def full(self) -> str:
        return f"#{self.r:02X}{self.g:02X}{self.b:02X}"

    def value(self) -> str:
        return self.full()


def gen_color(rng: random.Random) -> ColorSample:
    r = rng.getrandbits(8)
    g = rng.getrandbits(8)
    b = rng.getrandbits(8)
    return ColorSample(r, g, b)
