import random
from dataclasses import dataclass

from ..sample import Sample

HEADS = "heads"
TAILS = "tails"


@dataclass(frozen=True)
class CoinSample(Sample):
    heads: bool

    def full(self) -> str:
        return HEADS if self.heads else TAILS

    def value(self) -> str:
        return self.full()


def toss_coin(rng: random.Random) -> CoinSample:
    return CoinSample(heads=bool(rng.getrandbits(1)))
