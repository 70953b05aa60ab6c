"""Random (version 4) UUIDs, see RFC 9562 section 5.4."""
import random
import uuid
from dataclasses import dataclass

from ..sample import Sample


@dataclass(frozen=True)
class UuidSample(Sample):
    raw: bytes

    def full(self) -> str:
        return str(uuid.UUID(bytes=self.raw))

    def value(self) -> str:
        return self.full()


def gen_uuid(rng: random.Random) -> UuidSample:
    raw = bytearray(rng.getrandbits(8) for _ in range(16))
    raw[6] = (raw[6] & 0x0F) | 0x40  # version 4
    raw[8] = (raw[8] & 0x3F) | 0x80  # variant 10xx_xxxx
    return UuidSample(bytes(raw))
