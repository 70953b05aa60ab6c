from __future__ import annotations

import random
from typing import List, Sequence

from .entry import PendingEntry
from .options import Options


def select(rng: random.Random, entries: Sequence[PendingEntry], options: Options) -> List[PendingEntry]:
    """Pick the entries to evaluate, in evaluation order.

    Without replacement at most ``len(entries)`` distinct entries are
    returned. With ``keep_order`` the result is sorted by insertion id after
    sampling, so the draw itself stays unbiased.
    """
    if not entries:
        return []

    n = options.count(len(entries))

    # taking everything is just a shuffle
    if not options.repeating and n >= len(entries):
        selected = list(entries)
        if not options.keep_order:
            rng.shuffle(selected)
        return selected

    if options.repeating:
        selected = [rng.choice(entries) for _ in range(n)]
    else:
        selected = rng.sample(list(entries), n)

    if options.keep_order:
        selected.sort(key=lambda e: e.id)
    return selected
