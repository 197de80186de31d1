"""
Storage-backed funding accumulator (imperative shell).

`PAccumulator6.accumulate` is pure; this wrapper owns one checkpoint in a
`Storage` and applies transitions to it. Each call reads the current state,
runs the kernel, and writes the next state only after the kernel returned, so
a failing call leaves storage untouched.

Calls are not serialized here: the host is expected to run one accumulation
at a time per checkpoint.
"""

from __future__ import annotations

from ..logging import get_logger
from ..number import Fixed6
from ..state.storage import Key, Storage
from .accumulator import PAccumulator6
from .controller import PController6

logger = get_logger(__name__)


class StoredPAccumulator6:
    def __init__(self, storage: Storage, key: Key) -> None:
        self._storage = storage
        self._key = key

    def initialize(self, state: PAccumulator6) -> None:
        """Seed the checkpoint with an explicit initial ``(value, skew)``."""
        state.store(self._storage, self._key)
        logger.debug("paccumulator_initialized", value=str(state.value), skew=str(state.skew))

    def accumulator(self) -> PAccumulator6:
        """Current ``(value, skew)``."""
        return PAccumulator6.read(self._storage, self._key)

    def accumulate(
        self,
        controller: PController6,
        skew: Fixed6,
        from_timestamp: int,
        to_timestamp: int,
        notional: Fixed6,
    ) -> Fixed6:
        """Advance the checkpoint over ``[from_timestamp, to_timestamp]`` and return the accrued cost."""
        current = self.accumulator()
        cost, nxt = current.accumulate(controller, skew, from_timestamp, to_timestamp, notional)
        nxt.store(self._storage, self._key)
        logger.debug(
            "paccumulator_accumulated",
            from_timestamp=from_timestamp,
            to_timestamp=to_timestamp,
            value_before=str(current.value),
            value_after=str(nxt.value),
            skew_before=str(current.skew),
            skew_after=str(nxt.skew),
            notional=str(notional),
            cost=str(cost),
        )
        return cost
