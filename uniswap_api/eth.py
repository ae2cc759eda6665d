"""Ethereum client interface and the pair reserve record it returns."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol, runtime_checkable


@dataclass(frozen=True)
class PairReserves:
    """Reserves of a Uniswap V2 pair."""

    reserve0: int
    reserve1: int
    block_timestamp_last: int = 0


@runtime_checkable
class EthClient(Protocol):
    """Anything that can read the reserves of a pair contract."""

    def get_reserves(self, pair_address: bytes) -> PairReserves:
        """Return the reserves of the pair at the 20-byte ``pair_address``."""
        ...