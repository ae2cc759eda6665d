"""Uniswap V2 output amount estimation."""

from __future__ import annotations

from .eth import EthClient

ADDRESS_LENGTH = 20
FEE_MULTIPLIER = 997
FEE_DIVISOR = 1000

_HEX_DIGITS = frozenset("0123456789abcdefABCDEF")


def hex_to_address(value: str) -> bytes:
    """Convert a hex string to a 20-byte address.

    An optional ``0x`` prefix is dropped, an odd number of digits is padded on
    the left, decoding stops at the first invalid digit pair, longer input
    keeps its last 20 bytes and shorter input is left-padded with zeros.
    """
    if value[:2] in ("0x", "0X"):
        value = value[2:]
    if len(value) % 2:
        value = "0" + value
    decoded = bytearray()
    for start in range(0, len(value), 2):
        pair = value[start : start + 2]
        if not set(pair) <= _HEX_DIGITS:
            break
        decoded.append(int(pair, 16))
    return bytes(decoded[-ADDRESS_LENGTH:]).rjust(ADDRESS_LENGTH, b"\x00")


def sort_tokens(token0: bytes, token1: bytes) -> tuple[bytes, bytes]:
    """Return the two addresses in ascending byte order."""
    if token0 > token1:
        return token1, token0
    return token0, token1


def _euclid_div(numerator: int, denominator: int) -> int:
    quotient, remainder = divmod(numerator, denominator)
    if remainder < 0:
        quotient += 1
    return quotient


def output_amount(amount_in: int, reserve0: int, reserve1: int) -> int:
    """Return the output of swapping ``amount_in`` against the given reserves.

    Applies the 0.3% Uniswap V2 fee. Raises ``ZeroDivisionError`` when the
    denominator is zero.
    """
    amount_with_fee = amount_in * FEE_MULTIPLIER
    numerator = amount_with_fee * reserve1
    denominator = reserve0 * FEE_DIVISOR + amount_with_fee
    return _euclid_div(numerator, denominator)


class UniswapService:
    """Estimates swap outputs using reserves read from a client."""

    def __init__(self, client: EthClient) -> None:
        self.client = client

    def get_output_amount(self, token0: str, token1: str, pool: str, amount: int) -> int:
        """Return how much of ``token1`` swapping ``amount`` of ``token0`` in ``pool`` yields."""
        src = hex_to_address(token0)
        dst = hex_to_address(token1)
        pool_address = hex_to_address(pool)

        reserves = self.client.get_reserves(pool_address)

        first, _ = sort_tokens(src, dst)
        reserve_in, reserve_out = reserves.reserve0, reserves.reserve1
        if first != src:
            reserve_in, reserve_out = reserve_out, reserve_in

        return output_amount(amount, reserve_in, reserve_out)