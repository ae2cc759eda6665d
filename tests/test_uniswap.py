import pytest

from uniswap_api.eth import PairReserves
from uniswap_api.uniswap import (
    UniswapService,
    hex_to_address,
    output_amount,
    sort_tokens,
)

RESERVE0 = int("6897994292349957088357")
RESERVE1 = int("17580630745241")
INPUT_AMOUNT = int("10000000000000000000")

WETH = "0xc02aaa39b223fe8d0a0e5c4f27ead9083c756cc2"
USDT = "0xdAC17F958D2ee523a2206206994597C13D831ec7"
POOL = "0x0d4a11d5eeaac28ec3f61d100daf4d40471f1852"


class _MockClient:
    def __init__(self):
        self.requested = []

    def get_reserves(self, pair_address):
        self.requested.append(pair_address)
        return PairReserves(reserve0=RESERVE0, reserve1=RESERVE1)


class _FailingClient:
    def get_reserves(self, pair_address):
        raise ConnectionError("node unavailable")


def test_get_output_amount():
    service = UniswapService(_MockClient())
    out = service.get_output_amount(WETH, USDT, POOL, INPUT_AMOUNT)
    assert str(out) == "25373450283"


def test_output_amount_matches_service_result():
    assert output_amount(INPUT_AMOUNT, RESERVE0, RESERVE1) == 25373450283


def test_service_asks_for_pool_address():
    client = _MockClient()
    UniswapService(client).get_output_amount(WETH, USDT, POOL, INPUT_AMOUNT)
    assert client.requested == [bytes.fromhex(POOL[2:])]


def test_reverse_direction_swaps_reserves():
    service = UniswapService(_MockClient())
    out = service.get_output_amount(USDT, WETH, POOL, INPUT_AMOUNT)
    assert out == output_amount(INPUT_AMOUNT, RESERVE1, RESERVE0)


def test_client_errors_propagate():
    service = UniswapService(_FailingClient())
    with pytest.raises(ConnectionError):
        service.get_output_amount(WETH, USDT, POOL, INPUT_AMOUNT)


def test_zero_input_gives_zero():
    assert output_amount(0, RESERVE0, RESERVE1) == 0


@pytest.mark.parametrize("amount", [1, 10**6, 10**30, 10**40])
def test_output_never_reaches_reserve(amount):
    assert 0 <= output_amount(amount, RESERVE0, RESERVE1) < RESERVE1


def test_output_grows_with_input():
    small = output_amount(10**18, RESERVE0, RESERVE1)
    large = output_amount(10**19, RESERVE0, RESERVE1)
    assert small <= large


def test_empty_pool_raises():
    with pytest.raises(ZeroDivisionError):
        output_amount(0, 0, RESERVE1)


def test_hex_to_address_full_address():
    assert hex_to_address(USDT) == bytes.fromhex(USDT[2:])
    assert len(hex_to_address(USDT)) == 20


def test_hex_to_address_without_prefix():
    assert hex_to_address(WETH[2:]) == hex_to_address(WETH)


def test_hex_to_address_short_value_left_padded():
    assert hex_to_address("0x1") == bytes(19) + b"\x01"


def test_hex_to_address_long_value_keeps_tail():
    assert hex_to_address("0xffff" + USDT[2:]) == bytes.fromhex(USDT[2:])


def test_hex_to_address_stops_at_invalid_digit():
    assert hex_to_address("0x12zz34") == bytes(19) + b"\x12"


def test_hex_to_address_empty():
    assert hex_to_address("") == bytes(20)


def test_sort_tokens_orders_ascending():
    weth = hex_to_address(WETH)
    usdt = hex_to_address(USDT)
    assert sort_tokens(usdt, weth) == (weth, usdt)
    assert sort_tokens(weth, usdt) == (weth, usdt)