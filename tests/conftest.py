import pytest

from lottosim.lottery import Lottery
from lottosim.random_source import SeededRandomSource
from lottosim.rules import JACKPOT, TEST_LOTTO, GameConfig, PartSpec


@pytest.fixture
def five_of_fifty() -> GameConfig:
    """One part, 5 of 1-50, unit cost 1, 1,000,000 jackpot."""
    return GameConfig(
        name="FiveOfFifty",
        cost=1,
        start_jackpot=1_000_000,
        parts=(PartSpec(5, 50),),
        payouts={
            (5,): JACKPOT,
            (4,): 100,
            (3,): 5,
            (2,): 0,
            (1,): 0,
            (0,): 0,
        },
    )


@pytest.fixture
def lotto(five_of_fifty) -> Lottery:
    return Lottery(five_of_fifty, SeededRandomSource(1234))


@pytest.fixture
def test_lotto() -> Lottery:
    return Lottery(TEST_LOTTO, SeededRandomSource(1000983364347))
