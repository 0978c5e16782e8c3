"""
Shared fakes for the test suite.
"""

import pytest

from challenge_solver.entities import Character, Creature, Planet
from challenge_solver.services import ReferenceData


class SleepRecorder:
    """Awaitable sleep stand-in that records requested delays."""

    def __init__(self) -> None:
        self.calls: list[float] = []

    async def __call__(self, seconds: float) -> None:
        self.calls.append(seconds)


class FakeClock:
    """Manually advanced clock with a matching sleep."""

    def __init__(self, now: float = 0.0) -> None:
        self.now = now
        self.sleeps: list[float] = []

    def __call__(self) -> float:
        return self.now

    async def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        self.now += seconds


class FakeCompletion:
    """CompletionProvider returning a canned reply."""

    def __init__(self, reply: str) -> None:
        self.reply = reply
        self.calls: list[list[dict[str, str]]] = []

    async def complete(self, messages: list[dict[str, str]]) -> str:
        self.calls.append(messages)
        return self.reply


@pytest.fixture
def sleep_recorder():
    return SleepRecorder()


@pytest.fixture
def fake_clock():
    return FakeClock()


@pytest.fixture
def reference_data():
    """Small but complete reference dataset."""
    return ReferenceData(
        planets=[
            Planet(
                name="Tatooine",
                rotation_period=23,
                orbital_period=304,
                diameter=10465,
                surface_water=1,
                population=200000,
                url="https://swapi.test/api/planets/1/",
            ),
            Planet(name="Alderaan", diameter=12500, population=2000000000, url="https://swapi.test/api/planets/2/"),
        ],
        characters=[
            Character(name="Luke Skywalker", height=172, mass=77, homeworld="https://swapi.test/api/planets/1/"),
            Character(name="Leia Organa", height=150, mass=49, homeworld="https://swapi.test/api/planets/2/"),
        ],
        creatures=[
            Creature(name="pikachu", base_experience=112, height=4, weight=6),
            Creature(name="bulbasaur", base_experience=64, height=7, weight=69),
        ],
    )
