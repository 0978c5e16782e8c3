#!/usr/bin/env python3
"""
Demo script for the challenge solver.

Loads the reference catalogs (through the result cache), fetches one test
challenge, asks the model through the relay and prints the outcome.
Start the relay first: python -m challenge_solver.api.app
"""

import asyncio

from challenge_solver.config import settings
from challenge_solver.services import ChallengeSolver
from challenge_solver.utils import configure_logging, format_answer


def print_section(title: str) -> None:
    """Print a section header."""
    print("\n" + "=" * 70)
    print(f"  {title}")
    print("=" * 70)


async def main() -> None:
    configure_logging(settings.log_level)
    solver = ChallengeSolver.create()

    try:
        outcome = await solver.solve(submit=False, mode="test")
    finally:
        await solver.close()

    print_section("Challenge")
    print(f"  id:       {outcome.challenge.id}")
    print(f"  problem:  {outcome.challenge.problem}")
    if outcome.challenge.solution is not None:
        print(f"  expected: {format_answer(outcome.challenge.solution)}")

    print_section("Answer")
    answer = outcome.answer.answer
    print(f"  answer:    {format_answer(answer) if answer is not None else 'null'}")
    print(f"  reasoning: {outcome.answer.reasoning}")


if __name__ == "__main__":
    asyncio.run(main())
