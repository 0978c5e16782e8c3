"""
Tests for the answer-interpretation service.
"""

import asyncio
import json

import pytest

from challenge_solver.entities import Challenge
from challenge_solver.exceptions import InvalidSolutionError, JSONExtractionError, PreconditionError
from challenge_solver.services import InterpretationService, ReferenceData
from challenge_solver.utils.json_extraction import format_answer

from .conftest import FakeCompletion

PIKACHU = Challenge(id="p1", problem="¿Cuál es el peso de pikachu?")


def interpreter(reply: str, **kwargs) -> tuple[InterpretationService, FakeCompletion]:
    completion = FakeCompletion(reply)
    options = {"filter_by_mentions": True, "resolve_homeworlds": True, **kwargs}
    return InterpretationService(completion=completion, **options), completion


def test_pikachu_weight_end_to_end(reference_data):
    """Test the documented scenario: pikachu's weight is 6."""
    service, completion = interpreter(
        'Claro: {"reasoning": "pikachu pesa 6 según los datos", "solution": 6} Espero que ayude.'
    )

    answer = asyncio.run(service.interpret(PIKACHU, reference_data))

    assert answer.problem_id == "p1"
    assert answer.answer == 6.0
    assert format_answer(answer.answer) == "6.0000000000"
    assert answer.reasoning == "pikachu pesa 6 según los datos"
    assert len(completion.calls) == 1


def test_messages_carry_instructions_and_data(reference_data):
    """Test the prompt layout sent to the completion endpoint."""
    service, completion = interpreter('{"reasoning": "x", "solution": 6}')

    asyncio.run(service.interpret(PIKACHU, reference_data))

    instruction, user = completion.calls[0]
    assert instruction["role"] == "developer"
    assert '"solution"' in instruction["content"]
    assert "10 decimales" in instruction["content"]
    assert user["role"] == "user"
    assert "Problema: ¿Cuál es el peso de pikachu?" in user["content"]
    assert '"weight": 6' in user["content"]


def test_context_filters_by_mention_and_falls_back(reference_data):
    """Test the mention filter and its full-dataset fallback."""
    service, _ = interpreter("{}")

    context = service.build_context("¿Cuál es el peso de PIKACHU?", reference_data)

    assert [c["name"] for c in context["creatures"]] == ["pikachu"]
    assert len(context["planets"]) == 2
    assert len(context["characters"]) == 2


def test_context_without_filter_keeps_everything(reference_data):
    service, _ = interpreter("{}", filter_by_mentions=False)

    context = service.build_context("pikachu", reference_data)

    assert len(context["creatures"]) == 2


def test_homeworld_resolved_to_planet_name(reference_data):
    service, _ = interpreter("{}")

    context = service.build_context("Luke Skywalker", reference_data)

    assert context["characters"] == [
        {"name": "Luke Skywalker", "height": 172, "mass": 77, "homeworld": "Tatooine"}
    ]
    assert "url" not in context["planets"][0]


def test_homeworld_left_alone_when_resolution_disabled(reference_data):
    service, _ = interpreter("{}", resolve_homeworlds=False)

    context = service.build_context("Leia Organa", reference_data)

    assert context["characters"][0]["homeworld"] == "https://swapi.test/api/planets/2/"


def test_solution_rounded_to_ten_decimals(reference_data):
    service, _ = interpreter(json.dumps({"reasoning": "1/3", "solution": 1 / 3}))

    answer = asyncio.run(service.interpret(PIKACHU, reference_data))

    assert answer.answer == 0.3333333333


def test_huge_solution_is_kept_as_is(reference_data):
    service, _ = interpreter('{"reasoning": "x", "solution": 1e300}')

    answer = asyncio.run(service.interpret(PIKACHU, reference_data))

    assert answer.answer == 1e300


def test_null_solution_is_allowed(reference_data):
    service, _ = interpreter('{"reasoning": "faltan datos", "solution": null}')

    answer = asyncio.run(service.interpret(PIKACHU, reference_data))

    assert answer.answer is None
    assert answer.reasoning == "faltan datos"


def test_repaired_reply_is_accepted(reference_data):
    service, _ = interpreter("{reasoning: 'peso directo', solution: 6}")

    assert asyncio.run(service.interpret(PIKACHU, reference_data)).answer == 6.0


@pytest.mark.parametrize(
    "reply",
    [
        '{"reasoning": "x", "solution": "seis"}',
        '{"reasoning": "x", "solution": true}',
        '{"reasoning": "x", "solution": [6]}',
        '{"reasoning": "x"}',
    ],
)
def test_non_numeric_solution_rejected(reference_data, reply):
    service, _ = interpreter(reply)

    with pytest.raises(InvalidSolutionError):
        asyncio.run(service.interpret(PIKACHU, reference_data))


def test_reply_without_json_rejected(reference_data):
    service, _ = interpreter("Lo siento, no puedo ayudar con eso.")

    with pytest.raises(JSONExtractionError):
        asyncio.run(service.interpret(PIKACHU, reference_data))


def test_missing_reference_data_fails_before_calling_model(reference_data):
    """Test that an empty dataset is a local precondition failure."""
    service, completion = interpreter('{"solution": 1}')
    incomplete = ReferenceData(planets=reference_data.planets, characters=reference_data.characters)

    with pytest.raises(PreconditionError):
        asyncio.run(service.interpret(PIKACHU, incomplete))
    assert completion.calls == []


def test_empty_problem_text_rejected(reference_data):
    service, completion = interpreter('{"solution": 1}')

    with pytest.raises(PreconditionError):
        asyncio.run(service.interpret(Challenge(id="x", problem="  "), reference_data))
    assert completion.calls == []
