"""Answer-interpretation service.

Turns a challenge plus reference data into a numeric answer by asking the
completion endpoint and validating its JSON reply.

Pipeline:
1. Compact the datasets, resolving homeworld references to planet names
2. Optionally keep only records mentioned in the problem text
3. Build the instruction and user messages
4. Call the completion endpoint
5. Extract and leniently parse the JSON object in the reply
6. Validate and round the solution
"""

import json
import logging
import math
from typing import Any

from challenge_solver.config import settings
from challenge_solver.entities import Answer, Challenge
from challenge_solver.exceptions import InterpretationError, InvalidSolutionError, PreconditionError
from challenge_solver.protocols import CompletionProvider
from challenge_solver.utils.json_extraction import extract_json_object, parse_lenient_json, round10

from .reference_data import ReferenceData

logger = logging.getLogger(__name__)

INSTRUCTION_ROLE = "developer"

INSTRUCTIONS = """Eres un asistente experto en resolver problemas de razonamiento lógico y matemático.
Tu objetivo es analizar el enunciado del problema y responder directamente lo que se pregunta, utilizando solo los datos proporcionados en la sección de contexto (planetas, personajes y Pokémon).

Tu salida DEBE ser un objeto JSON válido con este formato exacto:
{
  "reasoning": "explicación paso a paso de cómo llegaste al resultado final",
  "solution": número
}

Importante:
- Usa únicamente los datos proporcionados; no realices suposiciones ni cálculos que no estén justificados por la pregunta.
- Asegúrate de que el número en "solution" sea exactamente la respuesta final que se solicita en el problema.
- Si el problema pregunta por un dato de un Pokémon, personaje o planeta, responde con ese valor directamente. Si pregunta por un cálculo, haz solo ese cálculo.
- Redondea la respuesta numérica final a exactamente 10 decimales.
- Si no puedes responder por falta de datos, explica por qué y devuelve null en "solution".
- No incluyas ningún texto fuera del JSON."""

USER_TEMPLATE = """Problema: {problem}

Datos disponibles:
Planetas: {planets}
Personajes: {characters}
Pokémon: {creatures}

Por favor, analiza el problema y proporciona la solución numérica precisa usando los datos proporcionados."""


def _mentioned(records: list[dict[str, Any]], problem: str) -> list[dict[str, Any]]:
    text = problem.lower()
    matches = [r for r in records if r.get("name") and str(r["name"]).lower() in text]
    return matches or records


class InterpretationService:
    """Stateless interpreter with its completion provider injected.

    Example:
        ```python
        interpreter = InterpretationService(completion=CompletionClient.create())
        answer = await interpreter.interpret(challenge, reference)
        print(answer.answer, answer.reasoning)
        ```
    """

    def __init__(
        self,
        completion: CompletionProvider,
        filter_by_mentions: bool | None = None,
        resolve_homeworlds: bool | None = None,
    ) -> None:
        """Initialize the interpreter.

        Args:
            completion: Chat-completion backend (required).
            filter_by_mentions: Shrink datasets to records named in the problem.
            resolve_homeworlds: Replace homeworld URLs with planet names.
        """
        self._completion = completion
        self._filter = settings.filter_by_mentions if filter_by_mentions is None else filter_by_mentions
        self._resolve = settings.resolve_homeworlds if resolve_homeworlds is None else resolve_homeworlds

    @classmethod
    def create(cls, completion: CompletionProvider | None = None) -> "InterpretationService":
        """Factory method using the configured completion client."""
        if completion is None:
            from challenge_solver.repositories import CompletionClient

            completion = CompletionClient.create()
        return cls(completion=completion)

    def build_context(self, problem: str, reference: ReferenceData) -> dict[str, list[dict[str, Any]]]:
        """Compact the reference datasets for the prompt."""
        planet_names = {p.url: p.name for p in reference.planets if p.url}

        planets = [p.to_dict() for p in reference.planets]
        characters = []
        for character in reference.characters:
            record = character.to_dict()
            if self._resolve:
                record["homeworld"] = planet_names.get(character.homeworld, character.homeworld)
            characters.append(record)
        creatures = [c.to_dict() for c in reference.creatures]

        if self._filter:
            planets = _mentioned(planets, problem)
            characters = _mentioned(characters, problem)
            creatures = _mentioned(creatures, problem)

        return {"planets": planets, "characters": characters, "creatures": creatures}

    def build_messages(self, problem: str, context: dict[str, list[dict[str, Any]]]) -> list[dict[str, str]]:
        """Build the instruction and user messages sent to the model."""
        user = USER_TEMPLATE.format(
            problem=problem,
            planets=json.dumps(context["planets"], ensure_ascii=False),
            characters=json.dumps(context["characters"], ensure_ascii=False),
            creatures=json.dumps(context["creatures"], ensure_ascii=False),
        )
        return [
            {"role": INSTRUCTION_ROLE, "content": INSTRUCTIONS},
            {"role": "user", "content": user},
        ]

    @staticmethod
    def parse_reply(reply: str) -> tuple[float | None, str | None]:
        """Extract ``(solution, reasoning)`` from the model's raw reply.

        Raises:
            JSONExtractionError: If no JSON object is present
            JSONRepairError: If the object is invalid even after repair
            InvalidSolutionError: If solution is neither null nor a finite number
        """
        parsed = parse_lenient_json(extract_json_object(reply))

        if "solution" not in parsed:
            raise InvalidSolutionError("The reply has no 'solution' field")

        solution = parsed["solution"]
        reasoning = parsed.get("reasoning")
        reasoning = reasoning if isinstance(reasoning, str) else None

        if solution is None:
            return None, reasoning

        if isinstance(solution, bool) or not isinstance(solution, (int, float)) or not math.isfinite(solution):
            raise InvalidSolutionError(f"Solution must be a finite number or null, got {solution!r}")

        return round10(float(solution)), reasoning

    async def interpret(self, challenge: Challenge, reference: ReferenceData) -> Answer:
        """Interpret ``challenge`` using ``reference`` as the only data source.

        Raises:
            PreconditionError: If the problem text or any dataset is missing
            InterpretationError: If the reply cannot be turned into an answer
            FetchError: If the completion endpoint keeps failing
        """
        if not challenge.problem.strip():
            raise PreconditionError("The challenge has no problem text")
        if not reference.planets:
            raise PreconditionError("Planet data is required")
        if not reference.characters:
            raise PreconditionError("Character data is required")
        if not reference.creatures:
            raise PreconditionError("Creature data is required")

        context = self.build_context(challenge.problem, reference)
        messages = self.build_messages(challenge.problem, context)
        reply = await self._completion.complete(messages)
        logger.debug("Raw model reply for %s: %s", challenge.id, reply)

        try:
            solution, reasoning = self.parse_reply(reply)
        except InterpretationError as e:
            logger.error("Could not interpret reply for challenge %s: %s", challenge.id, e)
            raise

        logger.info("Challenge %s interpreted: %s", challenge.id, solution)
        return Answer(problem_id=challenge.id, answer=solution, reasoning=reasoning)
