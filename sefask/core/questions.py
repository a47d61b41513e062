"""Question Variants — tagged union for the three question kinds.

Invariants:
    - Variants are only built from payloads that passed validate_question
    - correct_answer type is fixed per variant (int index | bool | str)
    - to_document() round-trips to the wire shape stored in assignments.questions

Design Decisions:
    - Frozen dataclasses + `kind` discriminator over one loose class: invalid
      combinations (e.g. a multiple-choice answer without options) are unrepresentable
    - True/false answers held as bool internally, serialized back to "true"/"false"
"""

from dataclasses import dataclass
from typing import Any, Literal, Mapping, Union

from sefask.core.domain_types import QuestionKind


@dataclass(frozen=True)
class MultipleChoiceQuestion:
    text: str
    points: int
    options: tuple[str, ...]
    correct_index: int
    kind: Literal[QuestionKind.MULTIPLE_CHOICE] = QuestionKind.MULTIPLE_CHOICE

    def to_document(self) -> dict:
        return {
            "type": self.kind.value,
            "text": self.text,
            "points": self.points,
            "options": list(self.options),
            "correctAnswer": self.correct_index,
        }


@dataclass(frozen=True)
class TrueFalseQuestion:
    text: str
    points: int
    correct_answer: bool
    kind: Literal[QuestionKind.TRUE_FALSE] = QuestionKind.TRUE_FALSE

    def to_document(self) -> dict:
        return {
            "type": self.kind.value,
            "text": self.text,
            "points": self.points,
            "correctAnswer": "true" if self.correct_answer else "false",
        }


@dataclass(frozen=True)
class ShortAnswerQuestion:
    text: str
    points: int
    correct_answer: str
    kind: Literal[QuestionKind.SHORT_ANSWER] = QuestionKind.SHORT_ANSWER

    def to_document(self) -> dict:
        return {
            "type": self.kind.value,
            "text": self.text,
            "points": self.points,
            "correctAnswer": self.correct_answer,
        }


Question = Union[MultipleChoiceQuestion, TrueFalseQuestion, ShortAnswerQuestion]


def parse_question(raw: Mapping[str, Any]) -> Question:
    """Build the variant for an already-validated question payload.

    Raises ValueError if the payload was not validated first.
    """
    kind = QuestionKind(raw["type"])
    text = raw["text"].strip()
    points = int(raw["points"])
    if kind is QuestionKind.MULTIPLE_CHOICE:
        return MultipleChoiceQuestion(
            text=text,
            points=points,
            options=tuple(raw["options"]),
            correct_index=int(raw["correctAnswer"]),
        )
    if kind is QuestionKind.TRUE_FALSE:
        return TrueFalseQuestion(
            text=text, points=points,
            correct_answer=raw["correctAnswer"] == "true",
        )
    return ShortAnswerQuestion(
        text=text, points=points, correct_answer=raw["correctAnswer"],
    )


def total_points(questions: list[Question]) -> int:
    return sum(q.points for q in questions)
