"""Question and scenario definitions used by the scenario catalog."""

from dataclasses import dataclass, field
from typing import Any, Callable, Literal

from pydantic import BaseModel, ConfigDict, Field, model_validator

QuestionType = Literal["slider", "binary", "picker"]


class ScenarioQuestion(BaseModel):
    """A single prompt shown to the business owner."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., min_length=1, description="Stable question id")
    type: QuestionType
    label: str = Field(..., min_length=1)
    options: tuple[str, ...] | None = Field(
        None, description="Ordered choices, required for binary and picker questions"
    )
    helper_text: str | None = None
    min_label: str | None = Field(None, description="Slider label at 0")
    max_label: str | None = Field(None, description="Slider label at 100")
    tooltip: str | None = None

    @model_validator(mode="after")
    def check_options(self) -> "ScenarioQuestion":
        if self.type in ("binary", "picker") and not self.options:
            raise ValueError(f"{self.type} question '{self.id}' requires options")
        if self.type == "binary" and self.options and len(self.options) != 2:
            raise ValueError(f"binary question '{self.id}' must have exactly 2 options")
        return self


SecondQuestion = Callable[[Any], ScenarioQuestion | None]
ScoreFunction = Callable[[Any, Any], tuple[Any, Any]]


def no_second_question(_answer1: Any) -> None:
    """Branch for scenarios that stop after the first question."""
    return None


@dataclass(frozen=True)
class IndustryScenario:
    """How one risk category is asked and scored for one industry.

    ``q2`` receives the first answer and returns the follow-up question (or
    ``None``), so the second prompt can change shape with the first answer.
    ``calculate_score`` returns a ``(severity, latency)`` pair; the scorer
    clamps it to 1..10.
    """

    q1: ScenarioQuestion
    calculate_score: ScoreFunction
    q2: SecondQuestion = no_second_question
    context_tags: tuple[str, ...] = field(default_factory=tuple)
