"""Input schemas for the protocol tools."""

from __future__ import annotations

from typing import TypeVar

from pydantic import BaseModel, ConfigDict, Field
from pydantic import ValidationError as PydanticValidationError

from ggvercel.errors import ValidationError
from ggvercel.models.catalog import DEFAULT_MODEL
from ggvercel.providers.sandbox.session import DEFAULT_TIMEOUT_MS

ModelT = TypeVar("ModelT", bound=BaseModel)


class ToolInput(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)


class RollDiceInput(ToolInput):
    sides: int = Field(..., ge=2, le=100, description="Number of sides on the dice")


class GetWeatherInput(ToolInput):
    location: str = Field(..., description="City or location name")


class AiGenerateInput(ToolInput):
    prompt: str = Field(..., description="The prompt to send to the AI")
    model: str = Field(
        default=DEFAULT_MODEL,
        description="Model ID (e.g., openai/gpt-5-nano, anthropic/claude-sonnet-4.5)",
    )


class SandboxExecuteInput(ToolInput):
    code: str = Field(..., description="JavaScript code to execute")
    timeout: int = Field(default=DEFAULT_TIMEOUT_MS, gt=0, description="Timeout in milliseconds")


class ListModelsInput(ToolInput):
    pass


def describe_error(exc: PydanticValidationError) -> tuple[str, str | None]:
    """Return a readable message and the dotted name of the first bad field."""
    first = exc.errors()[0]
    field = ".".join(str(part) for part in first.get("loc", ())) or None
    if field:
        return f"Invalid input for '{field}': {first['msg']}", field
    return f"Invalid input: {first['msg']}", None


def validate(model: type[ModelT], raw: object) -> ModelT:
    try:
        return model.model_validate(raw if raw is not None else {})
    except PydanticValidationError as exc:
        message, field = describe_error(exc)
        raise ValidationError(message, field=field) from exc
