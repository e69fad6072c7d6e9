"""Base class for structured insight generation.

Every generator sends one JSON aggregate to Claude and forces a single tool
call whose input schema is the output model's JSON schema. Generation never
fails from the caller's point of view: any problem is logged and the
generator's static fallback is returned instead.
"""

import logging
from abc import ABC, abstractmethod
from typing import Any, Generic, TypeVar, cast

import anthropic
from pydantic import BaseModel, ValidationError

from codeinsight.config import settings

logger = logging.getLogger(__name__)

TInput = TypeVar("TInput", bound=BaseModel)
TOutput = TypeVar("TOutput", bound=BaseModel)

INSIGHTS_MODEL = "claude-sonnet-4-20250514"


class BaseInsightGenerator(ABC, Generic[TInput, TOutput]):
    """Abstract base for all insight generators.

    Subclasses define the output model, the tool name and the prompt; the
    base handles the LLM call, tool-use parsing and fallback.
    """

    model: str = INSIGHTS_MODEL
    max_tokens: int = 2000

    # Override in subclasses
    output_model: type[TOutput]
    tool_name: str
    tool_description: str

    def __init__(self, api_key: str | None = None):
        self.api_key = api_key if api_key is not None else settings.anthropic_api_key
        self._client: anthropic.AsyncAnthropic | None = None

    @property
    def client(self) -> anthropic.AsyncAnthropic:
        if self._client is None:
            self._client = anthropic.AsyncAnthropic(api_key=self.api_key)
        return self._client

    @abstractmethod
    def build_prompt(self, data_json: str) -> str:
        """Return the user prompt for the serialized aggregate."""
        ...

    @abstractmethod
    def fallback(self) -> TOutput:
        """Static result used whenever generation fails."""
        ...

    def tool_schema(self) -> dict[str, Any]:
        return {
            "name": self.tool_name,
            "description": self.tool_description,
            "input_schema": self.output_model.model_json_schema(by_alias=True),
        }

    async def generate(self, data: TInput) -> TOutput:
        """Generate insights for an aggregate, or the fallback on any failure."""
        name = type(self).__name__
        if not self.api_key:
            logger.info(f"{name}: no Anthropic API key configured, using fallback")
            return self.fallback()

        prompt = self.build_prompt(data.model_dump_json(indent=2))

        try:
            response = await self.client.messages.create(
                model=self.model,
                max_tokens=self.max_tokens,
                tools=cast(Any, [self.tool_schema()]),
                tool_choice=cast(Any, {"type": "tool", "name": self.tool_name}),
                messages=[{"role": "user", "content": prompt}],
            )
        except anthropic.AnthropicError as e:
            logger.error(f"{name}: generation failed, using fallback: {e}")
            return self.fallback()

        return self._parse_response(response)

    def _parse_response(self, response: anthropic.types.Message) -> TOutput:
        name = type(self).__name__
        tool_use_block = None
        for block in response.content:
            if block.type == "tool_use" and block.name == self.tool_name:
                tool_use_block = block
                break

        if not tool_use_block:
            logger.warning(f"{name}: Claude did not return a {self.tool_name} tool use")
            return self.fallback()

        try:
            return self.output_model.model_validate(tool_use_block.input)
        except ValidationError as e:
            logger.warning(f"{name}: tool input failed validation, using fallback: {e}")
            return self.fallback()
