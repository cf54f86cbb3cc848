"""Base agent class for the LLM-backed prediction helpers."""

import asyncio
import logging
from abc import ABC, abstractmethod
from typing import Any, Optional, Protocol

from ..utils.config import AgentConfig
from ..utils.errors import (
    ClaimsPredictionError,
    ErrorContext,
    ErrorType,
    GenerationTimeoutError,
    handle_generation_error,
)

logger = logging.getLogger(__name__)


class TextGenerationClient(Protocol):
    """Anything that can turn a system + user prompt into text."""

    async def generate_text(
        self,
        system_prompt: str,
        user_prompt: str,
        model_id: str,
        temperature: float = 0.7,
        max_tokens: int = 500
    ) -> str:
        ...


class BasePredictionAgent(ABC):
    """
    Base class for prediction agents backed by a text-generation service.

    Subclasses build a prompt, parse the reply and define a deterministic
    fallback. ``invoke`` never raises: every failure of the external call
    (error, timeout, empty or unusable reply) yields the fallback.

    Attributes:
        client: Text-generation client the agent calls
        config: Model settings and system instructions for this role
        timeout: Upper bound in seconds on a single call
    """

    def __init__(
        self,
        client: TextGenerationClient,
        config: AgentConfig,
        timeout: float = 10.0,
    ):
        self.client = client
        self.config = config
        self.timeout = timeout

        logger.info(
            f"Initialized {self.__class__.__name__}: {config.name} "
            f"(model={config.model_id}, timeout={timeout}s)"
        )

    @property
    def name(self) -> str:
        return self.config.name

    @abstractmethod
    def build_prompt(self, *args: Any) -> str:
        """Build the user prompt for this agent."""

    @abstractmethod
    def parse_response(self, response_text: str, *args: Any) -> Any:
        """Turn reply text into a result; raise ValueError if unusable."""

    @abstractmethod
    def fallback(self, *args: Any) -> Any:
        """Deterministic result used whenever generation fails."""

    async def get_response(self, user_message: str) -> str:
        """
        Call the text-generation service with this agent's settings.

        Raises:
            GenerationTimeoutError: If the call exceeds ``timeout``
            ClaimsPredictionError: If the reply is empty
        """
        try:
            response_text = await asyncio.wait_for(
                self.client.generate_text(
                    system_prompt=self.config.instructions,
                    user_prompt=user_message,
                    model_id=self.config.model_id,
                    temperature=self.config.temperature,
                    max_tokens=self.config.max_tokens,
                ),
                timeout=self.timeout,
            )
        except asyncio.TimeoutError as e:
            raise GenerationTimeoutError.exceeded(self.name, self.timeout) from e

        if not isinstance(response_text, str) or not response_text.strip():
            raise ClaimsPredictionError(ErrorContext(
                error_type=ErrorType.GENERATION_EMPTY_RESPONSE,
                message=f"{self.name} returned an empty response",
                recoverable=True,
            ))

        logger.debug(f"{self.name} generated response: {response_text[:100]}...")
        return response_text

    async def invoke(self, *args: Any) -> Any:
        """
        Generate, parse and return the agent's result, or its fallback.

        Args:
            *args: Passed to build_prompt, parse_response and fallback
        """
        try:
            response_text = await self.get_response(self.build_prompt(*args))
            return self.parse_response(response_text, *args)
        except Exception as e:
            handle_generation_error(
                error=e,
                operation=self.name,
                logger=logger,
                fallback_action=f"Use default {self.name} output",
            )
            return self.fallback(*args)

    def __str__(self) -> str:
        return f"{self.__class__.__name__}(name={self.name})"

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(name={self.name}, model={self.config.model_id})"
