"""AWS Bedrock text-generation client with bounded retries and timeouts."""

import asyncio
import logging
import os
from typing import Dict, List, Optional, Any

import boto3
from botocore.config import Config as BotoConfig
from botocore.exceptions import ClientError
from dotenv import load_dotenv

from .errors import BedrockAPIError, ErrorType, ErrorContext

# Ensure environment variables are loaded
load_dotenv()

logger = logging.getLogger(__name__)


class BedrockClient:
    """
    Wrapper for the AWS Bedrock Runtime Converse API.

    Implements the text-generation protocol the prediction agents depend on:
    ``await client.generate_text(system_prompt, user_prompt, model_id,
    temperature, max_tokens)`` returning plain text. Any object exposing the
    same coroutine can stand in for it.
    """

    RETRYABLE_ERRORS = frozenset({
        "ThrottlingException",
        "TooManyRequestsException",
        "ServiceUnavailableException",
        "InternalServerException",
        "RequestTimeout",
        "RequestTimeoutException",
    })

    def __init__(
        self,
        region: str = "us-east-1",
        timeout: float = 10.0,
        max_retries: int = 1,
        runtime: Optional[Any] = None
    ):
        """
        Initialize Bedrock client.

        Args:
            region: AWS region for Bedrock service
            timeout: Time budget in seconds for one call, shared by all attempts
            max_retries: Total attempts per call (1 disables retrying)
            runtime: Optional pre-built bedrock-runtime client
        """
        self.region = region
        self.timeout = timeout
        self.max_retries = max(1, max_retries)
        # Attempts split the call budget evenly
        self.attempt_timeout = timeout / self.max_retries

        if runtime is not None:
            self.runtime = runtime
        else:
            config_kwargs: Dict[str, Any] = {
                "region_name": region,
                "connect_timeout": self.attempt_timeout,
                "read_timeout": self.attempt_timeout,
                "retries": {"max_attempts": 0},  # We handle retries manually
            }
            # Bedrock API keys use bearer auth instead of SigV4
            if os.getenv("AWS_BEARER_TOKEN_BEDROCK"):
                config_kwargs["signature_version"] = "bearer"
                logger.info("BedrockClient configured to use Amazon Bedrock API key authentication")
            else:
                logger.info("BedrockClient configured to use AWS IAM credentials (SigV4)")

            self.runtime = boto3.client("bedrock-runtime", config=BotoConfig(**config_kwargs))

        logger.info(
            f"Initialized BedrockClient: region={region}, "
            f"timeout={timeout}s, attempt_timeout={self.attempt_timeout:g}s, "
            f"max_retries={self.max_retries}"
        )

    @classmethod
    def from_config(cls, config) -> "BedrockClient":
        """Build a client from a loaded Config."""
        return cls(
            region=config.aws_region,
            timeout=config.bedrock.timeout,
            max_retries=config.bedrock.max_retries,
        )

    async def generate_text(
        self,
        system_prompt: str,
        user_prompt: str,
        model_id: str,
        temperature: float = 0.7,
        max_tokens: int = 500
    ) -> str:
        """
        Generate a completion for a single system + user prompt pair.

        Args:
            system_prompt: System instructions
            user_prompt: User message
            model_id: Bedrock model identifier
            temperature: Sampling temperature
            max_tokens: Maximum tokens to generate

        Returns:
            Concatenated text content of the reply (may be empty)

        Raises:
            BedrockAPIError: If every attempt fails
        """
        params = {
            "modelId": model_id,
            "messages": [{"role": "user", "content": [{"text": user_prompt}]}],
            "system": [{"text": system_prompt}],
            "inferenceConfig": {
                "temperature": temperature,
                "maxTokens": max_tokens
            }
        }

        for attempt in range(self.max_retries):
            try:
                logger.debug(
                    f"Invoking {model_id} (attempt {attempt + 1}/{self.max_retries})"
                )

                response = await asyncio.to_thread(self.runtime.converse, **params)

                logger.info(
                    f"Bedrock invocation successful: "
                    f"stop_reason={response.get('stopReason')}, "
                    f"usage={response.get('usage')}"
                )

                return self._extract_text(response)

            except ClientError as e:
                error_code = e.response.get("Error", {}).get("Code", "Unknown")
                error_message = e.response.get("Error", {}).get("Message", str(e))

                logger.warning(
                    f"Bedrock API error (attempt {attempt + 1}/{self.max_retries}): "
                    f"code={error_code}, message={error_message}"
                )

                if error_code in self.RETRYABLE_ERRORS and attempt < self.max_retries - 1:
                    # Exponential backoff: 1s, 2s, 4s, ...
                    wait_time = 2 ** attempt
                    logger.info(f"Retrying in {wait_time} seconds...")
                    await asyncio.sleep(wait_time)
                    continue

                raise BedrockAPIError.from_client_error(
                    error=e,
                    operation="generate_text",
                    recoverable=False,
                )

            except Exception as e:
                logger.error(f"Unexpected error invoking {model_id}: {str(e)}")
                raise BedrockAPIError(ErrorContext(
                    error_type=ErrorType.BEDROCK_SERVICE_ERROR,
                    message=f"Unexpected error invoking {model_id}: {str(e)}",
                    recoverable=False,
                    original_exception=e
                )) from e

        raise BedrockAPIError(ErrorContext(
            error_type=ErrorType.BEDROCK_SERVICE_ERROR,
            message=f"Failed to invoke {model_id} after {self.max_retries} attempts",
            recoverable=False
        ))

    @staticmethod
    def _extract_text(response: Dict[str, Any]) -> str:
        """
        Pull the text blocks out of a Converse API response.

        Args:
            response: Raw response from Converse API

        Returns:
            Text blocks joined by newlines, or "" if there are none
        """
        message = response.get("output", {}).get("message", {})
        text_parts: List[str] = []
        for content_block in message.get("content", []) or []:
            if isinstance(content_block, dict) and content_block.get("text"):
                text_parts.append(content_block["text"])
        return "\n".join(text_parts)
