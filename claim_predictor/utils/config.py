"""Configuration management for the claim lifecycle predictor."""

import os
import yaml
from dataclasses import dataclass, field
from typing import Any, Dict

from dotenv import load_dotenv

from .errors import ConfigurationError

load_dotenv()


CARRIER_BEHAVIOR_INSTRUCTIONS = (
    "You are an expert insurance claims analyst. "
    "Provide tactical predictions about carrier behavior."
)

SUMMARY_INSTRUCTIONS = "You are a claims prediction expert. Be concise."


@dataclass
class BedrockConfig:
    """AWS Bedrock client configuration."""
    timeout: float = 10.0
    max_retries: int = 1


@dataclass
class AgentConfig:
    """Model settings for one text-generation role."""
    name: str
    model_id: str
    temperature: float
    max_tokens: int
    instructions: str


@dataclass
class LoggingConfig:
    """Logging configuration."""
    level: str = "INFO"
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    file: str = ""


def _default_carrier_behavior() -> AgentConfig:
    return AgentConfig(
        name="carrier-behavior",
        model_id="amazon.nova-pro-v1:0",
        temperature=0.7,
        max_tokens=500,
        instructions=CARRIER_BEHAVIOR_INSTRUCTIONS,
    )


def _default_summary() -> AgentConfig:
    return AgentConfig(
        name="claim-summary",
        model_id="amazon.nova-lite-v1:0",
        temperature=0.7,
        max_tokens=200,
        instructions=SUMMARY_INSTRUCTIONS,
    )


def _section(data: Dict[str, Any], key: str, path: str) -> Dict[str, Any]:
    section = data.get(key) or {}
    if not isinstance(section, dict):
        raise ValueError(f"{path} must be a mapping, got {type(section).__name__}")
    return section


@dataclass
class Config:
    """Main configuration class."""
    aws_region: str = "us-east-1"
    bedrock: BedrockConfig = field(default_factory=BedrockConfig)
    carrier_behavior: AgentConfig = field(default_factory=_default_carrier_behavior)
    summary: AgentConfig = field(default_factory=_default_summary)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    @classmethod
    def default(cls) -> "Config":
        """Built-in configuration, used when no config file is supplied."""
        return cls()

    @classmethod
    def load(cls, config_path: str = "config.yaml") -> "Config":
        """
        Load configuration from file and environment variables.

        Environment variables override config file values:
        - AWS_REGION
        - CARRIER_BEHAVIOR_MODEL_ID
        - SUMMARY_MODEL_ID
        - GENERATION_TIMEOUT
        - LOG_LEVEL

        Sections missing from the file fall back to the built-in defaults.

        Args:
            config_path: Path to YAML configuration file

        Returns:
            Config instance with loaded settings

        Raises:
            ConfigurationError: If the file is missing or malformed
        """
        if not os.path.exists(config_path):
            raise ConfigurationError.missing(config_path)

        try:
            with open(config_path, 'r') as f:
                config_data = yaml.safe_load(f) or {}
            if not isinstance(config_data, dict):
                raise ValueError("top-level YAML value must be a mapping")
            return cls._from_mapping(config_data)
        except (yaml.YAMLError, ValueError, TypeError, KeyError) as e:
            raise ConfigurationError.invalid(config_path, e) from e

    @classmethod
    def _from_mapping(cls, config_data: Dict[str, Any]) -> "Config":
        defaults = cls.default()

        aws = _section(config_data, "aws", "aws")
        aws_region = os.getenv("AWS_REGION", aws.get("region", defaults.aws_region))

        # Bedrock client configuration
        bedrock_data = _section(aws, "bedrock", "aws.bedrock")
        bedrock_config = BedrockConfig(
            timeout=float(os.getenv(
                "GENERATION_TIMEOUT",
                bedrock_data.get("timeout", defaults.bedrock.timeout)
            )),
            max_retries=int(bedrock_data.get("max_retries", defaults.bedrock.max_retries))
        )
        if bedrock_config.timeout <= 0:
            raise ValueError("aws.bedrock.timeout must be positive")
        if bedrock_config.max_retries < 1:
            raise ValueError("aws.bedrock.max_retries must be at least 1")

        # Agent configurations
        agents = _section(config_data, "agents", "agents")
        carrier_config = cls._agent_from_mapping(
            _section(agents, "carrier_behavior", "agents.carrier_behavior"),
            defaults.carrier_behavior,
            model_env="CARRIER_BEHAVIOR_MODEL_ID",
        )
        summary_config = cls._agent_from_mapping(
            _section(agents, "summary", "agents.summary"),
            defaults.summary,
            model_env="SUMMARY_MODEL_ID",
        )

        # Logging configuration
        log_data = _section(config_data, "logging", "logging")
        logging_config = LoggingConfig(
            level=os.getenv("LOG_LEVEL", log_data.get("level", defaults.logging.level)),
            format=log_data.get("format", defaults.logging.format),
            file=log_data.get("file", defaults.logging.file) or ""
        )

        return cls(
            aws_region=aws_region,
            bedrock=bedrock_config,
            carrier_behavior=carrier_config,
            summary=summary_config,
            logging=logging_config,
        )

    @staticmethod
    def _agent_from_mapping(
        data: Dict[str, Any],
        default: AgentConfig,
        model_env: str
    ) -> AgentConfig:
        return AgentConfig(
            name=data.get("name", default.name),
            model_id=os.getenv(model_env, data.get("model_id", default.model_id)),
            temperature=float(data.get("temperature", default.temperature)),
            max_tokens=int(data.get("max_tokens", default.max_tokens)),
            instructions=data.get("instructions", default.instructions),
        )
