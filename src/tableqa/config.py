"""
Configuration settings for tableqa.

All settings are loaded from environment variables with sensible defaults.
Use a .env file for local development. Only the command-line entry point
reads settings; the table builder and connectors take everything as
explicit arguments.
"""

from pydantic import AliasChoices, Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict

from tableqa.models.enums import DuplicateHeaderPolicy, InferenceTask, RaggedRowPolicy
from tableqa.models.table import TableOptions


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # === Application ===
    APP_NAME: str = "tableqa"
    LOG_LEVEL: str = "WARNING"
    ENVIRONMENT: str = "development"

    # === Inference Backend ===
    INFERENCE_ENDPOINT: str = (
        "https://api-inference.huggingface.co/models/google/tapas-base-finetuned-wtq"
    )
    INFERENCE_TOKEN: SecretStr = Field(
        default=SecretStr(""),
        validation_alias=AliasChoices("INFERENCE_TOKEN", "HUGGINGFACE_TOKEN"),
    )
    INFERENCE_TIMEOUT: float = Field(default=30.0, gt=0)  # seconds
    INFERENCE_TASK: InferenceTask = InferenceTask.TABLE_QUESTION_ANSWERING

    # === CSV Handling ===
    RAGGED_ROW_POLICY: RaggedRowPolicy = RaggedRowPolicy.PAD
    DUPLICATE_HEADER_POLICY: DuplicateHeaderPolicy = DuplicateHeaderPolicy.LAST_WINS
    CSV_FILL_VALUE: str = ""

    def table_options(self) -> TableOptions:
        """TableOptions built from the CSV handling settings."""
        return TableOptions(
            ragged_rows=self.RAGGED_ROW_POLICY,
            duplicate_headers=self.DUPLICATE_HEADER_POLICY,
            fill_value=self.CSV_FILL_VALUE,
        )


# Global settings instance
settings = Settings()
