"""
Configuration Schemas.

Pydantic models for the YAML files in config/settings/. AppConfig
validates each file at load time, so a missing key, a wrong type or an
unknown field fails at startup with the file named in the error.

    ApplicationSchema  → application.yaml
    DatabaseSchema     → database.yaml
    LoggingSchema      → logging.yaml
"""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class _StrictBase(BaseModel):
    """Base with extra='forbid' so unknown YAML keys are caught immediately."""

    model_config = ConfigDict(extra="forbid")


# =============================================================================
# application.yaml
# =============================================================================


class ImagesSchema(_StrictBase):
    """How attachments are rendered on this platform."""

    # Set where filesystem paths do not survive between sessions.
    prefer_inline_bytes: bool = False


class ApplicationSchema(_StrictBase):
    name: str
    version: str
    description: str
    environment: str
    debug: bool
    images: ImagesSchema = Field(default_factory=ImagesSchema)


# =============================================================================
# database.yaml
# =============================================================================


class DatabaseSchema(_StrictBase):
    """SQLite file location, relative to the project root, or :memory:."""

    path: str = Field(min_length=1)
    echo: bool = False


# =============================================================================
# logging.yaml
# =============================================================================


class ConsoleHandlerSchema(_StrictBase):
    enabled: bool


class FileHandlerSchema(_StrictBase):
    enabled: bool
    path: str = Field(min_length=1)
    max_bytes: int = Field(gt=0)
    backup_count: int = Field(ge=0)


class HandlersSchema(_StrictBase):
    console: ConsoleHandlerSchema
    file: FileHandlerSchema


class LoggingSchema(_StrictBase):
    level: LogLevel
    format: Literal["json", "console"]
    handlers: HandlersSchema

    @field_validator("level", mode="before")
    @classmethod
    def _upper_level(cls, value: object) -> object:
        return value.upper() if isinstance(value, str) else value
