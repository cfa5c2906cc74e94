"""Configuration base for the built-in tools.

Separates per-call parameters (the tool's params_schema) from
instance-level settings such as default headers or redirect policy.
"""

from __future__ import annotations

import copy
from typing import ClassVar, Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field

from curlcase.foundation.core import BaseTool

TConfig = TypeVar("TConfig", bound="ToolConfig")
TParams = TypeVar("TParams", bound=BaseModel)


class ToolConfig(BaseModel):
    """Base configuration for built-in tools.

    Example:
        >>> class EchoConfig(ToolConfig):
        ...     prefix: str = ""
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    enabled: bool = Field(default=True, description="Whether the tool is exposed by servers")


class ConfigurableTool(BaseTool[TParams], Generic[TParams, TConfig]):
    """Tool whose behaviour is tuned by a ToolConfig instance.

    Example:
        >>> tool = CurlTool(CurlConfig(follow_redirects=False))
        >>> tool.with_config(verify_ssl=False).config.verify_ssl
        False
    """

    config_class: ClassVar[type[ToolConfig]]

    def __init__(self, config: TConfig | None = None) -> None:
        self._config: TConfig = config or self.config_class()  # type: ignore[assignment]

    @property
    def config(self) -> TConfig:
        return self._config

    @property
    def enabled(self) -> bool:
        return self.metadata.enabled and self._config.enabled

    def _updated(self, updates: dict[str, object]) -> TConfig:
        return self.config_class(**{**self._config.model_dump(), **updates})  # type: ignore[return-value]

    def configure(self, **updates: object) -> None:
        """Replace the configuration in place. Updates are validated."""
        self._config = self._updated(updates)

    def with_config(self, **updates: object) -> ConfigurableTool[TParams, TConfig]:
        """Copy of this tool with an updated configuration; collaborators are shared."""
        clone = copy.copy(self)
        clone._config = self._updated(updates)
        return clone
