"""
Routing configuration.
Limits applied to topics and patterns, and the index pruning policy.
"""

import os
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from topic_router.domain.topic import DEFAULT_MAX_SEGMENTS, DEFAULT_MAX_TOPIC_LENGTH

ENV_PREFIX = "TOPIC_ROUTER_"


class RoutingConfig(BaseModel):
    """
    Configuration for one routing deployment.

    Construct one per router and pass it by reference; there is no
    process-wide default instance.
    """

    model_config = ConfigDict(frozen=True)

    max_topic_length: int = Field(
        default=DEFAULT_MAX_TOPIC_LENGTH,
        ge=1,
        description="Maximum length of a topic or pattern in UTF-8 bytes",
    )
    max_segments: int = Field(
        default=DEFAULT_MAX_SEGMENTS,
        ge=1,
        description="Maximum number of dot-separated segments",
    )
    eager_pruning: bool = Field(
        default=True,
        description="Prune empty trie nodes on every removal instead of on compact()",
    )

    @classmethod
    def from_env(cls, environ: dict[str, str] | None = None) -> "RoutingConfig":
        """
        Build a config from defaults overridden by TOPIC_ROUTER_* variables.

        Args:
            environ: Mapping to read from. Defaults to os.environ.

        Returns:
            The resulting configuration.

        Raises:
            pydantic.ValidationError: If an override cannot be parsed or is out of range.
        """
        source = os.environ if environ is None else environ
        overrides: dict[str, Any] = {}
        for name in cls.model_fields:
            raw = source.get(f"{ENV_PREFIX}{name.upper()}")
            if raw is not None:
                overrides[name] = raw
        return cls.model_validate(overrides)
