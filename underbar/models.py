"""Models for underbar configuration and operation metrics."""

import logging
from typing import Literal, Optional
from pydantic import BaseModel, Field, field_validator


class UnderbarSettings(BaseModel):
    """Runtime knobs for logging and the delay scheduler."""
    log_level: str = Field(
        default="WARNING",
        description="Level applied to the 'underbar' logger"
    )
    delay_backend: Literal["thread", "asyncio"] = Field(
        default="thread",
        description="Scheduler used by delay() when none is passed"
    )
    timer_daemon: bool = Field(
        default=True,
        description="Run thread timers as daemons so they never block exit"
    )

    @field_validator('log_level')
    @classmethod
    def validate_log_level(cls, v):
        """Normalize and check against the standard level names."""
        level = str(v).strip().upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"Unknown log level: {v}")
        return level


class OperationMetrics(BaseModel):
    """Timing and memory for a single measured call."""
    operation: str = Field(..., description="Name of the measured operation")
    execution_time_ms: float = Field(..., ge=0, description="Wall time in milliseconds")
    memory_usage_mb: float = Field(..., ge=0, description="Peak traced memory in MB")
    success: bool = Field(..., description="Whether the call returned normally")
    result_size: Optional[int] = Field(None, description="len() of the result when it has one")
    error: Optional[str] = Field(None, description="Error message if the call raised")
