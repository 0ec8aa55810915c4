"""Configuration module using Pydantic Settings.

Provides typed configuration for generators and codecs with environment
variable support.

Usage:
    from idforge.config import SnowflakeSettings, SteerableSettings

    settings = SnowflakeSettings(machine_id=3)
    steerable = SteerableSettings(num_digits=2)
"""

from idforge.config.settings import SnowflakeSettings, SteerableSettings, VerifiableSettings

__all__ = [
    "SnowflakeSettings",
    "VerifiableSettings",
    "SteerableSettings",
]
