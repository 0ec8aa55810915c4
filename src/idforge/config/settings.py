"""Configuration settings using Pydantic Settings.

Provides typed configuration with environment variable support for
generators and codecs.

Usage:
    from idforge.config import SnowflakeSettings, VerifiableSettings

    # Load from environment variables (SNOWFLAKE_*, VERIFIABLE_*, STEERABLE_*)
    snowflake_settings = SnowflakeSettings()
    generator = SnowflakeGenerator.from_settings(snowflake_settings)

    # Or override with explicit values
    snowflake_settings = SnowflakeSettings(machine_id=7)
"""

from __future__ import annotations

try:
    from pydantic import Field, field_validator
    from pydantic_settings import BaseSettings, SettingsConfigDict
except ImportError as e:
    raise ImportError(
        "pydantic-settings is required for config module. "
        "Install with: pip install idforge[config]"
    ) from e

from idforge.core.alphabet import BASE32_VERIFIABLE, DIGITS_2_9, LETTERS_48, Alphabet
from idforge.generation.snowflake import (
    DEFAULT_EPOCH,
    DEFAULT_FIELD_BITS,
    DEFAULT_SEQUENCE_CEILING,
    DEFAULT_SEQUENCE_FLOOR,
)


def _check_alphabet(value: str) -> str:
    # ConfigurationError is a ValueError, so pydantic reports it as a validation error
    Alphabet(value)
    return value


class SnowflakeSettings(BaseSettings):  # type: ignore[misc]
    """Configuration for SnowflakeGenerator.

    Attributes:
        partition_id: Partition (data center) id; None disables the field.
        machine_id: Machine id; None disables the field.
        partition_bits: Width of the partition field.
        machine_bits: Width of the machine field.
        epoch: Reference time in Unix milliseconds.
        sequence_ceiling: Largest sequence width.
        sequence_floor: Smallest acceptable sequence width.
        wait_timeout: Seconds to wait for the clock on sequence exhaustion (None = forever).
        min_id: Floor for generated ids.

    Environment Variables:
        SNOWFLAKE_PARTITION_ID
        SNOWFLAKE_MACHINE_ID
        SNOWFLAKE_PARTITION_BITS
        SNOWFLAKE_MACHINE_BITS
        SNOWFLAKE_EPOCH
        SNOWFLAKE_SEQUENCE_CEILING
        SNOWFLAKE_SEQUENCE_FLOOR
        SNOWFLAKE_WAIT_TIMEOUT
        SNOWFLAKE_MIN_ID
    """

    model_config = SettingsConfigDict(
        env_prefix="SNOWFLAKE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    partition_id: int | None = Field(default=0, ge=0)
    machine_id: int | None = Field(default=0, ge=0)
    partition_bits: int = Field(default=DEFAULT_FIELD_BITS, ge=0)
    machine_bits: int = Field(default=DEFAULT_FIELD_BITS, ge=0)
    epoch: int = Field(default=DEFAULT_EPOCH, ge=0)
    sequence_ceiling: int = Field(default=DEFAULT_SEQUENCE_CEILING, ge=1)
    sequence_floor: int = Field(default=DEFAULT_SEQUENCE_FLOOR, ge=0)
    wait_timeout: float | None = Field(default=None, ge=0)
    min_id: int = Field(default=0, ge=0)


class VerifiableSettings(BaseSettings):  # type: ignore[misc]
    """Configuration for VerifiableCodec.

    Attributes:
        alphabet: Power-of-two symbol table.
        check_bits: Width of the checksum field.
        min_random_range: Smallest acceptable random space per code.

    Environment Variables:
        VERIFIABLE_ALPHABET
        VERIFIABLE_CHECK_BITS
        VERIFIABLE_MIN_RANDOM_RANGE
    """

    model_config = SettingsConfigDict(
        env_prefix="VERIFIABLE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    alphabet: str = BASE32_VERIFIABLE.symbols
    check_bits: int = Field(default=3, ge=2)
    min_random_range: int = Field(default=0x1FFFFFF, ge=1)

    @field_validator("alphabet")
    @classmethod
    def validate_alphabet(cls, v: str) -> str:
        if not Alphabet(_check_alphabet(v)).is_power_of_two:
            raise ValueError(f"alphabet length must be a power of two, got {len(v)}")
        return v


class SteerableSettings(BaseSettings):  # type: ignore[misc]
    """Configuration for SteerableCodec.

    Attributes:
        num_digits: Digits per code.
        code_length: Symbols per code.
        digits: Digit alphabet.
        letters: Letter alphabet.

    Environment Variables:
        STEERABLE_NUM_DIGITS
        STEERABLE_CODE_LENGTH
        STEERABLE_DIGITS
        STEERABLE_LETTERS
    """

    model_config = SettingsConfigDict(
        env_prefix="STEERABLE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    num_digits: int = Field(default=4, ge=0)
    code_length: int = Field(default=10, ge=1)
    digits: str = DIGITS_2_9.symbols
    letters: str = LETTERS_48.symbols

    @field_validator("digits", "letters")
    @classmethod
    def validate_symbols(cls, v: str) -> str:
        return _check_alphabet(v)
