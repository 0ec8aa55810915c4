"""Tests for the settings classes.

Focus: environment loading, validation, and wiring into from_settings().
"""

import pytest
from pydantic import ValidationError

from idforge import ManualClock, SnowflakeGenerator, SteerableCodec, VerifiableCodec
from idforge.config import SnowflakeSettings, SteerableSettings, VerifiableSettings


def test_snowflake_settings_from_environment(monkeypatch):
    """Why: deployments assign machine ids through env vars."""
    monkeypatch.setenv("SNOWFLAKE_PARTITION_ID", "2")
    monkeypatch.setenv("SNOWFLAKE_MACHINE_ID", "9")
    monkeypatch.setenv("SNOWFLAKE_MACHINE_BITS", "5")

    settings = SnowflakeSettings()
    assert (settings.partition_id, settings.machine_id, settings.machine_bits) == (2, 9, 5)


def test_snowflake_settings_build_generator():
    settings = SnowflakeSettings(partition_id=1, machine_id=12, wait_timeout=0.5)
    clock = ManualClock(1_700_000_000_000)
    generator = SnowflakeGenerator.from_settings(settings, clock=clock)

    parts = generator.decompose(generator.next_id())
    assert (parts.partition, parts.machine) == (1, 12)
    assert parts.timestamp == clock.now


def test_snowflake_settings_reject_negative_ids():
    with pytest.raises(ValidationError):
        SnowflakeSettings(machine_id=-1)


def test_verifiable_settings_build_codec():
    codec = VerifiableCodec.from_settings(VerifiableSettings(check_bits=4))
    assert codec.check_bits == 4
    code = codec.create(5, 8)
    assert codec.get_activity_id(code) == 5


def test_verifiable_settings_reject_non_power_of_two_alphabet():
    with pytest.raises(ValidationError):
        VerifiableSettings(alphabet="ABC")


def test_verifiable_settings_reject_duplicate_symbols():
    with pytest.raises(ValidationError):
        VerifiableSettings(alphabet="AABC")


def test_steerable_settings_from_environment(monkeypatch):
    monkeypatch.setenv("STEERABLE_NUM_DIGITS", "2")
    monkeypatch.setenv("STEERABLE_CODE_LENGTH", "8")

    codec = SteerableCodec.from_settings(SteerableSettings())
    assert (codec.num_digits, codec.code_length) == (2, 8)
    assert codec.verify(codec.get_code())


def test_steerable_settings_reject_empty_alphabet():
    with pytest.raises(ValidationError):
        SteerableSettings(letters="")
