"""Self-verifying codes: checksum-carrying and steerable pattern codes."""

from idforge.codes.steerable import SteerableCodec
from idforge.codes.verifiable import VerifiableCodec

__all__ = [
    "VerifiableCodec",
    "SteerableCodec",
]
