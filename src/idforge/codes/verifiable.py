"""Verifiable serial codes (redeem codes, vouchers, activation keys).

Packed layout of the integer behind a code, most significant first:

    [activity id][random data][checksum]

    total bits    = bits_per_symbol * code_length   (must stay <= 63)
    random bits   = total bits - id bits - check bits
    checksum      = (packed >> check_bits) % (2 ** check_bits - 1)

More random bits mean fewer collisions; more check bits mean codes are
harder to guess. When an activity id is embedded, one extra symbol encoding
the id's bit length is written in front, so the code is one symbol longer
than requested.

A large activity id squeezes the random field. If the random space drops
below `min_random_range`, the code silently grows one symbol at a time until
it fits again, so create() may return codes longer than asked for. Use
effective_length() to know in advance.

The checksum is a structural self-check against typos and blind guessing,
not a MAC.

Usage:
    codec = VerifiableCodec()
    code = codec.create(activity_id=42, code_length=9)
    codec.verify(code, has_id_prefix=True)   # True
    codec.get_activity_id(code)              # 42
    batch = codec.generate_batch(issued, count=1000, code_length=9, activity_id=42)
"""

from __future__ import annotations

import logging
import random
from collections.abc import Collection
from typing import TYPE_CHECKING

from idforge.core.alphabet import (
    BASE32_VERIFIABLE,
    MAX_BITS,
    Alphabet,
    decode_fixed,
    encode_fixed,
)
from idforge.core.errors import ConfigurationError

if TYPE_CHECKING:
    from idforge.config import VerifiableSettings

logger = logging.getLogger(__name__)

DEFAULT_CHECK_BITS = 3
DEFAULT_MIN_RANDOM_RANGE = 0x1FFFFFF
"""About 33.5M random values per (activity, length)."""


class VerifiableCodec:
    """Creates and checks codes that carry an activity id and a checksum.

    Args:
        alphabet: Power-of-two symbol table.
        check_bits: Width of the checksum field (>= 2).
        min_random_range: Smallest acceptable number of distinct random values.
        rng: Random source; a private random.SystemRandom by default. Must be
            thread-safe if the codec is shared between threads.

    Raises:
        ConfigurationError: Non-power-of-two alphabet or invalid field sizes.
    """

    def __init__(
        self,
        alphabet: Alphabet = BASE32_VERIFIABLE,
        *,
        check_bits: int = DEFAULT_CHECK_BITS,
        min_random_range: int = DEFAULT_MIN_RANDOM_RANGE,
        rng: random.Random | None = None,
    ):
        if not alphabet.is_power_of_two:
            raise ConfigurationError(
                f"VerifiableCodec requires a power-of-two radix, got {alphabet.radix}"
            )
        if check_bits < 2:
            raise ConfigurationError(f"check_bits must be >= 2, got {check_bits}")
        if min_random_range < 1:
            raise ConfigurationError(f"min_random_range must be >= 1, got {min_random_range}")
        self._alphabet = alphabet
        self._bits = alphabet.bits_per_symbol
        self._check_bits = check_bits
        self._check_mod = (1 << check_bits) - 1
        self._min_random_range = min_random_range
        self._rng = rng if rng is not None else random.SystemRandom()

    @classmethod
    def from_settings(
        cls, settings: VerifiableSettings, rng: random.Random | None = None
    ) -> VerifiableCodec:
        return cls(
            Alphabet(settings.alphabet),
            check_bits=settings.check_bits,
            min_random_range=settings.min_random_range,
            rng=rng,
        )

    @property
    def alphabet(self) -> Alphabet:
        return self._alphabet

    @property
    def check_bits(self) -> int:
        return self._check_bits

    def effective_length(self, activity_id: int, code_length: int) -> int:
        """Number of data symbols create() will use (excluding the id flag).

        Raises:
            ConfigurationError: If no length within 63 bits leaves enough random space,
                or the id's bit length cannot be written as one flag symbol.
        """
        if code_length < 1:
            raise ConfigurationError(f"code_length must be >= 1, got {code_length}")
        id_bits = self._id_bits(activity_id)

        length = code_length
        while True:
            total_bits = self._bits * length
            if total_bits > MAX_BITS:
                raise ConfigurationError(
                    f"Code length {length} needs {total_bits} bits, more than {MAX_BITS}. "
                    f"Use a shorter code, a smaller activity id or a lower min_random_range"
                )
            random_bits = total_bits - id_bits - self._check_bits
            if random_bits >= 0 and 1 << random_bits >= self._min_random_range:
                return length
            length += 1

    def random_bits(self, activity_id: int, code_length: int) -> int:
        """Width of the random field in codes produced by create()."""
        length = self.effective_length(activity_id, code_length)
        return self._bits * length - self._id_bits(activity_id) - self._check_bits

    def create(self, activity_id: int, code_length: int) -> str:
        """Create one code.

        Args:
            activity_id: Id to embed; values <= 0 embed nothing and add no flag.
            code_length: Requested number of data symbols (may grow, see module doc).

        Returns:
            Flag symbol (only when activity_id > 0) followed by the data symbols.
        """
        length = self.effective_length(activity_id, code_length)
        if length != code_length:
            logger.debug(
                "Activity id %d leaves too little random space at length %d, using %d",
                activity_id,
                code_length,
                length,
            )
        total_bits = self._bits * length
        id_bits = self._id_bits(activity_id)

        packed = 0
        flag = ""
        if id_bits:
            packed = activity_id << (total_bits - id_bits)
            flag = self._alphabet[id_bits]

        random_bits = total_bits - id_bits - self._check_bits
        packed |= self._rng.getrandbits(random_bits) << self._check_bits
        packed |= (packed >> self._check_bits) % self._check_mod

        return flag + encode_fixed(packed, self._alphabet, length)

    def verify(self, code: str, has_id_prefix: bool) -> bool:
        """Check a code's checksum.

        Args:
            code: Code to check.
            has_id_prefix: Whether the code starts with an id-length flag
                (true for codes created with activity_id > 0).
        """
        packed = self._decode(code, has_id_prefix)
        return packed is not None and self._checksum_ok(packed)

    def get_activity_id(self, code: str) -> int | None:
        """Activity id embedded in a flagged code, or None if the code does not verify."""
        packed = self._decode(code, True)
        if packed is None or not self._checksum_ok(packed):
            return None
        id_bits = self._alphabet.index(code[0])
        if id_bits is None:
            return None
        random_bits = self._bits * (len(code) - 1) - id_bits - self._check_bits
        if random_bits < 0:
            return None
        return packed >> (random_bits + self._check_bits)

    def generate_batch(
        self,
        existing_codes: Collection[str] | None,
        count: int,
        code_length: int,
        activity_id: int = 0,
    ) -> set[str]:
        """Create `count` distinct codes absent from existing_codes.

        Loops until enough unique codes are found. Termination is only
        probabilistic: keep count far below 2 ** random_bits(activity_id, code_length)
        or this will spin for a very long time.

        Args:
            existing_codes: Codes issued earlier (caller-owned; never modified).
            count: Number of new codes wanted.
            code_length: Requested data length per code.
            activity_id: Id to embed in every code.
        """
        if count < 0:
            raise ValueError(f"count must be >= 0, got {count}")
        history: Collection[str] = existing_codes if existing_codes is not None else ()
        generated: set[str] = set()
        collisions = 0
        while len(generated) < count:
            code = self.create(activity_id, code_length)
            if code in generated or code in history:
                collisions += 1
                continue
            generated.add(code)
        if collisions:
            logger.debug("Generated %d codes with %d collisions", count, collisions)
        return generated

    def _id_bits(self, activity_id: int) -> int:
        if activity_id <= 0:
            return 0
        id_bits = activity_id.bit_length()
        if id_bits >= self._alphabet.radix:
            raise ConfigurationError(
                f"Activity id {activity_id} has {id_bits} bits; "
                f"the flag symbol can describe at most {self._alphabet.radix - 1}"
            )
        return id_bits

    def _decode(self, code: str, has_id_prefix: bool) -> int | None:
        if has_id_prefix:
            if not code or code[0] not in self._alphabet:
                return None
            code = code[1:]
        if not code:
            return None
        return decode_fixed(code, self._alphabet)

    def _checksum_ok(self, packed: int) -> bool:
        data = packed >> self._check_bits
        checksum = packed & self._check_mod
        return data % self._check_mod == checksum
