"""Truncated hash oracle: the map x -> H(x) over the domain [0, 2**k)."""

import hashlib
from dataclasses import dataclass, field

from hash_graph_analyzer.errors import InvalidConfiguration
from hash_graph_analyzer.graph.types import DigestFunction

DEFAULT_DIGEST = "md5"

# Width of the encoded input for domains up to 64 bits.
INPUT_WIDTH = 8


def digest_bits(digest_name: str) -> int:
    """Return the native output size in bits of a hashlib algorithm."""
    try:
        size = hashlib.new(digest_name).digest_size
    except (ValueError, TypeError) as exc:
        raise InvalidConfiguration(f"unknown digest algorithm: {digest_name!r}") from exc

    if size <= 0:
        raise InvalidConfiguration(
            f"digest {digest_name!r} has no fixed output size and cannot be truncated"
        )
    return size * 8


def validate_bits(bits: int, max_bits: int) -> None:
    """Reject bit widths the truncation cannot honour; never clamp."""
    if isinstance(bits, bool) or not isinstance(bits, int):
        raise InvalidConfiguration(f"bits must be an integer, got {bits!r}")
    if bits <= 0:
        raise InvalidConfiguration(f"bits must be positive, got {bits}")
    if bits % 8 != 0:
        raise InvalidConfiguration(f"bits must be a multiple of 8, got {bits}")
    if bits > max_bits:
        raise InvalidConfiguration(
            f"bits={bits} exceeds the digest output size of {max_bits} bits"
        )


@dataclass(frozen=True)
class TruncatedHashOracle:
    """
    Deterministic map from a domain integer to a domain integer.

    The input is encoded big-endian on a fixed width, hashed, and the
    least-significant ``bits // 8`` bytes of the digest are read back as an
    unsigned big-endian integer.

    Instances only hold configuration, so they pickle cleanly for worker
    processes as long as the injected ``digest`` (if any) is picklable.
    """

    bits: int
    digest_name: str = DEFAULT_DIGEST
    digest: DigestFunction | None = None
    digest_size_bits: int | None = None
    _num_bytes: int = field(init=False, repr=False, compare=False)
    _input_width: int = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        if self.digest is None:
            native_bits = digest_bits(self.digest_name)
        elif self.digest_size_bits is None:
            raise InvalidConfiguration("a custom digest requires digest_size_bits")
        else:
            native_bits = self.digest_size_bits

        validate_bits(self.bits, native_bits)
        object.__setattr__(self, "digest_size_bits", native_bits)
        object.__setattr__(self, "_num_bytes", self.bits // 8)
        object.__setattr__(self, "_input_width", max(INPUT_WIDTH, self.bits // 8))

        if self.digest is not None:
            produced = len(self.raw_digest(bytes(self._input_width)))
            if produced * 8 != native_bits:
                raise InvalidConfiguration(
                    f"custom digest returned {produced} bytes, "
                    f"declared {native_bits} bits"
                )

    @property
    def domain_size(self) -> int:
        return 1 << self.bits

    def raw_digest(self, data: bytes) -> bytes:
        if self.digest is not None:
            return self.digest(data)
        return hashlib.new(self.digest_name, data).digest()

    def __call__(self, x: int) -> int:
        output = self.raw_digest(x.to_bytes(self._input_width, "big"))
        return int.from_bytes(output[-self._num_bytes :], "big")
