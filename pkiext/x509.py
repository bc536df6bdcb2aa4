"""X.509 extension and CRL distribution point parsing over a small DER reader."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Callable, Iterator, TypeVar, Union

T = TypeVar("T")

CONTEXT_SPECIFIC = 0x80
CONSTRUCTED = 0x20

# ISO arc for standard certificate and CRL extensions (OID 2.5.29).
_ID_CE = bytes([0x55, 0x1D])


class DerError(Exception):
    """Base class for errors raised while decoding DER data."""


class BadDer(DerError):
    """The input is not valid DER."""


class UnsupportedCriticalExtension(DerError):
    """A critical extension was found that is not understood."""


class ExtensionValueInvalid(DerError):
    """An extension value is invalid, for example because it appears twice."""


class Tag(IntEnum):
    """Universal DER tags."""

    BOOLEAN = 0x01
    INTEGER = 0x02
    BIT_STRING = 0x03
    OCTET_STRING = 0x04
    NULL = 0x05
    OID = 0x06
    UTC_TIME = 0x17
    GENERALIZED_TIME = 0x18
    SEQUENCE = CONSTRUCTED | 0x10
    SET = CONSTRUCTED | 0x11


class Reader:
    """Sequential reader of DER tag-length-value items."""

    def __init__(self, data):
        self._data = bytes(data)
        self._pos = 0

    def at_end(self) -> bool:
        """Return True when every byte has been consumed."""
        return self._pos >= len(self._data)

    def _read_byte(self) -> int:
        if self.at_end():
            raise BadDer("unexpected end of input")
        byte = self._data[self._pos]
        self._pos += 1
        return byte

    def _peek(self, tag: int) -> bool:
        return not self.at_end() and self._data[self._pos] == tag

    def _read_length(self) -> int:
        first = self._read_byte()
        if first < 0x80:
            return first
        count = first & 0x7F
        if count == 0 or count > 4:
            # Indefinite lengths and lengths wider than four bytes are rejected.
            raise BadDer("unsupported length encoding")
        length = 0
        for _ in range(count):
            length = (length << 8) | self._read_byte()
        if length < 0x80 or length < (1 << (8 * (count - 1))):
            raise BadDer("length is not minimally encoded")
        return length

    def read_tag_and_value(self) -> tuple[int, bytes]:
        """Read one item and return its tag and value bytes."""
        tag = self._read_byte()
        if tag & 0x1F == 0x1F:
            raise BadDer("high tag number form is not supported")
        length = self._read_length()
        end = self._pos + length
        if end > len(self._data):
            raise BadDer("value extends past the end of input")
        value = self._data[self._pos:end]
        self._pos = end
        return tag, value

    def expect_tag(self, tag: int) -> bytes:
        """Read one item that must carry ``tag`` and return its value."""
        actual, value = self.read_tag_and_value()
        if actual != tag:
            raise BadDer(f"expected tag {int(tag):#04x}, found {actual:#04x}")
        return value

    def read_bool(self) -> bool:
        """Read an optional BOOLEAN, defaulting to False when absent."""
        if not self._peek(Tag.BOOLEAN):
            return False
        value = self.expect_tag(Tag.BOOLEAN)
        if value == b"\xff":
            return True
        if value == b"\x00":
            return False
        raise BadDer("invalid BOOLEAN encoding")


@dataclass(frozen=True)
class Extension:
    """A single certificate or CRL extension."""

    critical: bool
    id: bytes
    value: bytes

    def unsupported(self) -> None:
        """Raise if this extension is critical; an unknown non-critical one is ignored."""
        if self.critical:
            raise UnsupportedCriticalExtension(self.id.hex())

    @classmethod
    def from_der(cls, reader: Reader) -> "Extension":
        """Parse the contents of an Extension SEQUENCE."""
        ext_id = reader.expect_tag(Tag.OID)
        critical = reader.read_bool()
        value = reader.expect_tag(Tag.OCTET_STRING)
        return cls(critical=critical, id=ext_id, value=value)


def set_extension_once(current: T | None, parser: Callable[[], T]) -> T:
    """Return the parsed value, refusing an extension that was already seen."""
    if current is not None:
        raise ExtensionValueInvalid("extension appears more than once")
    return parser()


def remember_extension(extension: Extension, handler: Callable[[int], T]) -> T | None:
    """Dispatch an id-ce extension to ``handler`` by the last octet of its OID."""
    ext_id = extension.id
    if len(ext_id) != len(_ID_CE) + 1 or not ext_id.startswith(_ID_CE):
        extension.unsupported()
        return None
    return handler(ext_id[-1])


@dataclass(frozen=True)
class FullName:
    """A distribution point named by a sequence of general names."""

    value: bytes

    def general_names(self) -> Iterator[tuple[int, bytes]]:
        """Yield each general name as its tag and raw value."""
        reader = Reader(self.value)
        while not reader.at_end():
            yield reader.read_tag_and_value()


@dataclass(frozen=True)
class NameRelativeToCrlIssuer:
    """A distribution point named relative to the CRL issuer."""

    value: bytes


DistributionPointName = Union[FullName, NameRelativeToCrlIssuer]

_FULL_NAME_TAG = CONTEXT_SPECIFIC | CONSTRUCTED
_NAME_RELATIVE_TO_CRL_ISSUER_TAG = CONTEXT_SPECIFIC | CONSTRUCTED | 1


def parse_distribution_point_name(reader: Reader) -> DistributionPointName:
    """Parse a DistributionPointName choice."""
    tag, value = reader.read_tag_and_value()
    if tag == _FULL_NAME_TAG:
        return FullName(value)
    if tag == _NAME_RELATIVE_TO_CRL_ISSUER_TAG:
        return NameRelativeToCrlIssuer(value)
    raise BadDer(f"unexpected distribution point name tag {tag:#04x}")