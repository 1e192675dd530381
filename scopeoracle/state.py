"""Price, TWAP, mapping and token-metadata records stored by the oracle."""

from __future__ import annotations

import enum
import struct
from dataclasses import dataclass, field
from typing import ClassVar

MAX_ENTRIES_U16 = 512
MAX_ENTRIES = 512

_U64_MAX = (1 << 64) - 1

_PRICE_LAYOUT = struct.Struct("<QQ")
_DATED_PRICE_LAYOUT = struct.Struct("<QQQQ2Q3HH")
_TOKEN_METADATA_LAYOUT = struct.Struct("<32sQQ15Q")


def _check_u64(name: str, value: int) -> None:
    if not 0 <= value <= _U64_MAX:
        raise ValueError(f"{name} must fit in an unsigned 64-bit integer")


def _check_size(data: bytes, size: int) -> None:
    if len(data) != size:
        raise ValueError(f"expected {size} bytes, got {len(data)}")


@dataclass(frozen=True)
class Price:
    """Integer price scaled by ``10 ** exp``."""

    SIZE: ClassVar[int] = _PRICE_LAYOUT.size

    value: int = 0
    exp: int = 0

    def __post_init__(self) -> None:
        _check_u64("value", self.value)
        _check_u64("exp", self.exp)

    def to_bytes(self) -> bytes:
        return _PRICE_LAYOUT.pack(self.value, self.exp)

    @classmethod
    def from_bytes(cls, data: bytes) -> "Price":
        _check_size(data, cls.SIZE)
        value, exp = _PRICE_LAYOUT.unpack(data)
        return cls(value, exp)


@dataclass
class DatedPrice:
    """A price together with the slot and time it was recorded."""

    SIZE: ClassVar[int] = _DATED_PRICE_LAYOUT.size

    price: Price = field(default_factory=Price)
    last_updated_slot: int = 0
    unix_timestamp: int = 0
    index: int = MAX_ENTRIES_U16

    def to_bytes(self) -> bytes:
        return _DATED_PRICE_LAYOUT.pack(
            self.price.value,
            self.price.exp,
            self.last_updated_slot,
            self.unix_timestamp,
            0,
            0,
            0,
            0,
            0,
            self.index,
        )

    @classmethod
    def from_bytes(cls, data: bytes) -> "DatedPrice":
        _check_size(data, cls.SIZE)
        value, exp, slot, timestamp, *_reserved, index = _DATED_PRICE_LAYOUT.unpack(data)
        return cls(Price(value, exp), slot, timestamp, index)


@dataclass
class EmaTwap:
    """Exponential moving average state for one price entry."""

    last_update_slot: int = 0
    last_update_unix_timestamp: int = 0
    current_ema_1h: int = 0


@dataclass
class TokenMetadata:
    """Name, staleness limit and group membership of a token."""

    SIZE: ClassVar[int] = _TOKEN_METADATA_LAYOUT.size

    name: bytes = bytes(32)
    max_age_price_slots: int = 0
    group_ids_bitset: int = 0

    def __post_init__(self) -> None:
        if len(self.name) > 32:
            raise ValueError("name must be at most 32 bytes")
        self.name = bytes(self.name).ljust(32, b"\x00")

    def to_bytes(self) -> bytes:
        return _TOKEN_METADATA_LAYOUT.pack(
            self.name, self.max_age_price_slots, self.group_ids_bitset, *([0] * 15)
        )

    @classmethod
    def from_bytes(cls, data: bytes) -> "TokenMetadata":
        _check_size(data, cls.SIZE)
        name, max_age, groups, *_reserved = _TOKEN_METADATA_LAYOUT.unpack(data)
        return cls(name, max_age, groups)


def _zeros() -> list:
    return [0] * MAX_ENTRIES


@dataclass
class OracleMappings:
    """Where each price entry is sourced from."""

    price_info_accounts: list = field(default_factory=lambda: [bytes(32)] * MAX_ENTRIES)
    price_types: list = field(default_factory=_zeros)
    twap_source: list = field(default_factory=_zeros)
    twap_enabled: list = field(default_factory=_zeros)

    def is_twap_enabled(self, entry_id: int) -> bool:
        return self.twap_enabled[entry_id] > 0

    def get_twap_source(self, entry_id: int) -> int:
        return int(self.twap_source[entry_id])


class UpdateTokenMetadataMode(enum.IntEnum):
    """Which token metadata field an update targets."""

    NAME = 0
    MAX_PRICE_AGE_SLOTS = 1
    GROUP_IDS = 2

    def to_u16(self) -> int:
        return int(self.value)

    def to_u64(self) -> int:
        return self.to_u16()