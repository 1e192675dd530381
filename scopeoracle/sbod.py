"""Pull-feed oracle account layout and its current result."""

from __future__ import annotations

import struct
from dataclasses import dataclass, field
from decimal import Decimal
from typing import ClassVar, Optional

PROGRAM_ID = "SBondMDrcV3K4kxZR1HNVT7osZxAHVHgYXL5Ze1oMUv"
PRECISION = 18

_SUBMISSION = struct.Struct("<32sQ8x16s")
_CURRENT_RESULT = struct.Struct("<96sB7xQQQ")
_COMPACT = struct.Struct("<ffQ")
_HEADER = struct.Struct("<32s32s32sqQQI32s2xBBqQ32x")
_STALENESS = struct.Struct("<I12x")
_TAIL_LEN = 8 + 24 + 256
_SLOTS = 32


def _i128_to_bytes(value: int) -> bytes:
    return value.to_bytes(16, "little", signed=True)


def _i128_from_bytes(data: bytes) -> int:
    return int.from_bytes(data, "little", signed=True)


def _scaled(value: int) -> Decimal:
    return Decimal(f"{value}E-{PRECISION}")


@dataclass
class CurrentResult:
    """Aggregated result of the submissions needed for quorum."""

    SIZE: ClassVar[int] = _CURRENT_RESULT.size

    value: int = 0
    std_dev: int = 0
    mean: int = 0
    range: int = 0
    min_value: int = 0
    max_value: int = 0
    num_samples: int = 0
    slot: int = 0
    min_slot: int = 0
    max_slot: int = 0

    def value_decimal(self) -> Optional[Decimal]:
        """Median value, or None if the feed was never updated."""
        if self.slot == 0:
            return None
        return _scaled(self.value)

    def std_dev_decimal(self) -> Optional[Decimal]:
        """Standard deviation, or None if the feed was never updated."""
        if self.slot == 0:
            return None
        return _scaled(self.std_dev)

    def to_bytes(self) -> bytes:
        wide = b"".join(
            _i128_to_bytes(v)
            for v in (
                self.value,
                self.std_dev,
                self.mean,
                self.range,
                self.min_value,
                self.max_value,
            )
        )
        return _CURRENT_RESULT.pack(
            wide, self.num_samples, self.slot, self.min_slot, self.max_slot
        )

    @classmethod
    def from_bytes(cls, data: bytes) -> "CurrentResult":
        wide, num_samples, slot, min_slot, max_slot = _CURRENT_RESULT.unpack(data)
        values = [_i128_from_bytes(wide[i:i + 16]) for i in range(0, 96, 16)]
        return cls(*values, num_samples, slot, min_slot, max_slot)


@dataclass
class OracleSubmission:
    """A value submitted by one oracle."""

    oracle: bytes = bytes(32)
    slot: int = 0
    value: int = 0

    def to_bytes(self) -> bytes:
        return _SUBMISSION.pack(self.oracle, self.slot, _i128_to_bytes(self.value))

    @classmethod
    def from_bytes(cls, data: bytes) -> "OracleSubmission":
        oracle, slot, value = _SUBMISSION.unpack(data)
        return cls(oracle, slot, _i128_from_bytes(value))


@dataclass
class CompactResult:
    """Historical result stored with single-precision floats."""

    std_dev: float = 0.0
    mean: float = 0.0
    slot: int = 0

    def to_bytes(self) -> bytes:
        return _COMPACT.pack(self.std_dev, self.mean, self.slot)

    @classmethod
    def from_bytes(cls, data: bytes) -> "CompactResult":
        return cls(*_COMPACT.unpack(data))


def _default_submissions() -> list:
    return [OracleSubmission() for _ in range(_SLOTS)]


def _default_history() -> list:
    return [CompactResult() for _ in range(_SLOTS)]


@dataclass
class PullFeedAccountData:
    """Contents of a pull feed account (body without discriminator)."""

    SIZE: ClassVar[int] = 3200

    submissions: list = field(default_factory=_default_submissions)
    authority: bytes = bytes(32)
    queue: bytes = bytes(32)
    feed_hash: bytes = bytes(32)
    initialized_at: int = 0
    permissions: int = 0
    max_variance: int = 0
    min_responses: int = 0
    name: bytes = bytes(32)
    historical_result_idx: int = 0
    min_sample_size: int = 0
    last_update_timestamp: int = 0
    lut_slot: int = 0
    result: CurrentResult = field(default_factory=CurrentResult)
    max_staleness: int = 0
    historical_results: list = field(default_factory=_default_history)

    def to_bytes(self) -> bytes:
        if len(self.submissions) != _SLOTS or len(self.historical_results) != _SLOTS:
            raise ValueError("submissions and historical_results must hold 32 entries")
        data = b"".join(
            [
                *(s.to_bytes() for s in self.submissions),
                _HEADER.pack(
                    self.authority,
                    self.queue,
                    self.feed_hash,
                    self.initialized_at,
                    self.permissions,
                    self.max_variance,
                    self.min_responses,
                    self.name,
                    self.historical_result_idx,
                    self.min_sample_size,
                    self.last_update_timestamp,
                    self.lut_slot,
                ),
                self.result.to_bytes(),
                _STALENESS.pack(self.max_staleness),
                *(h.to_bytes() for h in self.historical_results),
                bytes(_TAIL_LEN),
            ]
        )
        return data

    @classmethod
    def from_bytes(cls, data: bytes) -> "PullFeedAccountData":
        """Decode a pull feed account body."""
        if len(data) != cls.SIZE:
            raise ValueError(f"expected {cls.SIZE} bytes, got {len(data)}")
        data = bytes(data)
        offset = 0
        submissions = []
        for _ in range(_SLOTS):
            submissions.append(
                OracleSubmission.from_bytes(data[offset:offset + _SUBMISSION.size])
            )
            offset += _SUBMISSION.size
        header = _HEADER.unpack_from(data, offset)
        offset += _HEADER.size
        result = CurrentResult.from_bytes(data[offset:offset + _CURRENT_RESULT.size])
        offset += _CURRENT_RESULT.size
        (max_staleness,) = _STALENESS.unpack_from(data, offset)
        offset += _STALENESS.size
        history = []
        for _ in range(_SLOTS):
            history.append(CompactResult.from_bytes(data[offset:offset + _COMPACT.size]))
            offset += _COMPACT.size
        (
            authority,
            queue,
            feed_hash,
            initialized_at,
            permissions,
            max_variance,
            min_responses,
            name,
            historical_result_idx,
            min_sample_size,
            last_update_timestamp,
            lut_slot,
        ) = header
        return cls(
            submissions=submissions,
            authority=authority,
            queue=queue,
            feed_hash=feed_hash,
            initialized_at=initialized_at,
            permissions=permissions,
            max_variance=max_variance,
            min_responses=min_responses,
            name=name,
            historical_result_idx=historical_result_idx,
            min_sample_size=min_sample_size,
            last_update_timestamp=last_update_timestamp,
            lut_slot=lut_slot,
            result=result,
            max_staleness=max_staleness,
            historical_results=history,
        )