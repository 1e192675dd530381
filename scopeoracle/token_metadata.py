"""Updating token metadata entries."""

from __future__ import annotations

import logging

from .errors import ScopeError, ScopeErrorCode
from .state import TokenMetadata, UpdateTokenMetadataMode

_log = logging.getLogger(__name__)

_NAME_LEN = 32


def list_set_bit_positions(bits: int) -> list:
    """Positions (least significant bit is 0) of the set bits of ``bits``."""
    positions = []
    while bits:
        positions.append((bits & -bits).bit_length() - 1)
        bits &= bits - 1
    return positions


def _read_u64(value: bytes) -> int:
    if len(value) < 8:
        raise ValueError("value must hold at least 8 bytes")
    return int.from_bytes(value[:8], "little")


def update_token_metadata(metadata: TokenMetadata, mode, value: bytes) -> TokenMetadata:
    """Apply one update to ``metadata`` in place and return it.

    Raises ScopeError for an unknown mode and ValueError for a malformed value.
    """
    try:
        mode = UpdateTokenMetadataMode(mode)
    except ValueError:
        raise ScopeError(ScopeErrorCode.INVALID_TOKEN_UPDATE_MODE) from None

    value = bytes(value)
    if mode is UpdateTokenMetadataMode.MAX_PRICE_AGE_SLOTS:
        age = _read_u64(value)
        _log.info("Setting token max age to %d", age)
        metadata.max_age_price_slots = age
    elif mode is UpdateTokenMetadataMode.NAME:
        if len(value) > _NAME_LEN:
            raise ValueError("Name is longer should be less than 32 bytes")
        name = value.ljust(_NAME_LEN, b"\x00")
        str_name = name.decode("utf-8")
        metadata.name = name
        _log.info("Setting token name to %s", str_name)
    else:
        groups = _read_u64(value)
        _log.info(
            "Setting token group IDs to: raw %d == binary %s == positions %s",
            groups,
            bin(groups),
            list_set_bit_positions(groups),
        )
        metadata.group_ids_bitset = groups
    return metadata