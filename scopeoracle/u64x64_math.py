"""Q64.64 fixed-point exponentiation and liquidity-book pair layout."""

from __future__ import annotations

import struct
from dataclasses import dataclass
from typing import ClassVar

SCALE_OFFSET = 64
ONE = 1 << SCALE_OFFSET
U128_MAX = (1 << 128) - 1

# 19 exponent bits cover every bin price representable in Q64.64.
MAX_EXPONENTIAL = 0x80000
_EXPONENT_BITS = 19


def _checked_mul(a: int, b: int) -> int:
    product = a * b
    if product > U128_MAX:
        raise OverflowError("Q64.64 multiplication overflow")
    return product


def pow(base: int, exp: int) -> int:  # noqa: A001 - mirrors the math helper's name
    """Raise a Q64.64 ``base`` to the integer power ``exp``.

    Raises OverflowError when the result cannot be represented.
    """
    if not 0 <= base <= U128_MAX:
        raise ValueError("base must fit in 128 bits")
    if exp == 0:
        return ONE

    invert = exp < 0
    exp = abs(exp)
    if exp >= MAX_EXPONENTIAL:
        raise OverflowError("exponent too large for Q64.64")

    squared_base = base
    result = ONE

    # Work on the inverse so squaring keeps the integer part empty.
    if squared_base >= result:
        squared_base = U128_MAX // squared_base
        invert = not invert

    for bit in range(_EXPONENT_BITS):
        if bit:
            squared_base = _checked_mul(squared_base, squared_base) >> SCALE_OFFSET
        if exp & (1 << bit):
            result = _checked_mul(result, squared_base) >> SCALE_OFFSET

    if result == 0:
        raise OverflowError("Q64.64 power underflowed to zero")

    if invert:
        result = U128_MAX // result

    return result


def get_x64_price_from_id(active_id: int, bin_step: int) -> int:
    """Price of a bin as Q64.64: (1 + bin_step / 10000) ** active_id."""
    step_f = (bin_step << SCALE_OFFSET) // 10_000
    return pow(ONE + step_f, active_id)


_LB_PAIR_LAYOUT = struct.Struct(
    "<8I4Q1s2sBiHB5x32s32s32s32s2Q32s36Q32s16Qq32s32s32sQQQ64x"
)


@dataclass(frozen=True)
class LbPair:
    """Liquidity-book pair account state."""

    SIZE: ClassVar[int] = _LB_PAIR_LAYOUT.size

    parameters_buff: tuple
    v_parameters_buff: tuple
    bump_seed: bytes
    bin_step_seed: bytes
    pair_type: int
    active_id: int
    bin_step: int
    status: int
    token_x_mint: bytes
    token_y_mint: bytes
    reserve_x: bytes
    reserve_y: bytes
    protocol_fee: tuple
    fee_owner: bytes
    reward_infos_buffs: tuple
    oracle: bytes
    bin_array_bitmap: tuple
    last_updated_at: int
    whitelisted_wallet: tuple
    base_key: bytes
    activation_slot: int
    swap_cap_deactivate_slot: int
    max_swapped_amount: int

    @classmethod
    def from_bytes(cls, data: bytes) -> "LbPair":
        """Decode the account body (without discriminator)."""
        if len(data) != cls.SIZE:
            raise ValueError(f"expected {cls.SIZE} bytes, got {len(data)}")
        fields = iter(_LB_PAIR_LAYOUT.unpack(data))

        def take(n: int) -> tuple:
            return tuple(next(fields) for _ in range(n))

        parameters_buff = take(8)
        v_parameters_buff = take(4)
        bump_seed, bin_step_seed, pair_type, active_id, bin_step, status = take(6)
        token_x_mint, token_y_mint, reserve_x, reserve_y = take(4)
        protocol_fee = take(2)
        (fee_owner,) = take(1)
        rewards = take(36)
        reward_infos_buffs = (rewards[:18], rewards[18:])
        (oracle,) = take(1)
        bin_array_bitmap = take(16)
        (last_updated_at,) = take(1)
        whitelisted_wallet = take(2)
        base_key, activation_slot, swap_cap_deactivate_slot, max_swapped_amount = take(4)

        return cls(
            parameters_buff=parameters_buff,
            v_parameters_buff=v_parameters_buff,
            bump_seed=bump_seed,
            bin_step_seed=bin_step_seed,
            pair_type=pair_type,
            active_id=active_id,
            bin_step=bin_step,
            status=status,
            token_x_mint=token_x_mint,
            token_y_mint=token_y_mint,
            reserve_x=reserve_x,
            reserve_y=reserve_y,
            protocol_fee=protocol_fee,
            fee_owner=fee_owner,
            reward_infos_buffs=reward_infos_buffs,
            oracle=oracle,
            bin_array_bitmap=bin_array_bitmap,
            last_updated_at=last_updated_at,
            whitelisted_wallet=whitelisted_wallet,
            base_key=base_key,
            activation_slot=activation_slot,
            swap_cap_deactivate_slot=swap_cap_deactivate_slot,
            max_swapped_amount=max_swapped_amount,
        )