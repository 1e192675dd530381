"""Error codes reported by the price oracle."""

from __future__ import annotations

import enum


class ScopeErrorCode(enum.IntEnum):
    """Numbered failure reasons, in declaration order."""

    INTEGER_OVERFLOW = 0
    CONVERSION_FAILURE = 1
    MATH_OVERFLOW = 2
    OUT_OF_RANGE_INTEGRAL_CONVERSION = 3
    UNEXPECTED_ACCOUNT = 4
    PRICE_NOT_VALID = 5
    ACCOUNTS_AND_TOKEN_MISMATCH = 6
    BAD_TOKEN_NB = 7
    BAD_TOKEN_TYPE = 8
    SWITCHBOARD_V2_ERROR = 9
    INVALID_ACCOUNT_DISCRIMINATOR = 10
    UNABLE_TO_DESERIALIZE_ACCOUNT = 11
    BAD_SCOPE_CHAIN_OR_PRICES = 12
    REFRESH_IN_CPI = 13
    REFRESH_WITH_UNEXPECTED_IXS = 14
    INVALID_TOKEN_UPDATE_MODE = 15
    UNABLE_TO_DERIVE_PDA = 16
    BAD_TIMESTAMP = 17
    BAD_SLOT = 18
    PRICE_ACCOUNT_NOT_EXPECTED = 19
    TWAP_SOURCE_INDEX_OUT_OF_RANGE = 20
    TWAP_SAMPLE_TOO_FREQUENT = 21
    UNEXPECTED_JLP_CONFIGURATION = 22
    TWAP_NOT_ENOUGH_SAMPLES_IN_PERIOD = 23
    EMPTY_TOKEN_LIST = 24
    STAKE_FEE_TOO_HIGH = 25
    KTOKEN_UNDERLYING_PRICE_NOT_VALID = 26
    KTOKEN_HOLDINGS_CALCULATION_ERROR = 27
    CANNOT_RESIZE_ACCOUNT = 28
    FIXED_PRICE_INVALID = 29
    SWITCHBOARD_ON_DEMAND_ERROR = 30
    CONFIDENCE_INTERVAL_CHECK_FAILED = 31

    def message(self) -> str:
        """Human readable description of the error."""
        return _MESSAGES[self]


_MESSAGES = {
    ScopeErrorCode.INTEGER_OVERFLOW: "Integer overflow",
    ScopeErrorCode.CONVERSION_FAILURE: "Conversion failure",
    ScopeErrorCode.MATH_OVERFLOW: "Mathematical operation with overflow",
    ScopeErrorCode.OUT_OF_RANGE_INTEGRAL_CONVERSION: "Out of range integral conversion attempted",
    ScopeErrorCode.UNEXPECTED_ACCOUNT: "Unexpected account in instruction",
    ScopeErrorCode.PRICE_NOT_VALID: "Price is not valid",
    ScopeErrorCode.ACCOUNTS_AND_TOKEN_MISMATCH: (
        "The number of tokens is different from the number of received accounts"
    ),
    ScopeErrorCode.BAD_TOKEN_NB: "The token index received is out of range",
    ScopeErrorCode.BAD_TOKEN_TYPE: "The token type received is invalid",
    ScopeErrorCode.SWITCHBOARD_V2_ERROR: "There was an error with the Switchboard V2 retrieval",
    ScopeErrorCode.INVALID_ACCOUNT_DISCRIMINATOR: "Invalid account discriminator",
    ScopeErrorCode.UNABLE_TO_DESERIALIZE_ACCOUNT: "Unable to deserialize account",
    ScopeErrorCode.BAD_SCOPE_CHAIN_OR_PRICES: "Error while computing price with ScopeChain",
    ScopeErrorCode.REFRESH_IN_CPI: "Refresh price instruction called in a CPI",
    ScopeErrorCode.REFRESH_WITH_UNEXPECTED_IXS: "Refresh price instruction preceded by unexpected ixs",
    ScopeErrorCode.INVALID_TOKEN_UPDATE_MODE: "Invalid token metadata update mode",
    ScopeErrorCode.UNABLE_TO_DERIVE_PDA: "Unable to derive PDA address",
    ScopeErrorCode.BAD_TIMESTAMP: "Invalid timestamp",
    ScopeErrorCode.BAD_SLOT: "Invalid slot",
    ScopeErrorCode.PRICE_ACCOUNT_NOT_EXPECTED: "TWAP price account is different than Scope ID",
    ScopeErrorCode.TWAP_SOURCE_INDEX_OUT_OF_RANGE: "TWAP source index out of range",
    ScopeErrorCode.TWAP_SAMPLE_TOO_FREQUENT: "TWAP sample is too close to the previous one",
    ScopeErrorCode.UNEXPECTED_JLP_CONFIGURATION: "Unexpected JLP configuration",
    ScopeErrorCode.TWAP_NOT_ENOUGH_SAMPLES_IN_PERIOD: "Not enough price samples in period to compute TWAP",
    ScopeErrorCode.EMPTY_TOKEN_LIST: "The provided token list to refresh is empty",
    ScopeErrorCode.STAKE_FEE_TOO_HIGH: "The stake pool fee is higher than the maximum allowed",
    ScopeErrorCode.KTOKEN_UNDERLYING_PRICE_NOT_VALID: (
        "Cannot get a valid price for the tokens composing the Ktoken"
    ),
    ScopeErrorCode.KTOKEN_HOLDINGS_CALCULATION_ERROR: "Error while computing the Ktoken pool holdings",
    ScopeErrorCode.CANNOT_RESIZE_ACCOUNT: "Cannot resize the account we only allow it to grow in size",
    ScopeErrorCode.FIXED_PRICE_INVALID: "The provided fixed price is invalid",
    ScopeErrorCode.SWITCHBOARD_ON_DEMAND_ERROR: "Switchboard On Demand price derive error",
    ScopeErrorCode.CONFIDENCE_INTERVAL_CHECK_FAILED: "Confidence interval check failed",
}


class ScopeError(Exception):
    """Raised when an oracle operation fails; carries a ScopeErrorCode."""

    def __init__(self, code):
        self.code = ScopeErrorCode(code)
        super().__init__(self.code.message())