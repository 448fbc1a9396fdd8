"""Generator options for known programs, and hand-written override types."""

from __future__ import annotations

from enum import IntEnum
from pathlib import Path

from anchorgen.program import GeneratorOptions


class UpdateConfigMode(IntEnum):
    """Reserve configuration update modes of the Kamino Lend program."""

    UpdateLoanToValuePct = 1
    UpdateMaxLiquidationBonusBps = 2
    UpdateLiquidationThresholdPct = 3
    UpdateProtocolLiquidationFee = 4
    UpdateProtocolTakeRate = 5
    UpdateFeesBorrowFee = 6
    UpdateFeesFlashLoanFee = 7
    UpdateFeesReferralFeeBps = 8
    UpdateDepositLimit = 9
    UpdateBorrowLimit = 10
    UpdateTokenInfoLowerHeuristic = 11
    UpdateTokenInfoUpperHeuristic = 12
    UpdateTokenInfoExpHeuristic = 13
    UpdateTokenInfoTwapDivergence = 14
    UpdateTokenInfoScopeTwap = 15
    UpdateTokenInfoScopeChain = 16
    UpdateTokenInfoName = 17
    UpdateTokenInfoPriceMaxAge = 18
    UpdateTokenInfoTwapMaxAge = 19
    UpdateScopePriceFeed = 20
    UpdatePythPrice = 21
    UpdateSwitchboardFeed = 22
    UpdateSwitchboardTwapFeed = 23
    UpdateBorrowRateCurve = 24
    UpdateEntireReserveConfig = 25
    UpdateDebtWithdrawalCap = 26
    UpdateDepositWithdrawalCap = 27
    UpdateDebtWithdrawalCapCurrentTotal = 28
    UpdateDepositWithdrawalCapCurrentTotal = 29
    UpdateBadDebtLiquidationBonusBps = 30
    UpdateMinLiquidationBonusBps = 31
    UpdateDeleveragingMarginCallPeriod = 32
    UpdateBorrowFactor = 33
    UpdateAssetTier = 34
    UpdateElevationGroup = 35
    UpdateDeleveragingThresholdDecreaseBpsPerDay = 36
    DeprecatedUpdateMultiplierSideBoost = 37
    DeprecatedUpdateMultiplierTagBoost = 38
    UpdateReserveStatus = 39
    UpdateFarmCollateral = 40
    UpdateFarmDebt = 41
    UpdateDisableUsageAsCollateralOutsideEmode = 42
    UpdateBlockBorrowingAboveUtilizationPct = 43
    UpdateBlockPriceUsage = 44
    UpdateBorrowLimitOutsideElevationGroup = 45
    UpdateBorrowLimitsInElevationGroupAgainstThisReserve = 46
    UpdateHostFixedInterestRateBps = 47
    UpdateAutodeleverageEnabled = 48
    UpdateDeleveragingBonusIncreaseBpsPerDay = 49


_PRESETS: dict[str, dict[str, tuple[str, ...]]] = {
    "farms": {
        "zero_copy": (
            "FarmConfigOption",
            "GlobalConfigOption",
            "LockingMode",
            "RewardInfo",
            "RewardPerTimeUnitPoint",
            "RewardScheduleCurve",
            "RewardType",
            "TimeUnit",
            "TokenInfo",
            "DatedPrice",
            "Price",
            "FarmState",
            "GlobalConfig",
            "UserState",
            "OraclePrices",
        ),
    },
    "govern-cpi": {},
    "kamino-lend": {
        "skip": ("UpdateConfigMode",),
        "zero_copy": (
            "UpdateLendingMarketConfigValue",
            "UpdateLendingMarketMode",
            "LastUpdate",
            "ElevationGroup",
            "InitObligationArgs",
            "ObligationCollateral",
            "ObligationLiquidity",
            "AssetTier",
            "BigFractionBytes",
            "FeeCalculation",
            "ReserveCollateral",
            "ReserveConfig",
            "ReserveFarmKind",
            "ReserveFees",
            "ReserveLiquidity",
            "ReserveStatus",
            "WithdrawalCaps",
            "PriceHeuristic",
            "PythConfiguration",
            "ScopeConfiguration",
            "SwitchboardConfiguration",
            "TokenInfo",
            "BorrowRateCurve",
            "CurvePoint",
            "UserState",
            "LendingMarket",
            "Obligation",
            "ReferrerState",
            "ReferrerTokenState",
            "UserMetadata",
            "Reserve",
            "Referrer",
            "ReferrerToken",
        ),
    },
    "marinade-cpi": {},
}


def preset_names() -> list[str]:
    """Names of the known presets, sorted."""
    return sorted(_PRESETS)


def preset_options(
    name: str, idl_path: str | Path = "idl.json", base_dir: str | Path | None = None
) -> GeneratorOptions:
    """Generator options of a known program."""
    try:
        preset = _PRESETS[name]
    except KeyError:
        raise ValueError(f"unknown preset {name!r}; choose from {', '.join(preset_names())}") from None
    return GeneratorOptions(idl_path=idl_path, base_dir=base_dir, **preset)