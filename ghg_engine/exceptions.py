"""Custom exceptions for emission calculation errors."""


class EmissionCalculationError(Exception):
    """Base exception for emission calculation errors."""
    pass


class InputValidationError(EmissionCalculationError):
    """A calculation input failed schema validation."""

    def __init__(self, messages: list[str]) -> None:
        self.messages = messages
        super().__init__("; ".join(messages))


class EmissionFactorNotFoundError(EmissionCalculationError):
    """The referenced emission factor id is not in the registry."""

    def __init__(self, factor_id: str) -> None:
        self.factor_id = factor_id
        super().__init__(f"Emission factor not found: {factor_id}")


class MissingEmissionFactorError(EmissionCalculationError):
    """Neither a registry id nor a custom factor value was supplied."""

    def __init__(self) -> None:
        super().__init__("No emission factor provided")


class IncompatibleUnitsError(EmissionCalculationError, ValueError):
    """Units belong to different physical categories or are unknown."""

    def __init__(self, from_unit: str, to_unit: str) -> None:
        self.from_unit = from_unit
        self.to_unit = to_unit
        super().__init__(f"Incompatible units: {from_unit} and {to_unit}")


class AdjustmentError(EmissionCalculationError):
    """A scope/category adjustment rule could not be applied."""
    pass
