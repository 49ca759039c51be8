"""Exception hierarchy for the address verifier."""

GENERIC_ORACLE_FAILURE = "Failed to verify addresses via the verification service."


class AddressVerifierError(Exception):
    """Base exception for all address verifier errors."""


class InvalidAddressInput(AddressVerifierError):
    """One or both addresses were blank."""

    def __init__(self, message: str = "Please enter both addresses to compare."):
        super().__init__(message)


class ConfigurationError(AddressVerifierError):
    """The oracle credential (or proxy URL) is missing."""


class OracleError(AddressVerifierError):
    """The oracle call failed or returned something that is not a verdict."""

    def __init__(self, message: str = GENERIC_ORACLE_FAILURE):
        super().__init__(message)


class InvalidTransition(AddressVerifierError):
    """A verification session was moved between states it cannot connect."""

    def __init__(self, current: str, target: str):
        self.current = current
        self.target = target
        super().__init__(f"Cannot move verification from '{current}' to '{target}'")
