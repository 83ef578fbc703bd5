class MetromError(Exception):
    """Base class for every error raised by metrom_aptos."""


class RegistryDefinitionError(MetromError):
    """Raised when a registry instance is authored with missing, extra or malformed entries."""


class UnsupportedChainError(MetromError, KeyError):
    """Raised when a chain outside a registry's enumeration is looked up."""

    def __init__(self, chain, supported):
        self.chain = chain
        self.supported = tuple(supported)
        super().__init__(f"Unsupported chain {chain!r}; supported chains are: {', '.join(self.supported)}")

    def __str__(self):
        # KeyError would repr() the message
        return self.args[0]


class AptosCliError(MetromError):
    """Raised when the Aptos CLI is missing or exits with a failure."""

    def __init__(self, message: str, returncode: int = 1):
        self.returncode = returncode
        super().__init__(message)


class PayloadError(MetromError):
    """Raised when the publish payload artifact is missing or malformed."""


class ChainError(MetromError):
    """Raised when a network call cannot be performed."""


class StepFailed(MetromError):
    """Raised by a pipeline step to fail with an exact, user-facing message."""
