"""Exception hierarchy for the vault price feed."""


class VaultFeedError(Exception):
    """Base exception for vault feed errors."""

    pass


class AuthorizationError(VaultFeedError):
    """Raised when a caller other than the current owner attempts a gated call.

    :ivar caller: Identity that attempted the call.
    :ivar owner: Identity that holds authority at the time of the call.
    """

    def __init__(self, caller: str, owner: str):
        """Initialize the authorization error.

        :param caller: Identity that attempted the call.
        :param owner: Current owner identity.
        """
        self.caller = caller
        self.owner = owner
        super().__init__("Not owner")


class ConfigurationError(VaultFeedError):
    """Raised when pipeline components are wired with incompatible settings."""

    pass
