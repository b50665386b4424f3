"""Asset domain specific exceptions."""


class AssetError(Exception):
    """Base class for asset domain errors."""


class AssetNotFoundError(AssetError):
    """Raised when the requested asset cannot be found."""
