"""Exception hierarchy shared by the board model and its transports."""

from __future__ import annotations


class StatusBoardError(Exception):
    pass


class ValidationError(StatusBoardError, ValueError):
    """Bad input handed to an operation by its immediate caller."""


class InvalidTimestamp(ValidationError):
    pass


class UnknownAttribute(ValidationError):
    def __init__(self, name: str) -> None:
        super().__init__(f'Attribute "{name}" does not exist.')
        self.name = name


class InvalidInput(ValidationError):
    pass


class InvalidId(ValidationError):
    def __init__(self, message: str = "Asset ID must be a non-empty string.") -> None:
        super().__init__(message)


class UnsupportedFormat(ValidationError):
    def __init__(self, fmt: str) -> None:
        super().__init__(f"Unknown format '{fmt}' for rendering element.")
        self.format = fmt


class WrongAssetType(ValidationError, TypeError):
    pass


class InvalidCondition(ValidationError):
    pass


class ConflictError(StatusBoardError):
    """The operation clashes with the current state of the model."""


class DuplicateId(ConflictError):
    def __init__(self, asset_id: str) -> None:
        super().__init__(f"Asset with ID {asset_id} already exists.")
        self.asset_id = asset_id


class NothingToUnpair(ConflictError):
    def __init__(self) -> None:
        super().__init__("No asset to unpair.")


class AssetRemovalFailed(ConflictError):
    pass


class ConfigurationError(StatusBoardError):
    """The board topology cannot handle the request; never swallowed."""


class NoSegmentAccepted(ConfigurationError):
    def __init__(self, asset) -> None:
        super().__init__(f"No segment accepted asset {asset}.")
        self.asset = asset


class NoSuchViewType(ConfigurationError):
    def __init__(self, tag: str) -> None:
        super().__init__(
            f"Unable to find element type '{tag}', did you forget to register it with the board?"
        )
        self.tag = tag


class TypeNotAccepted(ConfigurationError):
    pass
