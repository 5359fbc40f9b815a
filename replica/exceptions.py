"""Custom exception classes for the replica."""


class QsoLogException(Exception):
    """
    Base exception class for all QSO log errors.
    """
    pass


class InvalidQsoError(QsoLogException):
    """
    Raised when a submitted QSO lacks a callsign or date/time.
    """
    pass


class QsoNotFoundError(QsoLogException):
    """
    Raised when a QSO addressed by id is not in the local record set.
    """
    pass


class UnsupportedImportError(QsoLogException):
    """
    Raised when an import file is not in a supported format.
    """
    pass
