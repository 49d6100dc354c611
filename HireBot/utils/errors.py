# -*- coding: utf-8 -*-


class HireException(Exception):
    """Base for all HireBot exceptions. Raiseable as a fallback."""

    pass


class HireUserException(HireException):
    """User-facing error, shown to the Discord user as-is."""

    pass


class HireNotFoundError(HireUserException):
    """A requested entity (message, member, role) does not exist."""

    pass


class HireValidationError(HireUserException):
    """Input or state is invalid (bad parameter, corrupt record, inconsistent config)."""

    pass


class HirePermissionError(HireUserException):
    """The user lacks the reviewer role, or the bot lacks channel permissions."""

    pass


class HireInfraException(HireException):
    """Infrastructure failure; triggers an operator DM notification.

    Covers: Discord API failures, missing permissions on role assignment.
    Raise with ``from original_exc`` to chain the full traceback into the DM.
    """

    pass


class ConfigInconsistency(HireValidationError):
    """An encoded identifier or rendered record references an unknown application type or field."""

    pass


class RecordNotFound(HireNotFoundError):
    """The submission record (review message) can no longer be fetched."""

    pass


class RecordUnparsable(HireValidationError):
    """The rendered record is missing its title prefix or footer identity."""

    pass


class CollaboratorFailure(HireInfraException):
    """Discord refused a member fetch, role lookup or role assignment."""

    pass
