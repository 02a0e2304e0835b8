"""
Failures raised by the install pipeline.

Two classes of failure exist. Pipeline-fatal errors (``fatal = True``) mean the
feed or one of its services could not be used at all. Package-fatal errors mean
this particular package/version cannot be installed; whatever was already put
on disk is left as-is.
"""
from __future__ import annotations


class InstallError(Exception):
    """Base class for every failure the installer reports to the user."""

    fatal = False


class FeedUnavailable(InstallError):
    fatal = True


class ServiceUnavailable(InstallError):
    fatal = True


class MalformedResponse(InstallError):
    fatal = True


class VersionNotFound(InstallError):
    pass


class ArchiveUnavailable(InstallError):
    pass


class ExtractionFailed(InstallError):
    pass


class InvalidCommandMetadata(InstallError):
    pass


class NoToolsDirectory(InstallError):
    pass


class NoExecutableOffered(InstallError):
    pass


class NotACliExtension(InstallError):
    pass
