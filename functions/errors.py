#!/usr/bin/env python3
# ==============================================================================
# [FILE] functions/errors.py
# [PROJECT] ChannelLedger
# [ROLE] Error taxonomy shared by the pipeline steps
# [VERSION] v1.0
# [UPDATED] 2026-10-18
# ==============================================================================


class ChannelLedgerError(Exception):
    """Base class for every pipeline failure."""


class ConfigInvalid(ChannelLedgerError):
    """A required config value is missing or unusable. Raised before any I/O."""


class SourceUnavailable(ChannelLedgerError):
    """Raw playlist or groups list is missing when a read is required."""


class FetchFailed(ChannelLedgerError):
    """Transport error or non-success response while downloading a feed."""


class EpgParseFailed(ChannelLedgerError):
    """The EPG document is not well-formed XML."""


class EpgEmpty(ChannelLedgerError):
    """The EPG document is zero-length."""
