# -*- test-case-name: txdigest.test -*-
# Copyright (c) Twisted Matrix Laboratories.
# See LICENSE for details.

"""
txdigest: HTTP Digest (and Basic) authentication challenge/response for
Twisted and WSGI applications.

@see: U{https://www.rfc-editor.org/rfc/rfc2617}
"""

from txdigest._version import __version__ as version
from txdigest.context import RequestContext
from txdigest.passwords import FilePasswordLookup, InMemoryPasswordLookup
from txdigest.schemes import (
    BasicCredentials,
    BasicScheme,
    Challenge,
    DigestCredentials,
    DigestScheme,
    buildChallenge,
)
from txdigest.session import AuthenticationSession, AuthenticationState, authenticate

__version__ = version.short()

__all__ = [
    "AuthenticationSession",
    "AuthenticationState",
    "BasicCredentials",
    "BasicScheme",
    "Challenge",
    "DigestCredentials",
    "DigestScheme",
    "FilePasswordLookup",
    "InMemoryPasswordLookup",
    "RequestContext",
    "authenticate",
    "buildChallenge",
]
