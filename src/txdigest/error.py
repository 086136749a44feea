# -*- test-case-name: txdigest.test.test_schemes -*-
# Copyright (c) Twisted Matrix Laboratories.
# See LICENSE for details.

"""
Authentication errors.

Every L{LoginFailed} raised here is collapsed into a plain "not
authenticated" answer by L{txdigest.schemes} and L{txdigest.session}; they
exist so the reason for a rejection can be logged and tested.
"""

from twisted.cred.error import LoginFailed, UnauthorizedLogin


class NoCredentials(LoginFailed):
    """
    The request carried no credentials for the scheme in use.
    """


class MalformedCredentials(LoginFailed):
    """
    The credential string could not be parsed, or lacked a required field.
    """


class UnknownUser(UnauthorizedLogin):
    """
    The password lookup has no password for the given username.
    """


class ProofMismatch(UnauthorizedLogin):
    """
    The proof supplied by the client does not match the expected one.
    """


class SessionAlreadyUsed(Exception):
    """
    L{txdigest.session.AuthenticationSession.authenticate} was called on a
    session which already handled a request.
    """
