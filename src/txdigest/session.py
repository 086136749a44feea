# -*- test-case-name: txdigest.test.test_session -*-
# Copyright (c) Twisted Matrix Laboratories.
# See LICENSE for details.

"""
The outcome of authenticating a single request.
"""

from typing import Optional

from constantly import NamedConstant, Names

from twisted.logger import Logger

from txdigest.context import RequestContext
from txdigest.error import SessionAlreadyUsed
from txdigest.interfaces import IAuthenticationScheme, IPasswordLookup


class AuthenticationState(Names):
    """
    The states an L{AuthenticationSession} goes through.

    @cvar UNCHALLENGED: Nothing has happened yet.
    @cvar CHALLENGED: A challenge was issued; the credentials are being
        checked.
    @cvar VALIDATED: The credentials were correct.  Terminal.
    @cvar REJECTED: No credentials, or wrong ones.  The challenge must be
        sent to the client.  Terminal.
    """

    UNCHALLENGED = NamedConstant()
    CHALLENGED = NamedConstant()
    VALIDATED = NamedConstant()
    REJECTED = NamedConstant()


class AuthenticationSession:
    """
    Authenticate one request with one scheme.

    @ivar state: The current L{AuthenticationState}.

    @ivar challenge: The C{WWW-Authenticate} header value issued for this
        request, or C{None} before L{authenticate} is called.  A new one is
        generated for every session.

    @ivar username: The authenticated username once L{state} is
        C{VALIDATED}, C{None} otherwise.
    """

    _log = Logger()

    def __init__(
        self, scheme: IAuthenticationScheme, passwords: IPasswordLookup
    ) -> None:
        self.scheme = scheme
        self.passwords = passwords
        self.state = AuthenticationState.UNCHALLENGED
        self.challenge: Optional[str] = None
        self.username: Optional[str] = None

    def authenticate(self, context: RequestContext) -> bool:
        """
        Challenge, extract and validate.

        @raise SessionAlreadyUsed: If this session already handled a request.

        @return: C{True} if the request is authenticated.
        """
        if self.state is not AuthenticationState.UNCHALLENGED:
            raise SessionAlreadyUsed(self.state.name)

        self.challenge = self.scheme.issueChallenge()
        self.state = AuthenticationState.CHALLENGED

        credentials = self.scheme.extractCredentials(context)
        if not self.scheme.validate(credentials, context, self.passwords):
            self.state = AuthenticationState.REJECTED
            return False

        self.username = credentials.username
        self.state = AuthenticationState.VALIDATED
        self._log.info(
            "{scheme} authentication of {username!r} to {realm!r} succeeded",
            scheme=self.scheme.name,
            username=self.username,
            realm=self.scheme.realm,
        )
        return True

    @property
    def rejected(self) -> bool:
        return self.state is AuthenticationState.REJECTED


def authenticate(
    context: RequestContext,
    scheme: IAuthenticationScheme,
    passwords: IPasswordLookup,
) -> AuthenticationSession:
    """
    Authenticate C{context} in a new L{AuthenticationSession}.

    @return: The finished session; look at its C{state}, and send its
        C{challenge} if it was rejected.
    """
    session = AuthenticationSession(scheme, passwords)
    session.authenticate(context)
    return session
