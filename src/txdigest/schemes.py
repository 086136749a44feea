# -*- test-case-name: txdigest.test.test_schemes -*-
# Copyright (c) Twisted Matrix Laboratories.
# See LICENSE for details.

"""
HTTP authentication schemes.

L{DigestScheme} implements RFC 2617 Digest authentication with the C{"auth"}
quality of protection; L{BasicScheme} implements Basic authentication.  Both
provide L{IAuthenticationScheme}.
"""

from __future__ import annotations

import binascii
import hmac
import itertools
import time
from base64 import b64decode
from typing import Dict, Optional

import attr
from zope.interface import implementer

from twisted.cred.error import LoginFailed
from twisted.logger import Logger
from twisted.python.randbytes import secureRandom

from txdigest import error
from txdigest._digest import algorithms, calcHA1, calcHA2, calcResponse, hexHash
from txdigest._parse import parseDigestFields
from txdigest.context import RequestContext
from txdigest.interfaces import IAuthenticationScheme, IPasswordLookup

# Shared by every scheme in the process; next() on a count is atomic.
_tokenCounter = itertools.count()

# Stands in for the password of an unknown user, so that a rejection costs the
# same whether or not the username exists.
_PLACEHOLDER_PASSWORD = "\x00"


def _encode(value: str) -> bytes:
    return value.encode("utf-8", "surrogatepass")


def _matchesScheme(header: str, name: str) -> bool:
    return header[: len(name)].lower() == name.lower()


@attr.s(frozen=True)
class Challenge:
    """
    A Digest challenge.

    @ivar realm: The protection space.
    @ivar nonce: A server generated token the client hashes into its proof.
    @ivar opaque: A server generated token the client sends back unchanged.
    @ivar qop: The quality of protection; always C{"auth"}.
    @ivar algorithm: The digest algorithm to announce, or C{None} for the
        default, MD5.
    """

    realm: str = attr.ib()
    nonce: str = attr.ib()
    opaque: str = attr.ib()
    qop: str = attr.ib(default="auth")
    algorithm: Optional[str] = attr.ib(default=None)

    def headerValue(self) -> str:
        """
        Render the challenge as the value of a C{WWW-Authenticate} header.
        """
        value = 'Digest realm="{}",qop="{}",nonce="{}",opaque="{}"'.format(
            self.realm, self.qop, self.nonce, self.opaque
        )
        if self.algorithm is not None:
            value += ",algorithm={}".format(self.algorithm.upper())
        return value


@attr.s(frozen=True)
class DigestCredentials:
    """
    The fields of a Digest C{Authorization} header.
    """

    nonce: str = attr.ib()
    nc: str = attr.ib()
    cnonce: str = attr.ib()
    qop: str = attr.ib()
    username: str = attr.ib()
    uri: str = attr.ib()
    response: str = attr.ib()

    @classmethod
    def fromString(cls, data: str) -> Optional[DigestCredentials]:
        """
        Parse a credential string.

        @return: The credentials, or C{None} if any required field is missing.
        """
        fields = parseDigestFields(data)
        if fields is None:
            return None
        return cls(**fields)

    def asDict(self) -> Dict[str, str]:
        return attr.asdict(self)


@attr.s(frozen=True)
class BasicCredentials:
    """
    The username and password of a Basic C{Authorization} header.
    """

    username: str = attr.ib()
    password: str = attr.ib(repr=False)


@implementer(IAuthenticationScheme)
class DigestScheme:
    """
    Support for RFC 2617 HTTP Digest Authentication.

    Issued nonces are not remembered: any nonce the client sends back is
    accepted as long as the proof computed with it is correct.

    @ivar realm: case sensitive string that specifies the realm portion of
        the challenge.

    @ivar algorithm: The lowercase name of the hash algorithm used both for
        the challenge tokens and for the proof.
    """

    name = "Digest"
    qop = "auth"

    _log = Logger()

    def __init__(self, realm: str, algorithm: str = "md5") -> None:
        """
        @param realm: The realm to announce and to hash into H(A1).

        @param algorithm: Case insensitive name of the hash algorithm to use.
            Must be one of C{'md5'}, C{'sha'} or C{'sha-256'}.

        @raise ValueError: If C{algorithm} is not supported.
        """
        algorithm = algorithm.lower()
        if algorithm not in algorithms:
            raise ValueError(f"Unsupported digest algorithm: {algorithm!r}")
        self.realm = realm
        self.algorithm = algorithm

    def _getTime(self) -> float:
        """
        Parameterize the time based seed used in C{_generateToken}.
        """
        return time.time()

    def _generateToken(self) -> str:
        """
        Create a random value suitable for use as the nonce or opaque
        parameter of a challenge.
        """
        return hexHash(
            self.algorithm,
            str(next(_tokenCounter)),
            repr(self._getTime()),
            secureRandom(16).hex(),
        )

    def buildChallenge(self) -> Challenge:
        """
        Generate a challenge with a fresh nonce and opaque.
        """
        return Challenge(
            realm=self.realm,
            nonce=self._generateToken(),
            opaque=self._generateToken(),
            qop=self.qop,
            algorithm=None if self.algorithm == "md5" else self.algorithm,
        )

    def issueChallenge(self) -> str:
        return self.buildChallenge().headerValue()

    def extract(self, context: RequestContext) -> Optional[str]:
        """
        Find the raw Digest credential string in a request.

        The pre-parsed slot wins over the C{Authorization} header.  A
        redirected C{Authorization} header is promoted first.

        @return: The credential string without its scheme token, or C{None}.
        """
        context.promoteRedirectedAuthorization()
        digest = context.preParsedDigest
        if digest is not None:
            return digest
        authorization = context.authorization
        if authorization is not None and _matchesScheme(authorization, self.name):
            return authorization[len(self.name) + 1 :]
        return None

    def extractCredentials(
        self, context: RequestContext
    ) -> Optional[DigestCredentials]:
        data = self.extract(context)
        if data is None:
            return None
        try:
            return self.parse(data)
        except error.MalformedCredentials as e:
            self._log.debug("Ignoring Digest credentials: {reason!r}", reason=e)
            return None

    def parse(self, data: str) -> DigestCredentials:
        """
        Parse a raw credential string.

        @raise error.MalformedCredentials: If a required field is missing or
            repeated, or a quoted value is not terminated.
        """
        credentials = DigestCredentials.fromString(data)
        if credentials is None:
            raise error.MalformedCredentials(
                "Invalid response, required fields missing or repeated."
            )
        return credentials

    def expectedResponse(
        self, credentials: DigestCredentials, method: str, password: str
    ) -> str:
        """
        Compute the proof a client knowing C{password} would have sent along
        with C{credentials}.
        """
        return calcResponse(
            self.algorithm,
            calcHA1(self.algorithm, credentials.username, self.realm, password),
            calcHA2(self.algorithm, method, credentials.uri),
            credentials.nonce,
            credentials.nc,
            credentials.cnonce,
            credentials.qop,
        )

    def verify(
        self,
        credentials: Optional[DigestCredentials],
        context: RequestContext,
        passwords: IPasswordLookup,
    ) -> str:
        """
        Check Digest credentials.

        @return: The authenticated username.

        @raise error.NoCredentials: If C{credentials} is C{None}.
        @raise error.UnknownUser: If the user has no password.
        @raise error.ProofMismatch: If the proof is wrong.
        """
        if credentials is None:
            raise error.NoCredentials("No valid Digest credentials given.")

        password = passwords.getPassword(credentials.username)
        expected = self.expectedResponse(
            credentials,
            context.method,
            _PLACEHOLDER_PASSWORD if password is None else password,
        )
        matched = hmac.compare_digest(_encode(expected), _encode(credentials.response))
        if password is None:
            raise error.UnknownUser(credentials.username)
        if not matched:
            raise error.ProofMismatch(credentials.username)
        return credentials.username

    def validate(
        self,
        credentials: Optional[DigestCredentials],
        context: RequestContext,
        passwords: IPasswordLookup,
    ) -> bool:
        try:
            self.verify(credentials, context, passwords)
        except LoginFailed as e:
            self._log.debug(
                "Digest authentication failed in realm {realm!r}: {reason!r}",
                realm=self.realm,
                reason=e,
            )
            return False
        return True


@implementer(IAuthenticationScheme)
class BasicScheme:
    """
    Support for HTTP Basic Authentication.

    The password travels base64 encoded; use it over TLS only.
    """

    name = "Basic"

    _log = Logger()

    def __init__(self, realm: str) -> None:
        self.realm = realm

    def issueChallenge(self) -> str:
        return f'Basic realm="{self.realm}"'

    def extractCredentials(
        self, context: RequestContext
    ) -> Optional[BasicCredentials]:
        """
        Decode the C{username:password} pair of a Basic C{Authorization}
        header.

        @return: A L{BasicCredentials}, or C{None} if the header is
            missing, of another scheme, or not decodable.
        """
        context.promoteRedirectedAuthorization()
        authorization = context.authorization
        if authorization is None or not _matchesScheme(authorization, self.name):
            return None
        try:
            decoded = b64decode(authorization[len(self.name) + 1 :].strip())
        except (binascii.Error, ValueError):
            return None
        username, sep, password = decoded.decode("utf-8", "replace").partition(":")
        if not sep:
            return None
        return BasicCredentials(username, password)

    def validate(
        self,
        credentials: Optional[BasicCredentials],
        context: RequestContext,
        passwords: IPasswordLookup,
    ) -> bool:
        if credentials is None:
            return False
        username = credentials.username
        password = passwords.getPassword(username)
        matched = hmac.compare_digest(
            _encode(credentials.password),
            _encode(_PLACEHOLDER_PASSWORD if password is None else password),
        )
        if password is None or not matched:
            self._log.debug(
                "Basic authentication failed in realm {realm!r} for {username!r}",
                realm=self.realm,
                username=username,
            )
            return False
        return True


def buildChallenge(realm: str) -> str:
    """
    Build a fresh MD5 Digest C{WWW-Authenticate} header value for C{realm}.
    """
    return DigestScheme(realm).issueChallenge()
