# -*- test-case-name: txdigest.test.test_context -*-
# Copyright (c) Twisted Matrix Laboratories.
# See LICENSE for details.

"""
The request data consumed by authentication schemes.
"""

from __future__ import annotations

from typing import Dict, MutableMapping, Optional

import attr

from twisted.web.iweb import IRequest


def _latin1(value: bytes) -> str:
    return value.decode("iso-8859-1")


@attr.s
class RequestContext:
    """
    The parts of a request an authentication scheme looks at.

    Header values live in C{environ} under their CGI names, so that the
    mapping given to a WSGI application can be used as is.

    @ivar method: The request method, for example C{"GET"}.
    @ivar uri: The request target.
    @ivar environ: A mutable mapping of CGI-style variables.
    """

    AUTHORIZATION = "HTTP_AUTHORIZATION"
    REDIRECT_AUTHORIZATION = "REDIRECT_HTTP_AUTHORIZATION"
    DIGEST = "AUTH_DIGEST"

    method: str = attr.ib()
    uri: str = attr.ib()
    environ: MutableMapping[str, str] = attr.ib(factory=dict)

    @classmethod
    def fromEnviron(cls, environ: MutableMapping[str, str]) -> RequestContext:
        """
        Wrap a WSGI environ.  The mapping is used directly, so changes made by
        L{promoteRedirectedAuthorization} are visible to the caller.
        """
        uri = environ.get("REQUEST_URI")
        if uri is None:
            uri = environ.get("SCRIPT_NAME", "") + environ.get("PATH_INFO", "")
            if environ.get("QUERY_STRING"):
                uri += "?" + environ["QUERY_STRING"]
        return cls(environ.get("REQUEST_METHOD", "GET"), uri, environ)

    @classmethod
    def fromRequest(cls, request: IRequest) -> RequestContext:
        """
        Build a context from a L{twisted.web} request.
        """
        environ: Dict[str, str] = {}
        authorization = request.getHeader(b"authorization")
        if authorization is not None:
            environ[cls.AUTHORIZATION] = _latin1(authorization)
        return cls(_latin1(request.method), _latin1(request.uri), environ)

    @property
    def authorization(self) -> Optional[str]:
        """
        The value of the C{Authorization} header, if any.
        """
        return self.environ.get(self.AUTHORIZATION)

    @property
    def preParsedDigest(self) -> Optional[str]:
        """
        A Digest credential string already split from its scheme token by
        the server, if any.
        """
        return self.environ.get(self.DIGEST)

    def promoteRedirectedAuthorization(self) -> None:
        """
        Move the value some gateways (FastCGI behind mod_rewrite, for
        instance) store under C{REDIRECT_HTTP_AUTHORIZATION} to the standard
        C{HTTP_AUTHORIZATION} slot.
        """
        if self.REDIRECT_AUTHORIZATION in self.environ:
            self.environ[self.AUTHORIZATION] = self.environ.pop(
                self.REDIRECT_AUTHORIZATION
            )
