# Copyright (c) Twisted Matrix Laboratories.
# See LICENSE for details.

"""
This example shows how to protect a Twisted Web resource with Digest
authentication.

To run the example:
    $ python webdigest.py

When you visit http://127.0.0.1:8889/, the page will ask for an username &
password. See the code in main() to get the correct username & password!
"""

import sys

from twisted.internet import reactor
from twisted.logger import globalLogBeginner, textFileLogObserver
from twisted.web import resource, server

from txdigest import (
    DigestScheme,
    InMemoryPasswordLookup,
    RequestContext,
    authenticate,
)


class GuardedResource(resource.Resource):
    """
    A resource which requires Digest authentication in order to access.
    """

    isLeaf = True

    def __init__(self, scheme, passwords):
        super().__init__()
        self.scheme = scheme
        self.passwords = passwords

    def render(self, request):
        session = authenticate(
            RequestContext.fromRequest(request), self.scheme, self.passwords
        )
        if session.rejected:
            request.setResponseCode(401)
            request.setHeader(b"www-authenticate", session.challenge.encode("ascii"))
            return b"Please authenticate"
        return f"Authorized as {session.username}!".encode("utf-8")


def main():
    globalLogBeginner.beginLoggingTo([textFileLogObserver(sys.stdout)])
    site = server.Site(
        GuardedResource(DigestScheme("example.com"), InMemoryPasswordLookup(joe="blow"))
    )
    reactor.listenTCP(8889, site)
    reactor.run()


if __name__ == "__main__":
    main()
