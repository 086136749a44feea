# -*- test-case-name: txdigest.test -*-
# Copyright (c) Twisted Matrix Laboratories.
# See LICENSE for details.

"""
Interface definitions for L{txdigest}.
"""

from zope.interface import Attribute, Interface


class IPasswordLookup(Interface):
    """
    A source of passwords, in recoverable form, for HTTP authentication.
    """

    def getPassword(username):
        """
        Look up the password of a user.

        @type username: C{str}
        @param username: The username supplied by the client.

        @rtype: C{str} or C{None}
        @return: The password, or C{None} if the user is unknown.
        """


class IAuthenticationScheme(Interface):
    """
    An HTTP authentication scheme: a way to generate a challenge, to find a
    client's answer to it in a request, and to check that answer.
    """

    name = Attribute(
        "A C{str} giving the name of the authentication scheme, as used in "
        "the WWW-Authenticate header.  For example, C{'Basic'} or "
        "C{'Digest'}."
    )

    realm = Attribute("The C{str} realm this scheme protects.")

    def issueChallenge():
        """
        Generate a new challenge.

        @rtype: C{str}
        @return: The value of a C{WWW-Authenticate} header.
        """

    def extractCredentials(context):
        """
        Find and parse the credentials of this scheme in a request.

        @type context: L{txdigest.context.RequestContext}

        @return: A scheme specific credentials object, or C{None} if the
            request carries no usable credentials for this scheme.
        """

    def validate(credentials, context, passwords):
        """
        Check credentials returned by L{extractCredentials}.

        @param credentials: The credentials, or C{None}.

        @type context: L{txdigest.context.RequestContext}
        @param context: The request the credentials were taken from.

        @type passwords: L{IPasswordLookup} provider

        @rtype: C{bool}
        @return: C{True} if the credentials are correct, C{False} otherwise.
            This never raises for malformed input.
        """
