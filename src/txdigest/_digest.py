# -*- test-case-name: txdigest.test.test_digest -*-
# Copyright (c) Twisted Matrix Laboratories.
# See LICENSE for details.

"""
Calculations for HTTP Digest authentication.

@see: U{https://www.rfc-editor.org/rfc/rfc2617}
"""

from hashlib import md5, sha1, sha256
from typing import Callable, Dict

# The digest math

algorithms: Dict[str, Callable] = {
    "md5": md5,
    "sha": sha1,
    "sha-256": sha256,
}


def hexHash(algorithm: str, *parts: str) -> str:
    """
    Hash the colon-joined C{parts} with C{algorithm}.

    @param algorithm: A key of L{algorithms}.
    @param parts: Text values, encoded as UTF-8 before hashing.

    @return: The lowercase hexadecimal digest.
    """
    data = ":".join(parts).encode("utf-8", "surrogatepass")
    return algorithms[algorithm](data).hexdigest()


def calcHA1(algorithm: str, username: str, realm: str, password: str) -> str:
    """
    Compute H(A1) from RFC 2617 for the C{"auth"} quality of protection.
    """
    return hexHash(algorithm, username, realm, password)


def calcHA2(algorithm: str, method: str, uri: str) -> str:
    """
    Compute H(A2) from RFC 2617.

    @param method: The request method.
    @param uri: The C{uri} field of the credentials, which is not required to
        match the request target for the digest to be computed.
    """
    return hexHash(algorithm, method, uri)


def calcResponse(
    algorithm: str, HA1: str, HA2: str, nonce: str, nc: str, cnonce: str, qop: str
) -> str:
    """
    Compute the request digest the client is expected to send.

    @param HA1: The H(A1) value, as computed by L{calcHA1}.
    @param HA2: The H(A2) value, as computed by L{calcHA2}.
    @param nonce: The challenge nonce.
    @param nc: The (client) nonce count value for this response.
    @param cnonce: The client nonce.
    @param qop: The Quality-of-Protection value.
    """
    return hexHash(algorithm, HA1, nonce, nc, cnonce, qop, HA2)
