# -*- test-case-name: txdigest.test.test_passwords -*-
# Copyright (c) Twisted Matrix Laboratories.
# See LICENSE for details.

"""
L{IPasswordLookup} implementations.
"""

from typing import Dict, Optional

from zope.interface import implementer

from twisted.logger import Logger

from txdigest.interfaces import IPasswordLookup


@implementer(IPasswordLookup)
class InMemoryPasswordLookup:
    """
    An extremely simple password lookup.

    This is only of use in tests and examples.  Passwords are kept in memory,
    in plaintext.
    """

    def __init__(self, **users: str) -> None:
        self.users: Dict[str, str] = users

    def addUser(self, username: str, password: str) -> None:
        self.users[username] = password

    def getPassword(self, username: str) -> Optional[str]:
        return self.users.get(username)


@implementer(IPasswordLookup)
class FilePasswordLookup:
    """
    A file-based, text-based username/password database.

    Records in the datafile for this class are delimited by a particular
    string.  The username appears in a fixed field of the columns delimited
    by this string, as does the password.  Both fields are specifiable.  The
    passwords must be stored in plaintext, since Digest authentication needs
    them to compute the expected response.

    The file is read again on every lookup.
    """

    _log = Logger()

    def __init__(
        self,
        filename: str,
        delim: str = ":",
        usernameField: int = 0,
        passwordField: int = 1,
        caseSensitive: bool = True,
    ) -> None:
        """
        @param filename: The name of the file from which to read username and
            password information.

        @param delim: The field delimiter used in the file.

        @param usernameField: The index of the username after splitting a
            line on the delimiter.

        @param passwordField: The index of the password after splitting a
            line on the delimiter.

        @param caseSensitive: If true, consider the case of the username when
            performing a lookup.  Ignore it otherwise.
        """
        self.filename = filename
        self.delim = delim
        self.ufield = usernameField
        self.pfield = passwordField
        self.caseSensitive = caseSensitive

    def getPassword(self, username: str) -> Optional[str]:
        """
        Find the password of C{username} in the file.

        @return: The password, or C{None} if the user is not listed or the
            file cannot be read or is not UTF-8.
        """
        if not self.caseSensitive:
            username = username.lower()
        try:
            with open(self.filename, encoding="utf-8") as f:
                for line in f:
                    parts = line.rstrip("\r\n").split(self.delim)
                    if self.ufield >= len(parts) or self.pfield >= len(parts):
                        continue
                    candidate = parts[self.ufield]
                    if not self.caseSensitive:
                        candidate = candidate.lower()
                    if candidate == username:
                        return parts[self.pfield]
        except (OSError, UnicodeDecodeError):
            self._log.failure(
                "Unable to read password file {filename}", filename=self.filename
            )
        return None
