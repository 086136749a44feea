# Copyright (c) Twisted Matrix Laboratories.
# See LICENSE for details.

"""
Tests for L{txdigest._parse}.
"""

from hypothesis import given
from hypothesis import strategies as st

from twisted.trial.unittest import SynchronousTestCase

from txdigest._parse import REQUIRED_FIELDS, parseDigestFields
from txdigest.schemes import DigestCredentials

FIELDS = {
    "username": "alice",
    "nonce": "abc123",
    "uri": "/protected",
    "qop": "auth",
    "nc": "00000001",
    "cnonce": "xyz789",
    "response": "6629fae49393a05397450978507c4ef1",
}


def formatFields(quote='"', separator=", ", **overrides):
    """
    Render L{FIELDS}, updated with C{overrides}, as a credential string.
    Fields overridden with C{None} are left out.
    """
    fields = dict(FIELDS, **overrides)
    return separator.join(
        f"{key}={quote}{value}{quote}"
        for key, value in fields.items()
        if value is not None
    )


class ParseDigestFieldsTests(SynchronousTestCase):
    """
    Tests for L{parseDigestFields}.
    """

    def test_quoted(self):
        """
        Double quoted values are unquoted.
        """
        self.assertEqual(parseDigestFields(formatFields()), FIELDS)

    def test_singleQuoted(self):
        """
        Single quoted values are unquoted.
        """
        self.assertEqual(parseDigestFields(formatFields(quote="'")), FIELDS)

    def test_unquoted(self):
        """
        Unquoted values run up to the next comma or whitespace.
        """
        self.assertEqual(parseDigestFields(formatFields(quote="")), FIELDS)
        self.assertEqual(
            parseDigestFields(formatFields(quote="", separator=" ")), FIELDS
        )

    def test_commaInQuotedValue(self):
        """
        A quoted value may contain commas and whitespace.
        """
        fields = parseDigestFields(formatFields(uri="/some, path/"))
        self.assertEqual(fields["uri"], "/some, path/")

    def test_otherQuoteInValue(self):
        """
        A value is closed only by the quote character which opened it.
        """
        fields = parseDigestFields(formatFields(username="o'brien"))
        self.assertEqual(fields["username"], "o'brien")

    def test_emptyQuotedValue(self):
        """
        A quoted value may be empty.
        """
        fields = parseDigestFields(formatFields(cnonce=""))
        self.assertEqual(fields["cnonce"], "")

    def test_order(self):
        """
        The order of the fields does not matter.
        """
        data = ", ".join(reversed(formatFields().split(", ")))
        self.assertEqual(parseDigestFields(data), FIELDS)

    def test_unknownFieldsIgnored(self):
        """
        Fields which are not required, such as C{opaque} and C{realm}, are
        left out of the result.
        """
        data = 'realm="example", opaque="0123", algorithm=MD5, ' + formatFields()
        self.assertEqual(parseDigestFields(data), FIELDS)

    def test_whitespaceAroundEquals(self):
        """
        Whitespace around C{=} is allowed.
        """
        data = formatFields().replace("=", " = ")
        self.assertEqual(parseDigestFields(data), FIELDS)

    def test_strayWords(self):
        """
        Words which are not part of a C{key=value} item are skipped.
        """
        data = "garbage, " + formatFields(separator=" junk, ")
        self.assertEqual(parseDigestFields(data), FIELDS)

    def test_missingField(self):
        """
        If any required field is missing, the whole parse fails.
        """
        for field in REQUIRED_FIELDS:
            self.assertIsNone(
                parseDigestFields(formatFields(**{field: None})), field
            )

    def test_duplicateField(self):
        """
        A required field given twice fails the parse.
        """
        data = formatFields() + ', uri="/other"'
        self.assertIsNone(parseDigestFields(data))

    def test_duplicateUnknownField(self):
        """
        Unknown fields may be repeated.
        """
        data = formatFields() + ', opaque="1", opaque="2"'
        self.assertEqual(parseDigestFields(data), FIELDS)

    def test_prefixedKey(self):
        """
        A key only matches a field if it is the entire key; C{cnonce} is not
        a C{nonce}.
        """
        data = formatFields(nonce=None) + ', xnonce="abc123"'
        self.assertIsNone(parseDigestFields(data))

    def test_unterminatedQuote(self):
        """
        A quoted value without its closing quote fails the parse.
        """
        self.assertIsNone(parseDigestFields(formatFields() + ', opaque="abc'))

    def test_empty(self):
        """
        An empty string has no fields.
        """
        self.assertIsNone(parseDigestFields(""))

    @given(st.text())
    def test_total(self, data):
        """
        Any string parses to either C{None} or the required fields.
        """
        fields = parseDigestFields(data)
        if fields is not None:
            self.assertEqual(set(fields), set(REQUIRED_FIELDS))


class DigestCredentialsTests(SynchronousTestCase):
    """
    Tests for L{DigestCredentials.fromString}.
    """

    def test_fromString(self):
        """
        The fields of a valid credential string become attributes.
        """
        credentials = DigestCredentials.fromString(formatFields())
        self.assertEqual(credentials.username, "alice")
        self.assertEqual(credentials.nc, "00000001")
        self.assertEqual(credentials.asDict(), FIELDS)

    def test_fromStringInvalid(self):
        """
        An incomplete credential string gives C{None}, not partial
        credentials.
        """
        self.assertIsNone(DigestCredentials.fromString(formatFields(response=None)))
