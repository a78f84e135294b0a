# SPDX-License-Identifier: Apache-2.0
"""Unit tests for thread identifier validation."""

import pytest

from quipclient.exceptions import InvalidIdentifierError
from quipclient.identifiers import (
    extract_identifier_from_url,
    resolve_thread_identifier,
    validate_thread_identifier,
)


class TestValidateThreadIdentifier:
    """Tests for validate_thread_identifier."""

    @pytest.mark.parametrize("value", ["a" * 10, "AbCdEfGhIjKl", "b" * 32])
    def test_valid(self, value):
        """Identifiers of 10 to 32 characters are accepted."""
        assert validate_thread_identifier(value) == value

    def test_whitespace_stripped(self):
        """Surrounding whitespace is removed."""
        assert validate_thread_identifier("  AbCdEfGhIjKl\n") == "AbCdEfGhIjKl"

    @pytest.mark.parametrize("value", ["", "   ", None])
    def test_empty(self, value):
        """Empty identifiers are rejected."""
        with pytest.raises(InvalidIdentifierError, match="empty"):
            validate_thread_identifier(value)

    @pytest.mark.parametrize("value", ["a" * 9, "b" * 33])
    def test_wrong_length(self, value):
        """Identifiers outside 10-32 characters are rejected."""
        with pytest.raises(InvalidIdentifierError, match="between 10 and 32"):
            validate_thread_identifier(value)


class TestExtractIdentifierFromUrl:
    """Tests for extract_identifier_from_url."""

    def test_first_path_segment(self):
        """The first path segment is the identifier."""
        url = "https://quip.com/AbCdEfGhIjKl/Quarterly-Plan"
        assert extract_identifier_from_url(url) == "AbCdEfGhIjKl"

    def test_without_title(self):
        """URLs without a title segment work too."""
        assert extract_identifier_from_url("https://acme.quip.com/AbCdEfGhIjKl") == (
            "AbCdEfGhIjKl"
        )

    @pytest.mark.parametrize(
        "url", ["https://quip.com/", "https://quip.com/short/Title", "not a url"]
    )
    def test_invalid(self, url):
        """URLs without a valid identifier are rejected."""
        with pytest.raises(InvalidIdentifierError):
            extract_identifier_from_url(url)


class TestResolveThreadIdentifier:
    """Tests for resolve_thread_identifier."""

    def test_url_or_bare(self):
        """Both URLs and bare identifiers resolve."""
        assert resolve_thread_identifier("https://quip.com/AbCdEfGhIjKl/x") == (
            "AbCdEfGhIjKl"
        )
        assert resolve_thread_identifier("AbCdEfGhIjKl") == "AbCdEfGhIjKl"
