"""Tests for reading configuration documents."""

import io
from unittest.mock import MagicMock

import httpx
import pytest

from stagecraft.config.errors import DocumentReadError
from stagecraft.config.reader import is_url, read_configuration


class TestReadConfiguration:
    """Test read_configuration sources."""

    def test_reads_file(self, tmp_path):
        """Should read raw bytes from a file path."""
        config_path = tmp_path / "stagecraft.yaml"
        config_path.write_bytes(b"apiVersion: v1alpha3\n")

        assert read_configuration(str(config_path)) == b"apiVersion: v1alpha3\n"

    def test_missing_file(self, tmp_path):
        """Should raise DocumentReadError for missing files."""
        missing = str(tmp_path / "missing.yaml")
        with pytest.raises(DocumentReadError) as exc_info:
            read_configuration(missing)

        assert exc_info.value.source == missing
        assert isinstance(exc_info.value.__cause__, FileNotFoundError)

    def test_reads_stdin(self, mocker):
        """Should read standard input for '-'."""
        fake_stdin = MagicMock()
        fake_stdin.buffer = io.BytesIO(b"apiVersion: v1alpha1\n")
        mocker.patch("sys.stdin", fake_stdin)

        assert read_configuration("-") == b"apiVersion: v1alpha1\n"

    def test_downloads_url(self, mocker):
        """Should fetch http(s) sources."""
        request = httpx.Request("GET", "https://example.com/stagecraft.yaml")
        response = httpx.Response(200, content=b"apiVersion: v1alpha2\n", request=request)
        mock_get = mocker.patch("httpx.get", return_value=response)

        assert read_configuration("https://example.com/stagecraft.yaml") == (
            b"apiVersion: v1alpha2\n"
        )
        mock_get.assert_called_once_with(
            "https://example.com/stagecraft.yaml", timeout=30.0, follow_redirects=True
        )

    def test_download_http_error(self, mocker):
        """Should report non-success HTTP statuses."""
        request = httpx.Request("GET", "https://example.com/missing.yaml")
        mocker.patch("httpx.get", return_value=httpx.Response(404, request=request))

        with pytest.raises(DocumentReadError, match="HTTP 404"):
            read_configuration("https://example.com/missing.yaml")

    def test_download_connection_error(self, mocker):
        """Should wrap transport failures."""
        mocker.patch("httpx.get", side_effect=httpx.ConnectError("connection refused"))

        with pytest.raises(DocumentReadError, match="connection refused") as exc_info:
            read_configuration("http://localhost:1/stagecraft.yaml")

        assert isinstance(exc_info.value.__cause__, httpx.ConnectError)


class TestIsUrl:
    """Test URL detection."""

    @pytest.mark.parametrize(
        ("source", "expected"),
        [
            ("https://example.com/a.yaml", True),
            ("http://example.com/a.yaml", True),
            ("stagecraft.yaml", False),
            ("/etc/stagecraft.yaml", False),
            ("-", False),
        ],
    )
    def test_is_url(self, source, expected):
        """Should only treat http and https sources as URLs."""
        assert is_url(source) is expected
