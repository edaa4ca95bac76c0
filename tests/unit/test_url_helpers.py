"""Tests for URL helper utilities"""

from specweaver.utils.url_helpers import build_api_url, is_valid_url, looks_like_yaml_source


class TestIsValidUrl:
    """Tests for is_valid_url function"""

    def test_accepts_http_and_https(self) -> None:
        assert is_valid_url("https://example.com/openapi.json") is True
        assert is_valid_url("http://localhost:8080/v3/api-docs") is True

    def test_rejects_missing_host(self) -> None:
        """Test that URLs without a netloc are rejected"""
        assert is_valid_url("https://") is False
        assert is_valid_url("/openapi.json") is False

    def test_rejects_other_schemes(self) -> None:
        assert is_valid_url("ftp://example.com/spec.yaml") is False
        assert is_valid_url("file:///tmp/spec.json") is False

    def test_rejects_text(self) -> None:
        assert is_valid_url("not a url") is False
        assert is_valid_url("") is False


class TestBuildApiUrl:
    """Tests for build_api_url function"""

    def test_joins_with_single_slash(self) -> None:
        """Test slashes are normalized at the join"""
        assert build_api_url("https://example.com/", "/api/projects") == "https://example.com/api/projects"
        assert build_api_url("https://example.com", "api/projects") == "https://example.com/api/projects"

    def test_keeps_base_path_prefix(self) -> None:
        assert (
            build_api_url("https://example.com/workspace", "/api/endpoints/1/body")
            == "https://example.com/workspace/api/endpoints/1/body"
        )

    def test_absolute_path_returned_unchanged(self) -> None:
        assert build_api_url("https://example.com", "https://other.com/x") == "https://other.com/x"


class TestLooksLikeYamlSource:
    """Tests for looks_like_yaml_source function"""

    def test_yaml_extensions(self) -> None:
        assert looks_like_yaml_source("openapi.yaml") is True
        assert looks_like_yaml_source("https://example.com/api/spec.YML?v=2") is True

    def test_json_and_extensionless(self) -> None:
        assert looks_like_yaml_source("openapi.json") is False
        assert looks_like_yaml_source("https://example.com/v3/api-docs") is False
