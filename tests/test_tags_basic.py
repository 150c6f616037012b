"""
Basic tests for labels and redaction.
"""

import pytest

from apistack.redact import redact_env, redact_string, redact_url
from apistack.tags import base_labels, is_dns_label, is_managed, parse_labels


class TestLabels:
    """Test labeling functionality."""

    def test_base_labels(self):
        """Test base label generation."""
        labels = base_labels("my-api", "default")

        assert labels == {"app": "my-api", "managed-by": "apistack", "namespace": "default"}
        assert is_managed(labels)

    def test_base_labels_with_extra(self):
        """Test base labels with deployment ID and extra labels."""
        labels = base_labels("my-api", "payments", deployment_id="d-12345", extra={"team": "core"})

        assert labels["deployment-id"] == "d-12345"
        assert labels["team"] == "core"

    def test_parse_labels(self):
        """Test parsing user label strings."""
        labels = parse_labels(["owner=test-user", "stage=dev", "expr=a=b"])

        assert labels["owner"] == "test-user"
        assert labels["stage"] == "dev"
        assert labels["expr"] == "a=b"

    def test_parse_labels_invalid(self):
        """Test parsing invalid label strings."""
        with pytest.raises(ValueError, match="Invalid label format"):
            parse_labels(["invalid-label"])

        with pytest.raises(ValueError, match="Key and value must not be empty"):
            parse_labels(["=value"])

        with pytest.raises(ValueError, match="Key and value must not be empty"):
            parse_labels(["key="])

    @pytest.mark.parametrize("value,expected", [
        ("my-api", True),
        ("a", True),
        ("api2", True),
        ("My-api", False),
        ("my_api", False),
        ("-api", False),
        ("a" * 63, True),
        ("a" * 64, False),
    ])
    def test_is_dns_label(self, value, expected):
        """Test DNS label validation."""
        assert is_dns_label(value) is expected


class TestRedaction:
    """Test redaction helpers."""

    def test_redact_string(self):
        """Test token-like strings are masked."""
        assert redact_string("my password is hunter2") == "[REDACTED]"
        assert redact_string("a" * 40) == "[REDACTED]"
        assert redact_string("hello") == "hello"

    def test_redact_url(self):
        """Test the password segment of a URL is masked."""
        assert redact_url("postgresql://app:s3cr3t@db:5432/app") == "postgresql://app:[REDACTED]@db:5432/app"
        assert redact_url("http://example.com/path") == "http://example.com/path"

    def test_redact_env(self):
        """Test environment entries are masked by key or value."""
        assert redact_env("API_TOKEN", "abc") == "[REDACTED]"
        assert redact_env("LOG_LEVEL", "debug") == "debug"
        assert "s3cr3t" not in redact_env("DATABASE_URL", "postgresql://app:s3cr3t@db:5432/app")
