"""Tests for configuration validation."""

import os
import pytest
from unittest.mock import patch


class TestConfigValidation:
    """Test startup config validation."""

    VALID_ENV = {
        "SUPABASE_URL": "https://test.supabase.co",
        "SUPABASE_KEY": "test-key-123",
        "RESEND_API_KEY": "re_test",
        "REPORT_RATE_LIMIT_MAX": "5",
        "LOG_LEVEL": "DEBUG",
    }

    def test_valid_config_loads_successfully(self):
        """All required vars present → Config loads without error."""
        with patch.dict(os.environ, self.VALID_ENV, clear=False):
            from grant_triage.config.config import validate_config

            config = validate_config()
            assert config.supabase_url == "https://test.supabase.co"
            assert config.supabase_key == "test-key-123"
            assert config.resend_api_key == "re_test"
            assert config.report_rate_limit_max == 5
            assert config.log_level == "DEBUG"

    def test_missing_required_var_raises_error(self):
        """Missing required vars → ValueError naming them."""
        env_clear = {
            k: v for k, v in os.environ.items()
            if k not in ("SUPABASE_URL", "SUPABASE_KEY")
        }

        with patch.dict(os.environ, env_clear, clear=True):
            from grant_triage.config.config import Config, validate_config

            with patch.dict(Config.model_config, {"env_file": None}):
                with pytest.raises(ValueError) as exc_info:
                    validate_config()
            err_msg = str(exc_info.value)
            assert "SUPABASE_URL" in err_msg
            assert "SUPABASE_KEY" in err_msg

    def test_optional_vars_have_defaults(self):
        """Optional vars missing → defaults used."""
        minimal_env = {
            "SUPABASE_URL": "https://test.supabase.co",
            "SUPABASE_KEY": "test-key",
        }
        env_clear = {
            k: v for k, v in os.environ.items()
            if k not in ("RESEND_API_KEY", "REPORT_RATE_LIMIT_MAX",
                         "REPORT_RATE_LIMIT_WINDOW_SECONDS", "REPORT_TOP_N", "LOG_LEVEL")
        }
        env_clear.update(minimal_env)

        with patch.dict(os.environ, env_clear, clear=True):
            from grant_triage.config.config import Config, validate_config

            with patch.dict(Config.model_config, {"env_file": None}):
                config = validate_config()
            assert config.resend_api_key is None
            assert config.report_rate_limit_max == 3
            assert config.report_rate_limit_window_seconds == 3600
            assert config.report_top_n == 3
            assert config.log_level == "INFO"
