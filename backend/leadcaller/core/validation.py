"""
Provider Validation Module
Validates provider credentials on startup
"""
import logging
from typing import List, Optional, Tuple
from dataclasses import dataclass

from leadcaller.core.config import Settings
from leadcaller.core.exceptions import ConfigurationError

logger = logging.getLogger(__name__)


@dataclass
class ValidationResult:
    """Result of a configuration validation check."""
    provider: str
    setting: str
    is_valid: bool
    message: str


class ProviderValidator:
    """
    Validates provider configurations at startup.
    
    Ensures all required credentials are present before the
    application starts accepting requests.
    """
    
    # (settings attribute, env var, description) by provider
    REQUIRED_SETTINGS = {
        "telephony": [
            ("twilio_account_sid", "TWILIO_ACCOUNT_SID", "Twilio account"),
            ("twilio_auth_token", "TWILIO_AUTH_TOKEN", "Twilio account"),
            ("twilio_phone_number", "TWILIO_PHONE_NUMBER", "Twilio sender number"),
        ],
        "voice_ai": [
            ("ultravox_api_key", "ULTRAVOX_API_KEY", "Ultravox sessions"),
        ],
        "crm": [
            ("ghl_api_key", "GHL_API_KEY", "GoHighLevel CRM"),
            ("ghl_location_id", "GHL_LOCATION_ID", "GoHighLevel location"),
        ],
    }
    
    # Optional but recommended
    OPTIONAL_SETTINGS = {
        "server": [("server_base_url", "SERVER_BASE_URL", "Public base URL")],
    }
    
    def __init__(self, settings: Settings):
        self.settings = settings
        self.results: List[ValidationResult] = []
    
    def validate_all(self) -> Tuple[bool, List[ValidationResult]]:
        """
        Validate all provider configurations.
        
        Returns:
            Tuple of (all_valid, list of results)
        """
        self.results = []
        
        for provider, settings_list in self.REQUIRED_SETTINGS.items():
            for attr, env_var, description in settings_list:
                if getattr(self.settings, attr, None):
                    self._add_success(provider, env_var, f"{description} configured")
                else:
                    self._add_error(provider, env_var,
                        f"{description} requires {env_var} to be set")
        
        for provider, settings_list in self.OPTIONAL_SETTINGS.items():
            for attr, env_var, description in settings_list:
                if getattr(self.settings, attr, None):
                    self._add_success(provider, env_var, f"{description} configured")
                else:
                    self._add_warning(provider, env_var,
                        f"{description} not configured (using {self.settings.base_url})")
        
        all_valid = not any(not r.is_valid for r in self.results)
        return all_valid, self.results
    
    def missing_settings(self) -> List[str]:
        """Env var names of required settings that failed validation."""
        return [r.setting for r in self.results if not r.is_valid]
    
    def _add_success(self, provider: str, setting: str, message: str):
        self.results.append(ValidationResult(provider, setting, True, message))
    
    def _add_error(self, provider: str, setting: str, message: str):
        self.results.append(ValidationResult(provider, setting, False, message))
    
    def _add_warning(self, provider: str, setting: str, message: str):
        self.results.append(ValidationResult(provider, setting, True, f"WARNING: {message}"))
    
    def log_results(self):
        """Log all validation results."""
        errors = [r for r in self.results if not r.is_valid]
        warnings = [r for r in self.results if r.is_valid and "WARNING" in r.message]
        successes = [r for r in self.results if r.is_valid and "WARNING" not in r.message]
        
        if successes:
            logger.info("Provider configuration validated:")
            for r in successes:
                logger.info(f"  ✓ [{r.provider}] {r.message}")
        
        for r in warnings:
            logger.warning(f"  ⚠ [{r.provider}] {r.message}")
        
        if errors:
            logger.error("Provider configuration errors:")
            for r in errors:
                logger.error(f"  ✗ [{r.provider}] {r.message}")
    
    def get_error_summary(self) -> Optional[str]:
        """Get summary of errors for exception message."""
        errors = [r for r in self.results if not r.is_valid]
        if not errors:
            return None
        
        lines = ["Missing required environment variables:"]
        for r in errors:
            lines.append(f"  - {r.setting}: {r.message}")
        return "\n".join(lines)


def validate_providers_on_startup(settings: Settings) -> None:
    """
    Validate all providers at startup.
    
    Raises:
        ConfigurationError: If required configuration is missing
    """
    validator = ProviderValidator(settings)
    all_valid, _ = validator.validate_all()
    validator.log_results()
    
    if not all_valid:
        logger.error(f"Refusing to start, missing: {', '.join(validator.missing_settings())}")
        raise ConfigurationError(validator.get_error_summary())
    
    logger.info(
        f"Twilio configuration: account_sid={settings.masked_account_sid()}, "
        f"phone_number={settings.twilio_phone_number or 'missing'}"
    )
    logger.info("All provider configurations validated successfully")
