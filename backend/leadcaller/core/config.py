"""
Configuration Management
Loads settings from environment variables and the .env file.

A single Settings instance is created at startup and handed to every
component constructor.
"""
from typing import Optional
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment"""
    
    environment: str = "development"
    log_level: str = "INFO"
    
    # Twilio
    twilio_account_sid: str = ""
    twilio_auth_token: str = ""
    twilio_phone_number: str = ""
    
    # Ultravox
    ultravox_api_key: str = ""
    ultravox_api_url: str = "https://api.ultravox.ai/api/calls"
    ultravox_model: str = "fixie-ai/ultravox-70B"
    ultravox_voice: str = "b0e6b5c1-3100-44d5-8578-9015aa3023ae"
    ultravox_temperature: float = 0.4
    ultravox_first_speaker: str = "FIRST_SPEAKER_USER"
    voice_ai_timeout_seconds: float = 30.0
    agent_name: str = "Claire"
    
    # GoHighLevel CRM
    ghl_api_key: str = ""
    ghl_location_id: str = ""
    ghl_api_url: str = "https://rest.gohighlevel.com/v1"
    crm_timeout_seconds: float = 30.0
    
    # Public URL detection
    server_base_url: Optional[str] = None
    vercel_url: Optional[str] = None
    render_external_url: Optional[str] = None
    port: int = 10000
    
    # Tagging
    tagging_webhook_url: Optional[str] = None
    busy_tag: str = "call-busy"
    no_answer_tag: str = "call-no-answer"
    default_contact_tag: str = "call-contact"
    
    # SMS
    sms_timeout_seconds: int = 30
    sms_max_price: float = 0.15
    
    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"
    
    @property
    def base_url(self) -> str:
        """
        Externally reachable base URL for webhooks.
        
        Explicit SERVER_BASE_URL wins, then cloud platform hints
        (Vercel, Render), then localhost on the configured port.
        """
        if self.server_base_url:
            return self.server_base_url.rstrip("/")
        if self.vercel_url:
            return f"https://{self.vercel_url}"
        if self.render_external_url:
            return self.render_external_url.rstrip("/")
        return f"http://localhost:{self.port}"
    
    @property
    def contact_tagging_url(self) -> str:
        """Target of the addContact remote tool."""
        return self.tagging_webhook_url or f"{self.base_url}/api/contacts"
    
    def masked_account_sid(self) -> str:
        if not self.twilio_account_sid:
            return "missing"
        return f"{self.twilio_account_sid[:4]}..."


def load_settings() -> Settings:
    """Load and return the application settings."""
    return Settings()
