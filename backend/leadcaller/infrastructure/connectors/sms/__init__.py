"""
SMS Connectors Package
Provides SMS sending via the telephony provider.
"""
from .base import SMSProvider, SMSResult
from .twilio_sms import TwilioSMSProvider

__all__ = [
    "SMSProvider",
    "SMSResult",
    "TwilioSMSProvider",
]
