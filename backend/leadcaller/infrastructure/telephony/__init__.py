"""
Telephony Package
Twilio integration for placing calls bridged to a voice-AI session.
"""
from .twilio_caller import TwilioCaller, generate_stream_twiml

__all__ = [
    "TwilioCaller",
    "generate_stream_twiml",
]
