"""
Voice-AI Package
Ultravox session creation.
"""
from .ultravox import UltravoxClient

__all__ = ["UltravoxClient"]
