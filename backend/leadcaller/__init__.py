"""
Lead Caller

Outbound AI-voiced calling with CRM outcome tagging.

Components:
- domain: Lead, phone normalization, call/tool models, script templates
- infrastructure: Twilio telephony and SMS, Ultravox sessions, GoHighLevel CRM
- services: call orchestration, status handling, tagging, SMS
- api: FastAPI endpoints for webhooks and call initiation
"""

__version__ = "1.0.0"
