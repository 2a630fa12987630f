"""
API Dependencies
Service wiring and per-request access to the shared service objects
"""
from dataclasses import dataclass
from typing import Any, Dict, Optional
from json import JSONDecodeError
from fastapi import Request

from leadcaller.core.config import Settings
from leadcaller.core.exceptions import InvalidInput
from leadcaller.infrastructure.connectors.crm import GoHighLevelConnector
from leadcaller.infrastructure.connectors.sms import TwilioSMSProvider
from leadcaller.infrastructure.telephony import TwilioCaller
from leadcaller.infrastructure.voice_ai import UltravoxClient
from leadcaller.services.call_service import CallOrchestrator
from leadcaller.services.call_status_handler import CallStatusHandler
from leadcaller.services.session_factory import ConversationSessionFactory
from leadcaller.services.sms_service import SMSService
from leadcaller.services.tagging_service import TaggingService


@dataclass
class Services:
    """Stateless service objects shared by all requests"""
    settings: Settings
    sms_service: SMSService
    tagging_service: TaggingService
    session_factory: ConversationSessionFactory
    call_orchestrator: CallOrchestrator
    status_handler: CallStatusHandler


def build_services(settings: Settings) -> Services:
    """Construct every component from one Settings instance."""
    sms_service = SMSService(TwilioSMSProvider(settings))
    tagging_service = TaggingService(GoHighLevelConnector(settings))
    session_factory = ConversationSessionFactory(
        settings=settings,
        voice_ai=UltravoxClient(settings),
        sms_service=sms_service,
    )
    return Services(
        settings=settings,
        sms_service=sms_service,
        tagging_service=tagging_service,
        session_factory=session_factory,
        call_orchestrator=CallOrchestrator(
            settings=settings,
            session_factory=session_factory,
            telephony=TwilioCaller(settings),
        ),
        status_handler=CallStatusHandler(settings, tagging_service),
    )


def get_services(request: Request) -> Services:
    return request.app.state.services


def get_settings(request: Request) -> Settings:
    return get_services(request).settings


def get_sms_service(request: Request) -> SMSService:
    return get_services(request).sms_service


def get_tagging_service(request: Request) -> TaggingService:
    return get_services(request).tagging_service


def get_session_factory(request: Request) -> ConversationSessionFactory:
    return get_services(request).session_factory


def get_call_orchestrator(request: Request) -> CallOrchestrator:
    return get_services(request).call_orchestrator


def get_status_handler(request: Request) -> CallStatusHandler:
    return get_services(request).status_handler


async def read_body(request: Request) -> Dict[str, Any]:
    """
    Parse a JSON or form-encoded body into a dict.
    
    Empty or unparseable bodies give {} so handlers can fall back to
    query parameters.
    """
    content_type = request.headers.get("content-type", "")
    
    if "application/json" in content_type:
        try:
            data = await request.json()
        except (JSONDecodeError, UnicodeDecodeError):
            return {}
        return data if isinstance(data, dict) else {}
    
    if "form" in content_type:
        form = await request.form()
        return dict(form)
    
    return {}


def text_param(name: str, *values: Any) -> Optional[str]:
    """
    First non-empty candidate for a request parameter, as text.
    
    JSON bodies may carry numbers or booleans; those are converted.
    Objects and arrays are rejected with InvalidInput.
    """
    for value in values:
        if value is None or value == "":
            continue
        if isinstance(value, (dict, list)):
            raise InvalidInput(f"Invalid value for {name}: expected text")
        return str(value)
    return None
