"""
Webhooks API Endpoints
Handles call status callbacks from Twilio
"""
import logging

from fastapi import APIRouter, Request, Depends
from fastapi.responses import PlainTextResponse

from leadcaller.api.dependencies import get_status_handler, read_body
from leadcaller.domain.models.call import CallStatusEvent
from leadcaller.services.call_status_handler import CallStatusHandler

logger = logging.getLogger(__name__)

router = APIRouter(tags=["webhooks"])


@router.post("/call-status")
async def call_status(
    request: Request,
    handler: CallStatusHandler = Depends(get_status_handler)
):
    """
    Handle Twilio call status callbacks.
    
    Form fields: CallStatus, CallSid, To.
    Query: clientName, phoneNumber (set when the call was placed).
    
    Always answers 200; anything else makes Twilio retry and alert.
    """
    try:
        form = await read_body(request)
        event = CallStatusEvent.from_callback(form, dict(request.query_params))
        await handler.handle(event)
    except Exception as e:
        logger.error(f"Error processing call status callback: {e}", exc_info=True)
    
    return PlainTextResponse("OK")
