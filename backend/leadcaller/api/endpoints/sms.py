"""
SMS Endpoints
- /api/sms-webhook: called by the voice agent's sendSMS tool during a call
- /send-sms: direct sends
"""
import json
import logging

from fastapi import APIRouter, Request, Depends, status
from fastapi.responses import JSONResponse

from leadcaller.api.dependencies import (
    get_session_factory,
    get_sms_service,
    read_body,
    text_param,
)
from leadcaller.core.exceptions import InvalidInput, UpstreamError
from leadcaller.services.session_factory import ConversationSessionFactory, SMS_WEBHOOK_PATH
from leadcaller.services.sms_service import SMSService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["sms"])


@router.post(SMS_WEBHOOK_PATH)
async def sms_webhook(
    request: Request,
    session_factory: ConversationSessionFactory = Depends(get_session_factory)
):
    """
    Run the sendSMS tool for the in-call agent.
    
    Recipient comes from body phoneNumber/recipient, then query
    recipient/phoneNumber; message from body, then query.
    """
    body = await read_body(request)
    query = request.query_params
    
    logger.info(
        f"SMS webhook request: headers={json.dumps(dict(request.headers))}, "
        f"body={json.dumps(body, default=str)}, query={json.dumps(dict(query))}"
    )
    
    try:
        phone_number = text_param(
            "phoneNumber",
            body.get("phoneNumber"),
            body.get("recipient"),
            query.get("recipient"),
            query.get("phoneNumber"),
        )
        message = text_param("message", body.get("message"), query.get("message"))
        
        if not phone_number or not message:
            logger.error(f"Missing parameters: phone_number={phone_number!r}, message={message!r}")
            raise InvalidInput("Missing phoneNumber/recipient or message")
        
        send_sms = session_factory.local_tool("sendSMS")
        message_sid = await send_sms.invoke(recipient=phone_number, message=message)
    except InvalidInput as e:
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"success": False, "error": e.message}
        )
    except UpstreamError as e:
        logger.error(f"Error sending SMS in webhook: {e}", exc_info=True)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"success": False, "error": e.message}
        )
    
    logger.info(f"Webhook response: success=True, messageSid={message_sid}")
    return {
        "success": True,
        "messageSid": message_sid,
        "message": "SMS sent successfully"
    }


@router.post("/send-sms")
async def send_sms(
    request: Request,
    sms_service: SMSService = Depends(get_sms_service)
):
    """Send an SMS directly. Body: phoneNumber, message."""
    body = await read_body(request)
    
    try:
        phone_number = text_param("phoneNumber", body.get("phoneNumber"))
        message = text_param("message", body.get("message"))
        
        logger.info(f"Received direct SMS request to {phone_number}")
        
        if not phone_number or not message:
            logger.error(
                f"Missing parameters in direct SMS: phone_number={phone_number!r}, message={message!r}"
            )
            raise InvalidInput("Missing required parameters: phoneNumber and message")
        
        message_sid = await sms_service.send(phone_number, message)
    except InvalidInput as e:
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"success": False, "error": e.message}
        )
    except UpstreamError as e:
        logger.error(f"Error in direct SMS endpoint: {e}", exc_info=True)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={
                "success": False,
                "error": "Failed to send SMS",
                "message": e.message
            }
        )
    
    return {
        "success": True,
        "message": "SMS sent successfully",
        "messageSid": message_sid
    }
