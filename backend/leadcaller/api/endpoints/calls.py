"""
Call Initiation Endpoint
"""
import logging

from fastapi import APIRouter, Request, Depends, status
from fastapi.responses import JSONResponse

from leadcaller.api.dependencies import get_call_orchestrator, read_body, text_param
from leadcaller.core.exceptions import InvalidInput, UpstreamError
from leadcaller.domain.models.lead import Lead
from leadcaller.domain.services.phone_normalizer import normalize
from leadcaller.services.call_service import CallOrchestrator

logger = logging.getLogger(__name__)

router = APIRouter(tags=["calls"])

DEFAULT_USER_TYPE = "non-VIP"


@router.api_route("/initiate-call", methods=["GET", "POST"])
async def initiate_call(
    request: Request,
    orchestrator: CallOrchestrator = Depends(get_call_orchestrator)
):
    """
    Start an AI call to a lead.
    
    Params (query first, then body):
        - clientName: lead's name
        - phoneNumber: lead's phone, any supported format
        - userType: "VIP" or anything else for general admission (default "non-VIP")
    """
    body = await read_body(request)
    query = request.query_params
    
    try:
        client_name = text_param("clientName", query.get("clientName"), body.get("clientName"))
        phone_number = text_param("phoneNumber", query.get("phoneNumber"), body.get("phoneNumber"))
        user_type = (
            text_param("userType", query.get("userType"), body.get("userType"))
            or DEFAULT_USER_TYPE
        )
    except InvalidInput as e:
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"success": False, "error": e.message}
        )
    
    if not client_name or not phone_number:
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={
                "success": False,
                "error": "Missing required parameters: clientName and phoneNumber"
            }
        )
    
    if not normalize(phone_number).is_dialable:
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={
                "success": False,
                "error": "Invalid phone number format. Please provide a valid phone number "
                         "(e.g., 1234567890 or +1234567890)"
            }
        )
    
    lead = Lead.from_request(client_name, phone_number, user_type)
    
    try:
        call_sid = await orchestrator.initiate_call(lead)
    except InvalidInput as e:
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"success": False, "error": e.message}
        )
    except UpstreamError as e:
        logger.error(f"Error initiating call for {client_name}: {e}", exc_info=True)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={
                "success": False,
                "error": "Failed to initiate call",
                "message": e.message
            }
        )
    
    return {
        "success": True,
        "message": "Call initiated successfully",
        "callSid": call_sid
    }
