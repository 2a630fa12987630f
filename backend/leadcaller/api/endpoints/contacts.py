"""
Contact Tagging Webhook
Target of the voice agent's addContact tool and of status-based tagging.
"""
import logging

from fastapi import APIRouter, Request, Depends, status
from fastapi.responses import JSONResponse

from leadcaller.api.dependencies import get_settings, get_tagging_service, read_body, text_param
from leadcaller.core.config import Settings
from leadcaller.core.exceptions import InvalidInput, UpstreamError
from leadcaller.services.tagging_service import TaggingService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/contacts", tags=["contacts"])


@router.api_route("", methods=["GET", "POST"])
async def tag_contact(
    request: Request,
    tagging_service: TaggingService = Depends(get_tagging_service),
    settings: Settings = Depends(get_settings)
):
    """
    Find or create the contact for phoneNumber and tag it.
    
    Params (query first, then body): clientName, phoneNumber, tag.
    """
    body = await read_body(request)
    query = request.query_params
    
    try:
        client_name = text_param("clientName", query.get("clientName"), body.get("clientName"))
        phone_number = text_param("phoneNumber", query.get("phoneNumber"), body.get("phoneNumber"))
        tag = text_param("tag", query.get("tag"), body.get("tag")) or settings.default_contact_tag
        
        if not phone_number:
            raise InvalidInput("Missing required parameter: phoneNumber")
        
        contact = await tagging_service.tag(phone_number, client_name, tag)
    except InvalidInput as e:
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"success": False, "error": e.message}
        )
    except UpstreamError as e:
        logger.error(f"Error tagging contact {phone_number}: {e}", exc_info=True)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"success": False, "error": e.message}
        )
    
    return {
        "success": True,
        "contactId": contact.id,
        "tag": tag
    }
