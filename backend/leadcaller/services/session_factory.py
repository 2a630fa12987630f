"""
Conversation Session Factory
Builds the voice agent's script and tools, then creates the Ultravox call.
"""
import logging
from datetime import datetime
from typing import Optional, Tuple

from leadcaller.core.config import Settings
from leadcaller.domain.interfaces.voice_ai_provider import VoiceAIProvider
from leadcaller.domain.models.call import CallSession
from leadcaller.domain.models.lead import Lead
from leadcaller.domain.models.tools import (
    LocalTool,
    RemoteTool,
    ToolParameter,
    ToolSpec,
    ParameterLocation,
)
from leadcaller.domain.services.script_templates import ScriptRenderer
from leadcaller.services.sms_service import SMSService

logger = logging.getLogger(__name__)

SMS_WEBHOOK_PATH = "/api/sms-webhook"


class ConversationSessionFactory:
    """Creates one voice-AI session per call attempt."""
    
    def __init__(
        self,
        settings: Settings,
        voice_ai: VoiceAIProvider,
        sms_service: SMSService,
        renderer: Optional[ScriptRenderer] = None
    ):
        self._settings = settings
        self._voice_ai = voice_ai
        self._sms_service = sms_service
        self._renderer = renderer or ScriptRenderer(agent_name=settings.agent_name)
    
    def build_tools(self) -> Tuple[ToolSpec, ...]:
        """sendSMS runs here; addContact goes straight to the tagging webhook."""
        send_sms = LocalTool(
            name="sendSMS",
            description="Send an SMS message to the user with the provided content",
            handler=self._send_sms_tool,
            path=SMS_WEBHOOK_PATH,
            parameters=(
                ToolParameter(
                    name="recipient",
                    description="The recipient's phone number in E.164 format (e.g., +1234567890)",
                ),
                ToolParameter(
                    name="message",
                    description="The text message to be sent",
                ),
            ),
        )
        
        add_contact = RemoteTool(
            name="addContact",
            description="Add a contact via external CRM API",
            url=self._settings.contact_tagging_url,
            parameters=(
                ToolParameter(
                    name="clientName",
                    description="Name of the client",
                    location=ParameterLocation.QUERY,
                ),
                ToolParameter(
                    name="phoneNumber",
                    description="Phone number of the client",
                    location=ParameterLocation.QUERY,
                ),
                ToolParameter(
                    name="tag",
                    description="The tag to apply to the contact in the CRM",
                    location=ParameterLocation.QUERY,
                    required=False,
                ),
            ),
        )
        
        return (send_sms, add_contact)
    
    def local_tool(self, name: str) -> LocalTool:
        """Look up a tool this service executes, by model tool name."""
        for tool in self.build_tools():
            if isinstance(tool, LocalTool) and tool.name == name:
                return tool
        raise KeyError(name)
    
    async def _send_sms_tool(self, recipient: str, message: str) -> str:
        """
        sendSMS handler, run when the provider calls SMS_WEBHOOK_PATH.
        
        Returns the message id. SMSService errors propagate so the webhook
        can answer with the matching status.
        """
        logger.info(f"sendSMS tool invoked for {recipient}")
        return await self._sms_service.send(recipient, message)
    
    async def create_session(self, lead: Lead, now: Optional[datetime] = None) -> CallSession:
        """
        Render the script and create the voice-AI call.
        
        Raises:
            SessionCreateError: If the provider does not create the session
        """
        script = self._renderer.render(lead, now=now)
        tools = self.build_tools()
        base_url = self._settings.base_url
        
        logger.info(
            f"Creating {self._voice_ai.name} call for {lead.display_name} "
            f"({lead.user_segment.value}) with webhook URL: {base_url}{SMS_WEBHOOK_PATH}"
        )
        
        data = await self._voice_ai.create_call(
            system_prompt=script,
            selected_tools=[tool.to_provider_payload(base_url) for tool in tools],
        )
        
        session = CallSession(
            join_url=data["joinUrl"],
            script=script,
            tools=tools,
            provider_call_id=data.get("callId"),
        )
        logger.info(f"Got joinUrl: {session.join_url} (tools: {', '.join(session.tool_names())})")
        return session
