"""
Call Script Templates
Renders the system prompt for the voice agent.

The script has a shared opener and two branches (VIP and GA). Each
branch tells the agent when to call the addContact tool and with which
tag, so attendance answers land in the CRM while the call is live.
"""
import logging
from datetime import datetime, timezone
from typing import Optional
from pydantic import BaseModel, Field
from jinja2 import Environment, BaseLoader, StrictUndefined

from leadcaller.domain.models.lead import Lead

logger = logging.getLogger(__name__)


class ScriptTags(BaseModel):
    """CRM tags the agent applies at each conversation outcome"""
    not_available: str = "update: events -> ve0525-confirm-call-initiated"
    left_message: str = "events -> ve0525flash-call-left-message"
    vip_session_yes: str = "update: events -> ve0525-vip-tuesday-confirm-yes"
    vip_session_no: str = "update: events -> ve0525-vip-tuesday-confirm-no"
    confirm_yes: str = "update: events -> ve0525-confirm-yes"
    confirm_no: str = "update: events -> ve0525-confirm-no"


CALL_SCRIPT_TEMPLATE = """
## Agent Role
  - Name: {{ agent_name }}
  - Context: Voice-based conversation
  - Current time: {{ current_time }}
  - User's name: {{ client_name }}
  - User Type: {{ user_type }}
  - User's phone number: {{ phone_number }}

## Opening

"Hello, may I speak with {{ client_name }}? This is {{ agent_name }}, the event team's AI Assistant, calling about The Visibility Event."
{{ tool_call(tags.not_available, "If the person is not there") }}
If they are not there, politely end the call.

{% if segment == "VIP" %}
## VIP Mode

"Hey {{ client_name }}, so glad you'll be joining us for The Visibility Event this week. As a VIP, your event starts later today, with a special session at 4pm Eastern time! Will you be joining us for that?"

{{ tool_call(tags.left_message, "If the call goes to voicemail") }}
When leaving a voice message, do not ask them to call back, instead say we will call you again.

{{ tool_call(tags.vip_session_yes, "If they say they will attend the VIP session") }}

{{ tool_call(tags.vip_session_no, "If they say they will not attend the VIP session") }}

(If they will attend)
"Awesome! Check your email for your unique login, that's your access to the event. Check-in starts TODAY at 1pm Eastern time, and your exclusive VIP session is at 4pm Eastern time. The main event begins at 11 AM tomorrow. Will you be joining us for that, {{ client_name }}?"

(If they will not attend)
"Aw, that's a shame. Even though you can't make it today for the special VIP session, check-in runs from 1 to 5 PM today Eastern time and continues tomorrow starting at 9:30 AM. The main event begins at 11 AM tomorrow. Will you be joining us for that, {{ client_name }}?"

{{ tool_call(tags.confirm_yes, "If they say they will attend tomorrow") }}

{{ tool_call(tags.confirm_no, "If they say they will not attend tomorrow") }}

"Do you have any other questions before we end the call today, {{ client_name }}? Be sure to check your email for your special link to get into the event, that's your digital ticket and it's unique to you!"
{% else %}
## GA Mode

"So glad you'll be joining us for The Visibility Event this week! The full event begins tomorrow at 11:00am. Will you be attending?"

{{ tool_call(tags.left_message, "If the call goes to voicemail") }}
When leaving a voice message, do not ask them to call back, instead say we will call you again.

(If they will attend)
"Awesome! Check your email for your unique login, that's your access to the event. Check-in starts TODAY at 1pm Eastern time and will go until 5pm. We'll be reopening check-in at 9:30am tomorrow just in case you miss it today."

{{ tool_call(tags.confirm_yes, "If they say they will attend") }}

{{ tool_call(tags.confirm_no, "If they say they will not attend") }}

"That's it for now, {{ client_name }}. We hope to see you at the event!"
{% endif %}
If they ask for the details in writing, use the sendSMS tool with their phone number as the recipient.
Politely end the call.
"""


class ScriptRenderer:
    """Renders the call script for a lead"""
    
    def __init__(
        self,
        agent_name: str = "Claire",
        tags: Optional[ScriptTags] = None,
        template: str = CALL_SCRIPT_TEMPLATE
    ):
        self.agent_name = agent_name
        self.tags = tags or ScriptTags()
        self._env = Environment(loader=BaseLoader(), undefined=StrictUndefined)
        self._template = self._env.from_string(template)
    
    def render(self, lead: Lead, now: Optional[datetime] = None) -> str:
        """Interpolate lead details and the current time into the script."""
        current_time = (now or datetime.now(timezone.utc)).isoformat()
        
        def tool_call(tag: str, condition: str) -> str:
            return self._tool_instruction(lead, tag, condition)
        
        script = self._template.render(
            agent_name=self.agent_name,
            current_time=current_time,
            client_name=lead.display_name,
            user_type=lead.user_type,
            segment=lead.user_segment.value,
            phone_number=lead.raw_phone,
            tags=self.tags,
            tool_call=tool_call,
        )
        logger.debug(f"Rendered {lead.user_segment.value} script ({len(script)} chars)")
        return script
    
    @staticmethod
    def _tool_instruction(lead: Lead, tag: str, condition: str) -> str:
        return (
            f"({condition}, use the addContact tool with the following parameters:)\n"
            "{\n"
            f'  clientName: "{lead.display_name}",\n'
            f'  phoneNumber: "{lead.raw_phone}",\n'
            f'  tag: "{tag}"\n'
            "}"
        )
