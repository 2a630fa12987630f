"""
Voice-AI Tool Models

Tools are resolved when the session is built. A LocalTool is executed by
this service (the provider calls back into one of our webhooks); a
RemoteTool is called by the provider directly against its own URL.
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Awaitable, Callable, Dict, Literal, Tuple, Union


class ParameterLocation(str, Enum):
    """Where the provider puts a tool argument in the HTTP request"""
    BODY = "PARAMETER_LOCATION_BODY"
    QUERY = "PARAMETER_LOCATION_QUERY"


@dataclass(frozen=True)
class ToolParameter:
    """One dynamic parameter the model fills in when calling a tool"""
    name: str
    description: str
    location: ParameterLocation = ParameterLocation.BODY
    required: bool = True
    type: str = "string"
    
    def to_provider_payload(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "location": self.location.value,
            "schema": {
                "type": self.type,
                "description": self.description,
            },
            "required": self.required,
        }


@dataclass(frozen=True)
class LocalTool:
    """
    Tool whose handler runs in this process.
    
    The provider reaches it through `path` on our public base URL.
    """
    name: str
    description: str
    handler: Callable[..., Awaitable[Any]]
    path: str
    parameters: Tuple[ToolParameter, ...] = field(default_factory=tuple)
    http_method: str = "POST"
    kind: Literal["local"] = "local"
    
    def target_url(self, base_url: str) -> str:
        return f"{base_url.rstrip('/')}{self.path}"
    
    async def invoke(self, **arguments: Any) -> Any:
        """Run the handler with the arguments the model supplied."""
        return await self.handler(**arguments)
    
    def to_provider_payload(self, base_url: str) -> Dict[str, Any]:
        return {
            "temporaryTool": {
                "modelToolName": self.name,
                "description": self.description,
                "dynamicParameters": [p.to_provider_payload() for p in self.parameters],
                "http": {
                    "baseUrlPattern": self.target_url(base_url),
                    "httpMethod": self.http_method,
                },
            }
        }


@dataclass(frozen=True)
class RemoteTool:
    """Tool the provider calls directly, bypassing this service."""
    name: str
    description: str
    url: str
    parameters: Tuple[ToolParameter, ...] = field(default_factory=tuple)
    http_method: str = "GET"
    kind: Literal["remote"] = "remote"
    
    def target_url(self, base_url: str) -> str:
        return self.url
    
    def to_provider_payload(self, base_url: str) -> Dict[str, Any]:
        return {
            "temporaryTool": {
                "modelToolName": self.name,
                "description": self.description,
                "dynamicParameters": [p.to_provider_payload() for p in self.parameters],
                "http": {
                    "baseUrlPattern": self.url,
                    "httpMethod": self.http_method,
                },
            }
        }


ToolSpec = Union[LocalTool, RemoteTool]
