"""
Unit tests for CRM tagging
Covers TaggingService and the GoHighLevel connector over a mock transport.
"""
import json
import pytest
import httpx
from unittest.mock import AsyncMock, MagicMock

from leadcaller.core.exceptions import (
    ContactLookupError,
    ContactCreateError,
    TagApplyError,
    InvalidInput,
)
from leadcaller.infrastructure.connectors.crm import CRMContact, GoHighLevelConnector
from leadcaller.services.tagging_service import TaggingService


class FakeGoHighLevel:
    """Records requests and serves canned GoHighLevel responses"""
    
    def __init__(self, contacts=None, search_status=200, create_status=200, tag_status=200):
        self.contacts = contacts or []
        self.search_status = search_status
        self.create_status = create_status
        self.tag_status = tag_status
        self.requests = []
    
    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path
        
        if path.endswith("/contacts/search"):
            if self.search_status != 200:
                return httpx.Response(self.search_status, text="search unavailable")
            return httpx.Response(200, json={"contacts": self.contacts})
        
        if path.endswith("/tags"):
            if self.tag_status != 200:
                return httpx.Response(self.tag_status, text="tag rejected")
            return httpx.Response(200, json={"tags": json.loads(request.content)["tags"]})
        
        if path.endswith("/contacts"):
            if self.create_status != 200:
                return httpx.Response(self.create_status, text="duplicate contact")
            return httpx.Response(200, json={"contact": {"id": "new-contact", "phone": "x"}})
        
        return httpx.Response(404)
    
    def paths(self):
        return [(r.method, r.url.path) for r in self.requests]


def make_service(settings, fake):
    connector = GoHighLevelConnector(settings, transport=httpx.MockTransport(fake))
    return TaggingService(connector)


class TestGoHighLevelTagging:
    """TaggingService against the GoHighLevel connector"""
    
    @pytest.mark.asyncio
    async def test_existing_contact_is_tagged(self, settings):
        fake = FakeGoHighLevel(contacts=[{"id": "c-1", "phone": "+15551234567"}])
        service = make_service(settings, fake)
        
        contact = await service.tag("(555) 123-4567", "Jane", "call-busy")
        
        assert contact.id == "c-1"
        assert fake.paths() == [
            ("GET", "/v1/contacts/search"),
            ("POST", "/v1/contacts/c-1/tags"),
        ]
        assert fake.requests[0].url.params["query"] == "5551234567"
        assert json.loads(fake.requests[1].content) == {"tags": ["call-busy"]}
    
    @pytest.mark.asyncio
    async def test_missing_contact_is_created(self, settings):
        fake = FakeGoHighLevel(contacts=[])
        service = make_service(settings, fake)
        
        contact = await service.tag("5551234567", "Jane Doe", "call-no-answer")
        
        assert contact.id == "new-contact"
        assert fake.paths()[1] == ("POST", "/v1/contacts")
        created = json.loads(fake.requests[1].content)
        assert created == {"phone": "5551234567", "locationId": "loc-123", "name": "Jane Doe"}
        assert fake.paths()[2] == ("POST", "/v1/contacts/new-contact/tags")
    
    @pytest.mark.asyncio
    async def test_requests_carry_bearer_token(self, settings):
        fake = FakeGoHighLevel(contacts=[{"id": "c-1"}])
        service = make_service(settings, fake)
        
        await service.tag("5551234567", None, "x")
        
        for request in fake.requests:
            assert request.headers["Authorization"] == "Bearer ghl-test-key"
    
    @pytest.mark.asyncio
    async def test_lookup_failure(self, settings):
        service = make_service(settings, FakeGoHighLevel(search_status=503))
        
        with pytest.raises(ContactLookupError) as exc_info:
            await service.tag("5551234567", "Jane", "call-busy")
        
        assert exc_info.value.status_code == 503
        assert exc_info.value.body == "search unavailable"
    
    @pytest.mark.asyncio
    async def test_create_failure(self, settings):
        service = make_service(settings, FakeGoHighLevel(create_status=422))
        
        with pytest.raises(ContactCreateError) as exc_info:
            await service.tag("5551234567", "Jane", "call-busy")
        
        assert exc_info.value.status_code == 422
    
    @pytest.mark.asyncio
    async def test_tag_failure(self, settings):
        fake = FakeGoHighLevel(contacts=[{"id": "c-1"}], tag_status=401)
        service = make_service(settings, fake)
        
        with pytest.raises(TagApplyError) as exc_info:
            await service.tag("5551234567", "Jane", "call-busy")
        
        assert "tag rejected" in str(exc_info.value)


class TestGoHighLevelMalformedResponses:
    """Successful statuses with bodies the connector cannot use"""
    
    @staticmethod
    def make_connector(settings, search, create=None, tags=None):
        def handler(request: httpx.Request) -> httpx.Response:
            path = request.url.path
            if path.endswith("/contacts/search"):
                return search()
            if path.endswith("/tags"):
                return tags() if tags else httpx.Response(200, json={"tags": []})
            return create()
        
        return GoHighLevelConnector(settings, transport=httpx.MockTransport(handler))
    
    @pytest.mark.asyncio
    async def test_create_without_contact_key(self, settings):
        connector = self.make_connector(
            settings,
            search=lambda: httpx.Response(200, json={"contacts": []}),
            create=lambda: httpx.Response(200, json={"id": "x"}),
        )
        service = TaggingService(connector)
        
        result = await service.tag_best_effort("5551234567", "Jane", "call-busy")
        
        assert result.attempted is True
        assert result.success is False
        assert "create contact" in result.error
        
        with pytest.raises(ContactCreateError) as exc_info:
            await service.tag("5551234567", "Jane", "call-busy")
        assert exc_info.value.status_code == 200
        assert '"id"' in exc_info.value.body
    
    @pytest.mark.asyncio
    async def test_search_body_not_json(self, settings):
        connector = self.make_connector(
            settings,
            search=lambda: httpx.Response(200, text="<html>maintenance</html>"),
        )
        
        with pytest.raises(ContactLookupError) as exc_info:
            await connector.find_contact_by_phone("5551234567")
        
        assert exc_info.value.body == "<html>maintenance</html>"
    
    @pytest.mark.asyncio
    async def test_search_contact_without_id(self, settings):
        connector = self.make_connector(
            settings,
            search=lambda: httpx.Response(200, json={"contacts": [{"phone": "5551234567"}]}),
        )
        
        with pytest.raises(ContactLookupError):
            await connector.find_contact_by_phone("5551234567")
    
    @pytest.mark.asyncio
    async def test_tag_body_not_json(self, settings):
        connector = self.make_connector(
            settings,
            search=lambda: httpx.Response(200, json={"contacts": [{"id": "c-1"}]}),
            tags=lambda: httpx.Response(200, text="ok"),
        )
        
        with pytest.raises(TagApplyError):
            await TaggingService(connector).tag("5551234567", "Jane", "call-busy")


class TestTaggingServiceRules:
    """Validation and best-effort behavior with a mocked CRM"""
    
    @pytest.fixture
    def crm(self):
        crm = MagicMock()
        crm.find_contact_by_phone = AsyncMock(return_value=CRMContact(id="c-9"))
        crm.create_contact = AsyncMock()
        crm.add_tags = AsyncMock(return_value={})
        return crm
    
    @pytest.mark.asyncio
    async def test_empty_phone_is_invalid(self, crm):
        service = TaggingService(crm)
        
        with pytest.raises(InvalidInput):
            await service.tag("", "Jane", "call-busy")
        
        crm.find_contact_by_phone.assert_not_awaited()
    
    @pytest.mark.asyncio
    async def test_best_effort_success(self, crm):
        service = TaggingService(crm)
        
        result = await service.tag_best_effort("+1 (555) 123-4567", "Jane", "call-busy")
        
        assert result.attempted is True
        assert result.success is True
        assert result.contact_id == "c-9"
        assert result.action.contact_key == "15551234567"
        crm.create_contact.assert_not_awaited()
    
    @pytest.mark.asyncio
    async def test_best_effort_swallows_crm_errors(self, crm):
        crm.add_tags = AsyncMock(side_effect=TagApplyError(500, "boom"))
        service = TaggingService(crm)
        
        result = await service.tag_best_effort("5551234567", "Jane", "call-busy")
        
        assert result.attempted is True
        assert result.success is False
        assert "boom" in result.error
        crm.add_tags.assert_awaited_once_with("c-9", ["call-busy"])
    
    @pytest.mark.asyncio
    async def test_best_effort_reports_missing_phone(self, crm):
        service = TaggingService(crm)
        
        result = await service.tag_best_effort(None, None, "call-busy")
        
        assert result.success is False
        assert result.action.contact_key == ""
        crm.find_contact_by_phone.assert_not_awaited()
