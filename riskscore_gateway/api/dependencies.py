"""Dependency injection for FastAPI endpoints"""

from fastapi import Request
from riskscore_gateway.infrastructure.clients.score_records import ScoreRecordClient
from riskscore_gateway.infrastructure.credentials import CredentialStore


def get_request_id(request: Request) -> str:
    """Extract request ID from request state"""
    return getattr(request.state, "request_id", "unknown")


def get_score_record_client() -> ScoreRecordClient:
    """Provide score-record API client instance"""
    return ScoreRecordClient()


def get_credential_store(request: Request) -> CredentialStore:
    """Expose the caller's bearer token through a credential store"""
    return CredentialStore.from_authorization_header(request.headers.get("Authorization"))
