"""Connection request and peer discovery endpoints."""
from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, Query
from fastapi.responses import JSONResponse

from connections import (
    accept_request,
    cancel_request,
    discover_peers,
    list_connections,
    list_incoming,
    list_outgoing,
    reject_request,
    send_request,
)
from docstore import DocumentStore
from identity import AuthenticatedUser

from ..dependencies import get_current_user, get_store
from ..schemas import ConnectionRequestCreate


def create_router() -> APIRouter:
    router = APIRouter()

    @router.post("/api/connection-requests", response_class=JSONResponse, status_code=201)
    def api_send_request(
        payload: ConnectionRequestCreate,
        user: AuthenticatedUser = Depends(get_current_user),
        store: DocumentStore = Depends(get_store),
    ):
        request = send_request(store, user, payload.toUid, payload.message)
        return {"status": "ok", "request": request}

    @router.get("/api/connection-requests/incoming", response_class=JSONResponse)
    def api_incoming(
        user: AuthenticatedUser = Depends(get_current_user),
        store: DocumentStore = Depends(get_store),
    ):
        return list_incoming(store, user)

    @router.get("/api/connection-requests/outgoing", response_class=JSONResponse)
    def api_outgoing(
        user: AuthenticatedUser = Depends(get_current_user),
        store: DocumentStore = Depends(get_store),
    ):
        return list_outgoing(store, user)

    @router.post("/api/connection-requests/{request_id}/accept", response_class=JSONResponse)
    def api_accept(
        request_id: str,
        user: AuthenticatedUser = Depends(get_current_user),
        store: DocumentStore = Depends(get_store),
    ):
        return {"status": "ok", "connection": accept_request(store, user, request_id)}

    @router.post("/api/connection-requests/{request_id}/reject", response_class=JSONResponse)
    def api_reject(
        request_id: str,
        user: AuthenticatedUser = Depends(get_current_user),
        store: DocumentStore = Depends(get_store),
    ):
        return {"status": "ok", "request": reject_request(store, user, request_id)}

    @router.post("/api/connection-requests/{request_id}/cancel", response_class=JSONResponse)
    def api_cancel(
        request_id: str,
        user: AuthenticatedUser = Depends(get_current_user),
        store: DocumentStore = Depends(get_store),
    ):
        return {"status": "ok", "request": cancel_request(store, user, request_id)}

    @router.get("/api/connections", response_class=JSONResponse)
    def api_connections(
        user: AuthenticatedUser = Depends(get_current_user),
        store: DocumentStore = Depends(get_store),
    ):
        return list_connections(store, user)

    @router.get("/api/peers", response_class=JSONResponse)
    def api_peers(
        search: Optional[str] = Query(None),
        user: AuthenticatedUser = Depends(get_current_user),
        store: DocumentStore = Depends(get_store),
    ):
        return discover_peers(store, user, search)

    return router
