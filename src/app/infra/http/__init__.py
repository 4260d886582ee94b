"""HTTP: cliente concreto (httpx) para a API do servidor de mídia."""

from __future__ import annotations

from app.infra.http.client import HttpClient, HttpClientConfig, HttpError

__all__ = ["HttpClient", "HttpClientConfig", "HttpError"]
