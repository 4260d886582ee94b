"""Contratos JSON da API MediaBrowser (Jellyfin/Emby) consumidos no bootstrap.

Campos opcionais malformados viram vazios em vez de invalidar o payload
inteiro; só um corpo que não é objeto JSON falha na validação.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


def _string_list(value: Any) -> list[str]:
    """Aceita apenas lista de strings; qualquer outra coisa vira lista vazia."""
    if isinstance(value, list) and all(isinstance(item, str) for item in value):
        return list(value)
    return []


def _string_or_empty(value: Any) -> str:
    return value if isinstance(value, str) else ""


class UserConfiguration(BaseModel):
    """Bloco `Configuration` do perfil do usuário."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    ordered_views: list[str] = Field(
        default_factory=list,
        alias="OrderedViews",
        description="Ordem de navegação das bibliotecas configurada pelo usuário.",
    )
    latest_items_excludes: list[str] = Field(
        default_factory=list,
        alias="LatestItemsExcludes",
        description="Bibliotecas excluídas de 'adicionados recentemente'.",
    )

    @field_validator("ordered_views", "latest_items_excludes", mode="before")
    @classmethod
    def _coerce_lists(cls, value: Any) -> list[str]:
        return _string_list(value)


class UserProfile(BaseModel):
    """Resposta de `GET /Users/Me`."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    user_id: str = Field(default="", alias="Id")
    name: str = Field(default="", alias="Name")
    configuration: UserConfiguration = Field(
        default_factory=UserConfiguration,
        alias="Configuration",
    )

    @field_validator("user_id", "name", mode="before")
    @classmethod
    def _coerce_strings(cls, value: Any) -> str:
        return _string_or_empty(value)

    @field_validator("configuration", mode="before")
    @classmethod
    def _coerce_configuration(cls, value: Any) -> Any:
        return value if isinstance(value, dict) else {}


class LibraryView(BaseModel):
    """Item de `GET /Users/{id}/Views`."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    id: str = Field(default="", alias="Id")
    name: str = Field(default="", alias="Name")

    @field_validator("id", "name", mode="before")
    @classmethod
    def _coerce_strings(cls, value: Any) -> str:
        return _string_or_empty(value)


class LibraryViewsResponse(BaseModel):
    """Resposta de `GET /Users/{id}/Views`."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    items: list[LibraryView] = Field(default_factory=list, alias="Items")

    @field_validator("items", mode="before")
    @classmethod
    def _coerce_items(cls, value: Any) -> list[Any]:
        if not isinstance(value, list):
            return []
        return [item for item in value if isinstance(item, dict)]


__all__ = ["LibraryView", "LibraryViewsResponse", "UserConfiguration", "UserProfile"]
