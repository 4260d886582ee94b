"""Montagem do estado derivado da tela inicial (sem IO).

Recebe os payloads já validados do perfil e das views e produz as
coleções publicadas no HomeFeedState.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from app.domain.media_browser import LibraryView, UserConfiguration


def ordered_library_ids(configuration: UserConfiguration) -> tuple[str, ...]:
    """Ordem de navegação exatamente como o servidor enviou.

    Duplicatas passam sem alteração: a ordem é do servidor.
    """
    return tuple(configuration.ordered_views)


def recently_added_eligible_ids(
    ordered_ids: Sequence[str],
    excluded_ids: Iterable[str],
) -> tuple[str, ...]:
    """Filtra as bibliotecas excluídas de 'adicionados recentemente'.

    Preserva a ordem de `ordered_ids` e nunca repete um id, mesmo que o
    servidor tenha repetido na ordem.

    Args:
        ordered_ids: Ordem de navegação do usuário
        excluded_ids: Ids em `LatestItemsExcludes`

    Returns:
        Subsequência de `ordered_ids` sem exclusões nem repetições
    """
    excluded = frozenset(excluded_ids)
    seen: set[str] = set()
    eligible: list[str] = []
    for library_id in ordered_ids:
        if library_id in excluded or library_id in seen:
            continue
        seen.add(library_id)
        eligible.append(library_id)
    return tuple(eligible)


def library_names_from_views(views: Iterable[LibraryView]) -> dict[str, str]:
    """Mapa id → nome; último valor vence para ids repetidos.

    Itens sem id são ignorados.
    """
    names: dict[str, str] = {}
    for view in views:
        if not view.id:
            continue
        names[view.id] = view.name
    return names


__all__ = [
    "library_names_from_views",
    "ordered_library_ids",
    "recently_added_eligible_ids",
]
