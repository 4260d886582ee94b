"""Serviços de aplicação.

Unidades reutilizáveis sem IO direto.
Implementações concretas de IO ficam em app/infra/.
"""

from app.services.authorization import (
    AUTHORIZATION_HEADER,
    ClientIdentity,
    authorization_headers,
    build_authorization_header,
)
from app.services.home_feed_assembly import (
    library_names_from_views,
    ordered_library_ids,
    recently_added_eligible_ids,
)

__all__ = [
    "AUTHORIZATION_HEADER",
    "ClientIdentity",
    "authorization_headers",
    "build_authorization_header",
    "library_names_from_views",
    "ordered_library_ids",
    "recently_added_eligible_ids",
]
