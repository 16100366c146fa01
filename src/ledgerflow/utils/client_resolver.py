"""Utility for resolving client names to IDs."""

from ledgerflow.domain.client import ClientService
from ledgerflow.domain.errors import NotFoundError, client_name_not_found, client_not_found


def resolve_client(client_service: ClientService, client: str | int) -> int:
    """Resolve client name or ID to client ID.

    Args:
        client_service: ClientService instance
        client: Client name (str) or ID (int or string representation of int)

    Returns:
        Client ID

    Raises:
        NotFoundError: If client is not found
    """
    # If it's already an integer, use it as ID
    if isinstance(client, int):
        if client_service.get_client(client) is None:
            raise NotFoundError(client_not_found(client))
        return client

    # Try to find by name first, so numeric client names still resolve
    by_name = client_service.get_client_by_name(client)
    if by_name is not None:
        return by_name.id

    try:
        client_id = int(client)
    except (ValueError, TypeError):
        raise NotFoundError(client_name_not_found(client)) from None

    if client_service.get_client(client_id) is None:
        raise NotFoundError(client_not_found(client_id))
    return client_id
