"""Database models and operations for WhatsApp delivery."""

from taskboard.database.whatsapp.models import (
    DEFAULT_ACCOUNT_ID,
    ConnectionStatus,
    WhatsappAccount,
    WhatsappGroup,
)
from taskboard.database.whatsapp.operations import (
    find_group_by_contains_type,
    find_group_by_exact_type,
    get_default_account,
    update_account_connection_status,
    update_group_last_sent,
)

__all__ = [
    "DEFAULT_ACCOUNT_ID",
    # Models
    "ConnectionStatus",
    "WhatsappAccount",
    "WhatsappGroup",
    # Operations
    "find_group_by_contains_type",
    "find_group_by_exact_type",
    "get_default_account",
    "update_account_connection_status",
    "update_group_last_sent",
]
