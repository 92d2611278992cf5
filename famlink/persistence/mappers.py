"""Mappers for converting between database rows and domain models.

Since we're using Pydantic domain models (immutable), we use manual mapping
instead of SQLAlchemy's classical imperative mapping.
"""

from typing import Any, Dict
from uuid import UUID

from famlink.domain.model import (
    Account,
    AssetRecord,
    Connection,
    ConnectionView,
    ExpenseRecord,
    ExternalPerson,
    Notification,
)
from famlink.domain.value import (
    AssetId,
    CategoryId,
    ConnectionId,
    ConnectionStatus,
    Email,
    ExpenseId,
    ExternalPersonId,
    HouseholdId,
    UserId,
)


def _uuid(value: Any) -> UUID | None:
    if value is None:
        return None
    return UUID(value) if isinstance(value, str) else value


def row_to_account(row: Dict[str, Any]) -> Account:
    """Convert a users row to an Account."""
    household_id = _uuid(row.get("household_id"))
    return Account(
        id=UserId(_uuid(row["id"])),
        email=row["email"],
        household_id=HouseholdId(household_id) if household_id else None,
    )


def row_to_external_person(row: Dict[str, Any]) -> ExternalPerson:
    """Convert database row to ExternalPerson domain model.

    Args:
        row: Database row as dict

    Returns:
        ExternalPerson domain model
    """
    return ExternalPerson(
        id=ExternalPersonId(_uuid(row["id"])),
        household_id=HouseholdId(_uuid(row["household_id"])),
        name=row["name"],
        email=Email(row["email"]) if row.get("email") else None,
        relationship=row.get("relationship"),
        notes=row.get("notes"),
        birth_date=row.get("birth_date"),
        created_by=UserId(_uuid(row["created_by_user_id"])),
        created_at=row["created_at"],
        updated_at=row["updated_at"],
        deleted_at=row.get("deleted_at"),
    )


def external_person_to_dict(person: ExternalPerson) -> Dict[str, Any]:
    """Convert ExternalPerson domain model to database dict.

    Args:
        person: ExternalPerson domain model

    Returns:
        Dict suitable for database insertion/update
    """
    data = person.model_dump(exclude={"created_by"})
    data["created_by_user_id"] = person.created_by
    return data


def row_to_connection(row: Dict[str, Any]) -> Connection:
    """Convert database row to Connection domain model.

    Args:
        row: Database row as dict

    Returns:
        Connection domain model
    """
    return Connection(
        id=ConnectionId(_uuid(row["id"])),
        external_person_id=ExternalPersonId(_uuid(row["external_person_id"])),
        invited_user_id=UserId(_uuid(row["invited_user_id"])),
        invited_by_user_id=UserId(_uuid(row["invited_by_user_id"])),
        status=ConnectionStatus(row["status"]),
        invited_at=row["invited_at"],
        responded_at=row.get("responded_at"),
        expires_at=row["expires_at"],
    )


def connection_to_dict(connection: Connection) -> Dict[str, Any]:
    """Convert Connection domain model to database dict."""
    data = connection.model_dump()
    data["status"] = connection.status.value
    return data


def row_to_connection_view(row: Dict[str, Any]) -> ConnectionView:
    """Convert a connection row joined with names and emails."""
    return ConnectionView(
        connection=row_to_connection(row),
        external_person_name=row.get("external_person_name"),
        external_person_email=row.get("external_person_email"),
        invited_user_email=row.get("invited_user_email"),
        invited_by_user_email=row.get("invited_by_user_email"),
    )


def notification_to_dict(notification: Notification) -> Dict[str, Any]:
    """Convert Notification domain model to a user_notifications row."""
    return {
        "id": notification.id,
        "user_id": notification.recipient_user_id,
        "type": notification.type.value,
        "title": notification.title,
        "message": notification.message,
        "related_entity_type": notification.related_entity_type,
        "related_entity_id": notification.related_entity_id,
        "is_read": notification.read,
        "created_at": notification.created_at,
    }


def row_to_expense(row: Dict[str, Any]) -> ExpenseRecord:
    """Convert an expenses row to an ExpenseRecord."""
    category_id = _uuid(row.get("category_id"))
    linked_asset_id = _uuid(row.get("linked_asset_id"))
    return ExpenseRecord(
        id=ExpenseId(_uuid(row["id"])),
        household_id=HouseholdId(_uuid(row["household_id"])),
        category_id=CategoryId(category_id) if category_id else None,
        amount=row["amount"],
        currency=row["currency"],
        description=row.get("description"),
        start_date=row["start_date"],
        end_date=row.get("end_date"),
        linked_asset_id=AssetId(linked_asset_id) if linked_asset_id else None,
    )


def row_to_asset(row: Dict[str, Any]) -> AssetRecord:
    """Convert an assets row (with the viewer's ownership share) to an AssetRecord."""
    return AssetRecord(
        id=AssetId(_uuid(row["id"])),
        household_id=HouseholdId(_uuid(row["household_id"])),
        name=row["name"],
        amount=row["amount"],
        current_value=row.get("current_value"),
        currency=row["currency"],
        created_at=row["created_at"],
        household_ownership_percentage=row.get("household_ownership_percentage"),
    )
