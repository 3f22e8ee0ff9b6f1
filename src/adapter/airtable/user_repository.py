"""Airtable implementation of UserRepository."""

import logging
from datetime import datetime
from typing import Any

from adapter.airtable.client import AirtableClient, escape_formula_value
from domain.model.user import User

logger = logging.getLogger(__name__)


def _parse_timestamp(value: Any) -> datetime | None:
    # Airtable returns ISO strings with a trailing 'Z'
    if not value or not isinstance(value, str):
        return None
    try:
        return datetime.fromisoformat(value.replace('Z', '+00:00'))
    except ValueError:
        return None


class AirtableUserRepository:
    def __init__(self, client: AirtableClient, table: str):
        self.client = client
        self.table = table

    def _to_domain(self, record: dict) -> User:
        """Convert an Airtable record to the User domain model."""
        fields = record.get('fields', {})
        created_at = _parse_timestamp(fields.get('createdAt')) or _parse_timestamp(record.get('createdTime'))
        return User(
            id=record['id'],
            email=fields.get('email', ''),
            first_name=fields.get('firstName', ''),
            last_name=fields.get('lastName', ''),
            phone=fields.get('phone'),
            created_at=created_at,
            updated_at=_parse_timestamp(fields.get('updatedAt')) or created_at,
            password_hash=fields.get('passwordHash'),
        )

    def create(
        self,
        email: str,
        password_hash: str,
        first_name: str,
        last_name: str,
        phone: int | float | None = None,
    ) -> User:
        # createdAt/updatedAt are computed fields on the Airtable side
        fields: dict[str, Any] = {
            'email': email,
            'passwordHash': password_hash,
            'firstName': first_name,
            'lastName': last_name,
        }
        if phone is not None:
            fields['phone'] = phone

        record = self.client.create_record(self.table, fields)
        logger.info("User created", extra={"userId": record.get('id')})
        return self._to_domain(record)

    def get_by_email(self, email: str) -> User | None:
        formula = f'{{email}} = "{escape_formula_value(email)}"'
        records = self.client.list_records(self.table, formula=formula)
        # Formula equality is case-insensitive on some field types; enforce exact match
        for record in records:
            if record.get('fields', {}).get('email') == email:
                return self._to_domain(record)
        return None

    def get_by_id(self, user_id: str) -> User | None:
        record = self.client.get_record(self.table, user_id)
        return self._to_domain(record) if record else None

    def update(
        self,
        user_id: str,
        first_name: str,
        last_name: str,
        phone: int | float | None,
    ) -> User | None:
        record = self.client.update_record(
            self.table,
            user_id,
            {'firstName': first_name, 'lastName': last_name, 'phone': phone},
        )
        return self._to_domain(record) if record else None

    def delete(self, user_id: str) -> bool:
        return self.client.delete_record(self.table, user_id)
