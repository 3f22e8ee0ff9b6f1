"""Airtable implementation of ProjectRepository."""

from adapter.airtable.client import AirtableClient, escape_formula_value
from domain.model.project import Project


def _as_int(value) -> int | None:
    # Number fields may come back as 3.0; likes are keyed by "3"
    if isinstance(value, bool) or value is None:
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


class AirtableProjectRepository:
    def __init__(self, client: AirtableClient, table: str):
        self.client = client
        self.table = table

    def _to_domain(self, record: dict) -> Project:
        fields = record.get('fields', {})
        pictures = fields.get('picture') or []
        return Project(
            id=record['id'],
            external_id=_as_int(fields.get('id')),
            title=fields.get('title', ''),
            description=fields.get('description', ''),
            created_at=fields.get('createdAt'),
            # Like is the linked-record field holding this project's likes
            likes=len(fields.get('Like') or []),
            picture=pictures[0].get('url') if pictures else None,
        )

    def list_all(self) -> list[Project]:
        return [self._to_domain(r) for r in self.client.list_records(self.table)]

    def get_by_id(self, project_id: str) -> Project | None:
        record = self.client.get_record(self.table, project_id)
        return self._to_domain(record) if record else None

    def search(self, keywords: str) -> list[Project]:
        needle = escape_formula_value(keywords.lower())
        formula = (
            f'OR(SEARCH("{needle}", LOWER({{title}})), '
            f'SEARCH("{needle}", LOWER({{description}})))'
        )
        return [self._to_domain(r) for r in self.client.list_records(self.table, formula=formula)]
