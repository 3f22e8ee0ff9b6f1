"""Airtable implementation of LikeRepository.

Airtable has no uniqueness constraints; the (user, project) invariant is
enforced by the like service.
"""

from adapter.airtable.client import AirtableClient, escape_formula_value
from domain.model.like import Like


class AirtableLikeRepository:
    def __init__(self, client: AirtableClient, table: str):
        self.client = client
        self.table = table

    def _to_domain(self, record: dict) -> Like:
        fields = record.get('fields', {})
        user = fields.get('user')
        # user is a linked-record field: a list of record IDs
        if isinstance(user, list):
            user = user[0] if user else ''
        return Like(
            id=record['id'],
            user_id=user or '',
            project_id=str(fields.get('project', '')),
            created_at=fields.get('createdAt', ''),
        )

    def find(self, user_id: str, project_id: str) -> list[Like]:
        formula = (
            f'AND({{user}} = "{escape_formula_value(user_id)}", '
            f'{{project}} = "{escape_formula_value(project_id)}")'
        )
        return [self._to_domain(r) for r in self.client.list_records(self.table, formula=formula)]

    def create(self, user_id: str, project_id: str, created_at: str) -> Like:
        record = self.client.create_record(
            self.table,
            {'user': [user_id], 'project': project_id, 'createdAt': created_at},
        )
        return self._to_domain(record)

    def delete(self, like_id: str) -> bool:
        return self.client.delete_record(self.table, like_id)
