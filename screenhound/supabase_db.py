"""
Datastore client backed by a hosted Supabase project (PostgREST tables).
"""

from __future__ import annotations

import logging
from typing import Optional

import httpx
from postgrest.exceptions import APIError
from supabase import Client, create_client

from screenhound.db import DatastoreError
from screenhound.submissions import (
    Submission,
    SubmissionStatus,
    SubmissionType,
    submission_class,
)

logger = logging.getLogger(__name__)


class SupabaseDbClient:
    """Table-scoped insert/select/update against the Supabase REST API."""

    def __init__(self, supabase_url: str, supabase_key: str, client: Client | None = None):
        if not supabase_url or not supabase_key:
            raise ValueError("SUPABASE_URL and SUPABASE_KEY are required for SupabaseDbClient")
        self.client = client or create_client(
            supabase_url=supabase_url,
            supabase_key=supabase_key,
        )

    def _execute(self, description: str, query):
        try:
            return query.execute().data or []
        except (APIError, httpx.HTTPError) as exc:
            raise DatastoreError(f"{description} failed: {exc}") from exc

    def insert_submission(self, submission: Submission) -> Submission:
        row = submission.as_dict()
        # Supabase assigns the primary key.
        row.pop("id")
        data = self._execute(
            f"insert into {submission.table}",
            self.client.table(submission.table).insert(row),
        )
        if not data:
            logger.warning("Insert into %s returned no representation", submission.table)
            return submission
        return type(submission).from_row(data[0])

    def get_submission(
        self, kind: SubmissionType, submission_id: str
    ) -> Optional[Submission]:
        record_class = submission_class(kind)
        data = self._execute(
            f"select from {record_class.table}",
            self.client.table(record_class.table)
            .select("*")
            .eq("id", submission_id)
            .limit(1),
        )
        return record_class.from_row(data[0]) if data else None

    def list_submissions(
        self,
        kind: SubmissionType,
        status: SubmissionStatus,
        *,
        newest_first: bool = False,
        limit: Optional[int] = None,
    ) -> list[Submission]:
        record_class = submission_class(kind)
        query = (
            self.client.table(record_class.table)
            .select("*")
            .eq("status", SubmissionStatus(status).value)
            .order("created_at", desc=newest_first)
        )
        if limit is not None:
            query = query.limit(limit)
        data = self._execute(f"select from {record_class.table}", query)
        return [record_class.from_row(row) for row in data]

    def update_status(
        self, kind: SubmissionType, submission_id: str, status: SubmissionStatus
    ) -> list[Submission]:
        record_class = submission_class(kind)
        data = self._execute(
            f"update of {record_class.table}",
            self.client.table(record_class.table)
            .update({"status": SubmissionStatus(status).value})
            .eq("id", submission_id),
        )
        return [record_class.from_row(row) for row in data]
