"""
Persistence of derived SEO/readability metadata, one record per post.

Writes are upserts keyed by post id: the first write creates the record,
later writes patch only the fields they carry and refresh ``updated_at``.
Saving titles therefore never erases previously saved SEO fields.

Ownership checks belong to the calling application, not to this module.
"""

import json
import logging
from datetime import datetime, timezone
from threading import Lock
from typing import Any, Dict, List, Mapping, Optional, Protocol, Union

from pydantic import BaseModel

from .clients.wordpress import WordPressClient
from .schemas import RECORD_FIELDS, OutlineEntry, PersistedSeoRecord, ReadabilityMetrics, SeoMetadata
from .utils import to_snake_case

logger = logging.getLogger(__name__)


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class RecordBackend(Protocol):
    """Keyed document store. ``upsert`` must be a single unit of work."""

    def get(self, post_id: str) -> Optional[Dict[str, Any]]:
        ...

    def upsert(self, post_id: str, fields: Dict[str, Any], now: datetime) -> Dict[str, Any]:
        ...


class InMemoryRecordBackend:
    """Dict-backed store; each call holds a lock, so every upsert is atomic."""

    def __init__(self):
        self._records: Dict[str, Dict[str, Any]] = {}
        self._lock = Lock()

    def get(self, post_id: str) -> Optional[Dict[str, Any]]:
        with self._lock:
            record = self._records.get(post_id)
            return dict(record) if record else None

    def upsert(self, post_id: str, fields: Dict[str, Any], now: datetime) -> Dict[str, Any]:
        with self._lock:
            record = self._records.get(post_id)
            if record is None:
                record = {"post_id": post_id, "created_at": now}
                self._records[post_id] = record
            record.update(fields)
            record["updated_at"] = now
            return dict(record)

    def __len__(self) -> int:
        return len(self._records)


class WordPressMetaBackend:
    """Stores the record as JSON in a single post-meta field.

    The patch is read-modify-write over two REST calls, so concurrent writers
    to the same post are last-write-wins.
    """

    def __init__(self, wp_client: WordPressClient, meta_key: str = "content_intel_seo"):
        self.wp_client = wp_client
        self.meta_key = meta_key

    def get(self, post_id: str) -> Optional[Dict[str, Any]]:
        raw = self.wp_client.get_post_meta(post_id, self.meta_key)
        if not raw:
            return None
        return json.loads(raw) if isinstance(raw, str) else dict(raw)

    def upsert(self, post_id: str, fields: Dict[str, Any], now: datetime) -> Dict[str, Any]:
        record = self.get(post_id) or {"post_id": post_id, "created_at": now.isoformat()}
        record.update(fields)
        record["updated_at"] = now.isoformat()
        if not self.wp_client.update_post_meta(post_id, self.meta_key, json.dumps(record, default=str)):
            raise IOError(f"Failed to save SEO metadata for post {post_id}")
        return record


def _plain(value: Any) -> Any:
    if isinstance(value, BaseModel):
        return value.model_dump(mode="json")
    if isinstance(value, list):
        return [_plain(v) for v in value]
    return value


class SeoMetadataGateway:
    """Upsert/get access to the PersistedSeoRecord of each post."""

    def __init__(self, backend: RecordBackend):
        self.backend = backend

    def upsert(self, post_id: Any, fields: Mapping[str, Any]) -> PersistedSeoRecord:
        """
        Merge ``fields`` into the post's record, creating it if needed.

        Keys may be snake_case or the camelCase wire names. ``None`` values are
        ignored so a partial write never blanks a stored field. Values are
        validated against their record fields before anything is written, so
        a rejected patch leaves the stored record untouched.

        Raises:
            ValueError: If a key names no record field, or a value does not
                fit its field (pydantic's ValidationError is a ValueError).
        """
        patch = {}
        for key, value in fields.items():
            name = to_snake_case(key)
            if name not in RECORD_FIELDS:
                raise ValueError(f"Unknown SEO record field: {key}")
            if value is not None:
                patch[name] = _plain(value)

        now = utcnow()
        checked = PersistedSeoRecord.model_validate(
            {**patch, "post_id": str(post_id), "created_at": now, "updated_at": now})
        patch = checked.model_dump(mode="json", include=set(patch))

        record = self.backend.upsert(str(post_id), patch, now)
        logger.info(f"💾 SEO record for post {post_id} saved ({', '.join(sorted(patch)) or 'timestamps only'})")
        return PersistedSeoRecord.model_validate(record)

    def get(self, post_id: Any) -> Optional[PersistedSeoRecord]:
        record = self.backend.get(str(post_id))
        return PersistedSeoRecord.model_validate(record) if record else None

    # --- Convenience writers ---

    def save_seo_metadata(self, post_id: Any, seo: Union[SeoMetadata, Mapping[str, Any]]) -> PersistedSeoRecord:
        if isinstance(seo, SeoMetadata):
            seo = seo.model_dump()
        known = {k: v for k, v in seo.items() if to_snake_case(k) in SeoMetadata.model_fields}
        return self.upsert(post_id, known)

    def update_readability_stats(self, post_id: Any,
                                 metrics: Union[ReadabilityMetrics, Mapping[str, Any]]) -> PersistedSeoRecord:
        if isinstance(metrics, ReadabilityMetrics):
            metrics = metrics.model_dump()
        return self.upsert(post_id, metrics)

    def save_generated_titles(self, post_id: Any, titles: List[str]) -> PersistedSeoRecord:
        return self.upsert(post_id, {"generated_titles": list(titles)})

    def save_table_of_contents(self, post_id: Any,
                               toc: List[Union[OutlineEntry, Mapping[str, Any]]]) -> PersistedSeoRecord:
        return self.upsert(post_id, {"table_of_contents": [_plain(entry) for entry in toc]})
