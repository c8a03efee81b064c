# Copyright 2026 Firefly Software Solutions Inc.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
"""SessionRecord — the persisted document for one session."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from docsession.kernel.exceptions import SessionDecodeException


def utcnow() -> datetime:
    return datetime.now(UTC)


def expires_at(expired: int) -> datetime:
    """Return the timestamp *expired* seconds from now."""
    return utcnow() + timedelta(seconds=expired)


class SessionRecord(BaseModel):
    """Document shape ``{_id, sid, time, values}``.

    ``values`` holds the serialized payload as a string, not a nested
    document, so arbitrary application values need no fixed schema.
    """

    model_config = ConfigDict(populate_by_name=True, arbitrary_types_allowed=True)

    id: Any = Field(default=None, alias="_id")
    sid: str
    time: datetime = Field(default_factory=utcnow)
    values: str | None = ""

    @classmethod
    def from_document(cls, document: dict[str, Any]) -> SessionRecord:
        """Validate a stored document; a malformed one raises SessionDecodeException."""
        try:
            return cls.model_validate(document)
        except ValidationError as exc:
            sid = document.get("sid")
            raise SessionDecodeException(
                f"Stored session '{sid}' is malformed: {exc}",
                sid=sid if isinstance(sid, str) else None,
            ) from exc

    def to_document(self) -> dict[str, Any]:
        """Return the document to insert; ``_id`` is omitted until the database assigns one."""
        return self.model_dump(by_alias=True, exclude_none=True)
