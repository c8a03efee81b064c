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
"""Value serializers — convert a session's values to and from the stored string."""

from __future__ import annotations

import json
from collections.abc import Mapping
from typing import Any, Protocol, runtime_checkable

from docsession.kernel.exceptions import SessionDecodeException, SessionEncodeException


@runtime_checkable
class ValueSerializer(Protocol):
    """Encodes a values mapping into the string kept in a record's ``values`` field."""

    def dumps(self, values: Mapping[str, Any]) -> str: ...

    def loads(self, raw: str) -> dict[str, Any]: ...


class JsonValueSerializer:
    """Default serializer: values are stored as a JSON object string.

    Only JSON-representable values survive a save/reload cycle.
    """

    def dumps(self, values: Mapping[str, Any]) -> str:
        try:
            return json.dumps(dict(values))
        except (TypeError, ValueError) as exc:
            raise SessionEncodeException(f"Session values are not JSON serializable: {exc}") from exc

    def loads(self, raw: str) -> dict[str, Any]:
        try:
            decoded = json.loads(raw)
        except (json.JSONDecodeError, TypeError) as exc:
            raise SessionDecodeException(f"Stored session values are not valid JSON: {exc}") from exc
        if decoded is None:
            return {}
        if not isinstance(decoded, dict):
            raise SessionDecodeException(
                f"Stored session values must be a JSON object, got {type(decoded).__name__}"
            )
        return decoded


def encode_values(serializer: ValueSerializer, values: Mapping[str, Any], sid: str | None = None) -> str:
    """Encode *values*; an empty mapping is stored as the empty string."""
    if not values:
        return ""
    try:
        return serializer.dumps(values)
    except SessionEncodeException as exc:
        if sid is not None and "sid" not in exc.context:
            exc.context["sid"] = sid
        raise


def decode_values(serializer: ValueSerializer, raw: str | None, sid: str | None = None) -> dict[str, Any]:
    """Decode a stored payload; ``None`` and the empty string give an empty dict."""
    if not raw:
        return {}
    try:
        return serializer.loads(raw)
    except SessionDecodeException as exc:
        if sid is not None and "sid" not in exc.context:
            exc.context["sid"] = sid
        raise
