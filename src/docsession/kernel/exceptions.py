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
"""Exception hierarchy for docsession.

Every error raised by the session backends inherits from DocSessionException,
so callers can catch the base class or a specific family.

Categories:
- BusinessException: missing sessions, corrupt or unencodable payloads
- InfrastructureException: connection and storage failures in the database
"""

from __future__ import annotations


# =============================================================================
# Base Exception
# =============================================================================


class DocSessionException(Exception):
    """Base exception for all docsession errors.

    Args:
        message: Human-readable error description.
        code: Machine-readable error code (e.g. "SESSION_NOT_FOUND").
        context: Arbitrary key-value pairs for error context and debugging.
    """

    def __init__(
        self,
        message: str,
        code: str | None = None,
        context: dict | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.context: dict = context if context is not None else {}


# =============================================================================
# Business Exceptions
# =============================================================================


class BusinessException(DocSessionException):
    """Errors caused by the state of the data rather than the infrastructure."""


class ResourceNotFoundException(BusinessException):
    """Requested resource does not exist."""


class DataIntegrityException(BusinessException):
    """Stored or supplied data cannot be interpreted."""


class SessionNotFoundException(ResourceNotFoundException):
    """No session record matches the requested session id."""

    def __init__(self, sid: str) -> None:
        super().__init__(
            f"Session '{sid}' not found",
            code="SESSION_NOT_FOUND",
            context={"sid": sid},
        )
        self.sid = sid


class SessionSerializationException(DataIntegrityException):
    """Session values could not be converted to or from their stored form."""


class SessionDecodeException(SessionSerializationException):
    """The stored values payload is not a valid encoded mapping."""

    def __init__(self, message: str, sid: str | None = None) -> None:
        super().__init__(message, code="SESSION_DECODE", context={"sid": sid} if sid else None)


class SessionEncodeException(SessionSerializationException):
    """The in-memory values cannot be encoded for storage."""

    def __init__(self, message: str, sid: str | None = None) -> None:
        super().__init__(message, code="SESSION_ENCODE", context={"sid": sid} if sid else None)


# =============================================================================
# Infrastructure Exceptions
# =============================================================================


class InfrastructureException(DocSessionException):
    """Failures of the database or the connection to it."""


class StoreConnectionException(InfrastructureException):
    """The initial connection or health check against the database failed."""

    def __init__(self, message: str) -> None:
        super().__init__(message, code="SESSION_CONNECTION")


class StorageException(InfrastructureException):
    """A database operation (insert, update, delete, lookup) failed."""

    def __init__(self, message: str, sid: str | None = None) -> None:
        super().__init__(message, code="SESSION_STORAGE", context={"sid": sid} if sid else None)
        self.sid = sid
