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
"""Structlog setup for docsession's session events."""

from __future__ import annotations

import logging
import re
import sys
from collections.abc import Mapping
from typing import Any

import structlog

from docsession.core.config import Config

_URI_PASSWORD_RE = re.compile(r"(?P<prefix>mongodb(?:\+srv)?://[^:/@]+:)[^@]*@")


def redact_uri_password(logger: Any, method_name: str, event_dict: dict[str, Any]) -> dict[str, Any]:
    """Mask the password of a MongoDB connection string logged as ``uri``."""
    uri = event_dict.get("uri")
    if isinstance(uri, str):
        event_dict["uri"] = _URI_PASSWORD_RE.sub(r"\g<prefix>***@", uri)
    return event_dict


class SessionFields:
    """Processor adding the configured store fields to docsession events.

    Fields already on the event win. Events from loggers outside the
    ``docsession`` namespace pass through unchanged.
    """

    def __init__(self, fields: Mapping[str, Any]) -> None:
        self._fields = dict(fields)

    def __call__(self, logger: Any, method_name: str, event_dict: dict[str, Any]) -> dict[str, Any]:
        if str(event_dict.get("logger", "")).startswith("docsession"):
            for key, value in self._fields.items():
                event_dict.setdefault(key, value)
        return event_dict


def _level(name: str) -> int:
    return getattr(logging, name.upper(), logging.INFO)


class StructlogAdapter:
    """Configures structlog from the ``docsession.logging`` section.

    ``format`` selects ``console`` or ``json`` rendering, ``level.root``
    sets the root level and every other key under ``level`` sets the
    level of that stdlib logger. Events from docsession loggers carry the
    selected ``store`` and, for MongoDB, the ``collection``.
    """

    def __init__(self) -> None:
        self._root_level: str = "INFO"
        self._format: str = "console"
        self._module_levels: dict[str, str] = {}
        self._session_fields: dict[str, Any] = {}

    @property
    def session_fields(self) -> dict[str, Any]:
        return dict(self._session_fields)

    def configure(self, config: Config) -> None:
        levels = dict(config.get_section("docsession.logging.level"))
        self._root_level = str(levels.pop("root", "INFO")).upper()
        self._module_levels = {name: str(level).upper() for name, level in levels.items()}
        self._format = str(config.get("docsession.logging.format", "console")).lower()
        self._session_fields = self._fields_from(config)

        structlog.configure(
            processors=self.processors(),
            logger_factory=structlog.stdlib.LoggerFactory(),
            wrapper_class=structlog.stdlib.BoundLogger,
            cache_logger_on_first_use=True,
        )
        logging.basicConfig(format="%(message)s", stream=sys.stdout, level=_level(self._root_level), force=True)
        for name, level in self._module_levels.items():
            logging.getLogger(name).setLevel(_level(level))

    @staticmethod
    def _fields_from(config: Config) -> dict[str, Any]:
        store = str(config.get("docsession.session.store", "mongodb")).lower()
        fields: dict[str, Any] = {"store": store}
        if store == "mongodb":
            fields["collection"] = config.get("docsession.mongodb.collection") or "sessions"
        return fields

    def processors(self) -> list[structlog.types.Processor]:
        renderer: structlog.types.Processor
        if self._format == "json":
            renderer = structlog.processors.JSONRenderer()
        else:
            renderer = structlog.dev.ConsoleRenderer()

        return [
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            SessionFields(self._session_fields),
            redact_uri_password,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.UnicodeDecoder(),
            renderer,
        ]
