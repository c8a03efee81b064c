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
"""MongoDB session backend configuration properties."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from docsession.core.config import config_properties

DEFAULT_COLLECTION = "sessions"
DEFAULT_DATABASE = "docsession"

# property name -> pymongo client keyword
_INT_OPTIONS = {
    "min_pool_size": "minPoolSize",
    "max_pool_size": "maxPoolSize",
    "max_idle_time_ms": "maxIdleTimeMS",
    "connect_timeout_ms": "connectTimeoutMS",
    "socket_timeout_ms": "socketTimeoutMS",
    "server_selection_timeout_ms": "serverSelectionTimeoutMS",
    "wait_queue_timeout_ms": "waitQueueTimeoutMS",
}

_STR_OPTIONS = {
    "username": "username",
    "password": "password",
    "app_name": "appname",
    "tls_ca_file": "tlsCAFile",
    "tls_certificate_key_file": "tlsCertificateKeyFile",
}


@config_properties(prefix="docsession.mongodb")
@dataclass
class MongoDBProperties:
    """Configuration for the MongoDB session backend (docsession.mongodb.*).

    Empty strings and zero timeouts mean "use the driver default" and are
    left out of :meth:`client_options`.
    """

    uri: str = "mongodb://localhost:27017"
    database: str = ""
    collection: str = DEFAULT_COLLECTION
    username: str = ""
    password: str = ""
    app_name: str = ""
    min_pool_size: int = 0
    max_pool_size: int = 100
    max_idle_time_ms: int = 300_000
    connect_timeout_ms: int = 5_000
    socket_timeout_ms: int = 0
    server_selection_timeout_ms: int = 0
    wait_queue_timeout_ms: int = 0
    tls: bool = False
    tls_ca_file: str = ""
    tls_certificate_key_file: str = ""
    tls_allow_invalid_certificates: bool = False
    ensure_indexes: bool = True

    def __post_init__(self) -> None:
        if not self.uri:
            raise ValueError("docsession.mongodb.uri must not be empty")
        if not self.collection:
            self.collection = DEFAULT_COLLECTION
        for name in _INT_OPTIONS:
            if getattr(self, name) < 0:
                raise ValueError(f"docsession.mongodb.{name} must be >= 0, got {getattr(self, name)}")
        if self.max_pool_size and self.min_pool_size > self.max_pool_size:
            raise ValueError(
                f"docsession.mongodb.min_pool_size ({self.min_pool_size}) exceeds "
                f"max_pool_size ({self.max_pool_size})"
            )
        if bool(self.username) != bool(self.password):
            raise ValueError("docsession.mongodb.username and password must be set together")
        if not self.tls and (self.tls_ca_file or self.tls_certificate_key_file or self.tls_allow_invalid_certificates):
            raise ValueError("docsession.mongodb.tls_* options require docsession.mongodb.tls to be enabled")

    def client_options(self) -> dict[str, Any]:
        """Return keyword arguments for ``AsyncIOMotorClient`` (pymongo option names)."""
        options: dict[str, Any] = {}
        for name, option in _INT_OPTIONS.items():
            value = getattr(self, name)
            # maxPoolSize=0 means unbounded in pymongo, so it is passed through as-is
            if value or name == "max_pool_size":
                options[option] = value
        for name, option in _STR_OPTIONS.items():
            value = getattr(self, name)
            if value:
                options[option] = value
        if self.tls:
            options["tls"] = True
            if self.tls_allow_invalid_certificates:
                options["tlsAllowInvalidCertificates"] = True
        return options
