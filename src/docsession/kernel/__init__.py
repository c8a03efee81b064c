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
"""Kernel — exception hierarchy and lifecycle protocol."""

from docsession.kernel.exceptions import (
    BusinessException,
    DataIntegrityException,
    DocSessionException,
    InfrastructureException,
    ResourceNotFoundException,
    SessionDecodeException,
    SessionEncodeException,
    SessionNotFoundException,
    SessionSerializationException,
    StorageException,
    StoreConnectionException,
)
from docsession.kernel.lifecycle import Lifecycle

__all__ = [
    "BusinessException",
    "DataIntegrityException",
    "DocSessionException",
    "InfrastructureException",
    "Lifecycle",
    "ResourceNotFoundException",
    "SessionDecodeException",
    "SessionEncodeException",
    "SessionNotFoundException",
    "SessionSerializationException",
    "StorageException",
    "StoreConnectionException",
]
