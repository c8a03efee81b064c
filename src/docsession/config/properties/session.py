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
"""Session subsystem configuration properties."""

from __future__ import annotations

from dataclasses import dataclass

from docsession.core.config import config_properties

STORE_TYPES = ("mongodb", "memory")


@config_properties(prefix="docsession.session")
@dataclass
class SessionProperties:
    """Configuration for backend selection (docsession.session.*)."""

    store: str = "mongodb"

    def __post_init__(self) -> None:
        self.store = self.store.lower()
        if self.store not in STORE_TYPES:
            raise ValueError(f"Unknown session store '{self.store}', expected one of {', '.join(STORE_TYPES)}")
