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
"""Tests for value serializers and the empty-payload helpers."""

import pytest

from docsession.kernel.exceptions import SessionDecodeException, SessionEncodeException
from docsession.session.serializer import (
    JsonValueSerializer,
    ValueSerializer,
    decode_values,
    encode_values,
)


class TestJsonValueSerializer:
    def test_implements_protocol(self):
        assert isinstance(JsonValueSerializer(), ValueSerializer)

    def test_loads_object(self):
        assert JsonValueSerializer().loads('{"theme": "dark", "n": 3}') == {"theme": "dark", "n": 3}

    def test_loads_null_is_empty(self):
        assert JsonValueSerializer().loads("null") == {}

    def test_loads_invalid_json(self):
        with pytest.raises(SessionDecodeException, match="not valid JSON"):
            JsonValueSerializer().loads("{broken")

    def test_loads_non_object(self):
        with pytest.raises(SessionDecodeException, match="must be a JSON object, got list"):
            JsonValueSerializer().loads("[1, 2]")

    def test_dumps_unserializable(self):
        with pytest.raises(SessionEncodeException):
            JsonValueSerializer().dumps({"when": object()})


class TestHelpers:
    def test_encode_empty_mapping_is_empty_string(self):
        assert encode_values(JsonValueSerializer(), {}) == ""

    def test_encode_non_empty(self):
        assert encode_values(JsonValueSerializer(), {"a": 1}) == '{"a": 1}'

    @pytest.mark.parametrize("raw", ["", None])
    def test_decode_empty_payload(self, raw):
        assert decode_values(JsonValueSerializer(), raw) == {}

    def test_decode_attaches_sid_to_error(self):
        with pytest.raises(SessionDecodeException) as exc_info:
            decode_values(JsonValueSerializer(), "oops", sid="abc")
        assert exc_info.value.context == {"sid": "abc"}
        assert exc_info.value.code == "SESSION_DECODE"

    def test_encode_attaches_sid_to_error(self):
        with pytest.raises(SessionEncodeException) as exc_info:
            encode_values(JsonValueSerializer(), {"x": {1, 2}}, sid="abc")
        assert exc_info.value.context == {"sid": "abc"}
