"""Tests for request logging helpers."""

import pytest

from addressbook.middleware import operation_name_from_payload, sanitize_query_params


class TestOperationName:
    @pytest.mark.parametrize(
        "operation_name,query,expected",
        [
            ("FindBob", "query Other { personCount }", "FindBob"),
            (None, "query FindBob { findPerson(name: \"Bob\") { id } }", "FindBob"),
            (None, "mutation AddBob { addPerson { id } }", "mutation:AddBob"),
            (None, "subscription Live { personAdded { name } }", "subscription:Live"),
            (None, "{ personCount }", "unnamed_operation"),
            (None, "query IntrospectionQuery { __schema { types { name } } }", "__introspection"),
            (None, None, None),
            ("", "", None),
        ],
    )
    def test_operation_name(self, operation_name, query, expected):
        assert operation_name_from_payload(operation_name, query) == expected


class TestSanitizeQueryParams:
    def test_sensitive_keys_are_redacted(self):
        params = {"token": "abc", "Authorization": "Bearer x", "page": "2"}

        assert sanitize_query_params(params) == {
            "token": "[REDACTED]",
            "Authorization": "[REDACTED]",
            "page": "2",
        }
