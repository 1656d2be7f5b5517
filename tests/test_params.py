"""Params validation: typed RequestParams built from a loose mapping."""

import pytest

from riquest.errors import ValidationError, ValidationFailure
from riquest.params import RequestParams, validate_params


class TestValidateParamsUrl:
    @pytest.mark.parametrize("params", [{}, {"url": None}, {"url": 42}, {"url": ""}, {"url": ["http://x"]}])
    def test_bad_url_is_rejected_and_named(self, params):
        with pytest.raises(ValidationError) as exc_info:
            validate_params(params)

        assert "url" in str(exc_info.value)
        assert exc_info.value.field == "url"

    def test_missing_url_is_reported_as_missing(self):
        with pytest.raises(ValidationError) as exc_info:
            validate_params({"method": "GET"})

        assert exc_info.value.failure is ValidationFailure.MISSING

    def test_non_mapping_input_is_rejected(self):
        with pytest.raises(ValidationError) as exc_info:
            validate_params(["http://example.com"])

        assert exc_info.value.failure is ValidationFailure.NOT_A_MAPPING
        assert "list given" in str(exc_info.value)


class TestValidateParamsFields:
    @pytest.mark.parametrize("method", ["PATCH", "head", "", "options"])
    def test_unknown_method_is_rejected(self, method):
        with pytest.raises(ValidationError) as exc_info:
            validate_params({"url": "http://example.com", "method": method})

        assert exc_info.value.failure is ValidationFailure.UNSUPPORTED_VALUE

    @pytest.mark.parametrize("method", ["get", "Post", "PUT", "delete"])
    def test_known_method_any_case_is_accepted(self, method):
        params = validate_params({"url": "http://example.com", "method": method})

        assert params.method == method

    def test_non_string_method_is_rejected(self):
        with pytest.raises(ValidationError, match="method must be a string, int given"):
            validate_params({"url": "http://example.com", "method": 1})

    @pytest.mark.parametrize("field", ["headers", "data", "agent"])
    def test_mapping_fields_reject_other_types(self, field):
        with pytest.raises(ValidationError, match=f"{field} must be a mapping, list given"):
            validate_params({"url": "http://example.com", field: [1, 2]})

    @pytest.mark.parametrize("timeout", ["3000", True, [1]])
    def test_timeout_must_be_numeric(self, timeout):
        with pytest.raises(ValidationError, match="timeout must be a number"):
            validate_params({"url": "http://example.com", "timeout": timeout})

    @pytest.mark.parametrize("field", ["auth", "createConnection", "ca", "cert", "key"])
    def test_string_fields_reject_other_types(self, field):
        with pytest.raises(ValidationError, match="must be a string, int given"):
            validate_params({"url": "https://example.com", field: 5})

    @pytest.mark.parametrize("field", ["rejectUnauthorized", "returnStream"])
    def test_boolean_fields_reject_other_types(self, field):
        with pytest.raises(ValidationError, match="must be a boolean, str given"):
            validate_params({"url": "https://example.com", field: "yes"})

    def test_header_values_must_be_strings_or_none(self):
        with pytest.raises(ValidationError, match="must be a string, int given"):
            validate_params({"url": "http://example.com", "headers": {"X-Count": 3}})

    def test_header_keys_must_be_strings(self):
        with pytest.raises(ValidationError, match="headers key 1 must be a string, int given"):
            validate_params({"url": "http://example.com", "headers": {1: "x"}})

    def test_non_ascii_header_value_is_rejected(self):
        with pytest.raises(ValidationError, match="must be ascii") as exc_info:
            validate_params({"url": "http://example.com", "headers": {"X-Name": "Zoë"}})

        assert "X-Name" in str(exc_info.value)
        assert exc_info.value.failure is ValidationFailure.UNSUPPORTED_VALUE

    def test_non_ascii_header_key_is_rejected(self):
        with pytest.raises(ValidationError, match="must be ascii"):
            validate_params({"url": "http://example.com", "headers": {"X-Café": "1"}})

    def test_timeout_too_large_for_a_float(self):
        with pytest.raises(ValidationError, match="timeout is too large") as exc_info:
            validate_params({"url": "http://example.com", "timeout": 10 ** 400})

        assert exc_info.value.field == "timeout"

    def test_none_counts_as_absent(self):
        params = validate_params({"url": "http://example.com", "headers": None, "timeout": None})

        assert params.headers is None
        assert params.timeout is None


class TestValidateParamsResult:
    def test_camel_case_keys_are_mapped(self):
        params = validate_params({
            "url": "https://example.com",
            "returnStream": True,
            "rejectUnauthorized": False,
            "createConnection": "/tmp/api.sock",
            "ignored": "value",
        })

        assert params == RequestParams(
            url="https://example.com",
            return_stream=True,
            reject_unauthorized=False,
            create_connection="/tmp/api.sock",
        )

    def test_header_none_values_are_kept_for_suppression(self):
        params = validate_params({"url": "http://example.com", "headers": {"Accept": None}})

        assert params.headers == {"Accept": None}

    def test_request_params_instance_is_revalidated(self):
        with pytest.raises(ValidationError):
            validate_params(RequestParams(url="http://example.com", method="TRACE"))
