import pytest
from pydantic import ValidationError

from dtu_intercept import ClientRequest, RequestOptions, Scheduler, apply_options


class TestRequestOptions:
    def test_coerce_none(self):
        options = RequestOptions.coerce(None)
        assert options.headers == {}
        assert options.auth is None
        assert not options.has_path

    def test_coerce_mapping_keeps_unknown_keys(self):
        options = RequestOptions.coerce({"path": "/x", "agent": False, "headers": None})
        assert options.path == "/x"
        assert options.has_path
        assert options.headers == {}
        assert options.model_extra == {"agent": False}

    def test_coerce_model_copies(self):
        original = RequestOptions(headers={"a": "1"})
        copied = RequestOptions.coerce(original)
        copied.headers["b"] = "2"
        assert original.headers == {"a": "1"}

    def test_rejects_non_string_auth(self):
        with pytest.raises(ValidationError):
            RequestOptions.coerce({"auth": ["foo", "bar"]})


class TestApplyOptions:
    def test_headers_are_copied_verbatim(self):
        request = ClientRequest()
        apply_options(request, RequestOptions(headers={"X-Count": 3}), Scheduler())
        assert request.get_header("x-count") == 3
        assert request.get_headers() == {"x-count": 3}

    def test_explicit_authorization_wins(self):
        request = ClientRequest(headers={"Authorization": "Bearer t"})
        apply_options(request, RequestOptions(auth="foo:bar"), Scheduler())
        assert request.get_header("authorization") == "Bearer t"

    def test_continue_is_deferred_once(self):
        scheduler = Scheduler()
        request = ClientRequest()
        seen = []
        request.on("continue", lambda: seen.append(True))

        apply_options(
            request, RequestOptions(headers={"Expect": "100-continue"}), scheduler
        )
        assert seen == []

        scheduler.run_until_idle()
        assert seen == [True]

    def test_other_expect_values_do_not_continue(self):
        scheduler = Scheduler()
        request = ClientRequest()
        apply_options(request, RequestOptions(headers={"expect": "nothing"}), scheduler)
        assert scheduler.pending == 0
