import pytest

from restcore import NoAuthentication, RestRequest
from restcore._utils import user_agent_value
from restcore._utils.constants import HEADER_USER_AGENT
from restcore.models.errors import InvalidURLError
from restcore.models.request import build_url, merge_headers


@pytest.fixture
def no_auth() -> NoAuthentication:
    return NoAuthentication()


class TestMergeHeaders:
    def test_last_write_wins_case_insensitively(self):
        merged = merge_headers({"accept": "text/plain", "X-Id": "1"}, {"Accept": "*/*"})

        assert merged == {"X-Id": "1", "Accept": "*/*"}

    def test_original_mapping_is_not_modified(self):
        headers = {"Accept": "text/plain"}

        merge_headers(headers, {"Accept": "*/*"})

        assert headers == {"Accept": "text/plain"}

    def test_case_variants_in_one_mapping_collapse(self):
        merged = merge_headers({"x-id": "1", "X-Id": "2"}, {})

        assert merged == {"X-Id": "2"}


class TestCreate:
    def test_defaults(self, no_auth: NoAuthentication):
        request = RestRequest.create("get", "https://api.example.com/items", no_auth)

        assert request.method == "GET"
        assert request.headers == {}
        assert request.query_items == ()
        assert request.body is None

    def test_accept_and_content_type_overwrite_headers(self, no_auth: NoAuthentication):
        request = RestRequest.create(
            "POST",
            "https://api.example.com/items",
            no_auth,
            headers={"accept": "text/plain", "content-type": "text/plain", "X-Id": "7"},
            accept_type="application/json",
            content_type="application/xml",
        )

        assert request.headers == {
            "X-Id": "7",
            "Accept": "application/json",
            "Content-Type": "application/xml",
        }

    def test_case_variant_headers_send_one_value(self, no_auth: NoAuthentication):
        request = RestRequest.create(
            "GET",
            "https://api.example.com/items",
            no_auth,
            headers={"x-id": "1", "X-Id": "2"},
        )

        assert request.build().headers.get_list("X-Id") == ["2"]

    def test_with_headers_returns_copy(self, no_auth: NoAuthentication):
        request = RestRequest.create("GET", "https://api.example.com", no_auth)

        updated = request.with_headers({"Authorization": "Bearer x"})

        assert request.headers == {}
        assert updated.headers == {"Authorization": "Bearer x"}

    def test_request_is_frozen(self, no_auth: NoAuthentication):
        request = RestRequest.create("GET", "https://api.example.com", no_auth)

        with pytest.raises(AttributeError):
            request.method = "POST"  # type: ignore[misc]


class TestBuildUrl:
    def test_plus_in_query_value_is_escaped(self):
        url = build_url("https://api.example.com/search", [("q", "a+b c")])

        assert url.query == b"q=a%2Bb%20c"

    def test_plus_in_existing_query_is_escaped(self):
        url = build_url("https://api.example.com/search?q=1+1")

        assert url.query == b"q=1%2B1"

    def test_query_items_keep_their_order(self):
        url = build_url(
            "https://api.example.com/search", [("z", "1"), ("a", "2"), ("z", "3")]
        )

        assert url.query == b"z=1&a=2&z=3"

    def test_query_items_extend_existing_query(self):
        url = build_url("https://api.example.com/search?old=1", [("new", "2")])

        assert url.query == b"old=1&new=2"

    def test_reserved_characters_are_encoded(self):
        url = build_url("https://api.example.com/search", [("q", "a&b=c#d")])

        assert url.query == b"q=a%26b%3Dc%23d"
        assert url.params["q"] == "a&b=c#d"

    @pytest.mark.parametrize(
        "url", ["not a url", "/relative/path", "ftp://example.com/file", "https://"]
    )
    def test_invalid_url(self, url: str):
        with pytest.raises(InvalidURLError):
            build_url(url)


class TestBuild:
    def test_wire_request(self, no_auth: NoAuthentication):
        request = RestRequest.create(
            "PUT",
            "https://api.example.com/items/1",
            no_auth,
            content_type="application/json",
            query_items=[("version", "2018-03-19")],
            body=b'{"name": "apple"}',
        )

        wire_request = request.build()

        assert wire_request.method == "PUT"
        assert str(wire_request.url) == "https://api.example.com/items/1?version=2018-03-19"
        assert wire_request.headers["Content-Type"] == "application/json"
        assert wire_request.content == b'{"name": "apple"}'

    def test_user_agent_cannot_be_overridden(self, no_auth: NoAuthentication):
        request = RestRequest.create(
            "GET",
            "https://api.example.com",
            no_auth,
            headers={"user-agent": "custom/1.0"},
        )

        wire_request = request.build()

        assert wire_request.headers.get_list(HEADER_USER_AGENT) == [user_agent_value()]

    def test_user_agent_format(self):
        value = user_agent_value("my-sdk", "1.2.3")
        sdk, operating_system = value.split(" ", 1)

        assert sdk == "my-sdk/1.2.3"
        assert "/" in operating_system

    def test_build_fails_for_invalid_url(self, no_auth: NoAuthentication):
        request = RestRequest.create("GET", "no-scheme", no_auth)

        with pytest.raises(InvalidURLError):
            request.build()
