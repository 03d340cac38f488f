"""Tests for request assembly and terminal operations."""

import httpx
import pytest

from fluent_request import Blob, EngineResponse, TransportError, request


class TestSend:
    class TestAssembly:
        @pytest.mark.anyio
        async def test_default_options(self, engine, base_url: str) -> None:
            await request(base_url, engine=engine).send()

            options = engine.last_options
            assert options["method"] == "GET"
            assert options["body"] is None
            assert options["timeout_ms"] == 30000
            assert options["max_redirects"] == 21
            assert options["headers"]["user-agent"].startswith("fluent-request/")
            assert "content-type" not in options["headers"]

        @pytest.mark.anyio
        async def test_json_payload_gets_content_type(self, engine, base_url: str) -> None:
            await request(base_url, engine=engine).post().body({"x": 1}).send()

            assert engine.last_options["body"] == '{"x":1}'
            assert engine.last_options["headers"]["content-type"] == "application/json"

        @pytest.mark.anyio
        async def test_form_payload_gets_content_type(self, engine, base_url: str) -> None:
            await request(base_url, engine=engine).body({"x": 1}, "form").send()

            assert engine.last_options["body"] == "x=1"
            assert (
                engine.last_options["headers"]["content-type"]
                == "application/x-www-form-urlencoded"
            )

        @pytest.mark.anyio
        async def test_buffer_payload_has_no_content_type(
            self, engine, base_url: str
        ) -> None:
            await request(base_url, engine=engine).body(b"bytes").send()

            assert engine.last_options["body"] == b"bytes"
            assert "content-type" not in engine.last_options["headers"]

        @pytest.mark.anyio
        async def test_explicit_content_type_wins(self, engine, base_url: str) -> None:
            builder = request(base_url, engine=engine).body({"x": 1})
            await builder.header("Content-Type", "text/plain").send()

            assert engine.last_options["headers"]["content-type"] == "text/plain"

        @pytest.mark.anyio
        async def test_explicit_content_type_set_before_body_wins(
            self, engine, base_url: str
        ) -> None:
            builder = request(base_url, engine=engine).header("content-type", "text/plain")
            await builder.body({"x": 1}).send()

            assert engine.last_options["headers"]["content-type"] == "text/plain"

        @pytest.mark.anyio
        async def test_sending_does_not_mutate_headers(self, engine, base_url: str) -> None:
            builder = request(base_url, engine=engine).body({"x": 1})
            await builder.send()

            assert builder.headers == {}

        @pytest.mark.anyio
        async def test_most_recent_user_agent_is_sent(self, engine, base_url: str) -> None:
            builder = request(base_url, engine=engine).agent("first")
            await builder.header("user-agent", "second").send()
            assert engine.last_options["headers"]["user-agent"] == "second"

            await builder.agent("third", "fourth").send()
            assert engine.last_options["headers"]["user-agent"] == "third fourth"

        @pytest.mark.anyio
        @pytest.mark.parametrize(
            "flag,expected", [(False, 0), (True, 21), (5, 5)]
        )
        async def test_redirect_cap(self, engine, base_url: str, flag, expected) -> None:
            await request(base_url, engine=engine).follow(flag).send()
            assert engine.last_options["max_redirects"] == expected

        @pytest.mark.anyio
        async def test_timeout_is_sent_in_milliseconds(self, engine, base_url: str) -> None:
            await request(base_url, engine=engine).timeout(2.5).send()
            assert engine.last_options["timeout_ms"] == 2500

        @pytest.mark.anyio
        async def test_engine_options_override_everything(
            self, engine, base_url: str
        ) -> None:
            overrides = {
                "method": "PUT",
                "headers": {"x-only": "1"},
                "timeout_ms": 1,
                "max_redirects": 2,
                "cookies": {"session": "abc"},
            }
            builder = request(base_url, engine=engine).post().auth("t").options(overrides)
            await builder.send()

            assert engine.last_options == {"body": None, **overrides}

    class TestTerminalOperations:
        @pytest.mark.anyio
        async def test_await_builder_sends(self, engine, base_url: str) -> None:
            response = await request(base_url, engine=engine).path("ping")

            assert isinstance(response, EngineResponse)
            assert response.status_code == 200
            assert engine.last_url == httpx.URL(f"{base_url}/ping")

        @pytest.mark.anyio
        async def test_json(self, make_engine, base_url: str) -> None:
            engine = make_engine(json={"id": 42})
            assert await request(base_url, engine=engine).json() == {"id": 42}

        @pytest.mark.anyio
        async def test_text(self, make_engine, base_url: str) -> None:
            engine = make_engine(json="hello")
            assert await request(base_url, engine=engine).text() == '"hello"'

        @pytest.mark.anyio
        async def test_raw_and_buffer(self, make_engine, base_url: str) -> None:
            engine = make_engine(json="hi")
            builder = request(base_url, engine=engine)

            assert await builder.raw() == b'"hi"'
            assert await builder.buffer() == b'"hi"'

        @pytest.mark.anyio
        async def test_blob(self, make_engine, base_url: str) -> None:
            engine = make_engine(json={"a": 1})
            blob = await request(base_url, engine=engine).blob()

            assert isinstance(blob, Blob)
            assert blob.content_type == "application/json"
            assert blob.size == len(blob.content)

        @pytest.mark.anyio
        async def test_each_terminal_call_sends_again(self, engine, base_url: str) -> None:
            builder = request(base_url, engine=engine)

            await builder.json()
            await builder.text()
            await builder

            assert len(engine.calls) == 3

        @pytest.mark.anyio
        async def test_mutations_between_sends_apply(self, engine, base_url: str) -> None:
            builder = request(base_url, engine=engine)
            await builder.send()
            await builder.query("page", 2).post().send()

            first_url, first = engine.calls[0]
            second_url, second = engine.calls[1]
            assert first["method"] == "GET"
            assert first_url.query == b""
            assert second["method"] == "POST"
            assert second_url.query == b"page=2"

        @pytest.mark.anyio
        async def test_engine_errors_propagate_unchanged(
            self, make_engine, base_url: str
        ) -> None:
            error = TransportError("connection refused", base_url)
            engine = make_engine(error=error)

            with pytest.raises(TransportError) as exc_info:
                await request(base_url, engine=engine).json()

            assert exc_info.value is error

        @pytest.mark.anyio
        async def test_end_to_end_dispatch(self, make_engine) -> None:
            engine = make_engine(json={"name": "Ada"})

            result = await (
                request("https://api.example.com", engine=engine)
                .path("users", "42")
                .query("verbose", "true")
                .auth("tok123")
                .json()
            )

            assert result == {"name": "Ada"}
            assert str(engine.last_url) == "https://api.example.com/users/42?verbose=true"
            assert engine.last_options["method"] == "GET"
            assert engine.last_options["headers"]["authorization"] == "Bearer tok123"
