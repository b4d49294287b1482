"""Tests for the cache command bundle and the in-memory cache client
(core/commands.py, infra/memory_cache.py, __main__.py).

Coverage:
* MemoryCacheClient expiry, statistics, disabling and teardown
* cache-stats / cache-clear / cache-invalidate end to end through ``main``
* Registry merging and the demo entry point
"""

from __future__ import annotations

import json
from typing import Any

import pytest

from clikit.__main__ import DEMO_OPTIONS, cli
from clikit.cli import exit_codes
from clikit.cli.runner import main
from clikit.core.commands import InvalidateArgs, NoArgs, cache_commands, create_command
from clikit.core.protocols import CacheClient, CacheDisable, Disposable
from clikit.infra.memory_cache import MemoryCacheClient


class FakeClock:
    def __init__(self) -> None:
        self.now = 1000.0

    def __call__(self) -> float:
        return self.now


def _seeded_factory(
    entries: dict[str, Any],
    created: list[MemoryCacheClient],
) -> Any:
    def build() -> MemoryCacheClient:
        client = MemoryCacheClient()
        for key, value in entries.items():
            client.set(key, value)
        created.append(client)
        return client

    return build


# ---------------------------------------------------------------------------
# MemoryCacheClient
# ---------------------------------------------------------------------------

class TestMemoryCacheClient:
    def test_satisfies_runner_capabilities(self) -> None:
        client = MemoryCacheClient()
        assert isinstance(client, CacheClient)
        assert isinstance(client, CacheDisable)
        assert isinstance(client, Disposable)

    def test_hit_and_miss(self) -> None:
        client = MemoryCacheClient()
        client.set("order:1", {"id": "1"})

        assert client.get("order:1") == {"id": "1"}
        assert client.get("order:2") is None
        stats = client.get_cache_stats()
        assert stats["hits"] == 1
        assert stats["misses"] == 1

    def test_entries_expire(self) -> None:
        clock = FakeClock()
        client = MemoryCacheClient(ttl_seconds=10, clock=clock)
        client.set("k", "v")

        clock.now += 9.9
        assert client.get("k") == "v"
        clock.now += 0.1
        assert client.get("k") is None
        assert client.get_cache_stats()["entries"] == 0

    def test_stats_count_only_live_entries(self) -> None:
        clock = FakeClock()
        client = MemoryCacheClient(ttl_seconds=5, clock=clock)
        client.set("old", 1)
        clock.now += 3
        client.set("new", 2)
        clock.now += 3

        assert client.get_cache_stats() == {
            "enabled": True,
            "entries": 1,
            "hits": 0,
            "misses": 0,
            "ttlSeconds": 5,
        }

    @pytest.mark.parametrize("ttl", [0, -1])
    def test_ttl_must_be_positive(self, ttl: float) -> None:
        with pytest.raises(ValueError, match="ttl_seconds"):
            MemoryCacheClient(ttl_seconds=ttl)

    def test_disabled_cache_neither_reads_nor_writes(self) -> None:
        client = MemoryCacheClient()
        client.set("k", "v")
        client.disable_cache()
        client.set("other", "x")

        assert client.get("k") is None
        assert client.get_cache_stats()["enabled"] is False
        assert client.invalidate_cache_key("other") is False

    def test_clear_returns_count(self) -> None:
        client = MemoryCacheClient()
        client.set("a", 1)
        client.set("b", 2)

        assert client.clear_cache() == 2
        assert client.clear_cache() == 0

    def test_invalidate(self) -> None:
        client = MemoryCacheClient()
        client.set("a", 1)

        assert client.invalidate_cache_key("a") is True
        assert client.invalidate_cache_key("a") is False

    @pytest.mark.asyncio
    async def test_disconnect_is_idempotent(self) -> None:
        client = MemoryCacheClient()
        client.set("a", 1)

        await client.disconnect()
        await client.disconnect()

        assert client.closed is True
        assert client.get_cache_stats()["entries"] == 0


# ---------------------------------------------------------------------------
# Cache commands
# ---------------------------------------------------------------------------

class TestCacheCommands:
    def test_registry_contents(self) -> None:
        commands = cache_commands()
        assert list(commands) == ["cache-stats", "cache-clear", "cache-invalidate"]
        assert commands["cache-stats"].schema is NoArgs
        assert commands["cache-clear"].schema is NoArgs
        assert commands["cache-invalidate"].schema is InvalidateArgs
        assert commands["cache-invalidate"].description == "Invalidate a specific cache key"

    def test_each_call_returns_a_fresh_registry(self) -> None:
        first = cache_commands()
        first.pop("cache-clear")
        assert "cache-clear" in cache_commands()

    def test_merges_with_application_commands(self) -> None:
        async def ping(_args: Any, _client: Any, _flags: Any) -> str:
            return "pong"

        commands = {"ping": create_command(NoArgs, ping), **cache_commands()}
        assert list(commands)[0] == "ping"
        assert len(commands) == 4

    def test_cache_stats(self, capsys: pytest.CaptureFixture[str]) -> None:
        created: list[MemoryCacheClient] = []
        code = main(cache_commands(), _seeded_factory({"a": 1}, created), ["cache-stats"])

        assert code == exit_codes.SUCCESS
        stats = json.loads(capsys.readouterr().out)
        assert stats["entries"] == 1
        assert stats["enabled"] is True
        assert created[0].closed is True

    def test_cache_stats_with_no_cache(self, capsys: pytest.CaptureFixture[str]) -> None:
        code = main(cache_commands(), MemoryCacheClient, ["cache-stats", "--no-cache"])

        assert code == exit_codes.SUCCESS
        assert json.loads(capsys.readouterr().out)["enabled"] is False

    def test_cache_clear(self, capsys: pytest.CaptureFixture[str]) -> None:
        created: list[MemoryCacheClient] = []
        factory = _seeded_factory({"a": 1, "b": 2}, created)

        code = main(cache_commands(), factory, ["cache-clear"])

        assert code == exit_codes.SUCCESS
        assert json.loads(capsys.readouterr().out) == {"cleared": 2}

    @pytest.mark.parametrize(
        ("argv", "expected"),
        [
            (["cache-invalidate", "--key", "a"], {"invalidated": True}),
            (["cache-invalidate", "--key=missing"], {"invalidated": False}),
        ],
    )
    def test_cache_invalidate(
        self,
        argv: list[str],
        expected: dict[str, bool],
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        created: list[MemoryCacheClient] = []
        code = main(cache_commands(), _seeded_factory({"a": 1}, created), argv)

        assert code == exit_codes.SUCCESS
        assert json.loads(capsys.readouterr().out) == expected

    @pytest.mark.parametrize(
        ("argv", "message"),
        [
            (["cache-invalidate"], "Missing required argument: --key"),
            (["cache-invalidate", "--key="], "--key: Value too small (minimum: 1)"),
        ],
    )
    def test_cache_invalidate_requires_key(
        self,
        argv: list[str],
        message: str,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        created: list[MemoryCacheClient] = []
        code = main(cache_commands(), _seeded_factory({}, created), argv)

        assert code == exit_codes.GENERAL_ERROR
        assert created == []
        assert json.loads(capsys.readouterr().err)["message"] == message

    def test_help_lists_cache_commands(self, capsys: pytest.CaptureFixture[str]) -> None:
        main(cache_commands(), MemoryCacheClient, ["--help"], DEMO_OPTIONS)
        out = capsys.readouterr().out

        assert out.startswith("clikit\n")
        assert "  python -m clikit <command> [options]" in out
        assert "  cache-invalidate\n    Invalidate a specific cache key\n" in out
        assert "      --key <string> (required) - Cache key to invalidate" in out


class TestDemoEntryPoint:
    def test_cli_exits_with_result(
        self,
        monkeypatch: pytest.MonkeyPatch,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        monkeypatch.setattr("sys.argv", ["clikit", "cache-clear"])
        with pytest.raises(SystemExit) as exc_info:
            cli()

        assert exc_info.value.code == exit_codes.SUCCESS
        assert json.loads(capsys.readouterr().out) == {"cleared": 0}
