"""Tests for file and directory loading."""

import json
import logging

from cjs_resolve.loaders import load_as_directory
from cjs_resolve.loaders import load_as_file
from cjs_resolve.loaders import load_path


class TestLoadAsFile:
    def test_literal_path_wins_over_extensions(self, memory_options):
        options, _ = memory_options(["/p/x", "/p/x.js"])
        assert load_as_file("/p/x", options) == "/p/x"

    def test_extensions_in_configured_order(self, memory_options):
        options, _ = memory_options(["/p/x.js", "/p/x.json"], extensions=[".js", ".json"])
        assert load_as_file("/p/x", options) == "/p/x.js"

        options, _ = memory_options(["/p/x.js", "/p/x.json"], extensions=[".json", ".js"])
        assert load_as_file("/p/x", options) == "/p/x.json"

    def test_later_extension_used_when_earlier_missing(self, memory_options):
        options, _ = memory_options(["/p/x.json"], extensions=[".js", ".json"])
        assert load_as_file("/p/x", options) == "/p/x.json"

    def test_no_match_is_none(self, memory_options):
        options, fs = memory_options(["/p/other.js"])
        assert load_as_file("/p/x", options) is None
        assert fs.probes == ["/p/x", "/p/x.js"]

    def test_directory_is_not_a_file(self, memory_options):
        options, _ = memory_options(["/p/x/index.js"])
        assert load_as_file("/p/x", options) is None


class TestLoadAsDirectory:
    def test_main_file(self, memory_options):
        options, _ = memory_options(
            {
                "/pkg/package.json": json.dumps({"main": "lib/entry.js"}),
                "/pkg/lib/entry.js": "",
                "/pkg/index.js": "",
            }
        )
        assert load_as_directory("/pkg", options) == "/pkg/lib/entry.js"

    def test_main_without_extension(self, memory_options):
        options, _ = memory_options({"/pkg/package.json": '{"main": "lib/entry"}', "/pkg/lib/entry.js": ""})
        assert load_as_directory("/pkg", options) == "/pkg/lib/entry.js"

    def test_main_pointing_at_directory(self, memory_options):
        options, _ = memory_options({"/pkg/package.json": '{"main": "lib"}', "/pkg/lib/index.js": ""})
        assert load_as_directory("/pkg", options) == "/pkg/lib/index.js"

    def test_main_directory_with_its_own_manifest(self, memory_options):
        options, _ = memory_options(
            {
                "/pkg/package.json": '{"main": "lib"}',
                "/pkg/lib/package.json": '{"main": "./dist/out.js"}',
                "/pkg/lib/dist/out.js": "",
                "/pkg/lib/index.js": "",
            }
        )
        assert load_as_directory("/pkg", options) == "/pkg/lib/dist/out.js"

    def test_main_dot_means_index(self, memory_options):
        for main in (".", "./"):
            options, _ = memory_options({"/pkg/package.json": json.dumps({"main": main}), "/pkg/index.js": ""})
            assert load_as_directory("/pkg", options) == "/pkg/index.js"

    def test_missing_main_target_falls_back_to_index(self, memory_options):
        options, _ = memory_options({"/pkg/package.json": '{"main": "gone.js"}', "/pkg/index.js": ""})
        assert load_as_directory("/pkg", options) == "/pkg/index.js"

    def test_no_manifest_uses_index(self, memory_options):
        options, _ = memory_options(["/pkg/index.js"])
        assert load_as_directory("/pkg", options) == "/pkg/index.js"

    def test_empty_main_uses_index(self, memory_options):
        options, _ = memory_options({"/pkg/package.json": '{"main": ""}', "/pkg/index.js": ""})
        assert load_as_directory("/pkg", options) == "/pkg/index.js"

    def test_malformed_manifest_is_ignored(self, memory_options):
        options, _ = memory_options({"/pkg/package.json": "{not json", "/pkg/index.js": ""})
        assert load_as_directory("/pkg", options) == "/pkg/index.js"

    def test_non_string_main_is_ignored(self, memory_options):
        options, _ = memory_options({"/pkg/package.json": '{"main": 42}', "/pkg/index.js": ""})
        assert load_as_directory("/pkg", options) == "/pkg/index.js"

    def test_manifest_transform_rewrites_main(self, memory_options):
        calls = []

        def transform(manifest, directory):
            calls.append(directory)
            return {**manifest, "main": "alt.js"}

        options, _ = memory_options(
            {"/pkg/package.json": '{"main": "main.js"}', "/pkg/main.js": "", "/pkg/alt.js": ""},
            manifest_transform=transform,
        )
        assert load_as_directory("/pkg", options) == "/pkg/alt.js"
        assert calls == ["/pkg"]

    def test_failing_transform_falls_back_to_index(self, memory_options):
        def transform(manifest, directory):
            raise RuntimeError("boom")

        options, _ = memory_options(
            {"/pkg/package.json": '{"main": "main.js"}', "/pkg/main.js": "", "/pkg/index.js": ""},
            manifest_transform=transform,
        )
        assert load_as_directory("/pkg", options) == "/pkg/index.js"

    def test_nothing_matches(self, memory_options):
        options, _ = memory_options({"/pkg/package.json": '{"main": "gone.js"}'})
        assert load_as_directory("/pkg", options) is None


class TestMainIndirectionBound:
    def test_cyclic_main_terminates(self, memory_options, caplog):
        options, _ = memory_options(
            {
                "/m/a/package.json": '{"main": "../b"}',
                "/m/b/package.json": '{"main": "../a"}',
            },
            max_main_depth=8,
        )
        with caplog.at_level(logging.WARNING, logger="cjs_resolve.loaders"):
            assert load_as_directory("/m/a", options) is None
        assert any("exceeded 8 nested main entries" in r.getMessage() for r in caplog.records)

    def test_cycle_still_reaches_index(self, memory_options):
        options, _ = memory_options(
            {
                "/m/a/package.json": '{"main": "../b"}',
                "/m/b/package.json": '{"main": "../a"}',
                "/m/a/index.js": "",
            }
        )
        # /m/a -> /m/b -> /m/a resolves through /m/a's own index file
        assert load_as_directory("/m/a", options) == "/m/a/index.js"

    def test_zero_depth_ignores_main(self, memory_options):
        options, _ = memory_options(
            {"/pkg/package.json": '{"main": "main.js"}', "/pkg/main.js": "", "/pkg/index.js": ""},
            max_main_depth=0,
        )
        assert load_as_directory("/pkg", options) == "/pkg/index.js"


def test_load_path_prefers_file_over_directory(memory_options):
    options, _ = memory_options(["/p/x.js", "/p/x/index.js"])
    assert load_path("/p/x", options) == "/p/x.js"
