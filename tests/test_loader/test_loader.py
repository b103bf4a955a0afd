"""Tests for the stylesheet transform pipeline."""

from __future__ import annotations

import os
from pathlib import Path

import pytest

from sprite_loader.config import LoaderConfig
from sprite_loader.css import ParseError, StyleRule, parse_css, stringify
from sprite_loader.emission import MemorySink
from sprite_loader.engine import SpriteLoader, is_enabled, transform_stylesheet
from sprite_loader.errors import EmissionError, PackingError
from sprite_loader.events import EventBus
from sprite_loader.events import types as events
from sprite_loader.model import PackResult, Placement, RepeatMode

ENABLE = "/* sprite-loader-enable */\n"


# ---------------------------------------------------------------------------
# Stub packer
# ---------------------------------------------------------------------------


class StubPacker:
    """Places every image in a row, 10px apart, and records each call."""

    def __init__(self, fail_on: str | None = None) -> None:
        self.calls: list[tuple[list[str], RepeatMode]] = []
        self.fail_on = fail_on

    async def pack(self, paths, repeat: RepeatMode) -> PackResult:
        paths = list(paths)
        self.calls.append((paths, repeat))
        if self.fail_on and any(p.endswith(self.fail_on) for p in paths):
            raise PackingError(f"Cannot load image {self.fail_on}", path=self.fail_on)
        unique = list(dict.fromkeys(paths))
        placements = {p: Placement(x=10 * i, y=5 * i, width=8, height=8) for i, p in enumerate(unique)}
        return PackResult(
            image="|".join(unique).encode(),
            width=10 * len(unique),
            height=8,
            placements=placements,
        )


def _loader(**kwargs):
    sink = kwargs.pop("sink", MemorySink())
    packer = kwargs.pop("packer", StubPacker())
    return SpriteLoader(sink, kwargs.pop("config", None), packer=packer, **kwargs), sink, packer


def _base(tmp_path: Path) -> str:
    return os.path.normpath(os.path.abspath(tmp_path))


# ---------------------------------------------------------------------------
# Opt-in gating
# ---------------------------------------------------------------------------


class TestIsEnabled:
    def test_enable_marker(self):
        assert is_enabled(parse_css("/* sprite-loader-enable */ .a {}"))

    def test_marker_whitespace_trimmed(self):
        assert is_enabled(parse_css("/*\n   sprite-loader-enable\n*/"))

    def test_no_comment(self):
        assert not is_enabled(parse_css(".a { background: url(a.png); }"))

    def test_other_marker_disables(self):
        assert not is_enabled(parse_css("/* sprite-loader-disable */ .a {}"))

    def test_first_marker_comment_decides(self):
        sheet = parse_css("/* license */ /* sprite-loader-off */ /* sprite-loader-enable */")
        assert not is_enabled(sheet)

    def test_marker_inside_rule_ignored(self):
        assert not is_enabled(parse_css(".a { /* sprite-loader-enable */ color: red; }"))


class TestPassThrough:
    @pytest.mark.asyncio
    async def test_output_equals_input(self, tmp_path):
        source = ".a   { background: url(a.png) }\n\n\n.b{color:red}"
        loader, sink, packer = _loader()
        assert await loader.process(source, tmp_path) == source
        assert sink.files == {}
        assert packer.calls == []

    @pytest.mark.asyncio
    async def test_pass_through_is_stable(self, tmp_path):
        source = "/* sprite-loader-disable */ .a { background: url(a.png); }"
        loader, _, _ = _loader()
        once = await loader.process(source, tmp_path)
        twice = await loader.process(once, tmp_path)
        assert once == twice == source

    @pytest.mark.asyncio
    async def test_comment_in_rule_passes_through(self, tmp_path):
        source = ".a {\n  /* note */\n  background: url(a.png);\n}"
        loader, _, _ = _loader()
        assert await loader.process(source, tmp_path) == source

    @pytest.mark.asyncio
    async def test_enabled_without_groups(self, tmp_path):
        source = ENABLE + ".a { color: red; }"
        loader, sink, _ = _loader()
        assert await loader.process(source, tmp_path) == stringify(parse_css(source))
        assert sink.files == {}


# ---------------------------------------------------------------------------
# Rewriting
# ---------------------------------------------------------------------------


class TestRewrite:
    @pytest.mark.asyncio
    async def test_two_images_one_composite(self, tmp_path):
        source = ENABLE + ".a { background: url(a.png); }\n.b { background: url(img/b.png); }"
        loader, sink, packer = _loader(config=LoaderConfig(css_image_path="/static/"))
        out = await loader.process(source, tmp_path)

        base = _base(tmp_path)
        assert packer.calls == [
            ([os.path.join(base, "a.png"), os.path.join(base, "img", "b.png")], RepeatMode.NO_REPEAT)
        ]
        (filename,) = sink.files
        sheet = parse_css(out)
        composite, comment, a, b = sheet.nodes
        assert isinstance(composite, StyleRule)
        assert composite.selectors == [".a", ".b"]
        assert [(d.property, d.value) for d in composite.iter_declarations()] == [
            ("background", f"url(/static/{filename}) no-repeat -9999px -9999px")
        ]
        assert [(d.property, d.value) for d in a.iter_declarations()] == [
            ("background-position", "0 0"),
            ("background-size", "20pr 8pr"),
        ]
        assert [(d.property, d.value) for d in b.iter_declarations()] == [
            ("background-position", "-10pr -5pr"),
            ("background-size", "20pr 8pr"),
        ]

    @pytest.mark.asyncio
    async def test_comment_inside_rule_is_kept(self, tmp_path):
        source = ENABLE + ".icon {\n  /* home icon */\n  background: url(a.png);\n}"
        loader, sink, _ = _loader()
        out = await loader.process(source, tmp_path)
        icon = parse_css(out).nodes[2]
        assert icon.declarations[0].text == " home icon "
        assert [(d.property, d.value) for d in icon.iter_declarations()] == [
            ("background-position", "0 0"),
            ("background-size", "10pr 8pr"),
        ]
        assert len(sink.files) == 1

    @pytest.mark.asyncio
    async def test_output_path_prefix(self, tmp_path):
        source = ENABLE + ".a { background: url(a.png); }"
        loader, sink, _ = _loader(config=LoaderConfig(output_path="sprites/"))
        out = await loader.process(source, tmp_path)
        (written,) = sink.files
        assert written.startswith("sprites/sprite.")
        assert f"url({written[len('sprites/'):]})" in out

    @pytest.mark.asyncio
    async def test_manually_positioned_rule_untouched(self, tmp_path):
        source = (
            ENABLE
            + ".a { background: url(a.png); background-position: 0 -10px; }\n"
            + ".b { background: url(b.png); }"
        )
        loader, _, packer = _loader()
        out = await loader.process(source, tmp_path)
        a = parse_css(out).rules()[1]
        assert a.selectors == [".a"]
        assert [(d.property, d.value) for d in a.iter_declarations()] == [
            ("background", "url(a.png)"),
            ("background-position", "0 -10px"),
        ]
        assert len(packer.calls[0][0]) == 1

    @pytest.mark.asyncio
    async def test_remote_and_ignored_never_grouped(self, tmp_path):
        source = (
            ENABLE
            + ".r { background: url(http://cdn.example.com/r.png); }\n"
            + ".i { background: url(i.png#spriteignore); }"
        )
        loader, sink, packer = _loader()
        out = await loader.process(source, tmp_path)
        assert packer.calls == []
        assert sink.files == {}
        assert out == stringify(parse_css(source))

    @pytest.mark.asyncio
    async def test_repeated_image_shares_placement(self, tmp_path):
        source = ENABLE + ".a { background: url(a.png); }\n.b { background: url(./a.png); }"
        loader, _, _ = _loader()
        out = await loader.process(source, tmp_path)
        _, _, a, b = parse_css(out).nodes
        assert next(a.iter_declarations()).value == next(b.iter_declarations()).value == "0 0"

    @pytest.mark.asyncio
    async def test_compressed_output(self, tmp_path):
        source = ENABLE + ".a { background: url(a.png); }"
        loader, sink, _ = _loader(config=LoaderConfig(compress=True))
        out = await loader.process(source, tmp_path)
        (filename,) = sink.files
        assert out == (
            f".a{{background:url({filename}) no-repeat -9999px -9999px}}"
            ".a{background-position:0 0;background-size:10pr 8pr}"
        )


# ---------------------------------------------------------------------------
# Group ordering
# ---------------------------------------------------------------------------


class TestGroupOrder:
    @pytest.mark.asyncio
    async def test_composite_rules_in_reverse_formation_order(self, tmp_path):
        source = (
            ENABLE
            + ".a { background: url(a.png); }\n"
            + ".b { background: url(b.png) repeat-x; }\n"
            + ".c { background: url(c@2x.png); }\n"
            + ".d { background: url(d.png); }"
        )
        loader, _, packer = _loader()
        out = await loader.process(source, tmp_path)

        # last-formed group is packed first
        assert [repeat for _, repeat in packer.calls] == [
            RepeatMode.NO_REPEAT,
            RepeatMode.REPEAT_X,
            RepeatMode.NO_REPEAT,
        ]
        assert packer.calls[0][0][0].endswith("c@2x.png")

        nodes = parse_css(out).nodes
        assert [n.selectors for n in nodes[:3]] == [[".c"], [".b"], [".a", ".d"]]
        assert [n.selectors for n in nodes[4:]] == [[".a"], [".b"], [".c"], [".d"]]


# ---------------------------------------------------------------------------
# Failures
# ---------------------------------------------------------------------------


class _BrokenSink:
    def write(self, path: str, content: bytes) -> None:
        raise OSError("disk full")


class TestFailures:
    @pytest.mark.asyncio
    async def test_parse_error(self, tmp_path):
        loader, _, _ = _loader()
        with pytest.raises(ParseError):
            await loader.process(ENABLE + ".a { color: red;", tmp_path)

    @pytest.mark.asyncio
    async def test_packing_error_aborts(self, tmp_path):
        source = ENABLE + ".a { background: url(a.png); }"
        loader, sink, _ = _loader(packer=StubPacker(fail_on="a.png"))
        with pytest.raises(PackingError):
            await loader.process(source, tmp_path)
        assert sink.files == {}

    @pytest.mark.asyncio
    async def test_emission_error(self, tmp_path):
        source = ENABLE + ".a { background: url(a.png); }"
        loader, _, _ = _loader(sink=_BrokenSink())
        with pytest.raises(EmissionError):
            await loader.process(source, tmp_path)

    @pytest.mark.asyncio
    async def test_failure_event(self, tmp_path):
        bus = EventBus()
        seen = []
        bus.subscribe(seen.append, events.LoaderFailed)
        loader, _, _ = _loader(packer=StubPacker(fail_on="a.png"), event_bus=bus)
        with pytest.raises(PackingError):
            await loader.process(ENABLE + ".a { background: url(a.png); }", tmp_path, "x.css")
        assert seen == [events.LoaderFailed(resource="x.css", error="Cannot load image a.png")]


# ---------------------------------------------------------------------------
# Events and logging
# ---------------------------------------------------------------------------


class TestEvents:
    @pytest.mark.asyncio
    async def test_lifecycle_events(self, tmp_path):
        bus = EventBus()
        seen = []
        bus.subscribe(seen.append)
        loader, _, _ = _loader(event_bus=bus)
        await loader.process(ENABLE + ".a { background: url(a.png); }", tmp_path, "x.css")
        assert [type(e) for e in seen] == [
            events.LoaderStarted,
            events.GroupsFormed,
            events.GroupPacked,
            events.SpriteEmitted,
            events.GroupRewritten,
            events.LoaderCompleted,
        ]
        assert seen[-1] == events.LoaderCompleted(resource="x.css", sprites=1)

    @pytest.mark.asyncio
    async def test_skipped_event(self, tmp_path):
        bus = EventBus()
        seen = []
        bus.subscribe(seen.append, events.LoaderSkipped)
        loader, _, _ = _loader(event_bus=bus)
        await loader.process(".a {}", tmp_path, "x.css")
        assert seen == [events.LoaderSkipped(resource="x.css")]

    @pytest.mark.asyncio
    async def test_debug_line(self, tmp_path, caplog):
        loader, _, _ = _loader(config=LoaderConfig(debug=True))
        with caplog.at_level("INFO", logger="sprite_loader"):
            await loader.process(ENABLE + ".a { background: url(a.png); }", tmp_path, "x.css")
        assert "sprite-loader: x.css" in caplog.text

    @pytest.mark.asyncio
    async def test_no_debug_line_without_groups(self, tmp_path, caplog):
        loader, _, _ = _loader(config=LoaderConfig(debug=True))
        with caplog.at_level("INFO", logger="sprite_loader"):
            await loader.process(ENABLE + ".a { color: red; }", tmp_path, "x.css")
        assert "sprite-loader: x.css" not in caplog.text


# ---------------------------------------------------------------------------
# End to end with real images
# ---------------------------------------------------------------------------


class TestTransformStylesheet:
    def test_real_images(self, tmp_path, make_png):
        make_png("img/a.png", (10, 10))
        make_png("img/b.png", (20, 20))
        make_png("img/c@2x.png", (8, 8))
        source = (
            ENABLE
            + ".a { background: url(img/a.png) no-repeat; }\n"
            + ".b { background-image: url('img/b.png'); }\n"
            + ".c { background: url(img/c@2x.png); }"
        )
        sink = MemorySink()
        out = transform_stylesheet(source, tmp_path, sink, LoaderConfig(css_image_path="/s/"))

        assert len(sink.files) == 2
        nodes = parse_css(out).nodes
        assert [n.selectors for n in nodes[:2]] == [[".c"], [".a", ".b"]]
        a = nodes[3]
        assert [(d.property, d.value) for d in a.iter_declarations()] == [
            ("background-position", "-40pr 0"),
            ("background-size", "50pr 20pr"),
        ]
        c = nodes[5]
        assert [(d.property, d.value) for d in c.iter_declarations()] == [
            ("background-position", "0 0"),
            ("background-size", "8pr 8pr"),
        ]

    def test_missing_image_fails_build(self, tmp_path):
        source = ENABLE + ".a { background: url(missing.png); }"
        with pytest.raises(PackingError):
            transform_stylesheet(source, tmp_path, MemorySink())
