"""Tests for SiteBuilder: the end-to-end conversion pipeline."""

from pathlib import Path
from unittest.mock import MagicMock

import pytest

from mdbake.build import FileSkipped, SiteBuilder, SkipReason, build_site
from mdbake.render.options import ConversionOptions, Profile, load_trailer
from mdbake.transform import Transform, TransformPipeline

from conftest import write_tree


def _builder(src: Path, tmp_path: Path, options: ConversionOptions, **kwargs) -> SiteBuilder:
    out = tmp_path / "out"
    out.mkdir(exist_ok=True)
    return SiteBuilder(src.resolve(), out.resolve(), options, **kwargs)


def _output_files(out: Path) -> set[str]:
    return {p.relative_to(out).as_posix() for p in out.rglob("*") if p.is_file()}


# ===========================================================================
# Round trip and path mirroring
# ===========================================================================


class TestRoundTrip:
    def test_two_file_scenario(self, sample_tree, tmp_path, full_options):
        builder = _builder(sample_tree, tmp_path, full_options)
        report = builder.run()

        assert report.written == 2
        assert report.skipped == []
        out = builder.output_root
        assert _output_files(out) == {"a.html", "b.html"}

        a = (out / "a.html").read_text()
        assert '<h1 id="header-title">Title</h1>' in a
        assert '<a href="b.html">link</a>' in a
        assert "b.md" not in a

        b = (out / "b.html").read_text()
        assert '<h1 id="header-other">Other</h1>' in b

    def test_mirrors_nested_tree(self, nested_tree, tmp_path, plain_options):
        builder = _builder(nested_tree, tmp_path, plain_options)
        builder.run()
        assert _output_files(builder.output_root) == {
            "index.html",
            "guide/intro.html",
            "guide/deep/notes.html",
        }

    def test_directories_without_markdown_not_created(self, nested_tree, tmp_path, plain_options):
        builder = _builder(nested_tree, tmp_path, plain_options)
        builder.run()
        assert not (builder.output_root / "assets").exists()

    def test_relative_links_rewritten(self, nested_tree, tmp_path, plain_options):
        builder = _builder(nested_tree, tmp_path, plain_options)
        builder.run()
        intro = (builder.output_root / "guide" / "intro.html").read_text()
        assert 'href="../index.html"' in intro
        index = (builder.output_root / "index.html").read_text()
        assert 'href="guide/intro.html"' in index

    def test_idempotent(self, nested_tree, tmp_path, full_options):
        builder = _builder(nested_tree, tmp_path, full_options)
        builder.run()
        first = {p: p.read_bytes() for p in builder.output_root.rglob("*.html")}
        builder.run()
        second = {p: p.read_bytes() for p in builder.output_root.rglob("*.html")}
        assert first == second

    def test_empty_tree(self, tmp_path, full_options):
        src = tmp_path / "src"
        src.mkdir()
        report = _builder(src, tmp_path, full_options).run()
        assert report.written == 0
        assert report.skipped == []
        assert report.total == 0


# ===========================================================================
# Output assembly
# ===========================================================================


class TestOutputAssembly:
    def test_stylesheet_injected_once(self, sample_tree, tmp_path):
        opts = ConversionOptions.for_profile(Profile.full, stylesheet="body { color: red; }")
        builder = _builder(sample_tree, tmp_path, opts)
        builder.run()
        for page in builder.output_root.rglob("*.html"):
            assert page.read_text().count("<style>body { color: red; }</style>") == 1

    def test_stylesheet_ends_output_without_trailer(self, sample_tree, tmp_path):
        opts = ConversionOptions.for_profile(Profile.full, stylesheet="body { color: red; }")
        builder = _builder(sample_tree, tmp_path, opts)
        builder.run()
        assert (builder.output_root / "b.html").read_bytes().endswith(
            b"<style>body { color: red; }</style>"
        )

    def test_trailer_appended_last(self, sample_tree, tmp_path):
        trailer = load_trailer()
        opts = ConversionOptions.for_profile(Profile.full, stylesheet="p{}", trailer=trailer)
        builder = _builder(sample_tree, tmp_path, opts)
        builder.run()
        body = (builder.output_root / "a.html").read_text()
        assert body.endswith(trailer)
        assert body.index("<style>p{}</style>") < body.index(trailer)

    def test_plain_output_is_bare_html(self, sample_tree, tmp_path, plain_options):
        builder = _builder(sample_tree, tmp_path, plain_options)
        builder.run()
        assert (builder.output_root / "b.html").read_text() == "<h1>Other</h1>\n"

    def test_existing_output_overwritten(self, sample_tree, tmp_path, plain_options):
        builder = _builder(sample_tree, tmp_path, plain_options)
        (builder.output_root / "b.html").write_text("stale content that is longer")
        builder.run()
        assert (builder.output_root / "b.html").read_text() == "<h1>Other</h1>\n"


# ===========================================================================
# Skip-on-error
# ===========================================================================


class TestSkipOnError:
    def test_invalid_utf8_skipped(self, tmp_path, plain_options):
        src = write_tree(tmp_path / "src", {"good.md": "# Good", "bad.md": b"\xff\xfe\xfa"})
        builder = _builder(src, tmp_path, plain_options)
        report = builder.run()

        assert report.written == 1
        assert len(report.skipped) == 1
        assert report.skipped[0].file == "bad.md"
        assert report.skipped[0].reason == SkipReason.not_utf8
        assert _output_files(builder.output_root) == {"good.html"}

    def test_unreadable_file_does_not_stop_siblings(self, tmp_path, plain_options, monkeypatch):
        src = write_tree(
            tmp_path / "src", {"a.md": "# A", "locked.md": "# Locked", "z.md": "# Z"}
        )
        real_read_bytes = Path.read_bytes

        def _read_bytes(self):
            if self.name == "locked.md":
                raise PermissionError(13, "Permission denied", str(self))
            return real_read_bytes(self)

        monkeypatch.setattr(Path, "read_bytes", _read_bytes)
        builder = _builder(src, tmp_path, plain_options)
        report = builder.run()

        assert report.written == 2
        assert [s.reason for s in report.skipped] == [SkipReason.unreadable]
        assert "Permission denied" in report.skipped[0].error
        assert _output_files(builder.output_root) == {"a.html", "z.html"}

    def test_write_failure_skipped(self, sample_tree, tmp_path, plain_options):
        builder = _builder(sample_tree, tmp_path, plain_options)
        (builder.output_root / "a.html").mkdir()
        report = builder.run()

        assert report.written == 1
        assert report.skipped[0].file == "a.md"
        assert report.skipped[0].reason == SkipReason.write
        assert (builder.output_root / "b.html").is_file()
        assert not (builder.output_root / "a.html.tmp").exists()

    def test_destination_directory_uncreatable(self, tmp_path, plain_options):
        src = write_tree(tmp_path / "src", {"guide/intro.md": "# Intro", "top.md": "# Top"})
        builder = _builder(src, tmp_path, plain_options)
        (builder.output_root / "guide").write_text("a file where a directory should be")
        report = builder.run()

        assert report.written == 1
        assert report.skipped[0].file == "guide/intro.md"
        assert report.skipped[0].reason == SkipReason.write

    def test_unmappable_path_skipped(self, sample_tree, tmp_path, plain_options, monkeypatch):
        stray = write_tree(tmp_path / "elsewhere", {"stray.md": "# Stray"}) / "stray.md"
        good = sample_tree.resolve() / "b.md"
        monkeypatch.setattr(
            "mdbake.build.driver.iter_markdown_files", lambda root: iter([stray, good])
        )
        builder = _builder(sample_tree, tmp_path, plain_options)
        report = builder.run()

        assert report.written == 1
        assert report.skipped[0].reason == SkipReason.unmappable
        assert report.skipped[0].file == str(stray)

    def test_render_failure_skipped(self, sample_tree, tmp_path, plain_options):
        def _render(text):
            if "Title" in text:
                raise RuntimeError("boom")
            return "<h1>ok</h1>"

        renderer = MagicMock()
        renderer.render.side_effect = _render
        builder = _builder(sample_tree, tmp_path, plain_options, renderer=renderer)
        report = builder.run()

        assert report.written == 1
        assert report.skipped[0].file == "a.md"
        assert report.skipped[0].reason == SkipReason.render
        assert report.skipped[0].error == "boom"

    def test_build_file_raises_file_skipped(self, sample_tree, tmp_path, plain_options):
        builder = _builder(sample_tree, tmp_path, plain_options)
        with pytest.raises(FileSkipped) as exc_info:
            builder.build_file(tmp_path / "elsewhere.md")
        assert exc_info.value.reason == SkipReason.unmappable


# ===========================================================================
# Collaborators and hooks
# ===========================================================================


class _Shout(Transform):
    def apply(self, content: str) -> str:
        return content.replace("Other", "OTHER")


class TestCollaborators:
    def test_custom_pipeline(self, sample_tree, tmp_path, plain_options):
        builder = _builder(
            sample_tree, tmp_path, plain_options, pipeline=TransformPipeline([_Shout()])
        )
        builder.run()
        assert "<h1>OTHER</h1>" in (builder.output_root / "b.html").read_text()
        # No LinkRewriter in this pipeline, so .md targets survive.
        assert 'href="b.md"' in (builder.output_root / "a.html").read_text()

    def test_renderer_receives_rewritten_markdown(self, sample_tree, tmp_path, plain_options):
        renderer = MagicMock()
        renderer.render.return_value = "<p>stub</p>"
        builder = _builder(sample_tree, tmp_path, plain_options, renderer=renderer)
        builder.run()
        seen = [c.args[0] for c in renderer.render.call_args_list]
        assert "# Title\n\n[link](b.html)\n" in seen

    def test_on_written_called_per_file(self, sample_tree, tmp_path, plain_options):
        calls = []
        builder = _builder(
            sample_tree, tmp_path, plain_options, on_written=lambda s, d: calls.append((s, d))
        )
        builder.run()
        assert sorted(d.name for _, d in calls) == ["a.html", "b.html"]
        assert all(s.suffix == ".md" for s, _ in calls)

    def test_non_atomic_mode(self, sample_tree, tmp_path, plain_options):
        builder = _builder(sample_tree, tmp_path, plain_options, atomic_writes=False)
        report = builder.run()
        assert report.written == 2


class TestPlan:
    def test_plan_lists_pairs_without_writing(self, nested_tree, tmp_path, plain_options):
        builder = _builder(nested_tree, tmp_path, plain_options)
        pairs = builder.plan()
        rels = [(s.name, d.relative_to(builder.output_root).as_posix()) for s, d in pairs]
        assert ("intro.md", "guide/intro.html") in rels
        assert len(rels) == 3
        assert _output_files(builder.output_root) == set()


def test_build_site_wrapper(sample_tree, tmp_path, full_options):
    out = tmp_path / "site"
    out.mkdir()
    report = build_site(sample_tree.resolve(), out.resolve(), full_options)
    assert report.written == 2
    assert (out / "a.html").is_file()
