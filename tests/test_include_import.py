import pytest

from rocket.errors import (
    RocketArityError,
    RocketCircularImport,
    RocketFileError,
    RocketSyntaxError,
    RocketUnknownDirective,
)
from rocket.interpreter import Interpreter
from rocket.modules.loaders import FileSystemLoader, MemoryLoader
from rocket.types.form import Position


LIB = '"LIBTEXT" (:define foo "bar")'


class CountingLoader(MemoryLoader):
    def __init__(self, files):
        super().__init__(files)
        self.loads = []

    def load(self, path):
        self.loads.append(path)
        return super().load(path)


# -----------------------------------------------------
# import
# -----------------------------------------------------

def test_import_brings_definitions_without_text(project):
    itp = project({"main.rk": '(:import "lib.rk")(:foo)', "lib.rk": LIB})
    assert itp.compile_file("main.rk").text == "bar"


def test_import_merges_into_the_current_scope(project):
    itp = project({"main.rk": '(:let () (:import "lib.rk") (:foo)) (:foo)', "lib.rk": LIB})
    with pytest.raises(RocketUnknownDirective) as exc:
        itp.compile_file("main.rk")
    assert exc.value.position == Position("main.rk", 1, 37)

    itp = project({"main.rk": '(:let () (:import "lib.rk") (:foo))', "lib.rk": LIB})
    assert itp.compile_file("main.rk").text == "bar"


def test_imported_templates_work(project):
    files = {
        "main.rk": '(:import "t.rk")(:shout "hi")',
        "t.rk": '(:define-template shout (re "(.*)") (:strong (:1) "!"))',
    }
    assert project(files).compile_file("main.rk").text == "<strong>hi !</strong>"


# -----------------------------------------------------
# include
# -----------------------------------------------------

def test_include_splices_text(project):
    itp = project({"main.rk": '"<" (:include "lib.rk") ">"', "lib.rk": LIB})
    assert itp.compile_file("main.rk").text == "<LIBTEXT>"


def test_include_does_not_leak_definitions(project):
    itp = project({"main.rk": '(:include "lib.rk")(:foo)', "lib.rk": LIB})
    with pytest.raises(RocketUnknownDirective):
        itp.compile_file("main.rk")


def test_included_document_sees_root_definitions(project):
    files = {
        "main.rk": '(:define site "Rocket")(:include "page.rk")',
        "page.rk": '(:concat "Welcome to " (:site))',
    }
    assert project(files).compile_file("main.rk").text == "Welcome to Rocket"


def test_included_document_does_not_see_let_bindings(project):
    files = {"main.rk": '(:let (x "1") (:include "page.rk"))', "page.rk": "(:x)"}
    with pytest.raises(RocketUnknownDirective):
        project(files).compile_file("main.rk")


def test_include_path_is_evaluated(project):
    files = {"main.rk": '(:define name "p.rk")(:include (:name))', "p.rk": '"P"'}
    assert project(files).compile_file("main.rk").text == "P"


def test_include_arity(project):
    with pytest.raises(RocketArityError):
        project({"main.rk": "(:include)"}).compile_file("main.rk")


def test_included_metadata_is_kept(project):
    files = {"main.rk": '(:include "meta.rk")', "meta.rk": '(:theme-config title "Inc")'}
    doc = project(files).compile_file("main.rk")
    assert doc.metadata == {"title": "Inc"}


# -----------------------------------------------------
# Path resolution
# -----------------------------------------------------

def test_nested_relative_paths(project):
    files = {
        "main.rk": '(:include "docs/a.rk")',
        "docs/a.rk": '(:include "parts/b.rk")',
        "docs/parts/b.rk": '(:include "../sibling.rk")',
        "docs/sibling.rk": '"deep"',
    }
    assert project(files).compile_file("main.rk").text == "deep"


def test_compile_with_path_anchors_includes(project):
    itp = project({"docs/a.rk": '"A"'})
    assert itp.compile('(:include "a.rk")', path="docs/index.rk").text == "A"


def test_search_roots_are_a_fallback(project):
    files = {
        "main.rk": '(:include "header.rk")(:include "local.rk")',
        "shared/header.rk": '"H"',
        "shared/local.rk": '"shared"',
        "local.rk": '"local"',
    }
    itp = project(files, search_roots=["shared"])
    assert itp.compile_file("main.rk").text == "Hlocal"


def test_filesystem_loader(tmp_path):
    (tmp_path / "sub").mkdir()
    (tmp_path / "main.rk").write_text('(:import "sub/lib.rk")(:include "sub/page.rk")')
    (tmp_path / "sub" / "lib.rk").write_text('(:define who "disk")')
    (tmp_path / "sub" / "page.rk").write_text('(:include "part.rk")')
    (tmp_path / "sub" / "part.rk").write_text('(:concat "from " "part")')

    itp = Interpreter(loader=FileSystemLoader(tmp_path), version=lambda: "1")
    assert itp.compile_file("main.rk").text == "from part"
    assert itp.eval('(:import "sub/lib.rk")(:who)') == "disk"


# -----------------------------------------------------
# Caching
# -----------------------------------------------------

def test_each_document_is_parsed_once_per_compile():
    loader = CountingLoader({
        "main.rk": '(:include "p.rk")(:include "p.rk")(:import "p.rk")',
        "p.rk": '"x"',
    })
    itp = Interpreter(loader=loader, version=lambda: "1")
    assert itp.compile_file("main.rk").text == "xx"
    assert loader.loads == ["main.rk", "p.rk"]

    # a new compile starts with an empty cache
    itp.compile_file("main.rk")
    assert loader.loads == ["main.rk", "p.rk"] * 2


# -----------------------------------------------------
# Cycles
# -----------------------------------------------------

def test_direct_import_cycle(project):
    with pytest.raises(RocketCircularImport) as exc:
        project({"main.rk": '(:import "main.rk")'}).compile_file("main.rk")
    assert exc.value.paths == ["main.rk", "main.rk"]
    assert exc.value.position == Position("main.rk", 1, 1)


def test_indirect_include_cycle_reports_chain(project):
    files = {
        "a.rk": '(:include "b.rk")',
        "b.rk": '"b"\n(:import "c.rk")',
        "c.rk": '(:include "a.rk")',
    }
    with pytest.raises(RocketCircularImport) as exc:
        project(files).compile_file("a.rk")
    err = exc.value
    assert err.paths == ["a.rk", "b.rk", "c.rk", "a.rk"]
    assert err.message == "Circular import: a.rk -> b.rk -> c.rk -> a.rk"
    assert err.chain == [
        Position("c.rk", 1, 1),
        Position("b.rk", 2, 1),
        Position("a.rk", 1, 1),
    ]


def test_cycle_below_the_root_document(project):
    files = {
        "main.rk": '(:include "a.rk")',
        "a.rk": '(:include "b.rk")',
        "b.rk": '(:include "a.rk")',
    }
    with pytest.raises(RocketCircularImport) as exc:
        project(files).compile_file("main.rk")
    assert exc.value.paths == ["a.rk", "b.rk", "a.rk"]


# -----------------------------------------------------
# Loader failures and error positions
# -----------------------------------------------------

def test_missing_file(project):
    with pytest.raises(RocketFileError) as exc:
        project({"main.rk": '"x" (:include "nope.rk")'}).compile_file("main.rk")
    assert exc.value.position == Position("main.rk", 1, 5)
    assert "nope.rk" in exc.value.message


def test_missing_root_document(project):
    with pytest.raises(RocketFileError):
        project({}).compile_file("main.rk")


def test_invalid_utf8(project):
    files = {"main.rk": '(:include "bad.rk")', "bad.rk": b"\xff\xfe"}
    with pytest.raises(RocketFileError):
        project(files).compile_file("main.rk")


def test_error_chain_spans_files(project):
    files = {
        "main.rk": '"x"\n(:include "page.rk")',
        "page.rk": "\n\n  (:nope)",
    }
    with pytest.raises(RocketUnknownDirective) as exc:
        project(files).compile_file("main.rk")
    err = exc.value
    assert err.position == Position("page.rk", 3, 3)
    assert err.trace == [Position("main.rk", 2, 1)]
    assert str(err) == "Unknown directive nope\n  --> page.rk:3:3\n  --> main.rk:2:1"


def test_syntax_error_in_included_file(project):
    files = {"main.rk": '(:include "broken.rk")', "broken.rk": '(:concat "a"'}
    with pytest.raises(RocketSyntaxError) as exc:
        project(files).compile_file("main.rk")
    assert exc.value.position == Position("broken.rk", 1, 1)
    assert exc.value.trace == [Position("main.rk", 1, 1)]


# -----------------------------------------------------
# Imported templates join the caller's
# -----------------------------------------------------

def test_import_keeps_callers_templates(project):
    files = {
        "main.rk": '(:let () (:define-template t "a" "local") (:import "lib.rk") (:t "a") (:t "b"))',
        "lib.rk": '(:define-template t "b" "imported")',
    }
    assert project(files).compile_file("main.rk").text == "localimported"


def test_imported_templates_are_tried_first(project):
    files = {
        "main.rk": '(:define-template t (re ".*") "root") (:import "lib.rk") (:t "x") (:t "y")',
        "lib.rk": '(:define-template t "x" "imported")',
    }
    assert project(files).compile_file("main.rk").text == "importedroot"


def test_import_inside_let_sees_root_local_and_imported_templates(project):
    files = {
        "main.rk": """
            (:define-template t "r" "root")
            (:let () (:define-template t "l" "local") (:import "lib.rk")
                (:t "r") (:t "l") (:t "i"))
        """,
        "lib.rk": '(:define-template t "i" "imported")',
    }
    assert project(files).compile_file("main.rk").text == "rootlocalimported"


def test_relative_search_roots_follow_the_loader_root(tmp_path, monkeypatch):
    site = tmp_path / "site"
    (site / "shared").mkdir(parents=True)
    (site / "main.rk").write_text('(:include "header.rk")')
    (site / "shared" / "header.rk").write_text('"H"')
    elsewhere = tmp_path / "elsewhere"
    elsewhere.mkdir()
    monkeypatch.chdir(elsewhere)

    itp = Interpreter(loader=FileSystemLoader(site), version=lambda: "1", search_roots=["shared"])
    assert itp.compile_file("main.rk").text == "H"
