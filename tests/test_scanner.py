"""Tests for the scan driver: filtering, ordering, error policy."""

from pathlib import Path

import pytest

from fnarity import ResultRecord, ScanConfig, scan
from fnarity.exceptions import FileAccessError, InvalidPathError, ParsingError
from fnarity.file_ops import read_source

CORPUS = {
    "src/lib.rs": """\
pub fn tiny() {}

pub fn five(a: u8, b: u8, c: u8, d: u8, e: u8) {}

impl Widget {
    pub fn method(&self, a: u8, b: u8, c: u8) {}
}
""",
    "src/net/client.rs": """\
pub trait Transport {
    fn send(&mut self, a: u8, b: u8, c: u8, d: u8, e: u8, f: u8);
}

fn eight(a: u8, b: u8, c: u8, d: u8, e: u8, f: u8, g: u8, h: u8) {}
""",
    "src/empty.rs": "struct Nothing;\n",
    "notes.txt": "fn ignored(a: u8, b: u8, c: u8, d: u8, e: u8, f: u8) {}",
}

ALL_ARITIES = {"tiny": 0, "five": 5, "method": 3, "send": 6, "eight": 8}


def _scan(root: Path, min_args: int, **kwargs):
    return scan(ScanConfig(root=root, min_args=min_args, **kwargs))


class TestScenarios:
    """End-to-end behaviour on small trees."""

    def test_three_params_over_two(self, rust_tree):
        """fn foo(a, b, c) with threshold 2 is reported with arity 3."""
        root = rust_tree({"foo.rs": "fn foo(a: i32, b: i32, c: i32) {}\n"})
        report = _scan(root, 2)
        assert report.records == (
            ResultRecord(relative_path="foo.rs", name="foo", parameter_count=3, line=1),
        )

    def test_threshold_is_strict(self, rust_tree):
        """Exactly min_args parameters is not reported."""
        root = rust_tree({"foo.rs": "fn foo(a: i32, b: i32, c: i32) {}\n"})
        assert _scan(root, 3).records == ()

    def test_method_receiver_excluded(self, rust_tree):
        """fn bar(&self, x) has arity 1 and is reported over 0."""
        root = rust_tree({"bar.rs": "impl S {\n    fn bar(&self, x: i32) {}\n}\n"})
        report = _scan(root, 0)
        assert [(r.name, r.parameter_count, r.line) for r in report.records] == [("bar", 1, 2)]

    def test_signature_matches_declaration(self, rust_tree):
        """A prototype is reported exactly like a full declaration."""
        params = "a: u8, b: u8, c: u8, d: u8, e: u8"
        root = rust_tree(
            {
                "a_sig.rs": f"trait T {{ fn op({params}); }}\n",
                "b_full.rs": f"fn op({params}) {{}}\n",
            }
        )
        report = _scan(root, 4)
        assert [(r.relative_path, r.name, r.parameter_count) for r in report.records] == [
            ("a_sig.rs", "op", 5),
            ("b_full.rs", "op", 5),
        ]

    def test_ordered_by_arity(self, rust_tree):
        """Arity 5 prints before arity 8 regardless of file order."""
        root = rust_tree(
            {
                "a.rs": "fn eight(a: u8, b: u8, c: u8, d: u8, e: u8, f: u8, g: u8, h: u8) {}\n",
                "b.rs": "fn five(a: u8, b: u8, c: u8, d: u8, e: u8) {}\n",
            }
        )
        report = _scan(root, 3)
        assert [r.parameter_count for r in report.records] == [5, 8]
        assert report.total == 2
        assert report.min_args == 3

    def test_parse_failure_aborts(self, rust_tree):
        """An unparseable file aborts the scan by default."""
        root = rust_tree({"good.rs": "fn f(a: u8) {}\n", "bad.rs": "fn g(a: u8 {\n"})
        with pytest.raises(ParsingError) as excinfo:
            _scan(root, 0)
        assert excinfo.value.filepath == Path("bad.rs")


class TestProperties:
    """Invariants that hold for any threshold."""

    @pytest.mark.parametrize("threshold", range(0, 10))
    def test_completeness(self, rust_tree, threshold):
        """Exactly the declarations above the threshold are reported."""
        root = rust_tree(CORPUS)
        report = _scan(root, threshold)

        reported = {r.name: r.parameter_count for r in report.records}
        expected = {n: a for n, a in ALL_ARITIES.items() if a > threshold}
        assert reported == expected
        assert all(r.parameter_count > threshold for r in report.records)

    def test_non_decreasing(self, rust_tree):
        report = _scan(rust_tree(CORPUS), 0)
        counts = [r.parameter_count for r in report.records]
        assert counts == sorted(counts)

    def test_paths_are_relative(self, rust_tree):
        root = rust_tree(CORPUS)
        report = _scan(root, 0)
        for record in report.records:
            assert not Path(record.relative_path).is_absolute()
            assert not record.relative_path.startswith(root.name)
        assert {r.relative_path for r in report.records} == {"src/lib.rs", "src/net/client.rs"}

    def test_empty_files_contribute_nothing(self, rust_tree):
        root = rust_tree({"empty.rs": "", "types.rs": "struct A;\nenum B { X }\n"})
        report = _scan(root, 0)
        assert report.records == ()
        assert report.files_scanned == 2

    def test_idempotent(self, rust_tree):
        root = rust_tree(CORPUS)
        assert _scan(root, 2) == _scan(root, 2)

    def test_parallel_matches_sequential(self, rust_tree):
        """Worker count does not change the report."""
        files = dict(CORPUS)
        for i in range(20):
            files[f"gen/m{i:02d}.rs"] = f"fn g{i}({', '.join(f'p{j}: u8' for j in range(i % 7))}) {{}}\n"
        root = rust_tree(files)
        assert _scan(root, 1, workers=4) == _scan(root, 1)

    def test_ties_keep_traversal_order(self, rust_tree):
        root = rust_tree(
            {
                "b.rs": "fn second(a: u8, b: u8) {}\n",
                "a.rs": "fn first(a: u8, b: u8) {}\nfn third(a: u8, b: u8) {}\n",
            }
        )
        assert [r.name for r in _scan(root, 1).records] == ["first", "third", "second"]


class TestErrorPolicy:
    """Parse-error and traversal-error handling."""

    def test_skip_policy_marks_partial(self, rust_tree):
        root = rust_tree({"good.rs": "fn f(a: u8, b: u8) {}\n", "bad.rs": "fn g(a: u8 {\n"})
        report = _scan(root, 1, on_parse_error="skip")

        assert [r.name for r in report.records] == ["f"]
        assert report.skipped_files == ("bad.rs",)
        assert report.partial is True
        assert report.files_scanned == 1

    def test_parse_failure_aborts_in_parallel(self, rust_tree):
        files = {f"ok{i}.rs": "fn f() {}\n" for i in range(10)}
        files["zz_bad.rs"] = "fn (\n"
        with pytest.raises(ParsingError):
            _scan(rust_tree(files), 0, workers=4)

    def test_missing_root(self, tmp_path):
        with pytest.raises(InvalidPathError):
            _scan(tmp_path / "absent", 0)

    def test_excludes_applied(self, rust_tree):
        root = rust_tree(CORPUS)
        report = _scan(root, 0, exclude_patterns=["src/net/*"])
        assert {r.relative_path for r in report.records} == {"src/lib.rs"}

    def test_unreadable_file_skipped(self, rust_tree, monkeypatch):
        """A file that cannot be read is left out and the scan carries on."""
        root = rust_tree(
            {
                "locked.rs": "fn hidden(a: u8, b: u8, c: u8) {}\n",
                "open.rs": "fn shown(a: u8, b: u8) {}\n",
            }
        )

        def read_or_deny(path):
            if path.name == "locked.rs":
                raise FileAccessError(path, "permission denied")
            return read_source(path)

        monkeypatch.setattr("fnarity.scanner.read_source", read_or_deny)
        report = _scan(root, 1)

        assert [r.name for r in report.records] == ["shown"]
        assert report.files_scanned == 1
        assert report.skipped_files == ()
        assert report.partial is False
