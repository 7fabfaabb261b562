"""End-to-end tests for the dead code detector."""

import pytest

from deadwood.analysis import DependencyGraphBuilder, detect_dead_code, explain_unreachable
from deadwood.extractor import DictReader, extract_modules
from deadwood.models import Classification, ModuleRecord


def _analyze(sources, entries, **kwargs):
    records = extract_modules(list(sources), DictReader(sources))
    return detect_dead_code(records, entries, **kwargs)


class TestScenarios:
    def test_a_everything_reachable(self):
        report = _analyze({"A": "import b from './B';", "B": ""}, ["A"])
        assert report.reachable == {"A", "B"}
        assert report.unreachable == ()
        assert report.chain_analysis == {}

    def test_b_orphan(self):
        report = _analyze({"A": "", "C": ""}, ["A"])
        assert report.unreachable == ("C",)
        analysis = report.chain_analysis["C"]
        assert analysis.classification is Classification.ORPHANED
        assert analysis.chains in ((), (("C",),))

    def test_c_barrel_target_is_reachable(self):
        sources = {
            "A": "import { D } from './B';",
            "B/index": "export { D } from '../D';",
            "D": "export const D = 1;",
        }
        report = _analyze(sources, ["A"])
        assert "D" in report.reachable
        assert report.unreachable == ()
        assert report.graph_stats.barrel_edges_added == 1

    def test_d_dead_cycle(self):
        sources = {"A": "", "X": "import y from './Y';", "Y": "import x from './X';"}
        report = _analyze(sources, ["A"])
        assert set(report.unreachable) == {"X", "Y"}
        for module_id in ("X", "Y"):
            analysis = report.chain_analysis[module_id]
            assert analysis.classification is Classification.TRANSITIVE_DEAD
            assert analysis.cycles
            assert all(len(c) <= 3 for c in analysis.cycles)

    def test_e_reachable_root_is_false_positive(self):
        # A reachable set that disagrees with the graph, as a resolver
        # mismatch would produce
        builder = DependencyGraphBuilder()
        graph = builder.build([
            ModuleRecord("R"),
            ModuleRecord("W", ("./Z",)),
            ModuleRecord("Z"),
        ])
        result = explain_unreachable(graph, ["Z"], frozenset({"W"}))
        assert result["Z"].classification is Classification.FALSE_POSITIVE
        assert result["Z"].reachable_roots == ("W",)


class TestDetector:
    SOURCES = {
        "src/index": "import App from './App';\nimport './polyfill';",
        "src/App": "import { Button } from './ui';",
        "src/ui/index": "export * from './Button';\nexport * from './Unused';",
        "src/ui/Button": "",
        "src/ui/Unused": "import { fmt } from '../lib/fmt';",
        "src/lib/fmt": "",
        "src/polyfill": "",
        "src/legacy/Old": "import { Helper } from './Helper';",
        "src/legacy/Helper": "import { fmt } from '../lib/fmt';",
        "src/lazy": "export const load = (n) => import(`./pages/${n}`);",
    }

    @pytest.fixture
    def report(self):
        return _analyze(self.SOURCES, ["src/index"])

    def test_partition(self, report):
        unreachable = set(report.unreachable)
        assert not report.reachable & unreachable
        assert report.reachable | unreachable == set(self.SOURCES)
        assert report.total_modules == len(self.SOURCES)

    def test_barrel_pulls_in_every_reexport(self, report):
        assert {"src/ui/Button", "src/ui/Unused", "src/lib/fmt"} <= report.reachable

    def test_classifications(self, report):
        buckets = report.by_classification()
        assert buckets[Classification.ORPHANED] == ["src/legacy/Old", "src/lazy"]
        assert buckets[Classification.TRANSITIVE_DEAD] == ["src/legacy/Helper"]
        assert buckets[Classification.FALSE_POSITIVE] == []
        helper = report.chain_analysis["src/legacy/Helper"]
        assert helper.chains == (("src/legacy/Helper", "src/legacy/Old"),)
        assert helper.imported_by == ("src/legacy/Old",)

    def test_every_unreachable_module_explained(self, report):
        assert set(report.chain_analysis) == set(report.unreachable)

    def test_dynamic_imports_listed(self, report):
        assert report.dynamic_import_modules == ("src/lazy",)

    def test_idempotent(self, report):
        again = _analyze(self.SOURCES, ["src/index"])
        assert again.to_dict() == report.to_dict()

    def test_summary_counts(self, report):
        assert report.summary() == {
            "total": 10,
            "reachable": 7,
            "unreachable": 3,
            "orphaned": 2,
            "false_positive": 0,
            "transitive_dead": 1,
            "dynamic_imports": 1,
        }

    def test_no_entry_points_marks_everything_unreachable(self, caplog):
        report = _analyze({"a": "import b from './b';", "b": ""}, [])
        assert report.reachable == frozenset()
        assert report.unreachable == ("a", "b")
        assert report.chain_analysis["b"].classification is Classification.TRANSITIVE_DEAD
        assert "No entry points" in caplog.text

    def test_extension_import_of_directory_index(self):
        report = _analyze({"src/index": "import x from './lib.js';", "src/lib/index": ""}, ["src/index"])
        assert report.reachable == {"src/index", "src/lib/index"}
        assert report.graph_stats.unresolved_specifiers == 0

    def test_unresolved_entry_reported(self):
        report = _analyze({"a": ""}, ["a", "missing"])
        assert report.unresolved_entry_points == ("missing",)
        assert report.reachable == {"a"}

    def test_dense_cycle_terminates(self):
        # Complete digraph on 7 dead modules
        names = [f"m{i}" for i in range(7)]
        sources = {"index": ""}
        for name in names:
            sources[name] = "\n".join(f"import x from './{o}';" for o in names if o != name)
        report = _analyze(sources, ["index"], max_chains=50)
        assert set(report.unreachable) == set(names)
        for name in names:
            analysis = report.chain_analysis[name]
            assert analysis.classification is Classification.TRANSITIVE_DEAD
            assert analysis.truncated
