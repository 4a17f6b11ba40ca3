"""Tests for metrics aggregation and the dependency map."""

from ai_refactor.aggregate import DependencyGraph, MetricsAggregate, is_internal
from ai_refactor.analyzer import AnalysisResult


def _source(**kwargs):
    return AnalysisResult(kind="source", **kwargs)


class TestMetricsAggregate:
    def test_sums_and_flags(self):
        metrics = MetricsAggregate()
        metrics.add("a.js", _source(lines_of_code=10, complexity=3, frameworks=["React"]))
        metrics.add("b.js", _source(lines_of_code=5, complexity=2, has_tests=True, frameworks=["Express", "React"]))

        assert metrics.total_lines_of_code == 15
        assert metrics.total_complexity == 5
        assert metrics.has_tests is True
        assert metrics.frameworks == ["React", "Express"]

    def test_failed_results_contribute_nothing(self):
        metrics = MetricsAggregate()
        metrics.add("ok.js", _source(lines_of_code=7, complexity=2))
        metrics.add("bad.js", _source(lines_of_code=99, complexity=99, error="boom"))
        assert metrics.total_lines_of_code == 7
        assert metrics.total_complexity == 2

    def test_config_files_collected(self):
        metrics = MetricsAggregate()
        metrics.add("package.json", AnalysisResult(kind="config", config_type="npm", content={"name": "x"}))
        metrics.add("bad/package.json", AnalysisResult(kind="config", error="Expecting value"))

        assert [cf.file for cf in metrics.config_files] == ["package.json"]
        assert metrics.total_lines_of_code == 0

    def test_empty(self):
        d = MetricsAggregate().to_dict()
        assert d == {
            "totalLinesOfCode": 0,
            "totalComplexity": 0,
            "frameworks": [],
            "hasTests": False,
            "configFiles": [],
        }

    def test_order_does_not_change_totals(self):
        results = [
            ("a.js", _source(lines_of_code=3, complexity=4)),
            ("b.js", _source(lines_of_code=8, complexity=1, has_tests=True)),
            ("c.js", _source(lines_of_code=2, complexity=9)),
        ]
        forward, backward = MetricsAggregate(), MetricsAggregate()
        for path, r in results:
            forward.add(path, r)
        for path, r in reversed(results):
            backward.add(path, r)
        assert forward.total_lines_of_code == backward.total_lines_of_code == 13
        assert forward.total_complexity == backward.total_complexity == 14
        assert forward.has_tests and backward.has_tests


class TestDependencyGraph:
    def test_internal_vs_external(self):
        graph = DependencyGraph()
        graph.add("src/app.js", ["react", "./util", "../lib/api", "lodash/get"])
        graph.add("src/util.js", ["react", "./helpers"])

        assert graph.internal == {
            "src/app.js": ["./util", "../lib/api"],
            "src/util.js": ["./helpers"],
        }
        assert graph.external == ["react", "lodash/get"]

    def test_partition_is_exclusive(self):
        graph = DependencyGraph()
        specs = ["./a", "../b", "c", "@scope/d", ".hidden"]
        graph.add("x.js", specs)
        internal = graph.internal["x.js"]
        for spec in specs:
            assert (spec in internal) != (spec in graph.external)

    def test_external_dedup_is_exact(self):
        graph = DependencyGraph()
        graph.add("a.js", ["react", "react-dom", "react", "React"])
        assert graph.external == ["react", "react-dom", "React"]

    def test_internal_duplicates_kept(self):
        graph = DependencyGraph()
        graph.add("a.js", ["./x", "./x"])
        assert graph.internal["a.js"] == ["./x", "./x"]

    def test_external_never_shadows_internal_key(self):
        graph = DependencyGraph()
        graph.add("shared", ["./y"])
        graph.add("a.js", ["shared", "vue"])
        assert graph.external == ["vue"]

    def test_files_without_imports_have_no_entry(self):
        graph = DependencyGraph()
        graph.add("a.js", ["react"])
        assert graph.to_dict() == {"internal": {}, "external": ["react"]}

    def test_is_internal(self):
        assert is_internal("./x")
        assert is_internal("../x")
        assert not is_internal("x")
