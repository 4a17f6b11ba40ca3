"""Heuristic source analyzer. No parser needed.

Extracts imports, exports, a complexity estimate, a test flag and framework
signatures from script text using line-oriented patterns. Results are
approximate: keywords inside strings or comments are counted like code.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Protocol

from .classifier import CONFIG, SOURCE

IMPORT_RE = re.compile(r"""import.*?from\s+['"`]([^'"`]+)['"`]""")
EXPORT_RE = re.compile(
    r"export\s+(?:default\s+)?(?:class|function|const|let|var)\s+([a-zA-Z_$][a-zA-Z0-9_$]*)"
)

COMPLEXITY_KEYWORDS = ("if", "else", "for", "while", "case", "catch", "return")
COMPLEXITY_OPERATORS = ("&&", "||")

TEST_MARKERS = ("test(", "describe(", "it(")

# Checked in order; first-seen order carries into the project framework list
FRAMEWORK_PATTERNS = {
    "React": re.compile(r"""import.*?React|from\s+['"`]react['"`]|jsx|useState|useEffect"""),
    "Vue": re.compile(r"""import.*?Vue|from\s+['"`]vue['"`]|\.vue\Z|<template>"""),
    "Angular": re.compile(r"import.*?@angular|Component\(|Injectable\(|NgModule\("),
    "Svelte": re.compile(r"import.*?svelte|\.svelte\Z|<script>"),
    "Astro": re.compile(r"\.astro\Z|---[\s\S]*?---|import.*?astro"),
    "Express": re.compile(r"""require\(['"`]express['"`]\)|from\s+['"`]express['"`]"""),
    "Next.js": re.compile(r"next/|getStaticProps|getServerSideProps"),
    "Nuxt.js": re.compile(r"nuxt|asyncData|fetch\("),
}

_KEYWORD_RES = [re.compile(rf"\b{kw}\b") for kw in COMPLEXITY_KEYWORDS]


@dataclass
class AnalysisResult:
    """Per-file analysis output, either a source or a config result."""

    kind: str = SOURCE
    imports: list[str] = field(default_factory=list)
    exports: list[str] = field(default_factory=list)
    # Reserved for a syntax-tree extractor; the heuristics leave them empty
    functions: list[str] = field(default_factory=list)
    classes: list[str] = field(default_factory=list)
    variables: list[str] = field(default_factory=list)
    complexity: int = 0
    lines_of_code: int = 0
    has_tests: bool = False
    frameworks: list[str] = field(default_factory=list)

    # Config results
    config_type: str = ""
    content: Any = None

    error: str = ""

    @property
    def ok(self) -> bool:
        return not self.error

    def to_dict(self) -> dict[str, Any]:
        if self.kind == CONFIG:
            data: dict[str, Any] = {
                "type": CONFIG,
                "configType": self.config_type,
                "content": self.content,
            }
        else:
            data = {
                "type": SOURCE,
                "imports": self.imports,
                "exports": self.exports,
                "functions": self.functions,
                "classes": self.classes,
                "variables": self.variables,
                "complexity": self.complexity,
                "linesOfCode": self.lines_of_code,
                "hasTests": self.has_tests,
                "frameworks": self.frameworks,
            }
        if self.error:
            data["error"] = self.error
        return data


class SourceFacts(Protocol):
    """Extraction strategy for structural facts about one source text."""

    def imports(self, text: str) -> list[str]: ...

    def exports(self, text: str) -> list[str]: ...

    def complexity(self, text: str) -> int: ...

    def line_count(self, text: str) -> int: ...

    def has_tests(self, text: str) -> bool: ...

    def frameworks(self, text: str) -> list[str]: ...


class HeuristicSourceFacts:
    """Regex and substring heuristics over raw source text."""

    def imports(self, text: str) -> list[str]:
        return IMPORT_RE.findall(text)

    def exports(self, text: str) -> list[str]:
        return EXPORT_RE.findall(text)

    def complexity(self, text: str) -> int:
        """McCabe-style estimate: 1 plus every branch keyword and logical operator."""
        score = 1
        for keyword_re in _KEYWORD_RES:
            score += len(keyword_re.findall(text))
        for op in COMPLEXITY_OPERATORS:
            score += text.count(op)
        return score

    def line_count(self, text: str) -> int:
        return len(text.split("\n"))

    def has_tests(self, text: str) -> bool:
        return any(marker in text for marker in TEST_MARKERS)

    def frameworks(self, text: str) -> list[str]:
        return [name for name, pattern in FRAMEWORK_PATTERNS.items() if pattern.search(text)]


DEFAULT_FACTS = HeuristicSourceFacts()


def analyze_source(text: str, facts: SourceFacts = DEFAULT_FACTS) -> AnalysisResult:
    """Analyze source text already in memory."""
    return AnalysisResult(
        kind=SOURCE,
        imports=facts.imports(text),
        exports=facts.exports(text),
        complexity=facts.complexity(text),
        lines_of_code=facts.line_count(text),
        has_tests=facts.has_tests(text),
        frameworks=facts.frameworks(text),
    )


def analyze_source_file(path: str | Path, facts: SourceFacts = DEFAULT_FACTS) -> AnalysisResult:
    """Read and analyze one source file. Failures end up in the result's error."""
    try:
        text = Path(path).read_text(encoding="utf-8")
        return analyze_source(text, facts)
    except Exception as e:
        return AnalysisResult(kind=SOURCE, error=str(e))
