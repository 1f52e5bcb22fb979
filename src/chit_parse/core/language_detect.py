"""Heuristic programming-language detection by regex-pattern scoring.

Each language owns a fixed tuple of compiled patterns tuned to its
characteristic syntax (declaration forms, keyword shapes, stdlib calls,
comment and string idioms). A language's score is the number of its
patterns that match anywhere in the code; the highest score wins.

// [LAW:one-source-of-truth] LANGUAGE_RULES is the only scoring table. The
//   code heuristic reuses PATTERN_SETS from here rather than keeping its own.
// [LAW:dataflow-not-control-flow] Scoring differences between languages live in
//   LanguageRule data (extra pattern sets, bonus markers), not in branches.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from chit_parse.core.languages import DEFAULT_LANGUAGE

Patterns = tuple[re.Pattern[str], ...]


def _compile(*sources: str, flags: int = 0) -> Patterns:
    return tuple(re.compile(src, flags) for src in sources)


# ─── Pattern tables ──────────────────────────────────────────────────────────

JS_TS_PATTERNS: Patterns = _compile(
    r"\b(const|let|var)\s+\w+\s*=",
    r"\bfunction\s+\w+\s*\(",
    r"\b(async\s+)?function\s*\(",
    r"=>\s*[{(]",
    r"\bclass\s+\w+(\s+extends\s+[\w.]+)?\s*\{",
    r"^\s*import\s+[\w{*][^;\n]*\bfrom\s+['\"]",
    r"\bexport\s+(default\s+)?(const|let|var|function|class|async|interface|type|\{)",
    r"\bconsole\.(log|error|warn|info|debug)\s*\(",
    r"\b(await|async)\b",
    r"\b(interface|type)\s+\w+\s*[={<]",
    r":\s*(string|number|boolean|any|void|never)\b",
    r"\bnew\s+\w+\s*\(",
    r"\.(map|filter|reduce|forEach|find|some|every)\s*\(",
    r"\b(try|catch|finally)\s*[{(]",
    r"\b(if|else if|else)\s*[({]",
    r"\bthrow\s+new\s+\w*Error",
    r"\breturn\b[^;\n]*;",
    r"\bmodule\.exports\b",
    r"\brequire\s*\(\s*['\"`]",
    r"\bPromise\.(all|race|resolve|reject)\s*\(",
    r"\.then\s*\(\s*(async\s*)?\(",
    r"\b(setTimeout|setInterval|clearTimeout|clearInterval)\b",
    r"\bdocument\.(getElementById|querySelector|createElement)\s*\(",
    r"\bwindow\.\w+",
    r"\bevent\.(preventDefault|stopPropagation)\s*\(",
    r"===|!==",
    flags=re.MULTILINE,
)

# Scored on top of JS_TS_PATTERNS for the tsx candidate only.
JSX_PATTERNS: Patterns = _compile(
    r"(?<![\w.])<[A-Z]\w*[\s/>]",
    r"\bclassName\s*=\s*[{'\"]",
    r"\b(useState|useEffect|useCallback|useMemo|useRef|useContext)\b",
    r"\bReact\.\w+",
    r"</[A-Za-z][\w.]*>",
    r"=\{[^}]*\}",
    r"\b(onClick|onChange|onSubmit|onKeyDown)\b",
    r"\bprops\.\w+",
)

PYTHON_PATTERNS: Patterns = _compile(
    r"\bdef\s+\w+\s*\([^)]*\)\s*(->\s*[^:\n]+)?:",
    r"^\s*class\s+\w+(\([^)]*\))?:\s*$",
    r"^\s*(import\s+[\w.]+(\s+as\s+\w+)?(\s*,\s*[\w.]+)*\s*$|from\s+[\w.]+\s+import\s+)",
    r"^\s*(if|elif|while)\s+.+:\s*$",
    r"^\s*for\s+\w+(\s*,\s*\w+)*\s+in\s+.+:\s*$",
    r"\bprint\s*\(",
    r"\bself\.\w+",
    r"\b(True|False|None)\b",
    r"\blambda\b[^:\n]*:",
    r"\bwith\s+.+\s+as\s+\w+:",
    r"^\s*(try|except|finally)\b[^\n{;]*:\s*$",
    r"\braise\s+\w+",
    r"\basync\s+def\b",
    r"\b__\w+__\b",
    r"\b(list|dict|tuple|set|range|isinstance|enumerate)\s*\(",
    r"\[[^\[\]\n]+\s+for\s+\w+\s+in\s+",
    r"(?<![$\w])f([\"'])[^\n]*?\{[^}\n]*\}[^\n]*?\1",
    flags=re.MULTILINE,
)

JAVA_KOTLIN_PATTERNS: Patterns = _compile(
    r"\bpublic\s+(static\s+)?(final\s+)?(void|class|interface|enum)\b",
    r"\bprivate\s+(final\s+)?\w+(<[^>\n]*>)?\s+\w+",
    r"\bSystem\.(out|err)\.(print|println|printf)\s*\(",
    r"\bString\s+\w+\s*=",
    r"\bnew\s+\w+(<[^>\n]*>)?\s*\(",
    r"^\s*package\s+[\w.]+;",
    r"\b(extends|implements)\s+\w+",
    r"(?<![\w.])@[A-Z]\w*",
    r"\bfun\s+\w+\s*\(",
    r"\bval\s+\w+\s*[:=]",
    r"\bvar\s+\w+\s*:\s*\w+",
    r"\bdata\s+class\b",
    r"^\s*import\s+(static\s+)?[\w.]+(\.\*)?;",
    flags=re.MULTILINE,
)

C_CPP_PATTERNS: Patterns = _compile(
    r"^\s*#\s*include\s*[<\"]",
    r"\bint\s+main\s*\(",
    r"\b(int|char|float|double|void|long|unsigned|size_t)\s+\**\w+\s*[=;(\[]",
    # std::collections::HashMap is a Rust path.
    r"\bstd::\w+\b(?!::)",
    r"\bcout\s*<<",
    r"\bcin\s*>>",
    r"\bprintf\s*\(",
    r"\bscanf\s*\(",
    r"\bstruct\s+\w+\s*\{[^}]*;",
    r"\btemplate\s*<",
    r"\bclass\s+\w+\s*:\s*(public|private|protected)\b",
    r"\b(nullptr|NULL)\b",
    r"\bsizeof\s*\(",
    r"\w->\w",
    r"\b(malloc|calloc|realloc|free)\s*\(",
    r"^\s*using\s+namespace\s+\w+\s*;",
    flags=re.MULTILINE,
)

GO_PATTERNS: Patterns = _compile(
    r"^\s*package\s+\w+\s*$",
    r"\bfunc\s+(\([^)]+\)\s+)?\w+\s*\(",
    r"^\s*import\s+(\(|\"[\w./-]+\")",
    r"\bgo\s+(func\s*\(|\w+\()",
    r"\bchan\s+\w+",
    r"\bdefer\s+\w+",
    r"(?<!\.)\b(make|append|cap)\s*\(",
    r"\btype\s+\w+\s+(struct|interface)\s*\{",
    r":=\s*range\s+\w+",
    r"\bselect\s*\{",
    r"\bfmt\.(Print|Println|Printf|Sprintf|Errorf|Fprintf)\s*\(",
    r"\w+\s*:=",
    r"\berr\s*!=\s*nil\b",
    flags=re.MULTILINE,
)

RUST_PATTERNS: Patterns = _compile(
    r"\bfn\s+\w+\s*(<[^>\n]+>)?\s*\(",
    r"\blet\s+(mut\s+)?\w+\s*[:=]",
    r"\bimpl\s+(<[^>\n]+>\s+)?\w+",
    r"\bstruct\s+\w+\s*[<{]",
    r"\benum\s+\w+\s*\{",
    r"\bpub(\([\w:]+\))?\s+(fn|struct|enum|trait|mod|use|const)\b",
    r"\bmatch\s+[\w.&]+\s*\{",
    r"\buse\s+\w+(::\w+)*::[\w{*]",
    r"\b(Option|Result|Vec|Box)\s*<|\bString::\w+",
    r"\)\s*->\s*[\w&<(\[][^{\n]*\{",
    r"\bmod\s+\w+\s*[;{]",
    r"\b(println|eprintln|format|vec|panic|assert_eq|assert)!\s*[(\[]",
    r"\.unwrap\(\)|\.expect\(",
    r"&mut\s+\w+|&(str|self)\b",
    r"#\[\w+",
)

SQL_PATTERNS: Patterns = _compile(
    r"\bSELECT\s+(\*|\w+)",
    r"\bFROM\s+\w+",
    r"\bWHERE\s+\w+",
    r"\b(INNER|LEFT|RIGHT|FULL)\s+JOIN\b",
    r"\bINSERT\s+INTO\s+\w+",
    r"\bUPDATE\s+\w+\s+SET\b",
    r"\bDELETE\s+FROM\s+\w+",
    r"\bCREATE\s+(TABLE|INDEX|VIEW|DATABASE)\b",
    r"\bALTER\s+TABLE\b",
    r"\bDROP\s+TABLE\b",
    r"\bGROUP\s+BY\b",
    r"\bORDER\s+BY\b",
    flags=re.IGNORECASE,
)

CSS_PATTERNS: Patterns = _compile(
    r"^\s*(?!(?:try|else|do|finally)\b)[.#]?\w+(-\w+)*\s*\{",
    r"\b(margin|padding|color|background|font|border|display|position|width|height)(-[\w-]+)?\s*:\s*[^;{}\n]+;",
    r"\burl\s*\(",
    r"\b\d+(\.\d+)?(px|em|rem|vh|vw)\b",
    r":\s*(flex|grid|block|inline-block|inline|none)\s*;",
    r"@media\s+",
    r"@keyframes\s+\w+",
    r"\brgba?\s*\(|:\s*#[0-9a-fA-F]{3,8}\b",
    r"\bvar\s*\(--[\w-]+\)",
    r"[\w\]):]:(hover|focus|active|before|after|first-child|last-child|nth-child)\b",
    flags=re.MULTILINE,
)

HTML_PATTERNS: Patterns = _compile(
    r"<!DOCTYPE\s+html>",
    r"<html[^>]*>",
    r"<(head|body|div|span|p|a|img|ul|ol|li|table|tr|td|th|form|input|button|script|style|link|meta)\b[^>]*>",
    r"</\w+>",
    r"<\w+[^>]*\s(id|class|src|href|alt|title|style)\s*=",
    flags=re.IGNORECASE,
)

JSON_PATTERNS: Patterns = _compile(
    r"\A\s*\{[\s\S]*\}\s*\Z",
    r"\A\s*\[[\s\S]*\]\s*\Z",
    r"\"\w+\"\s*:\s*(\"[^\"]*\"|-?\d+|true|false|null|\{|\[)",
)

SHELL_PATTERNS: Patterns = _compile(
    r"\A#!",
    r"\$\([^)\n]*\)",
    r"\$\{\w+\}|\$[A-Za-z_]\w*|\$[0-9@#?]",
    r"\becho\s+",
    r"^\s*(sudo\s+)?(cd|ls|mkdir|rm|mv|cp|cat|grep|awk|sed|curl|chmod|git|npm|pip)\s+",
    r"\bif\s+\[\[?\s+",
    r";\s*(then|do)\s*$|^\s*(fi|done|esac)\s*$",
    r"^\s*export\s+[A-Z_]\w*=|^\s*(source|alias|exit)\s+",
    r"(?<!\|)\|(?!\|)\s*(grep|awk|sed|sort|uniq|head|tail|wc|xargs|tr|cut|tee|less)\b",
    r"2>&1|>\s*/dev/null|>>\s*\S+",
    flags=re.MULTILINE,
)

YAML_PATTERNS: Patterns = _compile(
    r"^[ \t]*[\w-]+:[ \t]+[^{};\n]+$",
    r"^[ \t]*-[ \t]+\w+",
    # Lines ending in ; are CSS declarations or TS fields.
    r"^[ \t]{2,}(?!(?:else|try|finally|except)\b)[\w-]+:(?![^\n]*;[ \t]*$)(\s|$)",
    r":\s*\|[-+]?\s*$",
    r":\s*>[-+]?\s*$",
    r"^---\s*$",
    flags=re.MULTILINE,
)


# Every set, in declaration order. The code heuristic scores the union of these.
PATTERN_SETS: tuple[tuple[str, Patterns], ...] = (
    ("javascript", JS_TS_PATTERNS),
    ("jsx", JSX_PATTERNS),
    ("python", PYTHON_PATTERNS),
    ("java", JAVA_KOTLIN_PATTERNS),
    ("cpp", C_CPP_PATTERNS),
    ("go", GO_PATTERNS),
    ("rust", RUST_PATTERNS),
    ("sql", SQL_PATTERNS),
    ("css", CSS_PATTERNS),
    ("html", HTML_PATTERNS),
    ("json", JSON_PATTERNS),
    ("bash", SHELL_PATTERNS),
    ("yaml", YAML_PATTERNS),
)


# ─── Scoring ─────────────────────────────────────────────────────────────────


def count_matches(text: str, patterns: Patterns) -> int:
    """Number of patterns with at least one match in text."""
    return sum(1 for pattern in patterns if pattern.search(text))


@dataclass(frozen=True)
class LanguageRule:
    """One detection candidate.

    score = sum of matches over pattern_sets, plus ``bonus`` when any of
    ``bonus_markers`` occurs literally in the code.
    """

    tag: str
    pattern_sets: tuple[Patterns, ...]
    bonus_markers: tuple[str, ...] = ()
    bonus: int = 0

    def score(self, code: str) -> int:
        total = sum(count_matches(code, patterns) for patterns in self.pattern_sets)
        if self.bonus_markers and any(marker in code for marker in self.bonus_markers):
            total += self.bonus
        return total


# [LAW:one-source-of-truth] Declaration order here IS the tie-break order.
LANGUAGE_RULES: tuple[LanguageRule, ...] = (
    LanguageRule("javascript", (JS_TS_PATTERNS,)),
    LanguageRule(
        "typescript",
        (JS_TS_PATTERNS,),
        bonus_markers=(": string", ": number", "interface "),
        bonus=3,
    ),
    LanguageRule("tsx", (JS_TS_PATTERNS, JSX_PATTERNS)),
    LanguageRule("python", (PYTHON_PATTERNS,)),
    LanguageRule("java", (JAVA_KOTLIN_PATTERNS,)),
    LanguageRule("cpp", (C_CPP_PATTERNS,)),
    LanguageRule("go", (GO_PATTERNS,)),
    LanguageRule("rust", (RUST_PATTERNS,)),
    LanguageRule("sql", (SQL_PATTERNS,)),
    LanguageRule("css", (CSS_PATTERNS,)),
    LanguageRule("html", (HTML_PATTERNS,)),
    LanguageRule("json", (JSON_PATTERNS,)),
    LanguageRule("bash", (SHELL_PATTERNS,)),
    LanguageRule("yaml", (YAML_PATTERNS,)),
)


def language_scores(code: str) -> list[tuple[str, int]]:
    """Score every candidate, in tie-break order."""
    return [(rule.tag, rule.score(code)) for rule in LANGUAGE_RULES]


def detect(code: str) -> str:
    """Name the most likely language of code; ``"text"`` when nothing matched.

    Ties go to the candidate declared first in LANGUAGE_RULES.
    """
    best_tag = DEFAULT_LANGUAGE
    best_score = 0
    for tag, score in language_scores(code):
        if score > best_score:
            best_tag, best_score = tag, score
    return best_tag
