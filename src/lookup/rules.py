"""Japanese deinflection rule table.

Each rule rewrites an inflected kana ending back to a dictionary ending and
records which conjugation class the result belongs to. Covers:
- Type I (godan/五段) verbs, one rule per stem ending
- Type II (ichidan/一段) verbs
- Irregular verbs: する, くる/来る
- i-adjectives (形容詞)

The table follows Yomitan's deinflection rules. Rules are plain records in a
flat tuple; order only decides enumeration order of equally ranked results.
"""

from dataclasses import dataclass, field
from enum import StrEnum


class GrammarClass(StrEnum):
    """Conjugation classes, valued as the dictionary's rule tags."""

    ICHIDAN = "v1"         # 一段 (食べる, 見る)
    GODAN = "v5"           # 五段, generic over v5u/v5k/...
    SURU = "vs"            # サ変 (する)
    KURU = "vk"            # カ変 (くる/来る)
    ZURU = "vz"            # ザ変 (信ずる)
    I_ADJECTIVE = "adj-i"  # 形容詞 (高い)


V1 = GrammarClass.ICHIDAN
V5 = GrammarClass.GODAN
VS = GrammarClass.SURU
VK = GrammarClass.KURU
ADJ_I = GrammarClass.I_ADJECTIVE


@dataclass(frozen=True, slots=True)
class DeinflectionRule:
    """A single suffix rewrite from an inflected ending to a base ending."""

    inflected_suffix: str
    base_suffix: str
    output_classes: tuple[GrammarClass, ...]
    reason: str
    input_classes: frozenset[GrammarClass] = field(default_factory=frozenset)


# Godan stem endings paired with their dictionary ending, in あ段 order.
# Used for the forms that attach to a single vowel row.
_GODAN_ROWS = {
    # dictionary ending -> [あ段, い段, え段, お段]
    "う": ["わ", "い", "え", "お"],
    "く": ["か", "き", "け", "こ"],
    "ぐ": ["が", "ぎ", "げ", "ご"],
    "す": ["さ", "し", "せ", "そ"],
    "つ": ["た", "ち", "て", "と"],
    "ぬ": ["な", "に", "ね", "の"],
    "ぶ": ["ば", "び", "べ", "ぼ"],
    "む": ["ま", "み", "め", "も"],
    "る": ["ら", "り", "れ", "ろ"],
}

# Te/Ta sound changes (音便): dictionary ending -> te-form stem
_ONBIN = [
    ("く", "いて"),
    ("ぐ", "いで"),
    ("す", "して"),
    ("う", "って"),
    ("つ", "って"),
    ("る", "って"),
    ("ぬ", "んで"),
    ("ぶ", "んで"),
    ("む", "んで"),
]


def _past(te: str) -> str:
    """いて -> いた, んで -> んだ"""
    return te[:-1] + ("だ" if te.endswith("で") else "た")


def _shimau(te: str) -> str:
    """いて -> いちゃう, んで -> んじゃう"""
    return te[:-1] + ("じゃう" if te.endswith("で") else "ちゃう")


def _shimau_past(te: str) -> str:
    """いて -> いちゃった, んで -> んじゃった"""
    return _shimau(te)[:-1] + "った"


def _godan_onbin(tail: str, reason: str, shape=None) -> list[tuple]:
    """Rows for a form built on the te-form stem of every godan ending."""
    rows = []
    for base, te in _ONBIN:
        stem = shape(te) if shape else te
        rows.append((stem + tail, base, (V5,), reason))
    return rows


def _godan_row(row: int, tail: str, reason: str, endings: str = "うくぐすつぬぶむる") -> list[tuple]:
    """Rows for a form built on one vowel row of the listed godan endings."""
    return [(_GODAN_ROWS[base][row] + tail, base, (V5,), reason) for base in endings]


# Rows are (inflected_suffix, base_suffix, output_classes, reason).
_RULE_ROWS: list[tuple] = [
    # -て form
    ("て", "る", (V1,), "te-form"),
    *_godan_onbin("", "te-form"),
    ("して", "する", (VS,), "te-form"),
    ("きて", "くる", (VK,), "te-form"),
    ("来て", "来る", (VK,), "te-form"),

    # -た form (past)
    ("た", "る", (V1,), "past"),
    *_godan_onbin("", "past", _past),
    ("した", "する", (VS,), "past"),
    ("きた", "くる", (VK,), "past"),
    ("来た", "来る", (VK,), "past"),
    ("かった", "い", (ADJ_I,), "past"),

    # -ない form (negative)
    ("ない", "る", (V1,), "negative"),
    *_godan_row(0, "ない", "negative", "くぐすつぬぶむるう"),
    ("しない", "する", (VS,), "negative"),
    ("こない", "くる", (VK,), "negative"),
    ("来ない", "来る", (VK,), "negative"),
    ("くない", "い", (ADJ_I,), "negative"),

    # -ます form (polite)
    ("ます", "る", (V1,), "polite"),
    *_godan_row(1, "ます", "polite"),
    ("します", "する", (VS,), "polite"),
    ("きます", "くる", (VK,), "polite"),
    ("来ます", "来る", (VK,), "polite"),

    # -ている form (progressive)
    ("ている", "る", (V1,), "progressive"),
    ("ていた", "る", (V1,), "progressive past"),
    ("てる", "る", (V1,), "progressive (colloquial)"),
    ("てた", "る", (V1,), "progressive past (colloquial)"),
    *_godan_onbin("いる", "progressive"),
    *_godan_onbin("る", "progressive (colloquial)"),
    ("している", "する", (VS,), "progressive"),
    ("してる", "する", (VS,), "progressive (colloquial)"),
    ("きている", "くる", (VK,), "progressive"),
    ("きてる", "くる", (VK,), "progressive (colloquial)"),

    # -たい form (want to)
    ("たい", "る", (V1,), "want to"),
    *_godan_row(1, "たい", "want to"),
    ("したい", "する", (VS,), "want to"),
    ("きたい", "くる", (VK,), "want to"),

    # Potential
    ("れる", "る", (V1,), "potential"),
    ("られる", "る", (V1,), "potential/passive"),
    *_godan_row(2, "る", "potential", "うくぐすつぬぶむ"),
    ("できる", "する", (VS,), "potential"),
    ("これる", "くる", (VK,), "potential"),
    ("来れる", "来る", (VK,), "potential"),

    # Passive
    *_godan_row(0, "れる", "passive", "くぐすつぬぶむうる"),
    ("される", "する", (VS,), "passive"),
    ("こられる", "くる", (VK,), "passive"),

    # Causative
    ("させる", "る", (V1,), "causative"),
    *_godan_row(0, "せる", "causative", "くぐすつぬぶむるう"),
    ("させる", "する", (VS,), "causative"),
    ("こさせる", "くる", (VK,), "causative"),

    # Imperative
    ("ろ", "る", (V1,), "imperative"),
    ("よ", "る", (V1,), "imperative"),
    *_godan_row(2, "", "imperative"),
    ("しろ", "する", (VS,), "imperative"),
    ("せよ", "する", (VS,), "imperative"),
    ("こい", "くる", (VK,), "imperative"),
    ("来い", "来る", (VK,), "imperative"),

    # Volitional
    ("よう", "る", (V1,), "volitional"),
    *_godan_row(3, "う", "volitional"),
    ("しよう", "する", (VS,), "volitional"),
    ("こよう", "くる", (VK,), "volitional"),

    # -ば conditional
    ("れば", "る", (V1, V5), "conditional"),
    *_godan_row(2, "ば", "conditional", "うくぐすつぬぶむ"),
    ("すれば", "する", (VS,), "conditional"),
    ("くれば", "くる", (VK,), "conditional"),
    ("ければ", "い", (ADJ_I,), "conditional"),

    # -たら conditional
    ("たら", "る", (V1,), "conditional (tara)"),
    *_godan_onbin("ら", "conditional (tara)", _past),
    ("したら", "する", (VS,), "conditional (tara)"),
    ("きたら", "くる", (VK,), "conditional (tara)"),
    ("かったら", "い", (ADJ_I,), "conditional (tara)"),

    # Adjective adverb / te
    ("く", "い", (ADJ_I,), "adverb"),
    ("くて", "い", (ADJ_I,), "te-form"),

    # -ちゃう/-じゃう (てしまう contraction)
    ("ちゃう", "る", (V1,), "shimau contraction"),
    *_godan_onbin("", "shimau contraction", _shimau),
    ("しちゃう", "する", (VS,), "shimau contraction"),
    ("きちゃう", "くる", (VK,), "shimau contraction"),

    # -ちゃった (past of -ちゃう)
    ("ちゃった", "る", (V1,), "shimau contraction (past)"),
    *_godan_onbin("", "shimau contraction (past)", _shimau_past),
    ("しちゃった", "する", (VS,), "shimau contraction (past)"),
    ("きちゃった", "くる", (VK,), "shimau contraction (past)"),

    # -なかった (past negative)
    ("なかった", "る", (V1,), "past negative"),
    *_godan_row(0, "なかった", "past negative", "くぐすつぬぶむるう"),
    ("しなかった", "する", (VS,), "past negative"),
    ("こなかった", "くる", (VK,), "past negative"),
    ("くなかった", "い", (ADJ_I,), "past negative"),
]


DEINFLECTION_RULES: tuple[DeinflectionRule, ...] = tuple(
    DeinflectionRule(inflected, base, classes, reason)
    for inflected, base, classes, reason in _RULE_ROWS
)


def rules_for_suffix(term: str) -> list[DeinflectionRule]:
    """Return the rules whose inflected ending matches the end of ``term``."""
    return [rule for rule in DEINFLECTION_RULES if term.endswith(rule.inflected_suffix)]
