"""Definition pattern tests for each supported label dialect.

Covers anchoring, word boundaries, composite-identifier rejection, and
escaping of pattern metacharacters in symbol names.
"""

from __future__ import annotations

import re
import unittest

from asmhover.patterns import (
    KIND_BARE_LABEL,
    KIND_COLON_LABEL,
    KIND_MACRO,
    KIND_MODULE,
    build_label_patterns,
    escape_symbol,
    first_name_column,
)


def _by_kind(name: str):
    return {pattern.kind: pattern for pattern in build_label_patterns(name)}


class PatternOrderTests(unittest.TestCase):
    def test_patterns_come_in_fixed_order(self) -> None:
        kinds = [pattern.kind for pattern in build_label_patterns("checksum")]
        self.assertEqual(kinds, [KIND_COLON_LABEL, KIND_BARE_LABEL, KIND_MODULE, KIND_MACRO])

    def test_empty_name_is_rejected(self) -> None:
        with self.assertRaises(ValueError):
            build_label_patterns("")


class ColonLabelTests(unittest.TestCase):
    def setUp(self) -> None:
        self.pattern = _by_kind("checksum")[KIND_COLON_LABEL]

    def test_matches_plain_indented_and_qualified_labels(self) -> None:
        self.assertEqual(self.pattern.name_column("checksum:"), 0)
        self.assertEqual(self.pattern.name_column("    checksum: ; doc"), 4)
        self.assertIsNotNone(self.pattern.name_column("MOD.checksum:"))

    def test_rejects_partial_words_and_references(self) -> None:
        self.assertIsNone(self.pattern.name_column("my_checksum:"))
        self.assertIsNone(self.pattern.name_column("checksums:"))
        self.assertIsNone(self.pattern.name_column("  call checksum"))


class BareLabelTests(unittest.TestCase):
    def setUp(self) -> None:
        self.pattern = _by_kind("checksum")[KIND_BARE_LABEL]

    def test_matches_label_at_line_start(self) -> None:
        self.assertEqual(self.pattern.name_column("checksum equ 5"), 0)
        self.assertEqual(self.pattern.name_column("checksum"), 0)

    def test_never_matches_when_followed_by_reserved_suffix(self) -> None:
        for line in ("checksum:", "checksum.lo", "checksum_tmp db 0"):
            with self.subTest(line=line):
                self.assertIsNone(self.pattern.name_column(line))

    def test_requires_column_zero(self) -> None:
        self.assertIsNone(self.pattern.name_column("  checksum equ 5"))
        self.assertIsNone(self.pattern.name_column("xchecksum equ 5"))


class ModuleAndMacroTests(unittest.TestCase):
    def test_module_declaration(self) -> None:
        pattern = _by_kind("video")[KIND_MODULE]
        self.assertEqual(pattern.name_column("  MODULE video"), 9)
        self.assertIsNone(pattern.name_column("MODULE video"))
        self.assertIsNone(pattern.name_column("  MODULE videoram"))

    def test_macro_declaration(self) -> None:
        pattern = _by_kind("WAIT")[KIND_MACRO]
        self.assertEqual(pattern.name_column("\tMACRO WAIT count"), 7)
        self.assertIsNone(pattern.name_column("\tMACRO WAITING"))

    def test_first_name_column_picks_leftmost_match(self) -> None:
        patterns = build_label_patterns("WAIT")
        self.assertEqual(first_name_column(patterns, "WAIT: ; loop"), 0)
        self.assertIsNone(first_name_column(patterns, "  call WAIT"))


class EscapeTests(unittest.TestCase):
    def test_escape_symbol_neutralizes_metacharacters(self) -> None:
        for name in ("a+b", "a.b", "x$", "(grp)", "a|b", "c*"):
            with self.subTest(name=name):
                self.assertIsNotNone(re.fullmatch(escape_symbol(name), name))

    def test_escape_symbol_leaves_plain_words_unchanged(self) -> None:
        self.assertEqual(escape_symbol("main_loop2"), "main_loop2")

    def test_every_pattern_embeds_escaped_name(self) -> None:
        patterns = build_label_patterns("a.b")
        for pattern in patterns:
            with self.subTest(kind=pattern.kind):
                self.assertIn(r"a\.b", pattern.source)
        colon = patterns[0]
        self.assertIsNotNone(colon.name_column("a.b:"))
        self.assertIsNone(colon.name_column("axb:"))

    def test_metacharacter_name_does_not_break_pattern(self) -> None:
        patterns = build_label_patterns("a+b")
        self.assertIsNotNone(patterns[0].name_column("a+b:"))
        self.assertIsNone(patterns[0].name_column("aab:"))
        self.assertIsNone(patterns[0].name_column("aaab:"))


if __name__ == "__main__":
    unittest.main()
