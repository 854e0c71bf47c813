"""
Tests for get_imported_module_report and its match predicates.
"""

import pytest

from modreport.core.models import ModuleRevisionId
from modreport.core.report import IMPORT_MATCHERS, ImportedModuleRef, InvalidArgument, ModuleReport
from modreport.core.report.module_report import (
    matches_alias,
    matches_module_id,
    matches_module_name,
)


@pytest.fixture
def ref():
    return ImportedModuleRef(
        module_revision_id=ModuleRevisionId(organisation="org.example", name="build-std", revision="1.0"),
        alias="std",
    )


class TestMatchers:
    """Each predicate in isolation."""

    def test_order(self):
        assert IMPORT_MATCHERS == (matches_module_id, matches_module_name, matches_alias)

    def test_module_id_prefix(self, ref):
        assert matches_module_id(ref, "org.example#build-std")
        assert matches_module_id(ref, "org.example#build-std;1.0")
        assert matches_module_id(ref, "org.ex")
        assert not matches_module_id(ref, "build-std")

    def test_module_name(self, ref):
        assert matches_module_name(ref, "build-std")
        assert not matches_module_name(ref, "build")

    def test_alias(self, ref):
        assert matches_alias(ref, "std")
        assert not matches_alias(ref, "build-std")

    def test_unidentified_ref_matches_only_alias(self):
        anonymous = ImportedModuleRef(alias="x")
        assert not matches_module_id(anonymous, "x")
        assert not matches_module_name(anonymous, "x")
        assert matches_alias(anonymous, "x")


class TestGetImportedModuleReport:
    def test_chain_lookup(self, make_report, link):
        """A → B(b) → C(c): both reachable from A."""
        a = make_report("a")
        b = make_report("b")
        c = make_report("c")
        link(a, b, alias="b")
        link(b, c, alias="c")

        assert a.get_imported_module_report("b").report is b
        assert a.get_imported_module_report("c").report is c

    def test_by_module_id_ignores_revision_suffix(self, make_report, link):
        a = make_report("a")
        b = make_report("b")
        link(a, b)
        assert a.get_imported_module_report("org#b;9.9").report is b

    def test_by_bare_name(self, make_report, link):
        a = make_report("a")
        b = make_report("b")
        link(a, b, alias="bee")
        assert a.get_imported_module_report("b").report is b

    def test_not_found(self, make_report, link):
        a = make_report("a")
        link(a, make_report("b"))
        assert a.get_imported_module_report("zzz") is None

    def test_empty_identifier_raises(self):
        with pytest.raises(InvalidArgument):
            ModuleReport().get_imported_module_report("")

    def test_subtree_searched_before_next_sibling(self, make_report, link):
        """Depth-first: B's child named ``x`` is found before sibling ``x``."""
        a = make_report("a")
        b = make_report("b")
        deep = make_report("x", organisation="deep")
        sibling = make_report("x", organisation="sibling")
        link(a, b)
        link(b, deep)
        link(a, sibling)

        found = a.get_imported_module_report("x")
        assert found.report is deep

    def test_first_matching_import_wins(self, make_report, link):
        a = make_report("a")
        first = make_report("dup")
        second = make_report("dup")
        link(a, first)
        link(a, second)
        assert a.get_imported_module_report("dup").report is first

    def test_unresolved_import_still_matches(self, make_report):
        a = make_report("a")
        ref = ImportedModuleRef(module_revision_id=ModuleRevisionId(name="ghost"))
        a.add_imported_module(ref)
        found = a.get_imported_module_report("ghost")
        assert found is ref
        assert found.report is None
