"""
Tests for attribute injection on single elements.
"""

import pytest

from component_annotate.annotate.aliases import FragmentContext
from component_annotate.annotate.injector import (
    apply_attributes,
    apply_component_attribute,
    is_host_element,
    is_ignored,
)
from component_annotate.config import TraversalPolicy
from component_annotate.parser.nodes import JSXAttribute

from builders import attrs_of, el, frag, text


class TestApplyAttributes:
    """The ordered decisions for one element."""

    def test_root_gets_all_three(self, make_context):
        div = el("div")
        result = apply_attributes(div, make_context("Foo"))
        assert attrs_of(div) == {
            "data-sentry-element": "div",
            "data-sentry-component": "Foo",
            "data-sentry-source-file": "test.jsx",
        }
        assert result.added == [
            "data-sentry-element",
            "data-sentry-component",
            "data-sentry-source-file",
        ]
        assert result.target

    def test_child_without_component_name(self, make_context):
        h1 = el("h1")
        apply_attributes(h1, make_context())
        assert attrs_of(h1) == {
            "data-sentry-element": "h1",
            "data-sentry-source-file": "test.jsx",
        }

    def test_attributes_appended_after_existing(self, make_context):
        div = el("div", attrs={"className": "box"})
        apply_attributes(div, make_context("Foo"))
        names = [a.name for a in div.attributes]
        assert names[0] == "className"
        assert all(a.inserted for a in div.attributes[1:])

    def test_no_source_file_configured(self, make_context):
        div = el("div")
        apply_attributes(div, make_context("Foo", source_file_name=None))
        assert "data-sentry-source-file" not in attrs_of(div)

    def test_native_names(self, make_context):
        view = el("View")
        apply_attributes(view, make_context("App", use_alternate_attribute_names=True))
        assert attrs_of(view) == {
            "dataSentryElement": "View",
            "dataSentryComponent": "App",
            "dataSentrySourceFile": "test.jsx",
        }

    def test_member_path_element_name(self, make_context):
        header = el("Components.UI.Card.Header")
        apply_attributes(header, make_context())
        assert attrs_of(header)["data-sentry-element"] == "Components.UI.Card.Header"

    def test_none_is_noop(self, make_context):
        result = apply_attributes(None, make_context("Foo"))
        assert result.added == []
        assert not result.target

    def test_text_is_noop(self, make_context):
        assert apply_attributes(text("hi"), make_context("Foo")).added == []

    @pytest.mark.parametrize("node", [
        el("Fragment"),
        el("React.Fragment"),
        el("F"),
        el("R.Fragment"),
    ])
    def test_fragment_never_annotated(self, node, make_context):
        fragments = FragmentContext(frozenset({"F"}), frozenset({"React", "R"}))
        context = make_context(
            "Foo", fragments=fragments, annotate_fragments=True,
            use_alternate_attribute_names=False,
        )
        result = apply_attributes(node, context)
        assert result.added == []
        assert node.attributes == []

    def test_shorthand_fragment_is_noop(self, make_context):
        assert apply_attributes(frag(), make_context("Foo")).added == []


class TestIgnore:
    """Exact-match ignore list."""

    def test_is_ignored_matches_either_name(self):
        assert is_ignored("div", "Foo", ("Foo",))
        assert is_ignored("Tab.Group", "", ("Tab.Group",))
        assert not is_ignored("div", "Foo", ("Fo", "di"))
        assert not is_ignored("div", "Foo", ())

    def test_ignored_component_gets_nothing(self, make_context):
        div = el("div")
        result = apply_attributes(div, make_context("Foo", ignored_components=("Foo",)))
        assert result.ignored
        assert div.attributes == []

    def test_ignored_element_gets_nothing(self, make_context):
        group = el("Tab.Group")
        apply_attributes(group, make_context("Tabs", ignored_components=("Tab.Group",)))
        assert group.attributes == []

    def test_ignore_is_exact(self, make_context):
        panel = el("Tab.Panel")
        apply_attributes(panel, make_context(ignored_components=("Tab", "Tab.Group")))
        assert attrs_of(panel)["data-sentry-element"] == "Tab.Panel"

    def test_empty_entry_never_matches_missing_component_name(self, make_context):
        assert not is_ignored("h1", "", ("",))
        h1 = el("h1")
        apply_attributes(h1, make_context(ignored_components=("",)))
        assert attrs_of(h1) == {
            "data-sentry-element": "h1",
            "data-sentry-source-file": "test.jsx",
        }


class TestSuppressedElements:
    """Default-suppressed tag names."""

    def test_suppressed_child_gets_nothing(self, make_context):
        br = el("br")
        result = apply_attributes(br, make_context())
        assert result.suppressed_element
        assert br.attributes == []

    def test_suppressed_root_keeps_component_and_source(self, make_context):
        html = el("html")
        apply_attributes(html, make_context("Document"))
        assert attrs_of(html) == {
            "data-sentry-component": "Document",
            "data-sentry-source-file": "test.jsx",
        }

    def test_custom_suppressed_set(self, make_context):
        div = el("div")
        apply_attributes(div, make_context(ignored_elements=frozenset({"div"})))
        assert div.attributes == []


class TestIdempotence:
    """Presence checks by attribute name."""

    def test_second_run_adds_nothing(self, make_context):
        div = el("div")
        context = make_context("Foo")
        apply_attributes(div, context)
        result = apply_attributes(div, context)
        assert result.added == []
        assert len(div.attributes) == 3

    def test_existing_element_attribute_kept(self, make_context):
        div = el("div", attrs={"data-sentry-element": "custom"})
        apply_attributes(div, make_context("Foo"))
        assert attrs_of(div)["data-sentry-element"] == "custom"
        assert [a.name for a in div.attributes].count("data-sentry-element") == 1
        assert attrs_of(div)["data-sentry-component"] == "Foo"

    def test_existing_component_attribute_kept(self, make_context):
        div = el("div", attrs={"data-sentry-component": "Other"})
        result = apply_attributes(div, make_context("Foo"))
        assert attrs_of(div)["data-sentry-component"] == "Other"
        assert "data-sentry-component" not in result.added

    def test_spread_attributes_do_not_count(self, make_context):
        from component_annotate.parser.nodes import OpaqueNode
        div = el("div")
        div.attributes.append(OpaqueNode(kind="jsx_expression"))
        apply_attributes(div, make_context("Foo"))
        assert sum(isinstance(a, JSXAttribute) for a in div.attributes) == 3


class TestLegacyInjection:
    """Component attribute only, host elements only."""

    @pytest.mark.parametrize("name", ["div", "svg:rect", "View", "Text", "TouchableOpacity"])
    def test_host_elements(self, name):
        assert is_host_element(name.split(":")[-1])

    @pytest.mark.parametrize("name", ["Foo", "Tab.Group", "unknown", ""])
    def test_not_host_elements(self, name):
        assert not is_host_element(name)

    def test_host_element_gets_component_only(self, make_context):
        div = el("div")
        result = apply_component_attribute(div, make_context("Foo", policy=TraversalPolicy.LEGACY))
        assert attrs_of(div) == {"data-sentry-component": "Foo"}
        assert result.target

    def test_component_element_not_target(self, make_context):
        child = el("Child")
        result = apply_component_attribute(child, make_context("Foo", policy=TraversalPolicy.LEGACY))
        assert child.attributes == []
        assert not result.target

    def test_ignored_host_is_still_target(self, make_context):
        div = el("div")
        context = make_context("Foo", policy=TraversalPolicy.LEGACY, ignored_components=("div",))
        result = apply_component_attribute(div, context)
        assert result.target
        assert result.ignored
        assert div.attributes == []

    def test_suppressed_list_not_used(self, make_context):
        br = el("br")
        apply_component_attribute(br, make_context("Foo", policy=TraversalPolicy.LEGACY))
        assert attrs_of(br) == {"data-sentry-component": "Foo"}

    def test_native_name(self, make_context):
        view = el("View")
        context = make_context(
            "App", policy=TraversalPolicy.LEGACY, use_alternate_attribute_names=True,
        )
        apply_component_attribute(view, context)
        assert attrs_of(view) == {"dataSentryComponent": "App"}
