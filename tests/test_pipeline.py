"""
End-to-end tests: source text in, annotated source text out.
"""

import pytest

from component_annotate import AnnotationConfig, TraversalPolicy, annotate_file, annotate_source
from component_annotate.annotate import AnnotationResult, annotate_program
from component_annotate.parser import ParseError, parse_source
from component_annotate.parser.emit import encode_source


FOO_CLASS = """\
import React from 'react';

class Foo extends React.Component {
  render() {
    return <div><h1>Hi</h1></div>;
  }
}
"""

FOO_CLASS_ANNOTATED = """\
import React from 'react';

class Foo extends React.Component {
  render() {
    return <div data-sentry-element="div" data-sentry-component="Foo" data-sentry-source-file="Foo.jsx"><h1 data-sentry-element="h1" data-sentry-source-file="Foo.jsx">Hi</h1></div>;
  }
}
"""


class TestAnnotateSource:
    """Whole-file annotation with default options."""

    def test_class_component(self):
        result = annotate_source(FOO_CLASS, filename="/src/components/Foo.jsx")
        assert result.code == FOO_CLASS_ANNOTATED
        assert result.components == ["Foo"]
        assert result.attributes_added == 5

    def test_second_run_changes_nothing(self):
        first = annotate_source(FOO_CLASS, filename="Foo.jsx")
        second = annotate_source(first.code, filename="Foo.jsx")
        assert second.code == first.code
        assert second.attributes_added == 0

    def test_ignored_component(self):
        config = AnnotationConfig(ignored_components=("Foo",))
        result = annotate_source(FOO_CLASS, filename="Foo.jsx", config=config)
        assert result.code == FOO_CLASS
        assert result.attributes_added == 0

    def test_function_component_with_parens(self):
        source = "function Card() {\n  return (\n    <section className=\"card\">\n      <p>Body</p>\n    </section>\n  );\n}\n"
        result = annotate_source(source, filename="Card.tsx")
        assert (
            '<section className="card" data-sentry-element="section" '
            'data-sentry-component="Card" data-sentry-source-file="Card.tsx">'
        ) in result.code
        assert '<p data-sentry-element="p" data-sentry-source-file="Card.tsx">Body</p>' in result.code

    def test_self_closing_insert_before_slash(self):
        source = "const Avatar = () => <img src={url} alt=\"me\" />;\n"
        result = annotate_source(source, filename="Avatar.jsx")
        assert result.code == (
            'const Avatar = () => <img src={url} alt="me" data-sentry-element="img" '
            'data-sentry-component="Avatar" data-sentry-source-file="Avatar.jsx" />;\n'
        )

    def test_member_path_element(self):
        source = "const Panel = () => <Components.UI.Card.Header />;\n"
        result = annotate_source(source, filename="Panel.jsx")
        assert 'data-sentry-element="Components.UI.Card.Header"' in result.code

    def test_ternary_return(self):
        source = (
            "function Toggle({ on }) {\n"
            "  return on ? <span>On</span> : <em>Off</em>;\n"
            "}\n"
        )
        result = annotate_source(source, filename="Toggle.jsx")
        assert result.code.count('data-sentry-component="Toggle"') == 2

    def test_aliased_fragment_root(self):
        source = (
            "import * as NamespaceAlias from 'react';\n"
            "const Bar = () => <NamespaceAlias.Fragment><span /></NamespaceAlias.Fragment>;\n"
        )
        result = annotate_source(source, filename="Bar.jsx")
        assert "<NamespaceAlias.Fragment>" in result.code
        assert '<span data-sentry-element="span" data-sentry-source-file="Bar.jsx" />' in result.code
        assert "data-sentry-component" not in result.code

    def test_ignored_member_path_does_not_cascade(self):
        source = "const Tabs = () => <Tab.Group><Tab.Panel /></Tab.Group>;\n"
        config = AnnotationConfig(ignored_components=("Tab.Group",))
        result = annotate_source(source, filename="Tabs.jsx", config=config)
        assert "<Tab.Group>" in result.code
        assert (
            '<Tab.Panel data-sentry-element="Tab.Panel" data-sentry-source-file="Tabs.jsx" />'
        ) in result.code

    def test_annotate_fragments(self):
        source = "const List = () => (\n  <>\n    <li>a</li>\n    <li>b</li>\n  </>\n);\n"
        config = AnnotationConfig(annotate_fragments=True)
        result = annotate_source(source, filename="List.jsx", config=config)
        assert result.code.count('data-sentry-component="List"') == 1
        assert '<li data-sentry-element="li" data-sentry-component="List"' in result.code

    def test_native_attribute_names(self):
        source = "const App = () => <View><Text>hi</Text></View>;\n"
        config = AnnotationConfig(use_alternate_attribute_names=True)
        result = annotate_source(source, filename="App.js", config=config)
        assert (
            '<View dataSentryElement="View" dataSentryComponent="App" dataSentrySourceFile="App.js">'
        ) in result.code
        assert "data-sentry" not in result.code

    def test_legacy_policy(self):
        source = "const App = () => <Wrapper><div><span /></div></Wrapper>;\n"
        config = AnnotationConfig(policy=TraversalPolicy.LEGACY)
        result = annotate_source(source, filename="App.jsx", config=config)
        assert result.code == (
            'const App = () => <Wrapper><div data-sentry-component="App"><span /></div></Wrapper>;\n'
        )

    def test_non_ascii_source(self):
        source = "const Pizza = () => <Text>🍕 {slice}</Text>;\n"
        result = annotate_source(source, filename="Pizza.jsx")
        assert result.code.startswith('const Pizza = () => <Text data-sentry-element="Text"')
        assert result.code.endswith("🍕 {slice}</Text>;\n")

    def test_non_utf8_bytes_preserved(self):
        source = b'const C = () => <div title="caf\xe9">x</div>;\n'
        result = annotate_source(source, filename="d.jsx")
        assert result.attributes_added == 3
        annotated = encode_source(result.code)
        assert annotated.startswith(b'const C = () => <div title="caf\xe9" data-sentry-element="div"')
        assert annotated.endswith(b'>x</div>;\n')

    def test_non_utf8_without_components(self):
        source = b"// caf\xe9\nconst x = 1;\n"
        result = annotate_source(source, filename="x.js")
        assert encode_source(result.code) == source

    def test_non_utf8_second_run(self):
        first = annotate_source(b'const C = () => <p title="\xff">x</p>;\n', filename="d.jsx")
        second = annotate_source(first.code, filename="d.jsx")
        assert second.attributes_added == 0
        assert second.code == first.code

    def test_no_components(self):
        source = "export const add = (a, b) => a + b;\n"
        result = annotate_source(source, filename="math.js")
        assert result.code == source
        assert result.components == []
        assert result.summary() == "0 components, 0 attributes added"

    def test_syntax_errors_do_not_raise(self):
        source = "const Broken = () => <div>;\nfunction Ok() { return <p />; }\n"
        result = annotate_source(source, filename="Broken.jsx")
        assert isinstance(result, AnnotationResult)


class TestIncompatiblePackages:
    """Files inside known-incompatible packages are left untouched."""

    def test_react_navigation_skipped(self):
        path = "/app/node_modules/@react-navigation/native/src/Link.jsx"
        result = annotate_source(FOO_CLASS, filename=path)
        assert result.skipped
        assert result.code == FOO_CLASS
        assert result.summary() == "skipped"

    def test_windows_path_skipped(self):
        path = "C:\\app\\node_modules\\react-native-testing-library\\src\\Foo.jsx"
        assert annotate_source(FOO_CLASS, filename=path).skipped

    def test_other_node_modules_annotated(self):
        path = "/app/node_modules/some-ui-kit/Foo.jsx"
        result = annotate_source(FOO_CLASS, filename=path)
        assert not result.skipped
        assert result.attributes_added == 5

    def test_configured_package_list_is_used(self):
        path = "/app/node_modules/@react-navigation/native/Foo.jsx"
        config = AnnotationConfig(incompatible_packages=("legacy-ui",))
        result = annotate_source(FOO_CLASS, filename=path, config=config)
        assert not result.skipped
        assert result.attributes_added == 5
        skipped = annotate_source(FOO_CLASS, filename="/x/node_modules/legacy-ui/Foo.jsx", config=config)
        assert skipped.skipped


class TestAnnotateProgram:
    """Annotating an already parsed program."""

    def test_source_file_name_used_as_given(self):
        program = parse_source(FOO_CLASS, filename="/src/Foo.jsx")
        result = annotate_program(program, AnnotationConfig())
        assert "data-sentry-source-file" not in program.to_source()
        assert result.attributes_added == 3

    def test_for_file(self):
        program = parse_source(FOO_CLASS, filename="/src/Foo.jsx")
        annotate_program(program, AnnotationConfig().for_file("/src/Foo.jsx"))
        assert program.to_source() == FOO_CLASS_ANNOTATED


class TestAnnotateFile:
    """Reading and writing files on disk."""

    def test_print_only(self, tmp_path):
        path = tmp_path / "Foo.jsx"
        path.write_text(FOO_CLASS, encoding="utf-8")
        result = annotate_file(path)
        assert result.code == FOO_CLASS_ANNOTATED
        assert path.read_text(encoding="utf-8") == FOO_CLASS

    def test_inplace(self, tmp_path):
        path = tmp_path / "Foo.jsx"
        path.write_text(FOO_CLASS, encoding="utf-8")
        annotate_file(path, inplace=True)
        assert path.read_text(encoding="utf-8") == FOO_CLASS_ANNOTATED

    def test_inplace_keeps_bytes(self, tmp_path):
        path = tmp_path / "Latin.jsx"
        path.write_bytes(b'const L = () => <b title="\xe9t\xe9">x</b>;\r\n// fin\r\n')
        annotate_file(path, inplace=True)
        assert path.read_bytes() == (
            b'const L = () => <b title="\xe9t\xe9" data-sentry-element="b" '
            b'data-sentry-component="L" data-sentry-source-file="Latin.jsx">x</b>;\r\n// fin\r\n'
        )

    def test_missing_file(self, tmp_path):
        with pytest.raises(ParseError):
            annotate_file(tmp_path / "missing.jsx")

    def test_sample_app(self, fixtures_dir):
        result = annotate_file(fixtures_dir / "bananas_pizza_app.jsx")
        assert result.components == ["Bananas", "PizzaTranslator", "App"]
        assert (
            'fsClass="test-class" data-sentry-element="Image" data-sentry-component="Bananas" '
            'data-sentry-source-file="bananas_pizza_app.jsx" />'
        ) in result.code
        assert (
            '<View style={styles.container} data-sentry-element="View" data-sentry-component="App" '
            'data-sentry-source-file="bananas_pizza_app.jsx">'
        ) in result.code
        assert (
            '<Bananas data-sentry-element="Bananas" data-sentry-source-file="bananas_pizza_app.jsx" />'
        ) in result.code
