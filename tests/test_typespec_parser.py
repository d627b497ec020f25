from pathlib import Path

from typespec_bridge.parser.typespec import parse_typespec

FIXTURES = Path(__file__).parent / "fixtures"


class TestParseLibraryFixture:
    def setup_method(self):
        self.definition = parse_typespec((FIXTURES / "library.tsp").read_text(encoding="utf-8"))

    def test_imports(self):
        assert self.definition.imports == ["@typespec/http", "@typespec/rest"]

    def test_service_block(self):
        assert self.definition.title == "Library API"
        assert self.definition.version == "2.1.0"

    def test_namespace_and_models(self):
        assert [ns.name for ns in self.definition.namespaces] == ["Library"]
        models = self.definition.namespaces[0].models
        assert [m.name for m in models] == ["Books", "Authors"]

    def test_properties(self):
        books = self.definition.namespaces[0].models[0]
        props = {p.name: p for p in books.properties}
        assert list(props) == ["title", "isbn", "pages", "published_on", "genre", "authors"]
        assert props["isbn"].optional is True
        assert props["pages"].type == "int32"
        assert props["published_on"].type == "plainDate | null"
        assert props["genre"].type == '"fiction" | "poetry" | "history"'
        assert props["authors"].type == "Authors[]"

    def test_comment_lines_are_not_properties(self):
        authors = self.definition.namespaces[0].models[1]
        assert [p.name for p in authors.properties] == ["name", "website"]

    def test_operations_are_not_read_back(self):
        assert self.definition.namespaces[0].operations == []


class TestTolerantParsing:
    def test_namespace_auto_closes(self):
        text = "namespace A {\nmodel X {\na: string;\nnamespace B {\nmodel Y {\nb: int32;\n}\n}"
        definition = parse_typespec(text)
        assert [ns.name for ns in definition.namespaces] == ["A", "B"]
        assert [m.name for m in definition.namespaces[0].models] == ["X"]
        assert [m.name for m in definition.namespaces[1].models] == ["Y"]

    def test_model_auto_closes(self):
        text = "namespace A {\nmodel X {\na: string;\nmodel Y {\nb: string;\n}\n}"
        models = parse_typespec(text).namespaces[0].models
        assert [m.name for m in models] == ["X", "Y"]
        assert [p.name for p in models[0].properties] == ["a"]

    def test_unclosed_blocks_flushed_at_end(self):
        definition = parse_typespec("namespace A {\n  model X {\n    a: string;")
        assert definition.namespaces[0].models[0].properties[0].name == "a"

    def test_model_outside_namespace_ignored(self):
        assert parse_typespec("model X {\na: string;\n}").namespaces == []

    def test_unknown_lines_ignored(self):
        text = "something odd\nnamespace A {\nalias Foo = string;\nmodel X {\na: string;\n}\n}\n???"
        definition = parse_typespec(text)
        assert [m.name for m in definition.namespaces[0].models] == ["X"]

    def test_extends_clause(self):
        text = "namespace A {\nmodel Admin extends User, Auditable {\nrole: string;\n}\n}"
        model = parse_typespec(text).namespaces[0].models[0]
        assert model.name == "Admin"
        assert model.extends == ["User", "Auditable"]

    def test_service_without_version(self):
        definition = parse_typespec('@service({\n  title: "Only Title",\n})\nnamespace A {\n}')
        assert definition.title == "Only Title"
        assert definition.version is None

    def test_reopened_namespace_merges(self):
        text = "namespace A {\nmodel X {\n}\n}\nnamespace A {\nmodel Y {\n}\n}"
        definition = parse_typespec(text)
        assert len(definition.namespaces) == 1
        assert [m.name for m in definition.namespaces[0].models] == ["X", "Y"]

    def test_empty_text(self):
        definition = parse_typespec("")
        assert definition.namespaces == []
        assert definition.imports == []

    def test_service_block_with_escaped_quotes(self):
        definition = parse_typespec('@service({\n  title: "A \\"quoted\\" API",\n  version: "2.0"\n})\nnamespace A {\n}')
        assert definition.title == 'A "quoted" API'
        assert definition.version == "2.0"

    def test_service_block_with_invalid_escape_kept_raw(self):
        definition = parse_typespec('@service({\n  title: "C:\\q",\n})\nnamespace A {\n}')
        assert definition.title == "C:\\q"
