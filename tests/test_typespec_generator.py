from pathlib import Path

from typespec_bridge.generator.typespec import generate_typespec
from typespec_bridge.models.typespec import (
    TypeSpecDecorator,
    TypeSpecDefinition,
    TypeSpecModel,
    TypeSpecNamespace,
    TypeSpecOperation,
    TypeSpecParameter,
    TypeSpecProperty,
    TypeSpecResponse,
)
from typespec_bridge.parser.typespec import parse_typespec

FIXTURES = Path(__file__).parent / "fixtures"


def _pet_definition(**namespace_fields) -> TypeSpecDefinition:
    pet = TypeSpecModel(
        name="Pet",
        properties=[
            TypeSpecProperty(name="name", type="string"),
            TypeSpecProperty(name="age", type="int32", optional=True),
        ],
    )
    return TypeSpecDefinition(
        imports=["@typespec/http"],
        title="Pets",
        version="1.0.0",
        namespaces=[TypeSpecNamespace(name="PetStore", models=[pet], **namespace_fields)],
    )


class TestGenerateTypeSpec:
    def test_full_layout(self):
        expected = "\n".join([
            'import "@typespec/http";',
            "",
            "@service({",
            '  title: "Pets",',
            '  version: "1.0.0"',
            "})",
            "namespace PetStore {",
            "  model Pet {",
            "    name: string;",
            "    age?: int32;",
            "  }",
            "",
            "}",
        ])
        assert generate_typespec(_pet_definition()) == expected

    def test_no_service_block_without_title(self):
        text = generate_typespec(TypeSpecDefinition(namespaces=[TypeSpecNamespace(name="A")]))
        assert "@service" not in text
        assert text == "namespace A {\n}"

    def test_empty_definition(self):
        assert generate_typespec(TypeSpecDefinition()) == ""

    def test_model_decorators_description_and_extends(self):
        model = TypeSpecModel(
            name="Admin",
            extends=["User"],
            description="An administrator",
            decorators=[TypeSpecDecorator(name="discriminator", arguments=["type"])],
            properties=[TypeSpecProperty(name="role", type="string", description="Role name")],
        )
        text = generate_typespec(TypeSpecDefinition(namespaces=[TypeSpecNamespace(name="A", models=[model])]))
        assert "  /** An administrator */" in text
        assert '  @discriminator("type")' in text
        assert "  model Admin extends User {" in text
        assert "    /** Role name */" in text
        assert "    role: string;" in text

    def test_operation_rendering(self):
        op = TypeSpecOperation(
            name="getPet",
            method="get",
            path="/pets/{id}",
            parameters=[TypeSpecParameter(name="id", location="path", type="string", required=True)],
            responses=[TypeSpecResponse(status_code=200, type="Pet"), TypeSpecResponse(status_code=404)],
        )
        text = generate_typespec(_pet_definition(operations=[op]))
        assert '  @route("/pets/{id}")' in text
        assert "  @get" in text
        assert "  op getPet(id: string): Pet;" in text

    def test_operation_without_ok_response_returns_void(self):
        op = TypeSpecOperation(
            name="deletePet",
            method="delete",
            path="/pets/{id}",
            responses=[TypeSpecResponse(status_code=204)],
        )
        text = generate_typespec(_pet_definition(operations=[op]))
        assert "  op deletePet(): void;" in text

    def test_namespace_imports_precede_namespace(self):
        text = generate_typespec(TypeSpecDefinition(namespaces=[TypeSpecNamespace(name="A", imports=["lib.tsp"])]))
        assert text.index('import "lib.tsp";') < text.index("namespace A {")


class TestRoundTrip:
    def test_parse_generate_parse_is_stable(self):
        original = parse_typespec((FIXTURES / "library.tsp").read_text(encoding="utf-8"))
        assert parse_typespec(generate_typespec(original)) == original

    def test_structure_survives_generation(self):
        definition = _pet_definition()
        reparsed = parse_typespec(generate_typespec(definition))
        assert reparsed.title == "Pets"
        model = reparsed.namespaces[0].models[0]
        assert [(p.name, p.type, p.optional) for p in model.properties] == [
            ("name", "string", False),
            ("age", "int32", True),
        ]

    def test_operations_lost_on_round_trip(self):
        op = TypeSpecOperation(name="listPets", method="get", path="/pets", responses=[])
        reparsed = parse_typespec(generate_typespec(_pet_definition(operations=[op])))
        assert reparsed.namespaces[0].operations == []
        assert [m.name for m in reparsed.namespaces[0].models] == ["Pet"]

    def test_quoted_title_survives_round_trip(self):
        definition = _pet_definition()
        definition.title = 'The "Pets" API'
        definition.version = "1.0.0-beta"
        text = generate_typespec(definition)
        assert 'title: "The \\"Pets\\" API",' in text
        reparsed = parse_typespec(text)
        assert reparsed.title == 'The "Pets" API'
        assert reparsed.version == "1.0.0-beta"

    def test_route_path_is_escaped(self):
        op = TypeSpecOperation(name="odd", method="get", path='/pets/"x"', responses=[])
        text = generate_typespec(_pet_definition(operations=[op]))
        assert '  @route("/pets/\\"x\\"")' in text
