"""Tests for the form schema model."""
from app.models.form import (
    FieldType,
    FormDefinition,
    FormField,
    applicant_field,
    options_text,
    parse_options_text,
)


class TestFormDefinition:

    def test_valid_requires_name(self):
        assert not FormDefinition(id="f", name="   ").is_valid()
        assert FormDefinition(id="f", name="비품 요청").is_valid()

    def test_valid_requires_field_ids(self):
        form = FormDefinition(id="f", name="x", fields=[FormField(id="", label="a")])
        assert not form.is_valid()

    def test_duplicate_field_ids_detected(self):
        form = FormDefinition(
            id="f", name="x",
            fields=[FormField(id="a"), FormField(id="a")],
        )
        assert not form.field_ids_unique()

    def test_document_uses_stored_key_names(self):
        form = FormDefinition(id="f", name="x", handler_ldap="bella.arena", fields=[applicant_field()])
        doc = form.to_document()
        assert doc["handlerLdap"] == "bella.arena"
        assert doc["fields"][0]["isFixed"] is True
        assert doc["fields"][0]["type"] == "TEXT"
        assert "options" not in doc["fields"][0]

    def test_from_document_ignores_store_bookkeeping(self):
        doc = {
            "_id": "form_1",
            "id": "form_1",
            "name": "임시 사원증 신청",
            "description": "",
            "handlerLdap": "",
            "fields": [{"id": "d", "label": "사원증이 필요한 날짜", "type": "DATE"}],
            "updated_at": "2026-01-01T00:00:00",
        }
        form = FormDefinition.from_document(doc)
        assert form.id == "form_1"
        assert form.fields[0].type is FieldType.DATE
        assert form.fields[0].is_fixed is False


class TestFieldRetyping:

    def test_leaving_dropdown_clears_options(self):
        field = FormField(id="a", type=FieldType.DROPDOWN, options=["x", "y"])
        assert field.with_type(FieldType.TEXT).options is None

    def test_entering_dropdown_starts_empty(self):
        field = FormField(id="a", type=FieldType.TEXT)
        retyped = field.with_type(FieldType.DROPDOWN)
        assert retyped.type is FieldType.DROPDOWN
        assert retyped.options == []

    def test_dropdown_to_dropdown_keeps_options(self):
        field = FormField(id="a", type=FieldType.DROPDOWN, options=["x"])
        assert field.with_type(FieldType.DROPDOWN).options == ["x"]

    def test_accepts_raw_type_value(self):
        field = FormField(id="a")
        assert field.with_type("DATE").type is FieldType.DATE


class TestDropdownOptionsText:

    def test_split_per_line(self):
        assert parse_options_text("1층\n2층\n3층") == ["1층", "2층", "3층"]

    def test_blank_lines_are_kept(self):
        # Undecided whether blank lines should be dropped; pin current behaviour
        assert parse_options_text("A\n\nB\n") == ["A", "", "B", ""]

    def test_options_text_round_trip(self):
        field = FormField(id="a", type=FieldType.DROPDOWN, options=["A", "B"])
        assert parse_options_text(options_text(field)) == ["A", "B"]
