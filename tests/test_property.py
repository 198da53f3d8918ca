# ============================================================================
# PROPERTY MODEL TESTS
# ============================================================================
# EPOCH: 1 - SCHEMA RESOLUTION
# STATUS: Tests - Property builder and two-pass resolution
# PURPOSE: Verify constraint text, type derivation and builder contracts
# CREATED: 19 OCT 2026
# ============================================================================
"""
Property Model Tests

Unit tests for the focal column model:
- build_constraints(): exact clause text and ordering
- PropertyBuilder: fluent declaration, autoincrement contract, index sugar
- Property.init_2nd_pass(): column type / name / java type derivation
- ResolvedProperty.init_3rd_pass(): finalization
- Backing entity contract

Run with:
    pytest tests/test_property.py -v
"""

import pytest
from unittest.mock import MagicMock

from daogen.contracts import IndexOrder, PropertyType, ResolutionState, SchemaContractError
from daogen.models import (
    Annotation,
    EnumProperty,
    PropertyBuilder,
    PropertyConfig,
    Schema,
    SerializedProperty,
    build_constraints,
)


# ============================================================================
# FIXTURES
# ============================================================================

@pytest.fixture
def schema():
    return Schema(version=1, default_java_package="com.example.test")


@pytest.fixture
def entity(schema):
    return schema.add_entity("Customer")


@pytest.fixture
def stub_schema():
    """Schema stand-in with distinguishable mapping outputs."""
    stub = MagicMock()
    stub.map_to_db_type.return_value = "DB_TYPE"
    stub.map_to_java_type_not_null.return_value = "primitive"
    stub.map_to_java_type_nullable.return_value = "Boxed"
    return stub


def _config(property_type=PropertyType.LONG, **flags):
    return PropertyConfig(property_type=property_type, property_name="value", **flags)


# ============================================================================
# CONSTRAINT TEXT
# ============================================================================

class TestBuildConstraints:
    def test_no_flags_yields_none(self):
        assert build_constraints(_config()) is None

    def test_full_primary_key_ordering(self):
        config = _config(primary_key=True, pk_asc=True, pk_autoincrement=True, unique=True)
        assert build_constraints(config) == "PRIMARY KEY ASC AUTOINCREMENT UNIQUE"

    def test_string_primary_key_forced_not_null(self):
        config = _config(PropertyType.STRING, primary_key=True)
        assert build_constraints(config) == "PRIMARY KEY NOT NULL"

    def test_non_string_primary_key_not_forced(self):
        assert build_constraints(_config(primary_key=True)) == "PRIMARY KEY"

    def test_not_null_without_primary_key_is_trimmed(self):
        assert build_constraints(_config(not_null=True)) == "NOT NULL"

    def test_unique_only(self):
        assert build_constraints(_config(unique=True)) == "UNIQUE"

    def test_desc_primary_key(self):
        assert build_constraints(_config(primary_key=True, pk_desc=True)) == "PRIMARY KEY DESC"

    def test_asc_and_desc_both_emitted(self):
        """Caller error is passed through, not normalized."""
        config = _config(primary_key=True, pk_asc=True, pk_desc=True)
        assert build_constraints(config) == "PRIMARY KEY ASC DESC"

    def test_everything(self):
        config = _config(
            PropertyType.STRING,
            primary_key=True,
            pk_desc=True,
            not_null=True,
            unique=True,
        )
        assert build_constraints(config) == "PRIMARY KEY DESC NOT NULL UNIQUE"


# ============================================================================
# BUILDER
# ============================================================================

class TestPropertyBuilder:
    def test_requires_name(self, schema, entity):
        with pytest.raises(ValueError, match="name is required"):
            PropertyBuilder(schema, entity, PropertyType.LONG, "")

    def test_defaults(self, entity):
        config = entity.add_int_property("count").config
        assert config.property_type == PropertyType.INT
        assert config.column_name is None
        assert config.column_type is None
        assert not config.primary_key
        assert not config.unique
        assert not config.not_null
        assert not config.constant
        assert config.field_annotations == ()

    def test_fluent_calls_return_builder(self, entity):
        builder = entity.add_long_property("id")
        assert builder.primary_key() is builder
        assert builder.not_null() is builder
        assert builder.unique() is builder
        assert builder.constant() is builder

    def test_column_overrides_last_write_wins(self, entity):
        builder = entity.add_string_property("name").column_name("A").column_name("B")
        builder.column_type("VARCHAR").column_type("TEXT COLLATE NOCASE")
        assert builder.config.column_name == "B"
        assert builder.config.column_type == "TEXT COLLATE NOCASE"

    def test_primary_key_variants(self, entity):
        asc = entity.add_long_property("a").primary_key_asc().config
        desc = entity.add_long_property("b").primary_key_desc().config
        assert asc.primary_key and asc.pk_asc and not asc.pk_desc
        assert desc.primary_key and desc.pk_desc and not desc.pk_asc

    def test_flags_idempotent(self, entity):
        config = entity.add_int_property("count").unique().unique().not_null().not_null().config
        assert config.unique
        assert config.not_null

    def test_autoincrement_on_long_primary_key(self, entity):
        config = entity.add_long_property("id").primary_key().autoincrement().config
        assert config.pk_autoincrement

    def test_autoincrement_requires_primary_key(self, entity):
        builder = entity.add_long_property("id")
        before = builder.config
        with pytest.raises(SchemaContractError, match="AUTOINCREMENT"):
            builder.autoincrement()
        assert builder.config == before

    def test_autoincrement_requires_long(self, entity):
        builder = entity.add_int_property("id").primary_key()
        before = builder.config
        with pytest.raises(SchemaContractError, match="AUTOINCREMENT"):
            builder.autoincrement()
        assert builder.config == before
        assert not builder.config.pk_autoincrement

    def test_annotations_keep_order_and_duplicates(self, entity):
        first = Annotation(name="SerializedName", parameters={"value": "n"})
        second = Annotation(name="Nullable")
        config = (
            entity.add_string_property("name")
            .add_field_annotation(first)
            .add_field_annotation(second)
            .add_field_annotation(first)
            .config
        )
        assert config.field_annotations == (first, second, first)

    def test_setter_getter_annotation_goes_to_both(self, entity):
        deprecated = Annotation(name="Deprecated")
        getter_only = Annotation(name="JsonIgnore")
        config = (
            entity.add_string_property("name")
            .add_getter_annotation(getter_only)
            .add_setter_getter_annotation(deprecated)
            .config
        )
        assert config.setter_annotations == (deprecated,)
        assert config.getter_annotations == (getter_only, deprecated)
        assert config.field_annotations == ()

    def test_index_registers_each_call(self, entity):
        entity.add_string_property("email").index().index()
        assert len(entity.indexes) == 2
        assert entity.indexes[0] is not entity.indexes[1]
        for index in entity.indexes:
            assert index.property_names == ["email"]
            assert index.columns[0].order is None
            assert index.name is None
            assert not index.unique

    def test_index_asc_and_desc(self, entity):
        entity.add_string_property("email").index_asc("IDX_EMAIL", True)
        entity.add_date_property("createdAt").index_desc()
        email_index, created_index = entity.indexes
        assert email_index.name == "IDX_EMAIL"
        assert email_index.unique
        assert email_index.columns[0].order == IndexOrder.ASC
        assert created_index.name is None
        assert not created_index.unique
        assert created_index.columns[0].order == IndexOrder.DESC

    def test_build_is_memoized(self, entity):
        builder = entity.add_long_property("id")
        prop = builder.build()
        assert builder.get_property() is prop
        assert builder.is_built

    def test_mutation_after_build_rejected(self, entity):
        builder = entity.add_long_property("id")
        builder.build()
        with pytest.raises(SchemaContractError, match="already built"):
            builder.not_null()
        with pytest.raises(SchemaContractError, match="already built"):
            builder.index()
        assert entity.indexes == []


# ============================================================================
# PASS 2
# ============================================================================

class TestSecondPass:
    def test_not_null_uses_non_nullable_mapping(self, entity, stub_schema):
        prop = entity.add_int_property("count").not_null().build()
        resolved = prop.init_2nd_pass(stub_schema)
        assert resolved.java_type == "primitive"
        stub_schema.map_to_java_type_not_null.assert_called_once_with(PropertyType.INT)
        stub_schema.map_to_java_type_nullable.assert_not_called()

    def test_nullable_uses_nullable_mapping(self, entity, stub_schema):
        prop = entity.add_int_property("count").build()
        resolved = prop.init_2nd_pass(stub_schema)
        assert resolved.java_type == "Boxed"
        stub_schema.map_to_java_type_nullable.assert_called_once_with(PropertyType.INT)
        stub_schema.map_to_java_type_not_null.assert_not_called()

    def test_string_primary_key_does_not_change_java_type(self, entity, stub_schema):
        """Forced NOT NULL constraint does not switch to the primitive mapping."""
        resolved = entity.add_string_property("code").primary_key().build().init_2nd_pass(stub_schema)
        assert resolved.constraints == "PRIMARY KEY NOT NULL"
        assert resolved.java_type == "Boxed"

    def test_column_type_derived_from_schema(self, entity, stub_schema):
        resolved = entity.add_double_property("price").build().init_2nd_pass(stub_schema)
        assert resolved.column_type == "DB_TYPE"
        stub_schema.map_to_db_type.assert_called_once_with(PropertyType.DOUBLE)

    def test_explicit_column_type_kept(self, entity, stub_schema):
        resolved = (
            entity.add_string_property("name")
            .column_type("TEXT COLLATE NOCASE")
            .build()
            .init_2nd_pass(stub_schema)
        )
        assert resolved.column_type == "TEXT COLLATE NOCASE"
        stub_schema.map_to_db_type.assert_not_called()

    def test_column_name_derived_from_property_name(self, entity, schema):
        resolved = entity.add_long_property("customerId").build().init_2nd_pass(schema)
        assert resolved.column_name == "CUSTOMER_ID"

    def test_explicit_column_name_kept(self, entity, schema):
        resolved = entity.add_long_property("id").column_name("_id").build().init_2nd_pass(schema)
        assert resolved.column_name == "_id"

    def test_resolved_fields_always_set(self, entity, schema):
        for property_type in PropertyType:
            prop = entity.add_property(property_type, f"p_{property_type.value}").build()
            resolved = prop.init_2nd_pass(schema)
            assert resolved.column_type
            assert resolved.java_type
            assert resolved.column_name
            assert resolved.constraints is None
            assert resolved.state == ResolutionState.COLUMN_RESOLVED

    def test_default_sqlite_mapping(self, entity, schema):
        name = entity.add_string_property("name").not_null().build().init_2nd_pass(schema)
        id_ = entity.add_long_property("id").primary_key().build().init_2nd_pass(schema)
        assert (name.column_type, name.java_type) == ("TEXT", "String")
        assert (id_.column_type, id_.java_type) == ("INTEGER", "Long")
        assert id_.constraints == "PRIMARY KEY"

    def test_repeated_pass_is_identical(self, entity, schema):
        prop = (
            entity.add_long_property("id")
            .primary_key_asc()
            .autoincrement()
            .unique()
            .build()
        )
        first = prop.init_2nd_pass(schema)
        second = prop.init_2nd_pass(schema)
        assert first == second
        assert first.constraints == "PRIMARY KEY ASC AUTOINCREMENT UNIQUE"

    def test_enum_resolves_through_storage_type(self, entity, schema):
        resolved = (
            entity.add_enum_property("status", "com.example.Status", PropertyType.STRING)
            .build()
            .init_2nd_pass(schema)
        )
        assert resolved.property_type == PropertyType.ENUM
        assert (resolved.column_type, resolved.java_type) == ("TEXT", "String")

    def test_enum_default_storage_is_int(self, entity, schema):
        resolved = entity.add_enum_property("status", "com.example.Status").not_null().build().init_2nd_pass(schema)
        assert (resolved.column_type, resolved.java_type) == ("INTEGER", "int")

    def test_enum_storage_type_passed_to_mapping(self, entity, stub_schema):
        prop = entity.add_enum_property("level", "com.example.Level", PropertyType.SHORT).build()
        prop.init_2nd_pass(stub_schema)
        stub_schema.map_to_db_type.assert_called_once_with(PropertyType.SHORT)
        stub_schema.map_to_java_type_nullable.assert_called_once_with(PropertyType.SHORT)

    def test_resolved_is_snapshot(self, entity, schema):
        prop = entity.add_long_property("id").build()
        prop.set_ordinal(4)
        resolved = prop.init_2nd_pass(schema)
        prop.set_ordinal(9)
        assert resolved.ordinal == 4

    def test_resolved_accessors(self, entity, schema):
        note = Annotation(name="Keep")
        resolved = (
            entity.add_string_property("sku")
            .unique()
            .constant()
            .add_field_annotation(note)
            .build()
            .init_2nd_pass(schema)
        )
        assert resolved.property_name == "sku"
        assert resolved.property_type == PropertyType.STRING
        assert resolved.is_unique
        assert resolved.is_constant
        assert not resolved.is_primary_key
        assert resolved.field_annotations == [note]
        assert resolved.entity is entity


# ============================================================================
# PASS 3
# ============================================================================

class TestThirdPass:
    def test_finalizes_without_changing_values(self, entity, schema):
        resolved = entity.add_string_property("name").not_null().build().init_2nd_pass(schema)
        final = resolved.init_3rd_pass(schema)
        assert final.state == ResolutionState.FINALIZED
        assert final.column_name == resolved.column_name
        assert final.column_type == resolved.column_type
        assert final.java_type == resolved.java_type
        assert final.constraints == resolved.constraints

    def test_cannot_finalize_twice(self, entity, schema):
        final = entity.add_string_property("name").build().init_2nd_pass(schema).init_3rd_pass(schema)
        with pytest.raises(SchemaContractError, match="already finalized"):
            final.init_3rd_pass(schema)


# ============================================================================
# DECLARED PROPERTY SETTERS
# ============================================================================

class TestDeclaredProperty:
    def test_backing_entity_requires_byte_array(self, schema, entity):
        blob_holder = schema.add_entity("Picture")
        prop = entity.add_string_property("name").build()
        with pytest.raises(SchemaContractError, match="byte array"):
            prop.set_backing_entity(blob_holder, "data")
        assert prop.backing_entity is None
        assert not blob_holder.is_serializable

    def test_backing_entity_marks_serializable(self, schema, entity):
        blob_holder = schema.add_entity("Picture")
        prop = entity.add_byte_array_property("avatar").build()
        prop.set_backing_entity(blob_holder, "data")
        assert prop.backing_entity is blob_holder
        assert prop.backing_property_name == "data"
        assert blob_holder.is_serializable
        assert blob_holder.interfaces_to_implement == ["java.io.Serializable"]

    def test_property_type_locked_by_backing_entity(self, schema, entity):
        prop = entity.add_byte_array_property("avatar").build()
        prop.set_backing_entity(schema.add_entity("Picture"))
        with pytest.raises(SchemaContractError):
            prop.set_property_type(PropertyType.STRING)
        assert prop.property_type == PropertyType.BYTE_ARRAY

    def test_property_type_locked_by_autoincrement(self, entity):
        prop = entity.add_long_property("id").primary_key().autoincrement().build()
        with pytest.raises(SchemaContractError, match="AUTOINCREMENT"):
            prop.set_property_type(PropertyType.STRING)
        assert prop.property_type == PropertyType.LONG
        assert prop.is_autoincrement

    def test_plain_primary_key_type_can_change(self, entity, schema):
        prop = entity.add_long_property("code").primary_key().build()
        prop.set_property_type(PropertyType.STRING)
        assert prop.init_2nd_pass(schema).constraints == "PRIMARY KEY NOT NULL"

    def test_set_enumerated_updates_config(self, entity, schema):
        prop = entity.add_enum_property("status", "com.example.Status").build()
        replacement = EnumProperty(enum_class="com.example.Phase", storage_type=PropertyType.STRING)
        prop.set_enumerated(replacement)
        resolved = prop.init_2nd_pass(schema)
        assert resolved.enumerated == replacement
        assert resolved.config.enumerated == replacement
        assert resolved.column_type == "TEXT"

    def test_set_serialized_updates_config(self, entity, schema):
        prop = entity.add_serialized_property("payload", "com.example.Payload").build()
        replacement = SerializedProperty(java_class="com.example.Other", converter_class="com.example.Conv")
        prop.set_serialized(replacement)
        resolved = prop.init_2nd_pass(schema)
        assert resolved.serialized == replacement
        assert resolved.config.serialized == replacement

    def test_set_property_type_before_resolution(self, entity, schema):
        prop = entity.add_int_property("status").build()
        prop.set_property_type(PropertyType.LONG)
        assert prop.init_2nd_pass(schema).java_type == "Long"

    def test_string_representation(self, entity):
        prop = entity.add_long_property("id").build()
        assert str(prop) == "Property id of Customer"
        assert prop.entity is entity
        assert prop.state == ResolutionState.DECLARED
