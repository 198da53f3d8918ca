# ============================================================================
# SCHEMA RESOLUTION TESTS
# ============================================================================
# EPOCH: 1 - SCHEMA RESOLUTION
# STATUS: Tests - Pass driver, type mapping and snapshot export
# PURPOSE: Verify global pass ordering and the exported resolved schema
# CREATED: 19 OCT 2026
# ============================================================================
"""
Schema Resolution Tests

- Schema.resolve(): state machine, pass 2 / pass 3 barrier
- TypeMapping: totality, overrides, gaps
- SchemaSnapshot: export of a finalized schema

Run with:
    pytest tests/test_schema.py -v
"""

import json

import pytest
from unittest.mock import patch

from daogen.contracts import (
    IndexOrder,
    PropertyType,
    ResolutionState,
    SchemaContractError,
    TypeMappingError,
)
from daogen.models import Annotation, Entity, Schema
from daogen.schema import TypeMapping
from daogen.schema.snapshot import SchemaSnapshot


# ============================================================================
# HELPERS
# ============================================================================

def _make_shop_schema(type_mapping=None):
    """Customer / Order / Picture schema exercising most declaration features."""
    schema = Schema(version=7, default_java_package="com.example.shop", type_mapping=type_mapping)

    customer = schema.add_entity("Customer")
    customer.add_id_property(autoincrement=True)
    customer.add_string_property("email").not_null().unique().index_asc(None, True)
    customer.add_string_property("displayName").add_field_annotation(Annotation(name="Nullable"))
    avatar = customer.add_byte_array_property("avatar").get_property()

    picture = schema.add_entity("Picture")
    picture.add_id_property()
    picture.add_byte_array_property("data").not_null()
    avatar.set_backing_entity(picture, "data")

    order = schema.add_entity("Order")
    order.table_name = "ORDERS"
    order.add_id_property()
    customer_id = order.add_long_property("customerId").not_null().constant().get_property()
    order.add_date_property("placedAt").index_desc()
    order.add_enum_property("status", "com.example.shop.OrderStatus")

    order.add_to_one(customer, customer_id)
    customer.add_to_many(order, customer_id)
    return schema


# ============================================================================
# PASS DRIVER
# ============================================================================

class TestSchemaResolve:
    def test_resolve_finalizes_everything(self):
        schema = _make_shop_schema()
        assert schema.resolve() is schema
        assert schema.state == ResolutionState.FINALIZED
        for entity in schema.entities:
            assert entity.state == ResolutionState.FINALIZED
            for prop in entity.resolved_properties:
                assert prop.state == ResolutionState.FINALIZED
                assert prop.column_type is not None
                assert prop.java_type is not None
                assert prop.constraints is None or prop.constraints == prop.constraints.strip() != ""

    def test_resolve_only_once(self):
        schema = _make_shop_schema()
        schema.resolve()
        with pytest.raises(SchemaContractError, match="pass 2"):
            schema.resolve()

    def test_pass_3_before_pass_2_rejected(self):
        schema = _make_shop_schema()
        with pytest.raises(SchemaContractError, match="pass 3"):
            schema.init_3rd_pass()
        assert schema.state == ResolutionState.DECLARED

    def test_pass_2_completes_for_all_entities_before_pass_3(self):
        schema = Schema()
        schema.add_entity("A")
        schema.add_entity("B")
        schema.add_entity("C")
        calls = []

        def record(label):
            def _side_effect(entity, _schema):
                calls.append((label, entity.class_name))
            return _side_effect

        with patch.object(Entity, "init_2nd_pass", autospec=True, side_effect=record(2)), \
                patch.object(Entity, "init_3rd_pass", autospec=True, side_effect=record(3)):
            schema.resolve()

        assert calls == [(2, "A"), (2, "B"), (2, "C"), (3, "A"), (3, "B"), (3, "C")]

    def test_entity_failure_aborts_run(self):
        schema = Schema()
        entity = schema.add_entity("Broken")
        entity.add_string_property("name").index()
        entity.indexes[0].columns.clear()
        with pytest.raises(SchemaContractError):
            schema.resolve()
        assert schema.state == ResolutionState.DECLARED

    def test_duplicate_entity_rejected(self):
        schema = Schema()
        schema.add_entity("Customer")
        with pytest.raises(SchemaContractError, match="already exists"):
            schema.add_entity("Customer")

    def test_no_entities_after_resolution(self):
        schema = Schema()
        schema.resolve()
        with pytest.raises(SchemaContractError):
            schema.add_entity("Late")

    def test_get_entity(self):
        schema = _make_shop_schema()
        assert schema.get_entity("Order").class_name == "Order"
        assert schema.get_entity("Missing") is None

    def test_backing_entity_serializable(self):
        schema = _make_shop_schema().resolve()
        assert schema.get_entity("Picture").is_serializable
        assert not schema.get_entity("Customer").is_serializable


# ============================================================================
# TYPE MAPPING
# ============================================================================

class TestTypeMapping:
    def test_default_mapping_is_total(self):
        assert TypeMapping.default().missing_types() == []

    def test_schema_lookups(self):
        schema = Schema()
        assert schema.map_to_db_type(PropertyType.BYTE_ARRAY) == "BLOB"
        assert schema.map_to_db_type(PropertyType.DOUBLE) == "REAL"
        assert schema.map_to_java_type_not_null(PropertyType.BOOLEAN) == "boolean"
        assert schema.map_to_java_type_nullable(PropertyType.BOOLEAN) == "Boolean"
        assert schema.map_to_java_type_not_null(PropertyType.DATE) == "java.util.Date"

    def test_overrides(self):
        mapping = TypeMapping.default().with_overrides(db_types={PropertyType.DATE: "TEXT"})
        schema = Schema(type_mapping=mapping)
        assert schema.map_to_db_type(PropertyType.DATE) == "TEXT"
        assert schema.map_to_db_type(PropertyType.LONG) == "INTEGER"

    def test_gap_reported(self):
        mapping = TypeMapping(db_types={PropertyType.LONG: "INTEGER"})
        assert PropertyType.STRING in mapping.missing_types()
        with pytest.raises(TypeMappingError, match="string"):
            mapping.db_type(PropertyType.STRING)

    def test_gap_surfaces_during_pass_2(self):
        mapping = TypeMapping(java_types_nullable={})
        schema = Schema(type_mapping=mapping)
        schema.add_entity("Customer").add_string_property("name")
        with pytest.raises(TypeMappingError) as exc_info:
            schema.resolve()
        assert exc_info.value.property_type == PropertyType.STRING


# ============================================================================
# SNAPSHOT
# ============================================================================

class TestSchemaSnapshot:
    def test_requires_finalized_schema(self):
        with pytest.raises(SchemaContractError, match="finalized"):
            SchemaSnapshot.from_schema(_make_shop_schema())

    def test_entities_exported_in_order(self):
        snapshot = SchemaSnapshot.from_schema(_make_shop_schema().resolve())
        assert snapshot.version == 7
        assert [e.class_name for e in snapshot.entities] == ["Customer", "Picture", "Order"]

    def test_property_facts(self):
        snapshot = SchemaSnapshot.from_schema(_make_shop_schema().resolve())
        customer = snapshot.get_entity("Customer")
        assert customer.table_name == "CUSTOMER"
        assert customer.class_name_dao == "CustomerDao"
        assert customer.pk_property == "id"

        id_, email, display_name, avatar = customer.properties
        assert id_.column_name == "_id"
        assert id_.constraints == "PRIMARY KEY AUTOINCREMENT"
        assert id_.java_type == "Long"
        assert email.constraints == "NOT NULL UNIQUE"
        assert email.java_type == "String"
        assert display_name.column_name == "DISPLAY_NAME"
        assert display_name.constraints is None
        assert display_name.field_annotations == [Annotation(name="Nullable")]
        assert avatar.backing_entity == "Picture"
        assert avatar.column_type == "BLOB"
        assert [p.ordinal for p in customer.properties] == [0, 1, 2, 3]

    def test_enum_and_constant(self):
        snapshot = SchemaSnapshot.from_schema(_make_shop_schema().resolve())
        order = snapshot.get_entity("Order")
        by_name = {p.property_name: p for p in order.properties}
        assert by_name["customerId"].constant
        assert by_name["customerId"].java_type == "long"
        assert by_name["status"].enumerated.enum_class == "com.example.shop.OrderStatus"
        assert by_name["status"].column_type == "INTEGER"

    def test_indexes(self):
        snapshot = SchemaSnapshot.from_schema(_make_shop_schema().resolve())
        (email_index,) = snapshot.get_entity("Customer").indexes
        (placed_index,) = snapshot.get_entity("Order").indexes
        assert email_index.name == "IDX_CUSTOMER_EMAIL"
        assert email_index.unique
        assert email_index.columns[0].order == IndexOrder.ASC
        assert placed_index.name == "IDX_ORDERS_PLACED_AT_DESC"
        assert placed_index.columns[0].column_name == "PLACED_AT"

    def test_relations(self):
        snapshot = SchemaSnapshot.from_schema(_make_shop_schema().resolve())
        (orders,) = snapshot.get_entity("Customer").relations
        (customer,) = snapshot.get_entity("Order").relations
        assert (orders.kind, orders.name, orders.target_entity) == ("to_many", "orderList", "Order")
        assert orders.source_columns == ["_id"]
        assert orders.target_columns == ["CUSTOMER_ID"]
        assert (customer.kind, customer.name) == ("to_one", "customer")
        assert customer.source_columns == ["CUSTOMER_ID"]
        assert customer.target_columns == ["_id"]

    def test_json_dump(self):
        snapshot = SchemaSnapshot.from_schema(_make_shop_schema().resolve())
        payload = json.loads(snapshot.model_dump_json())
        order = payload["entities"][2]
        assert order["table_name"] == "ORDERS"
        assert order["properties"][0]["constraints"] == "PRIMARY KEY"
        assert order["properties"][0]["property_type"] == "long"
