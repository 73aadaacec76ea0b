"""
Schema composer.

Dereferences a schema and every schema under its composition keywords
(allOf, anyOf, oneOf, if, then, else). Composition is kept as written: the
children of allOf stay separate children, nothing is merged.
"""

from __future__ import annotations

import logging
from dataclasses import replace

from .model.schema import ObjectSchema, Schema, decode_schema, iter_children
from .resolver import PointerResolver

logger = logging.getLogger(__name__)

_LIST_ATTRIBUTES = ("all_of", "any_of", "one_of")
_CONDITIONAL_ATTRIBUTES = ("if_schema", "then_schema", "else_schema")


class SchemaComposer:
    """Resolves schema references at every composition depth."""

    def __init__(self, resolver: PointerResolver):
        self.resolver = resolver

    def compose(self, schema: Schema) -> Schema:
        """
        Dereference a schema.

        Args:
            schema: A boolean or object schema

        Returns:
            The schema with its own $ref and those of its composition
            children replaced by their targets

        Raises:
            CircularReference: If a schema is reached again through its own composition
        """
        if isinstance(schema, bool):
            return schema

        if schema.is_ref():
            return self._compose_reference(schema)

        for attribute in _LIST_ATTRIBUTES:
            children = getattr(schema, attribute)
            if children is not None:
                setattr(schema, attribute, [self.compose(child) for child in children])
        for attribute in _CONDITIONAL_ATTRIBUTES:
            child = getattr(schema, attribute)
            if child is not None:
                setattr(schema, attribute, self.compose(child))
        return schema

    def _compose_reference(self, schema: ObjectSchema) -> Schema:
        pointer = schema.reference
        # Schema targets are decoded as written: a target with its own $ref is composed in turn
        target = self.resolver.resolve(pointer, decode_schema, follow_chain=False)
        logger.debug("Resolved schema %s", pointer)

        if isinstance(target, ObjectSchema):
            with self.resolver.expanding(pointer):
                target = self.compose(target)
            if isinstance(target, ObjectSchema):
                target.resolved_from = pointer

        siblings = _siblings_of(schema)
        if siblings is None:
            return target
        # The target and the keywords next to the $ref both apply
        logger.debug("Keeping the keywords next to %s as a separate allOf member", pointer)
        return ObjectSchema(all_of=[target, self.compose(siblings)])


def _siblings_of(reference_node: ObjectSchema) -> ObjectSchema | None:
    """The keywords and composition children written next to a $ref, None when there are none."""
    siblings = replace(reference_node, reference=None, resolved_from=None)
    if not siblings.keywords and not iter_children(siblings):
        return None
    return siblings
