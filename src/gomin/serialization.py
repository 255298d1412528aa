"""Syntax tree serialization — JSON round-trip for gomin nodes.

Converts typed syntax tree nodes to/from JSON-compatible dicts. Useful for:
- Caching parsed trees to disk
- Comparing trees across tool versions
- Debugging and inspection

All output is deterministic (sorted keys) for cache-key stability.

Example:
    from gomin import parse
    from gomin.serialization import to_json, from_json

    tree = parse("package p; var x = -1")
    json_str = to_json(tree)
    restored = from_json(json_str)
    assert tree == restored

Thread Safety:
    All functions are pure; safe to call from any thread.

"""

import json
from dataclasses import fields
from typing import Any

from gomin.location import SourceLocation
from gomin.nodes import (
    ArrayType,
    AssignStmt,
    BasicLit,
    BinaryExpr,
    BlockStmt,
    BranchStmt,
    CallExpr,
    CaseClause,
    ChanDir,
    ChanType,
    CommClause,
    CompositeLit,
    DeclStmt,
    DeferStmt,
    Ellipsis,
    EmptyStmt,
    ExprStmt,
    Field,
    FieldList,
    File,
    ForStmt,
    FuncDecl,
    FuncLit,
    FuncType,
    GenDecl,
    GoStmt,
    Ident,
    IfStmt,
    ImportSpec,
    IncDecStmt,
    IndexExpr,
    InterfaceType,
    KeyValueExpr,
    LabeledStmt,
    MapType,
    Node,
    ParenExpr,
    RangeStmt,
    ReturnStmt,
    SelectorExpr,
    SelectStmt,
    SendStmt,
    SliceExpr,
    StarExpr,
    StructType,
    SwitchStmt,
    TypeAssertExpr,
    TypeSpec,
    TypeSwitchStmt,
    UnaryExpr,
    ValueSpec,
)
from gomin.tokens import TokenType

# Registry of node type names to classes for deserialization
_NODE_TYPES: dict[str, type] = {
    cls.__name__: cls
    for cls in (
        # Unit and declarations
        File,
        FuncDecl,
        GenDecl,
        ImportSpec,
        ValueSpec,
        TypeSpec,
        # Expressions
        Ident,
        BasicLit,
        Ellipsis,
        ParenExpr,
        SelectorExpr,
        IndexExpr,
        SliceExpr,
        TypeAssertExpr,
        CallExpr,
        StarExpr,
        UnaryExpr,
        BinaryExpr,
        KeyValueExpr,
        CompositeLit,
        FuncLit,
        # Types
        Field,
        FieldList,
        ArrayType,
        MapType,
        ChanType,
        FuncType,
        StructType,
        InterfaceType,
        # Statements
        DeclStmt,
        EmptyStmt,
        LabeledStmt,
        ExprStmt,
        SendStmt,
        IncDecStmt,
        AssignStmt,
        GoStmt,
        DeferStmt,
        ReturnStmt,
        BranchStmt,
        BlockStmt,
        IfStmt,
        CaseClause,
        SwitchStmt,
        TypeSwitchStmt,
        CommClause,
        SelectStmt,
        ForStmt,
        RangeStmt,
    )
}


def to_dict(node: Node, *, locations: bool = True) -> dict[str, Any]:
    """Convert a syntax tree node to a JSON-compatible dict.

    Includes a ``_type`` discriminator field for deserialization.
    Recursively serializes child nodes, token types and SourceLocation objects.

    Args:
        node: Any gomin syntax tree node.
        locations: Include source locations (omit for position-independent output).

    Returns:
        Dict with ``_type`` and all node fields.

    """
    result: dict[str, Any] = {"_type": type(node).__name__}

    for f in fields(node):
        if f.name == "location" and not locations:
            continue
        value = getattr(node, f.name)
        result[f.name] = _serialize_value(value, locations)

    return result


def _serialize_value(value: Any, locations: bool) -> Any:
    """Serialize a single field value."""
    if isinstance(value, Node):
        return to_dict(value, locations=locations)
    if isinstance(value, SourceLocation):
        return {
            "_type": "SourceLocation",
            "lineno": value.lineno,
            "col_offset": value.col_offset,
            "offset": value.offset,
            "end_offset": value.end_offset,
            "source_file": value.source_file,
        }
    if isinstance(value, TokenType):
        return {"_type": "TokenType", "name": value.name}
    if isinstance(value, ChanDir):
        return {"_type": "ChanDir", "value": value.value}
    if isinstance(value, tuple):
        return [_serialize_value(item, locations) for item in value]
    # Primitives: str, int, bool, None
    return value


def from_dict(data: dict[str, Any]) -> Node:
    """Reconstruct a typed syntax tree node from a dict.

    Uses the ``_type`` discriminator to determine the node class.

    Args:
        data: Dict with ``_type`` and node fields (as produced by to_dict).

    Returns:
        Typed node (frozen dataclass).

    Raises:
        ValueError: If ``_type`` is missing or unknown.

    """
    type_name = data.get("_type")
    if type_name is None:
        msg = "Missing '_type' field in serialized node"
        raise ValueError(msg)

    node_cls = _NODE_TYPES.get(type_name)
    if node_cls is None:
        msg = f"Unknown node type: {type_name!r}"
        raise ValueError(msg)

    kwargs: dict[str, Any] = {}
    for f in fields(node_cls):
        if f.name not in data:
            continue
        kwargs[f.name] = _deserialize_value(data[f.name])

    return node_cls(**kwargs)


def _deserialize_value(value: Any) -> Any:
    """Deserialize a single field value."""
    if isinstance(value, dict):
        type_name = value.get("_type")
        if type_name == "SourceLocation":
            return SourceLocation(
                lineno=value["lineno"],
                col_offset=value["col_offset"],
                offset=value.get("offset", 0),
                end_offset=value.get("end_offset", 0),
                source_file=value.get("source_file"),
            )
        if type_name == "TokenType":
            return TokenType[value["name"]]
        if type_name == "ChanDir":
            return ChanDir(value["value"])
        if type_name is not None:
            return from_dict(value)
        return value
    if isinstance(value, list):
        return tuple(_deserialize_value(item) for item in value)
    return value


def to_json(node: Node, *, indent: int | None = None, locations: bool = True) -> str:
    """Serialize a syntax tree to a JSON string.

    Output is deterministic (sorted keys) for cache-key stability.

    Args:
        node: Node to serialize (usually a File).
        indent: JSON indentation level (None for compact).
        locations: Include source locations.

    Returns:
        JSON string.

    """
    return json.dumps(to_dict(node, locations=locations), sort_keys=True, indent=indent)


def from_json(data: str) -> Node:
    """Deserialize a syntax tree from a JSON string.

    Args:
        data: JSON string (as produced by to_json).

    Returns:
        The root node.

    """
    return from_dict(json.loads(data))
